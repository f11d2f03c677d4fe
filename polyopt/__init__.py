"""Dependence tests, legality checks, dependence graphs and a C-rendering loop AST."""

__version__ = "0.1.0"

__all__ = ["ast_builder", "dependence", "graph", "legality"]