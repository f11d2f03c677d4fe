"""An intermediate code AST between the polyhedral form and emitted C source."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Hashable, Optional


class AstBinOp(Enum):
    """Binary operators, valued by their C spelling."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    MOD = "%"
    LT = "<"
    LE = "<="
    GT = ">"
    GE = ">="
    EQ = "=="
    NE = "!="
    AND = "&&"
    OR = "||"


def _trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero, as C does."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


_FOLDABLE = {
    AstBinOp.ADD: lambda a, b: a + b,
    AstBinOp.SUB: lambda a, b: a - b,
    AstBinOp.MUL: lambda a, b: a * b,
    AstBinOp.DIV: _trunc_div,
}


class AstExpr:
    """Base class of expressions in the generated AST."""

    def add(self, other: "AstExpr") -> "AstExpr":
        return BinaryExpr(AstBinOp.ADD, self, other)

    def sub(self, other: "AstExpr") -> "AstExpr":
        return BinaryExpr(AstBinOp.SUB, self, other)

    def mul(self, other: "AstExpr") -> "AstExpr":
        return BinaryExpr(AstBinOp.MUL, self, other)

    def div(self, other: "AstExpr") -> "AstExpr":
        return BinaryExpr(AstBinOp.DIV, self, other)

    def floordiv(self, other: "AstExpr") -> "AstExpr":
        return FloorDivExpr(self, other)

    def ceildiv(self, other: "AstExpr") -> "AstExpr":
        return CeilDivExpr(self, other)

    def min(self, other: "AstExpr") -> "AstExpr":
        return MinExpr(self, other)

    def max(self, other: "AstExpr") -> "AstExpr":
        return MaxExpr(self, other)

    def is_constant(self) -> bool:
        """True only for a literal integer."""
        return isinstance(self, IntExpr)

    def eval_constant(self) -> Optional[int]:
        """The value of the expression if it folds to a constant, else None."""
        return None

    def simplify(self) -> "AstExpr":
        """Fold constants and drop identity operations."""
        return self


@dataclass(frozen=True)
class IntExpr(AstExpr):
    value: int

    def eval_constant(self) -> Optional[int]:
        return self.value


@dataclass(frozen=True)
class VarExpr(AstExpr):
    name: str


@dataclass(frozen=True)
class BinaryExpr(AstExpr):
    op: AstBinOp
    left: AstExpr
    right: AstExpr

    def eval_constant(self) -> Optional[int]:
        left = self.left.eval_constant()
        if left is None:
            return None
        right = self.right.eval_constant()
        if right is None:
            return None
        fold = _FOLDABLE.get(self.op)
        return None if fold is None else fold(left, right)

    def simplify(self) -> AstExpr:
        left = self.left.simplify()
        right = self.right.simplify()
        lv = left.eval_constant()
        rv = right.eval_constant()
        op = self.op

        if lv is not None and rv is not None:
            fold = _FOLDABLE.get(op)
            if fold is None or (op is AstBinOp.DIV and rv == 0):
                return BinaryExpr(op, left, right)
            return IntExpr(fold(lv, rv))

        if op is AstBinOp.ADD and lv == 0:
            return right
        if op in (AstBinOp.ADD, AstBinOp.SUB) and rv == 0:
            return left
        if op is AstBinOp.MUL:
            if lv == 1:
                return right
            if rv == 1:
                return left
            if lv == 0 or rv == 0:
                return IntExpr(0)
        if op is AstBinOp.DIV and rv == 1:
            return left
        return BinaryExpr(op, left, right)


@dataclass(frozen=True)
class FloorDivExpr(AstExpr):
    left: AstExpr
    right: AstExpr


@dataclass(frozen=True)
class CeilDivExpr(AstExpr):
    left: AstExpr
    right: AstExpr


@dataclass(frozen=True)
class MinExpr(AstExpr):
    left: AstExpr
    right: AstExpr

    def simplify(self) -> AstExpr:
        left = self.left.simplify()
        right = self.right.simplify()
        lv, rv = left.eval_constant(), right.eval_constant()
        if lv is not None and rv is not None:
            return IntExpr(min(lv, rv))
        return MinExpr(left, right)


@dataclass(frozen=True)
class MaxExpr(AstExpr):
    left: AstExpr
    right: AstExpr

    def simplify(self) -> AstExpr:
        left = self.left.simplify()
        right = self.right.simplify()
        lv, rv = left.eval_constant(), right.eval_constant()
        if lv is not None and rv is not None:
            return IntExpr(max(lv, rv))
        return MaxExpr(left, right)


@dataclass(frozen=True)
class ModExpr(AstExpr):
    left: AstExpr
    right: AstExpr


def const(value: int) -> IntExpr:
    """An integer constant."""
    return IntExpr(value)


def var(name: str) -> VarExpr:
    """A reference to a variable."""
    return VarExpr(name)


class AstNode:
    """Base class of nodes in the generated AST."""


@dataclass
class LoopNode(AstNode):
    iterator: str
    lower: AstExpr
    upper: AstExpr
    step: int = 1
    body: list[AstNode] = field(default_factory=list)
    is_parallel: bool = False


@dataclass
class IfNode(AstNode):
    condition: AstExpr
    then_body: list[AstNode] = field(default_factory=list)
    else_body: Optional[list[AstNode]] = None


@dataclass
class StatementNode(AstNode):
    stmt_id: Hashable
    iterators: list[AstExpr] = field(default_factory=list)


@dataclass
class BlockNode(AstNode):
    statements: list[AstNode] = field(default_factory=list)


@dataclass
class RawNode(AstNode):
    code: str


class AstBuilder:
    """Collects top-level AST nodes; the ``add_*`` methods chain."""

    def __init__(self) -> None:
        self._nodes: list[AstNode] = []

    def add_loop(
        self,
        iterator: str,
        lower: AstExpr,
        upper: AstExpr,
        step: int = 1,
        is_parallel: bool = False,
    ) -> "AstBuilder":
        self._nodes.append(LoopNode(iterator, lower, upper, step, [], is_parallel))
        return self

    def add_statement(self, stmt_id: Hashable, iterators: list[AstExpr]) -> "AstBuilder":
        self._nodes.append(StatementNode(stmt_id, list(iterators)))
        return self

    def add_raw(self, code: str) -> "AstBuilder":
        self._nodes.append(RawNode(code))
        return self

    def build(self) -> list[AstNode]:
        """The nodes added so far, in order."""
        return list(self._nodes)


def expr_to_c(expr: AstExpr) -> str:
    """Render an expression as C source."""
    if isinstance(expr, IntExpr):
        return str(expr.value)
    if isinstance(expr, VarExpr):
        return expr.name
    if isinstance(expr, BinaryExpr):
        return f"({expr_to_c(expr.left)} {expr.op.value} {expr_to_c(expr.right)})"
    if isinstance(expr, ModExpr):
        return f"({expr_to_c(expr.left)} % {expr_to_c(expr.right)})"
    macros = {
        FloorDivExpr: "FLOOR_DIV",
        CeilDivExpr: "CEIL_DIV",
        MinExpr: "MIN",
        MaxExpr: "MAX",
    }
    macro = macros.get(type(expr))
    if macro is None:
        raise TypeError(f"cannot render {type(expr).__name__} as C")
    return f"{macro}({expr_to_c(expr.left)}, {expr_to_c(expr.right)})"