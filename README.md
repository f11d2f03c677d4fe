# polyopt

Building blocks for polyhedral loop optimization: the classic integer
dependence tests, records for dependences and their direction vectors,
legality checks for loop transformations, a dependence graph, and a small
expression/loop AST that renders to C.

## Installation

```
pip install .
```

## Modules

### `polyopt.dependence`

- `DependenceKind` – `FLOW` (RAW), `ANTI` (WAR), `OUTPUT` (WAW), `INPUT`
  (RAR), with `is_true_dependence()`, `involves_write()` and `short_name()`.
- `Direction` – `LT`, `EQ`, `GT`, `LE`, `GE`, `STAR`, with `to_char()`,
  `allows_parallel()`, `union(other)` and `Direction.from_distance(dist)`.
- `Dependence` – a dataclass holding `source`, `target`, `kind`, `direction`,
  `array`, and optionally `distance`, `level`, `is_loop_independent` and
  `relation`; methods `is_parallelizable_at(level)`, `is_loop_carried()` and
  `description()`.
- `DependenceEquation` – one subscript equation, with `has_variables()` and
  `all_coeffs()`.
- `gcd_test(coeffs, constant)`, `banerjee_test(coeffs, constant,
  lower_bounds, upper_bounds)` (missing bounds default to 0 and 100),
  `extended_gcd(a, b)` and `solve_diophantine(a, b, c)`.

### `polyopt.legality`

`DependenceAnalysis` answers questions about a list of `Dependence` records:
`is_interchange_legal`, `is_tiling_legal`, `is_fusion_legal`,
`is_parallelizable`, `find_parallel_level`, `get_distance_at_level`,
`are_dependences_uniform` and `min_positive_distance`. Input dependences are
ignored by the legality checks.

### `polyopt.graph`

`DependenceGraph.from_dependences(deps, statements)` builds a graph over any
hashable statement identifiers. It offers `get_outgoing`, `get_incoming`,
`has_dependence`, filters by kind and by loop level, `strongly_connected_components`
(Tarjan), `has_cycle`, `topological_sort` (returns `None` on a cycle),
`max_depth` and `summary()`, whose `DependenceGraphSummary` prints as a
multi-line report.

### `polyopt.ast_builder`

Expressions are built from `const(value)` and `var(name)` and combined with
`add`, `sub`, `mul`, `div`, `floordiv`, `ceildiv`, `min` and `max`.
`simplify()` folds constants and removes identity operations;
`eval_constant()` returns the folded value or `None`. `AstBuilder` collects
`LoopNode`, `StatementNode` and `RawNode` entries with chaining `add_*`
methods, and `expr_to_c` renders an expression as C (`FLOOR_DIV`, `CEIL_DIV`,
`MIN` and `MAX` appear as macro calls).

## Examples

```python
from polyopt.dependence import Dependence, DependenceKind, Direction, gcd_test, banerjee_test
from polyopt.legality import DependenceAnalysis
from polyopt.graph import DependenceGraph

gcd_test([2, -2], 1)                         # False: no integer solution
banerjee_test([1, -1], 0, [0, 0], [9, 9])    # True: a dependence may exist
Direction.from_distance(1)                   # Direction.LT
Direction.LT.union(Direction.EQ)             # Direction.LE

dep = Dependence(0, 1, DependenceKind.FLOW, [Direction.EQ], "A", distance=[0])
DependenceAnalysis().is_parallelizable([dep], 0)                 # True
DependenceGraph.from_dependences([dep], [0, 1]).topological_sort()  # [0, 1]
```

```python
from polyopt.ast_builder import AstBuilder, const, var, expr_to_c

expr_to_c(var("i").add(const(1)))            # "(i + 1)"
expr_to_c(var("i").floordiv(const(32)))      # "FLOOR_DIV(i, 32)"
const(2).add(const(3)).simplify()            # IntExpr(value=5)

builder = AstBuilder()
builder.add_loop("i", const(0), var("N"), 1, True).add_statement(0, [var("i")])
nodes = builder.build()                      # [LoopNode(...), StatementNode(...)]
```

## What this package does not do

- It does not parse source programs or extract loop nests; dependences are
  given to it as `Dependence` records rather than computed from code.
- It has no polyhedral set or map library; `Dependence.relation` is stored
  as given and not interpreted.
- It does not generate complete C functions or programs, only renders
  individual `AstExpr` expressions with `expr_to_c`.
- It provides no command-line tool.

## Running the tests

```
pip install .[test]
pytest
```