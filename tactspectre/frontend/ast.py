"""
Tact AST - typed syntax tree consumed by the symbolic executor.

Only the function subset is modelled: function definitions, statement
lists (let, assign, if/else, return) and expressions over a fixed operator
vocabulary. Loops, calls and field access have nodes so that the executor
can name them when it rejects them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union


@dataclass(frozen=True)
class SourceLocation:
    """Line/column of the first token of a node (1-based)."""
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


# ============================================================================
# EXPRESSIONS
# ============================================================================

@dataclass(frozen=True)
class NumberLiteral:
    value: int
    loc: Optional[SourceLocation] = field(default=None, compare=False)
    kind = "number"


@dataclass(frozen=True)
class BooleanLiteral:
    value: bool
    loc: Optional[SourceLocation] = field(default=None, compare=False)
    kind = "boolean"


@dataclass(frozen=True)
class Identifier:
    name: str
    loc: Optional[SourceLocation] = field(default=None, compare=False)
    kind = "id"


@dataclass(frozen=True)
class BinaryOperation:
    """Binary operator application, e.g. `x % 2` or `a && b`"""
    op: str
    left: "Expression"
    right: "Expression"
    loc: Optional[SourceLocation] = field(default=None, compare=False)
    kind = "op_binary"


@dataclass(frozen=True)
class UnaryOperation:
    """Prefix operator application: `-x`, `!b`, `~x`"""
    op: str
    operand: "Expression"
    loc: Optional[SourceLocation] = field(default=None, compare=False)
    kind = "op_unary"


@dataclass(frozen=True)
class Call:
    """Function or method call: `f(x)`, `a.f(x)`"""
    function: "Expression"
    args: tuple["Expression", ...] = ()
    loc: Optional[SourceLocation] = field(default=None, compare=False)
    kind = "call"


@dataclass(frozen=True)
class FieldAccess:
    """Member access: `a.b`"""
    aggregate: "Expression"
    field_name: str
    loc: Optional[SourceLocation] = field(default=None, compare=False)
    kind = "field_access"


Expression = Union[
    NumberLiteral,
    BooleanLiteral,
    Identifier,
    BinaryOperation,
    UnaryOperation,
    Call,
    FieldAccess,
]


# ============================================================================
# STATEMENTS
# ============================================================================

@dataclass(frozen=True)
class Let:
    """`let name: Type = expression;`"""
    name: str
    expression: Expression
    type_name: Optional[str] = None
    loc: Optional[SourceLocation] = field(default=None, compare=False)
    kind = "statement_let"


@dataclass(frozen=True)
class Assign:
    """`path = expression;`"""
    path: Expression
    expression: Expression
    loc: Optional[SourceLocation] = field(default=None, compare=False)
    kind = "statement_assign"


@dataclass(frozen=True)
class AugmentedAssign:
    """`path op= expression;` where op is the arithmetic operator"""
    op: str
    path: Expression
    expression: Expression
    loc: Optional[SourceLocation] = field(default=None, compare=False)
    kind = "statement_augmentedassign"


@dataclass(frozen=True)
class Condition:
    """`if (condition) { ... } else { ... }`

    false_statements is None when there is no else branch; an `else if`
    chain nests a single Condition in false_statements.
    """
    condition: Expression
    true_statements: tuple["Statement", ...]
    false_statements: Optional[tuple["Statement", ...]] = None
    loc: Optional[SourceLocation] = field(default=None, compare=False)
    kind = "statement_condition"


@dataclass(frozen=True)
class Return:
    expression: Optional[Expression] = None
    loc: Optional[SourceLocation] = field(default=None, compare=False)
    kind = "statement_return"


@dataclass(frozen=True)
class ExpressionStatement:
    expression: Expression
    loc: Optional[SourceLocation] = field(default=None, compare=False)
    kind = "statement_expression"


@dataclass(frozen=True)
class Loop:
    """`while (c) {}`, `repeat (n) {}` or `do {} until (c);`"""
    loop_kind: str
    header: Expression
    statements: tuple["Statement", ...]
    loc: Optional[SourceLocation] = field(default=None, compare=False)
    kind = "statement_loop"


Statement = Union[
    Let,
    Assign,
    AugmentedAssign,
    Condition,
    Return,
    ExpressionStatement,
    Loop,
]


# ============================================================================
# TOP LEVEL
# ============================================================================

@dataclass(frozen=True)
class Parameter:
    name: str
    type_name: Optional[str] = None
    loc: Optional[SourceLocation] = field(default=None, compare=False)


@dataclass(frozen=True)
class FunctionDef:
    """`fun name(params): ReturnType { statements }`"""
    name: str
    params: tuple[Parameter, ...]
    statements: tuple[Statement, ...]
    return_type: Optional[str] = None
    loc: Optional[SourceLocation] = field(default=None, compare=False)
    kind = "function_def"


@dataclass(frozen=True)
class SourceFile:
    functions: tuple[FunctionDef, ...] = ()

    def get_function(self, name: str) -> Optional[FunctionDef]:
        for function in self.functions:
            if function.name == name:
                return function
        return None


def node_name(node: object) -> str:
    """Readable name of an AST node kind, used in diagnostics."""
    if isinstance(node, Loop):
        return f"{node.loop_kind} loop"
    if isinstance(node, Call):
        return "function call"
    if isinstance(node, FieldAccess):
        return "field access"
    if isinstance(node, ExpressionStatement):
        return f"expression statement ({node_name(node.expression)})"
    return getattr(node, "kind", type(node).__name__)
