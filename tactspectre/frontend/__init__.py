"""Tact front-end: AST definitions and the function-subset parser."""

from tactspectre.frontend.ast import (
    Assign,
    AugmentedAssign,
    BinaryOperation,
    BooleanLiteral,
    Call,
    Condition,
    ExpressionStatement,
    FieldAccess,
    FunctionDef,
    Identifier,
    Let,
    Loop,
    NumberLiteral,
    Parameter,
    Return,
    SourceFile,
    SourceLocation,
    UnaryOperation,
)
from tactspectre.frontend.parser import TactParser, Tokenizer, parse_tact, parse_tact_file

__all__ = [
    "Assign",
    "AugmentedAssign",
    "BinaryOperation",
    "BooleanLiteral",
    "Call",
    "Condition",
    "ExpressionStatement",
    "FieldAccess",
    "FunctionDef",
    "Identifier",
    "Let",
    "Loop",
    "NumberLiteral",
    "Parameter",
    "Return",
    "SourceFile",
    "SourceLocation",
    "UnaryOperation",
    "TactParser",
    "Tokenizer",
    "parse_tact",
    "parse_tact_file",
]
