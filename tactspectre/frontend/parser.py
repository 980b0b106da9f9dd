"""
Tact Parser - Text to AST Conversion

Parses the function subset of Tact into the AST of tactspectre.frontend.ast:

    source     ::= function*
    function   ::= "fun" id "(" params? ")" (":" type)? block
    params     ::= param ("," param)* ","?
    param      ::= id (":" type)?
    block      ::= "{" statement* "}"
    statement  ::= "let" id (":" type)? "=" expr ";"
                 | "if" expr block ("else" (statement_if | block))?
                 | "return" expr? ";"
                 | "while" expr block
                 | "repeat" expr block
                 | "do" block "until" expr ";"
                 | expr (("=" | "+=" | "-=" | "*=" | "/=" | "%=") expr)? ";"

Binary operators follow Tact precedence, loosest first:
    ||   &&   |   ^   &   == !=   < > <= >=   << >>   + -   * / %
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from tactspectre.core.exceptions import ParseError
from tactspectre.frontend.ast import (
    Assign,
    AugmentedAssign,
    BinaryOperation,
    BooleanLiteral,
    Call,
    Condition,
    Expression,
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
    Statement,
    UnaryOperation,
)


# ============================================================================
# TOKENIZER
# ============================================================================

@dataclass
class Token:
    """Lexical token"""
    type: str
    value: str
    line: int
    column: int

    @property
    def loc(self) -> SourceLocation:
        return SourceLocation(self.line, self.column)


class Tokenizer:
    """
    Regex-based tokenizer for the Tact function subset.

    Token types:
    - KEYWORD: fun, let, if, else, return, while, repeat, do, until, true, false
    - IDENTIFIER: variable, function and type names
    - NUMBER: decimal or hex integers (underscores allowed)
    - OPERATOR: arithmetic, comparison, logical, bitwise, assignment
    - DELIMITER: { } ( ) : , ; .
    """

    KEYWORDS = {
        'fun', 'let', 'if', 'else', 'return',
        'while', 'repeat', 'do', 'until',
        'true', 'false',
    }

    PATTERNS = [
        ('COMMENT_MULTI', r'/\*.*?\*/'),
        ('COMMENT_SINGLE', r'//[^\n]*'),
        ('NUMBER', r'0[xX][0-9a-fA-F_]+|\d[\d_]*'),
        ('OPERATOR', r'&&|\|\||==|!=|<=|>=|<<|>>|\+=|-=|\*=|/=|%=|[-+*/%<>=!~&|^?]'),
        ('DELIMITER', r'[{}():,;.]'),
        ('IDENTIFIER', r'[a-zA-Z_][a-zA-Z0-9_]*'),
        ('WHITESPACE', r'\s+'),
    ]

    _COMPILED = [(name, re.compile(pattern, re.DOTALL)) for name, pattern in PATTERNS]

    def __init__(self, text: str):
        self.text = text
        self.position = 0
        self.line = 1
        self.column = 1
        self.tokens: list[Token] = []

    def tokenize(self) -> list[Token]:
        """Tokenize entire text"""
        while self.position < len(self.text):
            self._next_token()
        return self.tokens

    def _next_token(self) -> None:
        for token_type, regex in self._COMPILED:
            match = regex.match(self.text, self.position)
            if not match:
                continue
            value = match.group(0)
            if token_type not in ('COMMENT_MULTI', 'COMMENT_SINGLE', 'WHITESPACE'):
                if token_type == 'IDENTIFIER' and value in self.KEYWORDS:
                    token_type = 'KEYWORD'
                self.tokens.append(Token(token_type, value, self.line, self.column))
            self._advance(len(value))
            return

        raise ParseError(
            f"Unexpected character: '{self.text[self.position]}'",
            self.line,
            self.column
        )

    def _advance(self, count: int) -> None:
        """Advance position and update line/column"""
        chunk = self.text[self.position:self.position + count]
        newlines = chunk.count('\n')
        if newlines:
            self.line += newlines
            self.column = count - chunk.rfind('\n')
        else:
            self.column += count
        self.position += count


# ============================================================================
# PARSER
# ============================================================================

BINARY_PRECEDENCE: list[tuple[str, ...]] = [
    ('||',),
    ('&&',),
    ('|',),
    ('^',),
    ('&',),
    ('==', '!='),
    ('<', '>', '<=', '>='),
    ('<<', '>>'),
    ('+', '-'),
    ('*', '/', '%'),
]

UNARY_OPERATORS = ('-', '!', '~')

AUGMENTED_OPERATORS = {'+=': '+', '-=': '-', '*=': '*', '/=': '/', '%=': '%'}


class TactParser:
    """
    Recursive descent parser for Tact functions.
    """

    def __init__(self):
        self.tokens: list[Token] = []
        self.position = 0
        self.current_token: Token | None = None

    def parse(self, text: str) -> SourceFile:
        """
        Parse Tact source text into a SourceFile AST.

        Args:
            text: Tact source code

        Returns:
            SourceFile with every function definition

        Raises:
            ParseError: On syntax error
        """
        self.tokens = Tokenizer(text).tokenize()
        self.position = 0
        self.current_token = self.tokens[0] if self.tokens else None

        try:
            functions = []
            while self.current_token is not None:
                functions.append(self._parse_function())
            return SourceFile(functions=tuple(functions))
        except RecursionError:
            line = self.current_token.line if self.current_token else 0
            column = self.current_token.column if self.current_token else 0
            raise ParseError("Input too complex: maximum nesting depth exceeded", line, column)

    def parse_file(self, filepath: str | Path) -> SourceFile:
        """Parse a Tact file with strict UTF-8 encoding"""
        with open(filepath, 'r', encoding='utf-8') as f:
            text = f.read()
        return self.parse(text)

    # ========================================================================
    # UTILITY METHODS
    # ========================================================================

    def _advance(self) -> None:
        self.position += 1
        if self.position < len(self.tokens):
            self.current_token = self.tokens[self.position]
        else:
            self.current_token = None

    def _error(self, message: str) -> ParseError:
        if self.current_token is None:
            last = self.tokens[-1] if self.tokens else None
            return ParseError(
                f"{message}, got end of input",
                last.line if last else 0,
                last.column if last else 0,
            )
        return ParseError(
            f"{message}, got '{self.current_token.value}'",
            self.current_token.line,
            self.current_token.column
        )

    def _expect(self, token_type: str, value: str | None = None) -> Token:
        """
        Expect specific token type/value.

        Raises ParseError if not matched.
        """
        if not self._match(token_type, value):
            expected = f"'{value}'" if value else token_type
            raise self._error(f"Expected {expected}")
        token = self.current_token
        self._advance()
        return token

    def _match(self, token_type: str, value: str | None = None) -> bool:
        if not self.current_token:
            return False
        if self.current_token.type != token_type:
            return False
        if value and self.current_token.value != value:
            return False
        return True

    def _consume_if(self, token_type: str, value: str | None = None) -> bool:
        if self._match(token_type, value):
            self._advance()
            return True
        return False

    # ========================================================================
    # DECLARATIONS
    # ========================================================================

    def _parse_function(self) -> FunctionDef:
        start = self._expect('KEYWORD', 'fun')
        name = self._expect('IDENTIFIER').value

        self._expect('DELIMITER', '(')
        params: list[Parameter] = []
        while not self._match('DELIMITER', ')'):
            token = self._expect('IDENTIFIER')
            type_name = self._parse_type() if self._consume_if('DELIMITER', ':') else None
            params.append(Parameter(token.value, type_name, token.loc))
            if not self._consume_if('DELIMITER', ','):
                break
        self._expect('DELIMITER', ')')

        return_type = self._parse_type() if self._consume_if('DELIMITER', ':') else None
        statements = self._parse_block()
        return FunctionDef(name, tuple(params), statements, return_type, start.loc)

    def _parse_type(self) -> str:
        name = self._expect('IDENTIFIER').value
        if self._consume_if('OPERATOR', '?'):
            name += '?'
        return name

    # ========================================================================
    # STATEMENTS
    # ========================================================================

    def _parse_block(self) -> tuple[Statement, ...]:
        self._expect('DELIMITER', '{')
        statements: list[Statement] = []
        while not self._match('DELIMITER', '}'):
            if self.current_token is None:
                raise self._error("Expected '}'")
            statements.append(self._parse_statement())
        self._expect('DELIMITER', '}')
        return tuple(statements)

    def _parse_statement(self) -> Statement:
        token = self.current_token
        if token.type == 'KEYWORD':
            if token.value == 'let':
                return self._parse_let()
            if token.value == 'if':
                return self._parse_if()
            if token.value == 'return':
                self._advance()
                expression = None
                if not self._match('DELIMITER', ';'):
                    expression = self._parse_expression()
                self._expect('DELIMITER', ';')
                return Return(expression, token.loc)
            if token.value in ('while', 'repeat'):
                self._advance()
                header = self._parse_expression()
                return Loop(token.value, header, self._parse_block(), token.loc)
            if token.value == 'do':
                self._advance()
                body = self._parse_block()
                self._expect('KEYWORD', 'until')
                header = self._parse_expression()
                self._expect('DELIMITER', ';')
                return Loop('until', header, body, token.loc)

        target = self._parse_expression()
        if self._consume_if('OPERATOR', '='):
            statement: Statement = Assign(target, self._parse_expression(), token.loc)
        elif self._match('OPERATOR') and self.current_token.value in AUGMENTED_OPERATORS:
            op = AUGMENTED_OPERATORS[self.current_token.value]
            self._advance()
            statement = AugmentedAssign(op, target, self._parse_expression(), token.loc)
        else:
            statement = ExpressionStatement(target, token.loc)
        self._expect('DELIMITER', ';')
        return statement

    def _parse_let(self) -> Let:
        start = self._expect('KEYWORD', 'let')
        name = self._expect('IDENTIFIER').value
        type_name = self._parse_type() if self._consume_if('DELIMITER', ':') else None
        self._expect('OPERATOR', '=')
        expression = self._parse_expression()
        self._expect('DELIMITER', ';')
        return Let(name, expression, type_name, start.loc)

    def _parse_if(self) -> Condition:
        start = self._expect('KEYWORD', 'if')
        condition = self._parse_expression()
        true_statements = self._parse_block()
        false_statements = None
        if self._consume_if('KEYWORD', 'else'):
            if self._match('KEYWORD', 'if'):
                false_statements = (self._parse_if(),)
            else:
                false_statements = self._parse_block()
        return Condition(condition, true_statements, false_statements, start.loc)

    # ========================================================================
    # EXPRESSIONS
    # ========================================================================

    def _parse_expression(self) -> Expression:
        return self._parse_binary(0)

    def _parse_binary(self, level: int) -> Expression:
        if level == len(BINARY_PRECEDENCE):
            return self._parse_unary()
        left = self._parse_binary(level + 1)
        operators = BINARY_PRECEDENCE[level]
        while self._match('OPERATOR') and self.current_token.value in operators:
            token = self.current_token
            self._advance()
            right = self._parse_binary(level + 1)
            left = BinaryOperation(token.value, left, right, token.loc)
        return left

    def _parse_unary(self) -> Expression:
        if self._match('OPERATOR') and self.current_token.value in UNARY_OPERATORS:
            token = self.current_token
            self._advance()
            return UnaryOperation(token.value, self._parse_unary(), token.loc)
        return self._parse_postfix()

    def _parse_postfix(self) -> Expression:
        expr = self._parse_primary()
        while True:
            if self._match('DELIMITER', '.'):
                token = self.current_token
                self._advance()
                expr = FieldAccess(expr, self._expect('IDENTIFIER').value, token.loc)
            elif self._match('DELIMITER', '(') and isinstance(expr, (Identifier, FieldAccess)):
                token = self.current_token
                self._advance()
                args: list[Expression] = []
                while not self._match('DELIMITER', ')'):
                    args.append(self._parse_expression())
                    if not self._consume_if('DELIMITER', ','):
                        break
                self._expect('DELIMITER', ')')
                expr = Call(expr, tuple(args), token.loc)
            else:
                return expr

    def _parse_primary(self) -> Expression:
        token = self.current_token
        if token is None:
            raise self._error("Expected expression")

        if token.type == 'NUMBER':
            self._advance()
            digits = token.value.replace('_', '')
            base = 16 if digits[:2].lower() == '0x' else 10
            return NumberLiteral(int(digits, base), token.loc)

        if token.type == 'KEYWORD' and token.value in ('true', 'false'):
            self._advance()
            return BooleanLiteral(token.value == 'true', token.loc)

        if token.type == 'IDENTIFIER':
            self._advance()
            return Identifier(token.value, token.loc)

        if self._consume_if('DELIMITER', '('):
            expr = self._parse_expression()
            self._expect('DELIMITER', ')')
            return expr

        raise self._error("Expected expression")


def parse_tact(text: str) -> SourceFile:
    """Parse Tact source text"""
    return TactParser().parse(text)


def parse_tact_file(filepath: str | Path) -> SourceFile:
    """Parse a Tact source file"""
    return TactParser().parse_file(filepath)
