# parser.py
"""
AST types and the recursive descent parser.

Grammar:
    statement  : IDENT '=' expression | command | expression
    expression : operand (OP operand)*
    operand    : '-' operand | primary
    primary    : NUMBER | VECTOR | IDENT | '(' expression ')'
    command    : COMMAND [DIGIT | IDENT | REST]

Binary operators have no precedence over each other: a chain such as
3 + 4 * 2 folds strictly left to right, giving (3 + 4) * 2.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import List, Optional, Union

from .errors import ParseError
from .lexer import Lexer, Token
from .values import Scalar, Value, Vector

# --------------------------
# Expression nodes
# --------------------------


@dataclass(frozen=True)
class Literal:
    value: Value


@dataclass(frozen=True)
class VariableRef:
    name: str


@dataclass(frozen=True)
class BinaryOp:
    op: str
    left: Expression
    right: Expression


@dataclass(frozen=True)
class UnaryNeg:
    operand: Expression


Expression = Union[Literal, VariableRef, BinaryOp, UnaryNeg]

# --------------------------
# Statements
# --------------------------


class CommandKind(enum.Enum):
    DEBUG = 'debug'
    MODIFY = 'modify'
    EXIT = 'exit'
    SAVE = 'save'
    LOAD = 'load'


@dataclass(frozen=True)
class Assignment:
    name: str
    value: Expression


@dataclass(frozen=True)
class Evaluation:
    expression: Expression


@dataclass(frozen=True)
class Command:
    """A '.' command. `arg` is the debug level, variable name or raw path, if any."""
    kind: CommandKind
    arg: Optional[Union[int, str]] = None


Statement = Union[Assignment, Evaluation, Command]


class Parser:
    """Recursive descent parser producing a Statement from a token list."""

    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.pos = 0

    def _current(self) -> Token:
        return self.tokens[self.pos]

    def _peek(self, n: int = 1) -> Token:
        i = min(self.pos + n, len(self.tokens) - 1)
        return self.tokens[i]

    def _advance(self) -> Token:
        tok = self.tokens[self.pos]
        if tok.type != 'EOF':
            self.pos += 1
        return tok

    def _expect(self, typ: str) -> Token:
        tok = self._current()
        if tok.type != typ:
            raise ParseError(f"Expected {typ}, got {_describe(tok)}", tok.pos)
        return self._advance()

    def parse(self) -> Statement:
        first = self._current()
        if first.type == 'COMMAND':
            stmt: Statement = self.command()
        elif self._peek().type == 'ASSIGN':
            stmt = self.assignment()
        else:
            stmt = Evaluation(self.expression())
        tok = self._current()
        if tok.type == 'ASSIGN':
            raise ParseError("Assignment target must be a single variable name", tok.pos)
        if tok.type != 'EOF':
            raise ParseError(f"Unexpected {_describe(tok)}", tok.pos)
        return stmt

    def assignment(self) -> Assignment:
        target = self._advance()
        if target.type != 'IDENT':
            raise ParseError(
                f"Assignment target must be a variable name, got {_describe(target)}", target.pos)
        eq = self._expect('ASSIGN')
        if self._current().type == 'EOF':
            raise ParseError(f"Missing expression after '=' for '{target.value}'", eq.pos)
        return Assignment(target.value, self.expression())

    def expression(self) -> Expression:
        """expression : operand (OP operand)*"""
        node = self.operand()
        while self._current().type == 'OP':
            op_tok = self._advance()
            if self._current().type in ('EOF', 'RPAREN'):
                raise ParseError(f"Operator '{op_tok.value}' has no right operand", op_tok.pos)
            node = BinaryOp(op_tok.value, node, self.operand())
        return node

    def operand(self) -> Expression:
        """operand : '-' operand | primary"""
        tok = self._current()
        if tok.type == 'OP' and tok.value == '-':
            self._advance()
            if self._current().type == 'EOF':
                raise ParseError("Unary '-' has no operand", tok.pos)
            return UnaryNeg(self.operand())
        return self.primary()

    def primary(self) -> Expression:
        """primary : NUMBER | VECTOR | IDENT | '(' expression ')'"""
        tok = self._current()
        if tok.type == 'NUMBER':
            self._advance()
            return Literal(Scalar(tok.value))
        if tok.type == 'VECTOR':
            self._advance()
            return Literal(Vector.of(tok.value))
        if tok.type == 'IDENT':
            self._advance()
            return VariableRef(tok.value)
        if tok.type == 'LPAREN':
            self._advance()
            if self._current().type == 'RPAREN':
                raise ParseError("Empty parentheses", tok.pos)
            node = self.expression()
            if self._current().type != 'RPAREN':
                raise ParseError(f"Unbalanced '(' expected ')' before {_describe(self._current())}", tok.pos)
            self._advance()
            return node
        if tok.type == 'EOF':
            raise ParseError("Expected a value, got end of input", tok.pos)
        raise ParseError(f"Expected a value, got {_describe(tok)}", tok.pos)

    def command(self) -> Command:
        tok = self._advance()
        kind = CommandKind(tok.value)
        arg_tok = self._current()
        if kind is CommandKind.DEBUG:
            if arg_tok.type == 'DIGIT':
                self._advance()
                return Command(kind, arg_tok.value)
            return Command(kind)
        if kind is CommandKind.MODIFY:
            if arg_tok.type != 'IDENT':
                raise ParseError("'.modify' needs a variable name", arg_tok.pos)
            self._advance()
            return Command(kind, arg_tok.value)
        if kind in (CommandKind.SAVE, CommandKind.LOAD):
            rest = self._expect('REST')
            return Command(kind, rest.value)
        return Command(kind)


def _describe(tok: Token) -> str:
    if tok.type == 'EOF':
        return "end of input"
    return f"{tok.type} {tok.value!r}"


def parse_line(text: str) -> Statement:
    """Tokenize and parse a single line into a Statement."""
    return Parser(Lexer(text).tokenize()).parse()
