# lexer.py
"""
Tokenizer for calculator lines.

Produces tokens: NUMBER, VECTOR, IDENT, OP, ASSIGN, LPAREN, RPAREN, COMMAND,
DIGIT, REST, EOF. '-' is always tokenized as an operator (numbers carry no sign);
the parser decides from position whether it is unary or binary.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Tuple

from .errors import LexerError

# Whole-word operators. A word equal to one of these is never an identifier.
_WORD_OPS = {'dot', 'cross'}
_SYMBOL_OPS = set('+-*/^')

COMMAND_NAMES = ('debug', 'modify', 'exit', 'save', 'load')


@dataclass
class Token:
    """Represents a token with type, value, and character position."""
    type: str
    value: Any
    pos: int

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.value!r}, pos={self.pos})"


def _is_ident_start(ch: str) -> bool:
    return ch != '' and (ch.isalpha() or ch == '_')


def _is_ident_char(ch: str) -> bool:
    return ch != '' and (ch.isalnum() or ch == '_')


class Lexer:
    """Tokenizer for a single line of calculator input."""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.len = len(text)

    def _peek(self, n: int = 0) -> str:
        i = self.pos + n
        return self.text[i] if i < self.len else ''

    def _advance(self, n: int = 1) -> None:
        self.pos += n

    def _skip_whitespace(self) -> None:
        while self._peek() and self._peek().isspace():
            self._advance()

    def _read_bare_number(self) -> Tuple[float, int]:
        # digits ('.' digits)?
        start = self.pos
        if not self._peek().isdigit():
            raise LexerError(f"Expected a number, got {self._peek()!r}", self.pos)
        while self._peek().isdigit():
            self._advance()
        if self._peek() == '.':
            if not self._peek(1).isdigit():
                raise LexerError("Expected digits after '.'", self.pos + 1)
            self._advance()
            while self._peek().isdigit():
                self._advance()
        if _is_ident_char(self._peek()) or self._peek() == '.':
            raise LexerError(f"Invalid numeric literal: {self.text[start:self.pos + 1]}", start)
        return float(self.text[start:self.pos]), start

    def _read_vector(self) -> Token:
        # '<' number (',' number)* '>'
        start = self.pos
        self._advance()
        components: List[float] = []
        while True:
            self._skip_whitespace()
            value, _ = self._read_bare_number()
            components.append(value)
            self._skip_whitespace()
            ch = self._peek()
            if ch == ',':
                self._advance()
                continue
            if ch == '>':
                self._advance()
                break
            if ch == '':
                raise LexerError("Unterminated vector literal", start)
            raise LexerError(f"Expected ',' or '>' in vector, got {ch!r}", self.pos)
        return Token('VECTOR', tuple(components), start)

    def _read_word(self) -> Tuple[str, int]:
        start = self.pos
        while _is_ident_char(self._peek()):
            self._advance()
        return self.text[start:self.pos], start

    def _read_ident(self) -> Token:
        word, start = self._read_word()
        if word in _WORD_OPS:
            return Token('OP', word, start)
        return Token('IDENT', word, start)

    def _read_command(self) -> List[Token]:
        """Tokenize '.' keyword [argument]. Assumes current char is '.'."""
        dot_pos = self.pos
        self._advance()
        word, start = self._read_word()
        if word not in COMMAND_NAMES:
            raise LexerError(f"Unknown command '.{word}'", dot_pos)
        tokens = [Token('COMMAND', word, start)]
        if self._peek() and not self._peek().isspace():
            raise LexerError(f"Unexpected character {self._peek()!r} after '.{word}'", self.pos)

        if word in ('save', 'load'):
            # One mandatory separator, then the rest of the line verbatim.
            if self._peek() == '':
                raise LexerError(f"'.{word}' needs a path", self.pos)
            self._advance()
            if self.pos >= self.len:
                raise LexerError(f"'.{word}' needs a path", self.pos)
            tokens.append(Token('REST', self.text[self.pos:], self.pos))
            self.pos = self.len
        else:
            self._skip_whitespace()
            ch = self._peek()
            if word == 'debug' and ch.isdigit():
                tokens.append(Token('DIGIT', int(ch), self.pos))
                self._advance()
            elif word == 'modify' and _is_ident_start(ch):
                tok = self._read_ident()
                if tok.type != 'IDENT':
                    raise LexerError(f"'{tok.value}' is not a variable name", tok.pos)
                tokens.append(tok)
            self._skip_whitespace()
            if self._peek():
                raise LexerError(f"Unexpected input {self.text[self.pos:]!r} after '.{word}'", self.pos)
        tokens.append(Token('EOF', None, self.pos))
        return tokens

    def tokenize(self) -> List[Token]:
        tokens: List[Token] = []
        self._skip_whitespace()
        if self._peek() == '.':
            return self._read_command()
        while True:
            self._skip_whitespace()
            ch = self._peek()
            if ch == '':
                break
            if ch.isdigit():
                value, start = self._read_bare_number()
                tokens.append(Token('NUMBER', value, start))
            elif _is_ident_start(ch):
                tokens.append(self._read_ident())
            elif ch == '<':
                tokens.append(self._read_vector())
            elif ch == '(':
                tokens.append(Token('LPAREN', ch, self.pos))
                self._advance()
            elif ch == ')':
                tokens.append(Token('RPAREN', ch, self.pos))
                self._advance()
            elif ch == '=':
                tokens.append(Token('ASSIGN', ch, self.pos))
                self._advance()
            elif ch in _SYMBOL_OPS:
                tokens.append(Token('OP', ch, self.pos))
                self._advance()
            else:
                raise LexerError(f"Unknown character {ch!r}", self.pos)
        tokens.append(Token('EOF', None, self.pos))
        return tokens
