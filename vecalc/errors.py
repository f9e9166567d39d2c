"""Exception hierarchy for the vector calculator.

Every failure raised while lexing, parsing, evaluating or persisting a line
derives from CalculatorError, so the session can report it and move on to the
next line without losing the environment.
"""

from typing import Optional


class CalculatorError(Exception):
    """Base class for calculator errors."""
    kind = 'CalculatorError'


# --------------------------
# Syntax
# --------------------------

class ParseError(CalculatorError):
    """Raised when a line does not match the grammar, with optional position information."""
    kind = 'SyntaxError'

    def __init__(self, message: str, pos: Optional[int] = None):
        if pos is not None:
            message = f"{message} at pos {pos}"
        super().__init__(message)
        self.pos = pos


class LexerError(ParseError):
    """Raised for errors during tokenization."""
    pass


# --------------------------
# Evaluation
# --------------------------

class EvalError(CalculatorError):
    """Raised for errors during evaluation."""
    kind = 'EvalError'


class UndefinedVariableError(EvalError):
    kind = 'UndefinedVariable'

    def __init__(self, name: str):
        super().__init__(f"Undefined variable: {name}")
        self.name = name


class TypeMismatchError(EvalError):
    kind = 'TypeMismatch'


class DimensionMismatchError(EvalError):
    kind = 'DimensionMismatch'


class UnsupportedDimensionError(EvalError):
    kind = 'UnsupportedDimension'


class DivisionByZeroError(EvalError):
    kind = 'DivisionByZero'


class ArithmeticDomainError(EvalError):
    kind = 'ArithmeticDomainError'


# --------------------------
# Persistence
# --------------------------

class PersistenceError(CalculatorError):
    """Raised when the variable store cannot save or load a session."""
    kind = 'PersistenceError'
