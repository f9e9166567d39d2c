"""Interactive scalar and vector calculator."""

from .errors import (
    ArithmeticDomainError,
    CalculatorError,
    DimensionMismatchError,
    DivisionByZeroError,
    EvalError,
    LexerError,
    ParseError,
    PersistenceError,
    TypeMismatchError,
    UndefinedVariableError,
    UnsupportedDimensionError,
)
from .evaluator import Environment, Evaluator
from .parser import parse_line
from .values import Scalar, Vector

__version__ = "0.1.0"
