# values.py
"""
Runtime values and the binary operator table.

A value is either a Scalar or a Vector. Vectors keep the dimension they were
built with; operators that need two vectors of the same dimension raise
DimensionMismatchError instead of zipping to the shorter one.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Tuple, Union

from .errors import (
    ArithmeticDomainError,
    DimensionMismatchError,
    DivisionByZeroError,
    TypeMismatchError,
    UnsupportedDimensionError,
)


@dataclass(frozen=True)
class Scalar:
    value: float

    def __str__(self) -> str:
        return format_number(self.value)


@dataclass(frozen=True)
class Vector:
    components: Tuple[float, ...]

    @classmethod
    def of(cls, components: Iterable[float]) -> Vector:
        return cls(tuple(float(c) for c in components))

    @property
    def dims(self) -> int:
        return len(self.components)

    def __str__(self) -> str:
        if not self.components:
            return "<Empty Vector>"
        return "<" + ", ".join(format_number(c) for c in self.components) + ">"


Value = Union[Scalar, Vector]


def format_number(x: float) -> str:
    """Render integral floats without the trailing '.0'."""
    if isinstance(x, float) and x.is_integer():
        return str(int(x))
    return repr(x)


def type_name(value: Value) -> str:
    if isinstance(value, Vector):
        return f"vector[{value.dims}]"
    return "scalar"


def _mismatch(op: str, left: Value, right: Value) -> TypeMismatchError:
    return TypeMismatchError(
        f"Operator '{op}' not defined for {type_name(left)} and {type_name(right)}")


def _same_dims(op: str, left: Vector, right: Vector) -> None:
    if left.dims != right.dims:
        raise DimensionMismatchError(
            f"Operator '{op}' needs vectors of equal dimension, got {left.dims} and {right.dims}")


# --------------------------
# Operators
# --------------------------

def add(left: Value, right: Value) -> Value:
    if isinstance(left, Scalar) and isinstance(right, Scalar):
        return Scalar(left.value + right.value)
    if isinstance(left, Vector) and isinstance(right, Vector):
        _same_dims('+', left, right)
        return Vector(tuple(x + y for x, y in zip(left.components, right.components)))
    raise _mismatch('+', left, right)


def subtract(left: Value, right: Value) -> Value:
    if isinstance(left, Scalar) and isinstance(right, Scalar):
        return Scalar(left.value - right.value)
    if isinstance(left, Vector) and isinstance(right, Vector):
        _same_dims('-', left, right)
        return Vector(tuple(x - y for x, y in zip(left.components, right.components)))
    raise _mismatch('-', left, right)


def multiply(left: Value, right: Value) -> Value:
    if isinstance(left, Scalar) and isinstance(right, Scalar):
        return Scalar(left.value * right.value)
    if isinstance(left, Vector) and isinstance(right, Scalar):
        return Vector(tuple(x * right.value for x in left.components))
    if isinstance(left, Scalar) and isinstance(right, Vector):
        return Vector(tuple(left.value * x for x in right.components))
    raise TypeMismatchError("Can't multiply two vectors, use 'dot' or 'cross'")


def divide(left: Value, right: Value) -> Value:
    if not isinstance(right, Scalar):
        raise TypeMismatchError(f"Can't divide a {type_name(left)} by a vector")
    if right.value == 0:
        raise DivisionByZeroError("Division by zero")
    if isinstance(left, Scalar):
        return Scalar(left.value / right.value)
    return Vector(tuple(x / right.value for x in left.components))


def power(left: Value, right: Value) -> Value:
    if not (isinstance(left, Scalar) and isinstance(right, Scalar)):
        raise _mismatch('^', left, right)
    try:
        return Scalar(math.pow(left.value, right.value))
    except (ValueError, OverflowError) as e:
        raise ArithmeticDomainError(
            f"{format_number(left.value)} ^ {format_number(right.value)} is undefined: {e}")


def dot(left: Value, right: Value) -> Value:
    if not (isinstance(left, Vector) and isinstance(right, Vector)):
        raise TypeMismatchError("Can only do a dot product on two vectors")
    _same_dims('dot', left, right)
    return Scalar(sum(x * y for x, y in zip(left.components, right.components)))


def cross(left: Value, right: Value) -> Value:
    if not (isinstance(left, Vector) and isinstance(right, Vector)):
        raise TypeMismatchError("Can only do a cross product on two vectors")
    if left.dims != 3 or right.dims != 3:
        raise UnsupportedDimensionError(
            f"Cross product is only between two 3 dimensional vectors, got {left.dims} and {right.dims}")
    ax, ay, az = left.components
    bx, by, bz = right.components
    return Vector((
        ay * bz - az * by,
        az * bx - ax * bz,
        ax * by - ay * bx,
    ))


def negate(operand: Value) -> Value:
    if isinstance(operand, Scalar):
        return Scalar(-operand.value)
    return Vector(tuple(-x for x in operand.components))


# Operator registry: map operator spellings to implementations.
BINARY_OPS: Dict[str, Callable[[Value, Value], Value]] = {}


def _register(op: str, func: Callable[[Value, Value], Value]) -> None:
    BINARY_OPS[op] = func


_register('+', add)
_register('-', subtract)
_register('*', multiply)
_register('/', divide)
_register('^', power)
_register('dot', dot)
_register('cross', cross)

OPERATOR_NAMES = sorted(BINARY_OPS)
