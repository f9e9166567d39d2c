# evaluator.py
"""
Statement evaluation against a variable environment.

Evaluator.execute() returns exactly one result per statement: a Value for a
plain expression, a Binding for an assignment, a Removal for '.modify', or a
CommandAction the driver must act on. The environment is passed in explicitly
and is only touched after the right-hand side has been fully evaluated, so a
failing statement never leaves a partial mutation behind.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterator, Mapping, Optional, Tuple, Union

from .errors import EvalError, UndefinedVariableError
from .parser import (
    Assignment,
    BinaryOp,
    Command,
    CommandKind,
    Evaluation,
    Expression,
    Literal,
    Statement,
    UnaryNeg,
    VariableRef,
)
from .values import BINARY_OPS, Value, negate

logger = logging.getLogger(__name__)

DEFAULT_DEBUG_LEVEL = 1


class Environment:
    """Mutable mapping from variable name to value for one session."""

    def __init__(self, variables: Optional[Mapping[str, Value]] = None):
        self._vars: Dict[str, Value] = dict(variables or {})

    def get(self, name: str) -> Value:
        try:
            return self._vars[name]
        except KeyError:
            raise UndefinedVariableError(name) from None

    def bind(self, name: str, value: Value) -> Optional[Value]:
        """Bind name to value and return the previous binding, if any."""
        old = self._vars.get(name)
        self._vars[name] = value
        return old

    def remove(self, name: str) -> Value:
        if name not in self._vars:
            raise UndefinedVariableError(name)
        return self._vars.pop(name)

    def update(self, variables: Mapping[str, Value]) -> None:
        self._vars.update(variables)

    def snapshot(self) -> Dict[str, Value]:
        return dict(self._vars)

    def names(self) -> Tuple[str, ...]:
        return tuple(sorted(self._vars))

    def items(self) -> Iterator[Tuple[str, Value]]:
        return iter(sorted(self._vars.items()))

    def __contains__(self, name: object) -> bool:
        return name in self._vars

    def __len__(self) -> int:
        return len(self._vars)

    def __repr__(self) -> str:
        return f"Environment({self._vars!r})"


# --------------------------
# Results
# --------------------------

@dataclass(frozen=True)
class Binding:
    name: str
    value: Value


@dataclass(frozen=True)
class Removal:
    name: str
    value: Value


@dataclass(frozen=True)
class SetDebugLevel:
    level: int


@dataclass(frozen=True)
class Terminate:
    pass


@dataclass(frozen=True)
class Save:
    path: str


@dataclass(frozen=True)
class Load:
    path: str


CommandAction = Union[SetDebugLevel, Terminate, Save, Load]
Result = Union[Value, Binding, Removal, CommandAction]


class Evaluator:
    """Evaluates statements and expression trees."""

    def evaluate(self, node: Expression, env: Environment) -> Value:
        """Evaluate an expression tree and return its value or raise EvalError."""
        if isinstance(node, Literal):
            return node.value
        if isinstance(node, VariableRef):
            return env.get(node.name)
        if isinstance(node, UnaryNeg):
            return negate(self.evaluate(node.operand, env))
        if isinstance(node, BinaryOp):
            left = self.evaluate(node.left, env)
            right = self.evaluate(node.right, env)
            try:
                func = BINARY_OPS[node.op]
            except KeyError:
                raise EvalError(f"Unknown binary operator: {node.op}") from None
            result = func(left, right)
            logger.debug(f"{left} {node.op} {right} -> {result}")
            return result
        raise EvalError(f"Unsupported AST node: {type(node).__name__}")

    def execute(self, statement: Statement, env: Environment) -> Result:
        if isinstance(statement, Evaluation):
            return self.evaluate(statement.expression, env)
        if isinstance(statement, Assignment):
            value = self.evaluate(statement.value, env)
            env.bind(statement.name, value)
            logger.info(f"Bound {statement.name} = {value}")
            return Binding(statement.name, value)
        if isinstance(statement, Command):
            return self._command(statement, env)
        raise EvalError(f"Unsupported statement: {type(statement).__name__}")

    def _command(self, command: Command, env: Environment) -> Result:
        kind = command.kind
        if kind is CommandKind.DEBUG:
            level = DEFAULT_DEBUG_LEVEL if command.arg is None else int(command.arg)
            return SetDebugLevel(level)
        if kind is CommandKind.MODIFY:
            name = str(command.arg)
            value = env.remove(name)
            logger.info(f"Removed {name}")
            return Removal(name, value)
        if kind is CommandKind.EXIT:
            return Terminate()
        if kind is CommandKind.SAVE:
            return Save(str(command.arg))
        if kind is CommandKind.LOAD:
            return Load(str(command.arg))
        raise EvalError(f"Unknown command: {kind}")
