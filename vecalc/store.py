# store.py
"""
Persistence for saved sessions.

A saved session is every variable plus the debug level. JsonFileStore writes
it as JSON to '<path>.vecalc'; MemoryStore keeps it in process. Loaded data is
validated with pydantic models before anything reaches the environment.
"""

import logging
import re
import time
from abc import ABC, abstractmethod
from typing import Dict, List, Mapping, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import PersistenceError
from .evaluator import DEFAULT_DEBUG_LEVEL
from .values import Scalar, Value, Vector

logger = logging.getLogger(__name__)

STATE_FILE_EXT = "vecalc"

_IDENT_RE = re.compile(r'^[^\W\d]\w*$')

# ----- Pydantic Models -----

StoredValue = Union[float, List[float]]


class SavedSession(BaseModel):
    """Model for a persisted session."""
    # Non-finite floats are written as Infinity/NaN so they load back unchanged.
    model_config = ConfigDict(ser_json_inf_nan='constants')

    variables: Dict[str, StoredValue] = Field(default_factory=dict)
    debug_level: int = Field(DEFAULT_DEBUG_LEVEL, ge=0, le=9, description="Debug level between 0 and 9")
    saved_at: str = Field(default_factory=lambda: time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()))

    @field_validator('variables')
    @classmethod
    def variables_must_be_well_formed(cls, v: Dict[str, StoredValue]) -> Dict[str, StoredValue]:
        for name, value in v.items():
            if not _IDENT_RE.match(name) or name in ('dot', 'cross'):
                raise ValueError(f"Invalid variable name {name!r}")
            if isinstance(value, list) and not value:
                raise ValueError(f"Vector {name!r} has no components")
        return v

    @classmethod
    def from_environment(cls, variables: Mapping[str, Value], debug_level: int) -> "SavedSession":
        try:
            return cls(
                variables={name: value_to_stored(value) for name, value in variables.items()},
                debug_level=debug_level,
            )
        except ValidationError as e:
            raise PersistenceError(f"Cannot save session: {e}")

    def to_values(self) -> Dict[str, Value]:
        return {name: value_from_stored(value) for name, value in self.variables.items()}


def value_to_stored(value: Value) -> StoredValue:
    if isinstance(value, Vector):
        return list(value.components)
    return value.value


def value_from_stored(value: StoredValue) -> Value:
    if isinstance(value, list):
        return Vector.of(value)
    return Scalar(float(value))


# ----- Stores -----

class VariableStore(ABC):
    """Key-value store for saved sessions, keyed by a caller supplied path."""

    @abstractmethod
    def save(self, path: str, session: SavedSession) -> None:
        ...

    @abstractmethod
    def load(self, path: str) -> SavedSession:
        ...


class MemoryStore(VariableStore):
    """Keeps saved sessions in a dict. Documents are copied in both directions."""

    def __init__(self):
        self._data: Dict[str, str] = {}

    def save(self, path: str, session: SavedSession) -> None:
        self._data[path] = session.model_dump_json()

    def load(self, path: str) -> SavedSession:
        if path not in self._data:
            raise PersistenceError(f"No saved session named {path!r}")
        try:
            return SavedSession.model_validate_json(self._data[path])
        except ValidationError as e:
            raise PersistenceError(f"Invalid saved session {path!r}: {e}")


class JsonFileStore(VariableStore):
    """Stores each session as a JSON document in '<path>.vecalc'."""

    def __init__(self, extension: str = STATE_FILE_EXT):
        self.extension = extension

    def filename(self, path: str) -> str:
        path = path.strip()
        if not path:
            raise PersistenceError("Empty file name")
        return f"{path}.{self.extension}"

    def save(self, path: str, session: SavedSession) -> None:
        fname = self.filename(path)
        try:
            with open(fname, 'w', encoding='utf-8') as f:
                f.write(session.model_dump_json(indent=2))
        except OSError as e:
            logger.error(f"Error writing state file {fname}: {e}")
            raise PersistenceError(f"Error writing state file {fname}: {e}")
        logger.info(f"Saved {len(session.variables)} variables to {fname}")

    def load(self, path: str) -> SavedSession:
        fname = self.filename(path)
        try:
            with open(fname, 'r', encoding='utf-8') as f:
                text = f.read()
        except OSError as e:
            logger.error(f"Error opening state file {fname}: {e}")
            raise PersistenceError(f"Error opening state file {fname}: {e}")
        try:
            session = SavedSession.model_validate_json(text)
        except ValidationError as e:
            logger.error(f"Invalid state file {fname}: {e.error_count()} errors")
            raise PersistenceError(f"Invalid state file {fname}: {e}")
        logger.info(f"Loaded {len(session.variables)} variables from {fname}")
        return session
