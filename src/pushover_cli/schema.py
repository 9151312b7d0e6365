"""
Field table for the Pushover messages API.

Every field the API accepts is described once here. Validation, clamping,
dependency checks and wire rendering are all driven by iterating over
``FIELDS`` in order, so the order of the table is also the order fields are
checked in and the order they appear in the POST body.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, Tuple, Union

TOKEN_LENGTH = 30


def printable_ascii_len(text: Optional[str]) -> int:
    """Length of ``text`` if every char is printable ASCII, -1 otherwise, 0 for None."""
    if text is None:
        return 0
    for ch in text:
        if not " " <= ch <= "~":
            return -1
    return len(text)


# ========== Field attributes ==========
class FieldKind(Enum):
    TEXT = "text"
    TIMESTAMP = "timestamp"
    SIGNED_SMALL_INT = "signed_small_int"
    UNSIGNED_SIZE = "unsigned_size"


class Requiredness(Enum):
    REQUIRED = "required"
    OPTIONAL = "optional"


@dataclass(frozen=True)
class LengthRange:
    min_len: int
    max_len: int

    def accepts(self, text: Optional[str]) -> bool:
        return self.min_len <= printable_ascii_len(text) <= self.max_len


@dataclass(frozen=True)
class Bounded:
    lower: int
    upper: int

    def clamp(self, value: int) -> int:
        return max(self.lower, min(self.upper, value))


@dataclass(frozen=True)
class NoConstraint:
    pass


Constraint = Union[LengthRange, Bounded, NoConstraint]

NO_CONSTRAINT = NoConstraint()


# ========== Dependencies ==========
# Each dependency holds an accessor for the field it looks at, so the table
# never refers to another field by its string name.
@dataclass(frozen=True)
class NoDependency:
    def holds(self, msg: Any) -> bool:
        return True


@dataclass(frozen=True)
class NonEmpty:
    target: Callable[[Any], Optional[str]]

    def holds(self, msg: Any) -> bool:
        return bool(self.target(msg))


@dataclass(frozen=True)
class NonZero:
    target: Callable[[Any], Any]

    def holds(self, msg: Any) -> bool:
        value = self.target(msg)
        return value is not None and value != 0


@dataclass(frozen=True)
class FieldEquals:
    target: Callable[[Any], Any]
    value: Any

    def holds(self, msg: Any) -> bool:
        return self.target(msg) == self.value


Dependency = Union[NoDependency, NonEmpty, NonZero, FieldEquals]

NO_DEPENDENCY = NoDependency()


@dataclass(frozen=True)
class FieldSchema:
    name: str
    kind: FieldKind
    requiredness: Requiredness
    constraint: Constraint = NO_CONSTRAINT
    dependency: Dependency = NO_DEPENDENCY

    @property
    def required(self) -> bool:
        return self.requiredness is Requiredness.REQUIRED

    def get(self, msg: Any) -> Any:
        return getattr(msg, self.name)

    def set(self, msg: Any, value: Any) -> None:
        setattr(msg, self.name, value)


REQUIRED = Requiredness.REQUIRED
OPTIONAL = Requiredness.OPTIONAL
TEXT = FieldKind.TEXT

FIELDS: Tuple[FieldSchema, ...] = (
    FieldSchema("user", TEXT, REQUIRED, LengthRange(30, 30)),
    FieldSchema("message", TEXT, REQUIRED, LengthRange(1, 1024)),
    FieldSchema("title", TEXT, OPTIONAL, LengthRange(0, 250)),
    FieldSchema("device", TEXT, OPTIONAL, LengthRange(0, 25)),
    FieldSchema("url", TEXT, OPTIONAL, LengthRange(0, 512)),
    FieldSchema("url_title", TEXT, OPTIONAL, LengthRange(0, 100), NonEmpty(lambda m: m.url)),
    FieldSchema("time", FieldKind.TIMESTAMP, OPTIONAL, NO_CONSTRAINT, NonZero(lambda m: m.time)),
    FieldSchema("sound", TEXT, OPTIONAL, LengthRange(0, 16)),
    FieldSchema("priority", FieldKind.SIGNED_SMALL_INT, OPTIONAL, Bounded(-2, 2)),
    FieldSchema("retry", FieldKind.UNSIGNED_SIZE, OPTIONAL, Bounded(30, 86400), FieldEquals(lambda m: m.priority, 2)),
    FieldSchema("expire", FieldKind.UNSIGNED_SIZE, OPTIONAL, Bounded(30, 86400), FieldEquals(lambda m: m.priority, 2)),
)

FIELD_NAMES: Tuple[str, ...] = tuple(f.name for f in FIELDS)
