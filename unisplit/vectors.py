"""Input containers: UTF-8 string vectors and recycled auxiliary vectors."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from unisplit.errors import InvalidArgumentError

T = TypeVar("T")


def _as_sequence(values: Any) -> Sequence[Any]:
    """Wrap scalars (including ``str``/``bytes``) into a one-element tuple."""
    if values is None or isinstance(values, (str, bytes, bytearray, int, bool)):
        return (values,)
    if isinstance(values, Iterable):
        return tuple(values)
    return (values,)


def _encode(value: Any, argname: str) -> bytes | None:
    if value is None:
        return None
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (bytes, bytearray)):
        raw = bytes(value)
        try:
            raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidArgumentError(f"element is not valid UTF-8 ({exc.reason})", argname) from exc
        return raw
    raise InvalidArgumentError(f"expected str, bytes or None, got {type(value).__name__}", argname)


@dataclass(frozen=True)
class StringVector:
    """Immutable sequence of UTF-8 buffers where ``None`` marks NA."""

    elements: tuple[bytes | None, ...]

    @classmethod
    def from_values(cls, values: Any, argname: str = "str") -> StringVector:
        return cls(tuple(_encode(v, argname) for v in _as_sequence(values)))

    def __len__(self) -> int:
        return len(self.elements)

    def is_na(self, i: int) -> bool:
        return self.elements[i % len(self.elements)] is None

    def get(self, i: int) -> bytes:
        """Return the buffer at recycled index ``i``; NA is an error here."""
        value = self.elements[i % len(self.elements)]
        if value is None:
            raise IndexError(f"element {i} is NA")
        return value


@dataclass(frozen=True)
class RecycledVector(Generic[T]):
    """Auxiliary parameter vector indexed modulo its own length."""

    values: tuple[T, ...]

    def __len__(self) -> int:
        return len(self.values)

    def __getitem__(self, i: int) -> T:
        return self.values[i % len(self.values)]


def integer_vector(values: Any, argname: str) -> RecycledVector[int | None]:
    """Coerce ``values`` to integers, keeping ``None`` as NA."""

    def _coerce(v: Any) -> int | None:
        if v is None:
            return None
        if isinstance(v, bool) or not isinstance(v, int):
            if isinstance(v, float) and v.is_integer():
                return int(v)
            raise InvalidArgumentError(f"expected an integer, got {v!r}", argname)
        return v

    return RecycledVector(tuple(_coerce(v) for v in _as_sequence(values)))


def logical_vector(values: Any, argname: str) -> RecycledVector[bool | None]:
    """Coerce ``values`` to booleans, keeping ``None`` as NA."""

    def _coerce(v: Any) -> bool | None:
        if v is None or isinstance(v, bool):
            return v
        if isinstance(v, int) and v in (0, 1):
            return bool(v)
        raise InvalidArgumentError(f"expected a logical value, got {v!r}", argname)

    return RecycledVector(tuple(_coerce(v) for v in _as_sequence(values)))


def string_vector(values: Any, argname: str) -> RecycledVector[str | None]:
    """Coerce ``values`` to ``str`` elements, keeping ``None`` as NA."""

    def _coerce(v: Any) -> str | None:
        if v is None or isinstance(v, str):
            return v
        if isinstance(v, (bytes, bytearray)):
            raw = _encode(v, argname)
            return raw.decode("utf-8") if raw is not None else None
        raise InvalidArgumentError(f"expected a string, got {v!r}", argname)

    return RecycledVector(tuple(_coerce(v) for v in _as_sequence(values)))


__all__ = [
    "RecycledVector",
    "StringVector",
    "integer_vector",
    "logical_vector",
    "string_vector",
]
