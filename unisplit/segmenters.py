"""Registry of external segmentation backends and the ICU binding."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from enum import Enum
from importlib import import_module
from types import MappingProxyType
from typing import Any, Protocol, runtime_checkable

from unisplit.errors import InvalidArgumentError, SegmenterConstructionError

DONE = -1


class BoundaryKind(str, Enum):
    """Unicode segmentation granularity."""

    CHARACTER = "character"
    LINE_BREAK = "line_break"
    SENTENCE = "sentence"
    WORD = "word"


@runtime_checkable
class Segmenter(Protocol):
    """Iterate boundaries of one bound UTF-8 buffer, in byte offsets."""

    def set_text(self, data: bytes) -> None:
        """Bind the segmenter to ``data``."""
        ...

    def first(self) -> int:
        """Rewind and return the first boundary (always ``0``)."""
        ...

    def next(self) -> int:
        """Return the next boundary or ``DONE``."""
        ...


SegmenterFactory = Callable[[BoundaryKind, str | None], Segmenter]

_REGISTRY: Mapping[str, SegmenterFactory] = MappingProxyType({})


def register(name: str) -> Callable[[SegmenterFactory], SegmenterFactory]:
    """Register a segmenter factory under ``name``; re-registering replaces it."""

    def _register(factory: SegmenterFactory) -> SegmenterFactory:
        global _REGISTRY
        _REGISTRY = MappingProxyType({**dict(_REGISTRY), name: factory})
        return factory

    return _register


def get_backend(name: str) -> SegmenterFactory:
    try:
        return _REGISTRY[name]
    except KeyError:
        known = ", ".join(sorted(_REGISTRY))
        raise InvalidArgumentError(f"unknown backend {name!r} (known: {known})", "backend") from None


def registry() -> dict[str, SegmenterFactory]:
    """Shallow copy of the registry for inspection/testing."""
    return dict(_REGISTRY)


# ---------------------------------------------------------------------------
# ICU
# ---------------------------------------------------------------------------

_ICU_CREATORS: Mapping[BoundaryKind, str] = MappingProxyType(
    {
        BoundaryKind.CHARACTER: "createCharacterInstance",
        BoundaryKind.LINE_BREAK: "createLineInstance",
        BoundaryKind.SENTENCE: "createSentenceInstance",
        BoundaryKind.WORD: "createWordInstance",
    }
)


def _icu() -> Any:
    try:
        return import_module("icu")
    except ModuleNotFoundError as exc:
        raise SegmenterConstructionError("PyICU is required for the 'icu' backend") from exc


def _utf8_width(cp: int) -> int:
    return 1 if cp < 0x80 else 2 if cp < 0x800 else 3 if cp < 0x10000 else 4


def utf16_to_utf8_offsets(text: str) -> tuple[int, ...]:
    """Map every UTF-16 code unit offset of ``text`` to its UTF-8 byte offset.

    The offset between the two halves of a surrogate pair maps to the end
    of the code point; ICU never reports a boundary there.
    """
    table = [0]
    pos = 0
    for ch in text:
        cp = ord(ch)
        pos += _utf8_width(cp)
        if cp > 0xFFFF:
            table.append(pos)
        table.append(pos)
    return tuple(table)


class IcuSegmenter:
    """``icu.BreakIterator`` reporting boundaries as UTF-8 byte offsets."""

    def __init__(self, kind: BoundaryKind, locale: str | None) -> None:
        icu = _icu()
        self._error = icu.ICUError
        self._done = icu.BreakIterator.DONE
        try:
            loc = icu.Locale(locale) if locale else icu.Locale.getDefault()
            self._iter = getattr(icu.BreakIterator, _ICU_CREATORS[kind])(loc)
        except icu.ICUError as exc:
            raise SegmenterConstructionError(
                f"cannot open {kind.value} break iterator for locale {locale!r}: {exc}"
            ) from exc
        self._offsets: tuple[int, ...] = (0,)

    def set_text(self, data: bytes) -> None:
        text = data.decode("utf-8")
        try:
            self._iter.setText(text)
        except self._error as exc:
            raise SegmenterConstructionError(f"cannot bind text: {exc}") from exc
        self._offsets = utf16_to_utf8_offsets(text)

    def first(self) -> int:
        return self._offsets[self._iter.first()]

    def next(self) -> int:
        boundary = self._iter.nextBoundary()
        return DONE if boundary == self._done else self._offsets[boundary]


@register("icu")
def icu_segmenter(kind: BoundaryKind, locale: str | None) -> Segmenter:
    return IcuSegmenter(kind, locale)


__all__ = [
    "DONE",
    "BoundaryKind",
    "IcuSegmenter",
    "Segmenter",
    "SegmenterFactory",
    "get_backend",
    "register",
    "registry",
    "utf16_to_utf8_offsets",
]
