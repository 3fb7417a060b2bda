"""Boundary iteration adapter over an external segmentation backend."""

from __future__ import annotations

import logging
import re
from types import TracebackType

from unisplit.errors import InvalidArgumentError
from unisplit.ranges import OccurrenceList
from unisplit.segmenters import DONE, BoundaryKind, Segmenter, get_backend

logger = logging.getLogger(__name__)

_LOCALE_RE = re.compile(r"^[A-Za-z]{2,8}(?:[_-][A-Za-z0-9]{0,8})*(?:@[A-Za-z0-9=;_-]+)?$")


def parse_kind(name: str | BoundaryKind) -> BoundaryKind:
    """Match ``name`` against the boundary kinds, accepting unique prefixes."""
    if isinstance(name, BoundaryKind):
        return name
    exact = [k for k in BoundaryKind if k.value == name]
    if exact:
        return exact[0]
    candidates = [k for k in BoundaryKind if name and k.value.startswith(name)]
    if len(candidates) != 1:
        options = ", ".join(k.value for k in BoundaryKind)
        raise InvalidArgumentError(f"incorrect option {name!r}, expected one of: {options}", "boundary")
    return candidates[0]


def normalize_locale(locale: str | None, default: str | None = None) -> str | None:
    """Return a validated locale identifier; empty or ``None`` means ``default``."""
    chosen = locale or default
    if not chosen:
        return None
    if not _LOCALE_RE.match(chosen):
        raise InvalidArgumentError(f"malformed locale identifier {chosen!r}", "locale")
    return chosen


class BoundaryIterationAdapter:
    """Drain an external segmenter into contiguous byte ranges.

    One segmenter handle is kept across calls to :meth:`scan` and rebuilt
    only when the requested kind differs from the previous element's.
    Elements must therefore be scanned in order and the adapter must not
    be shared between threads.
    """

    def __init__(self, locale: str | None = None, backend: str = "icu") -> None:
        self.locale = locale
        self.backend = backend
        self._factory = get_backend(backend)
        self._handle: Segmenter | None = None
        self._kind: BoundaryKind | None = None
        self.rebuilds = 0

    def _segmenter(self, kind: BoundaryKind) -> Segmenter:
        if self._handle is None or kind is not self._kind:
            self.close()
            logger.debug(
                "opening %s segmenter (backend=%s, locale=%s)", kind.value, self.backend, self.locale
            )
            self._handle = self._factory(kind, self.locale)
            self._kind = kind
            self.rebuilds += 1
        return self._handle

    def scan(self, data: bytes, kind: BoundaryKind) -> OccurrenceList:
        """Return ranges ``[previous, boundary)`` covering all of ``data``.

        Input without any boundary yields a single empty range.
        """
        segmenter = self._segmenter(kind)
        segmenter.set_text(data)
        occurrences = OccurrenceList(data)
        last = segmenter.first()
        for boundary in iter(segmenter.next, DONE):
            occurrences.append(last, boundary)
            last = boundary
        if not occurrences:
            occurrences.append(0, 0)
        return occurrences

    def close(self) -> None:
        self._handle = None
        self._kind = None

    def __enter__(self) -> BoundaryIterationAdapter:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


__all__ = ["BoundaryIterationAdapter", "BoundaryKind", "normalize_locale", "parse_kind"]
