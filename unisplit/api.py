"""Vectorized entry points.

Every function takes a vector of strings (``None`` marks NA) plus
auxiliary parameter vectors, recycles them to a common length and
returns one result per index. An NA string yields ``[None]`` from the
``split_*`` functions and ``None`` from the ``locate_*`` functions.
"""

from __future__ import annotations

import logging
import warnings
from collections.abc import Callable
from typing import Any

from unisplit.assemble import Pieces, assemble, na_pieces
from unisplit.boundaries import BoundaryIterationAdapter, BoundaryKind, normalize_locale, parse_kind
from unisplit.config import SplitSettings, load_settings
from unisplit.errors import InvalidArgumentError
from unisplit.lines import scan_lines
from unisplit.ranges import ByteRange, OccurrenceList
from unisplit.recycling import SegmentationCursor
from unisplit.vectors import StringVector, integer_vector, logical_vector, string_vector

logger = logging.getLogger(__name__)


def _line_occurrences(
    strings: Any,
    n_max: Any,
    omit_empty: Any,
    settings: SplitSettings,
) -> list[OccurrenceList | None]:
    str_vec = StringVector.from_values(strings, "str")
    n_max_vec = integer_vector(n_max, "n_max")
    omit_vec = logical_vector(omit_empty, "omit_empty")
    cursor = SegmentationCursor.over(str_vec, n_max_vec, omit_vec, warn=settings.warn_on_recycling)

    def _at(i: int) -> OccurrenceList | None:
        j = cursor.index(i, 0)
        if str_vec.is_na(j):
            return None
        omit = omit_vec[cursor.index(i, 2)]
        # a missing omit_empty flag counts as set
        n_max_cur = n_max_vec[cursor.index(i, 1)]
        return scan_lines(str_vec.get(j), n_max_cur, True if omit is None else omit)

    results = [_at(i) for i in cursor]
    logger.debug("split %d elements into lines", len(results))
    return results


def _boundary_occurrences(
    strings: Any,
    boundary: Any,
    locale: str | None,
    settings: SplitSettings,
) -> list[OccurrenceList | None]:
    str_vec = StringVector.from_values(strings, "str")
    boundary_vec = string_vector(boundary, "boundary")
    kinds: tuple[BoundaryKind | None, ...] = tuple(
        None if name is None else parse_kind(name) for name in boundary_vec.values
    )
    loc = normalize_locale(locale, settings.locale)
    cursor = SegmentationCursor.over(str_vec, boundary_vec, warn=settings.warn_on_recycling)

    with BoundaryIterationAdapter(loc, backend=settings.backend) as adapter:
        results = [
            None
            if str_vec.is_na(cursor.index(i, 0)) or kinds[cursor.index(i, 1)] is None
            else adapter.scan(str_vec.get(cursor.index(i, 0)), kinds[cursor.index(i, 1)])
            for i in cursor
        ]
        logger.debug(
            "split %d elements at boundaries with %d segmenter build(s)", len(results), adapter.rebuilds
        )
    return results


def _finish(
    occurrences: list[OccurrenceList | None],
    render: Callable[[OccurrenceList], Any],
    na: Callable[[], Any],
) -> list[Any]:
    return [na() if occ is None else render(occ) for occ in occurrences]


def _ranges(occ: OccurrenceList) -> list[ByteRange]:
    return list(occ)


def split_lines(
    strings: Any,
    n_max: Any = -1,
    omit_empty: Any = False,
    *,
    settings: SplitSettings | None = None,
) -> list[Pieces]:
    """Split each string into text lines.

    ``n_max`` limits the number of pieces per string (negative means
    unbounded, ``0`` gives no pieces); the last piece keeps the rest of
    the string verbatim. ``omit_empty`` drops empty lines.
    """
    occurrences = _line_occurrences(strings, n_max, omit_empty, settings or load_settings())
    return _finish(occurrences, assemble, na_pieces)


def split_lines1(string: Any) -> Pieces:
    """Split a single string into text lines.

    Unlike :func:`split_lines`, a terminator at the very end of the
    string does not produce a trailing empty line.
    """
    vec = StringVector.from_values(string, "str")
    if len(vec) == 0:
        raise InvalidArgumentError("expected a string of length 1, got an empty vector", "str")
    if len(vec) > 1:
        warnings.warn("str: only the first element is used", stacklevel=2)
    if vec.is_na(0):
        return na_pieces()
    return assemble(scan_lines(vec.get(0), keep_trailing=False))


def locate_lines(
    strings: Any,
    n_max: Any = -1,
    omit_empty: Any = False,
    *,
    settings: SplitSettings | None = None,
) -> list[list[ByteRange] | None]:
    """Return the byte ranges :func:`split_lines` would extract."""
    occurrences = _line_occurrences(strings, n_max, omit_empty, settings or load_settings())
    return _finish(occurrences, _ranges, lambda: None)


def split_boundaries(
    strings: Any,
    boundary: Any = "word",
    locale: str | None = None,
    *,
    settings: SplitSettings | None = None,
) -> list[Pieces]:
    """Split each string at Unicode text boundaries.

    ``boundary`` is one of ``character``, ``line_break``, ``sentence`` or
    ``word`` (recycled against ``strings``). The pieces of a string are
    contiguous and concatenate back to it; a string without boundaries
    gives a single empty piece.
    """
    occurrences = _boundary_occurrences(strings, boundary, locale, settings or load_settings())
    return _finish(occurrences, assemble, na_pieces)


def locate_boundaries(
    strings: Any,
    boundary: Any = "word",
    locale: str | None = None,
    *,
    settings: SplitSettings | None = None,
) -> list[list[ByteRange] | None]:
    """Return the byte ranges :func:`split_boundaries` would extract."""
    occurrences = _boundary_occurrences(strings, boundary, locale, settings or load_settings())
    return _finish(occurrences, _ranges, lambda: None)


__all__ = [
    "locate_boundaries",
    "locate_lines",
    "split_boundaries",
    "split_lines",
    "split_lines1",
]
