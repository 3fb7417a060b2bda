"""Turn occurrence lists into output substrings."""

from __future__ import annotations

from unisplit.ranges import OccurrenceList

Pieces = list[str | None]


def assemble(occurrences: OccurrenceList) -> Pieces:
    """Copy each range of ``occurrences`` out of its buffer, in order.

    Slices are taken through a ``memoryview`` so every piece is decoded
    straight from the source buffer with a single copy.
    """
    view = memoryview(occurrences.data)
    return [str(view[r.start : r.end], "utf-8") for r in occurrences]


def na_pieces() -> Pieces:
    """Placeholder for an NA element: one NA piece, not an empty list."""
    return [None]


__all__ = ["Pieces", "assemble", "na_pieces"]
