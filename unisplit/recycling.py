"""Common iteration length for a main vector and its parameter vectors."""

from __future__ import annotations

import logging
import warnings
from collections.abc import Iterator, Sized
from dataclasses import dataclass

from unisplit.errors import RecyclingError, RecyclingWarning

logger = logging.getLogger(__name__)


def recycling_length(*lengths: int, warn: bool = False) -> int:
    """Return the iteration length for vectors of the given ``lengths``.

    Any zero-length vector makes the result empty. Otherwise the longest
    length wins and every other length must divide it evenly.
    """
    if not lengths or any(n <= 0 for n in lengths):
        return 0
    longest = max(lengths)
    bad = sorted({n for n in lengths if longest % n})
    if bad:
        raise RecyclingError(
            f"longer object length {longest} is not a multiple of shorter object length {bad[0]}"
        )
    if warn and len(set(lengths)) > 1:
        warnings.warn(
            f"recycling vectors of lengths {list(lengths)} to length {longest}",
            RecyclingWarning,
            stacklevel=5,
        )
    return longest


@dataclass(frozen=True)
class SegmentationCursor:
    """Shared iteration index over vectors recycled to ``length``."""

    length: int
    sizes: tuple[int, ...]

    @classmethod
    def over(cls, *vectors: Sized, warn: bool = False) -> SegmentationCursor:
        sizes = tuple(len(v) for v in vectors)
        length = recycling_length(*sizes, warn=warn)
        logger.debug("recycling %s -> %d", sizes, length)
        return cls(length, sizes)

    def __iter__(self) -> Iterator[int]:
        return iter(range(self.length))

    def __len__(self) -> int:
        return self.length

    def index(self, i: int, which: int) -> int:
        """Map shared index ``i`` onto vector number ``which``."""
        return i % self.sizes[which]


__all__ = ["SegmentationCursor", "recycling_length"]
