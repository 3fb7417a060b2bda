"""Half-open byte ranges and the per-element occurrence list."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, NamedTuple


class ByteRange(NamedTuple):
    """Half-open ``[start, end)`` interval of byte offsets."""

    start: int
    end: int

    @property
    def size(self) -> int:
        return self.end - self.start


@dataclass
class OccurrenceList:
    """Ordered, non-overlapping ranges into one element's buffer.

    Ranges are only ever appended; closed ranges are never revisited.
    """

    data: bytes
    ranges: list[ByteRange] = field(default_factory=list)

    def append(self, start: int, end: int) -> None:
        if not 0 <= start <= end <= len(self.data):
            raise ValueError(f"range [{start}, {end}) outside buffer of {len(self.data)} bytes")
        if self.ranges and start < self.ranges[-1].end:
            raise ValueError(f"range [{start}, {end}) overlaps previous {self.ranges[-1]}")
        self.ranges.append(ByteRange(start, end))

    def __len__(self) -> int:
        return len(self.ranges)

    def __iter__(self) -> Iterator[ByteRange]:
        return iter(self.ranges)


__all__ = ["ByteRange", "OccurrenceList"]
