"""Explicit line-boundary classifier.

Lines are delimited by any Unicode newline convention: ``CR``, ``LF``,
``CRLF`` (one terminator), ``NEL``, ``VT``, ``FF``, ``LS`` and ``PS``.
The scan works on the raw UTF-8 buffer. Every terminator is a complete
UTF-8 sequence and UTF-8 is self-synchronizing, so a byte pattern never
matches inside another code point of valid input.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

from unisplit.ranges import OccurrenceList

TERMINATORS: dict[str, bytes] = {
    "CRLF": b"\r\n",
    "CR": b"\r",
    "LF": b"\n",
    "VT": b"\x0b",
    "FF": b"\x0c",
    "NEL": "\u0085".encode("utf-8"),
    "LS": "\u2028".encode("utf-8"),
    "PS": "\u2029".encode("utf-8"),
}

# CRLF first so that CR never matches on its own when LF follows.
_TERMINATOR_RE = re.compile(b"|".join(re.escape(t) for t in TERMINATORS.values()))


@dataclass
class _LineAccumulator:
    """The line currently being accumulated plus the lines closed so far."""

    occurrences: OccurrenceList
    n_max: float
    omit_empty: bool
    start: int = 0
    pieces: int = 1

    def full(self) -> bool:
        return self.pieces >= self.n_max

    def close(self, term_start: int, term_end: int) -> None:
        """Close the open line just before a terminator, open one after it."""
        if self.omit_empty and term_start == self.start:
            # empty line: slide the open line past the terminator instead
            self.start = term_end
            return
        self.occurrences.append(self.start, term_start)
        self.start = term_end
        self.pieces += 1

    def flush(self, keep_trailing: bool) -> OccurrenceList:
        end = len(self.occurrences.data)
        if not keep_trailing and self.start == end and self.occurrences:
            return self.occurrences
        if self.omit_empty and self.start == end:
            return self.occurrences
        self.occurrences.append(self.start, end)
        return self.occurrences


def scan_lines(
    data: bytes,
    n_max: int | None = -1,
    omit_empty: bool = False,
    *,
    keep_trailing: bool = True,
) -> OccurrenceList:
    """Return the line ranges of ``data``.

    ``n_max`` caps the number of lines; negative or ``None`` is unbounded
    and ``0`` returns no lines without scanning. Once the cap is reached
    the last line runs verbatim to the end of the buffer, further
    terminators included. With ``omit_empty`` consecutive terminators do
    not produce empty lines. With ``keep_trailing=False`` a terminator
    that ends the buffer does not open a final empty line.
    """
    occurrences = OccurrenceList(data)
    if n_max == 0:
        return occurrences
    acc = _LineAccumulator(
        occurrences,
        math.inf if n_max is None or n_max < 0 else n_max,
        omit_empty,
    )
    for match in _TERMINATOR_RE.finditer(data):
        if acc.full():
            break
        acc.close(match.start(), match.end())
    return acc.flush(keep_trailing)


__all__ = ["TERMINATORS", "scan_lines"]
