from __future__ import annotations

import re
import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from unisplit.config import SplitSettings  # noqa: E402
from unisplit.errors import SegmenterConstructionError  # noqa: E402
from unisplit.segmenters import DONE, BoundaryKind, register  # noqa: E402

FAILING_LOCALE = "xx_FAIL"
NO_SENTENCE_LOCALE = "xx_NOSENT"

_FAKE_PATTERNS = {
    BoundaryKind.CHARACTER: re.compile(r".", re.S),
    BoundaryKind.WORD: re.compile(r"\w+|\s+|[^\w\s]"),
    BoundaryKind.SENTENCE: re.compile(r"[^.!?]*[.!?]+\s*|[^.!?]+"),
    BoundaryKind.LINE_BREAK: re.compile(r"\S+\s*|\s+"),
}

FAKE_BUILDS: list[tuple[BoundaryKind, str | None]] = []


class FakeSegmenter:
    """Regex-driven stand-in for a break iterator, reporting byte offsets."""

    def __init__(self, kind: BoundaryKind, locale: str | None) -> None:
        if locale == FAILING_LOCALE:
            raise SegmenterConstructionError(f"no segmentation data for {locale}")
        if locale == NO_SENTENCE_LOCALE and kind is BoundaryKind.SENTENCE:
            raise SegmenterConstructionError(f"no sentence rules for {locale}")
        FAKE_BUILDS.append((kind, locale))
        self._pattern = _FAKE_PATTERNS[kind]
        self._bounds: Iterator[int] = iter(())

    def set_text(self, data: bytes) -> None:
        text = data.decode("utf-8")
        ends = [m.end() for m in self._pattern.finditer(text)]
        self._bounds = iter([len(text[:end].encode("utf-8")) for end in ends])

    def first(self) -> int:
        return 0

    def next(self) -> int:
        return next(self._bounds, DONE)


register("fake")(FakeSegmenter)


@pytest.fixture
def fake_builds() -> Iterator[list[tuple[BoundaryKind, str | None]]]:
    FAKE_BUILDS.clear()
    yield FAKE_BUILDS
    FAKE_BUILDS.clear()


@pytest.fixture
def fake_settings() -> SplitSettings:
    return SplitSettings(backend="fake")


@pytest.fixture
def failing_locale() -> str:
    return FAILING_LOCALE


@pytest.fixture
def no_sentence_locale() -> str:
    return NO_SENTENCE_LOCALE
