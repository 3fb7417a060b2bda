"""Exception and warning types raised by the segmentation engine."""

from __future__ import annotations


class UnisplitError(Exception):
    """Base class for all segmentation failures."""


class InvalidArgumentError(UnisplitError, ValueError):
    """Raised when a call argument cannot be used as given."""

    def __init__(self, message: str, argname: str | None = None) -> None:
        super().__init__(f"{argname}: {message}" if argname else message)
        self.argname = argname


class RecyclingError(InvalidArgumentError):
    """Raised when vector lengths cannot be recycled to a common length."""


class SegmenterConstructionError(UnisplitError, RuntimeError):
    """Raised when the external segmentation service refuses to build or bind."""


class RecyclingWarning(UserWarning):
    """Emitted when vectors of unequal but compatible length are recycled."""


__all__ = [
    "InvalidArgumentError",
    "RecyclingError",
    "RecyclingWarning",
    "SegmenterConstructionError",
    "UnisplitError",
]
