from .api import locate_boundaries, locate_lines, split_boundaries, split_lines, split_lines1
from .boundaries import BoundaryKind
from .errors import (
    InvalidArgumentError,
    RecyclingError,
    RecyclingWarning,
    SegmenterConstructionError,
    UnisplitError,
)
from .ranges import ByteRange

__all__ = [
    "BoundaryKind",
    "ByteRange",
    "InvalidArgumentError",
    "RecyclingError",
    "RecyclingWarning",
    "SegmenterConstructionError",
    "UnisplitError",
    "locate_boundaries",
    "locate_lines",
    "split_boundaries",
    "split_lines",
    "split_lines1",
]
