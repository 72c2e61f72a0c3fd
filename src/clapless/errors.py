"""Exception types raised by the sync pipeline."""

from __future__ import annotations


class ClaplessError(Exception):
    """Base class for all clapless errors."""


class InputValidationError(ClaplessError, ValueError):
    """Raised when an input signal or argument list is unusable."""


class SampleRateMismatchError(InputValidationError):
    """Raised when a local file's sample rate differs from the mixed file."""

    def __init__(self, expected: int, actual: int, index: int, path: str):
        self.expected = expected
        self.actual = actual
        self.index = index
        self.path = path
        super().__init__(
            f"sample rate mismatch: mixed ({expected} Hz) vs local {index} "
            f"{path} ({actual} Hz)"
        )


class OverlapError(ClaplessError):
    """Raised when coarse-aligned tracks share no usable common window."""


class SegmentBoundsError(ClaplessError, ValueError):
    """Raised when a segment [start, end) does not fit inside a signal."""

    def __init__(self, start: int, end: int, length: int):
        self.start = start
        self.end = end
        self.length = length
        super().__init__(
            f"invalid segment bounds: [{start}, {end}) for data length {length}"
        )


class OffsetDetectionError(ClaplessError):
    """Raised when coarse offset detection fails for one of the tracks."""

    def __init__(self, index: int, path: str, reason: str):
        self.index = index
        self.path = path
        super().__init__(f"offset detection failed for file {index} ({path}): {reason}")
