"""Errors raised by PSNR comparisons."""

from typing import Tuple


class PSNRError(Exception):
    """Base class for comparison failures."""


class DecodeFailure(PSNRError, ValueError):
    """An input is not a well-formed PNG or JPEG image."""


class DimensionMismatch(PSNRError, ValueError):
    """The two images differ in width or height."""

    def __init__(self, size_a: Tuple[int, int], size_b: Tuple[int, int]):
        self.size_a = size_a
        self.size_b = size_b
        super().__init__(
            f"images have different dimensions: {size_a[0]}x{size_a[1]} vs {size_b[0]}x{size_b[1]}"
        )


class IOFailure(PSNRError, OSError):
    """An input file could not be read."""
