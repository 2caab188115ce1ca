"""Comparison result with diagnostics."""

import math
from dataclasses import dataclass

from models.decoded_image import Codec


@dataclass
class ComparisonResult:
    """Result of one PSNR comparison."""

    psnr: float

    # Error terms
    mse: float
    raw_mse: float
    sum_squared_diff: int
    sample_count: int
    channel_count: int
    has_alpha: bool
    corrected: bool

    # Path taken
    kernel: str
    path: str
    width: int
    height: int
    codec_a: Codec
    codec_b: Codec

    # Runtime
    decode_time_ms: float = 0.0
    compute_time_ms: float = 0.0

    @property
    def identical(self) -> bool:
        return math.isinf(self.psnr)
