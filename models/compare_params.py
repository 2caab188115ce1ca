"""Comparison parameters."""

from dataclasses import dataclass
from typing import Literal

from utils.constants import (
    ALPHA_SAMPLE_STEP,
    ALPHA_SAMPLE_STEP_SMALL,
    ALPHA_SMALL_IMAGE_THRESHOLD,
    KERNEL_CHOICES,
)


@dataclass
class CompareParams:
    """Tunables for a PSNR comparison."""

    alpha_step: int = ALPHA_SAMPLE_STEP
    alpha_step_small: int = ALPHA_SAMPLE_STEP_SMALL
    alpha_small_threshold: int = ALPHA_SMALL_IMAGE_THRESHOLD
    kernel: Literal['auto', 'scalar', 'simd'] = 'auto'

    def __post_init__(self):
        if self.alpha_step < 1 or self.alpha_step_small < 1:
            raise ValueError(
                f"Alpha sampling steps must be >= 1, got {self.alpha_step} and {self.alpha_step_small}"
            )
        if self.alpha_small_threshold < 0:
            raise ValueError(f"Alpha threshold must be >= 0, got {self.alpha_small_threshold}")
        if self.kernel not in KERNEL_CHOICES:
            raise ValueError(f"Kernel must be one of {', '.join(KERNEL_CHOICES)}, got {self.kernel}")
