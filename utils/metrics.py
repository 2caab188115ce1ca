"""Timing and an independent PSNR reference."""

import math
import time

import numpy as np
from skimage.metrics import peak_signal_noise_ratio


def reference_psnr(original_rgb: np.ndarray, compared_rgb: np.ndarray) -> float:
    """PSNR from scikit-image over 8-bit RGB arrays, uncorrected."""
    if np.array_equal(original_rgb, compared_rgb):
        return math.inf
    return float(peak_signal_noise_ratio(original_rgb, compared_rgb, data_range=255))


def relative_error(value: float, reference: float) -> float:
    """Relative deviation from reference in percent."""
    if math.isinf(value) and math.isinf(reference):
        return 0.0
    if math.isinf(value) or math.isinf(reference):
        return math.inf
    return abs(value - reference) / abs(reference) * 100.0


class Timer:
    """Simple timer for decode/compute runtime."""

    def __init__(self):
        self.decode_time_ms = 0.0
        self.compute_time_ms = 0.0

    def measure_decode(self, func, *args, **kwargs):
        start = time.perf_counter()
        result = func(*args, **kwargs)
        self.decode_time_ms += (time.perf_counter() - start) * 1000.0
        return result

    def measure_compute(self, func, *args, **kwargs):
        start = time.perf_counter()
        result = func(*args, **kwargs)
        self.compute_time_ms += (time.perf_counter() - start) * 1000.0
        return result
