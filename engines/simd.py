"""
Vectorized accumulation kernels.

Buffers are processed in batches of whole lane rows. Each row holds
LANE_PIXELS pixels; differences are widened to int16, squared in int32,
optionally masked in the 4th-channel slot, then reduced column-wise into
uint32 lanes. The batch height is capped so no lane can exceed 2**32 - 1.
Lanes are folded into the arbitrary-precision running total after every
batch, and pixels left over after the last full row go through the scalar
per-pixel formula.
"""

import logging
from functools import lru_cache
from typing import Dict

import numpy as np

from engines import kernels
from engines.color_space import expand_chroma, ycbcr_to_rgb_planes
from engines.kernels import Kernel
from models.decoded_image import DecodedImage
from utils.constants import BATCH_PIXELS, LANE_PIXELS, MAX_BATCH_ROWS

LOG = logging.getLogger(__name__)

SIMD_FEATURES = ('AVX512F', 'AVX2', 'SSE2', 'ASIMD', 'NEON', 'VSX', 'VX')


def _runtime_cpu_features() -> Dict[str, bool]:
    """numpy's dispatch table of CPU features detected at import time."""
    try:
        from numpy._core._multiarray_umath import __cpu_features__
    except ImportError:
        try:
            from numpy.core._multiarray_umath import __cpu_features__
        except ImportError:
            return {}
    return dict(__cpu_features__)


@lru_cache(maxsize=None)
def simd_available() -> bool:
    """True if numpy reports a usable vector instruction set on this CPU."""
    features = _runtime_cpu_features()
    found = [name for name in SIMD_FEATURES if features.get(name)]
    LOG.debug("Vector CPU features: %s", ', '.join(found) or 'none')
    return bool(found)


def _lane_mask(channels: int, use_fourth: bool) -> np.ndarray:
    mask = np.ones(LANE_PIXELS * channels, dtype=np.int32)
    if channels == 4 and not use_fourth:
        mask[3::4] = 0
    return mask


def sum_interleaved(
    buf_a: np.ndarray,
    buf_b: np.ndarray,
    channels: int,
    use_fourth: bool = False,
    batch_pixels: int = BATCH_PIXELS
) -> int:
    """Vectorized counterpart of kernels.sum_interleaved."""
    a = np.asarray(buf_a, dtype=np.uint8).reshape(-1)
    b = np.asarray(buf_b, dtype=np.uint8).reshape(-1)
    if a.size != b.size:
        raise ValueError(f"Buffer lengths differ: {a.size} vs {b.size}")

    row_width = LANE_PIXELS * channels
    body = (a.size // row_width) * row_width
    rows_per_batch = max(1, min(batch_pixels // LANE_PIXELS, MAX_BATCH_ROWS))
    batch_len = rows_per_batch * row_width
    mask = _lane_mask(channels, use_fourth)

    total = 0
    for start in range(0, body, batch_len):
        stop = min(start + batch_len, body)
        diff = a[start:stop].astype(np.int16) - b[start:stop].astype(np.int16)
        sq = diff.astype(np.int32)
        sq *= sq
        rows = (sq.reshape(-1, row_width) * mask).astype(np.uint32)
        lanes = rows.sum(axis=0, dtype=np.uint32)
        total += int(lanes.sum(dtype=np.uint64))

    if body < a.size:
        total += kernels.sum_interleaved(a[body:].tobytes(), b[body:].tobytes(), channels, use_fourth)
    return total


def sum_packed(
    image_a: DecodedImage,
    image_b: DecodedImage,
    has_alpha: bool,
    batch_pixels: int = BATCH_PIXELS
) -> int:
    return sum_interleaved(image_a.pix, image_b.pix, 4, has_alpha, batch_pixels)


def planar_to_rgb(image: DecodedImage) -> np.ndarray:
    """Full-resolution (H, W, 3) RGB of a planar image."""
    h, w = image.height, image.width
    cb = expand_chroma(image.cb, image.subsampling, (h, w))
    cr = expand_chroma(image.cr, image.subsampling, (h, w))
    return ycbcr_to_rgb_planes(image.y[:h, :w], cb, cr)


def sum_planar(image_a: DecodedImage, image_b: DecodedImage, batch_pixels: int = BATCH_PIXELS) -> int:
    return sum_interleaved(planar_to_rgb(image_a), planar_to_rgb(image_b), 3, False, batch_pixels)


SIMD_KERNEL = Kernel(name='simd', sum_packed=sum_packed, sum_planar=sum_planar)
