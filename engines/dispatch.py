"""Validation, kernel selection and layout dispatch."""

import logging
import os
from functools import lru_cache
from typing import Callable, Dict, Optional, Tuple

from engines.alpha import detect_alpha
from engines.errors import DimensionMismatch
from engines.kernels import SCALAR_KERNEL, Kernel, sum_generic
from engines.simd import SIMD_KERNEL, simd_available
from models.compare_params import CompareParams
from models.comparison import AccumulatedDifference, ComparisonRequest
from models.decoded_image import DecodedImage, PixelLayout
from utils.constants import KERNEL_CHOICES, KERNEL_ENV_VAR

LOG = logging.getLogger(__name__)


def validate_dimensions(image_a: DecodedImage, image_b: DecodedImage) -> None:
    if image_a.width != image_b.width or image_a.height != image_b.height:
        raise DimensionMismatch(image_a.size, image_b.size)


@lru_cache(maxsize=None)
def default_kernel() -> Kernel:
    """Kernel chosen once per process from PSNR_KERNEL and the CPU probe."""
    preference = os.getenv(KERNEL_ENV_VAR, 'auto').strip().lower()
    if preference not in KERNEL_CHOICES:
        LOG.warning("Ignoring %s=%r, expected one of %s", KERNEL_ENV_VAR, preference, KERNEL_CHOICES)
        preference = 'auto'
    if preference == 'auto':
        kernel = SIMD_KERNEL if simd_available() else SCALAR_KERNEL
    else:
        kernel = select_kernel(preference)
    LOG.debug("Default kernel: %s", kernel.name)
    return kernel


def select_kernel(preference: str = 'auto') -> Kernel:
    if preference == 'scalar':
        return SCALAR_KERNEL
    if preference == 'simd':
        return SIMD_KERNEL
    if preference == 'auto':
        return default_kernel()
    raise ValueError(f"Unknown kernel: {preference}")


def _packed(kernel: Kernel, a: DecodedImage, b: DecodedImage, has_alpha: bool) -> int:
    return kernel.sum_packed(a, b, has_alpha)


def _planar(kernel: Kernel, a: DecodedImage, b: DecodedImage, has_alpha: bool) -> int:
    return kernel.sum_planar(a, b)


# One handler per layout; pairs with different or unlisted layouts go generic
_LAYOUT_HANDLERS: Dict[PixelLayout, Tuple[str, Callable[[Kernel, DecodedImage, DecodedImage, bool], int]]] = {
    PixelLayout.RGBA: ('packed', _packed),
    PixelLayout.NRGBA: ('packed', _packed),
    PixelLayout.YCBCR: ('planar', _planar),
}


def accumulate(
    request: ComparisonRequest,
    kernel: Kernel,
    params: Optional[CompareParams] = None
) -> Tuple[AccumulatedDifference, bool, str]:
    """
    Sum squared differences for a request.

    Returns the accumulated difference, whether alpha participated, and
    the dispatch path taken ('packed', 'planar' or 'generic').
    """
    a, b = request.image_a, request.image_b
    validate_dimensions(a, b)

    has_alpha = False
    if request.any_alpha_capable:
        has_alpha = detect_alpha(a, b, params)
    channel_count = 4 if has_alpha else 3

    handler = _LAYOUT_HANDLERS.get(a.layout) if a.layout is b.layout else None
    if handler is None:
        path = 'generic'
        total = sum_generic(a, b, has_alpha)
    else:
        path, fn = handler
        total = fn(kernel, a, b, has_alpha)

    LOG.debug(
        "%s vs %s via %s/%s, alpha=%s, sum=%d",
        a.layout.value, b.layout.value, path, kernel.name, has_alpha, total
    )
    sample_count = a.width * a.height * channel_count
    return AccumulatedDifference(total, sample_count), has_alpha, path
