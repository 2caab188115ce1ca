"""Sparse-grid alpha presence detection."""

import logging
from typing import Optional

from models.compare_params import CompareParams
from models.decoded_image import DecodedImage
from utils.constants import OPAQUE_16

LOG = logging.getLogger(__name__)


def sample_step(width: int, height: int, params: Optional[CompareParams] = None) -> int:
    """Grid stride for alpha sampling; small images get a finer grid."""
    params = params or CompareParams()
    if width < params.alpha_small_threshold or height < params.alpha_small_threshold:
        return params.alpha_step_small
    return params.alpha_step


def detect_alpha(
    image_a: DecodedImage,
    image_b: DecodedImage,
    params: Optional[CompareParams] = None
) -> bool:
    """
    True if any sampled pixel is not fully opaque in either image.

    Only grid points are inspected, so alpha confined to pixels between
    grid points is not seen. Both images must share dimensions.
    """
    width, height = image_a.width, image_a.height
    step = sample_step(width, height, params)

    for y in range(0, height, step):
        for x in range(0, width, step):
            if image_a.rgba_at(x, y)[3] != OPAQUE_16 or image_b.rgba_at(x, y)[3] != OPAQUE_16:
                LOG.debug("Alpha found at (%d, %d) with step %d", x, y, step)
                return True
    return False
