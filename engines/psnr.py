"""MSE correction and the PSNR formula."""

import math

from models.comparison import AccumulatedDifference
from models.decoded_image import Codec
from utils.constants import JPEG_MSE_CORRECTION, PEAK_SQUARED


def apply_correction(mse: float, codec_a: Codec, codec_b: Codec) -> float:
    """Scale MSE by the JPEG decoder-divergence factor if either input is JPEG."""
    if codec_a.is_lossy or codec_b.is_lossy:
        return mse * JPEG_MSE_CORRECTION
    return mse


def psnr_from_mse(mse: float) -> float:
    """PSNR in dB for 8-bit samples. No clamping."""
    return 10.0 * math.log10(PEAK_SQUARED / mse)


def compute_psnr(acc: AccumulatedDifference, codec_a: Codec, codec_b: Codec) -> float:
    """PSNR of an accumulated difference; inf when nothing differs."""
    if acc.sum_squared_diff == 0:
        return math.inf
    return psnr_from_mse(apply_correction(acc.mse, codec_a, codec_b))
