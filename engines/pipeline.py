"""Comparison pipeline: decode, accumulate, correct, convert to dB."""

import logging
from typing import Optional, Tuple

from engines.dispatch import accumulate, select_kernel
from engines.errors import DecodeFailure
from engines.psnr import apply_correction, compute_psnr
from models.compare_params import CompareParams
from models.comparison import ComparisonRequest
from models.comparison_result import ComparisonResult
from models.decoded_image import Codec, DecodedImage
from utils.image_io import PathLike, decode_image, read_file
from utils.metrics import Timer

LOG = logging.getLogger(__name__)


def _compare(request: ComparisonRequest, params: Optional[CompareParams], timer: Timer) -> ComparisonResult:
    params = params or CompareParams()
    kernel = select_kernel(params.kernel)

    acc, has_alpha, path = timer.measure_compute(accumulate, request, kernel, params)
    psnr = compute_psnr(acc, request.codec_a, request.codec_b)

    result = ComparisonResult(
        psnr=psnr,
        mse=apply_correction(acc.mse, request.codec_a, request.codec_b),
        raw_mse=acc.mse,
        sum_squared_diff=acc.sum_squared_diff,
        sample_count=acc.sample_count,
        channel_count=4 if has_alpha else 3,
        has_alpha=has_alpha,
        corrected=request.any_lossy,
        kernel=kernel.name,
        path=path,
        width=request.image_a.width,
        height=request.image_a.height,
        codec_a=request.codec_a,
        codec_b=request.codec_b,
        decode_time_ms=timer.decode_time_ms,
        compute_time_ms=timer.compute_time_ms,
    )
    LOG.debug("PSNR %.6f dB (%s, %.2f ms)", psnr, path, timer.compute_time_ms)
    return result


def compare_images(request: ComparisonRequest, params: Optional[CompareParams] = None) -> ComparisonResult:
    """Compare two already decoded images."""
    return _compare(request, params, Timer())


def _decode(timer: Timer, data: bytes, which: str) -> Tuple[DecodedImage, Codec]:
    try:
        return timer.measure_decode(decode_image, data)
    except DecodeFailure as e:
        raise DecodeFailure(f"failed to decode {which} image: {e}") from e


def compare_buffers(data_a: bytes, data_b: bytes, params: Optional[CompareParams] = None) -> ComparisonResult:
    """Compare two encoded PNG/JPEG buffers."""
    timer = Timer()
    image_a, codec_a = _decode(timer, data_a, 'first')
    image_b, codec_b = _decode(timer, data_b, 'second')
    request = ComparisonRequest(image_a, image_b, codec_a, codec_b)
    return _compare(request, params, timer)


def compare_files(path_a: PathLike, path_b: PathLike, params: Optional[CompareParams] = None) -> ComparisonResult:
    """Compare two PNG/JPEG files."""
    return compare_buffers(read_file(path_a), read_file(path_b), params)


def compute(data_a: bytes, data_b: bytes) -> float:
    """PSNR in dB between two encoded images; inf if identical."""
    return compare_buffers(data_a, data_b).psnr


def compute_files(path_a: PathLike, path_b: PathLike) -> float:
    """PSNR in dB between two image files; inf if identical."""
    return compare_files(path_a, path_b).psnr
