"""Tests for validation, kernel selection and layout dispatch."""

import numpy as np
import pytest
from engines.dispatch import accumulate, select_kernel, validate_dimensions
from engines.errors import DimensionMismatch
from engines.kernels import SCALAR_KERNEL
from engines.simd import SIMD_KERNEL
from models.comparison import ComparisonRequest
from models.decoded_image import Codec, DecodedImage, PixelLayout
from utils.test_images import generate_noise, make_planes


def _rgba(h, w, seed, alpha=255, premultiplied=True):
    px = generate_noise(h, w, 4, seed)
    px[:, :, 3] = alpha
    return DecodedImage.from_packed(px, premultiplied)


def _request(a, b, codec_a=Codec.PNG, codec_b=Codec.PNG):
    return ComparisonRequest(a, b, codec_a, codec_b)


def test_dimension_mismatch_message():
    a = _rgba(3, 4, 0)
    b = _rgba(4, 3, 1)
    with pytest.raises(DimensionMismatch) as exc:
        validate_dimensions(a, b)
    assert "4x3 vs 3x4" in str(exc.value)
    assert exc.value.size_a == (4, 3)
    assert exc.value.size_b == (3, 4)


def test_accumulate_validates_first():
    a = _rgba(3, 4, 0)
    b = DecodedImage.from_array(np.zeros((5, 5), dtype=np.uint8))
    with pytest.raises(DimensionMismatch):
        accumulate(_request(a, b), SCALAR_KERNEL)


def test_select_kernel():
    assert select_kernel('scalar') is SCALAR_KERNEL
    assert select_kernel('simd') is SIMD_KERNEL
    assert select_kernel('auto') in (SCALAR_KERNEL, SIMD_KERNEL)
    with pytest.raises(ValueError):
        select_kernel('gpu')


def _planar(h, w, seed, subsampling=(2, 2)):
    y, cb, cr = make_planes(generate_noise(h, w, 3, seed), subsampling)
    return DecodedImage.from_planes(y, cb, cr, subsampling)


@pytest.mark.parametrize("make_a,make_b,expected_path", [
    (lambda: _rgba(9, 11, 0), lambda: _rgba(9, 11, 1), 'packed'),
    (lambda: _rgba(9, 11, 0, premultiplied=False), lambda: _rgba(9, 11, 1, premultiplied=False), 'packed'),
    (lambda: _rgba(9, 11, 0), lambda: _rgba(9, 11, 1, premultiplied=False), 'generic'),
    (lambda: _planar(9, 11, 0), lambda: _planar(9, 11, 1), 'planar'),
    (lambda: _planar(9, 11, 0), lambda: _rgba(9, 11, 1), 'generic'),
    (lambda: DecodedImage.from_array(generate_noise(9, 11, 3, 0)),
     lambda: DecodedImage.from_array(generate_noise(9, 11, 3, 1)), 'generic'),
])
def test_dispatch_path(make_a, make_b, expected_path):
    a, b = make_a(), make_b()
    acc_scalar, _, path = accumulate(_request(a, b), SCALAR_KERNEL)
    acc_vector, _, _ = accumulate(_request(a, b), SIMD_KERNEL)
    assert path == expected_path
    assert acc_scalar == acc_vector
    assert acc_scalar.sum_squared_diff > 0


def test_mixed_packed_layouts_fall_back_to_generic_with_same_sum():
    a = _rgba(9, 11, 0)
    b = _rgba(9, 11, 1, premultiplied=False)
    b_same_layout = _rgba(9, 11, 1)
    generic, _, path = accumulate(_request(a, b), SCALAR_KERNEL)
    packed, _, _ = accumulate(_request(a, b_same_layout), SCALAR_KERNEL)
    assert path == 'generic'
    assert generic == packed


def test_alpha_counts_only_for_alpha_capable_codecs():
    a = _rgba(20, 20, 0, alpha=128, premultiplied=False)
    b = _rgba(20, 20, 1, alpha=128, premultiplied=False)

    acc, has_alpha, _ = accumulate(_request(a, b, Codec.PNG, Codec.PNG), SCALAR_KERNEL)
    assert has_alpha
    assert acc.sample_count == 20 * 20 * 4

    acc, has_alpha, _ = accumulate(_request(a, b, Codec.JPEG, Codec.JPEG), SCALAR_KERNEL)
    assert not has_alpha
    assert acc.sample_count == 20 * 20 * 3

    _, has_alpha, _ = accumulate(_request(a, b, Codec.JPEG, Codec.PNG), SCALAR_KERNEL)
    assert has_alpha


def test_opaque_rgba_matches_three_channel_comparison():
    """An opaque RGBA pair compared on 3 channels equals a plain RGB comparison."""
    rgb_a = generate_noise(21, 13, 3, 5)
    rgb_b = generate_noise(21, 13, 3, 6)
    opaque = np.full((21, 13, 1), 255, dtype=np.uint8)
    a = DecodedImage.from_packed(np.concatenate([rgb_a, opaque], axis=2), premultiplied=False)
    b = DecodedImage.from_packed(np.concatenate([rgb_b, opaque], axis=2), premultiplied=False)

    acc_rgba, has_alpha, _ = accumulate(_request(a, b), SIMD_KERNEL)
    acc_rgb, _, path = accumulate(
        _request(DecodedImage.from_array(rgb_a), DecodedImage.from_array(rgb_b)), SIMD_KERNEL
    )

    assert not has_alpha
    assert path == 'generic'
    assert acc_rgba == acc_rgb


def test_layouts_are_closed_set():
    assert {layout.value for layout in PixelLayout} == {'rgba', 'nrgba', 'ycbcr', 'generic'}
