"""Tests for the PNG/JPEG decoder."""

import numpy as np
import pytest
from engines.errors import DecodeFailure, IOFailure
from models.decoded_image import Codec, DecodedImage, PixelLayout
from utils.image_io import decode_image, load_image, read_file, sniff_codec
from utils.test_images import encode_jpeg, encode_png, generate_gradient, generate_noise


def test_sniff_codec():
    assert sniff_codec(encode_png(generate_noise(4, 4, 3))) is Codec.PNG
    assert sniff_codec(encode_jpeg(generate_noise(8, 8, 3))) is Codec.JPEG
    with pytest.raises(DecodeFailure):
        sniff_codec(b"GIF89a....")
    with pytest.raises(DecodeFailure):
        sniff_codec(b"")


def test_png_rgb_decodes_packed_opaque():
    rgb = generate_noise(6, 9, 3, 1)
    image, codec = decode_image(encode_png(rgb))
    assert codec is Codec.PNG
    assert image.layout is PixelLayout.RGBA
    assert image.size == (9, 6)
    px = image.pix.reshape(6, 9, 4)
    assert np.array_equal(px[:, :, :3], rgb)
    assert np.all(px[:, :, 3] == 255)


def test_png_rgba_decodes_non_premultiplied():
    rgba = generate_noise(5, 7, 4, 2)
    image, _ = decode_image(encode_png(rgba))
    assert image.layout is PixelLayout.NRGBA
    assert np.array_equal(image.pix.reshape(5, 7, 4), rgba)


def test_png_gray_and_16_bit_are_generic():
    gray = generate_noise(4, 5, 1, 3)[:, :, 0]
    image, _ = decode_image(encode_png(gray))
    assert image.layout is PixelLayout.GENERIC
    assert image.rgba_at(2, 1)[:3] == (int(gray[1, 2]) * 0x101,) * 3

    wide = (generate_noise(4, 5, 3, 4).astype(np.uint16) * 257)
    image, _ = decode_image(encode_png(wide))
    assert image.layout is PixelLayout.GENERIC
    assert image.samples.dtype == np.uint16
    assert image.rgba_at(3, 2)[:3] == tuple(int(v) for v in wide[2, 3])


def test_jpeg_decodes_planar():
    image, codec = decode_image(encode_jpeg(generate_gradient(40, 24), quality=90))
    assert codec is Codec.JPEG
    assert image.layout is PixelLayout.YCBCR
    assert image.size == (40, 24)
    assert image.y.shape == (24, 40)


def test_jpeg_decoded_colors_are_close():
    rgb = generate_gradient(32, 32)
    image, _ = decode_image(encode_jpeg(rgb, quality=95, subsampling='4:4:4'))
    r, g, b, a = image.rgba_at(10, 10)
    assert a == 0xFFFF
    assert abs((r >> 8) - int(rgb[10, 10, 0])) <= 6
    assert abs((g >> 8) - int(rgb[10, 10, 1])) <= 6
    assert abs((b >> 8) - int(rgb[10, 10, 2])) <= 6


def test_corrupt_data_fails():
    with pytest.raises(DecodeFailure):
        decode_image(b"\x89PNG\r\n\x1a\n" + b"\x00" * 64)
    jpeg = encode_jpeg(generate_noise(64, 64, 3))
    with pytest.raises(DecodeFailure):
        decode_image(jpeg[:len(jpeg) // 2])


def test_read_file(tmp_path):
    path = tmp_path / "x.bin"
    path.write_bytes(b"abc")
    assert read_file(path) == b"abc"
    with pytest.raises(IOFailure):
        read_file(tmp_path / "missing.png")


def test_load_image_rgb(tmp_path):
    rgb = generate_noise(6, 6, 3, 8)
    path = tmp_path / "img.png"
    path.write_bytes(encode_png(rgb))
    assert np.array_equal(load_image(path), rgb)


def test_decoded_image_validation():
    with pytest.raises(ValueError):
        DecodedImage.from_packed(np.zeros((4, 4, 3), dtype=np.uint8))
    with pytest.raises(ValueError):
        DecodedImage.from_array(np.zeros((4, 4), dtype=np.float32))
    with pytest.raises(ValueError):
        y = np.zeros((4, 4), dtype=np.uint8)
        DecodedImage.from_planes(y, y, y, (3, 3))
    with pytest.raises(ValueError):
        y = np.zeros((4, 4), dtype=np.uint8)
        DecodedImage.from_planes(y, y[:1, :1], y[:1, :1], (2, 2))
