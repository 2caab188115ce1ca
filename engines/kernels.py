"""Scalar accumulation kernels: sum of squared 8-bit channel differences."""

from dataclasses import dataclass
from typing import Callable

from engines.color_space import ycbcr_to_rgb_pixel
from models.decoded_image import DecodedImage


@dataclass(frozen=True)
class Kernel:
    """
    One implementation of the layout-specialized sums.

    ``sum_packed(a, b, has_alpha)`` handles two packed images of the same
    layout, ``sum_planar(a, b)`` two planar YCbCr images. Every
    implementation must return exactly the same integer for the same input.
    """

    name: str
    sum_packed: Callable[[DecodedImage, DecodedImage, bool], int]
    sum_planar: Callable[[DecodedImage, DecodedImage], int]


def sum_interleaved(buf_a: bytes, buf_b: bytes, channels: int, use_fourth: bool = False) -> int:
    """Per-pixel sum over interleaved buffers; the 4th channel counts only if use_fourth."""
    total = 0
    for i in range(0, len(buf_a), channels):
        dr = buf_a[i] - buf_b[i]
        dg = buf_a[i + 1] - buf_b[i + 1]
        db = buf_a[i + 2] - buf_b[i + 2]
        total += dr * dr + dg * dg + db * db
        if use_fourth:
            da = buf_a[i + 3] - buf_b[i + 3]
            total += da * da
    return total


def sum_generic(image_a: DecodedImage, image_b: DecodedImage, has_alpha: bool) -> int:
    """Works for any layout pair by reading every pixel through rgba_at."""
    total = 0
    for y in range(image_a.height):
        for x in range(image_a.width):
            r1, g1, b1, a1 = image_a.rgba_at(x, y)
            r2, g2, b2, a2 = image_b.rgba_at(x, y)

            dr = (r1 >> 8) - (r2 >> 8)
            dg = (g1 >> 8) - (g2 >> 8)
            db = (b1 >> 8) - (b2 >> 8)
            total += dr * dr + dg * dg + db * db

            if has_alpha:
                da = (a1 >> 8) - (a2 >> 8)
                total += da * da
    return total


def sum_packed(image_a: DecodedImage, image_b: DecodedImage, has_alpha: bool) -> int:
    """RGBA and NRGBA share this path; storage differs, the byte comparison does not."""
    return sum_interleaved(bytes(image_a.pix), bytes(image_b.pix), 4, has_alpha)


def sum_planar(image_a: DecodedImage, image_b: DecodedImage) -> int:
    """Convert each pixel to RGB before differencing; planar samples are not comparable directly."""
    total = 0
    width = image_a.width
    sxa, sya = image_a.subsampling
    sxb, syb = image_b.subsampling

    for y in range(image_a.height):
        ya = image_a.y[y].tolist()
        cba = image_a.cb[y // sya].tolist()
        cra = image_a.cr[y // sya].tolist()
        yb = image_b.y[y].tolist()
        cbb = image_b.cb[y // syb].tolist()
        crb = image_b.cr[y // syb].tolist()

        for x in range(width):
            r1, g1, b1 = ycbcr_to_rgb_pixel(ya[x], cba[x // sxa], cra[x // sxa])
            r2, g2, b2 = ycbcr_to_rgb_pixel(yb[x], cbb[x // sxb], crb[x // sxb])
            dr = r1 - r2
            dg = g1 - g2
            db = b1 - b2
            total += dr * dr + dg * dg + db * db
    return total


SCALAR_KERNEL = Kernel(name='scalar', sum_packed=sum_packed, sum_planar=sum_planar)
