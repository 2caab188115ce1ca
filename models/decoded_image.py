"""Normalized view over a decoded image."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

import numpy as np

from engines.color_space import ycbcr_to_rgb_pixel
from utils.constants import OPAQUE_16, SUBSAMPLING_RATIOS


class PixelLayout(Enum):
    """Native memory layout of a decoded image."""

    RGBA = 'rgba'
    NRGBA = 'nrgba'
    YCBCR = 'ycbcr'
    GENERIC = 'generic'


class Codec(Enum):
    """Container family an image was decoded from."""

    JPEG = 'jpeg'
    PNG = 'png'

    @property
    def is_lossy(self) -> bool:
        return self is Codec.JPEG

    @property
    def supports_alpha(self) -> bool:
        return self is Codec.PNG


@dataclass(frozen=True, eq=False)
class DecodedImage:
    """
    Decoded pixels in one of three storage forms.

    Packed layouts keep ``pix``, a flat uint8 buffer of width*height*4
    interleaved bytes. The planar layout keeps ``y``, ``cb`` and ``cr``
    planes plus the ``(sx, sy)`` chroma subsampling factors. The generic
    layout keeps ``samples``, an (H, W) or (H, W, C) uint8/uint16 array.
    """

    width: int
    height: int
    layout: PixelLayout
    pix: Optional[np.ndarray] = None
    y: Optional[np.ndarray] = None
    cb: Optional[np.ndarray] = None
    cr: Optional[np.ndarray] = None
    subsampling: Tuple[int, int] = (1, 1)
    samples: Optional[np.ndarray] = None

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Image dimensions must be positive, got {self.width}x{self.height}")

    @classmethod
    def from_packed(cls, pixels: np.ndarray, premultiplied: bool = True) -> 'DecodedImage':
        """Wrap an (H, W, 4) uint8 RGBA array as a packed image."""
        pixels = np.asarray(pixels)
        if pixels.ndim != 3 or pixels.shape[2] != 4 or pixels.dtype != np.uint8:
            raise ValueError(f"Packed pixels must be (H, W, 4) uint8, got {pixels.shape} {pixels.dtype}")
        h, w = pixels.shape[:2]
        layout = PixelLayout.RGBA if premultiplied else PixelLayout.NRGBA
        pix = np.ascontiguousarray(pixels).reshape(-1)
        return cls(width=w, height=h, layout=layout, pix=pix)

    @classmethod
    def from_planes(
        cls,
        y: np.ndarray,
        cb: np.ndarray,
        cr: np.ndarray,
        subsampling: Tuple[int, int] = (1, 1),
        size: Optional[Tuple[int, int]] = None
    ) -> 'DecodedImage':
        """
        Wrap luma/chroma planes as a planar image.

        ``size`` is (width, height); it defaults to the luma plane shape so
        planes wider than the picture (row padding) can be passed with an
        explicit size.
        """
        if tuple(subsampling) not in SUBSAMPLING_RATIOS:
            raise ValueError(f"Unsupported chroma subsampling: {subsampling}")
        sx, sy = subsampling
        if size is None:
            h, w = y.shape
        else:
            w, h = size
        ch, cw = -(-h // sy), -(-w // sx)
        if y.shape[0] < h or y.shape[1] < w:
            raise ValueError(f"Luma plane {y.shape} smaller than image {w}x{h}")
        for name, plane in (('Cb', cb), ('Cr', cr)):
            if plane.shape[0] < ch or plane.shape[1] < cw:
                raise ValueError(f"{name} plane {plane.shape} smaller than required ({ch}, {cw})")
        return cls(
            width=w, height=h, layout=PixelLayout.YCBCR,
            y=np.asarray(y, dtype=np.uint8),
            cb=np.asarray(cb, dtype=np.uint8),
            cr=np.asarray(cr, dtype=np.uint8),
            subsampling=(sx, sy),
        )

    @classmethod
    def from_array(cls, samples: np.ndarray) -> 'DecodedImage':
        """Wrap any gray/RGB/RGBA uint8 or uint16 array as a generic image."""
        samples = np.asarray(samples)
        if samples.dtype not in (np.uint8, np.uint16):
            raise ValueError(f"Samples must be uint8 or uint16, got {samples.dtype}")
        if samples.ndim == 3 and not 1 <= samples.shape[2] <= 4:
            raise ValueError(f"Unsupported channel count: {samples.shape[2]}")
        if samples.ndim not in (2, 3):
            raise ValueError(f"Samples must be 2D or 3D, got shape {samples.shape}")
        h, w = samples.shape[:2]
        return cls(width=w, height=h, layout=PixelLayout.GENERIC, samples=samples)

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    @property
    def is_packed(self) -> bool:
        return self.layout in (PixelLayout.RGBA, PixelLayout.NRGBA)

    def rgba_at(self, x: int, y: int) -> Tuple[int, int, int, int]:
        """Channel values at (x, y) on a 16-bit scale, alpha not premultiplied."""
        if self.is_packed:
            i = (y * self.width + x) * 4
            r, g, b, a = self.pix[i:i + 4].tolist()
            return r * 0x101, g * 0x101, b * 0x101, a * 0x101

        if self.layout is PixelLayout.YCBCR:
            sx, sy = self.subsampling
            r, g, b = ycbcr_to_rgb_pixel(
                int(self.y[y, x]), int(self.cb[y // sy, x // sx]), int(self.cr[y // sy, x // sx])
            )
            return r * 0x101, g * 0x101, b * 0x101, OPAQUE_16

        value = self.samples[y, x]
        scale = 0x101 if self.samples.dtype == np.uint8 else 1
        channels = [int(v) * scale for v in np.atleast_1d(value)]
        if len(channels) == 1:
            g = channels[0]
            return g, g, g, OPAQUE_16
        if len(channels) == 2:
            g, a = channels
            return g, g, g, a
        if len(channels) == 3:
            return channels[0], channels[1], channels[2], OPAQUE_16
        return channels[0], channels[1], channels[2], channels[3]
