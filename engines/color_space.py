"""Color space conversion and chroma resampling."""

import numpy as np
import cv2
from typing import Tuple

from utils.constants import (
    YCC_LUMA_SCALE,
    YCC_CR_TO_R,
    YCC_CB_TO_G,
    YCC_CR_TO_G,
    YCC_CB_TO_B,
)


def _clamp_16_16(v: int) -> int:
    """Drop the 16 fraction bits, saturating to [0, 255]."""
    if v < 0:
        return 0
    if v > 0xFFFFFF:
        return 255
    return v >> 16


def ycbcr_to_rgb_pixel(y: int, cb: int, cr: int) -> Tuple[int, int, int]:
    """JFIF YCbCr to RGB for one sample, 16.16 fixed point."""
    yy = y * YCC_LUMA_SCALE
    cb -= 128
    cr -= 128
    r = yy + YCC_CR_TO_R * cr
    g = yy - YCC_CB_TO_G * cb - YCC_CR_TO_G * cr
    b = yy + YCC_CB_TO_B * cb
    return _clamp_16_16(r), _clamp_16_16(g), _clamp_16_16(b)


def ycbcr_to_rgb_planes(y: np.ndarray, cb: np.ndarray, cr: np.ndarray) -> np.ndarray:
    """
    Vectorized JFIF YCbCr to RGB on full-resolution planes.

    Same integer arithmetic as ycbcr_to_rgb_pixel, so results are
    bit-identical. Returns (H, W, 3) uint8.
    """
    yy = y.astype(np.int32) * YCC_LUMA_SCALE
    cb1 = cb.astype(np.int32) - 128
    cr1 = cr.astype(np.int32) - 128
    r = yy + YCC_CR_TO_R * cr1
    g = yy - YCC_CB_TO_G * cb1 - YCC_CR_TO_G * cr1
    b = yy + YCC_CB_TO_B * cb1
    rgb = np.stack([r, g, b], axis=-1) >> 16
    return np.clip(rgb, 0, 255).astype(np.uint8)


def expand_chroma(plane: np.ndarray, subsampling: Tuple[int, int], shape: Tuple[int, int]) -> np.ndarray:
    """Replicate a subsampled chroma plane so pixel (x, y) reads plane[y // sy, x // sx]."""
    sx, sy = subsampling
    h, w = shape
    ch, cw = -(-h // sy), -(-w // sx)
    plane = plane[:ch, :cw]
    if sx == 1 and sy == 1:
        return plane
    return np.repeat(np.repeat(plane, sy, axis=0), sx, axis=1)[:h, :w]


def rgb_to_ycbcr(rgb: np.ndarray) -> np.ndarray:
    """RGB to YCbCr using ITU-R BT.601, rounded to uint8."""
    rgb = rgb.astype(np.float64)
    R, G, B = rgb[:, :, 0], rgb[:, :, 1], rgb[:, :, 2]
    Y = 0.299 * R + 0.587 * G + 0.114 * B
    Cb = -0.168736 * R - 0.331264 * G + 0.5 * B + 128.0
    Cr = 0.5 * R - 0.418688 * G - 0.081312 * B + 128.0
    ycbcr = np.stack([Y, Cb, Cr], axis=-1)
    return np.clip(np.round(ycbcr), 0, 255).astype(np.uint8)


def subsample_chroma(
    cb: np.ndarray,
    cr: np.ndarray,
    subsampling: Tuple[int, int]
) -> Tuple[np.ndarray, np.ndarray]:
    """Area-average chroma planes down by (sx, sy), rounding odd sizes up."""
    sx, sy = subsampling
    if sx == 1 and sy == 1:
        return cb.copy(), cr.copy()

    h, w = cb.shape
    size = (-(-w // sx), -(-h // sy))
    cb_sub = cv2.resize(np.ascontiguousarray(cb), size, interpolation=cv2.INTER_AREA)
    cr_sub = cv2.resize(np.ascontiguousarray(cr), size, interpolation=cv2.INTER_AREA)
    return cb_sub, cr_sub
