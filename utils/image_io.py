"""Image decoding: OpenCV for PNG, Pillow for JPEG."""

import io
import logging
from pathlib import Path
from typing import Tuple, Union

import cv2
import numpy as np
from PIL import Image

from engines.errors import DecodeFailure, IOFailure
from models.decoded_image import Codec, DecodedImage
from utils.constants import JPEG_SIGNATURE, PNG_SIGNATURE

LOG = logging.getLogger(__name__)

PathLike = Union[str, Path]


def sniff_codec(data: bytes) -> Codec:
    """Codec from the container signature."""
    if data.startswith(PNG_SIGNATURE):
        return Codec.PNG
    if data.startswith(JPEG_SIGNATURE):
        return Codec.JPEG
    raise DecodeFailure("unsupported image format (expected PNG or JPEG)")


def decode_png(data: bytes) -> DecodedImage:
    """
    Decode PNG bytes with OpenCV.

    8-bit truecolor maps to the packed RGBA layout, 8-bit truecolor with
    alpha to packed NRGBA (PNG stores straight alpha). Gray and 16-bit
    images keep their native depth in the generic layout.
    """
    try:
        arr = cv2.imdecode(np.frombuffer(data, dtype=np.uint8), cv2.IMREAD_UNCHANGED)
    except cv2.error as e:
        raise DecodeFailure(f"could not decode PNG data: {e}") from e
    if arr is None:
        raise DecodeFailure("could not decode PNG data")

    if arr.ndim == 3 and arr.dtype == np.uint8:
        if arr.shape[2] == 3:
            return DecodedImage.from_packed(cv2.cvtColor(arr, cv2.COLOR_BGR2RGBA))
        if arr.shape[2] == 4:
            return DecodedImage.from_packed(cv2.cvtColor(arr, cv2.COLOR_BGRA2RGBA), premultiplied=False)

    if arr.ndim == 3 and arr.shape[2] == 3:
        arr = cv2.cvtColor(arr, cv2.COLOR_BGR2RGB)
    elif arr.ndim == 3 and arr.shape[2] == 4:
        arr = cv2.cvtColor(arr, cv2.COLOR_BGRA2RGBA)
    return DecodedImage.from_array(arr)


def decode_jpeg(data: bytes) -> DecodedImage:
    """
    Decode JPEG bytes with Pillow, keeping the decoder's YCbCr output.

    Draft mode skips libjpeg's color conversion, so the planes are what
    the decoder reconstructed. Grayscale and CMYK files are generic.
    """
    try:
        img = Image.open(io.BytesIO(data))
        img.draft('YCbCr', img.size)
        img.load()
    except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as e:
        raise DecodeFailure(f"could not decode JPEG data: {e}") from e

    if img.mode == 'YCbCr':
        ycc = np.asarray(img)
        return DecodedImage.from_planes(
            np.ascontiguousarray(ycc[:, :, 0]),
            np.ascontiguousarray(ycc[:, :, 1]),
            np.ascontiguousarray(ycc[:, :, 2]),
        )
    if img.mode != 'L':
        img = img.convert('RGB')
    return DecodedImage.from_array(np.asarray(img))


def decode_image(data: bytes) -> Tuple[DecodedImage, Codec]:
    """Decode PNG or JPEG bytes into a DecodedImage plus its codec."""
    codec = sniff_codec(data)
    image = decode_png(data) if codec is Codec.PNG else decode_jpeg(data)
    LOG.debug("Decoded %s %dx%d as %s", codec.value, image.width, image.height, image.layout.value)
    return image, codec


def read_file(path: PathLike) -> bytes:
    """Read a whole file, raising IOFailure on any OS error."""
    try:
        return Path(path).read_bytes()
    except OSError as e:
        raise IOFailure(f"failed to read {path}: {e}") from e


def load_image(path: PathLike) -> np.ndarray:
    """Load image as RGB uint8."""
    img = cv2.imread(str(path))
    if img is None:
        raise DecodeFailure(f"Could not load image from {path}")
    return cv2.cvtColor(img, cv2.COLOR_BGR2RGB)
