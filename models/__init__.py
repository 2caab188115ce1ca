"""Data models for decoded images, comparison inputs and results."""

from .decoded_image import Codec, DecodedImage, PixelLayout
from .comparison import AccumulatedDifference, ComparisonRequest
from .comparison_result import ComparisonResult
from .compare_params import CompareParams

__all__ = [
    'Codec',
    'DecodedImage',
    'PixelLayout',
    'AccumulatedDifference',
    'ComparisonRequest',
    'ComparisonResult',
    'CompareParams',
]
