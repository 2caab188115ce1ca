"""Comparison inputs and accumulated differences."""

from dataclasses import dataclass

from models.decoded_image import Codec, DecodedImage


@dataclass(frozen=True)
class ComparisonRequest:
    """Two decoded images and the codecs they came from."""

    image_a: DecodedImage
    image_b: DecodedImage
    codec_a: Codec
    codec_b: Codec

    @property
    def any_lossy(self) -> bool:
        return self.codec_a.is_lossy or self.codec_b.is_lossy

    @property
    def any_alpha_capable(self) -> bool:
        return self.codec_a.supports_alpha or self.codec_b.supports_alpha


@dataclass(frozen=True)
class AccumulatedDifference:
    """Sum of squared channel differences and how many samples fed it."""

    sum_squared_diff: int
    sample_count: int

    @property
    def mse(self) -> float:
        return self.sum_squared_diff / self.sample_count
