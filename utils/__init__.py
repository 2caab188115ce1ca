"""Shared utilities."""

from .metrics import Timer, reference_psnr, relative_error

__all__ = [
    'Timer',
    'reference_psnr',
    'relative_error',
]
