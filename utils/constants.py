"""Numeric constants shared by the PSNR engine."""

# 255^2, the squared peak of an 8-bit sample
PEAK_SQUARED = 65025.0

# Empirical MSE scale for JPEG inputs. Fitted against libjpeg-based tooling,
# compensates for IDCT and YCbCr->RGB rounding differences between decoders.
JPEG_MSE_CORRECTION = 0.9005

# Alpha detection sampling grid
ALPHA_SAMPLE_STEP = 16
ALPHA_SAMPLE_STEP_SMALL = 4
ALPHA_SMALL_IMAGE_THRESHOLD = 64

OPAQUE_16 = 0xFFFF

# Fixed-point JFIF YCbCr -> RGB (16.16)
YCC_LUMA_SCALE = 0x10101
YCC_CR_TO_R = 91881
YCC_CB_TO_G = 22554
YCC_CR_TO_G = 46802
YCC_CB_TO_B = 116130

# Vector kernel geometry: pixels per lane row, pixels per batch.
# Batch height is LANE rows of squares <= 65025, so a uint32 lane holds
# at most (BATCH_PIXELS / LANE_PIXELS) * 65025 < 2**32.
LANE_PIXELS = 8
BATCH_PIXELS = 1 << 18
MAX_BATCH_ROWS = (2 ** 32 - 1) // 65025

# (sx, sy) chroma subsampling factors for planar images
SUBSAMPLING_RATIOS = {
    (1, 1): '4:4:4',
    (2, 1): '4:2:2',
    (2, 2): '4:2:0',
    (1, 2): '4:4:0',
    (4, 1): '4:1:1',
    (4, 2): '4:1:0',
}

PNG_SIGNATURE = b'\x89PNG\r\n\x1a\n'
JPEG_SIGNATURE = b'\xff\xd8\xff'

KERNEL_CHOICES = ('auto', 'scalar', 'simd')
KERNEL_ENV_VAR = 'PSNR_KERNEL'
