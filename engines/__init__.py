"""PSNR engines - pure computation, no I/O."""
