"""
Fast PSNR
PSNR between two PNG/JPEG images, calibrated against libjpeg-based tooling.
"""

import logging
import math
import sys

USAGE = """Usage: python main.py <image1> <image2> [options]

Options:
  --kernel auto|scalar|simd   accumulation kernel (default: auto)
  --reference                 also report scikit-image PSNR on the RGB data
  --verbose                   debug logging and timings
"""


def format_psnr(value: float) -> str:
    if math.isinf(value):
        return "inf dB (identical)"
    return f"{value:.2f} dB"


def parse_args(args):
    """Split argv into (paths, options)."""
    paths = []
    options = {'kernel': 'auto', 'reference': False, 'verbose': False}
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == '--kernel':
            if i + 1 >= len(args):
                raise ValueError("--kernel needs a value")
            options['kernel'] = args[i + 1]
            i += 2
            continue
        if arg == '--reference':
            options['reference'] = True
        elif arg == '--verbose':
            options['verbose'] = True
        elif arg.startswith('--'):
            raise ValueError(f"Unknown option: {arg}")
        else:
            paths.append(arg)
        i += 1
    if len(paths) != 2:
        raise ValueError("Expected exactly two image paths")
    return paths, options


def run_cli(argv=None) -> int:
    from engines.errors import PSNRError
    from engines.pipeline import compare_files
    from models.compare_params import CompareParams
    from utils.image_io import load_image
    from utils.metrics import reference_psnr, relative_error

    args = sys.argv[1:] if argv is None else argv

    if not args or args[0] in ('--help', '-h'):
        print(USAGE)
        return 0

    try:
        (path_a, path_b), options = parse_args(args)
        params = CompareParams(kernel=options['kernel'])
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        print(USAGE, file=sys.stderr)
        return 2

    logging.basicConfig(
        level=logging.DEBUG if options['verbose'] else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    try:
        result = compare_files(path_a, path_b, params)
    except PSNRError as e:
        logging.error("%s", e)
        return 1

    print(f"PSNR: {format_psnr(result.psnr)}")

    if options['verbose']:
        print(f"Size:      {result.width}x{result.height}")
        print(f"Codecs:    {result.codec_a.value} / {result.codec_b.value}")
        print(f"Path:      {result.path} ({result.kernel} kernel)")
        print(f"Channels:  {result.channel_count}")
        print(f"MSE:       {result.mse:.6f}" + (" (JPEG-corrected)" if result.corrected else ""))
        print(f"Time:      {result.decode_time_ms:.2f} ms decode, {result.compute_time_ms:.2f} ms compute")

    if options['reference']:
        try:
            ref = reference_psnr(load_image(path_a), load_image(path_b))
        except (PSNRError, ValueError) as e:
            logging.error("Reference PSNR failed: %s", e)
            return 1
        print(f"Reference: {format_psnr(ref)} (scikit-image, RGB, uncorrected)")
        print(f"Deviation: {relative_error(result.psnr, ref):.4f}%")

    return 0


def main():
    sys.exit(run_cli())


if __name__ == '__main__':
    main()
