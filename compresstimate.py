#!/usr/bin/env python3
"""
Command-line front end for the compression ratio estimator.

Prints an estimated ratio (and optionally the exact one) for each path.
"""

import argparse
import logging
import sys
import time
from dataclasses import replace
from typing import List, Optional

from tqdm import tqdm

from base_classes import ConfidenceLevel
from compressors import UnknownCompressorError, get_compressor_registry
from compresstimator import Estimator, __version__
from estimator_configs import PRESETS, EstimatorConfig, get_preset

logger = logging.getLogger(__name__)


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="compresstimate",
        description="Estimate how well files compress without compressing all of them",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  compresstimate big.img                    # Estimate with 4KiB blocks, ±10% at 95%
  compresstimate --exhaustive *.log         # Compare estimates with the real ratio
  compresstimate -m 0.05 -c 99 disk.raw     # Tighter estimate
  compresstimate -a zstd -l 3 data.bin      # Estimate with zstd level 3
        """
    )

    parser.add_argument('paths', nargs='*', metavar='PATH',
                        help='Files to estimate')

    # Sampling options
    parser.add_argument('-p', '--preset', choices=sorted(PRESETS), default='default',
                        help='Start from a preset configuration (default: default)')
    parser.add_argument('-b', '--block-size', type=int,
                        help='Bytes per sampled block')
    parser.add_argument('-m', '--margin', type=float, dest='margin_of_error',
                        help='Margin of error as a fraction, e.g. 0.1 for 10%%')
    parser.add_argument('-c', '--confidence', type=int,
                        choices=[level.percent for level in ConfidenceLevel],
                        help='Confidence level in percent')

    # Compressor options
    parser.add_argument('-a', '--algorithm',
                        help='Compressor to estimate with (see --list-compressors)')
    parser.add_argument('-l', '--level', type=int,
                        help='Compression level for the chosen compressor')

    # Other options
    parser.add_argument('--exhaustive', action='store_true',
                        help='Also compress each file fully and print the real ratio')
    parser.add_argument('--list-compressors', action='store_true',
                        help='List available compressors and exit')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable verbose logging')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')

    args = parser.parse_args(argv)
    if not args.paths and not args.list_compressors:
        parser.error("at least one PATH is required")

    try:
        args.config = build_config(args)
    except (ValueError, UnknownCompressorError) as e:
        parser.error(str(e))
    return args


def build_config(args: argparse.Namespace) -> EstimatorConfig:
    """Apply command line overrides on top of the chosen preset."""
    config = get_preset(args.preset)
    overrides = {}
    if args.block_size is not None:
        overrides['block_size'] = args.block_size
    if args.margin_of_error is not None:
        overrides['margin_of_error'] = args.margin_of_error
    if args.confidence is not None:
        overrides['confidence'] = ConfidenceLevel.from_percent(args.confidence)
    if args.algorithm is not None:
        overrides['algorithm'] = args.algorithm
        if args.level is None:
            info = get_compressor_registry().get(args.algorithm)
            overrides['compression_level'] = info.compressor_class.DEFAULT_LEVEL
    if args.level is not None:
        overrides['compression_level'] = args.level
    config = replace(config, **overrides)
    # Reject a level the compressor cannot use before any file is opened
    get_compressor_registry().create(config.algorithm, config.compression_level)
    return config


def format_elapsed(seconds: float) -> str:
    """Render a duration the way a human would read it."""
    if seconds < 1e-3:
        return f"{seconds * 1e6:.2f}µs"
    if seconds < 1.0:
        return f"{seconds * 1e3:.2f}ms"
    return f"{seconds:.2f}s"


def list_compressors() -> None:
    for info in get_compressor_registry().available():
        level = info.compressor_class.DEFAULT_LEVEL
        print(f"{info.name:<10} {info.description} (default level {level}, {info.source})")


def estimate_path(estimator: Estimator, path: str, exhaustive: bool) -> str:
    """Estimate one path and return the line to print."""
    start = time.perf_counter()
    ratio = estimator.estimate_file(path)
    line = f"{path}\tEst ({format_elapsed(time.perf_counter() - start)}): {ratio:.2f}x"

    if exhaustive:
        start = time.perf_counter()
        actual = estimator.ground_truth_file(path)
        line += f"\tActual ({format_elapsed(time.perf_counter() - start)}): {actual:.2f}x"
    return line


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_arguments(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    if args.list_compressors:
        list_compressors()
        return 0

    estimator = Estimator(args.config)
    logger.info(f"Estimating with {args.config}")

    failures = 0
    with tqdm(total=len(args.paths), desc="Estimating", unit="files",
              file=sys.stderr, disable=len(args.paths) < 2) as pbar:
        for path in args.paths:
            try:
                tqdm.write(estimate_path(estimator, path, args.exhaustive))
            except OSError as e:
                failures += 1
                tqdm.write(f"{path}\tError: {e}")
            pbar.update(1)

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
