# Pointillist Command Line
"""
Turns any GIF into a pointillist style GIF.

Usage:
    pointillist -i input.gif -o output.gif

    # Bigger blocks, tighter circles, slower playback
    pointillist -i input.gif -o output.gif --block-size 12 --padding 1 --radius 6 --delay 8

    # White dots on transparent background, sized by brightness
    pointillist -i in.gif -o out.gif --metric brightness --dot-color "#ffffff"

    # Also available as a module
    python -m pointillist -i input.gif -o output.gif
"""

from __future__ import annotations

import argparse
import logging
import sys

from . import __version__
from .aggregate import DETAIL_METRICS
from .config import PointillistConfig, parse_color
from .errors import InvalidParameter, PointillistError
from .gif import read_gif, write_gif
from .radius import RADIUS_CURVES
from .sequence import SequenceAssembler

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INVALID_PARAMETER = 2


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    defaults = PointillistConfig()
    parser = argparse.ArgumentParser(
        prog='pointillist',
        description='Turns any gif into a pointillist style gif.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s -i in.gif -o out.gif                  # Default 8px blocks
  %(prog)s -i in.gif -o out.gif -b 12 -r 6       # Coarser grid, smaller dots
  %(prog)s -i in.gif -o out.gif --metric variance --curve sqrt
"""
    )
    parser.add_argument(
        '--in-path', '-i',
        required=True,
        help='Path to the input GIF file'
    )
    parser.add_argument(
        '--out-path', '-o',
        required=True,
        help='Path to the output GIF file'
    )
    parser.add_argument(
        '--block-size', '-b',
        type=int,
        default=defaults.block_size,
        help=f'Size of the blocks to cluster pixels into (default: {defaults.block_size})'
    )
    parser.add_argument(
        '--padding', '-p',
        type=int,
        default=defaults.padding,
        help=f'How much padding to add between the circles (default: {defaults.padding})'
    )
    parser.add_argument(
        '--radius', '-r',
        type=int,
        default=defaults.max_radius,
        help=f'Maximum radius of the circles (default: {defaults.max_radius})'
    )
    parser.add_argument(
        '--delay', '-d',
        type=int,
        default=defaults.output_delay,
        help=f'Delay of the frames in the output GIF, in 1/100 s (default: {defaults.output_delay})'
    )
    parser.add_argument(
        '--metric',
        choices=sorted(DETAIL_METRICS),
        default=defaults.detail_metric,
        help=f'Block statistic that sizes the circles (default: {defaults.detail_metric})'
    )
    parser.add_argument(
        '--curve',
        choices=sorted(RADIUS_CURVES),
        default=defaults.radius_curve,
        help=f'Mapping from statistic to radius (default: {defaults.radius_curve})'
    )
    parser.add_argument(
        '--background',
        type=parse_color,
        default=defaults.background,
        help='Canvas color, e.g. "#000000" or "0,0,0,0" (default: transparent)'
    )
    parser.add_argument(
        '--dot-color',
        type=parse_color,
        default=None,
        help='Draw all circles in this color instead of the block colors'
    )
    parser.add_argument(
        '--workers',
        type=int,
        default=None,
        help='Number of frames transformed in parallel (default: CPU count)'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='count',
        default=0,
        help='Increase log output (-v info, -vv debug)'
    )
    parser.add_argument(
        '--version', '-V',
        action='version',
        version=f'%(prog)s {__version__}'
    )
    return parser


def config_from_args(args: argparse.Namespace) -> PointillistConfig:
    """Build and validate the configuration from parsed arguments.

    :raises InvalidParameter: If any value is invalid
    """
    return PointillistConfig(
        block_size=args.block_size,
        padding=args.padding,
        max_radius=args.radius,
        output_delay=args.delay,
        background=args.background,
        dot_color=args.dot_color,
        detail_metric=args.metric,
        radius_curve=args.curve,
    ).validate()


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format='%(levelname)s %(name)s: %(message)s')


def main(argv: list[str] | None = None) -> int:
    """CLI entry point.

    :returns: Process exit code
    """
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    try:
        config = config_from_args(args)
        if args.workers is not None and args.workers <= 0:
            raise InvalidParameter(f"workers must be positive, got {args.workers}")
    except InvalidParameter as e:
        logger.error(f"Invalid configuration: {e}")
        return EXIT_INVALID_PARAMETER

    try:
        frames = read_gif(args.in_path)
        with SequenceAssembler(config, num_workers=args.workers) as assembler:
            result = assembler.process_all(frames)
            logger.info(assembler.get_metrics().summary())
        write_gif(args.out_path, result, loop=config.loop)
    except PointillistError as e:
        logger.error(str(e))
        return EXIT_FAILURE

    print(f'Wrote {len(result)} frames to {args.out_path}')
    return EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
