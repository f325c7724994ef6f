"""
Gradient Wash CLI - Tint an animated GIF with a color gradient over time

Usage:
    gradient-wash [options] <input> <output>

Examples:
    gradient-wash cat.gif cat_rainbow.gif                  # Default rainbow
    gradient-wash --gradient ff0000,0000ff in.gif out.gif  # Red to blue and back
    gradient-wash --loop_count 3 in.gif out.gif            # Stretch over 3 loops
    gradient-wash --preset fire torch.png torch.gif        # Animate a still
"""

import argparse
import logging
import sys
from typing import List, Optional

from . import default_thread_count, wash_animation
from .core import (
    ColorBlender, FormatRegistry, PresetManager, BLEND_WEIGHT, DEFAULT_PRESET, parse_gradient,
)
from .errors import CodecError, InvalidArgument, InvalidColorFormat
from .logging_setup import configure_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='gradient-wash',
        description="Tint every frame of an animation with a shifting color gradient",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s cat.gif out.gif                          # Rainbow wash
  %(prog)s --gradient ff0000,0000ff cat.gif out.gif # Custom gradient
  %(prog)s --loop_count 2 --threads 4 cat.gif out.gif
  %(prog)s --list-presets                           # Show named gradients
        """
    )

    parser.add_argument(
        'paths',
        nargs='*',
        metavar='PATH',
        help='Input image (GIF, PNG or JPEG) followed by output GIF'
    )

    parser.add_argument(
        '--threads',
        type=int,
        default=default_thread_count(),
        help='Number of worker threads (default: half the CPUs)'
    )

    parser.add_argument(
        '--gradient',
        type=str,
        default='',
        help='Comma separated hex colors without # (default: rainbow)'
    )

    parser.add_argument(
        '--loop_count', '--loop-count',
        dest='loop_count',
        type=int,
        default=1,
        help='Number of times to loop through the source frames (default: 1)'
    )

    parser.add_argument(
        '--preset',
        type=str,
        default=None,
        metavar='NAME',
        help='Use a named gradient preset (ignored when --gradient is given)'
    )

    parser.add_argument(
        '--list-presets',
        action='store_true',
        help='List available gradient presets and exit'
    )

    parser.add_argument(
        '--presets-dir',
        type=str,
        default=None,
        metavar='DIR',
        help='Directory of user preset YAML files (default: ~/.gradient-wash/presets)'
    )

    parser.add_argument(
        '--blend',
        type=float,
        default=BLEND_WEIGHT,
        help=f'Overlay share in each blended color, 0.0-1.0 (default: {BLEND_WEIGHT})'
    )

    parser.add_argument(
        '--no-gradient-loop',
        action='store_true',
        help='Run the gradient from first to last color without wrapping back'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Show debug logging and tracebacks'
    )

    return parser


def list_presets(manager: PresetManager) -> None:
    print("Available Gradient Presets:\n")
    for name in manager.list_all():
        preset = manager.get(name)
        print(f"  {name:<12} - {preset.description}")
        print(f"  {'':<12}   {','.join(preset.colors)}")
    print(f"\nTotal: {len(manager.list_all())} presets")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    if args.list_presets:
        list_presets(PresetManager(args.presets_dir))
        return 0

    if args.threads < 1:
        print("Thread count must be at least 1")
        return 1

    loop_gradient = not args.no_gradient_loop
    try:
        if args.gradient:
            colors = parse_gradient(args.gradient)
        else:
            # A user preset may redefine the default gradient
            name = args.preset or DEFAULT_PRESET
            manager = PresetManager(args.presets_dir)
            colors = manager.control_colors(name)
            loop_gradient = loop_gradient and manager.get(name).loop
    except (InvalidColorFormat, InvalidArgument) as e:
        print(e)
        return 1

    if args.loop_count < 1:
        print("Loop count must be at least 1")
        return 1

    try:
        ColorBlender(args.blend)
    except InvalidArgument as e:
        print(e)
        return 1

    if len(args.paths) != 2:
        print("Expected two positional arguments: input and output")
        return 1

    input_path, output_path = args.paths
    registry = FormatRegistry.with_defaults()

    try:
        animation = registry.decode(input_path)
    except CodecError as e:
        logger.debug("decode failed", exc_info=True)
        print(e)
        return 1
    except OSError as e:
        print(f"Error opening file: {e}")
        return 1

    print(f"Washing: {input_path} ({animation.frame_count} frames x {args.loop_count})")

    result = wash_animation(
        animation,
        gradient=colors,
        loop_count=args.loop_count,
        threads=args.threads,
        loop_gradient=loop_gradient,
        blend_weight=args.blend,
    )

    try:
        registry.encode(result, output_path)
    except CodecError as e:
        logger.debug("encode failed", exc_info=True)
        print(e)
        return 1
    except OSError as e:
        print(f"Error opening file: {e}")
        return 1

    print(f"Output: {output_path} ({result.frame_count} frames)")
    return 0


if __name__ == '__main__':
    sys.exit(main())
