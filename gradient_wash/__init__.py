"""
Gradient Wash - Tint every frame of an animation with a shifting color gradient
"""

import os
import logging
from pathlib import Path
from typing import Optional, Sequence, Union

from .core import (
    Animation, ControlColor, FormatRegistry, ColorBlender, FrameScheduler,
    Gradient, PaletteRemapper, RAINBOW, BLEND_WEIGHT, assemble, parse_gradient,
)
from .errors import (
    GradientWashError, InvalidColorFormat, InvalidArgument, CodecError,
)

__version__ = "0.1.0"
__all__ = [
    'wash',
    'wash_animation',
    'default_thread_count',
    'FormatRegistry',
    'GradientWashError',
    'InvalidColorFormat',
    'InvalidArgument',
    'CodecError',
]

logger = logging.getLogger(__name__)

GradientSpec = Union[str, Sequence[ControlColor], None]


def default_thread_count() -> int:
    """Half the available CPUs, at least one"""
    return max(1, (os.cpu_count() or 1) // 2)


def _validate(loop_count: int, threads: Optional[int]) -> int:
    if threads is None:
        threads = default_thread_count()
    if threads < 1:
        raise InvalidArgument("Thread count must be at least 1")
    if loop_count < 1:
        raise InvalidArgument("Loop count must be at least 1")
    return threads


def _control_colors(gradient: GradientSpec) -> list:
    if gradient is None:
        return list(RAINBOW)
    if isinstance(gradient, str):
        return parse_gradient(gradient)
    colors = list(gradient)
    if not colors:
        raise InvalidArgument("Gradient needs at least one color")
    return colors


def wash_animation(
    animation: Animation,
    gradient: GradientSpec = None,
    loop_count: int = 1,
    threads: Optional[int] = None,
    loop_gradient: bool = True,
    blend_weight: float = BLEND_WEIGHT,
) -> Animation:
    """
    Wash an in-memory animation.

    Args:
        animation: Decoded source animation
        gradient: Hex list ("ff0000,00ff00"), control colors, or None for rainbow
        loop_count: How many times the source frames repeat in the output
        threads: Worker thread count (default: half the CPUs)
        loop_gradient: Wrap the last gradient color back into the first
        blend_weight: Share of the overlay color in each blended entry (0-1)

    Returns:
        New Animation with frame_count * loop_count frames
    """
    threads = _validate(loop_count, threads)
    colors = _control_colors(gradient)
    blender = ColorBlender(blend_weight)

    frame_count = animation.frame_count * loop_count
    overlays = Gradient(colors, loop=loop_gradient).generate(frame_count)

    scheduler = FrameScheduler(threads, PaletteRemapper(blender))
    frames = scheduler.run(animation.frames, overlays)

    logger.debug("washed %d frame(s) with %d gradient color(s)", len(frames), len(colors))
    return assemble(animation, frames)


def wash(
    input_path: str | Path,
    output_path: str | Path = None,
    gradient: GradientSpec = None,
    loop_count: int = 1,
    threads: Optional[int] = None,
    loop_gradient: bool = True,
    blend_weight: float = BLEND_WEIGHT,
    registry: Optional[FormatRegistry] = None,
) -> Path:
    """
    Wash an image file and write the result as a GIF.

    Args:
        input_path: GIF, PNG or JPEG to read
        output_path: Where to write (default: <input>_washed.gif)
        registry: Format registry to use (default: GIF/PNG/JPEG)
        Other arguments as for wash_animation.

    Returns:
        Path of the written GIF
    """
    _validate(loop_count, threads)
    colors = _control_colors(gradient)
    ColorBlender(blend_weight)  # rejects a bad weight before any file is opened

    if output_path is None:
        input_path = Path(input_path)
        output_path = input_path.parent / f"{input_path.stem}_washed.gif"

    registry = registry or FormatRegistry.with_defaults()
    animation = registry.decode(input_path)

    result = wash_animation(
        animation,
        gradient=colors,
        loop_count=loop_count,
        threads=threads,
        loop_gradient=loop_gradient,
        blend_weight=blend_weight,
    )

    return registry.encode(result, output_path)
