"""
Animation Assembler - Rebuilds timing metadata for a washed frame list
"""

from typing import List, Sequence, TypeVar

from .parser import Animation, Frame

T = TypeVar('T')


def cycle(values: Sequence[T], length: int) -> List[T]:
    """Repeat values until length items: new[i] = old[i % len(old)]"""
    if not values:
        return []
    return [values[i % len(values)] for i in range(length)]


def assemble(source: Animation, frames: List[Frame]) -> Animation:
    """
    Wrap washed frames with the source's metadata stretched to fit.

    Delays and disposal codes repeat with the source frames. The background
    index is reset so the encoder works it out from the new palettes.
    """
    return Animation(
        frames=list(frames),
        delays=cycle(source.delays, len(frames)),
        disposals=cycle(source.disposals, len(frames)),
        width=source.width,
        height=source.height,
        loop=source.loop,
        background=0,
        format=source.format,
        source_path=source.source_path,
    )
