"""
Gradient Sequence Generator

Spreads control colors evenly along a path and samples one overlay color
per output frame. Interpolation happens in L*a*b*.

A looping gradient treats the path as a circle: the last control color
blends back into the first, and sampling at t=1 lands on t=0 again, so the
sequence can repeat seamlessly.
"""

from typing import List, Sequence

from .color import ControlColor, LabColor, control_to_perceptual
from ..errors import InvalidArgument


class Gradient:
    """A path through control colors, sampled over t in [0, 1]"""

    def __init__(self, colors: Sequence[ControlColor], loop: bool = True):
        if len(colors) == 0:
            raise InvalidArgument("Gradient needs at least one color")

        self.colors = list(colors)
        self.loop = loop
        self.anchors: List[LabColor] = [control_to_perceptual(c) for c in self.colors]

    @property
    def segment_count(self) -> int:
        if self.loop:
            return len(self.anchors)
        return len(self.anchors) - 1

    def sample(self, t: float) -> LabColor:
        """Color at position t along the path"""
        if len(self.anchors) == 1:
            return self.anchors[0]

        scaled_t = t * self.segment_count
        idx = int(scaled_t)
        local_t = scaled_t - idx

        if self.loop:
            idx %= len(self.anchors)
            c1 = self.anchors[idx]
            c2 = self.anchors[(idx + 1) % len(self.anchors)]
        else:
            if idx >= self.segment_count:
                return self.anchors[-1]
            c1 = self.anchors[idx]
            c2 = self.anchors[idx + 1]

        return c1.lerp(c2, local_t)

    def position(self, index: int, frame_count: int) -> float:
        """Parametric position of output slot index"""
        if self.loop:
            return index / frame_count
        if frame_count == 1:
            return 0.0
        return index / (frame_count - 1)

    def generate(self, frame_count: int) -> List[LabColor]:
        """One overlay color per output frame"""
        if frame_count < 1:
            raise InvalidArgument(f"Frame count must be at least 1, got {frame_count}")

        return [self.sample(self.position(i, frame_count)) for i in range(frame_count)]

    def __len__(self):
        return len(self.colors)


def generate(
    control_colors: Sequence[ControlColor],
    loop: bool,
    frame_count: int
) -> List[LabColor]:
    """Build the overlay color sequence for frame_count output frames"""
    return Gradient(control_colors, loop=loop).generate(frame_count)
