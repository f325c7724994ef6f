"""
Color Blender - Mixes an overlay color into a palette entry in L*a*b*
"""

from .color import (
    ColorLike, DeviceColor, LabColor,
    clamp_to_visible_range, to_device, to_perceptual,
)
from ..errors import ColorConversionError, InvalidArgument


# Share of the overlay in the mix; 0.5 is an even midpoint
BLEND_WEIGHT = 0.5


class ColorBlender:
    """Blends one overlay color with one base color, respecting transparency"""

    def __init__(self, weight: float = BLEND_WEIGHT):
        if not 0.0 <= weight <= 1.0:
            raise InvalidArgument(f"Blend weight must be between 0 and 1, got {weight}")
        self.weight = weight

    def blend(self, overlay: LabColor, base: LabColor) -> LabColor:
        """Interpolate base toward overlay and clamp into the visible range"""
        return clamp_to_visible_range(base.lerp(overlay, self.weight))

    def blend_device(self, overlay: LabColor, color: ColorLike) -> DeviceColor:
        """
        Blend a device color with the overlay.

        Transparent entries, and entries with no perceptual equivalent, are
        returned untouched. Everything else comes back fully opaque.
        """
        original = DeviceColor(*color)
        if original.a == 0:
            return original

        try:
            base = to_perceptual(original)
        except ColorConversionError:
            return original

        return to_device(self.blend(overlay, base), alpha=255)
