"""
Palette Remapper - Washes one frame's palette with one overlay color
"""

from typing import Dict, Optional

from .blend import ColorBlender
from .color import DeviceColor, LabColor
from .parser import Frame


class PaletteRemapper:
    """Applies a ColorBlender to every palette entry of a frame"""

    def __init__(self, blender: Optional[ColorBlender] = None):
        self.blender = blender or ColorBlender()

    def remap(self, source: Frame, overlay: LabColor) -> Frame:
        """
        New frame sharing the source pixels and geometry, with each palette
        entry blended toward the overlay. Entry order and count are kept.
        """
        # Palettes often repeat entries (padding, duplicate slots)
        seen: Dict[DeviceColor, DeviceColor] = {}
        palette = []
        for color in source.palette:
            if color not in seen:
                seen[color] = self.blender.blend_device(overlay, color)
            palette.append(seen[color])

        return source.with_palette(palette)
