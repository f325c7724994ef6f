"""
Gradient Wash - Core
"""

from .color import (
    DeviceColor, ControlColor, LabColor, RAINBOW,
    to_perceptual, control_to_perceptual, to_device,
    clamp_to_visible_range, in_gamut, parse_hex, parse_gradient,
)
from .blend import ColorBlender, BLEND_WEIGHT
from .gradient import Gradient, generate
from .parser import Frame, Animation, AnimationParser
from .exporter import AnimationExporter
from .registry import FormatRegistry, ImageFormat
from .remap import PaletteRemapper
from .scheduler import FrameScheduler, partition
from .assembler import assemble, cycle
from .presets import (
    GradientPreset, PresetManager, BUILTIN_PRESETS, DEFAULT_PRESET,
)

__all__ = [
    # Colors
    'DeviceColor', 'ControlColor', 'LabColor', 'RAINBOW',
    'to_perceptual', 'control_to_perceptual', 'to_device',
    'clamp_to_visible_range', 'in_gamut', 'parse_hex', 'parse_gradient',
    # Blending & gradients
    'ColorBlender', 'BLEND_WEIGHT',
    'Gradient', 'generate',
    # Frames & codecs
    'Frame', 'Animation', 'AnimationParser', 'AnimationExporter',
    'FormatRegistry', 'ImageFormat',
    # Processing
    'PaletteRemapper', 'FrameScheduler', 'partition',
    'assemble', 'cycle',
    # Presets
    'GradientPreset', 'PresetManager', 'BUILTIN_PRESETS', 'DEFAULT_PRESET',
]
