"""
Color Space Conversion

Device colors (8-bit sRGB palette entries with straight alpha) and
perceptual colors (CIE L*a*b*, D65) are separate types joined by
explicit conversions. Mixing in L*a*b* keeps hue transitions vivid where
plain RGB mixing goes muddy and gray.
"""

import numpy as np
from skimage.color import lab2rgb, rgb2lab
from dataclasses import dataclass
from typing import List, NamedTuple, Sequence, Union

from ..errors import ColorConversionError, InvalidColorFormat


# =============================================================================
# Color Types
# =============================================================================

class DeviceColor(NamedTuple):
    """Palette entry: RGBA 0-255, not premultiplied"""
    r: int
    g: int
    b: int
    a: int = 255


class ControlColor(NamedTuple):
    """Gradient anchor: RGB 0-1"""
    r: float
    g: float
    b: float

    @property
    def hex(self) -> str:
        return ''.join(f'{int(round(c * 255)):02x}' for c in self)


@dataclass(frozen=True)
class LabColor:
    """CIE L*a*b* color, L in 0-100"""
    l: float
    a: float
    b: float

    def as_array(self) -> np.ndarray:
        return np.array([self.l, self.a, self.b], dtype=np.float64)

    @classmethod
    def from_array(cls, values: np.ndarray) -> 'LabColor':
        return cls(float(values[0]), float(values[1]), float(values[2]))

    def lerp(self, other: 'LabColor', t: float) -> 'LabColor':
        """Linear interpolation toward other by t"""
        return LabColor(
            self.l + (other.l - self.l) * t,
            self.a + (other.a - self.a) * t,
            self.b + (other.b - self.b) * t,
        )


ColorLike = Union[DeviceColor, Sequence[int]]


# =============================================================================
# Constants
# =============================================================================

# Largest L*a*b* drift a color may show after a trip through clipped sRGB
# and still count as displayable
GAMUT_EPSILON = 1e-4
CLAMP_ITERATIONS = 32

RAINBOW = [
    ControlColor(1.0, 0.0, 0.0),
    ControlColor(1.0, 127.0 / 255.0, 0.0),
    ControlColor(1.0, 1.0, 0.0),
    ControlColor(0.0, 1.0, 0.0),
    ControlColor(0.0, 0.0, 1.0),
    ControlColor(139.0 / 255.0, 0.0, 1.0),
]


# =============================================================================
# Conversions
# =============================================================================

def _srgb_to_lab(rgb: np.ndarray) -> LabColor:
    # skimage works on images, so a single color travels as a 1x1 image
    lab = rgb2lab(np.asarray(rgb, dtype=np.float64).reshape(1, 1, 3))
    return LabColor.from_array(lab.reshape(3))


def _lab_to_srgb(lab: LabColor) -> np.ndarray:
    """sRGB 0-1, clipped into range by skimage"""
    return lab2rgb(lab.as_array().reshape(1, 1, 3)).reshape(3)


def to_perceptual(color: ColorLike) -> LabColor:
    """
    Convert a device color to L*a*b*.

    Raises ColorConversionError for fully transparent colors (their RGB
    carries no meaning) and for channels outside 0-255.
    """
    if len(color) == 3:
        r, g, b = color
        alpha = 255
    else:
        r, g, b, alpha = color

    if alpha == 0:
        raise ColorConversionError(f"Color {tuple(color)} is fully transparent")

    channels = np.array([r, g, b], dtype=np.float64)
    if np.any(channels < 0) or np.any(channels > 255) or not 0 <= alpha <= 255:
        raise ColorConversionError(f"Color {tuple(color)} is outside the 0-255 range")

    return _srgb_to_lab(channels / 255.0)


def control_to_perceptual(color: ControlColor) -> LabColor:
    """Convert a normalized control color to L*a*b*"""
    return _srgb_to_lab(np.clip(np.array(color, dtype=np.float64), 0.0, 1.0))


def to_device(lab: LabColor, alpha: int = 255) -> DeviceColor:
    """Convert L*a*b* back to an 8-bit device color"""
    r, g, b = (int(v) for v in np.round(_lab_to_srgb(lab) * 255))
    return DeviceColor(r, g, b, alpha)


def in_gamut(lab: LabColor) -> bool:
    """True if the color has an sRGB equivalent"""
    if not 0.0 <= lab.l <= 100.0:
        return False
    # Negative Z has no sRGB color; skimage would clip it with a warning
    if (lab.l + 16.0) / 116.0 - lab.b / 200.0 < 0.0:
        return False

    back = _srgb_to_lab(_lab_to_srgb(lab))
    drift = np.abs(back.as_array() - lab.as_array())
    return bool(np.all(drift <= GAMUT_EPSILON))


def clamp_to_visible_range(lab: LabColor) -> LabColor:
    """
    Project a color back into the sRGB gamut.

    Lightness is clamped to 0-100, then chroma is reduced at constant
    lightness until the color reaches the gamut boundary. Neutral grays are
    always in gamut, so the search has a valid lower bound.
    """
    l = min(max(lab.l, 0.0), 100.0)
    candidate = LabColor(l, lab.a, lab.b)
    if in_gamut(candidate):
        return candidate

    lo, hi = 0.0, 1.0
    for _ in range(CLAMP_ITERATIONS):
        mid = (lo + hi) / 2
        if in_gamut(LabColor(l, lab.a * mid, lab.b * mid)):
            lo = mid
        else:
            hi = mid

    return LabColor(l, lab.a * lo, lab.b * lo)


# =============================================================================
# Parsing
# =============================================================================

HEX_DIGITS = set('0123456789abcdefABCDEF')


def parse_hex(text: str) -> ControlColor:
    """Parse 'rrggbb' (no leading '#') into a control color"""
    if len(text) != 6 or not set(text) <= HEX_DIGITS:
        raise InvalidColorFormat(f"Invalid color: {text}")

    return ControlColor(
        int(text[0:2], 16) / 255.0,
        int(text[2:4], 16) / 255.0,
        int(text[4:6], 16) / 255.0,
    )


def parse_gradient(text: str) -> List[ControlColor]:
    """Parse a comma separated hex list; empty text gives the rainbow"""
    if not text:
        return list(RAINBOW)
    return [parse_hex(part) for part in text.split(',')]
