"""
Tests for device <-> L*a*b* conversion, gamut clamping and hex parsing.
"""

import pytest

from gradient_wash.core.color import (
    DeviceColor, ControlColor, LabColor, RAINBOW,
    to_perceptual, control_to_perceptual, to_device,
    clamp_to_visible_range, in_gamut, parse_hex, parse_gradient,
)
from gradient_wash.errors import ColorConversionError, InvalidColorFormat


class TestConversion:
    """Round trips and reference points."""

    @pytest.mark.parametrize("color", [
        (0, 0, 0, 255),
        (255, 255, 255, 255),
        (255, 0, 0, 255),
        (10, 200, 30, 255),
        (128, 64, 250, 255),
        (1, 2, 3, 255),
    ])
    def test_round_trip_is_exact(self, color):
        """In-gamut colors survive device -> Lab -> device unchanged."""
        assert to_device(to_perceptual(color)) == color

    def test_white_is_l100(self):
        lab = to_perceptual((255, 255, 255, 255))
        assert lab.l == pytest.approx(100.0, abs=1e-6)
        assert lab.a == pytest.approx(0.0, abs=0.01)
        assert lab.b == pytest.approx(0.0, abs=0.01)

    def test_red_reference(self):
        """sRGB red is roughly L=53, a=80, b=67."""
        lab = to_perceptual((255, 0, 0))
        assert lab.l == pytest.approx(53.24, abs=0.1)
        assert lab.a == pytest.approx(80.1, abs=0.3)
        assert lab.b == pytest.approx(67.2, abs=0.3)

    def test_rgb_tuple_defaults_to_opaque(self):
        assert to_perceptual((40, 50, 60)) == to_perceptual((40, 50, 60, 255))

    def test_transparent_color_fails(self):
        with pytest.raises(ColorConversionError):
            to_perceptual((10, 20, 30, 0))

    def test_out_of_range_channel_fails(self):
        with pytest.raises(ColorConversionError):
            to_perceptual(DeviceColor(300, 0, 0, 255))

    def test_to_device_alpha(self):
        color = to_device(to_perceptual((10, 20, 30)), alpha=17)
        assert color == DeviceColor(10, 20, 30, 17)

    def test_control_color_matches_device(self):
        assert control_to_perceptual(ControlColor(1.0, 0.0, 0.0)) == to_perceptual((255, 0, 0))


class TestClamp:
    """Projection back into the sRGB gamut."""

    def test_in_gamut_unchanged(self):
        lab = to_perceptual((100, 150, 200))
        assert clamp_to_visible_range(lab) == lab

    def test_high_chroma_pulled_in(self):
        lab = LabColor(50.0, 200.0, 0.0)
        assert not in_gamut(lab)

        clamped = clamp_to_visible_range(lab)
        assert in_gamut(clamped)
        assert clamped.l == 50.0
        assert 0.0 < clamped.a < 200.0
        assert clamped.b == 0.0

    def test_lightness_limits(self):
        assert clamp_to_visible_range(LabColor(130.0, 0.0, 0.0)).l == 100.0
        assert clamp_to_visible_range(LabColor(-5.0, 0.0, 0.0)).l == 0.0

    def test_negative_z_out_of_gamut(self):
        """Strong yellow at low lightness has no XYZ equivalent."""
        lab = LabColor(20.0, 0.0, 150.0)
        assert not in_gamut(lab)
        assert in_gamut(clamp_to_visible_range(lab))

    def test_clamped_color_converts(self):
        clamped = clamp_to_visible_range(LabColor(90.0, -150.0, 120.0))
        color = to_device(clamped)
        assert all(0 <= c <= 255 for c in color)


class TestParsing:
    """Hex strings and gradient lists."""

    def test_parse_hex(self):
        assert parse_hex("ff8000") == ControlColor(1.0, 128 / 255, 0.0)

    def test_parse_hex_uppercase(self):
        assert parse_hex("00FF00") == ControlColor(0.0, 1.0, 0.0)

    @pytest.mark.parametrize("text", ["", "fff", "#ff0000", "ff00000", "gg0000", "ff 000"])
    def test_invalid_hex(self, text):
        with pytest.raises(InvalidColorFormat, match="Invalid color"):
            parse_hex(text)

    def test_empty_gradient_is_rainbow(self):
        assert parse_gradient("") == RAINBOW
        assert len(RAINBOW) == 6

    def test_gradient_list(self):
        colors = parse_gradient("ff0000,0000ff")
        assert colors == [ControlColor(1.0, 0.0, 0.0), ControlColor(0.0, 0.0, 1.0)]

    def test_gradient_list_reports_bad_entry(self):
        with pytest.raises(InvalidColorFormat, match="Invalid color: nope"):
            parse_gradient("ff0000,nope")

    def test_control_color_hex(self):
        assert RAINBOW[5].hex == "8b00ff"
