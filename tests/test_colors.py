"""Unit tests for color conversion and the pastel transform."""
import pytest

from processor.colors import hsl_to_hex, is_pastel, make_pastel, rgb_to_hex
from processor.models import ExtractedColor


def make_color(hue=0.0, saturation=0.8, lightness=0.4, hex='#b81414'):
    """Create an ExtractedColor with sensible defaults."""
    return ExtractedColor(
        hex=hex,
        red=184,
        green=20,
        blue=20,
        hue=hue,
        saturation=saturation,
        lightness=lightness,
        intensity=0.5,
        area=0.6
    )


class TestHslToHex:
    """Test cases for hsl_to_hex."""

    @pytest.mark.parametrize('hue, expected', [
        (0.0, '#ff0000'),
        (1 / 3, '#00ff00'),
        (2 / 3, '#0000ff'),
        (1 / 6, '#ffff00'),
        (0.5, '#00ffff'),
        (5 / 6, '#ff00ff'),
    ])
    def test_primary_and_secondary_hues(self, hue, expected):
        """Test fully saturated mid-lightness colors."""
        assert hsl_to_hex(hue, 1.0, 0.5) == expected

    def test_black_and_white(self):
        """Test lightness extremes ignore hue and saturation."""
        assert hsl_to_hex(0.3, 1.0, 0.0) == '#000000'
        assert hsl_to_hex(0.3, 1.0, 1.0) == '#ffffff'

    def test_grey_is_zero_padded(self):
        """Test a desaturated dark color keeps six hex digits."""
        assert hsl_to_hex(0.0, 0.0, 0.02) == '#050505'

    def test_rounds_half_up(self):
        """Test channel rounding matches round-half-up."""
        # 0.5 * 255 = 127.5
        assert hsl_to_hex(0.0, 0.0, 0.5) == '#808080'

    def test_rgb_to_hex_lowercase(self):
        """Test hex formatting of RGB channels."""
        assert rgb_to_hex(171, 205, 239) == '#abcdef'
        assert rgb_to_hex(0, 10, 255) == '#000aff'


class TestMakePastel:
    """Test cases for the pastel transform."""

    @pytest.mark.parametrize('saturation, lightness', [
        (0.29, 0.5),
        (0.1, 0.1),
        (0.9, 0.76),
        (0.5, 0.95),
    ])
    def test_already_pastel_is_unchanged(self, saturation, lightness):
        """Test low-saturation or light colors are returned as-is."""
        color = make_color(saturation=saturation, lightness=lightness, hex='#123456')

        result = make_pastel(color)

        assert is_pastel(color)
        assert result is color
        assert result.hex == '#123456'

    def test_boundaries_are_not_pastel(self):
        """Test saturation of exactly 0.3 and lightness of 0.75 get transformed."""
        assert not is_pastel(make_color(saturation=0.3, lightness=0.75))

    def test_transform_desaturates_and_lightens(self):
        """Test saturation scales by 0.7 and lightness rises by 0.1."""
        color = make_color(hue=0.0, saturation=1.0, lightness=0.5)

        result = make_pastel(color)

        assert result.saturation == 1.0 * 0.7
        assert result.lightness == pytest.approx(0.6)
        assert result.hue == color.hue
        assert result.hex == hsl_to_hex(0.0, 0.7, 0.6)
        assert result.hex == '#e05252'

    def test_transform_keeps_other_fields(self):
        """Test RGB channels, intensity and area carry over."""
        color = make_color(saturation=0.6, lightness=0.4)

        result = make_pastel(color)

        assert (result.red, result.green, result.blue) == (184, 20, 20)
        assert result.intensity == color.intensity
        assert result.area == color.area
        # Source color is not mutated
        assert color.saturation == 0.6

    @pytest.mark.parametrize('saturation, lightness', [
        (0.5, 0.75),
        (0.9, 0.7),
        (0.3, 0.2),
        (1.0, 0.5),
    ])
    def test_transform_bounds(self, saturation, lightness):
        """Test lightness never exceeds 0.9 and saturation is exactly 0.7x."""
        result = make_pastel(make_color(saturation=saturation, lightness=lightness))

        assert result.lightness <= 0.9
        assert result.saturation == saturation * 0.7

    def test_lightness_step_at_threshold(self):
        """Test the lightest transformable color stays below the 0.9 cap."""
        result = make_pastel(make_color(saturation=0.5, lightness=0.75))

        assert result.lightness == pytest.approx(0.85)
