"""Tests for colour conversion utilities."""

import itertools
import random

import pytest

from utils.colors import (
    compute_white_channels,
    format_color_frame,
    hex_to_rgb,
    hsl_to_rgb,
    rgb_to_hex,
    rgb_to_hsl,
)


class TestHex:
    """Tests for hex parsing and formatting."""

    def test_hex_to_rgb(self):
        assert hex_to_rgb("AABBCC") == (170, 187, 204)

    def test_hex_to_rgb_accepts_hash_and_whitespace(self):
        assert hex_to_rgb(" #ff0080\n") == (255, 0, 128)

    @pytest.mark.parametrize("value", ["", "FFF", "GGGGGG", "AABBCCDD"])
    def test_hex_to_rgb_rejects_malformed(self, value):
        with pytest.raises(ValueError):
            hex_to_rgb(value)

    def test_rgb_to_hex_clamps(self):
        assert rgb_to_hex(300, -5, 16) == "ff0010"


class TestHsl:
    """Tests for RGB <-> HSL conversion."""

    def test_primary_red(self):
        assert rgb_to_hsl(255, 0, 0) == pytest.approx((0.0, 100.0, 50.0))

    def test_grey_has_no_saturation(self):
        h, s, l = rgb_to_hsl(128, 128, 128)
        assert h == 0.0
        assert s == 0.0
        assert l == pytest.approx(50.2, abs=0.1)

    def test_light_blue_grey(self):
        h, s, l = rgb_to_hsl(170, 187, 204)
        assert h == pytest.approx(210.0)
        assert s == pytest.approx(25.0)
        assert l == pytest.approx(73.33, abs=0.01)

    def test_magenta_hue_wraps_below_360(self):
        h, _, _ = rgb_to_hsl(255, 0, 128)
        assert 0 <= h < 360
        assert h == pytest.approx(329.88, abs=0.01)

    def test_out_of_range_channels_are_clamped(self):
        assert rgb_to_hsl(400, -20, 0) == rgb_to_hsl(255, 0, 0)

    def test_round_trip_within_one_unit(self):
        """Converting to HSL and back reproduces every channel within 1."""
        steps = range(0, 256, 15)
        for r, g, b in itertools.product(steps, steps, steps):
            back = hsl_to_rgb(*rgb_to_hsl(r, g, b))
            assert all(abs(x - y) <= 1 for x, y in zip(back, (r, g, b))), (r, g, b, back)

    @pytest.mark.parametrize("fixed", [0, 1, 127, 128, 254, 255])
    def test_round_trip_every_channel_value(self, fixed):
        """Sweep each channel across 0-255 with the other two held fixed."""
        for value in range(256):
            for rgb in ((value, fixed, 255 - fixed), (fixed, value, 255 - fixed), (255 - fixed, fixed, value)):
                back = hsl_to_rgb(*rgb_to_hsl(*rgb))
                assert all(abs(x - y) <= 1 for x, y in zip(back, rgb)), (rgb, back)

    def test_round_trip_random_triples(self):
        rng = random.Random(0)
        for _ in range(5000):
            rgb = (rng.randrange(256), rng.randrange(256), rng.randrange(256))
            back = hsl_to_rgb(*rgb_to_hsl(*rgb))
            assert all(abs(x - y) <= 1 for x, y in zip(back, rgb)), (rgb, back)

    def test_hsl_to_rgb_white_and_black(self):
        assert hsl_to_rgb(0, 0, 100) == (255, 255, 255)
        assert hsl_to_rgb(0, 0, 0) == (0, 0, 0)


class TestWhiteChannels:
    """Tests for warm/cool white computation."""

    def test_bounds_for_all_inputs(self):
        for saturation in range(0, 101):
            for brightness in range(0, 101, 5):
                warm, cool = compute_white_channels(saturation, brightness)
                assert 0 <= warm <= 255
                assert 0 <= cool <= 255

    def test_custom_channel_range(self):
        for saturation in range(0, 101, 10):
            warm, cool = compute_white_channels(saturation, 100, max_channel=100)
            assert 0 <= warm <= 100
            assert 0 <= cool <= 100

    def test_zero_brightness_is_dark(self):
        assert compute_white_channels(50, 0) == (0, 0)

    def test_endpoints(self):
        assert compute_white_channels(0, 100) == (0, 255)
        assert compute_white_channels(50, 100) == (255, 255)
        assert compute_white_channels(100, 100) == (255, 0)

    def test_warm_rises_and_cool_falls_towards_warm(self):
        previous_warm, previous_cool = compute_white_channels(0, 80)
        for saturation in range(1, 101):
            warm, cool = compute_white_channels(saturation, 80)
            assert warm >= previous_warm
            assert cool <= previous_cool
            previous_warm, previous_cool = warm, cool

    def test_proportional_to_brightness(self):
        assert compute_white_channels(30, 80) == (122, 204)

    def test_out_of_range_inputs_are_clamped(self):
        assert compute_white_channels(150, 200) == compute_white_channels(100, 100)
        assert compute_white_channels(-10, -10) == (0, 0)


class TestColorFrame:
    """Tests for composite frame formatting."""

    def test_default_format(self):
        assert format_color_frame(122, 204) == "WR-122-204"

    def test_custom_prefix_and_delimiter(self):
        assert format_color_frame(1, 2, prefix="CW", delimiter=",") == "CW,1,2"
