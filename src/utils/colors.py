"""Colour conversions for HTTP RGB lights.

Pure functions only. Numeric inputs outside their documented range are
clamped rather than rejected.
"""

DEFAULT_MAX_CHANNEL = 255
FRAME_PREFIX = "WR"
FRAME_DELIMITER = "-"


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]."""
    return max(low, min(high, value))


def hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    """Convert a 6-digit hex colour to an RGB tuple.

    Raises:
        ValueError: If the string is not exactly six hex digits
    """
    hex_color = hex_color.strip().lstrip("#")
    if len(hex_color) != 6:
        raise ValueError(f"Expected 6 hex digits, got {hex_color!r}")
    return (
        int(hex_color[0:2], 16),
        int(hex_color[2:4], 16),
        int(hex_color[4:6], 16),
    )


def rgb_to_hex(r: int, g: int, b: int) -> str:
    """Convert RGB to a bare hex colour (no leading '#')."""
    r, g, b = (int(clamp(c, 0, 255)) for c in (r, g, b))
    return f"{r:02x}{g:02x}{b:02x}"


def rgb_to_hsl(r: float, g: float, b: float) -> tuple[float, float, float]:
    """Convert RGB channels (0-255) to HSL.

    Args:
        r: Red channel
        g: Green channel
        b: Blue channel

    Returns:
        Tuple of (hue 0-360, saturation 0-100, lightness 0-100)
    """
    r = clamp(r, 0, 255) / 255.0
    g = clamp(g, 0, 255) / 255.0
    b = clamp(b, 0, 255) / 255.0

    max_c = max(r, g, b)
    min_c = min(r, g, b)
    diff = max_c - min_c
    l = (max_c + min_c) / 2

    if diff == 0:
        return 0.0, 0.0, l * 100

    if l > 0.5:
        s = diff / (2 - max_c - min_c)
    else:
        s = diff / (max_c + min_c)

    if max_c == r:
        h = (g - b) / diff + (6 if g < b else 0)
    elif max_c == g:
        h = (b - r) / diff + 2
    else:
        h = (r - g) / diff + 4
    h /= 6

    return (h * 360) % 360, s * 100, l * 100


def _hue_to_channel(p: float, q: float, t: float) -> float:
    if t < 0:
        t += 1
    if t > 1:
        t -= 1
    if t < 1 / 6:
        return p + (q - p) * 6 * t
    if t < 1 / 2:
        return q
    if t < 2 / 3:
        return p + (q - p) * (2 / 3 - t) * 6
    return p


def hsl_to_rgb(h: float, s: float, l: float) -> tuple[int, int, int]:
    """Convert HSL (hue 0-360, saturation/lightness 0-100) to RGB (0-255)."""
    h = (h % 360) / 360.0
    s = clamp(s, 0, 100) / 100.0
    l = clamp(l, 0, 100) / 100.0

    if s == 0:
        v = round(l * 255)
        return v, v, v

    q = l * (1 + s) if l < 0.5 else l + s - l * s
    p = 2 * l - q

    r = _hue_to_channel(p, q, h + 1 / 3)
    g = _hue_to_channel(p, q, h)
    b = _hue_to_channel(p, q, h - 1 / 3)

    return round(r * 255), round(g * 255), round(b * 255)


def compute_white_channels(
    saturation: float,
    brightness: float,
    max_channel: int = DEFAULT_MAX_CHANNEL,
) -> tuple[int, int]:
    """Compute warm and cool white intensities.

    Saturation acts as a colour temperature knob: 0 is fully cool, 100 fully
    warm. Both channels run at full output in the neutral middle and fade out
    linearly towards the opposite end. Output scales with brightness.

    Args:
        saturation: Colour temperature parameter (0-100)
        brightness: Brightness level (0-100)
        max_channel: Highest value a channel can carry

    Returns:
        Tuple of (warm_white, cool_white), each in [0, max_channel]
    """
    max_channel = max(0, int(max_channel))
    t = clamp(saturation, 0, 100) / 100.0
    level = clamp(brightness, 0, 100) / 100.0

    warm = round(max_channel * level * min(1.0, 2 * t))
    cool = round(max_channel * level * min(1.0, 2 * (1 - t)))

    return int(clamp(warm, 0, max_channel)), int(clamp(cool, 0, max_channel))


def format_color_frame(
    warm_white: int,
    cool_white: int,
    prefix: str = FRAME_PREFIX,
    delimiter: str = FRAME_DELIMITER,
) -> str:
    """Format white channels as the device's composite command string."""
    return delimiter.join([prefix, str(int(warm_white)), str(int(cool_white))])
