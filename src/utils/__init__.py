"""Utility modules for HTTP RGB lights."""

from utils.colors import (
    compute_white_channels,
    format_color_frame,
    hex_to_rgb,
    hsl_to_rgb,
    rgb_to_hex,
    rgb_to_hsl,
)
from utils.errors import (
    ConfigurationError,
    ConfigurationMissing,
    LightError,
    ParseError,
    TransportError,
    UnsupportedCapability,
)

__all__ = [
    "ConfigurationError",
    "ConfigurationMissing",
    "LightError",
    "ParseError",
    "TransportError",
    "UnsupportedCapability",
    "compute_white_channels",
    "format_color_frame",
    "hex_to_rgb",
    "hsl_to_rgb",
    "rgb_to_hex",
    "rgb_to_hsl",
]
