"""Builds device commands and parses device responses."""

import logging
import re

from config import LightConfig
from devices.transport import BasicAuth, HttpClient
from models.state import DeviceState
from utils.colors import compute_white_channels, format_color_frame, hex_to_rgb, rgb_to_hsl
from utils.errors import ConfigurationError, ConfigurationMissing, ParseError

logger = logging.getLogger(__name__)

PLACEHOLDER = "%s"
STATUS_METHOD = "GET"

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def fill_placeholder(url: str, value: str) -> str:
    """Substitute the first placeholder token in a URL template."""
    return url.replace(PLACEHOLDER, value, 1)


def parse_int(body: str) -> int:
    """Parse the leading integer of a response body.

    Raises:
        ParseError: If the body does not start with an integer
    """
    match = _LEADING_INT.match(body or "")
    if match is None:
        raise ParseError(f"Expected an integer, got {body!r}", body)
    return int(match.group(1))


def parse_saturation(body: str) -> int:
    """Parse a 6-digit hex RGB body and return its HSL saturation."""
    try:
        r, g, b = hex_to_rgb(body or "")
    except ValueError as e:
        raise ParseError(f"Expected a 6-digit hex colour, got {body!r}", body) from e
    _, saturation, _ = rgb_to_hsl(r, g, b)
    return round(saturation)


class CommandDispatcher:
    """Sends commands for one light over an HttpClient."""

    def __init__(self, config: LightConfig, client: HttpClient):
        self.config = config
        self.client = client
        self._auth = BasicAuth(config.username, config.password)

    async def _send(self, url: str, body: str | None, method: str) -> str:
        logger.debug(f"{self.config.id}: {method} {url}")
        response = await self.client.send(url, body, method, self._auth)
        return response.body

    async def _read(self, url: str | None, what: str) -> str:
        if not url:
            raise ConfigurationMissing(f"No {what} status url defined.", self.config.id)
        return await self._send(url, None, STATUS_METHOD)

    async def send_power(self, on: bool) -> str:
        """Send the power on or power off command."""
        endpoint = self.config.switch.power_on if on else self.config.switch.power_off
        if endpoint is None or not endpoint.set_url:
            raise ConfigurationMissing(
                "The 'switch' section in your configuration is incorrect.",
                self.config.id,
            )
        return await self._send(endpoint.set_url, endpoint.body, self.config.http_method)

    async def send_brightness(self, level: int) -> str:
        """Send a dedicated brightness command."""
        brightness = self.config.brightness
        if brightness is None or not brightness.set_url:
            raise ConfigurationMissing("No brightness url defined.", self.config.id)
        url = fill_placeholder(brightness.set_url, str(int(level)))
        return await self._send(url, None, brightness.http_method)

    async def send_color_frame(self, state: DeviceState) -> str:
        """Send a colour frame built from the cached saturation and brightness."""
        color = self.config.color
        if color is None or not isinstance(color.set_url, str):
            raise ConfigurationError(
                "There was a problem parsing the 'color' section of your configuration.",
                self.config.id,
            )

        saturation = state.read_saturation()
        brightness = state.read_brightness()
        warm, cool = compute_white_channels(saturation, brightness)
        frame = format_color_frame(warm, cool)

        logger.info(
            f"{self.config.id}: converting S:{saturation} B:{brightness} "
            f"to warm:{warm} cool:{cool}"
        )
        return await self._send(fill_placeholder(color.set_url, frame), None, color.http_method)

    async def read_power(self) -> bool:
        body = await self._read(self.config.switch.status, "switch")
        return parse_int(body) > 0

    async def read_brightness(self) -> int:
        brightness = self.config.brightness
        body = await self._read(brightness.status if brightness else None, "brightness")
        return parse_int(body)

    async def read_saturation(self) -> int:
        color = self.config.color
        if color is not None and color.status is not None and not isinstance(color.status, str):
            raise ConfigurationError(
                "There was a problem parsing the 'color' section of your configuration.",
                self.config.id,
            )
        body = await self._read(color.status if color else None, "color")
        return parse_saturation(body)
