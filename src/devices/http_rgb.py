"""HTTP RGB light implementation.

Drives a bulb that exposes plain HTTP endpoints for power, brightness and a
composite colour frame. Brightness and saturation are cached so every colour
frame is rebuilt from the latest pair.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from config import LightConfig, SecretsConfig, apply_secrets
from devices.dispatcher import CommandDispatcher
from devices.transport import HttpClient, HttpxClient
from models.base import DeviceStatus, DeviceType
from models.light import Light
from models.state import Attribute, DeviceState
from utils.errors import (
    ConfigurationError,
    ConfigurationMissing,
    LightError,
    TransportError,
    UnsupportedCapability,
)

logger = logging.getLogger(__name__)

MANUFACTURER = "HTTP Manufacturer"
MODEL = "http-rgb-light"
SERIAL_NUMBER = "HTTP Serial Number"


@dataclass
class HttpRgbLight(Light):
    """Light controlled through configurable HTTP URLs."""

    device_type: DeviceType = field(default=DeviceType.LIGHT, init=False)
    config: LightConfig = field(kw_only=True, repr=False)
    state: DeviceState = field(default_factory=DeviceState)
    _dispatcher: CommandDispatcher | None = field(default=None, repr=False)

    @classmethod
    def from_config(cls, config: LightConfig, client: HttpClient) -> "HttpRgbLight":
        return cls(
            id=config.id,
            name=config.name,
            config=config,
            state=DeviceState.initial(config.brightness is not None),
            _dispatcher=CommandDispatcher(config, client),
        )

    @property
    def dispatcher(self) -> CommandDispatcher:
        if self._dispatcher is None:
            raise RuntimeError(f"Light {self.id} has no transport")
        return self._dispatcher

    @property
    def has_brightness(self) -> bool:
        return self.config.has_brightness

    @property
    def has_color(self) -> bool:
        return self.config.has_color

    async def identify(self) -> None:
        logger.info(f"{self.id}: identify requested!")

    async def get_power(self) -> bool:
        """Read the power state from the switch status URL."""
        if not self.config.switch.status:
            logger.warning(f"{self.id}: ignoring request, switch.status not defined.")
            raise ConfigurationMissing("No switch.status url defined.", self.id)

        self.state.begin(Attribute.POWER)
        try:
            power_on = await self.dispatcher.read_power()
        except LightError as e:
            logger.error(f"{self.id}: get_power() failed: {e}")
            raise
        finally:
            self.state.end(Attribute.POWER)

        self.is_on = power_on
        self.status = DeviceStatus.ONLINE
        logger.info(f"{self.id}: power is currently {'ON' if power_on else 'OFF'}")
        return power_on

    async def set_power(self, on: bool) -> str:
        """Turn the light on or off."""
        switch = self.config.switch
        if switch.power_on is None or switch.power_off is None:
            logger.warning(f"{self.id}: ignoring request, powerOn.url or powerOff.url is not defined.")
            raise ConfigurationMissing(
                "The 'switch' section in your configuration is incorrect.", self.id
            )

        self.state.begin(Attribute.POWER)
        try:
            body = await self.dispatcher.send_power(on)
        except TransportError as e:
            logger.error(f"{self.id}: set_power() failed: {e}")
            self.status = DeviceStatus.OFFLINE
            raise
        finally:
            self.state.end(Attribute.POWER)

        self.is_on = on
        self.status = DeviceStatus.ONLINE
        logger.info(f"{self.id}: set_power() successfully set to {'ON' if on else 'OFF'}")
        return body

    async def get_brightness(self) -> int:
        """Read brightness, live when a status URL exists, else from cache."""
        if not self.has_brightness:
            logger.warning(f"{self.id}: ignoring request; no 'brightness' defined.")
            raise UnsupportedCapability("brightness", self.id)

        brightness = self.config.brightness
        if brightness is None or not brightness.status:
            return self.state.read_brightness()

        self.state.begin(Attribute.BRIGHTNESS)
        try:
            level = await self.dispatcher.read_brightness()
        except LightError as e:
            logger.error(f"{self.id}: get_brightness() failed: {e}")
            raise
        finally:
            self.state.end(Attribute.BRIGHTNESS)

        self.state.set_brightness(level)
        logger.info(f"{self.id}: brightness is currently at {self.state.brightness}%")
        return self.state.read_brightness()

    async def set_brightness(self, level: int) -> None:
        """Set brightness (0-100).

        With a colour section the device cannot take brightness on its own,
        so the change goes out as a colour frame.
        """
        if not self.has_brightness:
            logger.warning(f"{self.id}: ignoring request; no 'brightness' defined.")
            raise UnsupportedCapability("brightness", self.id)

        previous = self.state.brightness
        self.state.set_brightness(level)
        level = self.state.brightness

        self.state.begin(Attribute.BRIGHTNESS)
        try:
            if self.has_color:
                await self.dispatcher.send_color_frame(self.state)
            else:
                await self.dispatcher.send_brightness(level)
        except BaseException as e:
            logger.error(f"{self.id}: set_brightness() failed: {e!r}")
            if self.state.brightness == level:
                self.state.set_brightness(previous)
            raise
        finally:
            self.state.end(Attribute.BRIGHTNESS)

        logger.info(f"{self.id}: set_brightness() successfully set to {level}%")

    async def get_saturation(self) -> int:
        """Read saturation from the colour status URL."""
        if not self.has_color:
            raise UnsupportedCapability("color", self.id)
        if not isinstance(self.config.color.status, str):
            logger.warning(f"{self.id}: ignoring request; problem with 'color' variables.")
            raise ConfigurationError(
                "There was a problem parsing the 'color' section of your configuration.",
                self.id,
            )

        self.state.begin(Attribute.SATURATION)
        try:
            saturation = await self.dispatcher.read_saturation()
        except LightError as e:
            logger.error(f"{self.id}: get_saturation() failed: {e}")
            raise
        finally:
            self.state.end(Attribute.SATURATION)

        self.state.set_saturation(saturation)
        logger.info(f"{self.id}: saturation is currently {saturation}")
        return self.state.read_saturation()

    async def set_saturation(self, level: int) -> None:
        """Cache saturation and send a colour frame with the cached brightness."""
        if not self.has_color:
            raise UnsupportedCapability("color", self.id)
        if not isinstance(self.config.color.set_url, str):
            logger.warning(f"{self.id}: ignoring request; problem with 'color' variables.")
            raise ConfigurationError(
                "There was a problem parsing the 'color' section of your configuration.",
                self.id,
            )

        logger.info(f"{self.id}: caching saturation as {level}")
        previous = self.state.saturation
        self.state.set_saturation(level)
        level = self.state.saturation

        self.state.begin(Attribute.SATURATION)
        try:
            await self.dispatcher.send_color_frame(self.state)
        except BaseException as e:
            logger.error(f"{self.id}: set_saturation() failed: {e!r}")
            if self.state.saturation == level:
                self.state.set_saturation(previous)
            raise
        finally:
            self.state.end(Attribute.SATURATION)

    def services(self) -> dict[str, Any]:
        """Describe the accessory information and exposed characteristics."""
        characteristics: list[dict[str, Any]] = [
            {
                "name": "On",
                "readable": bool(self.config.switch.status),
                "writable": True,
            }
        ]
        if self.has_brightness:
            characteristics.append({"name": "Brightness", "readable": True, "writable": True})
        if self.has_color:
            characteristics.append({"name": "Saturation", "readable": True, "writable": True})

        return {
            "information": {
                "manufacturer": MANUFACTURER,
                "model": MODEL,
                "serial_number": SERIAL_NUMBER,
            },
            "lightbulb": {
                "name": self.name,
                "characteristics": characteristics,
            },
        }

    async def refresh(self) -> None:
        """Read every attribute that has a status URL."""
        try:
            if self.config.switch.status:
                await self.get_power()
            if self.config.brightness is not None and self.config.brightness.status:
                await self.get_brightness()
            if self.has_color and isinstance(self.config.color.status, str):
                await self.get_saturation()
            self.status = DeviceStatus.ONLINE
        except LightError as e:
            logger.warning(f"Failed to refresh {self.id}: {e}")
            self.status = DeviceStatus.OFFLINE

    def to_state_dict(self) -> dict[str, Any]:
        result = super().to_state_dict()
        if self.has_brightness:
            result["brightness"] = self.state.brightness
        if self.has_color:
            result["saturation"] = self.state.saturation
        return result

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._dispatcher is not None:
            await self._dispatcher.client.close()


async def create_http_rgb_light(
    light_config: LightConfig,
    secrets: SecretsConfig,
    client: HttpClient | None = None,
) -> HttpRgbLight:
    """Factory function to create an HTTP RGB light from config."""
    light_config = apply_secrets(light_config, secrets)

    if light_config.switch.power_on is None or light_config.switch.power_off is None:
        logger.warning(f"No powerOn/powerOff url for light {light_config.id}")

    light = HttpRgbLight.from_config(light_config, client or HttpxClient())
    logger.info(
        f"Created light {light.id} (brightness={light.has_brightness}, color={light.has_color})"
    )
    return light
