"""Device manager for HTTP RGB lights."""

import asyncio
import logging
from typing import Any, Awaitable, Callable

from config import LightConfig, LightsConfig, SecretsConfig
from devices.http_rgb import create_http_rgb_light
from models import DeviceStatus, Light
from utils.errors import DeviceNotFoundError

logger = logging.getLogger(__name__)

LightFactory = Callable[[LightConfig, SecretsConfig], Awaitable[Light]]


class DeviceManager:
    """Creates one driver per configured light and keeps them by id."""

    def __init__(
        self,
        config: LightsConfig,
        secrets: SecretsConfig,
        factory: LightFactory | None = None,
    ):
        self.config = config
        self.secrets = secrets
        self._lights: dict[str, Light] = {}
        self._factory = factory

    def register_factory(self, factory: LightFactory) -> None:
        """Register the factory used to create lights.

        The factory should be a coroutine function that takes
        (light_config, secrets) and returns a Light.
        """
        self._factory = factory

    async def initialize(self) -> None:
        """Create all lights from config."""
        if self._factory is None:
            self._factory = create_http_rgb_light

        for light_config in self.config.lights:
            await self._create_light(light_config)

    async def _create_light(self, light_config: LightConfig) -> Light | None:
        try:
            light = await self._factory(light_config, self.secrets)
        except Exception as e:
            logger.error(f"Failed to create light {light_config.id}: {e}")
            return None

        self._lights[light.id] = light
        logger.info(f"Created light: {light.name}")
        return light

    async def refresh_all(self, timeout: float = 30.0) -> None:
        """Refresh state of all lights with timeout protection.

        Args:
            timeout: Maximum time to wait for all refreshes (default 30s)
        """
        tasks = [light.refresh() for light in self._lights.values()]
        try:
            async with asyncio.timeout(timeout):
                results = await asyncio.gather(*tasks, return_exceptions=True)
        except asyncio.TimeoutError:
            logger.error(f"refresh_all timed out after {timeout}s")
            for light in self._lights.values():
                light.status = DeviceStatus.OFFLINE
            return
        for light, result in zip(self._lights.values(), results):
            if isinstance(result, Exception):
                logger.error(f"Failed to refresh {light.id}: {result}")
                light.status = DeviceStatus.OFFLINE

    async def shutdown(self) -> None:
        """Close every light's transport."""
        for light in self._lights.values():
            try:
                await light.close()
                logger.debug(f"Closed light connection: {light.id}")
            except Exception as e:
                logger.warning(f"Error closing light {light.id}: {e}")

    def get_light(self, light_id: str) -> Light:
        """Get a light by ID.

        Raises:
            DeviceNotFoundError: If no light has that id
        """
        light = self._lights.get(light_id)
        if light is None:
            raise DeviceNotFoundError(light_id)
        return light

    def get_lights(self, status: DeviceStatus | None = None) -> list[Light]:
        """Get all lights, optionally filtered by status."""
        lights = list(self._lights.values())
        if status is not None:
            lights = [light for light in lights if light.status == status]
        return lights

    def count_lights_on(self) -> int:
        """Count how many lights were last seen on."""
        return sum(1 for light in self._lights.values() if light.is_on)

    def light_to_response(self, light: Light) -> dict[str, Any]:
        """Convert a light to a response dict."""
        return {
            "id": light.id,
            "name": light.name,
            "type": light.device_type.value,
            "status": light.status.value,
            "state": light.to_state_dict(),
        }
