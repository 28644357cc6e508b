"""Pytest configuration and fixtures for HTTP RGB light tests."""

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from config import LightConfig, LightsConfig, SecretsConfig, apply_secrets
from devices.http_rgb import HttpRgbLight
from devices.manager import DeviceManager
from devices.transport import BasicAuth, HttpResponse


@dataclass
class Call:
    """One request seen by RecordingClient."""

    url: str
    body: str | None
    method: str
    auth: BasicAuth


class RecordingClient:
    """HttpClient stub that records calls and serves canned bodies by URL."""

    def __init__(self, responses: dict[str, str] | None = None):
        self.responses = responses or {}
        self.calls: list[Call] = []
        self.error: BaseException | None = None
        self.closed = False

    async def send(
        self,
        url: str,
        body: str | None,
        method: str,
        auth: BasicAuth,
    ) -> HttpResponse:
        self.calls.append(Call(url, body, method, auth))
        if self.error is not None:
            raise self.error
        return HttpResponse(status_code=200, body=self.responses.get(url, "OK"))

    async def close(self) -> None:
        self.closed = True

    @property
    def urls(self) -> list[str]:
        return [call.url for call in self.calls]


FULL_LIGHT: dict[str, Any] = {
    "id": "desk",
    "name": "Desk Lamp",
    "http_method": "POST",
    "username": "admin",
    "password": "secret",
    "switch": {
        "status": "http://bulb.local/power",
        "powerOn": {"url": "http://bulb.local/on", "body": "1"},
        "powerOff": "http://bulb.local/off",
    },
    "brightness": {
        "status": "http://bulb.local/brightness",
        "url": "http://bulb.local/brightness/%s",
    },
    "color": {
        "status": "http://bulb.local/color",
        "url": "http://bulb.local/color/%s",
        "http_method": "PUT",
    },
}

BRIGHTNESS_ONLY_LIGHT: dict[str, Any] = {
    "id": "hall",
    "name": "Hall Light",
    "switch": {
        "powerOn": "http://hall.local/on",
        "powerOff": "http://hall.local/off",
    },
    "brightness": {
        "status": "http://hall.local/level",
        "url": "http://hall.local/level?value=%s",
        "http_method": "put",
    },
}

COLOR_ONLY_LIGHT: dict[str, Any] = {
    "id": "strip",
    "name": "LED Strip",
    "switch": {
        "powerOn": "http://strip.local/on",
        "powerOff": "http://strip.local/off",
    },
    "color": {
        "status": "http://strip.local/color",
        "url": "http://strip.local/color/%s",
    },
}


@pytest.fixture
def client() -> RecordingClient:
    return RecordingClient()


@pytest.fixture
def full_config() -> LightConfig:
    return LightConfig.model_validate(FULL_LIGHT)


@pytest.fixture
def full_light(full_config: LightConfig, client: RecordingClient) -> HttpRgbLight:
    return HttpRgbLight.from_config(full_config, client)


@pytest.fixture
def brightness_light(client: RecordingClient) -> HttpRgbLight:
    return HttpRgbLight.from_config(LightConfig.model_validate(BRIGHTNESS_ONLY_LIGHT), client)


@pytest.fixture
def color_light(client: RecordingClient) -> HttpRgbLight:
    return HttpRgbLight.from_config(LightConfig.model_validate(COLOR_ONLY_LIGHT), client)


@pytest.fixture
def sample_config() -> LightsConfig:
    """Create a sample configuration for testing."""
    return LightsConfig.model_validate(
        {"lights": [FULL_LIGHT, BRIGHTNESS_ONLY_LIGHT, COLOR_ONLY_LIGHT]}
    )


@pytest.fixture
def sample_secrets() -> SecretsConfig:
    """Create a sample secrets configuration for testing."""
    return SecretsConfig.model_validate(
        {"lights": {"hall": {"username": "hall-user", "password": "hall-pass"}}}
    )


@pytest.fixture
async def device_manager(
    sample_config: LightsConfig,
    sample_secrets: SecretsConfig,
    client: RecordingClient,
) -> DeviceManager:
    """Create a device manager whose lights share the recording client."""

    async def recording_factory(config: LightConfig, secrets: SecretsConfig) -> HttpRgbLight:
        return HttpRgbLight.from_config(apply_secrets(config, secrets), client)

    manager = DeviceManager(sample_config, sample_secrets, factory=recording_factory)
    await manager.initialize()
    return manager
