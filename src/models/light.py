"""Light device model."""

from abc import abstractmethod
from dataclasses import dataclass, field
from typing import Any

from models.base import Device, DeviceType


@dataclass
class Light(Device):
    """Base class for light devices."""

    device_type: DeviceType = field(default=DeviceType.LIGHT, init=False)
    is_on: bool | None = None  # None until read or set

    @abstractmethod
    async def get_power(self) -> bool:
        """Read the power state."""
        pass

    @abstractmethod
    async def set_power(self, on: bool) -> str:
        """Turn the light on or off, returning the raw response body."""
        pass

    @abstractmethod
    async def get_brightness(self) -> int:
        """Read brightness (0-100)."""
        pass

    @abstractmethod
    async def set_brightness(self, level: int) -> None:
        """Set brightness (0-100)."""
        pass

    @abstractmethod
    async def get_saturation(self) -> int:
        """Read saturation (0-100)."""
        pass

    @abstractmethod
    async def set_saturation(self, level: int) -> None:
        """Set saturation (0-100)."""
        pass

    def to_state_dict(self) -> dict[str, Any]:
        """Return current state as dict."""
        return {
            "status": self.status.value,
            "is_on": self.is_on,
        }
