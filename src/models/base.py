"""Base device models for HTTP RGB lights."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any


class DeviceType(Enum):
    """Types of supported devices."""

    LIGHT = "light"


class DeviceStatus(Enum):
    """Device connection status."""

    ONLINE = "online"
    OFFLINE = "offline"
    UNKNOWN = "unknown"


@dataclass
class Device(ABC):
    """Base class for all devices.

    Provides:
    - Common device attributes (id, name, type, status)
    - Standard lifecycle methods (identify, refresh, close)
    """

    id: str
    name: str
    device_type: DeviceType
    status: DeviceStatus = DeviceStatus.UNKNOWN

    async def identify(self) -> None:
        """Acknowledge an identify request.

        Subclasses may override this to blink the device.
        """
        pass

    @abstractmethod
    async def refresh(self) -> None:
        """Fetch current state from device."""
        pass

    @abstractmethod
    def to_state_dict(self) -> dict[str, Any]:
        """Return current state as dict for CLI output."""
        pass

    async def close(self) -> None:
        """Close any open connections/resources.

        Subclasses should override this to clean up resources.
        """
        pass
