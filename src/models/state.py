"""Runtime cache of a light's brightness and saturation."""

import logging
from dataclasses import dataclass, field
from enum import Enum

logger = logging.getLogger(__name__)


class Attribute(Enum):
    """Independently requested light attributes."""

    POWER = "power"
    BRIGHTNESS = "brightness"
    SATURATION = "saturation"


def _clamp_level(level: int) -> int:
    return max(0, min(100, int(level)))


@dataclass
class DeviceState:
    """Last known or last set brightness and saturation of one light.

    The device only accepts brightness and saturation together as one
    colour frame, so the frame is always rebuilt from these two values.
    """

    brightness: int = 0
    saturation: int = 0
    _pending: set[Attribute] = field(default_factory=set, repr=False)

    def __post_init__(self) -> None:
        self.brightness = _clamp_level(self.brightness)
        self.saturation = _clamp_level(self.saturation)

    @classmethod
    def initial(cls, has_brightness_section: bool) -> "DeviceState":
        """Cold-start state: full brightness unless a brightness URL exists."""
        return cls(brightness=0 if has_brightness_section else 100, saturation=0)

    def set_brightness(self, level: int) -> None:
        self.brightness = _clamp_level(level)

    def set_saturation(self, level: int) -> None:
        self.saturation = _clamp_level(level)

    def read_brightness(self) -> int:
        return self.brightness

    def read_saturation(self) -> int:
        return self.saturation

    def is_pending(self, attribute: Attribute) -> bool:
        return attribute in self._pending

    def begin(self, attribute: Attribute) -> None:
        """Mark a request for the attribute as in flight."""
        if attribute in self._pending:
            logger.warning(f"{attribute.value} request started while another is in flight")
        self._pending.add(attribute)

    def end(self, attribute: Attribute) -> None:
        self._pending.discard(attribute)
