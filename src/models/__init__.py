"""Data models for HTTP RGB lights."""

from models.base import Device, DeviceStatus, DeviceType
from models.light import Light
from models.state import Attribute, DeviceState

__all__ = [
    "Attribute",
    "Device",
    "DeviceState",
    "DeviceStatus",
    "DeviceType",
    "Light",
]
