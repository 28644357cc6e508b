"""Device implementations for HTTP RGB lights."""

from devices.dispatcher import CommandDispatcher
from devices.http_rgb import HttpRgbLight, create_http_rgb_light
from devices.manager import DeviceManager
from devices.transport import BasicAuth, HttpClient, HttpResponse, HttpxClient

__all__ = [
    "BasicAuth",
    "CommandDispatcher",
    "DeviceManager",
    "HttpClient",
    "HttpResponse",
    "HttpRgbLight",
    "HttpxClient",
    "create_http_rgb_light",
]
