"""Configuration loading for HTTP RGB lights.

The YAML schema lets URL fields be written either as a bare string or as a
``{url, body}`` mapping. Everything is normalised here so the driver only
ever sees ``Endpoint`` objects and fully resolved HTTP methods.
"""

from pathlib import Path
from typing import Annotated, Any

import yaml
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator, model_validator

HTTP_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE")


def _normalize_method(value: Any) -> Any:
    if isinstance(value, str):
        method = value.strip().upper()
        if method not in HTTP_METHODS:
            raise ValueError(f"Unsupported HTTP method: {value}")
        return method
    return value


HttpMethod = Annotated[str, BeforeValidator(_normalize_method)]


class Endpoint(BaseModel):
    """A URL to call, with an optional request body."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    set_url: str = Field(alias="url")
    body: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _from_string(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"url": data}
        return data


class SwitchConfig(BaseModel):
    """Power on/off URLs and the optional power status URL."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    status: str | None = None
    power_on: Endpoint | None = Field(default=None, alias="powerOn")
    power_off: Endpoint | None = Field(default=None, alias="powerOff")


class BrightnessConfig(BaseModel):
    """Dedicated brightness status and set URLs."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    status: str | None = None
    set_url: str | None = Field(default=None, alias="url")
    http_method: HttpMethod = "GET"

    @model_validator(mode="before")
    @classmethod
    def _default_set_url(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("url") and not data.get("set_url"):
            data = {**data, "url": data.get("status")}
        return data


class ColorConfig(BaseModel):
    """Colour status and set URLs.

    ``status`` is kept loosely typed so a malformed value surfaces as a
    ConfigurationError when the operation that needs it runs.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    status: Any = None
    set_url: Any = Field(default=None, alias="url")
    http_method: HttpMethod = "GET"
    brightness_coupled: bool = Field(default=False, alias="brightness")

    @model_validator(mode="before")
    @classmethod
    def _default_set_url(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("url") and not data.get("set_url"):
            data = {**data, "url": data.get("status")}
        return data


class LightConfig(BaseModel):
    """Configuration for a single HTTP RGB light."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str
    http_method: HttpMethod = "GET"
    username: str = ""
    password: str = ""
    switch: SwitchConfig = Field(default_factory=SwitchConfig)
    brightness: BrightnessConfig | None = None
    color: ColorConfig | None = None

    @model_validator(mode="before")
    @classmethod
    def _inherit_http_method(cls, data: Any) -> Any:
        """Give capability sections the top-level method unless they set one."""
        if not isinstance(data, dict):
            return data
        method = data.get("http_method") or "GET"
        data = dict(data)
        for section in ("brightness", "color"):
            value = data.get(section)
            if isinstance(value, dict) and not value.get("http_method"):
                data[section] = {**value, "http_method": method}
            elif value is False:
                data[section] = None
        return data

    @property
    def has_brightness(self) -> bool:
        return self.brightness is not None or (
            self.color is not None and self.color.brightness_coupled
        )

    @property
    def has_color(self) -> bool:
        return self.color is not None


class LightsConfig(BaseModel):
    """Main configuration model."""

    lights: list[LightConfig] = Field(default_factory=list)

    @field_validator("lights")
    @classmethod
    def _unique_ids(cls, lights: list[LightConfig]) -> list[LightConfig]:
        seen: set[str] = set()
        for light in lights:
            if light.id in seen:
                raise ValueError(f"Duplicate light id: {light.id}")
            seen.add(light.id)
        return lights


class Credentials(BaseModel):
    """Basic auth credentials for one light."""

    username: str = ""
    password: str = ""


class SecretsConfig(BaseModel):
    """Secrets configuration model."""

    lights: dict[str, Credentials] = Field(default_factory=dict)


def find_config_dir() -> Path:
    """Find the config directory.

    Looks for config directory in the following order:
    1. ./config (relative to cwd)
    2. ../config (parent of cwd)
    3. ~/.config/http-rgb
    """
    cwd = Path.cwd()

    if (cwd / "config").is_dir():
        return cwd / "config"

    if (cwd.parent / "config").is_dir():
        return cwd.parent / "config"

    home_config = Path.home() / ".config" / "http-rgb"
    if home_config.is_dir():
        return home_config

    return cwd / "config"


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML file, returning empty dict if not found."""
    if not path.exists():
        return {}
    with open(path) as f:
        return yaml.safe_load(f) or {}


def load_config(config_dir: Path | None = None) -> LightsConfig:
    """Load the main configuration."""
    if config_dir is None:
        config_dir = find_config_dir()

    data = load_yaml(config_dir / "config.yaml")
    return LightsConfig.model_validate(data)


def load_secrets(config_dir: Path | None = None) -> SecretsConfig:
    """Load the secrets configuration."""
    if config_dir is None:
        config_dir = find_config_dir()

    data = load_yaml(config_dir / "secrets.yaml")
    return SecretsConfig.model_validate(data)


def apply_secrets(light: LightConfig, secrets: SecretsConfig) -> LightConfig:
    """Return the light config with credentials from secrets.yaml applied."""
    creds = secrets.lights.get(light.id)
    if creds is None:
        return light
    return light.model_copy(
        update={
            "username": creds.username or light.username,
            "password": creds.password or light.password,
        }
    )
