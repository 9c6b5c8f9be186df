"""
Configuration objects and helpers for the Falu client.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

__all__ = [
    "API_VERSION",
    "SDK_VERSION",
    "DEFAULT_BASE_URL",
    "ApplicationInformation",
    "ClientOptions",
    "ClientParameters",
    "ConfigError",
    "SerializerOptions",
    "load_client_options",
]

SDK_VERSION = "0.1.0"
API_VERSION = "2022-01-01"
DEFAULT_BASE_URL = "https://api.falu.io"
DEFAULT_TIMEOUT_SECONDS = 100.0
DEFAULT_RETRIES = 2

_PARAMETER_TO_ENV_KEY = {
    "api_key": "FALU_API_KEY",
    "retries": "FALU_RETRIES",
    "base_url": "FALU_BASE_URL",
    "timeout_seconds": "FALU_TIMEOUT_SECONDS",
    "app_name": "FALU_APP_NAME",
    "app_version": "FALU_APP_VERSION",
    "app_url": "FALU_APP_URL",
}


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class ConfigError(Exception):
    """Raised when the supplied configuration is invalid."""


@dataclass(frozen=True)
class SerializerOptions:
    """
    JSON policy shared by every request and response.

    Wire names (lower camel case) and enum spellings live on the models
    themselves; these switches cover what happens around them.
    """

    omit_null: bool = True
    case_insensitive: bool = True
    allow_trailing_commas: bool = True
    skip_comments: bool = True


@dataclass(frozen=True)
class ApplicationInformation:
    """
    Identifies a third-party application or plugin built on top of the SDK.
    """

    name: str
    version: Optional[str] = None
    url: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ConfigError("Application name must not be empty")

    def user_agent_fragment(self) -> str:
        fragment = self.name.strip()
        if self.version:
            fragment = f"{fragment}/{self.version}"
        if self.url:
            fragment = f"{fragment} ({self.url})"
        return fragment


@dataclass(frozen=True)
class ClientParameters:
    """
    Explicit parameter bundle for constructing :class:`ClientOptions`.

    Callers can either instantiate this helper or pass the individual keyword
    arguments directly to :func:`load_client_options`.
    """

    api_key: Optional[str] = None
    retries: Optional[int | str] = None
    base_url: Optional[str] = None
    timeout_seconds: Optional[float | int | str] = None
    app_name: Optional[str] = None
    app_version: Optional[str] = None
    app_url: Optional[str] = None

    def as_overrides(self) -> Dict[str, str]:
        overrides: Dict[str, str] = {}
        for field_name, env_key in _PARAMETER_TO_ENV_KEY.items():
            value = getattr(self, field_name)
            if value is None:
                continue
            overrides[env_key] = _stringify(value)
        return overrides


def _collect_parameter_overrides(
    parameters: Optional[ClientParameters],
    explicit: Mapping[str, Any],
) -> Dict[str, str]:
    overrides: Dict[str, str] = {}
    if parameters is not None:
        overrides.update(parameters.as_overrides())

    for key, value in explicit.items():
        if value is None:
            continue
        try:
            env_key = _PARAMETER_TO_ENV_KEY[key]
        except KeyError as exc:
            raise TypeError(f"Unknown client parameter '{key}'") from exc
        overrides[env_key] = _stringify(value)
    return overrides


def _parse_int(raw: str, key: str) -> int:
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigError(f"{key} must be an integer, got '{raw}'") from exc


def _parse_float(raw: str, key: str) -> float:
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigError(f"{key} must be a number, got '{raw}'") from exc


def _read_env_file(path: Optional[str]) -> Dict[str, str]:
    """Parse ``KEY=VALUE`` lines; a missing file reads as empty."""
    if path is None:
        return {}
    try:
        text = Path(path).read_text(encoding="utf-8-sig")
    except FileNotFoundError:
        return {}

    settings: Dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if line.startswith("export "):
            line = line[7:].lstrip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        if not sep or not key.strip():
            continue
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"":
            value = value[1:-1]
        settings[key.strip()] = value
    return settings


def _layer_settings(
    env_file: Optional[str],
    base: Optional[Mapping[str, str]],
    overrides: Mapping[str, str],
) -> Dict[str, str]:
    # process environment (or ``base``) beats the file, explicit overrides beat both
    settings = _read_env_file(env_file)
    settings.update(os.environ if base is None else base)
    settings.update(overrides)
    return settings


@dataclass(frozen=True)
class ClientOptions:
    """
    Immutable client-wide settings shared by every operation.

    ``retries`` counts the attempts made in addition to the original call, so
    the default of ``2`` allows up to three attempts per logical operation.
    """

    api_key: str = field(repr=False)
    retries: int = DEFAULT_RETRIES
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    application: Optional[ApplicationInformation] = None
    serializer: SerializerOptions = field(default_factory=SerializerOptions)

    def __post_init__(self) -> None:
        if not isinstance(self.api_key, str) or not self.api_key.strip():
            raise ConfigError("FALU_API_KEY must not be empty")
        if self.retries < 0:
            raise ConfigError("FALU_RETRIES must not be negative")
        if self.timeout <= 0:
            raise ConfigError("FALU_TIMEOUT_SECONDS must be greater than zero")
        if not self.base_url.startswith(("http://", "https://")):
            raise ConfigError("FALU_BASE_URL must be an absolute http(s) URL")
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    @property
    def api_version(self) -> str:
        return API_VERSION

    @classmethod
    def from_mapping(cls, values: Mapping[str, str]) -> "ClientOptions":
        api_key = values.get("FALU_API_KEY")
        if api_key is None:
            raise ConfigError("FALU_API_KEY must be provided")

        retries = _parse_int(
            values.get("FALU_RETRIES", str(DEFAULT_RETRIES)), "FALU_RETRIES"
        )
        timeout = _parse_float(
            values.get("FALU_TIMEOUT_SECONDS", str(DEFAULT_TIMEOUT_SECONDS)),
            "FALU_TIMEOUT_SECONDS",
        )
        base_url = values.get("FALU_BASE_URL", DEFAULT_BASE_URL)

        application = None
        app_name = values.get("FALU_APP_NAME")
        if app_name:
            application = ApplicationInformation(
                name=app_name,
                version=values.get("FALU_APP_VERSION") or None,
                url=values.get("FALU_APP_URL") or None,
            )

        return cls(
            api_key=api_key.strip(),
            retries=retries,
            base_url=base_url,
            timeout=timeout,
            application=application,
        )

    @classmethod
    def from_env(
        cls,
        *,
        env_file: Optional[str] = ".env",
        overrides: Optional[Mapping[str, str]] = None,
        base: Optional[Mapping[str, str]] = None,
        parameters: Optional[ClientParameters] = None,
        api_key: Optional[str] = None,
        retries: Optional[int | str] = None,
        base_url: Optional[str] = None,
        timeout_seconds: Optional[float | int | str] = None,
        app_name: Optional[str] = None,
        app_version: Optional[str] = None,
        app_url: Optional[str] = None,
    ) -> "ClientOptions":
        parameter_overrides = _collect_parameter_overrides(
            parameters,
            {
                "api_key": api_key,
                "retries": retries,
                "base_url": base_url,
                "timeout_seconds": timeout_seconds,
                "app_name": app_name,
                "app_version": app_version,
                "app_url": app_url,
            },
        )
        merged_overrides = dict(overrides or {})
        merged_overrides.update(parameter_overrides)

        return cls.from_mapping(_layer_settings(env_file, base, merged_overrides))


def load_client_options(
    *,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    parameters: Optional[ClientParameters] = None,
    api_key: Optional[str] = None,
    retries: Optional[int | str] = None,
    base_url: Optional[str] = None,
    timeout_seconds: Optional[float | int | str] = None,
    app_name: Optional[str] = None,
    app_version: Optional[str] = None,
    app_url: Optional[str] = None,
) -> ClientOptions:
    """
    Convenience wrapper that mirrors :meth:`ClientOptions.from_env`.

    The configuration can be provided entirely through environment variables,
    a ``.env`` file, direct keyword arguments, or any combination of the three.
    """
    return ClientOptions.from_env(
        env_file=env_file,
        overrides=overrides,
        base=base,
        parameters=parameters,
        api_key=api_key,
        retries=retries,
        base_url=base_url,
        timeout_seconds=timeout_seconds,
        app_name=app_name,
        app_version=app_version,
        app_url=app_url,
    )
