"""
Public, high-level helpers for constructing a Falu client.
"""

from __future__ import annotations

from typing import Mapping, Optional

from .client import FaluClient
from .core.config import ClientOptions, ClientParameters, load_client_options
from .core.retry import RetryPolicy
from .core.transport import Transport

__all__ = ["create_client"]


def create_client(
    *,
    options: Optional[ClientOptions] = None,
    transport: Optional[Transport] = None,
    retry_policy: Optional[RetryPolicy] = None,
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
) -> FaluClient:
    """
    Construct a :class:`FaluClient`.

    Callers can either supply ready-made :class:`ClientOptions` or let the
    helper assemble them from environment data and keyword arguments.
    """
    if options is not None:
        extras = (
            overrides,
            base,
            parameters,
            api_key,
            retries,
            base_url,
            timeout_seconds,
            app_name,
            app_version,
            app_url,
        )
        if any(item is not None and item != {} for item in extras):
            raise ValueError(
                "Provide either pre-built ClientOptions or individual parameters, not both."
            )
        resolved = options
    else:
        resolved = load_client_options(
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
    return FaluClient(resolved, transport=transport, retry_policy=retry_policy)
