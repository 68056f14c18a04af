"""
Configuration objects and helpers for the money API client.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlparse

__all__ = [
    "ApiConfig",
    "ApiParameters",
    "ConfigError",
    "DEFAULT_MONEY_API_URL",
    "HostsProvider",
    "format_parameter",
    "load_api_config",
    "read_env_file",
    "resolve_settings",
]

DEFAULT_MONEY_API_URL = "https://money.yandex.ru/api"
DEFAULT_TIMEOUT_SECONDS = 30
DEFAULT_USER_AGENT = "money-api-sdk"

_ENV_PREFIX = "MONEY_API_"

_PARAMETER_TO_ENV_KEY = {
    "money_api_url": "MONEY_API_URL",
    "access_token": "MONEY_API_ACCESS_TOKEN",
    "timeout_seconds": "MONEY_API_TIMEOUT_SECONDS",
    "user_agent": "MONEY_API_USER_AGENT",
}


def format_parameter(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class ConfigError(Exception):
    """Raised when the supplied configuration is invalid."""


@dataclass(frozen=True)
class HostsProvider:
    """Resolves the logical API names to base URLs."""

    money_api: str = DEFAULT_MONEY_API_URL

    def get_money_api(self) -> str:
        return self.money_api


@dataclass(frozen=True)
class ApiParameters:
    """
    Explicit parameter bundle for constructing :class:`ApiConfig`.

    Callers can either instantiate this helper or pass the individual keyword
    arguments directly to :func:`load_api_config`.
    """

    money_api_url: Optional[str] = None
    access_token: Optional[str] = None
    timeout_seconds: Optional[int | str] = None
    user_agent: Optional[str] = None

    def as_overrides(self) -> Dict[str, str]:
        overrides: Dict[str, str] = {}
        for field_name, env_key in _PARAMETER_TO_ENV_KEY.items():
            value = getattr(self, field_name)
            if value is None:
                continue
            overrides[env_key] = format_parameter(value)
        return overrides


def _collect_parameter_overrides(
    parameters: Optional[ApiParameters],
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
            raise TypeError(f"Unknown API parameter '{key}'") from exc
        overrides[env_key] = format_parameter(value)
    return overrides


def read_env_file(path: Optional[str]) -> Dict[str, str]:
    """
    Read the ``MONEY_API_*`` settings from a ``.env`` file.

    Other keys are ignored. A missing file yields an empty mapping.
    """
    values: Dict[str, str] = {}
    if path is None:
        return values
    try:
        data = Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        return values

    for raw_line in data.splitlines():
        line = raw_line.strip()
        if line.startswith("export "):
            line = line[len("export "):].lstrip()
        if not line.startswith(_ENV_PREFIX) or "=" not in line:
            continue
        key, value = line.split("=", 1)
        values[key.strip()] = value.strip().strip('"').strip("'")
    return values


def resolve_settings(
    *,
    env_file: Optional[str] = ".env",
    base: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, str]] = None,
) -> Dict[str, str]:
    """
    Merge the ``MONEY_API_*`` settings from ``base`` (default
    :data:`os.environ`), then ``env_file`` for keys not yet set, then
    ``overrides``, which always win.
    """
    source = os.environ if base is None else base
    settings = {key: value for key, value in source.items() if key.startswith(_ENV_PREFIX)}
    for key, value in read_env_file(env_file).items():
        settings.setdefault(key, value)
    if overrides:
        settings.update(overrides)
    return settings


def _normalize_url(raw_url: str) -> str:
    url = raw_url.strip().rstrip("/")
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigError(f"MONEY_API_URL must be an http(s) URL, got '{raw_url}'")
    return url


def _parse_timeout(raw_value: str) -> int:
    try:
        timeout = int(raw_value)
    except ValueError as exc:
        raise ConfigError(
            f"MONEY_API_TIMEOUT_SECONDS must be an integer, got '{raw_value}'"
        ) from exc
    if timeout <= 0:
        raise ConfigError("MONEY_API_TIMEOUT_SECONDS must be greater than zero")
    return timeout


@dataclass(frozen=True)
class ApiConfig:
    money_api_url: str = DEFAULT_MONEY_API_URL
    access_token: Optional[str] = None
    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS
    user_agent: str = DEFAULT_USER_AGENT

    def __repr__(self) -> str:
        token = "***" if self.access_token else None
        return (
            f"ApiConfig(money_api_url={self.money_api_url!r}, access_token={token!r}, "
            f"timeout_seconds={self.timeout_seconds!r}, user_agent={self.user_agent!r})"
        )

    def hosts_provider(self) -> HostsProvider:
        return HostsProvider(money_api=self.money_api_url)

    @classmethod
    def from_mapping(cls, values: Mapping[str, str]) -> "ApiConfig":
        money_api_url = _normalize_url(values.get("MONEY_API_URL", DEFAULT_MONEY_API_URL))

        access_token = values.get("MONEY_API_ACCESS_TOKEN")
        if access_token is not None:
            access_token = access_token.strip() or None

        timeout_seconds = _parse_timeout(
            values.get("MONEY_API_TIMEOUT_SECONDS", str(DEFAULT_TIMEOUT_SECONDS))
        )
        user_agent = values.get("MONEY_API_USER_AGENT", DEFAULT_USER_AGENT).strip()
        if not user_agent:
            raise ConfigError("MONEY_API_USER_AGENT must not be empty")

        return cls(
            money_api_url=money_api_url,
            access_token=access_token,
            timeout_seconds=timeout_seconds,
            user_agent=user_agent,
        )

    @classmethod
    def from_env(
        cls,
        *,
        env_file: Optional[str] = ".env",
        overrides: Optional[Mapping[str, str]] = None,
        base: Optional[Mapping[str, str]] = None,
        parameters: Optional[ApiParameters] = None,
        money_api_url: Optional[str] = None,
        access_token: Optional[str] = None,
        timeout_seconds: Optional[int | str] = None,
        user_agent: Optional[str] = None,
    ) -> "ApiConfig":
        parameter_overrides = _collect_parameter_overrides(
            parameters,
            {
                "money_api_url": money_api_url,
                "access_token": access_token,
                "timeout_seconds": timeout_seconds,
                "user_agent": user_agent,
            },
        )
        merged_overrides = dict(overrides or {})
        merged_overrides.update(parameter_overrides)

        settings = resolve_settings(
            env_file=env_file,
            base=base,
            overrides=merged_overrides,
        )
        return cls.from_mapping(settings)


def load_api_config(
    *,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    parameters: Optional[ApiParameters] = None,
    money_api_url: Optional[str] = None,
    access_token: Optional[str] = None,
    timeout_seconds: Optional[int | str] = None,
    user_agent: Optional[str] = None,
) -> ApiConfig:
    """
    Convenience wrapper that mirrors :meth:`ApiConfig.from_env`.

    The configuration can be provided entirely through environment variables,
    a ``.env`` file, direct keyword arguments, or any combination of the three.
    """
    return ApiConfig.from_env(
        env_file=env_file,
        overrides=overrides,
        base=base,
        parameters=parameters,
        money_api_url=money_api_url,
        access_token=access_token,
        timeout_seconds=timeout_seconds,
        user_agent=user_agent,
    )
