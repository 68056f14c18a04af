"""
Public, high-level helpers for interacting with the money API.
"""

from __future__ import annotations

from typing import Mapping, Optional, Union

import requests

from .core.client import ApiClient
from .core.config import ApiConfig, ApiParameters, load_api_config
from .core.models import MoneySource, ProcessPayment
from .core.payloads import TestResult

__all__ = [
    "create_api_client",
    "process_payment",
]


def _resolve_config(
    *,
    config: Optional[ApiConfig],
    env_file: Optional[str],
    overrides: Optional[Mapping[str, str]],
    base: Optional[Mapping[str, str]],
    parameters: Optional[ApiParameters],
    money_api_url: Optional[str],
    access_token: Optional[str],
    timeout_seconds: Optional[int | str],
    user_agent: Optional[str],
) -> ApiConfig:
    if config is not None:
        extras = (
            overrides,
            base,
            parameters,
            money_api_url,
            access_token,
            timeout_seconds,
            user_agent,
        )
        if any(item is not None and item != {} for item in extras):
            raise ValueError(
                "Provide either a pre-built ApiConfig or individual parameters, not both."
            )
        return config

    return load_api_config(
        env_file=env_file,
        overrides=overrides,
        base=base,
        parameters=parameters,
        money_api_url=money_api_url,
        access_token=access_token,
        timeout_seconds=timeout_seconds,
        user_agent=user_agent,
    )


def create_api_client(
    *,
    config: Optional[ApiConfig] = None,
    session: Optional[requests.Session] = None,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    parameters: Optional[ApiParameters] = None,
    money_api_url: Optional[str] = None,
    access_token: Optional[str] = None,
    timeout_seconds: Optional[int | str] = None,
    user_agent: Optional[str] = None,
) -> ApiClient:
    """
    Construct an :class:`ApiClient`.

    Callers can either supply a ready-made :class:`ApiConfig` or let the
    helper assemble one from environment data.
    """
    cfg = _resolve_config(
        config=config,
        env_file=env_file,
        overrides=overrides,
        base=base,
        parameters=parameters,
        money_api_url=money_api_url,
        access_token=access_token,
        timeout_seconds=timeout_seconds,
        user_agent=user_agent,
    )
    return ApiClient(cfg, session=session)


def process_payment(
    request_id: str,
    *,
    money_source: Optional[Union[MoneySource, str]] = None,
    csc: Optional[str] = None,
    ext_auth_success_uri: Optional[str] = None,
    ext_auth_fail_uri: Optional[str] = None,
    test_card: bool = False,
    test_result: Optional[Union[TestResult, str]] = None,
    config: Optional[ApiConfig] = None,
    session: Optional[requests.Session] = None,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    parameters: Optional[ApiParameters] = None,
    money_api_url: Optional[str] = None,
    access_token: Optional[str] = None,
    timeout_seconds: Optional[int | str] = None,
    user_agent: Optional[str] = None,
) -> ProcessPayment:
    """
    One-call helper: build the client, send ``process-payment``, parse the result.
    """
    client = create_api_client(
        config=config,
        session=session,
        env_file=env_file,
        overrides=overrides,
        base=base,
        parameters=parameters,
        money_api_url=money_api_url,
        access_token=access_token,
        timeout_seconds=timeout_seconds,
        user_agent=user_agent,
    )
    return client.process_payment(
        request_id,
        money_source=money_source,
        csc=csc,
        ext_auth_success_uri=ext_auth_success_uri,
        ext_auth_fail_uri=ext_auth_fail_uri,
        test_card=test_card,
        test_result=test_result,
    )
