"""
HTTP client helpers for the money API.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, TypeVar, Union

import requests

from .config import ApiConfig, HostsProvider
from .errors import ParseError
from .models import MoneySource, ProcessPayment
from .payloads import ApiRequest, TestResult, build_process_payment_request

__all__ = [
    "ApiClient",
    "execute_request",
]

T = TypeVar("T")


def _post_form(
    session: requests.Session,
    url: str,
    data: Dict[str, str],
    *,
    headers: Dict[str, str],
    timeout: int,
) -> Any:
    response = session.post(url, data=data, headers=headers, timeout=timeout)
    if response.status_code >= 400:
        raise RuntimeError(
            f"Money API responded with {response.status_code}: {response.text}"
        )
    try:
        return response.json()
    except ValueError as exc:
        raise ParseError(
            f"Failed to parse JSON from money API at {url}: {response.text}"
        ) from exc


def _build_headers(config: ApiConfig) -> Dict[str, str]:
    headers = {
        "User-Agent": config.user_agent,
        "Accept": "application/json",
    }
    if config.access_token:
        headers["Authorization"] = f"Bearer {config.access_token}"
    return headers


def execute_request(
    session: requests.Session,
    config: ApiConfig,
    request: ApiRequest[T],
    *,
    hosts_provider: Optional[HostsProvider] = None,
) -> T:
    """
    Send ``request`` through ``session`` and parse the response with the
    request's own adapter.
    """
    hosts = hosts_provider or config.hosts_provider()
    url = request.request_url(hosts)
    logging.info("Submitting %s request to %s", request.method, url)
    payload = _post_form(
        session,
        url,
        request.form_data(),
        headers=_build_headers(config),
        timeout=config.timeout_seconds,
    )
    return request.parse_response(payload)


class ApiClient:
    """
    Thin convenience wrapper around the money API endpoints.

    The session is expected to be authorized already: the configured access
    token is sent as a bearer token, nothing more.
    """

    def __init__(
        self,
        config: ApiConfig,
        *,
        session: Optional[requests.Session] = None,
        hosts_provider: Optional[HostsProvider] = None,
    ) -> None:
        self.config = config
        self.session = session or requests.Session()
        self.hosts_provider = hosts_provider or config.hosts_provider()

    def execute(self, request: ApiRequest[T]) -> T:
        return execute_request(
            self.session, self.config, request, hosts_provider=self.hosts_provider
        )

    def process_payment(
        self,
        request_id: str,
        *,
        money_source: Optional[Union[MoneySource, str]] = None,
        csc: Optional[str] = None,
        ext_auth_success_uri: Optional[str] = None,
        ext_auth_fail_uri: Optional[str] = None,
        test_card: bool = False,
        test_result: Optional[Union[TestResult, str]] = None,
    ) -> ProcessPayment:
        request = build_process_payment_request(
            request_id,
            money_source=money_source,
            csc=csc,
            ext_auth_success_uri=ext_auth_success_uri,
            ext_auth_fail_uri=ext_auth_fail_uri,
            test_card=test_card,
            test_result=test_result,
        )
        result = self.execute(request)
        logging.info("Payment request %s finished with status %s", request_id, result.status.code)
        if result.requires_retry:
            logging.info(
                "Payment request %s is in progress, retry after %s ms",
                request_id,
                result.next_retry,
            )
        return result
