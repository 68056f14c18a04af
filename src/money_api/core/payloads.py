"""
Request descriptors for the money API methods.

A request carries the HTTP method, the path relative to the money API host
and the form parameters to submit. Parameters set to ``None`` are never
stored, so they never reach the wire.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Generic, Optional, TypeVar, Union

from .config import HostsProvider, format_parameter
from .errors import ValidationError
from .models import MoneySource, ProcessPayment
from .typeadapters import ProcessPaymentTypeAdapter, TypeAdapter

__all__ = [
    "ApiRequest",
    "ProcessPaymentRequest",
    "TestResult",
    "build_process_payment_request",
]

T = TypeVar("T")


class TestResult(Enum):
    """Outcomes the sandbox can simulate for a test payment."""

    __test__ = False

    SUCCESS = "success"
    CONTRACT_NOT_FOUND = "contract_not_found"
    NOT_ENOUGH_FUNDS = "not_enough_funds"
    LIMIT_EXCEEDED = "limit_exceeded"
    MONEY_SOURCE_NOT_AVAILABLE = "money_source_not_available"
    ILLEGAL_PARAM_CSC = "illegal_param_csc"
    PAYMENT_REFUSED = "payment_refused"
    AUTHORIZATION_REJECT = "authorization_reject"
    ACCOUNT_BLOCKED = "account_blocked"
    ILLEGAL_PARAM_EXT_AUTH_SUCCESS_URI = "illegal_param_ext_auth_success_uri"
    ILLEGAL_PARAM_EXT_AUTH_FAIL_URI = "illegal_param_ext_auth_fail_uri"

    @property
    def code(self) -> str:
        return self.value

    @classmethod
    def from_code(cls, code: str) -> "TestResult":
        for member in cls:
            if member.value == code:
                return member
        raise ValidationError(f"Unknown test result code '{code}'")


class ApiRequest(Generic[T]):
    """
    Base class for single-use API requests.

    Subclasses define :attr:`path` and fill the parameters in their
    constructor; the response is parsed by the adapter given here.
    """

    method = "POST"
    path = ""

    def __init__(self, adapter: TypeAdapter[T]) -> None:
        self.adapter = adapter
        self._parameters: Dict[str, Any] = {}

    def add_parameter(self, name: str, value: Any) -> None:
        if value is None:
            return
        self._parameters[name] = value

    @property
    def parameters(self) -> Dict[str, Any]:
        return dict(self._parameters)

    def form_data(self) -> Dict[str, str]:
        return {name: format_parameter(value) for name, value in self._parameters.items()}

    def request_url(self, hosts_provider: HostsProvider) -> str:
        return hosts_provider.get_money_api() + self.path

    def parse_response(self, payload: Any) -> T:
        return self.adapter.from_json(payload)


class ProcessPaymentRequest(ApiRequest[ProcessPayment]):
    """
    Request for payment processing. Requires an authorized session.

    Send it again with the same ``request_id`` while the result is
    :attr:`Status.IN_PROGRESS <money_api.core.models.Status.IN_PROGRESS>`;
    :meth:`repeat` builds that follow-up request.
    """

    path = "/process-payment"

    def __init__(
        self,
        request_id: Optional[str],
        money_source: Optional[Union[MoneySource, str]] = None,
        csc: Optional[str] = None,
        ext_auth_success_uri: Optional[str] = None,
        ext_auth_fail_uri: Optional[str] = None,
        *,
        adapter: Optional[TypeAdapter[ProcessPayment]] = None,
    ) -> None:
        if request_id is None or request_id == "":
            raise ValidationError("request_id is null or empty")
        if not isinstance(request_id, str):
            raise ValidationError("request_id must be a string")

        super().__init__(adapter or ProcessPaymentTypeAdapter())

        if isinstance(money_source, MoneySource):
            self.add_parameter("money_source", money_source.id)
        else:
            self.add_parameter("money_source", money_source or None)
        self.add_parameter("request_id", request_id)
        self.add_parameter("csc", csc)
        self.add_parameter("ext_auth_success_uri", ext_auth_success_uri)
        self.add_parameter("ext_auth_fail_uri", ext_auth_fail_uri)

    @classmethod
    def repeat(cls, request_id: str) -> "ProcessPaymentRequest":
        return cls(request_id)

    @property
    def request_id(self) -> str:
        return self._parameters["request_id"]

    def test_card_available(self) -> "ProcessPaymentRequest":
        """Ask the sandbox to offer a test card. Also sets ``test_payment``."""
        self.add_parameter("test_payment", True)
        self.add_parameter("test_card", True)
        return self

    def set_test_result(self, test_result: Union[TestResult, str]) -> "ProcessPaymentRequest":
        """Ask the sandbox for a specific outcome. Also sets ``test_payment``."""
        if not isinstance(test_result, TestResult):
            test_result = TestResult.from_code(test_result)
        self.add_parameter("test_payment", True)
        self.add_parameter("test_result", test_result.code)
        return self


def build_process_payment_request(
    request_id: str,
    *,
    money_source: Optional[Union[MoneySource, str]] = None,
    csc: Optional[str] = None,
    ext_auth_success_uri: Optional[str] = None,
    ext_auth_fail_uri: Optional[str] = None,
    test_card: bool = False,
    test_result: Optional[Union[TestResult, str]] = None,
) -> ProcessPaymentRequest:
    """
    Build a :class:`ProcessPaymentRequest` and apply the sandbox options.
    """
    request = ProcessPaymentRequest(
        request_id,
        money_source=money_source,
        csc=csc,
        ext_auth_success_uri=ext_auth_success_uri,
        ext_auth_fail_uri=ext_auth_fail_uri,
    )
    if test_card:
        request.test_card_available()
    if test_result is not None:
        request.set_test_result(test_result)
    return request
