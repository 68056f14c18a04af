"""
Immutable domain models returned by the money API and the builders that
assemble them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from .errors import ConsistencyError, ValidationError

__all__ = [
    "Avatar",
    "DigitalGoods",
    "Good",
    "MoneySource",
    "ProcessPayment",
    "ProcessPaymentBuilder",
    "Status",
    "WALLET",
]


def _require_text(value: Any, field_name: str) -> str:
    if value is None:
        raise ValidationError(f"{field_name} is null")
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string, got {type(value).__name__}")
    if not value:
        raise ValidationError(f"{field_name} is empty")
    return value


def _optional_text(value: Any, field_name: str) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string, got {type(value).__name__}")
    return value


def _optional_amount(value: Any, field_name: str) -> Optional[Decimal]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (Decimal, int)):
        raise ValidationError(f"{field_name} must be a Decimal, got {type(value).__name__}")
    amount = Decimal(value)
    if not amount.is_finite():
        raise ValidationError(f"{field_name} must be a finite amount, got {amount}")
    return amount


class Status(Enum):
    """Outcome of a process-payment style operation."""

    SUCCESS = "success"
    REFUSED = "refused"
    IN_PROGRESS = "in_progress"
    EXT_AUTH_REQUIRED = "ext_auth_required"
    UNKNOWN = "unknown"

    @classmethod
    def _missing_(cls, value: object) -> "Status":
        logging.warning("Unknown payment status %r, treating it as unknown", value)
        return cls.UNKNOWN

    @property
    def code(self) -> str:
        return self.value


@dataclass(frozen=True)
class Avatar:
    """
    Account avatar: picture URL and the time it was last changed.

    Timestamps compare by instant, so the same moment expressed in different
    UTC offsets yields equal avatars with equal hashes. Naive timestamps are
    taken to be UTC.
    """

    url: str
    timestamp: datetime

    def __post_init__(self) -> None:
        _require_text(self.url, "avatar url")
        if self.timestamp is None:
            raise ValidationError("avatar timestamp is null")
        if not isinstance(self.timestamp, datetime):
            raise ValidationError(
                f"avatar timestamp must be a datetime, got {type(self.timestamp).__name__}"
            )
        if self.timestamp.tzinfo is None:
            object.__setattr__(self, "timestamp", self.timestamp.replace(tzinfo=timezone.utc))


@dataclass(frozen=True)
class MoneySource:
    """Funding instrument selected by the payer, referenced by its id."""

    id: str

    def __post_init__(self) -> None:
        _require_text(self.id, "money source id")


WALLET = MoneySource("wallet")


@dataclass(frozen=True)
class Good:
    """Single digital item (voucher, code, ticket) delivered after payment."""

    serial: str
    secret: str
    merchant_article_id: Optional[str] = None

    def __post_init__(self) -> None:
        _require_text(self.serial, "good serial")
        _require_text(self.secret, "good secret")
        _optional_text(self.merchant_article_id, "merchant article id")


@dataclass(frozen=True)
class DigitalGoods:
    """Purchased articles and the bonuses that came with them."""

    article: Tuple[Good, ...] = ()
    bonus: Tuple[Good, ...] = ()

    def __post_init__(self) -> None:
        for name in ("article", "bonus"):
            goods = getattr(self, name)
            if goods is None:
                goods = ()
            if not isinstance(goods, (list, tuple)):
                raise ValidationError(
                    f"digital goods {name} must be a list of Good items, got {type(goods).__name__}"
                )
            goods = tuple(goods)
            for good in goods:
                if not isinstance(good, Good):
                    raise ValidationError(f"digital goods {name} must contain Good items")
            object.__setattr__(self, name, goods)


@dataclass(frozen=True)
class ProcessPayment:
    """
    Result of the ``process-payment`` call.

    Usually assembled with :class:`ProcessPaymentBuilder` (or :meth:`builder`).
    Construction fails unless ``payment_id`` is present whenever the status is
    :attr:`Status.SUCCESS`.
    """

    status: Status
    error: Optional[str] = None
    invoice_id: Optional[str] = None
    acs_uri: Optional[str] = None
    acs_params: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType({}), hash=False
    )
    next_retry: Optional[int] = None
    payment_id: Optional[str] = None
    balance: Optional[Decimal] = None
    payer: Optional[str] = None
    payee: Optional[str] = None
    credit_amount: Optional[Decimal] = None
    account_unblock_uri: Optional[str] = None
    payee_uid: Optional[str] = None
    hold_for_pickup_link: Optional[str] = None
    digital_goods: Optional[DigitalGoods] = None

    def __post_init__(self) -> None:
        common = _validated_common_fields(
            status=self.status,
            error=self.error,
            invoice_id=self.invoice_id,
            acs_uri=self.acs_uri,
            acs_params=self.acs_params,
            next_retry=self.next_retry,
        )
        payment_id = _optional_text(self.payment_id, "payment_id")
        if common["status"] is Status.SUCCESS and not payment_id:
            raise ConsistencyError("payment_id is null when status is success")
        if self.digital_goods is not None and not isinstance(self.digital_goods, DigitalGoods):
            raise ValidationError("digital_goods must be a DigitalGoods instance")

        for name, value in common.items():
            object.__setattr__(self, name, value)
        object.__setattr__(self, "balance", _optional_amount(self.balance, "balance"))
        object.__setattr__(
            self, "credit_amount", _optional_amount(self.credit_amount, "credit_amount")
        )
        for name in (
            "payer",
            "payee",
            "account_unblock_uri",
            "payee_uid",
            "hold_for_pickup_link",
        ):
            _optional_text(getattr(self, name), name)

    @staticmethod
    def builder() -> "ProcessPaymentBuilder":
        return ProcessPaymentBuilder()

    @property
    def is_success(self) -> bool:
        return self.status is Status.SUCCESS

    @property
    def requires_retry(self) -> bool:
        """True while the payment is still being processed by the server."""
        return self.status is Status.IN_PROGRESS


def _validated_common_fields(
    *,
    status: Optional[Status],
    error: Optional[str],
    invoice_id: Optional[str],
    acs_uri: Optional[str],
    acs_params: Optional[Mapping[str, str]],
    next_retry: Optional[int],
) -> Dict[str, Any]:
    """
    Validate the fields every process-payment style result carries.

    Returns keyword arguments ready to be passed to the result constructor.
    """
    if status is None:
        raise ValidationError("status is null")
    if not isinstance(status, Status):
        raise ValidationError(f"status must be a Status, got {type(status).__name__}")

    if next_retry is not None:
        if isinstance(next_retry, bool) or not isinstance(next_retry, int):
            raise ValidationError("next_retry must be an integer number of milliseconds")
        if next_retry < 0:
            raise ValidationError("next_retry must not be negative")

    params: Dict[str, str] = {}
    for key, value in (acs_params or {}).items():
        params[_require_text(key, "acs param name")] = _require_text(value, f"acs param '{key}'")

    return {
        "status": status,
        "error": _optional_text(error, "error"),
        "invoice_id": _optional_text(invoice_id, "invoice_id"),
        "acs_uri": _optional_text(acs_uri, "acs_uri"),
        "acs_params": MappingProxyType(params),
        "next_retry": next_retry,
    }


class ProcessPaymentBuilder:
    """
    Fluent builder for :class:`ProcessPayment`.

    The builder may be reused: every :meth:`create` call snapshots the values
    set so far into a new immutable instance.
    """

    def __init__(self) -> None:
        self._status: Optional[Status] = None
        self._error: Optional[str] = None
        self._invoice_id: Optional[str] = None
        self._acs_uri: Optional[str] = None
        self._acs_params: Dict[str, str] = {}
        self._next_retry: Optional[int] = None
        self._payment_id: Optional[str] = None
        self._balance: Optional[Decimal] = None
        self._payer: Optional[str] = None
        self._payee: Optional[str] = None
        self._credit_amount: Optional[Decimal] = None
        self._account_unblock_uri: Optional[str] = None
        self._payee_uid: Optional[str] = None
        self._hold_for_pickup_link: Optional[str] = None
        self._digital_goods: Optional[DigitalGoods] = None

    def set_status(self, status: Optional[Status]) -> "ProcessPaymentBuilder":
        self._status = status
        return self

    def set_error(self, error: Optional[str]) -> "ProcessPaymentBuilder":
        self._error = error
        return self

    def set_invoice_id(self, invoice_id: Optional[str]) -> "ProcessPaymentBuilder":
        self._invoice_id = invoice_id
        return self

    def set_acs_uri(self, acs_uri: Optional[str]) -> "ProcessPaymentBuilder":
        self._acs_uri = acs_uri
        return self

    def set_acs_params(
        self, acs_params: Optional[Mapping[str, str]]
    ) -> "ProcessPaymentBuilder":
        self._acs_params = dict(acs_params or {})
        return self

    def set_next_retry(self, next_retry: Optional[int]) -> "ProcessPaymentBuilder":
        self._next_retry = next_retry
        return self

    def set_payment_id(self, payment_id: Optional[str]) -> "ProcessPaymentBuilder":
        self._payment_id = payment_id
        return self

    def set_balance(self, balance: Optional[Decimal]) -> "ProcessPaymentBuilder":
        self._balance = balance
        return self

    def set_payer(self, payer: Optional[str]) -> "ProcessPaymentBuilder":
        self._payer = payer
        return self

    def set_payee(self, payee: Optional[str]) -> "ProcessPaymentBuilder":
        self._payee = payee
        return self

    def set_credit_amount(self, credit_amount: Optional[Decimal]) -> "ProcessPaymentBuilder":
        self._credit_amount = credit_amount
        return self

    def set_account_unblock_uri(
        self, account_unblock_uri: Optional[str]
    ) -> "ProcessPaymentBuilder":
        self._account_unblock_uri = account_unblock_uri
        return self

    def set_payee_uid(self, payee_uid: Optional[str]) -> "ProcessPaymentBuilder":
        self._payee_uid = payee_uid
        return self

    def set_hold_for_pickup_link(
        self, hold_for_pickup_link: Optional[str]
    ) -> "ProcessPaymentBuilder":
        self._hold_for_pickup_link = hold_for_pickup_link
        return self

    def set_digital_goods(
        self, digital_goods: Optional[DigitalGoods]
    ) -> "ProcessPaymentBuilder":
        self._digital_goods = digital_goods
        return self

    def create(self) -> ProcessPayment:
        return ProcessPayment(
            status=self._status,
            error=self._error,
            invoice_id=self._invoice_id,
            acs_uri=self._acs_uri,
            acs_params=dict(self._acs_params),
            next_retry=self._next_retry,
            payment_id=self._payment_id,
            balance=self._balance,
            payer=self._payer,
            payee=self._payee,
            credit_amount=self._credit_amount,
            account_unblock_uri=self._account_unblock_uri,
            payee_uid=self._payee_uid,
            hold_for_pickup_link=self._hold_for_pickup_link,
            digital_goods=self._digital_goods,
        )

    build = create
