"""
Translation between the money API wire JSON and the domain models.

Adapters are ordinary objects: create one where it is needed and pass it
along. They build models through the models' own constructors and builders,
so validation rules live in one place; any violation found while reading
JSON is reported as :class:`~money_api.core.errors.ParseError`.
"""

from __future__ import annotations

import json
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Generic, List, Mapping, Optional, TypeVar

from .errors import ParseError, ValidationError
from .models import (
    Avatar,
    DigitalGoods,
    Good,
    MoneySource,
    ProcessPayment,
    ProcessPaymentBuilder,
    Status,
)

__all__ = [
    "AvatarTypeAdapter",
    "DigitalGoodsTypeAdapter",
    "MoneySourceTypeAdapter",
    "ProcessPaymentTypeAdapter",
    "TypeAdapter",
    "parse",
    "serialize",
]

T = TypeVar("T")


def _expect_object(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ParseError(f"{what} must be a JSON object, got {type(data).__name__}")
    return data


def _get_string(data: Mapping[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ParseError(f"'{key}' must be a string, got {type(value).__name__}")
    return value


def _get_required_string(data: Mapping[str, Any], key: str) -> str:
    value = _get_string(data, key)
    if value is None:
        raise ParseError(f"Required field '{key}' is missing")
    return value


def _get_decimal(data: Mapping[str, Any], key: str) -> Optional[Decimal]:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool):
        raise ParseError(f"'{key}' must be a number, got bool")
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float, str)):
        try:
            amount = Decimal(str(value))
        except InvalidOperation as exc:
            raise ParseError(f"'{key}' is not a valid amount: {value!r}") from exc
    else:
        raise ParseError(f"'{key}' must be a number, got {type(value).__name__}")
    if not amount.is_finite():
        raise ParseError(f"'{key}' must be a finite amount, got {value!r}")
    return amount


def _get_int(data: Mapping[str, Any], key: str) -> Optional[int]:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, Decimal, float)):
        raise ParseError(f"'{key}' must be an integer, got {type(value).__name__}")
    if not isinstance(value, int) and not Decimal(value).is_finite():
        raise ParseError(f"'{key}' must be a finite integer, got {value!r}")
    if int(value) != value:
        raise ParseError(f"'{key}' must be an integer, got {value!r}")
    return int(value)


def _parse_datetime(value: str, key: str) -> datetime:
    text = value[:-1] + "+00:00" if value.endswith("Z") else value
    try:
        return datetime.fromisoformat(text)
    except ValueError as exc:
        raise ParseError(f"'{key}' is not an ISO 8601 date-time: {value!r}") from exc


def _reject_constant(token: str) -> Any:
    raise ValueError(f"{token} is not a valid JSON number")


def _encode(value: Any) -> str:
    """JSON-encode ``value``, writing :class:`Decimal` amounts digit for digit."""
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise ValueError(f"Cannot encode non-finite amount {value}")
        return str(value)
    if isinstance(value, Mapping):
        members = (
            f"{json.dumps(str(key), ensure_ascii=False)}: {_encode(item)}"
            for key, item in value.items()
        )
        return "{" + ", ".join(members) + "}"
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(_encode(item) for item in value) + "]"
    return json.dumps(value, ensure_ascii=False, allow_nan=False)


def _put(target: Dict[str, Any], key: str, value: Any) -> None:
    if value is not None:
        target[key] = value


class TypeAdapter(Generic[T]):
    """
    Bidirectional mapping between a JSON document and a model instance.

    Subclasses implement :meth:`from_json` and :meth:`to_json` over decoded
    JSON values; :meth:`parse` and :meth:`serialize` work on text.
    """

    def from_json(self, data: Any) -> T:
        raise NotImplementedError

    def to_json(self, value: T) -> Dict[str, Any]:
        raise NotImplementedError

    def parse(self, text: str) -> T:
        try:
            data = json.loads(text, parse_float=Decimal, parse_constant=_reject_constant)
        except (TypeError, ValueError) as exc:
            raise ParseError(f"Malformed JSON: {exc}") from exc
        return self.from_json(data)

    def serialize(self, value: T) -> str:
        return _encode(self.to_json(value))


class AvatarTypeAdapter(TypeAdapter[Avatar]):
    def from_json(self, data: Any) -> Avatar:
        data = _expect_object(data, "avatar")
        url = _get_required_string(data, "url")
        timestamp = _parse_datetime(_get_required_string(data, "ts"), "ts")
        try:
            return Avatar(url=url, timestamp=timestamp)
        except ValidationError as exc:
            raise ParseError(str(exc)) from exc

    def to_json(self, value: Avatar) -> Dict[str, Any]:
        return {"url": value.url, "ts": value.timestamp.isoformat()}


class MoneySourceTypeAdapter(TypeAdapter[MoneySource]):
    def from_json(self, data: Any) -> MoneySource:
        data = _expect_object(data, "money source")
        try:
            return MoneySource(_get_required_string(data, "id"))
        except ValidationError as exc:
            raise ParseError(str(exc)) from exc

    def to_json(self, value: MoneySource) -> Dict[str, Any]:
        return {"id": value.id}


class DigitalGoodsTypeAdapter(TypeAdapter[DigitalGoods]):
    def _goods_from_json(self, data: Mapping[str, Any], key: str) -> List[Good]:
        items = data.get(key)
        if items is None:
            return []
        if not isinstance(items, list):
            raise ParseError(f"'{key}' must be a JSON array")

        goods = []
        for item in items:
            item = _expect_object(item, f"'{key}' item")
            try:
                goods.append(
                    Good(
                        serial=_get_required_string(item, "serial"),
                        secret=_get_required_string(item, "secret"),
                        merchant_article_id=_get_string(item, "merchantArticleId"),
                    )
                )
            except ValidationError as exc:
                raise ParseError(str(exc)) from exc
        return goods

    @staticmethod
    def _good_to_json(good: Good) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        _put(result, "merchantArticleId", good.merchant_article_id)
        result["serial"] = good.serial
        result["secret"] = good.secret
        return result

    def from_json(self, data: Any) -> DigitalGoods:
        data = _expect_object(data, "digital goods")
        return DigitalGoods(
            article=tuple(self._goods_from_json(data, "article")),
            bonus=tuple(self._goods_from_json(data, "bonus")),
        )

    def to_json(self, value: DigitalGoods) -> Dict[str, Any]:
        return {
            "article": [self._good_to_json(good) for good in value.article],
            "bonus": [self._good_to_json(good) for good in value.bonus],
        }


class ProcessPaymentTypeAdapter(TypeAdapter[ProcessPayment]):
    """Reads and writes the ``process-payment`` response document."""

    def __init__(self, digital_goods_adapter: Optional[DigitalGoodsTypeAdapter] = None) -> None:
        self.digital_goods_adapter = digital_goods_adapter or DigitalGoodsTypeAdapter()

    def from_json(self, data: Any) -> ProcessPayment:
        data = _expect_object(data, "process-payment response")

        acs_params = data.get("acs_params")
        if acs_params is not None:
            acs_params = dict(_expect_object(acs_params, "'acs_params'"))

        digital_goods = data.get("digital_goods")
        if digital_goods is not None:
            digital_goods = self.digital_goods_adapter.from_json(digital_goods)

        builder = (
            ProcessPaymentBuilder()
            .set_status(Status(_get_required_string(data, "status")))
            .set_error(_get_string(data, "error"))
            .set_invoice_id(_get_string(data, "invoice_id"))
            .set_acs_uri(_get_string(data, "acs_uri"))
            .set_acs_params(acs_params)
            .set_next_retry(_get_int(data, "next_retry"))
            .set_payment_id(_get_string(data, "payment_id"))
            .set_balance(_get_decimal(data, "balance"))
            .set_payer(_get_string(data, "payer"))
            .set_payee(_get_string(data, "payee"))
            .set_credit_amount(_get_decimal(data, "credit_amount"))
            .set_account_unblock_uri(_get_string(data, "account_unblock_uri"))
            .set_payee_uid(_get_string(data, "payee_uid"))
            .set_hold_for_pickup_link(_get_string(data, "hold_for_pickup_link"))
            .set_digital_goods(digital_goods)
        )
        try:
            return builder.create()
        except ValidationError as exc:
            raise ParseError(str(exc)) from exc

    def to_json(self, value: ProcessPayment) -> Dict[str, Any]:
        result: Dict[str, Any] = {"status": value.status.code}
        _put(result, "error", value.error)
        _put(result, "invoice_id", value.invoice_id)
        _put(result, "acs_uri", value.acs_uri)
        if value.acs_params:
            result["acs_params"] = dict(value.acs_params)
        _put(result, "next_retry", value.next_retry)
        _put(result, "payment_id", value.payment_id)
        if value.balance is not None:
            result["balance"] = value.balance
        _put(result, "payer", value.payer)
        _put(result, "payee", value.payee)
        if value.credit_amount is not None:
            result["credit_amount"] = value.credit_amount
        _put(result, "account_unblock_uri", value.account_unblock_uri)
        _put(result, "payee_uid", value.payee_uid)
        _put(result, "hold_for_pickup_link", value.hold_for_pickup_link)
        if value.digital_goods is not None:
            result["digital_goods"] = self.digital_goods_adapter.to_json(value.digital_goods)
        return result


def parse(text: str, adapter: TypeAdapter[T]) -> T:
    """Decode ``text`` with ``adapter``."""
    return adapter.parse(text)


def serialize(value: T, adapter: TypeAdapter[T]) -> str:
    """Encode ``value`` with ``adapter``."""
    return adapter.serialize(value)
