"""Unit tests for the JSON type adapters."""

import json
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from money_api.core.errors import ParseError
from money_api.core.models import (
    Avatar,
    DigitalGoods,
    Good,
    MoneySource,
    ProcessPaymentBuilder,
    Status,
)
from money_api.core.typeadapters import (
    AvatarTypeAdapter,
    DigitalGoodsTypeAdapter,
    MoneySourceTypeAdapter,
    ProcessPaymentTypeAdapter,
    parse,
    serialize,
)


class TestAvatarTypeAdapter:
    """Test suite for avatar (de)serialization."""

    def test_parse(self) -> None:
        avatar = parse(
            '{"url": "https://avatars.example.com/1", "ts": "2014-12-11T13:49:03.000+03:00"}',
            AvatarTypeAdapter(),
        )

        assert avatar == Avatar(
            "https://avatars.example.com/1",
            datetime(2014, 12, 11, 10, 49, 3, tzinfo=timezone.utc),
        )

    def test_parse_zulu_suffix(self) -> None:
        avatar = AvatarTypeAdapter().from_json(
            {"url": "https://avatars.example.com/1", "ts": "2020-05-01T00:00:00Z"}
        )

        assert avatar.timestamp == datetime(2020, 5, 1, tzinfo=timezone.utc)

    def test_serialize_keeps_offset(self) -> None:
        avatar = Avatar(
            "https://avatars.example.com/1",
            datetime(2014, 12, 11, 13, 49, 3, tzinfo=timezone(timedelta(hours=3))),
        )

        assert json.loads(serialize(avatar, AvatarTypeAdapter())) == {
            "url": "https://avatars.example.com/1",
            "ts": "2014-12-11T13:49:03+03:00",
        }

    @pytest.mark.parametrize(
        "data",
        [
            {"ts": "2020-05-01T00:00:00Z"},
            {"url": "", "ts": "2020-05-01T00:00:00Z"},
            {"url": "https://a.example.com"},
            {"url": "https://a.example.com", "ts": "yesterday"},
            {"url": 42, "ts": "2020-05-01T00:00:00Z"},
            ["https://a.example.com"],
        ],
    )
    def test_invalid_documents(self, data) -> None:
        with pytest.raises(ParseError):
            AvatarTypeAdapter().from_json(data)


class TestMoneySourceTypeAdapter:
    def test_from_json(self) -> None:
        assert MoneySourceTypeAdapter().from_json({"id": "card-1"}) == MoneySource("card-1")

    def test_missing_id(self) -> None:
        with pytest.raises(ParseError):
            MoneySourceTypeAdapter().from_json({})


class TestDigitalGoodsTypeAdapter:
    def test_from_json(self, success_payload) -> None:
        goods = DigitalGoodsTypeAdapter().from_json(success_payload["digital_goods"])

        assert goods.article == (Good("EAV-0087182017", "87actmdbsv", "1234567"),)
        assert goods.bonus == (Good("14026553", "8aw2wu4a5l"),)

    def test_good_without_secret(self) -> None:
        with pytest.raises(ParseError):
            DigitalGoodsTypeAdapter().from_json({"article": [{"serial": "1"}]})

    def test_article_must_be_array(self) -> None:
        with pytest.raises(ParseError):
            DigitalGoodsTypeAdapter().from_json({"article": {"serial": "1", "secret": "s"}})

    def test_missing_sections_are_empty(self) -> None:
        assert DigitalGoodsTypeAdapter().from_json({}) == DigitalGoods()


class TestProcessPaymentTypeAdapter:
    """Test suite for the process-payment response adapter."""

    def test_from_json(self, success_payload) -> None:
        result = ProcessPaymentTypeAdapter().from_json(success_payload)

        assert result.status is Status.SUCCESS
        assert result.payment_id == "2ABCDE123456789"
        assert result.invoice_id == "1234567"
        assert result.balance == Decimal("1000.15")
        assert result.credit_amount == Decimal("99.50")
        assert result.payee_uid == "12345"
        assert len(result.digital_goods.article) == 1

    def test_parse_reads_amounts_exactly(self) -> None:
        result = ProcessPaymentTypeAdapter().parse(
            '{"status": "success", "payment_id": "p1", "balance": 0.1, "credit_amount": 12}'
        )

        assert result.balance == Decimal("0.1")
        assert result.credit_amount == Decimal(12)

    def test_round_trip(self, success_payload) -> None:
        adapter = ProcessPaymentTypeAdapter()
        original = adapter.from_json(success_payload)

        assert adapter.parse(adapter.serialize(original)) == original

    def test_round_trip_with_auth_fields(self) -> None:
        adapter = ProcessPaymentTypeAdapter()
        original = (
            ProcessPaymentBuilder()
            .set_status(Status.EXT_AUTH_REQUIRED)
            .set_acs_uri("https://acs.example.com/3ds")
            .set_acs_params({"MD": "723613-7431F11492F4F2D0", "PaReq": "eJxVUl1T2zAQ"})
            .set_invoice_id("1234567")
            .create()
        )

        parsed = adapter.parse(adapter.serialize(original))

        assert parsed == original
        assert parsed.acs_params["MD"] == "723613-7431F11492F4F2D0"

    def test_to_json_omits_missing_fields(self) -> None:
        result = ProcessPaymentBuilder().set_status(Status.IN_PROGRESS).set_next_retry(5000).create()

        assert ProcessPaymentTypeAdapter().to_json(result) == {
            "status": "in_progress",
            "next_retry": 5000,
        }

    def test_refused_with_unblock_uri(self) -> None:
        result = ProcessPaymentTypeAdapter().from_json(
            {
                "status": "refused",
                "error": "account_blocked",
                "account_unblock_uri": "https://money.example.com/unblock",
            }
        )

        assert result.status is Status.REFUSED
        assert result.account_unblock_uri == "https://money.example.com/unblock"

    def test_success_without_payment_id_is_parse_error(self) -> None:
        with pytest.raises(ParseError, match="payment_id"):
            ProcessPaymentTypeAdapter().from_json({"status": "success"})

    def test_missing_status_is_parse_error(self) -> None:
        with pytest.raises(ParseError, match="status"):
            ProcessPaymentTypeAdapter().from_json({"payment_id": "p1"})

    def test_malformed_json_is_parse_error(self) -> None:
        with pytest.raises(ParseError, match="Malformed JSON"):
            ProcessPaymentTypeAdapter().parse('{"status": "success",')

    @pytest.mark.parametrize(
        "data",
        [
            {"status": "refused", "balance": "lots"},
            {"status": "refused", "balance": True},
            {"status": "in_progress", "next_retry": "soon"},
            {"status": "in_progress", "next_retry": -5},
            {"status": "refused", "payer": 41001},
            {"status": "ext_auth_required", "acs_params": ["MD"]},
            {"status": "ext_auth_required", "acs_params": {"MD": 1}},
            "success",
        ],
    )
    def test_wrong_types_are_parse_errors(self, data) -> None:
        with pytest.raises(ParseError):
            ProcessPaymentTypeAdapter().from_json(data)


class TestNumbers:
    """Test suite for amount and integer handling on the wire."""

    @pytest.mark.parametrize(
        "text",
        [
            '{"status": "in_progress", "next_retry": Infinity}',
            '{"status": "in_progress", "next_retry": NaN}',
            '{"status": "refused", "balance": NaN}',
            '{"status": "refused", "credit_amount": -Infinity}',
        ],
    )
    def test_non_finite_tokens_are_parse_errors(self, text) -> None:
        with pytest.raises(ParseError):
            ProcessPaymentTypeAdapter().parse(text)

    @pytest.mark.parametrize(
        "data",
        [
            {"status": "refused", "balance": float("nan")},
            {"status": "refused", "balance": "Infinity"},
            {"status": "in_progress", "next_retry": float("inf")},
            {"status": "in_progress", "next_retry": Decimal("NaN")},
        ],
    )
    def test_non_finite_values_are_parse_errors(self, data) -> None:
        with pytest.raises(ParseError):
            ProcessPaymentTypeAdapter().from_json(data)

    def test_high_precision_amount_round_trip(self) -> None:
        adapter = ProcessPaymentTypeAdapter()
        original = (
            ProcessPaymentBuilder()
            .set_status(Status.SUCCESS)
            .set_payment_id("p1")
            .set_balance(Decimal("12345678901234567.89"))
            .set_credit_amount(Decimal("0.10"))
            .create()
        )

        text = adapter.serialize(original)
        parsed = adapter.parse(text)

        assert '"balance": 12345678901234567.89' in text
        assert '"credit_amount": 0.10' in text
        assert parsed == original
        assert parsed.balance == Decimal("12345678901234567.89")

    def test_serialized_text_is_standard_json(self, success_payload) -> None:
        adapter = ProcessPaymentTypeAdapter()

        decoded = json.loads(adapter.serialize(adapter.from_json(success_payload)))

        assert decoded["payment_id"] == "2ABCDE123456789"
        assert decoded["digital_goods"]["bonus"] == [{"serial": "14026553", "secret": "8aw2wu4a5l"}]
