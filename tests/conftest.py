"""Pytest configuration and shared fixtures."""

from decimal import Decimal
from typing import Any, Dict
from unittest.mock import Mock

import pytest

from money_api.core.config import ApiConfig


@pytest.fixture
def success_payload() -> Dict[str, Any]:
    """process-payment response for a completed payment."""
    return {
        "status": "success",
        "payment_id": "2ABCDE123456789",
        "invoice_id": "1234567",
        "balance": Decimal("1000.15"),
        "payer": "41001101140",
        "payee": "41001000040",
        "credit_amount": Decimal("99.50"),
        "payee_uid": "12345",
        "digital_goods": {
            "article": [
                {
                    "merchantArticleId": "1234567",
                    "serial": "EAV-0087182017",
                    "secret": "87actmdbsv",
                }
            ],
            "bonus": [
                {"serial": "14026553", "secret": "8aw2wu4a5l"},
            ],
        },
    }


@pytest.fixture
def api_config() -> ApiConfig:
    return ApiConfig(
        money_api_url="https://sandbox.example.com/api",
        access_token="token-123",
        timeout_seconds=15,
    )


@pytest.fixture
def make_session():
    """Build a fake ``requests.Session`` whose ``post`` returns a canned response."""

    def _make(status_code: int = 200, payload: Any = None, text: str = "") -> Mock:
        response = Mock()
        response.status_code = status_code
        response.text = text
        if isinstance(payload, Exception):
            response.json.side_effect = payload
        else:
            response.json.return_value = payload
        session = Mock()
        session.post.return_value = response
        return session

    return _make
