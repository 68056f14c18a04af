"""
Command-line interface for exercising the process-payment API.
"""

from __future__ import annotations

import argparse
import logging
from typing import Iterable, Sequence, Tuple

import requests

from .api import create_api_client
from .core.config import ConfigError, load_api_config
from .core.errors import MoneyApiError
from .core.models import ProcessPayment, Status
from .core.payloads import TestResult


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )


def _env_override(value: str) -> Tuple[str, str]:
    if "=" not in value:
        raise argparse.ArgumentTypeError("Overrides must look like KEY=VALUE")
    key, val = value.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError("Override key must not be empty")
    return key, val


def _collect_overrides(pairs: Iterable[Tuple[str, str]]) -> dict[str, str]:
    overrides: dict[str, str] = {}
    for key, value in pairs:
        overrides[key] = value
    return overrides


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="money-api",
        description="Process a previously requested money API payment",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing MONEY_API_* settings (default: .env)",
    )
    parser.add_argument(
        "--set",
        action="append",
        type=_env_override,
        metavar="KEY=VALUE",
        default=None,
        help="Override an environment variable without editing the .env file",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    parser.add_argument(
        "--request-id",
        required=True,
        help="Request id returned by the payment request step",
    )
    parser.add_argument("--money-source", help="Id of the money source to pay from")
    parser.add_argument("--csc", help="Card security code, if the money source needs one")
    parser.add_argument("--ext-auth-success-uri", help="Redirect URI after successful 3-D Secure")
    parser.add_argument("--ext-auth-fail-uri", help="Redirect URI after failed 3-D Secure")
    parser.add_argument(
        "--test-card",
        action="store_true",
        help="Sandbox only: make a test card available",
    )
    parser.add_argument(
        "--test-result",
        choices=[result.code for result in TestResult],
        help="Sandbox only: outcome the server should simulate",
    )
    return parser


def run_cli(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)
    overrides = _collect_overrides(args.set or ())

    try:
        config = load_api_config(env_file=args.env_file, overrides=overrides)
    except (ConfigError, ValueError) as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    client = create_api_client(config=config, session=requests.Session())

    try:
        result = client.process_payment(
            args.request_id,
            money_source=args.money_source,
            csc=args.csc,
            ext_auth_success_uri=args.ext_auth_success_uri,
            ext_auth_fail_uri=args.ext_auth_fail_uri,
            test_card=args.test_card,
            test_result=args.test_result,
        )
    except MoneyApiError as exc:
        logging.error("Payment processing failed: %s", exc)
        return 1
    except (requests.RequestException, RuntimeError) as exc:
        logging.error("Process-payment request failed: %s", exc)
        return 1

    return _handle_result(result)


def _handle_result(result: ProcessPayment) -> int:
    if result.status is Status.SUCCESS:
        logging.info(
            "Payment %s succeeded. Credited %s, balance %s",
            result.payment_id,
            result.credit_amount,
            result.balance,
        )
        return 0

    if result.requires_retry:
        logging.warning(
            "Payment is still in progress; repeat with the same request id in %s ms",
            result.next_retry,
        )
        return 1

    if result.status is Status.EXT_AUTH_REQUIRED:
        logging.warning("External authorization required at %s", result.acs_uri)
        return 1

    if result.account_unblock_uri:
        logging.error("Account is blocked, unblock it at %s", result.account_unblock_uri)
    logging.error("Payment %s: %s", result.status.code, result.error)
    return 1
