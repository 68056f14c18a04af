"""
Minimal script that uses the public API to process a sandbox payment.
"""

from __future__ import annotations

import argparse
import logging
import sys
import time

from money_api import (
    ConfigError,
    MoneyApiError,
    ProcessPaymentRequest,
    TestResult,
    create_api_client,
    load_api_config,
)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Process a sandbox payment using the SDK API")
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing MONEY_API_* settings",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    parser.add_argument("request_id", help="Request id obtained from request-payment")
    parser.add_argument(
        "--access-token",
        help="Provide the OAuth access token without relying on environment data",
    )
    parser.add_argument(
        "--money-api-url",
        help="Override the money API base URL",
    )
    parser.add_argument(
        "--test-result",
        default=TestResult.SUCCESS.code,
        choices=[result.code for result in TestResult],
        help="Outcome the sandbox should simulate (default: success)",
    )
    parser.add_argument(
        "--max-attempts",
        type=int,
        default=3,
        help="How many times to repeat the request while it is in progress",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )

    try:
        config = load_api_config(
            env_file=args.env_file,
            access_token=args.access_token,
            money_api_url=args.money_api_url,
        )
    except (ConfigError, ValueError) as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    client = create_api_client(config=config)
    request = ProcessPaymentRequest(args.request_id).set_test_result(args.test_result)

    for attempt in range(1, args.max_attempts + 1):
        try:
            result = client.execute(request)
        except (MoneyApiError, RuntimeError) as exc:
            logging.error("Attempt %d failed: %s", attempt, exc)
            return 1

        if not result.requires_retry:
            break

        delay_ms = result.next_retry or 1000
        logging.info("Payment in progress, waiting %d ms before attempt %d", delay_ms, attempt + 1)
        time.sleep(delay_ms / 1000)
        request = ProcessPaymentRequest.repeat(args.request_id)
    else:
        logging.error("Payment still in progress after %d attempts", args.max_attempts)
        return 1

    if result.is_success:
        logging.info("Payment %s succeeded, balance %s", result.payment_id, result.balance)
        return 0

    logging.error("Payment finished with status %s: %s", result.status.code, result.error)
    return 1


if __name__ == "__main__":
    sys.exit(main())
