"""Tests for the money-api command-line interface."""

from unittest.mock import patch

import pytest

from money_api.cli import build_parser, run_cli

BASE_ARGS = ["--env-file", "missing.env", "--set", "MONEY_API_ACCESS_TOKEN=abc"]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ("MONEY_API_URL", "MONEY_API_ACCESS_TOKEN", "MONEY_API_TIMEOUT_SECONDS"):
        monkeypatch.delenv(key, raising=False)


class TestCli:
    """Test suite for run_cli exit codes."""

    def test_request_id_is_required(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_success_exit_code(self, make_session, success_payload) -> None:
        session = make_session(payload=success_payload)

        with patch("money_api.cli.requests.Session", return_value=session):
            code = run_cli(
                BASE_ARGS + ["--request-id", "req-1", "--test-result", "success", "--test-card"]
            )

        assert code == 0
        data = session.post.call_args.kwargs["data"]
        assert data["test_result"] == "success"
        assert data["test_card"] == "true"

    def test_refused_exit_code(self, make_session) -> None:
        session = make_session(payload={"status": "refused", "error": "not_enough_funds"})

        with patch("money_api.cli.requests.Session", return_value=session):
            assert run_cli(BASE_ARGS + ["--request-id", "req-1"]) == 1

    def test_in_progress_exit_code(self, make_session) -> None:
        session = make_session(payload={"status": "in_progress", "next_retry": 5000})

        with patch("money_api.cli.requests.Session", return_value=session):
            assert run_cli(BASE_ARGS + ["--request-id", "req-1"]) == 1

    def test_invalid_configuration(self) -> None:
        code = run_cli(
            ["--env-file", "missing.env", "--set", "MONEY_API_URL=nope", "--request-id", "r"]
        )

        assert code == 1

    def test_transport_failure(self, make_session) -> None:
        session = make_session(status_code=500, text="boom")

        with patch("money_api.cli.requests.Session", return_value=session):
            assert run_cli(BASE_ARGS + ["--request-id", "req-1"]) == 1

    def test_unknown_test_result_rejected(self) -> None:
        with pytest.raises(SystemExit):
            run_cli(BASE_ARGS + ["--request-id", "req-1", "--test-result", "bogus"])
