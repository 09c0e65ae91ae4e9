"""Tests for the JSON-mode LLM helper and rate limit backoff."""

from unittest.mock import MagicMock, patch

import httpx
import pytest
from openai import RateLimitError

from pickwise.app.errors import MalformedResponseError
from pickwise.tools import llm as llm_module
from pickwise.tools.llm import complete_json, parse_json_object
from pickwise.tools.openai_retry import retry_with_backoff


def _rate_limit_error(message: str = "Rate limit reached") -> RateLimitError:
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    return RateLimitError(message, response=httpx.Response(429, request=request), body=None)


class TestParseJsonObject:
    def test_plain_object(self):
        assert parse_json_object('{"products": []}') == {"products": []}

    def test_fenced_object(self):
        assert parse_json_object('```json\n{"examples": ["a"]}\n```') == {"examples": ["a"]}

    def test_empty_reply_is_empty_object(self):
        assert parse_json_object("  ") == {}

    def test_invalid_json(self):
        with pytest.raises(MalformedResponseError, match="invalid JSON"):
            parse_json_object("Here are three great phones!")

    def test_non_object(self):
        with pytest.raises(MalformedResponseError, match="expected a JSON object"):
            parse_json_object('["a", "b"]')


class TestCompleteJson:
    def test_renders_prompt_and_parses_reply(self):
        fake_llm = MagicMock()
        fake_llm.invoke.return_value = MagicMock(content='{"labels": {"ram": "RAM"}}')

        with patch.object(llm_module, "build_llm", return_value=fake_llm) as mock_build:
            result = complete_json(
                "Reply as {{\"labels\": {{}}}}",
                "Features: {features}",
                max_tokens=50,
                features="ram",
            )

        assert result == {"labels": {"ram": "RAM"}}
        mock_build.assert_called_once_with(max_tokens=50, temperature=0.2)
        system, user = fake_llm.invoke.call_args.args[0]
        assert system.content == 'Reply as {"labels": {}}'
        assert user.content == "Features: ram"

    def test_malformed_reply_raises(self):
        fake_llm = MagicMock()
        fake_llm.invoke.return_value = MagicMock(content="not json")
        with patch.object(llm_module, "build_llm", return_value=fake_llm):
            with pytest.raises(MalformedResponseError):
                complete_json("system", "user", max_tokens=10)


class TestRetryWithBackoff:
    def test_retries_rate_limits_then_succeeds(self):
        calls = MagicMock(side_effect=[_rate_limit_error(), _rate_limit_error(), "ok"])
        wrapped = retry_with_backoff(max_retries=2, initial_delay=0.5)(lambda: calls())

        with patch("pickwise.tools.openai_retry.time.sleep") as mock_sleep:
            assert wrapped() == "ok"

        assert calls.call_count == 3
        assert [c.args[0] for c in mock_sleep.call_args_list] == [0.5, 1.0]

    def test_gives_up_after_max_retries(self):
        calls = MagicMock(side_effect=_rate_limit_error())
        wrapped = retry_with_backoff(max_retries=1)(lambda: calls())

        with patch("pickwise.tools.openai_retry.time.sleep"):
            with pytest.raises(RateLimitError):
                wrapped()
        assert calls.call_count == 2

    def test_quota_errors_are_not_retried(self):
        calls = MagicMock(side_effect=_rate_limit_error("insufficient_quota: check your plan"))
        wrapped = retry_with_backoff(max_retries=3)(lambda: calls())

        with patch("pickwise.tools.openai_retry.time.sleep") as mock_sleep:
            with pytest.raises(RateLimitError):
                wrapped()
        assert calls.call_count == 1
        mock_sleep.assert_not_called()

    def test_other_errors_propagate_immediately(self):
        calls = MagicMock(side_effect=ValueError("boom"))
        wrapped = retry_with_backoff(max_retries=3)(lambda: calls())
        with pytest.raises(ValueError):
            wrapped()
        assert calls.call_count == 1
