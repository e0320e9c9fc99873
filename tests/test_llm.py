"""Tests for the completion client."""

from unittest.mock import Mock, patch

import pytest
from openai import OpenAIError

from vaultsage.errors import ExternalServiceError
from vaultsage.llm import CompletionClient


def make_response(text: str | None) -> Mock:
    return Mock(choices=[Mock(message=Mock(content=text))])


class TestCompletionClient:
    """Tests for CompletionClient."""

    def test_complete_returns_stripped_text(self):
        with patch("vaultsage.llm.OpenAI") as mock_openai:
            create = mock_openai.return_value.chat.completions.create
            create.return_value = make_response("  JOURNAL \n")

            client = CompletionClient(api_key="test-key", model="gpt-4o-mini")
            assert client.complete("Which category?") == "JOURNAL"

            kwargs = create.call_args.kwargs
            assert kwargs["model"] == "gpt-4o-mini"
            assert kwargs["messages"][-1] == {"role": "user", "content": "Which category?"}
            mock_openai.assert_called_once_with(api_key="test-key")

    def test_model_override(self):
        with patch("vaultsage.llm.OpenAI") as mock_openai:
            create = mock_openai.return_value.chat.completions.create
            create.return_value = make_response("hi")

            client = CompletionClient(api_key="test-key")
            client.complete("Hello", model="gpt-4o", max_tokens=5)

            assert create.call_args.kwargs["model"] == "gpt-4o"
            assert create.call_args.kwargs["max_tokens"] == 5

    def test_empty_content(self):
        with patch("vaultsage.llm.OpenAI") as mock_openai:
            mock_openai.return_value.chat.completions.create.return_value = make_response(None)

            client = CompletionClient(api_key="test-key")
            assert client.complete("Hello") == ""

    def test_missing_api_key_fails_at_call_time(self):
        with patch("vaultsage.llm.OpenAI") as mock_openai:
            client = CompletionClient(api_key="")  # Construction succeeds

            with pytest.raises(ExternalServiceError, match="OPENAI_API_KEY"):
                client.complete("Hello")
            mock_openai.assert_not_called()

    def test_api_error_is_wrapped(self):
        with patch("vaultsage.llm.OpenAI") as mock_openai:
            create = mock_openai.return_value.chat.completions.create
            create.side_effect = OpenAIError("rate limited")

            client = CompletionClient(api_key="test-key")
            with pytest.raises(ExternalServiceError, match="rate limited"):
                client.complete("Hello")

            # No retry
            assert create.call_count == 1

    def test_probe_models(self):
        with patch("vaultsage.llm.OpenAI") as mock_openai:
            create = mock_openai.return_value.chat.completions.create
            create.side_effect = [make_response("hi"), OpenAIError("model not found")]

            client = CompletionClient(api_key="test-key")
            results = client.probe_models(["good-model", "bad-model"])

            assert results["good-model"] is None
            assert "model not found" in results["bad-model"]
