from unittest.mock import MagicMock

import pytest
import requests

from analyzers.base import extract_json_object
from analyzers.providers import ClaudeProvider, OpenAIProvider, get_provider
from config import CLAUDE_API_VERSION, CLAUDE_MODELS, OPENAI_MODEL
from errors import ProviderError
from models import Settings


def _claude_reply(text):
    return {"content": [{"type": "text", "text": text}]}


def _openai_reply(text):
    return {"choices": [{"message": {"role": "assistant", "content": text}}]}


class TestExtractJson:
    """First balanced {...} span in free-form text."""

    def test_plain_object(self):
        assert extract_json_object('{"a": 1}') == {"a": 1}

    def test_surrounding_prose(self):
        text = 'Here is the analysis:\n```json\n{"categories": []}\n```\nLet me know {if} that helps.'
        assert extract_json_object(text) == {"categories": []}

    def test_braces_inside_strings(self):
        text = 'Result: {"details": "use {curly} braces \\" carefully", "n": 2} trailing }'
        assert extract_json_object(text) == {"details": 'use {curly} braces " carefully', "n": 2}

    def test_nested_objects(self):
        assert extract_json_object('x {"a": {"b": {"c": 3}}} y') == {"a": {"b": {"c": 3}}}

    def test_stray_brace_before_object(self):
        text = 'I checked the {header} area first.\n{"categories": [{"id": "search", "score": 40}]}'
        assert extract_json_object(text) == {"categories": [{"id": "search", "score": 40}]}

    def test_no_object(self):
        assert extract_json_object("no json here") is None

    def test_unbalanced_returns_none(self):
        assert extract_json_object('{"a": [1, 2') is None


class TestClaudeProvider:

    @pytest.fixture
    def session(self):
        return MagicMock(spec=requests.Session)

    def test_success_on_first_model(self, session, fake_response):
        session.post.return_value = fake_response(200, _claude_reply('Sure! {"categories": []}'))
        provider = ClaudeProvider("sk-test", session=session)

        assert provider.analyze("prompt") == {"categories": []}
        _, kwargs = session.post.call_args
        assert kwargs["json"]["model"] == CLAUDE_MODELS[0]
        assert kwargs["json"]["max_tokens"] == 4000
        assert kwargs["headers"]["anthropic-version"] == CLAUDE_API_VERSION
        assert kwargs["headers"]["x-api-key"] == "sk-test"

    def test_404_moves_to_next_model(self, session, fake_response):
        session.post.side_effect = [
            fake_response(404, text="model not found"),
            fake_response(200, _claude_reply('{"ok": true}')),
        ]
        provider = ClaudeProvider("sk-test", session=session)

        assert provider.analyze("prompt") == {"ok": True}
        models_tried = [call.kwargs["json"]["model"] for call in session.post.call_args_list]
        assert models_tried == CLAUDE_MODELS[:2]

    def test_other_http_error_aborts(self, session, fake_response):
        session.post.return_value = fake_response(401, text="invalid x-api-key")
        provider = ClaudeProvider("sk-test", session=session)

        with pytest.raises(ProviderError) as exc_info:
            provider.analyze("prompt")

        assert exc_info.value.status == 401
        assert "invalid x-api-key" in str(exc_info.value)
        assert session.post.call_count == 1

    def test_all_models_missing(self, session, fake_response):
        session.post.return_value = fake_response(404, text="not found")
        provider = ClaudeProvider("sk-test", session=session)

        with pytest.raises(ProviderError, match="All Claude models failed"):
            provider.analyze("prompt")
        assert session.post.call_count == len(CLAUDE_MODELS)

    def test_unparseable_reply_names_provider(self, session, fake_response):
        session.post.return_value = fake_response(200, _claude_reply("I cannot help with that."))
        provider = ClaudeProvider("sk-test", session=session)

        with pytest.raises(ProviderError, match="Claude"):
            provider.analyze("prompt")

    def test_transport_error_becomes_provider_error(self, session):
        session.post.side_effect = requests.exceptions.ConnectionError("boom")
        provider = ClaudeProvider("sk-test", session=session)

        with pytest.raises(ProviderError):
            provider.analyze("prompt")

    def test_check_connection(self, session, fake_response):
        session.post.return_value = fake_response(200, _claude_reply("Hi"))
        assert ClaudeProvider("sk-test", session=session).check_connection() is True

        session.post.return_value = fake_response(401, text="nope")
        assert ClaudeProvider("sk-test", session=session).check_connection() is False


class TestOpenAIProvider:

    @pytest.fixture
    def session(self):
        return MagicMock(spec=requests.Session)

    def test_success(self, session, fake_response):
        session.post.return_value = fake_response(200, _openai_reply('{"categories": [{"id": "search"}]}'))
        provider = OpenAIProvider("sk-openai", session=session)

        assert provider.analyze("prompt") == {"categories": [{"id": "search"}]}
        _, kwargs = session.post.call_args
        body = kwargs["json"]
        assert body["model"] == OPENAI_MODEL
        assert body["temperature"] == 0.2
        assert [m["role"] for m in body["messages"]] == ["system", "user"]
        assert kwargs["headers"]["Authorization"] == "Bearer sk-openai"

    def test_single_attempt_on_error(self, session, fake_response):
        session.post.return_value = fake_response(404, text="model missing")
        provider = OpenAIProvider("sk-openai", session=session)

        with pytest.raises(ProviderError, match="OpenAI"):
            provider.analyze("prompt")
        assert session.post.call_count == 1

    def test_missing_content(self, session, fake_response):
        session.post.return_value = fake_response(200, {"choices": []})

        with pytest.raises(ProviderError, match="OpenAI"):
            OpenAIProvider("sk-openai", session=session).analyze("prompt")


class TestGetProvider:

    def test_selects_by_settings(self):
        assert isinstance(get_provider(Settings(ai_provider="openai", ai_api_key="k")), OpenAIProvider)
        assert isinstance(get_provider(Settings(ai_provider="claude", ai_api_key="k")), ClaudeProvider)
