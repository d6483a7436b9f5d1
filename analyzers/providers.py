"""
Claude and OpenAI adapters.

Claude walks an ordered list of model identifiers: a 404 moves on to the next
one, any other failure stops immediately. OpenAI gets a single attempt on a
single model. Neither retries transport errors; callers fall back to static
data instead.
"""
from __future__ import annotations

from typing import Any, Optional

import requests

from analyzers.base import BaseProvider
from analyzers.prompt import OPENAI_SYSTEM_PROMPT
from config import (
    CLAUDE_API_VERSION,
    CLAUDE_MESSAGES_URL,
    CLAUDE_MODELS,
    LLM_MAX_TOKENS,
    OPENAI_CHAT_URL,
    OPENAI_MODEL,
    OPENAI_TEMPERATURE,
)
from errors import ProviderError
from logger import get_logger
from models import AIProvider, Settings

logger = get_logger(__name__)


class ClaudeProvider(BaseProvider):
    name = "Claude"

    def __init__(self, api_key: str, models: Optional[list[str]] = None, **kwargs):
        super().__init__(api_key, **kwargs)
        self.models = list(models or CLAUDE_MODELS)

    def analyze(self, prompt: str) -> dict[str, Any]:
        last_error: Optional[str] = None

        for model in self.models:
            logger.info("Trying Claude model: %s", model)
            resp = self._send(model, prompt, LLM_MAX_TOKENS)

            if resp.status_code == 404:
                logger.warning("Claude model %s not found, trying next", model)
                last_error = f"Model {model} not found"
                continue
            if not resp.ok:
                raise ProviderError(self.name, resp.text[:500], status=resp.status_code)

            logger.info("Claude response received for model: %s", model)
            return self._parse_reply(_claude_text(resp))

        raise ProviderError(self.name, f"All Claude models failed. Last error: {last_error}")

    def check_connection(self) -> bool:
        try:
            resp = self._send(self.models[0], "Hello", 10)
        except ProviderError as exc:
            logger.warning("Claude connection test failed: %s", exc)
            return False
        return resp.ok

    def _send(self, model: str, prompt: str, max_tokens: int) -> requests.Response:
        headers = {
            "Content-Type": "application/json",
            "x-api-key": self.api_key,
            "anthropic-version": CLAUDE_API_VERSION,
        }
        body = {
            "model": model,
            "max_tokens": max_tokens,
            "messages": [{"role": "user", "content": prompt}],
        }
        return self._post(CLAUDE_MESSAGES_URL, body, headers)


class OpenAIProvider(BaseProvider):
    name = "OpenAI"

    def analyze(self, prompt: str) -> dict[str, Any]:
        logger.info("Calling OpenAI model: %s", OPENAI_MODEL)
        resp = self._send(
            [
                {"role": "system", "content": OPENAI_SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            LLM_MAX_TOKENS,
        )
        if not resp.ok:
            raise ProviderError(self.name, resp.text[:500], status=resp.status_code)
        return self._parse_reply(_openai_text(resp))

    def check_connection(self) -> bool:
        try:
            resp = self._send([{"role": "user", "content": "Hello"}], 5)
        except ProviderError as exc:
            logger.warning("OpenAI connection test failed: %s", exc)
            return False
        return resp.ok

    def _send(self, messages: list[dict], max_tokens: int) -> requests.Response:
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }
        body = {
            "model": OPENAI_MODEL,
            "messages": messages,
            "max_tokens": max_tokens,
            "temperature": OPENAI_TEMPERATURE,
        }
        return self._post(OPENAI_CHAT_URL, body, headers)


def get_provider(settings: Settings, session: Optional[requests.Session] = None) -> BaseProvider:
    if settings.ai_provider == AIProvider.OPENAI:
        return OpenAIProvider(settings.ai_api_key, session=session)
    return ClaudeProvider(settings.ai_api_key, session=session)


# ── Reply shapes ──────────────────────────────────────────────────────────────

def _claude_text(resp: requests.Response) -> Any:
    try:
        return resp.json()["content"][0]["text"]
    except (ValueError, KeyError, IndexError, TypeError):
        return None


def _openai_text(resp: requests.Response) -> Any:
    try:
        return resp.json()["choices"][0]["message"]["content"]
    except (ValueError, KeyError, IndexError, TypeError):
        return None
