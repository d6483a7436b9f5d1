"""
Base class for LLM provider adapters, and JSON extraction from reply text.
"""
from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import Any, Optional

import requests

from config import DEFAULT_REQUEST_TIMEOUT
from errors import ProviderError


class BaseProvider(ABC):
    """All provider adapters inherit from this class."""

    name: str = "LLM"

    def __init__(
        self,
        api_key: str,
        session: Optional[requests.Session] = None,
        timeout: int = DEFAULT_REQUEST_TIMEOUT,
    ):
        self.api_key = api_key
        self.session = session or requests.Session()
        self.timeout = timeout

    @abstractmethod
    def analyze(self, prompt: str) -> dict[str, Any]:
        """Send `prompt` and return the JSON object embedded in the reply."""
        ...

    @abstractmethod
    def check_connection(self) -> bool:
        """Cheap request that confirms the API key is accepted."""
        ...

    # ── Convenience ───────────────────────────────────────────────────────────

    def _post(self, url: str, body: dict, headers: dict) -> requests.Response:
        try:
            return self.session.post(url, json=body, headers=headers, timeout=self.timeout)
        except requests.exceptions.Timeout:
            raise ProviderError(self.name, "request timed out")
        except requests.exceptions.RequestException as exc:
            raise ProviderError(self.name, f"request failed: {exc}")

    def _parse_reply(self, text: Any) -> dict[str, Any]:
        if not isinstance(text, str):
            raise ProviderError(self.name, f"Failed to parse {self.name} response: no text content")
        parsed = extract_json_object(text)
        if parsed is None:
            raise ProviderError(self.name, f"Failed to parse {self.name} response: no valid JSON found")
        return parsed


def extract_json_object(text: str) -> Optional[dict[str, Any]]:
    """
    Parse the first top-level {...} object in free-form text.

    Brackets are matched from the first '{', skipping braces inside JSON
    strings. If that span never closes (truncated reply) the greedy span from
    the first '{' to the last '}' is tried instead. When neither parses, the
    search resumes at the next '{' so stray braces in prose are skipped.
    """
    last = text.rfind("}")
    start = text.find("{")
    while start != -1 and start < last:
        end = _matching_brace(text, start)
        candidates = []
        if end is not None:
            candidates.append(text[start:end + 1])
        candidates.append(text[start:last + 1])

        for candidate in candidates:
            try:
                value = json.loads(candidate)
            except ValueError:
                continue
            if isinstance(value, dict):
                return value
        start = text.find("{", start + 1)
    return None


def _matching_brace(text: str, start: int) -> Optional[int]:
    depth = 0
    in_string = False
    escaped = False
    for idx in range(start, len(text)):
        ch = text[idx]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return idx
    return None
