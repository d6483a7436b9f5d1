"""
Exception hierarchy for the Usability Audit Tool.
"""
from __future__ import annotations

from typing import Optional


class AuditError(Exception):
    """Base class for every error raised by this package."""


class InputValidationError(AuditError):
    """Malformed URL or incomplete settings. Shown to the user as-is."""


class ScrapeError(AuditError):
    """The scraping provider failed or returned an unusable response."""


class ProviderError(AuditError):
    """An LLM provider call failed or its reply held no parseable JSON."""

    def __init__(self, provider: str, message: str, status: Optional[int] = None):
        self.provider = provider
        self.status = status
        self.message = message
        prefix = f"{provider} API error"
        if status is not None:
            prefix += f": {status}"
        super().__init__(f"{prefix} - {message}")
