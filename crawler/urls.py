"""
URL validation for analysis targets.
"""
from __future__ import annotations

from urllib.parse import urlparse

from errors import InputValidationError


def normalize_target_url(url: str) -> str:
    """
    Return a usable http(s) URL or raise InputValidationError.
    A missing scheme is treated as https.
    """
    candidate = (url or "").strip()
    if not candidate:
        raise InputValidationError("Please enter a website URL to analyze.")

    if not candidate.lower().startswith(("http://", "https://")):
        candidate = "https://" + candidate

    parsed = urlparse(candidate)
    host = parsed.hostname or ""
    if parsed.scheme not in ("http", "https") or not host or " " in candidate:
        raise InputValidationError(f"Invalid URL format: {url}")
    if "." not in host and host != "localhost":
        raise InputValidationError(f"Invalid URL format: {url}")

    return candidate
