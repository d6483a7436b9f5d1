"""
Light HTML inspection for scraped pages.

Element counts are plain pattern counts over the raw markup. They are fed to
the model as ground truth so it cannot claim, say, "no forms" on a page that
has them.
"""
from __future__ import annotations

import re
from typing import Optional

from bs4 import BeautifulSoup

_I = re.IGNORECASE

ELEMENT_PATTERNS: dict[str, list[re.Pattern]] = {
    "Forms":               [re.compile(r"<form", _I)],
    "Navigation elements": [re.compile(r"<nav", _I)],
    "H1 headings":         [re.compile(r"<h1", _I)],
    "H2 headings":         [re.compile(r"<h2", _I)],
    "H3 headings":         [re.compile(r"<h3", _I)],
    "Input fields":        [re.compile(r"<input", _I)],
    "Buttons":             [re.compile(r"<button", _I)],
    "Links":               [re.compile(r"<a\s", _I)],
    "Images":              [re.compile(r"<img", _I)],
    "Lists (ul/ol)":       [re.compile(r"<ul", _I), re.compile(r"<ol", _I)],
    "Tables":              [re.compile(r"<table", _I)],
    "Main content areas":  [re.compile(r"<main", _I)],
    "Article elements":    [re.compile(r"<article", _I)],
    "Section elements":    [re.compile(r"<section", _I)],
    "Header elements":     [re.compile(r"<header", _I)],
    "Footer elements":     [re.compile(r"<footer", _I)],
    "Search inputs":       [re.compile(r"<input[^>]*type=[\"']search[\"'][^>]*>", _I)],
    "Email inputs":        [re.compile(r"<input[^>]*type=[\"']email[\"'][^>]*>", _I)],
    "Text inputs":         [re.compile(r"<input[^>]*type=[\"']text[\"'][^>]*>", _I)],
    "Textareas":           [re.compile(r"<textarea", _I)],
    "Select dropdowns":    [re.compile(r"<select", _I)],
    "Meta viewport":       [re.compile(r"<meta[^>]*name=[\"']viewport[\"'][^>]*>", _I)],
    "Alt attributes":      [re.compile(r"\balt=[\"'][^\"']*[\"']", _I)],
    "ARIA labels":         [re.compile(r"aria-label=[\"'][^\"']*[\"']", _I)],
    "Skip links":          [re.compile(r"<a[^>]*href=[\"']#[^\"']*[\"'][^>]*>\s*skip", _I)],
}


def count_elements(html: str) -> dict[str, int]:
    """Return {label: count} for every structural element we report on."""
    if not html:
        return {}
    return {
        label: sum(len(p.findall(html)) for p in patterns)
        for label, patterns in ELEMENT_PATTERNS.items()
    }


def extract_title(html: str) -> Optional[str]:
    """<title> text, or the first <h1> when the title is missing."""
    if not html:
        return None

    try:
        soup = BeautifulSoup(html, "lxml")
    except Exception:
        soup = BeautifulSoup(html, "html.parser")

    for tag_name in ("title", "h1"):
        tag = soup.find(tag_name)
        if tag:
            text = tag.get_text(strip=True)
            if text:
                return text
    return None
