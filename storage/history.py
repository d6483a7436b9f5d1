"""
History of completed analyses, newest first, capped at MAX_HISTORY_ITEMS.

A save for the same URL within HISTORY_DEDUP_WINDOW_SECONDS of an existing
entry replaces that entry instead of adding a new one.
"""
from __future__ import annotations

import json
import time
from datetime import datetime
from typing import Any, Optional

from config import FRESH_REPORT_WINDOW_SECONDS, HISTORY_DEDUP_WINDOW_SECONDS, MAX_HISTORY_ITEMS
from logger import get_logger
from models import AnalysisReport, HistoryEntry, utc_now
from scoring.scorer import SCORE_BANDS, score_band
from storage.json_store import JsonFileStore

logger = get_logger(__name__)


class HistoryStore(JsonFileStore):

    # ── Read ──────────────────────────────────────────────────────────────────

    def list(self) -> list[HistoryEntry]:
        """All entries, newest first. Unreadable entries are skipped."""
        data = self._read()
        if not isinstance(data, list):
            return []

        entries = []
        for item in data:
            entry = _load_entry(item)
            if entry is not None:
                entries.append(entry)
        entries.sort(key=lambda e: e.timestamp, reverse=True)
        return entries

    def find(self, entry_id: str) -> Optional[HistoryEntry]:
        for entry in self.list():
            if entry.id == entry_id:
                return entry
        return None

    def search(self, query: str) -> list[HistoryEntry]:
        needle = query.lower()
        return [e for e in self.list() if needle in e.url.lower()]

    def stats(self) -> dict[str, Any]:
        entries = self.list()
        distribution = {band: 0 for band in SCORE_BANDS}
        if not entries:
            return {"total_items": 0, "total_urls": 0, "average_score": 0, "score_distribution": distribution}

        for entry in entries:
            distribution[score_band(entry.overall_score)] += 1

        total = sum(e.overall_score for e in entries)
        count = len(entries)
        return {
            "total_items": count,
            "total_urls": len({e.url for e in entries}),
            "average_score": (2 * total + count) // (2 * count),
            "score_distribution": distribution,
        }

    # ── Write ─────────────────────────────────────────────────────────────────

    def save(self, report: AnalysisReport) -> bool:
        entries = self.list()
        entry = HistoryEntry(
            id=_new_id({e.id for e in entries}),
            url=report.url,
            timestamp=report.timestamp,
            overall_score=report.overall_score,
            summary_counts={
                "high": report.summary.high_count,
                "medium": report.summary.medium_count,
                "low": report.summary.low_count,
            },
            settings_snapshot={
                "ai_provider": report.settings.ai_provider,
                "analysis_depth": report.settings.analysis_depth,
            },
            full_report=report,
        )

        for idx, existing in enumerate(entries):
            if existing.url == entry.url and _within(existing.timestamp, entry.timestamp, HISTORY_DEDUP_WINDOW_SECONDS):
                entries[idx] = entry
                break
        else:
            entries.insert(0, entry)

        entries.sort(key=lambda e: e.timestamp, reverse=True)
        entries = entries[:MAX_HISTORY_ITEMS]

        ok = self._write([e.to_dict() for e in entries])
        if ok:
            logger.info("History saved: %s (%d items)", entry.url, len(entries))
        return ok

    def save_if_fresh(self, report: AnalysisReport, now: Optional[datetime] = None) -> bool:
        """Record the report only if it was produced within the freshness window."""
        now = now or utc_now()
        age = (now - report.timestamp).total_seconds()
        if age > FRESH_REPORT_WINDOW_SECONDS:
            logger.info("Skipping history save for stale report of %s (%.0fs old)", report.url, age)
            return False
        return self.save(report)

    def delete(self, entry_id: str) -> bool:
        entries = self.list()
        remaining = [e for e in entries if e.id != entry_id]
        if len(remaining) == len(entries):
            return False
        ok = self._write([e.to_dict() for e in remaining])
        if ok:
            logger.info("History item deleted: %s (%d remaining)", entry_id, len(remaining))
        return ok

    def clear(self) -> bool:
        ok = self._remove()
        if ok:
            logger.info("All history cleared")
        return ok

    # ── Import / export ───────────────────────────────────────────────────────

    def export_json(self) -> str:
        return json.dumps([e.to_dict() for e in self.list()], indent=2, ensure_ascii=False)

    def import_json(self, text: str) -> bool:
        """Merge entries from an export, skipping ones already present."""
        try:
            data = json.loads(text)
        except ValueError as exc:
            logger.error("Error importing history: %s", exc)
            return False
        if not isinstance(data, list):
            logger.error("Error importing history: expected a JSON list")
            return False

        entries = self.list()
        seen = {(e.url, e.timestamp) for e in entries}
        added = 0
        for item in data:
            entry = _load_entry(item)
            if entry is None or (entry.url, entry.timestamp) in seen:
                continue
            seen.add((entry.url, entry.timestamp))
            entries.append(entry)
            added += 1

        entries.sort(key=lambda e: e.timestamp, reverse=True)
        entries = entries[:MAX_HISTORY_ITEMS]
        ok = self._write([e.to_dict() for e in entries])
        if ok:
            logger.info("History imported: %d new items, %d total", added, len(entries))
        return ok


def _load_entry(item: Any) -> Optional[HistoryEntry]:
    if not isinstance(item, dict):
        return None
    try:
        return HistoryEntry.from_dict(item)
    except (KeyError, TypeError, ValueError) as exc:
        logger.warning("Skipping unreadable history entry: %s", exc)
        return None


def _within(a: datetime, b: datetime, seconds: int) -> bool:
    return abs((a - b).total_seconds()) < seconds


def _new_id(taken: set[str]) -> str:
    stamp = int(time.time() * 1000)
    while str(stamp) in taken:
        stamp += 1
    return str(stamp)
