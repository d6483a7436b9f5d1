"""
Persists the single Settings object. Saving overwrites the whole document.
"""
from __future__ import annotations

from typing import Optional

from logger import get_logger
from models import Settings
from storage.json_store import JsonFileStore

logger = get_logger(__name__)


class SettingsStore(JsonFileStore):
    def load(self) -> Optional[Settings]:
        data = self._read()
        if not isinstance(data, dict):
            return None
        return Settings.from_dict(data)

    def save(self, settings: Settings) -> bool:
        ok = self._write(settings.to_dict())
        if ok:
            logger.info(
                "Settings saved (provider=%s, depth=%s)",
                settings.ai_provider, settings.analysis_depth,
            )
        return ok
