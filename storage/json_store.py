"""
Whole-document JSON persistence shared by the history and settings stores.

Reads and writes never raise: failures are logged and reported through the
return value so the UI flow is never blocked by a storage problem.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional, Union

from logger import get_logger

logger = get_logger(__name__)


class JsonFileStore:
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _read(self) -> Optional[Any]:
        if not self.path.exists():
            return None
        try:
            with self.path.open("r", encoding="utf-8") as fh:
                return json.load(fh)
        except (OSError, ValueError) as exc:
            logger.error("Could not read %s: %s", self.path, exc)
            return None

    def _write(self, data: Any) -> bool:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("w", encoding="utf-8") as fh:
                json.dump(data, fh, indent=2, ensure_ascii=False)
        except (OSError, TypeError, ValueError) as exc:
            logger.error("Could not write %s: %s", self.path, exc)
            return False
        return True

    def _remove(self) -> bool:
        try:
            self.path.unlink(missing_ok=True)
        except OSError as exc:
            logger.error("Could not remove %s: %s", self.path, exc)
            return False
        return True
