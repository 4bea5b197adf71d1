from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from packages.shared.config import AppConfig
from packages.shared.paths import config_path

log = logging.getLogger(__name__)


class ConfigStore:
    """Read-only access to the optional JSON config file.

    The agent runs from session autostart, so a missing file is the normal
    case and the store never creates one.
    """

    def __init__(self, path: Optional[Path] = None) -> None:
        self._path = path or config_path()

    def load(self) -> AppConfig:
        if not self._path.exists():
            return AppConfig()

        try:
            raw = self._path.read_text(encoding="utf-8")
            data: Any = json.loads(raw)
            return AppConfig.model_validate(data)
        except (OSError, ValueError, ValidationError) as e:
            log.warning("Ignoring invalid config file %s: %s", self._path, e)
            return AppConfig()

    def path(self) -> str:
        return str(self._path)
