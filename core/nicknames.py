"""
Nickname Store Module
Remembers user-chosen names for device serials in a small JSON file.
"""

import json
import logging
import os
from pathlib import Path
from typing import Optional


logger = logging.getLogger(__name__)


class NicknameStore:
    """
    Maps device serials to nicknames.

    The file is read on creation and rewritten on every change. A missing
    or unreadable file behaves as an empty store.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self.nicknames: dict[str, str] = {}
        self._load()

    def _load(self):
        """Load nicknames from disk if the file exists."""
        if not self.path.exists():
            return

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Ignoring unreadable nickname file %s: %s", self.path, e)
            return

        if isinstance(data, dict):
            self.nicknames = {str(k): str(v) for k, v in data.items() if v}
        else:
            logger.warning("Ignoring nickname file %s: not a JSON object", self.path)

    def save(self):
        """Write nicknames to disk, creating the parent directory if needed."""
        os.makedirs(self.path.parent, exist_ok=True)
        temp_path = self.path.with_suffix('.tmp')
        with open(temp_path, 'w', encoding='utf-8') as f:
            json.dump(self.nicknames, f, indent=2, ensure_ascii=False)
        os.replace(temp_path, self.path)

    def get(self, serial: str) -> Optional[str]:
        return self.nicknames.get(serial) or None

    def set(self, serial: str, nickname: str):
        """Set a nickname; an empty nickname removes the entry."""
        nickname = (nickname or "").strip()
        if nickname:
            self.nicknames[serial] = nickname
        else:
            self.nicknames.pop(serial, None)
        self.save()

    def all(self) -> dict[str, str]:
        return dict(self.nicknames)
