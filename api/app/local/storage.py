"""
Key-value storage for the client-only variant.

Every key maps to one JSON value; all keys share a single file that is
rewritten atomically on each change.
"""
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)

KEYS = {
    "users": "qf_users",
    "session": "qf_session",
    "topics": "qf_topics",
    "questions": "qf_questions",
    "onboarding": "qf_onboarding_hide",
}


class LocalStorage:
    """JSON file holding records under fixed keys."""

    def __init__(self, path):
        self.path = Path(path)

    def _read_all(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
        except json.JSONDecodeError:
            logger.warning(f"Ignoring unreadable storage file {self.path}")
            return {}
        return data if isinstance(data, dict) else {}

    def _write_all(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
        except Exception:
            os.unlink(tmp_path)
            raise

    def get(self, key: str, fallback: Any = None) -> Any:
        return self._read_all().get(key, fallback)

    def set(self, key: str, value: Any) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def update(self, values: Dict[str, Any]) -> None:
        """Set several keys in one write."""
        data = self._read_all()
        data.update(values)
        self._write_all(data)

    def delete(self, key: str) -> None:
        data = self._read_all()
        if key in data:
            del data[key]
            self._write_all(data)
