"""Simple JSON-based config store."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

DEFAULT_MODEL = "base.en"


class JsonConfigStore:
    def __init__(self, path: Path | None = None) -> None:
        self._path = path or Path.home() / ".config" / "whisper_stream" / "config.json"
        self._path.parent.mkdir(parents=True, exist_ok=True)

    def get_cache_dir(self) -> Optional[Path]:
        data = self._read_all()
        value = str(data.get("cache_dir", ""))
        return Path(value).expanduser() if value else None

    def set_cache_dir(self, cache_dir: Path | None) -> None:
        data = self._read_all()
        data["cache_dir"] = str(cache_dir) if cache_dir else ""
        self._write_all(data)

    def get_coreml_enabled(self) -> bool:
        data = self._read_all()
        value = data.get("coreml_enabled", False)
        return value if isinstance(value, bool) else False

    def set_coreml_enabled(self, enabled: bool) -> None:
        data = self._read_all()
        data["coreml_enabled"] = enabled
        self._write_all(data)

    def get_default_model(self) -> str:
        data = self._read_all()
        return str(data.get("default_model", DEFAULT_MODEL))

    def set_default_model(self, name: str) -> None:
        data = self._read_all()
        data["default_model"] = name
        self._write_all(data)

    def _read_all(self) -> dict:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError):
            return {}
        return data if isinstance(data, dict) else {}

    def _write_all(self, data: dict) -> None:
        self._path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
