"""Local cache of Whisper model artifacts.

Presence on disk is the only signal that an artifact was acquired: nothing
records a checksum or version, so a truncated earlier download looks the same
as a complete one. ``ensure`` is a check-then-act sequence without locking;
callers that may race on the same model must serialize calls themselves.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Optional

from archive import ZipArchiveExpander
from downloader import HttpDownloader
from errors import DataDirNotFound, StreamIOError
from interfaces import ArchiveExpander, Downloader
from models import ModelVariant

logger = logging.getLogger(__name__)

APP_NAMESPACE = "whisper-stream"

COREML_MODEL_URL_TEMPLATE = "https://models.milan.place/whisper-cpp/metal//{}-encoder.mlmodelc.zip"
BASE_MODEL_NAME_FOR_COREML = "ggml-base.en"


def data_local_dir() -> Optional[Path]:
    """Return the platform's per-user local data directory, if any."""
    if sys.platform == "win32":
        local = os.environ.get("LOCALAPPDATA")
        return Path(local) if local else None
    try:
        home = Path.home()
    except RuntimeError:
        return None
    if sys.platform == "darwin":
        return home / "Library" / "Application Support"
    xdg = os.environ.get("XDG_DATA_HOME", "")
    if xdg and Path(xdg).is_absolute():
        return Path(xdg)
    return home / ".local" / "share"


def coreml_dir_name(base_name: str = BASE_MODEL_NAME_FOR_COREML) -> str:
    return f"{base_name}-encoder.mlmodelc"


class ArtifactStore:
    def __init__(
        self,
        cache_root: Optional[Path] = None,
        downloader: Optional[Downloader] = None,
        expander: Optional[ArchiveExpander] = None,
        coreml_enabled: bool = False,
    ) -> None:
        self._cache_root = Path(cache_root) if cache_root else None
        self._downloader = downloader or HttpDownloader()
        self._expander = expander or ZipArchiveExpander()
        self.coreml_enabled = coreml_enabled

    @property
    def cache_root(self) -> Path:
        if self._cache_root is not None:
            return self._cache_root
        base = data_local_dir()
        if base is None:
            raise DataDirNotFound()
        return base / APP_NAMESPACE

    def model_path(self, model: ModelVariant) -> Path:
        return self.cache_root / model.file_name

    def is_present(self, model: ModelVariant) -> bool:
        return self.model_path(model).exists()

    def ensure(self, model: ModelVariant) -> Path:
        """Make sure ``model`` is cached and return the path to its file."""
        cache_dir = self.cache_root
        try:
            cache_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StreamIOError(cache_dir, f"Failed to create cache directory ({exc})") from exc

        model_path = cache_dir / model.file_name
        if not model_path.exists():
            logger.info("Downloading Whisper model to %s...", model_path)
            self._downloader.fetch(model.url, model_path)
            logger.info("Whisper model downloaded.")

        if self.coreml_enabled:
            self._ensure_coreml_model(cache_dir)

        return model_path

    def _ensure_coreml_model(self, cache_dir: Path) -> None:
        base_name = BASE_MODEL_NAME_FOR_COREML
        model_dir = cache_dir / coreml_dir_name(base_name)
        if model_dir.exists():
            logger.info("CoreML model already present at %s.", model_dir)
            return

        url = COREML_MODEL_URL_TEMPLATE.format(base_name)
        zip_path = cache_dir / f"{coreml_dir_name(base_name)}.zip"

        logger.info("Downloading CoreML model from %s to %s...", url, zip_path)
        self._downloader.fetch(url, zip_path)
        logger.info("Unzipping CoreML model to %s...", cache_dir)
        self._expander.expand(zip_path, cache_dir, cleanup_dir=model_dir)
        logger.info("CoreML model unzipped and available at %s.", model_dir)

        try:
            zip_path.unlink()
        except OSError as exc:
            logger.warning("Could not remove CoreML zip file %s: %s", zip_path, exc)
