"""Protocol interfaces used by ArtifactStore and the CLI."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Protocol


class Downloader(Protocol):
    def fetch(self, url: str, destination: Path) -> None: ...


class ArchiveExpander(Protocol):
    def expand(
        self,
        archive_path: Path,
        destination_dir: Path,
        cleanup_dir: Optional[Path] = None,
    ) -> None: ...


class ConfigStore(Protocol):
    def get_cache_dir(self) -> Optional[Path]: ...

    def get_coreml_enabled(self) -> bool: ...

    def get_default_model(self) -> str: ...
