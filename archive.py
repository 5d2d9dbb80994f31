"""Zip extraction with path-traversal guarding and rollback on failure."""

from __future__ import annotations

import logging
import shutil
import zipfile
import zlib
from pathlib import Path, PurePosixPath
from typing import Optional, Tuple

from errors import ArchiveError, ArchiveIOError

logger = logging.getLogger(__name__)

_ZIP_ERRORS = (zipfile.BadZipFile, zipfile.LargeZipFile, zlib.error, NotImplementedError, RuntimeError, EOFError)


def enclosed_parts(name: str) -> Optional[Tuple[str, ...]]:
    """Return the path components of an entry name, or ``None`` if unsafe.

    Unsafe names are absolute, carry a drive letter, contain ``..`` or a NUL
    byte, or are empty after normalization.
    """
    if "\0" in name:
        return None
    path = PurePosixPath(name.replace("\\", "/"))
    if path.is_absolute():
        return None
    parts = tuple(part for part in path.parts if part not in ("", "."))
    if not parts or ".." in parts or ":" in parts[0]:
        return None
    return parts


class ZipArchiveExpander:
    def expand(
        self,
        archive_path: Path,
        destination_dir: Path,
        cleanup_dir: Optional[Path] = None,
    ) -> None:
        """Extract ``archive_path`` into ``destination_dir``.

        On any failure the archive and ``cleanup_dir`` (``destination_dir``
        when not given) are removed on a best-effort basis and the original
        error is re-raised.
        """
        archive_path = Path(archive_path)
        destination_dir = Path(destination_dir)
        try:
            self._extract_all(archive_path, destination_dir)
        except Exception:
            _cleanup(archive_path, Path(cleanup_dir) if cleanup_dir else destination_dir)
            raise

    def _extract_all(self, archive_path: Path, destination_dir: Path) -> None:
        try:
            archive = zipfile.ZipFile(archive_path)
        except _ZIP_ERRORS as exc:
            raise ArchiveError(archive_path, f"cannot open ({exc})") from exc
        except OSError as exc:
            raise ArchiveIOError(archive_path, f"Failed to open archive ({exc})") from exc

        root = destination_dir.resolve()
        with archive:
            for info in archive.infolist():
                parts = enclosed_parts(info.filename)
                if parts is None:
                    logger.warning("Skipping unsafe archive entry %r", info.filename)
                    continue
                outpath = destination_dir.joinpath(*parts)
                if not _is_within(outpath, root):
                    logger.warning("Skipping archive entry %r outside %s", info.filename, destination_dir)
                    continue
                if info.is_dir():
                    _make_dirs(outpath)
                else:
                    _make_dirs(outpath.parent)
                    self._extract_file(archive, info, archive_path, outpath)

    def _extract_file(
        self,
        archive: zipfile.ZipFile,
        info: zipfile.ZipInfo,
        archive_path: Path,
        outpath: Path,
    ) -> None:
        try:
            with archive.open(info) as source, open(outpath, "wb") as target:
                shutil.copyfileobj(source, target)
        except _ZIP_ERRORS as exc:
            raise ArchiveError(archive_path, f"cannot read entry {info.filename!r} ({exc})") from exc
        except OSError as exc:
            raise ArchiveIOError(outpath, f"Failed to extract entry ({exc})") from exc


def _is_within(path: Path, root: Path) -> bool:
    try:
        path.resolve().relative_to(root)
    except ValueError:
        return False
    return True


def _make_dirs(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ArchiveIOError(path, f"Failed to create directory ({exc})") from exc


def _cleanup(archive_path: Path, extracted_dir: Path) -> None:
    try:
        archive_path.unlink()
    except FileNotFoundError:
        pass
    except OSError as exc:
        logger.warning("Failed to remove zip file %s during cleanup: %s", archive_path, exc)

    try:
        shutil.rmtree(extracted_dir)
    except FileNotFoundError:
        pass
    except OSError as exc:
        logger.warning("Failed to remove directory %s during cleanup: %s", extracted_dir, exc)
