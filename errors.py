"""Shared error codes, user-facing messages and exception types."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

IO_ERROR = "IO_ERROR"
FETCH_FAILED = "FETCH_FAILED"
ARCHIVE_INVALID = "ARCHIVE_INVALID"
RECORDER_FINALIZE_FAILED = "RECORDER_FINALIZE_FAILED"
UNKNOWN_MODEL = "UNKNOWN_MODEL"

ERROR_MESSAGES = {
    IO_ERROR: "A file system operation failed.",
    FETCH_FAILED: "Model download failed, please retry.",
    ARCHIVE_INVALID: "Model archive is corrupt or unreadable.",
    RECORDER_FINALIZE_FAILED: "Recording could not be finalized.",
    UNKNOWN_MODEL: "Unknown model name.",
}

PathLike = Union[str, Path]


class WhisperStreamError(Exception):
    def __init__(self, code: str, message: str = "") -> None:
        self.code = code
        self.message = message or ERROR_MESSAGES.get(code, code)
        super().__init__(self.message)


class StreamIOError(WhisperStreamError):
    """File system failure; always names the path involved."""

    def __init__(self, path: PathLike, message: str) -> None:
        self.path = Path(path)
        super().__init__(IO_ERROR, f"{message}: {self.path}")


class RecorderIOError(StreamIOError):
    pass


class DownloadIOError(StreamIOError):
    pass


class ArchiveIOError(StreamIOError):
    pass


class DataDirNotFound(WhisperStreamError):
    def __init__(self) -> None:
        super().__init__(IO_ERROR, "Could not find local data dir")


class FetchError(WhisperStreamError):
    """HTTP-level or transport failure while downloading ``url``."""

    def __init__(
        self,
        url: str,
        status: Optional[int] = None,
        detail: str = "",
        interrupted: bool = False,
    ) -> None:
        self.url = url
        self.status = status
        self.detail = detail
        self.interrupted = interrupted
        if status is not None:
            message = f"Failed to download from {url}: HTTP Status {status}"
        elif interrupted:
            message = f"Download from {url} was interrupted: {detail}"
        else:
            message = f"Failed to initiate download from {url}: {detail}"
        super().__init__(FETCH_FAILED, message)


class ArchiveError(WhisperStreamError):
    def __init__(self, path: PathLike, detail: str) -> None:
        self.path = Path(path)
        super().__init__(ARCHIVE_INVALID, f"Failed to extract zip archive '{self.path}': {detail}")


class RecorderFinalizeError(WhisperStreamError):
    def __init__(self, path: PathLike, detail: str) -> None:
        self.path = Path(path)
        super().__init__(RECORDER_FINALIZE_FAILED, f"Failed to finalize recording {self.path}: {detail}")
