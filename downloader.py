"""Blocking HTTP downloader for model artifacts."""

from __future__ import annotations

import logging
from pathlib import Path

import requests

from errors import DownloadIOError, FetchError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 8192


class HttpDownloader:
    """Streams a GET response body into a file.

    No retry, no resume and no checksum: a truncated body that still comes
    back with a success status is not detected.
    """

    def __init__(self, chunk_size: int = CHUNK_SIZE) -> None:
        self._chunk_size = chunk_size

    def fetch(self, url: str, destination: Path) -> None:
        destination = Path(destination)
        try:
            response = requests.get(url, stream=True)
        except requests.RequestException as exc:
            raise FetchError(url, detail=str(exc)) from exc

        with response:
            if not 200 <= response.status_code < 300:
                raise FetchError(url, status=response.status_code)
            self._write_body(url, response, destination)
        logger.debug("Downloaded %s to %s", url, destination)

    def _write_body(self, url: str, response: requests.Response, destination: Path) -> None:
        try:
            out = open(destination, "wb")
        except OSError as exc:
            raise DownloadIOError(destination, f"Failed to create file ({exc})") from exc

        try:
            with out:
                for chunk in response.iter_content(chunk_size=self._chunk_size):
                    if chunk:
                        out.write(chunk)
                out.flush()
        except requests.RequestException as exc:
            _discard_partial(destination)
            raise FetchError(url, detail=str(exc), interrupted=True) from exc
        except OSError as exc:
            _discard_partial(destination)
            raise DownloadIOError(destination, f"Failed to write download ({exc})") from exc


def _discard_partial(destination: Path) -> None:
    try:
        destination.unlink()
    except FileNotFoundError:
        pass
    except OSError as exc:
        logger.warning("Failed to remove partial download %s: %s", destination, exc)
