"""
Model acquisition.

Turns a model reference into a local file path:
- Local references are passed through untouched
- Remote references are downloaded into the models directory

Downloads stream into a hidden temporary file which is renamed onto the
final name only once the whole body has been written.
"""

import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union
from urllib.parse import urlparse

import requests
from rich.progress import (
    BarColumn,
    DownloadColumn,
    Progress,
    TextColumn,
    TimeRemainingColumn,
    TransferSpeedColumn,
)

from .errors import DownloadFailed, InvalidUrl, NoFilenameInUrl

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
DEFAULT_CHUNK_SIZE = 1024 * 1024


@dataclass(frozen=True)
class LocalModel:
    """A model file already on disk (existence is not checked)."""

    path: str


@dataclass(frozen=True)
class RemoteModel:
    """A model to download before use."""

    url: str


ModelReference = Union[LocalModel, RemoteModel]


def validate_url(url: str) -> str:
    """
    Check that a model url is an absolute http(s) url.

    Raises:
        InvalidUrl: If the scheme is missing/unsupported or there is no host
    """
    url = url.strip()
    try:
        parsed = urlparse(url)
    except ValueError as e:
        raise InvalidUrl(url, str(e)) from e

    if parsed.scheme not in ("http", "https"):
        raise InvalidUrl(url, "only http and https urls are supported")
    if not parsed.netloc:
        raise InvalidUrl(url, "missing host")
    return url


def filename_from_url(url: str) -> str:
    """
    Last path segment of a url, used as the download file name.

    Raises:
        NoFilenameInUrl: If the path is empty or ends with '/'
    """
    name = urlparse(url).path.split("/")[-1]
    if name in ("", ".", ".."):
        raise NoFilenameInUrl(url)
    return name


def acquire_model(
    source: ModelReference,
    directory: str = ".",
    timeout: float = DEFAULT_TIMEOUT,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    session: Optional[requests.Session] = None,
    show_progress: bool = False,
) -> str:
    """
    Produce a local model path for a model reference.

    Args:
        source: LocalModel or RemoteModel
        directory: Where downloaded files are written
        timeout: Connect/read timeout in seconds for the download
        chunk_size: Bytes per streamed chunk
        session: Optional requests session (defaults to the requests module)
        show_progress: Render a Rich progress bar while downloading

    Returns:
        Path of the model file; for downloads, ``directory / filename``

    Raises:
        InvalidUrl: If the remote url is malformed
        NoFilenameInUrl: If the response url has no final path segment
        DownloadFailed: On any network, HTTP status, or write failure
    """
    if isinstance(source, LocalModel):
        logger.info(f"Using local model: {source.path}")
        return source.path

    return download_model(
        source.url,
        directory=directory,
        timeout=timeout,
        chunk_size=chunk_size,
        session=session,
        show_progress=show_progress,
    )


def download_model(
    url: str,
    directory: str = ".",
    timeout: float = DEFAULT_TIMEOUT,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    session: Optional[requests.Session] = None,
    show_progress: bool = False,
) -> str:
    """Download ``url`` into ``directory``; see acquire_model()."""
    url = validate_url(url)
    http = session or requests

    logger.info(f"Downloading model from {url}")
    try:
        response = http.get(url, stream=True, timeout=timeout, allow_redirects=True)
    except requests.RequestException as e:
        logger.error(f"Request to {url} failed: {e}")
        raise DownloadFailed(url, e) from e

    with response:
        try:
            response.raise_for_status()
        except requests.HTTPError as e:
            logger.error(f"Download of {url} failed: {e}")
            raise DownloadFailed(url, e) from e

        # Name the file after where the redirects ended up
        filename = filename_from_url(response.url or url)
        target = Path(directory) / filename

        total = _content_length(response)
        written = _stream_to_file(response, target, chunk_size, total, show_progress, url)

    logger.info(f"Saved {written} bytes to {target}")
    return str(target)


def _content_length(response) -> Optional[int]:
    """Declared body size, or None when absent or malformed."""
    try:
        return int(response.headers.get("Content-Length") or 0) or None
    except ValueError:
        logger.debug(f"Ignoring malformed Content-Length: {response.headers.get('Content-Length')!r}")
        return None


def _default_file_mode() -> int:
    """Mode a plain open() would give a new file under the current umask."""
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def _stream_to_file(
    response,
    target: Path,
    chunk_size: int,
    total: Optional[int],
    show_progress: bool,
    url: str,
) -> int:
    """Write the response body to a temp file, then rename it onto ``target``."""
    written = 0
    tmp_path = None
    try:
        with tempfile.NamedTemporaryFile(
            dir=target.parent, prefix=f".{target.name}.", suffix=".part", delete=False
        ) as tmp:
            tmp_path = tmp.name
            with Progress(
                TextColumn("[cyan]{task.description}"),
                BarColumn(),
                DownloadColumn(),
                TransferSpeedColumn(),
                TimeRemainingColumn(),
                disable=not show_progress,
            ) as progress:
                task = progress.add_task(target.name, total=total)
                for chunk in response.iter_content(chunk_size=chunk_size):
                    if not chunk:
                        continue
                    tmp.write(chunk)
                    written += len(chunk)
                    progress.update(task, advance=len(chunk))
        os.chmod(tmp_path, _default_file_mode())
        os.replace(tmp_path, target)
        tmp_path = None
    except (requests.RequestException, OSError) as e:
        logger.error(f"Download of {url} failed after {written} bytes: {e}")
        raise DownloadFailed(url, e) from e
    finally:
        # Includes KeyboardInterrupt; a truncated body is never kept
        if tmp_path and os.path.exists(tmp_path):
            os.remove(tmp_path)

    return written
