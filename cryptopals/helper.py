"""
Helper functions: section titles for readable output, and cached
downloads of challenge data.
"""

import hashlib
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

import requests

from .config import DEFAULT_TIMEOUT
from .errors import DownloadError


logger = logging.getLogger(__name__)


def section(title: str):
    """
    Display a section title.

        +------------+
        | Statistics |
        +------------+
    """
    dashes = "-" * len(title)
    print(f"\n+-{dashes}-+")
    print(f"| {title} |")
    print(f"+-{dashes}-+")


def subsection(title: str):
    """
    Display a subsection title.

        Permutations:
        -------------
    """
    dashes = "-" * (len(title) + 1)
    print(f"\n{title}:")
    print(f"{dashes}\n")


def cache_path(url: str, cache_dir: Path, prefix: str = "cryptopals-data") -> Path:
    """Cache file name for a URL: <prefix>-<first 16 hex digits of sha256(url)>.txt"""
    digest = hashlib.sha256(url.encode("utf-8")).hexdigest()[:16]
    return Path(cache_dir) / f"{prefix}-{digest}.txt"


def _read_cache(path: Path) -> Optional[bytes]:
    try:
        return path.read_bytes()
    except FileNotFoundError:
        return None
    except OSError as e:
        logger.warning("Could not read cache file %s: %s", path, e)
        return None


def _write_cache(path: Path, content: bytes):
    # Only a complete file is ever visible under the cache name.
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(dir=path.parent, prefix=f".{path.name}.",
                                         delete=False) as tmp:
            tmp.write(content)
        try:
            os.replace(tmp.name, path)
        except OSError:
            os.unlink(tmp.name)
            raise
    except OSError as e:
        logger.warning("Could not write cache file %s: %s", path, e)


def fetch_text(url: str, cache_dir: Optional[Path] = None, prefix: str = "cryptopals-data",
               timeout: float = DEFAULT_TIMEOUT) -> str:
    """
    Read a text resource, from the cache directory if possible.

    The cache holds the downloaded bytes unchanged, so a cached read returns
    exactly what the download returned, line endings included. An unreadable
    cache file is downloaded again.

    Args:
        url: Resource URL
        cache_dir: Cache directory (no caching if None)
        prefix: Cache file name prefix
        timeout: HTTP timeout in seconds

    Returns:
        Body decoded as UTF-8

    Raises:
        DownloadError: If the resource cannot be fetched
    """
    path = cache_path(url, cache_dir, prefix) if cache_dir is not None else None

    if path is not None:
        content = _read_cache(path)
        if content is not None:
            logger.info("Read text of %s from cache file %s", url, path)
            return content.decode("utf-8", errors="replace")

    try:
        logger.debug("Downloading %s", url)
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        raise DownloadError(f"Error downloading {url}: {e}") from e

    content = response.content

    if path is not None:
        logger.info("Write text from %s to cache file %s", url, path)
        _write_cache(path, content)

    return content.decode("utf-8", errors="replace")


def read_from_url(url: str, cache_dir: Optional[Path] = None,
                  timeout: float = DEFAULT_TIMEOUT) -> str:
    """Read a challenge data file such as https://cryptopals.com/static/challenge-data/4.txt."""
    return fetch_text(url, cache_dir, prefix="cryptopals-data", timeout=timeout)
