"""
HTTP Reader - tables published at an http(s):// address

The remote file is fetched once into a local cache and then parsed by
CSVReader, so every delimiter/header option works the same for URLs
as for local paths.
"""

from __future__ import annotations

import hashlib
import tempfile
from pathlib import Path
from typing import Iterator, Optional
from urllib.parse import urlparse

try:
    import httpx

    HTTPX_AVAILABLE = True
except ImportError:
    HTTPX_AVAILABLE = False
    httpx = None

from csvq.readers.base import BaseReader, Row, Table
from csvq.readers.csv_reader import CSVReader

DEFAULT_CACHE_DIR = Path(tempfile.gettempdir()) / "csvq_cache"

DOWNLOAD_TIMEOUT = 30.0


def is_url(source: str) -> bool:
    """True for sources that must be fetched over HTTP"""
    return source.startswith(("http://", "https://"))


def cache_name(url: str) -> str:
    """
    Cache file name for a URL

    The md5 of the full URL keeps query strings apart; the trailing
    path segment keeps the name readable (and its .tsv suffix, if any).
    """
    digest = hashlib.md5(url.encode()).hexdigest()
    basename = Path(urlparse(url).path).name or "data"
    return f"{digest}_{basename}"


class HTTPReader(BaseReader):
    """
    Delimited table behind an HTTP/HTTPS URL

    Example:
        table = HTTPReader("https://example.com/data.csv", delimiter=";").read()
    """

    def __init__(
        self,
        url: str,
        cache_dir: Optional[str] = None,
        force_download: bool = False,
        timeout: float = DOWNLOAD_TIMEOUT,
        **csv_options,
    ):
        """
        Fetch (or reuse) the file and prepare a CSVReader over it

        Args:
            url: HTTP/HTTPS URL of the file
            cache_dir: Cache directory (default: <tmp>/csvq_cache)
            force_download: Fetch again even when a cached copy exists
            timeout: Network timeout in seconds
            **csv_options: delimiter, comment, has_header, skip_header
        """
        if not HTTPX_AVAILABLE:
            raise ImportError("HTTP reader requires httpx library. Install `csvq[http]`")

        self.url = url
        self.timeout = timeout
        self.cache_path = Path(cache_dir or DEFAULT_CACHE_DIR) / cache_name(url)

        if force_download or not self.cache_path.exists():
            self._fetch()

        self.csv = CSVReader(str(self.cache_path), **csv_options)

    def _fetch(self) -> None:
        """Stream the response body into the cache, replacing any old copy"""
        self.cache_path.parent.mkdir(parents=True, exist_ok=True)
        partial = self.cache_path.with_name(self.cache_path.name + ".tmp")

        try:
            with httpx.stream("GET", self.url, follow_redirects=True, timeout=self.timeout) as response:
                response.raise_for_status()
                with open(partial, "wb") as f:
                    for chunk in response.iter_bytes(chunk_size=64 * 1024):
                        f.write(chunk)
        except httpx.HTTPError as e:
            partial.unlink(missing_ok=True)
            raise IOError(f"Failed to download {self.url}: {e}") from e

        partial.replace(self.cache_path)

    def read_lazy(self) -> Iterator[Row]:
        return self.csv.read_lazy()

    def read(self) -> Table:
        return self.csv.read()

    def clear_cache(self) -> None:
        """Forget the cached copy of this URL"""
        self.cache_path.unlink(missing_ok=True)

    def __repr__(self) -> str:
        return f"HTTPReader({self.url!r})"
