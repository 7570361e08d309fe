"""
aptkey_core.sources
-------------------
Key material retrieval for ``source``/``content`` resources.

- ``fetch_source()``: local absolute path, http(s) via requests, ftp via urllib
- ``temp_key_file()``: writes key material to a temp file that is always removed
"""

from __future__ import annotations
import os, tempfile
import urllib.request
from contextlib import contextmanager
from typing import Iterator, Union
import requests
from aptkey_core.errors import SourceError
from aptkey_core.logger import get_logger

log = get_logger("aptkey.sources")


def fetch_source(source: str, timeout: float = 30.0) -> bytes:
    if source.startswith("/"):
        try:
            with open(source, "rb") as f:
                return f.read()
        except OSError as e:
            raise SourceError(f"could not read key file {source}: {e}") from e

    if source.startswith(("http://", "https://")):
        log.info(f"[FETCH] {source}")
        try:
            res = requests.get(source, timeout=timeout)
            res.raise_for_status()
        except requests.RequestException as e:
            raise SourceError(f"{source} could not be retrieved: {e}") from e
        return res.content

    if source.startswith("ftp://"):
        # requests has no ftp transport
        log.info(f"[FETCH] {source}")
        try:
            with urllib.request.urlopen(source, timeout=timeout) as res:
                return res.read()
        except OSError as e:
            raise SourceError(f"{source} could not be retrieved: {e}") from e

    raise SourceError(f"unsupported key source {source!r}")


@contextmanager
def temp_key_file(content: Union[str, bytes]) -> Iterator[str]:
    if isinstance(content, str):
        content = content.encode("utf-8")

    fd, path = tempfile.mkstemp(prefix="apt_key")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(content)
        yield path
    finally:
        os.unlink(path)
