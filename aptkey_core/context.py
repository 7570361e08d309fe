"""
aptkey_core.context
-------------------
Per-run context handed to provider hooks by the host framework.

Every message is attributed to a resource title (``apt_key[TITLE]: ...``) and
the lifecycle helpers (``creating``, ``deleting``, ``processing``) bracket a
step with start / finished / failed log lines. Failures are logged and then
re-raised so the host's own reporting sees them.
"""

from __future__ import annotations
import logging, time
from contextlib import contextmanager
from typing import Iterator, List, Optional
from aptkey_core.errors import ResourceError
from aptkey_core.logger import get_logger

NOTICE = 25
logging.addLevelName(NOTICE, "NOTICE")


class BaseContext:
    def __init__(self, type_name: str = "apt_key", logger: Optional[logging.Logger] = None):
        self.type_name = type_name
        self.log = logger or get_logger("aptkey.context")
        self.failed: List[str] = []

    # ------------------------------------------------------------------
    # Messages: context.warning("msg") or context.warning(title, "msg")
    # ------------------------------------------------------------------
    def debug(self, *args: str) -> None:
        self._send(logging.DEBUG, *args)

    def info(self, *args: str) -> None:
        self._send(logging.INFO, *args)

    def notice(self, *args: str) -> None:
        self._send(NOTICE, *args)

    def warning(self, *args: str) -> None:
        self._send(logging.WARNING, *args)

    def err(self, *args: str) -> None:
        self._send(logging.ERROR, *args)

    def fail(self, message: str) -> None:
        raise ResourceError(message)

    def _send(self, level: int, *args: str) -> None:
        if len(args) == 1:
            title, message = None, args[0]
        elif len(args) == 2:
            title, message = args
        else:
            raise TypeError(f"expected (message) or (title, message), got {len(args)} arguments")

        if title is None:
            self.log.log(level, f"{self.type_name}: {message}")
        else:
            self.log.log(level, f"{self.type_name}[{title}]: {message}")

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    @contextmanager
    def _step(self, verb: str, title: str) -> Iterator["BaseContext"]:
        start = time.monotonic()
        self.debug(title, f"{verb}: Start")
        try:
            yield self
        except Exception as e:
            self.failed.append(title)
            self.err(title, f"{verb}: Failed after {time.monotonic() - start:.2f} seconds: {e}")
            raise
        self.notice(title, f"{verb}: Finished in {time.monotonic() - start:.2f} seconds")

    def creating(self, title: str):
        return self._step("Creating", title)

    def deleting(self, title: str):
        return self._step("Deleting", title)

    def processing(self, title: str):
        return self._step("Processing", title)
