"""
aptkey_core.command
-------------------
Thin wrapper around one external executable (``apt-key`` or ``gpg``).

``run()`` is used for state-changing calls and raises ``CommandError`` on a
non-zero exit. ``capture()`` is used for listings and returns decoded stdout.
"""

from __future__ import annotations
import os, shutil, subprocess
from typing import Optional
from aptkey_core.errors import CommandError
from aptkey_core.logger import get_logger

log = get_logger("aptkey.command")


class Command:
    def __init__(self, command: str):
        self.command = command

    def __repr__(self) -> str:
        return f"Command({self.command!r})"

    def executable(self) -> bool:
        if os.path.isabs(self.command):
            return os.path.isfile(self.command) and os.access(self.command, os.X_OK)
        return shutil.which(self.command) is not None

    def run(self, context, *args: str, noop: bool = False) -> Optional[subprocess.CompletedProcess]:
        cmdline = subprocess.list2cmdline([self.command, *args])
        if noop:
            context.debug(f"noop: would run {cmdline}")
            return None

        context.debug(f"Executing {cmdline}")
        try:
            result = subprocess.run(
                [self.command, *args],
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except OSError as e:
            raise CommandError(self.command, args, None, str(e)) from e

        stdout = _decode(result.stdout)
        stderr = _decode(result.stderr)
        if stdout:
            context.debug(stdout.rstrip())
        if result.returncode != 0:
            raise CommandError(self.command, args, result.returncode, stderr)
        return result

    def capture(self, *args: str, check: bool = False) -> str:
        """Run and return stdout; stderr is discarded."""
        log.debug(f"[CAPTURE] {subprocess.list2cmdline([self.command, *args])}")
        try:
            result = subprocess.run(
                [self.command, *args],
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
            )
        except OSError as e:
            if check:
                raise CommandError(self.command, args, None, str(e)) from e
            log.debug(f"[CAPTURE] {self.command} unavailable: {e}")
            return ""

        if result.returncode != 0:
            if check:
                raise CommandError(self.command, args, result.returncode)
            log.debug(f"[CAPTURE] {self.command} exited {result.returncode}")
        return _decode(result.stdout)


def _decode(data: Optional[bytes]) -> str:
    if not data:
        return ""
    return data.decode("utf-8", errors="replace")
