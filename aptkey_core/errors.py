from __future__ import annotations
from typing import Optional, Sequence


class AptKeyError(Exception):
    pass


class ResourceError(AptKeyError):
    pass


class ValidationError(ResourceError):
    def __init__(self, attribute: str, value, expected: str):
        self.attribute = attribute
        self.value = value
        self.expected = expected
        super().__init__(f"apt_key.{attribute} expects {expected}, got {value!r}")


class FingerprintMismatchError(ResourceError):
    pass


class SourceError(ResourceError):
    pass


class CommandError(AptKeyError):
    def __init__(
        self,
        command: str,
        args: Sequence[str],
        returncode: Optional[int],
        stderr: str = "",
    ):
        self.command = command
        self.arguments = list(args)
        self.returncode = returncode
        self.stderr = stderr
        msg = f"{command} failed with exit code {returncode}"
        if stderr:
            msg = f"{msg}: {stderr.strip()}"
        super().__init__(msg)
