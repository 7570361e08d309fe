"""
aptkey_core.utils
-----------------
Small helpers for key identifiers and the epoch timestamps gpg prints in its
colon listings.
"""

from __future__ import annotations
import re, time
from enum import Enum
from typing import Any, Optional


FINGERPRINT_LEN = 40
LONG_ID_LEN = 16
SHORT_ID_LEN = 8

KEY_ID_RE = re.compile(r"\A([0-9A-F]{8}|[0-9A-F]{16})\Z")


def now_epoch() -> int:
    return int(time.time())


def epoch_to_ts(epoch: int) -> str:
    # RFC3339 / ISO 8601 in UTC, second precision
    return time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime(epoch))


def to_int(value: Optional[str], default: int = 0) -> int:
    """Parse a listing field as int; empty or garbage falls back to default."""
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def strip_hex_prefix(key_id: str) -> str:
    return key_id[2:] if key_id.startswith("0x") else key_id


def normalize_key_id(key_id: str) -> str:
    """Drop a leading ``0x`` and upper-case the rest. Never validates."""
    return strip_hex_prefix(key_id).upper()



def is_key_id(value: str) -> bool:
    """True for a normalized short (8) or long (16) hex key id."""
    return bool(KEY_ID_RE.match(value))


def ensure_value(value: Any) -> str:
    """``present``/``absent`` from a string, a symbol-like object or an Enum member."""
    if isinstance(value, Enum):
        value = value.value
    return str(value)
