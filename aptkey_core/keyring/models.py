# aptkey_core/keyring/models.py
from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional
from aptkey_core.utils import (
    LONG_ID_LEN, SHORT_ID_LEN, epoch_to_ts, now_epoch, to_int,
)

# Public key algorithm ids, see /usr/share/doc/gnupg/DETAILS.gz
KEY_TYPES = {
    "1": "rsa",
    "17": "dsa",
    "18": "ecc",
    "19": "ecdsa",
}
UNRECOGNIZED = "unrecognized"


@dataclass
class KeyRecord:
    """
    One primary key as listed by ``apt-key adv --list-keys --with-colons``.

    Rebuilt from the listing on every inventory query; never persisted.
    """
    fingerprint: str
    size: int = 0
    type: str = UNRECOGNIZED
    created: Optional[str] = None
    expiry: Optional[str] = None
    expired: bool = False

    @property
    def long(self) -> str:
        return self.fingerprint[-LONG_ID_LEN:]

    @property
    def short(self) -> str:
        return self.fingerprint[-SHORT_ID_LEN:]

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        return {
            "ensure": "present",
            "name": self.fingerprint,
            "id": self.fingerprint,
            "fingerprint": self.fingerprint,
            "long": self.long,
            "short": self.short,
            "size": d["size"],
            "type": d["type"],
            "created": d["created"],
            "expiry": d["expiry"],
            "expired": d["expired"],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "KeyRecord":
        return cls(
            fingerprint=data.get("fingerprint") or data["name"],
            size=int(data.get("size", 0)),
            type=str(data.get("type", UNRECOGNIZED)),
            created=data.get("created"),
            expiry=data.get("expiry"),
            expired=bool(data.get("expired", False)),
        )


def _field(parts: List[str], index: int) -> str:
    return parts[index] if index < len(parts) else ""


def key_line_to_record(pub_line: str, fpr_line: str, now: Optional[int] = None) -> KeyRecord:
    """Build a KeyRecord from a ``pub:`` line and its ``fpr:`` line."""
    pub_split = pub_line.split(":")
    fpr_split = fpr_line.split(":")

    fingerprint = _field(fpr_split, 9)
    key_type = KEY_TYPES.get(_field(pub_split, 3), UNRECOGNIZED)

    expiry_field = _field(pub_split, 6)
    expiry_epoch = to_int(expiry_field) if expiry_field else None
    if now is None:
        now = now_epoch()

    return KeyRecord(
        fingerprint=fingerprint,
        size=to_int(_field(pub_split, 2)),
        type=key_type,
        created=epoch_to_ts(to_int(_field(pub_split, 5))),
        expiry=epoch_to_ts(expiry_epoch) if expiry_epoch is not None else None,
        expired=expiry_epoch is not None and now >= expiry_epoch,
    )
