"""
aptkey_core.keyring.listing
---------------------------
Parsers for gpg's machine-readable ``--with-colons`` output.

Only two record kinds matter here: ``pub`` (primary key) and ``fpr``
(fingerprint, field 10). Everything else (``tru``, ``rvk``, ``uid``, ``sub``,
apt-key's ``Executing:`` banner) is skipped.
"""

from __future__ import annotations
from typing import Iterable, List, Optional
from aptkey_core.keyring.models import KeyRecord, key_line_to_record

FPR_FIELD = 9


def split_lines(output: str) -> List[str]:
    return [line.strip() for line in output.splitlines()]


def parse_key_listing(lines: Iterable[str], now: Optional[int] = None) -> List[KeyRecord]:
    """Pair each ``pub`` line with the next ``fpr`` line."""
    records = []
    pub_line = None
    fpr_line = None

    for line in lines:
        if line.startswith("pub"):
            pub_line = line
            # drop a subkey fpr picked up after the previous primary key
            fpr_line = None
        elif line.startswith("fpr"):
            fpr_line = line

        if not (pub_line and fpr_line):
            continue

        records.append(key_line_to_record(pub_line, fpr_line, now=now))
        pub_line = None
        fpr_line = None

    return records


def fingerprints(lines: Iterable[str]) -> List[str]:
    """Every fingerprint in the listing, subkeys included."""
    result = []
    for line in lines:
        if not line.startswith("fpr:"):
            continue
        parts = line.split(":")
        if len(parts) > FPR_FIELD and parts[FPR_FIELD]:
            result.append(parts[FPR_FIELD])
    return result
