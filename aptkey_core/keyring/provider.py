# aptkey_core/keyring/provider.py
"""
Provider hooks called by the host framework's reconciliation engine.

The host owns validation dispatch, ordering and idempotence. It calls:

- ``canonicalize(context, resources)`` before comparing desired and actual state
- ``get(context)`` to read the actual state
- ``set(context, changes)`` with ``{name: {"is": ..., "should": ...}}``

Backends implement ``list_records``, ``create`` and ``delete``; the rest is
shared here.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional
from aptkey_core.config import ProviderConfig
from aptkey_core.keyring.models import KeyRecord
from aptkey_core.utils import FINGERPRINT_LEN, ensure_value, is_key_id, normalize_key_id

SHORT_NAME_WARNING = (
    "The name should be a full fingerprint (40 characters) to avoid collision "
    "attacks, see the README for details."
)


class KeyringProvider:
    name = "base"

    def __init__(self, config: Optional[ProviderConfig] = None):
        self.config = config or ProviderConfig()

    # Backend interface
    def list_records(self) -> List[KeyRecord]:
        raise NotImplementedError

    def create(self, context, title: str, should: Dict[str, Any], noop: bool = False) -> None:
        raise NotImplementedError

    def delete(self, context, title: str, noop: bool = False) -> None:
        raise NotImplementedError

    def fingerprints(self) -> List[str]:
        return [rec.fingerprint for rec in self.list_records()]

    # ---------------------------
    # Host hooks
    # ---------------------------
    def canonicalize(self, context, resources: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        for r in resources:
            name = r.get("name") or r.get("id")
            if name is None:
                continue
            name = normalize_key_id(str(name))

            if len(name) != FINGERPRINT_LEN:
                context.warning(name, SHORT_NAME_WARNING)
                if is_key_id(name):
                    fingerprint = next((fp for fp in self.fingerprints() if fp.endswith(name)), None)
                    if fingerprint:
                        name = fingerprint

            r["name"] = name
            r["id"] = name
        return resources

    def get(self, context=None) -> List[Dict[str, Any]]:
        return [rec.to_dict() for rec in self.list_records()]

    def get_single(self, context, name: str) -> Optional[Dict[str, Any]]:
        return next((r for r in self.get(context) if r["name"] == name), None)

    def set(self, context, changes: Dict[str, Dict[str, Any]], noop: bool = False) -> None:
        for name, change in changes.items():
            is_ = change["is"] if "is" in change else self.get_single(context, name)
            should = change.get("should")

            if is_ is None:
                is_ = {"name": name, "ensure": "absent"}
            if should is None:
                should = {"name": name, "ensure": "absent"}

            current = ensure_value(is_.get("ensure", "absent"))
            wanted = ensure_value(should.get("ensure", "present"))

            if current == "absent" and wanted == "present":
                self.create(context, name, should, noop=noop)
            elif current == "present" and wanted == "absent":
                self.delete(context, name, noop=noop)
            elif current == "present":
                context.debug(name, "Key is present, updating is not supported")
