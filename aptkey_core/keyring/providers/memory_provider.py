from typing import Any, Dict, List, Optional
from aptkey_core.config import ProviderConfig
from aptkey_core.keyring.models import KeyRecord
from aptkey_core.keyring.provider import KeyringProvider
from aptkey_core.resource import AptKeyResource


class InMemoryKeyring(KeyringProvider):
    """Keyring held in a dict. Used for dry runs and tests; never touches apt."""

    name = "memory"

    def __init__(self, config: Optional[ProviderConfig] = None, records: Optional[List[KeyRecord]] = None):
        super().__init__(config)
        self.keys: Dict[str, KeyRecord] = {}
        for rec in records or []:
            self.keys[rec.fingerprint] = rec

    def list_records(self) -> List[KeyRecord]:
        return list(self.keys.values())

    def create(self, context, title: str, should: Dict[str, Any], noop: bool = False) -> None:
        with context.creating(title) as ctx:
            if should.get("source") is not None and should.get("content") is not None:
                ctx.fail("The properties content and source are mutually exclusive")
            AptKeyResource.from_dict({**should, "name": title}, default_server=self.config.default_server)
            if noop:
                ctx.debug(title, "noop: would add key")
                return
            self.keys[title] = KeyRecord(fingerprint=title)

    def delete(self, context, title: str, noop: bool = False) -> None:
        with context.deleting(title) as ctx:
            if noop:
                ctx.debug(title, "noop: would delete key")
                return
            for fp in [fp for fp in self.keys if fp.endswith(title)]:
                del self.keys[fp]
