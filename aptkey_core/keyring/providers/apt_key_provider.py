# aptkey_core/keyring/providers/apt_key_provider.py
from __future__ import annotations
from typing import Any, Dict, List, Optional
from aptkey_core.command import Command
from aptkey_core.config import ProviderConfig
from aptkey_core.errors import FingerprintMismatchError
from aptkey_core.keyring.listing import FPR_FIELD, parse_key_listing, split_lines
from aptkey_core.keyring.listing import fingerprints as listed_fingerprints
from aptkey_core.keyring.models import KeyRecord
from aptkey_core.keyring.provider import KeyringProvider
from aptkey_core.logger import get_logger
from aptkey_core.resource import AptKeyResource
from aptkey_core.sources import fetch_source, temp_key_file

log = get_logger("aptkey.provider.apt")

LIST_ARGS = ("adv", "--list-keys", "--with-colons", "--fingerprint", "--fixed-list-mode")


class AptKeyProvider(KeyringProvider):
    """Manages the apt keyring by shelling out to ``apt-key`` and ``gpg``."""

    name = "apt"

    def __init__(
        self,
        config: Optional[ProviderConfig] = None,
        apt_key_cmd: Optional[Command] = None,
        gpg_cmd: Optional[Command] = None,
    ):
        super().__init__(config)
        self.apt_key_cmd = apt_key_cmd or Command(self.config.apt_key_cmd)
        self.gpg_cmd = gpg_cmd or Command(self.config.gpg_cmd)

    # ------------------------------------------------------------------
    # Inventory
    # ------------------------------------------------------------------
    def key_list_lines(self) -> List[str]:
        lines = split_lines(self.apt_key_cmd.capture(*LIST_ARGS))
        log.debug(f"[LIST] {len(lines)} lines from {self.apt_key_cmd.command}")
        return lines

    def list_records(self) -> List[KeyRecord]:
        return parse_key_listing(self.key_list_lines())

    def fingerprints(self) -> List[str]:
        return listed_fingerprints(self.key_list_lines())

    # ------------------------------------------------------------------
    # Changes
    # ------------------------------------------------------------------
    def create(self, context, title: str, should: Dict[str, Any], noop: bool = False) -> None:
        with context.creating(title) as ctx:
            if should.get("source") is not None and should.get("content") is not None:
                ctx.fail("The properties content and source are mutually exclusive")

            res = AptKeyResource.from_dict(
                {**should, "name": title}, default_server=self.config.default_server,
            )

            if res.source is None and res.content is None:
                # apt-key blows up unless --recv-keys is the last argument
                args = ["adv", "--keyserver", res.server]
                if res.options:
                    args += ["--keyserver-options", res.options]
                args += ["--recv-keys", title]
                self.apt_key_cmd.run(ctx, *args, noop=noop)
                return

            if res.content is not None:
                content = res.content
            else:
                content = fetch_source(res.source, timeout=self.config.fetch_timeout)

            with temp_key_file(content) as key_file:
                self.verify_key_file(ctx, title, key_file)
                self.apt_key_cmd.run(ctx, "add", key_file, noop=noop)

    def delete(self, context, title: str, noop: bool = False) -> None:
        with context.deleting(title) as ctx:
            if noop:
                self.apt_key_cmd.run(ctx, "del", title, noop=True)
                return

            for _ in range(self.config.delete_attempts):
                self.apt_key_cmd.run(ctx, "del", title)
                if not any(fp.endswith(title) for fp in self.fingerprints()):
                    return
                ctx.debug(title, "Key still listed after delete, retrying")

            ctx.fail(f"{title} is still present after {self.config.delete_attempts} delete attempts")

    def verify_key_file(self, context, title: str, key_file: str) -> None:
        """Check the key file holds the key named by ``title``."""
        if not self.gpg_cmd.executable():
            context.warning(title, f"{self.gpg_cmd.command} cannot be found for verification of the fingerprint.")
            return

        output = self.gpg_cmd.capture("--with-fingerprint", "--with-colons", key_file)
        extracted = [
            line.split(":")[FPR_FIELD]
            for line in split_lines(output)
            if line.startswith("fpr:") and len(line.split(":")) > FPR_FIELD
        ]

        if title in extracted:
            context.debug(title, "Fingerprint verified against extracted key")
        elif any(k.endswith(title) for k in extracted):
            context.debug(title, "Fingerprint matches the extracted key")
        else:
            raise FingerprintMismatchError(
                f"The fingerprint in your manifest ({title}) and the fingerprint from "
                f"content/source ({extracted}) do not match. Please check there is not an "
                "error in the name or check the content/source is legitimate."
            )
