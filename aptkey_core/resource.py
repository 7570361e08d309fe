"""
aptkey_core.resource
--------------------
The ``apt_key`` type definition: the attributes a host framework exposes to
manifests, their patterns and defaults, plus the desired-state record
(``AptKeyResource``) that providers receive as ``should``.

This type provides the capabilities to manage GPG keys needed by apt to
perform package validation. Apt has its own GPG keyring that can be
manipulated through the ``apt-key`` command::

    apt_key { '6F6B15509CF8E59E6E469F327F438280EF8D349F':
      source => 'http://apt.puppetlabs.com/pubkey.gpg'
    }

If the key source looks like an absolute path the resource autorequires that
file, and it always autorequires the ``apt`` package.
"""

from __future__ import annotations
import re
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional
from aptkey_core.config import DEFAULT_SERVER
from aptkey_core.errors import ValidationError
from aptkey_core.utils import ensure_value

TYPE_NAME = "apt_key"

NAME_RE = re.compile(r"\A(0x)?([0-9a-fA-F]{8}|[0-9a-fA-F]{16}|[0-9a-fA-F]{40})\Z")
SOURCE_RE = re.compile(r"\A(/|(https?|ftp)://)")
SERVER_RE = re.compile(r"\A((hkp|http|https)://)?([a-z\d])([a-z\d-]{0,61}\.)+[a-z\d]+(:\d{2,5})?\Z")

ATTRIBUTES: Dict[str, Dict[str, Any]] = {
    "ensure": {
        "type": "Enum[present, absent]",
        "desc": "Whether this apt key should be present or absent on the target system.",
        "default": "present",
    },
    "name": {
        "type": "Variant[Pattern[/\\A(0x)?[0-9a-fA-F]{8}\\Z/], Pattern[/\\A(0x)?[0-9a-fA-F]{16}\\Z/], Pattern[/\\A(0x)?[0-9a-fA-F]{40}\\Z/]]",
        "desc": "The fingerprint of the key you want to manage.",
        "behaviour": "namevar",
    },
    "content": {
        "type": "Optional[String]",
        "desc": "The content of, or string representing, a GPG key.",
        "behaviour": "parameter",
    },
    "source": {
        "type": "Variant[Stdlib::Absolutepath, Pattern[/\\A(https?|ftp):\\/\\//]]",
        "desc": "Location of a GPG key file, /path/to/file, ftp://, http:// or https://",
    },
    "server": {
        "type": "Pattern[/\\A((hkp|http|https):\\/\\/)?([a-z\\d])([a-z\\d-]{0,61}\\.)+[a-z\\d]+(:\\d{2,5})?$/]",
        "desc": "The key server to fetch the key from based on the ID. It can either be a domain name or url.",
        "behaviour": "parameter",
        "default": DEFAULT_SERVER,
    },
    "options": {
        "type": "Optional[String]",
        "desc": "Additional options to pass to apt-key's --keyserver-options.",
    },
    "id": {
        "type": "Pattern[/[A-F0-9]{40}/]",
        "desc": "The 40-digit hexadecimal fingerprint of the specified GPG key.",
        "behaviour": "read_only",
    },
    "fingerprint": {
        "type": "Pattern[/[A-F0-9]{40}/]",
        "desc": "The 40-digit hexadecimal fingerprint of the specified GPG key.",
        "behaviour": "read_only",
    },
    "long": {
        "type": "Pattern[/[A-F0-9]{16}/]",
        "desc": "The 16-digit hexadecimal id of the specified GPG key.",
        "behaviour": "read_only",
    },
    "short": {
        "type": "Pattern[/[A-F0-9]{8}/]",
        "desc": "The 8-digit hexadecimal id of the specified GPG key.",
        "behaviour": "read_only",
    },
    "expired": {
        "type": "Boolean",
        "desc": "Indicates if the key has expired.",
        "behaviour": "read_only",
    },
    "expiry": {
        "type": "Optional[String]",
        "desc": "The date the key will expire, or None if it has no expiry date, in ISO format.",
        "behaviour": "read_only",
    },
    "size": {
        "type": "Integer",
        "desc": "The key size, usually a multiple of 1024.",
        "behaviour": "read_only",
    },
    "type": {
        "type": "String",
        "desc": "The key type, one of: rsa, dsa, ecc, ecdsa.",
        "behaviour": "read_only",
    },
    "created": {
        "type": "String",
        "desc": "Date the key was created, in ISO format.",
        "behaviour": "read_only",
    },
}

READ_ONLY = frozenset(k for k, v in ATTRIBUTES.items() if v.get("behaviour") == "read_only")


@dataclass
class AptKeyResource:
    name: str
    ensure: str = "present"
    content: Optional[str] = None
    source: Optional[str] = None
    server: str = DEFAULT_SERVER
    options: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], default_server: str = DEFAULT_SERVER) -> "AptKeyResource":
        """Apply defaults, ignore read-only attributes, then validate."""
        name = data.get("name") or data.get("id")
        if name is None:
            raise ValidationError("name", None, "a key id or fingerprint")

        server = data.get("server")
        res = cls(
            name=str(name),
            ensure=ensure_value(data.get("ensure") or "present"),
            content=data.get("content"),
            source=data.get("source"),
            server=str(server) if server else default_server,
            options=data.get("options"),
        )
        res.validate()
        return res

    def validate(self) -> None:
        if self.ensure not in ("present", "absent"):
            raise ValidationError("ensure", self.ensure, "'present' or 'absent'")
        if not NAME_RE.match(self.name):
            raise ValidationError("name", self.name, "an 8, 16 or 40 digit hex key id, optionally 0x-prefixed")
        if self.content is not None and not isinstance(self.content, (str, bytes)):
            raise ValidationError("content", self.content, "a string")
        if self.source is not None and not SOURCE_RE.match(str(self.source)):
            raise ValidationError("source", self.source, "an absolute path or an http://, https:// or ftp:// URL")
        if not SERVER_RE.match(self.server):
            raise ValidationError("server", self.server, "a key server host name or hkp/http/https URL")
        if self.options is not None and not isinstance(self.options, str):
            raise ValidationError("options", self.options, "a string")

    def autorequires(self) -> Dict[str, List[str]]:
        files = [self.source] if self.source and self.source.startswith("/") else []
        return {"file": files, "package": ["apt"]}

    def to_manifest(self) -> str:
        lines = [f"{TYPE_NAME} {{ {_quote(self.name)}: "]
        for key, value in self.to_dict().items():
            if key == "name" or value is None:
                continue
            lines.append(f"  {key} => {_quote(value)},")
        lines.append("}")
        return "\n".join(lines)


def _quote(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    text = str(value).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{text}"'
