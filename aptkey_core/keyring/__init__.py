# aptkey_core/keyring/__init__.py
from __future__ import annotations

from .models import KeyRecord, key_line_to_record
from .provider import KeyringProvider
from .providers.apt_key_provider import AptKeyProvider
from .providers.memory_provider import InMemoryKeyring
from aptkey_core.config import load_config


def load_keyring_provider(config: dict | None = None) -> KeyringProvider:
    """
    Factory resolver for selecting the keyring backend.

    For now:
        - apt (default)
        - memory
    """
    cfg = load_config(config)

    if cfg.provider == "memory":
        return InMemoryKeyring(cfg)

    if cfg.provider == "apt":
        return AptKeyProvider(cfg)

    raise ValueError(f"Unknown keyring provider: {cfg.provider}")


__all__ = [
    "KeyRecord",
    "key_line_to_record",
    "KeyringProvider",
    "AptKeyProvider",
    "InMemoryKeyring",
    "load_keyring_provider",
]
