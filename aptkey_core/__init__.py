"""
aptkey_core
===========
Provider hooks for managing GPG keys in apt's package-signing keyring.

Provides:
- apt_key type definition and desired-state validation
- canonicalize / get / set hooks for a host reconciliation engine
- apt-key backed keyring provider (in-memory variant for dry runs)
"""

from aptkey_core.context import BaseContext
from aptkey_core.keyring import (
    AptKeyProvider, InMemoryKeyring, KeyRecord, KeyringProvider, load_keyring_provider,
)
from aptkey_core.resource import AptKeyResource

__all__ = [
    "AptKeyProvider",
    "AptKeyResource",
    "BaseContext",
    "InMemoryKeyring",
    "KeyRecord",
    "KeyringProvider",
    "load_keyring_provider",
]
