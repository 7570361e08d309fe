# aptkey_core/config.py
from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional
import os

DEFAULT_SERVER = "keyserver.ubuntu.com"


@dataclass
class ProviderConfig:
    provider: str = "apt"
    apt_key_cmd: str = "apt-key"
    gpg_cmd: str = "/usr/bin/gpg"
    default_server: str = DEFAULT_SERVER
    fetch_timeout: float = 30.0
    delete_attempts: int = 5

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


_ENV = {
    "provider": "APTKEY_PROVIDER",
    "apt_key_cmd": "APTKEY_CMD",
    "gpg_cmd": "APTKEY_GPG",
    "default_server": "APTKEY_DEFAULT_SERVER",
    "fetch_timeout": "APTKEY_FETCH_TIMEOUT",
    "delete_attempts": "APTKEY_DELETE_ATTEMPTS",
}


def load_config(config: Optional[Dict[str, Any]] = None) -> ProviderConfig:
    """
    Resolve provider settings.

    Explicit ``config`` values win, then ``APTKEY_*`` environment variables,
    then the dataclass defaults.
    """
    config = config or {}
    values: Dict[str, Any] = {}
    for key, env_name in _ENV.items():
        if config.get(key) is not None:
            values[key] = config[key]
        elif os.getenv(env_name):
            values[key] = os.getenv(env_name)

    if "fetch_timeout" in values:
        values["fetch_timeout"] = float(values["fetch_timeout"])
    if "delete_attempts" in values:
        values["delete_attempts"] = int(values["delete_attempts"])
    if "provider" in values:
        values["provider"] = str(values["provider"]).lower()

    return ProviderConfig(**values)
