import pytest
from aptkey_core.config import ProviderConfig, load_config
from aptkey_core.keyring import AptKeyProvider, InMemoryKeyring, load_keyring_provider

# CMD Line Usage: pytest -v -s --log-cli-level=DEBUG tests/test_provider_factory.py


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("APTKEY_PROVIDER", "APTKEY_CMD", "APTKEY_GPG", "APTKEY_DEFAULT_SERVER",
                 "APTKEY_FETCH_TIMEOUT", "APTKEY_DELETE_ATTEMPTS"):
        monkeypatch.delenv(name, raising=False)


def test_default_config():
    assert load_config() == ProviderConfig()
    assert load_config().to_dict()["apt_key_cmd"] == "apt-key"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("APTKEY_GPG", "/usr/local/bin/gpg")
    monkeypatch.setenv("APTKEY_FETCH_TIMEOUT", "5")
    monkeypatch.setenv("APTKEY_DELETE_ATTEMPTS", "2")
    cfg = load_config()
    assert cfg.gpg_cmd == "/usr/local/bin/gpg"
    assert cfg.fetch_timeout == 5.0
    assert cfg.delete_attempts == 2


def test_explicit_config_wins(monkeypatch):
    monkeypatch.setenv("APTKEY_DEFAULT_SERVER", "env.example.org")
    assert load_config({"default_server": "dict.example.org"}).default_server == "dict.example.org"


def test_provider_modes(monkeypatch):
    """Verify that load_keyring_provider returns the backend named by APTKEY_PROVIDER."""
    provider = load_keyring_provider()
    assert isinstance(provider, AptKeyProvider)
    assert provider.apt_key_cmd.command == "apt-key"
    assert provider.gpg_cmd.command == "/usr/bin/gpg"

    monkeypatch.setenv("APTKEY_PROVIDER", "MEMORY")
    assert isinstance(load_keyring_provider(), InMemoryKeyring)

    assert isinstance(load_keyring_provider({"provider": "apt"}), AptKeyProvider)


def test_unknown_provider():
    with pytest.raises(ValueError, match="Unknown keyring provider"):
        load_keyring_provider({"provider": "vault"})
