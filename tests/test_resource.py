import pytest
from aptkey_core.errors import ValidationError
from aptkey_core.resource import ATTRIBUTES, READ_ONLY, AptKeyResource

ID = "6F6B15509CF8E59E6E469F327F438280EF8D349F"


def test_defaults_applied():
    res = AptKeyResource.from_dict({"name": ID})
    assert res.ensure == "present"
    assert res.server == "keyserver.ubuntu.com"
    assert res.content is None and res.source is None and res.options is None


def test_default_server_override_and_read_only_ignored():
    res = AptKeyResource.from_dict(
        {"id": ID, "fingerprint": ID, "expired": False, "size": 4096},
        default_server="keys.example.org",
    )
    assert res.name == ID
    assert res.server == "keys.example.org"


@pytest.mark.parametrize("name", ["0x2b90d010", "2B90D010", "7638D0442B90D010", ID, "0x" + ID.lower()])
def test_valid_names(name):
    assert AptKeyResource.from_dict({"name": name}).name == name


@pytest.mark.parametrize("name", ["abc", "0X2B90D010", "2B90D010A", "not a hex number", "G" * 40])
def test_invalid_names(name):
    with pytest.raises(ValidationError) as exc:
        AptKeyResource.from_dict({"name": name})
    assert exc.value.attribute == "name"


def test_missing_name():
    with pytest.raises(ValidationError):
        AptKeyResource.from_dict({"ensure": "present"})


@pytest.mark.parametrize("source", [
    "/etc/apt/keys/puppet.gpg",
    "http://apt.puppetlabs.com/pubkey.gpg",
    "https://apt.puppetlabs.com/pubkey.gpg",
    "ftp://ftp.example.com/pubkey.gpg",
])
def test_valid_sources(source):
    assert AptKeyResource.from_dict({"name": ID, "source": source}).source == source


@pytest.mark.parametrize("source", ["relative/key.gpg", "file:///etc/key.gpg", "hkp://keys.example.org"])
def test_invalid_sources(source):
    with pytest.raises(ValidationError, match="source"):
        AptKeyResource.from_dict({"name": ID, "source": source})


@pytest.mark.parametrize("server", [
    "keyserver.ubuntu.com", "hkp://pgp.mit.edu:11371", "https://keys.example.org", "keys.example.org:80",
])
def test_valid_servers(server):
    assert AptKeyResource.from_dict({"name": ID, "server": server}).server == server


@pytest.mark.parametrize("server", ["localhost", "ftp://keys.example.org", "-bad.example.org", "keys.example.org:1"])
def test_invalid_servers(server):
    with pytest.raises(ValidationError, match="server"):
        AptKeyResource.from_dict({"name": ID, "server": server})


def test_invalid_ensure():
    with pytest.raises(ValidationError, match="ensure"):
        AptKeyResource.from_dict({"name": ID, "ensure": "latest"})


def test_autorequires():
    local = AptKeyResource(name=ID, source="/etc/apt/keys/puppet.gpg")
    remote = AptKeyResource(name=ID, source="https://apt.puppetlabs.com/pubkey.gpg")
    assert local.autorequires() == {"file": ["/etc/apt/keys/puppet.gpg"], "package": ["apt"]}
    assert remote.autorequires() == {"file": [], "package": ["apt"]}


def test_to_manifest():
    res = AptKeyResource(name=ID, source='http://apt.puppetlabs.com/"pubkey".gpg')
    assert res.to_manifest() == "\n".join([
        f'apt_key {{ "{ID}": ',
        '  ensure => "present",',
        '  source => "http://apt.puppetlabs.com/\\"pubkey\\".gpg",',
        '  server => "keyserver.ubuntu.com",',
        "}",
    ])


def test_attribute_table():
    assert READ_ONLY == {"id", "fingerprint", "long", "short", "expired", "expiry", "size", "type", "created"}
    assert ATTRIBUTES["name"]["behaviour"] == "namevar"
    assert ATTRIBUTES["ensure"]["default"] == "present"
