"""
Tests for the hardware identity providers.
"""
import pytest

from sessionkeeper import hardware
from sessionkeeper.errors import HardwareIdentityUnavailable
from sessionkeeper.hardware import (
    FallbackIdentity,
    LinuxMachineIdentity,
    MacAddressIdentity,
    StaticIdentity,
    WindowsMachineGuidIdentity,
    default_identity_provider,
)


@pytest.fixture
def host_env(monkeypatch):
    monkeypatch.setattr(hardware.platform, "node", lambda: "devbox")
    monkeypatch.setenv("USER", "sam")


class TestStaticIdentity:

    def test_returns_value(self):
        assert StaticIdentity("abc").identity() == "abc"

    def test_empty_rejected(self):
        with pytest.raises(HardwareIdentityUnavailable):
            StaticIdentity("")


class TestFallback:

    def test_uses_host_and_user(self, host_env):
        assert FallbackIdentity().identity() == "SESSIONKEEPER-FALLBACK-devbox-sam"

    def test_host_name_ignores_shell_variable(self, monkeypatch, host_env):
        monkeypatch.setenv("HOSTNAME", "container-42")
        assert FallbackIdentity().identity() == "SESSIONKEEPER-FALLBACK-devbox-sam"

    def test_environment_used_without_node_name(self, monkeypatch):
        monkeypatch.setattr(hardware.platform, "node", lambda: "")
        monkeypatch.delenv("COMPUTERNAME", raising=False)
        monkeypatch.setenv("HOSTNAME", "devbox")
        monkeypatch.setenv("USER", "sam")
        assert FallbackIdentity().identity() == "SESSIONKEEPER-FALLBACK-devbox-sam"

    def test_never_empty(self, monkeypatch):
        for name in ("HOSTNAME", "COMPUTERNAME", "USER", "USERNAME"):
            monkeypatch.delenv(name, raising=False)
        monkeypatch.setattr(hardware.platform, "node", lambda: "")
        assert FallbackIdentity().identity() == "SESSIONKEEPER-FALLBACK-unknown-user"


class TestMacAddressIdentity:

    def test_formats_mac(self, monkeypatch):
        monkeypatch.setattr(hardware.uuid, "getnode", lambda: 0x001A2B3C4D5E)
        assert MacAddressIdentity().identity() == "SESSIONKEEPER-MAC-001A2B3C4D5E"

    def test_random_node_falls_back(self, monkeypatch, host_env):
        # multicast bit set: getnode() could not find a hardware address
        monkeypatch.setattr(hardware.uuid, "getnode", lambda: 0x010000000001)
        assert MacAddressIdentity().identity() == "SESSIONKEEPER-FALLBACK-devbox-sam"

    def test_stable(self):
        provider = MacAddressIdentity()
        assert provider.identity() == provider.identity()


class TestLinuxMachineIdentity:

    def test_reads_first_available_file(self, tmp_path):
        missing = tmp_path / "missing"
        machine_id = tmp_path / "machine-id"
        machine_id.write_text("0123456789abcdef\n")
        provider = LinuxMachineIdentity([str(missing), str(machine_id)])
        assert provider.identity() == "SESSIONKEEPER-LINUX-0123456789abcdef"

    def test_empty_file_skipped(self, tmp_path, host_env):
        empty = tmp_path / "machine-id"
        empty.write_text("   \n")
        assert LinuxMachineIdentity([str(empty)]).identity() == "SESSIONKEEPER-FALLBACK-devbox-sam"

    def test_no_files_falls_back(self, tmp_path, host_env):
        provider = LinuxMachineIdentity([str(tmp_path / "nope")])
        assert provider.identity() == "SESSIONKEEPER-FALLBACK-devbox-sam"


class TestWindowsMachineGuidIdentity:

    def test_strips_dashes(self, monkeypatch):
        provider = WindowsMachineGuidIdentity()
        monkeypatch.setattr(provider, "_machine_guid", lambda: "1234-abcd-5678")
        assert provider.identity() == "SESSIONKEEPER-WIN-1234abcd5678"

    def test_missing_guid_falls_back(self, monkeypatch, host_env):
        provider = WindowsMachineGuidIdentity()
        monkeypatch.setattr(provider, "_machine_guid", lambda: None)
        assert provider.identity() == "SESSIONKEEPER-FALLBACK-devbox-sam"

    def test_always_non_empty(self):
        assert WindowsMachineGuidIdentity().identity()


class TestProviderSelection:

    @pytest.mark.parametrize("system, expected", [
        ("Darwin", MacAddressIdentity),
        ("Windows", WindowsMachineGuidIdentity),
        ("Linux", LinuxMachineIdentity),
        ("SunOS", FallbackIdentity),
    ])
    def test_by_platform(self, system, expected):
        assert type(default_identity_provider(system)) is expected

    def test_current_platform_identity(self):
        identity = default_identity_provider().identity()
        assert identity.startswith("SESSIONKEEPER-")
        assert identity == default_identity_provider().identity()
