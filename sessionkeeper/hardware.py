"""
Hardware identity providers.

The identity string is mixed into the key-derivation salt, which binds a vault
to the machine it was created on. Moving the vault file to other hardware
makes it impossible to unlock, even with the right password.
"""

import os
import platform
import uuid
import logging
from abc import ABC, abstractmethod
from typing import Optional

from . import config
from .errors import HardwareIdentityUnavailable

logger = logging.getLogger(__name__)


def _hostname() -> str:
    # HOSTNAME is not exported by every shell
    return (
        platform.node()
        or os.environ.get("COMPUTERNAME")
        or os.environ.get("HOSTNAME")
        or "unknown"
    )


def _username() -> str:
    return os.environ.get("USER") or os.environ.get("USERNAME") or "user"


class HardwareIdentityProvider(ABC):
    """Produces a stable, non-empty string identifying the host machine."""

    prefix = config.HARDWARE_ID_PREFIX

    @abstractmethod
    def identity(self) -> str:
        """Return the machine identity. Must not raise."""

    def fallback(self) -> str:
        return f"{self.prefix}-FALLBACK-{_hostname()}-{_username()}"


class FallbackIdentity(HardwareIdentityProvider):
    """Hostname and user name only. Always succeeds."""

    def identity(self) -> str:
        return self.fallback()


class StaticIdentity(HardwareIdentityProvider):
    """Returns a fixed identity string supplied by the caller."""

    def __init__(self, value: str):
        if not value:
            raise HardwareIdentityUnavailable("Static identity must be a non-empty string")
        self.value = value

    def identity(self) -> str:
        return self.value


class MacAddressIdentity(HardwareIdentityProvider):
    """Identity derived from the primary network interface's MAC address."""

    def _mac_address(self) -> Optional[int]:
        node = uuid.getnode()
        # getnode() returns a random number with the multicast bit set when
        # no hardware address could be read.
        if (node >> 40) & 0x01:
            return None
        return node

    def identity(self) -> str:
        node = self._mac_address()
        if node is None:
            logger.debug("No hardware MAC address found, using fallback identity")
            return self.fallback()
        return f"{self.prefix}-MAC-{node:012X}"


class WindowsMachineGuidIdentity(HardwareIdentityProvider):
    """Identity read from the MachineGuid registry value on Windows."""

    def _machine_guid(self) -> Optional[str]:
        try:
            import winreg
        except ImportError:
            return None
        try:
            with winreg.OpenKey(winreg.HKEY_LOCAL_MACHINE, config.WINDOWS_CRYPTOGRAPHY_KEY) as key:
                value, _ = winreg.QueryValueEx(key, config.WINDOWS_MACHINE_GUID_VALUE)
        except OSError as e:
            logger.debug(f"Could not read MachineGuid from registry: {e}")
            return None
        return str(value) or None

    def identity(self) -> str:
        guid = self._machine_guid()
        if not guid:
            return self.fallback()
        return f"{self.prefix}-WIN-{guid.replace('-', '')}"


class LinuxMachineIdentity(HardwareIdentityProvider):
    """Identity read from the systemd/D-Bus machine-id files."""

    def __init__(self, paths=None):
        self.paths = list(paths) if paths is not None else list(config.MACHINE_ID_PATHS)

    def _machine_id(self) -> Optional[str]:
        for path in self.paths:
            try:
                with open(path, "r") as f:
                    value = f.read().strip()
            except OSError:
                continue
            if value:
                return value
        return None

    def identity(self) -> str:
        machine_id = self._machine_id()
        if not machine_id:
            logger.debug("No machine-id file readable, using fallback identity")
            return self.fallback()
        return f"{self.prefix}-LINUX-{machine_id}"


_PROVIDERS = {
    "Darwin": MacAddressIdentity,
    "Windows": WindowsMachineGuidIdentity,
    "Linux": LinuxMachineIdentity,
}


def default_identity_provider(system: Optional[str] = None) -> HardwareIdentityProvider:
    """
    Select the identity provider for the running platform.

    Args:
        system: Platform name as returned by platform.system(); detected when omitted.
    """
    system = system or platform.system()
    provider_cls = _PROVIDERS.get(system, FallbackIdentity)
    return provider_cls()
