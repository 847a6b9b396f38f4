"""
Exception types raised by the vault, cipher and hardware identity layers.
"""


class SessionKeeperError(Exception):
    """Base class for all SessionKeeper errors."""


class HardwareIdentityUnavailable(SessionKeeperError):
    """No hardware identity source could be read."""


# Cipher errors

class CipherError(SessionKeeperError):
    """Base class for encryption/decryption failures."""


class CipherInitError(CipherError):
    """The key does not have the length required by AES-256."""


class DecodeError(CipherError):
    """The encoded blob is not valid base64, or the plaintext is not UTF-8."""


class AuthenticationError(CipherError):
    """Wrong key, or tampered/corrupted ciphertext.

    The two causes are reported with the same message on purpose.
    """


# Vault errors

class VaultError(SessionKeeperError):
    """Base class for vault store failures."""


class VaultNotFoundError(VaultError):
    """The vault file does not exist."""


class VaultExistsError(VaultError):
    """A vault file already exists at the target path."""


class VaultParseError(VaultError):
    """The vault file (or a backup) is not a valid vault record."""


class VaultLockedError(VaultError, RuntimeError):
    """An account operation was attempted without an unlocked session."""

    def __init__(self, message: str = "Vault is locked"):
        super().__init__(message)


class AccountNotFoundError(VaultError):
    """No account with the given id exists in the vault."""


class DuplicateAccountError(VaultError):
    """An account for the same external user id is already stored."""


class VaultIOError(VaultError, OSError):
    """Reading or writing the vault file failed."""


class InvalidAccountError(VaultError, ValueError):
    """An account field holds a value the vault file cannot store."""
