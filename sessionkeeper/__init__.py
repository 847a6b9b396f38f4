"""
SessionKeeper account manager
Copyright (c) 2026

LEGAL NOTICE AND THREAT MODEL:
This tool is for personal use only. Session tokens are stored encrypted with a
key derived from the master password and this machine's hardware identity, so
the vault cannot be opened on another machine. Anyone able to read the vault
file can still attempt offline password guesses against it; choose a strong
master password.
"""

from .errors import (
    AccountNotFoundError,
    AuthenticationError,
    CipherError,
    CipherInitError,
    DecodeError,
    DuplicateAccountError,
    HardwareIdentityUnavailable,
    InvalidAccountError,
    SessionKeeperError,
    VaultError,
    VaultExistsError,
    VaultIOError,
    VaultLockedError,
    VaultNotFoundError,
    VaultParseError,
)
from .models import Account, UserInfo
from .session import VaultSession
from .storage import VaultStatus, VaultStore
from .crypto import CryptoManager, decrypt_string, derive_key, encrypt_string
from .hardware import HardwareIdentityProvider, StaticIdentity, default_identity_provider
from .binarycookies import BinaryCookies, Cookie, Page
from .export import build_cookie_store, export_session, session_cookie

__all__ = [
    "Account",
    "AccountNotFoundError",
    "AuthenticationError",
    "BinaryCookies",
    "CipherError",
    "CipherInitError",
    "Cookie",
    "CryptoManager",
    "DecodeError",
    "DuplicateAccountError",
    "HardwareIdentityProvider",
    "HardwareIdentityUnavailable",
    "InvalidAccountError",
    "Page",
    "SessionKeeperError",
    "StaticIdentity",
    "UserInfo",
    "VaultError",
    "VaultExistsError",
    "VaultIOError",
    "VaultLockedError",
    "VaultNotFoundError",
    "VaultParseError",
    "VaultSession",
    "VaultStatus",
    "VaultStore",
    "build_cookie_store",
    "decrypt_string",
    "default_identity_provider",
    "derive_key",
    "encrypt_string",
    "export_session",
    "session_cookie",
]
