"""
Cryptographic operations for the session vault.

LEGAL NOTICE:
This module handles encryption/decryption of session tokens. It must only be used
for managing accounts you own, on devices you own or administer.
"""

import os
import base64
import binascii
from typing import Optional, Tuple, Union
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC
from cryptography.hazmat.backends import default_backend
from cryptography.exceptions import InvalidTag

from . import config
from .errors import AuthenticationError, CipherInitError, DecodeError
from .hardware import HardwareIdentityProvider, default_identity_provider

KeyLike = Union[bytes, bytearray]


class CryptoManager:
    """Handles key derivation and token encryption for the vault."""

    # Constants
    KEY_SIZE = config.KEY_SIZE      # 256 bits for AES-256
    NONCE_SIZE = config.NONCE_SIZE  # 96 bits for GCM
    TAG_SIZE = config.TAG_SIZE      # 128 bits

    # KDF parameters
    PBKDF2_ITERATIONS = config.PBKDF2_ITERATIONS

    def __init__(self, identity_provider: Optional[HardwareIdentityProvider] = None):
        """
        Initialize the crypto manager.

        Args:
            identity_provider: Source of the hardware identity mixed into the
                key-derivation salt. Defaults to the provider for this platform.
        """
        self.backend = default_backend()
        self.identity_provider = identity_provider

    def salt(self) -> bytes:
        """Build the PBKDF2 salt from the fixed prefix and the hardware identity."""
        provider = self.identity_provider or default_identity_provider()
        return f"{config.KDF_SALT_PREFIX}{provider.identity()}".encode("utf-8")

    def derive_key(self, password: str) -> bytes:
        """
        Derive the vault key from a password and this machine's identity.

        The same password on the same machine always yields the same key.
        Nothing is cached; every call runs the full PBKDF2 computation.

        Args:
            password: The master password

        Returns:
            32-byte encryption key
        """
        kdf = PBKDF2HMAC(
            algorithm=hashes.SHA256(),
            length=self.KEY_SIZE,
            salt=self.salt(),
            iterations=self.PBKDF2_ITERATIONS,
            backend=self.backend
        )
        return kdf.derive(password.encode("utf-8"))

    def _check_key(self, key: KeyLike) -> bytes:
        if not isinstance(key, (bytes, bytearray)) or len(key) != self.KEY_SIZE:
            raise CipherInitError(f"Cipher init error: key must be {self.KEY_SIZE} bytes")
        return bytes(key)

    def encrypt(self, plaintext: bytes, key: KeyLike) -> Tuple[bytes, bytes, bytes]:
        """
        Encrypt data using AES-256-GCM with a fresh random nonce.

        Args:
            plaintext: Data to encrypt
            key: 32-byte encryption key

        Returns:
            Tuple of (ciphertext, nonce, tag)
        """
        key = self._check_key(key)
        nonce = os.urandom(self.NONCE_SIZE)
        cipher = Cipher(
            algorithms.AES(key),
            modes.GCM(nonce),
            backend=self.backend
        )
        encryptor = cipher.encryptor()
        ciphertext = encryptor.update(plaintext) + encryptor.finalize()
        return ciphertext, nonce, encryptor.tag

    def decrypt(self, ciphertext: bytes, key: KeyLike, nonce: bytes, tag: bytes) -> bytes:
        """
        Decrypt data using AES-256-GCM.

        Raises:
            AuthenticationError: If authentication fails
        """
        key = self._check_key(key)
        cipher = Cipher(
            algorithms.AES(key),
            modes.GCM(nonce, tag),
            backend=self.backend
        )
        decryptor = cipher.decryptor()
        try:
            return decryptor.update(ciphertext) + decryptor.finalize()
        except InvalidTag as e:
            raise AuthenticationError("Decryption failed: invalid key or corrupted data") from e

    def encrypt_string(self, plaintext: str, key: KeyLike) -> str:
        """
        Encrypt a string into a self-contained text blob.

        Returns:
            base64(nonce || ciphertext || tag)
        """
        ciphertext, nonce, tag = self.encrypt(plaintext.encode("utf-8"), key)
        return base64.b64encode(nonce + ciphertext + tag).decode("ascii")

    def decrypt_string(self, blob: str, key: KeyLike) -> str:
        """
        Decrypt a blob produced by encrypt_string.

        Raises:
            DecodeError: If the blob is not valid base64
            AuthenticationError: If the key is wrong or the blob was altered
        """
        key = self._check_key(key)
        try:
            combined = base64.b64decode(blob, validate=True)
        except (binascii.Error, ValueError, TypeError) as e:
            raise DecodeError(f"Base64 decode error: {e}") from e

        if len(combined) < self.NONCE_SIZE + self.TAG_SIZE:
            raise AuthenticationError("Decryption failed: invalid key or corrupted data")

        nonce = combined[:self.NONCE_SIZE]
        ciphertext = combined[self.NONCE_SIZE:-self.TAG_SIZE]
        tag = combined[-self.TAG_SIZE:]
        plaintext = self.decrypt(ciphertext, key, nonce, tag)
        try:
            return plaintext.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError(f"UTF-8 decode error: {e}") from e


def derive_key(password: str, identity_provider: Optional[HardwareIdentityProvider] = None) -> bytes:
    """Derive the vault key for password on this machine."""
    return CryptoManager(identity_provider).derive_key(password)


def encrypt_string(plaintext: str, key: KeyLike) -> str:
    return CryptoManager().encrypt_string(plaintext, key)


def decrypt_string(blob: str, key: KeyLike) -> str:
    return CryptoManager().decrypt_string(blob, key)
