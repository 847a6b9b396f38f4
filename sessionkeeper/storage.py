"""
Encrypted storage of game accounts.

LEGAL NOTICE:
This module handles secure storage of session tokens. All data is encrypted locally
and never transmitted. Use only on devices you own or administer.
"""

import os
import json
import time
import uuid
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from .crypto import CryptoManager
from .errors import (
    AccountNotFoundError,
    CipherError,
    DuplicateAccountError,
    InvalidAccountError,
    VaultExistsError,
    VaultIOError,
    VaultNotFoundError,
    VaultParseError,
)
from .models import Account, EncryptedAccount, UserInfo, VaultRecord
from .session import VaultSession
from .utils import atomic_write
from . import config

logger = logging.getLogger(__name__)

# Resolves a session token to the user it belongs to; raises if the token is invalid.
TokenValidator = Callable[[str], UserInfo]


@dataclass
class VaultStatus:
    exists: bool
    unlocked: bool


class VaultStore:
    """Manages the encrypted account vault file and its locked/unlocked session."""

    VERSION = config.VAULT_VERSION

    def __init__(self, filepath: Optional[str] = None, session: Optional[VaultSession] = None,
                 crypto: Optional[CryptoManager] = None):
        """
        Initialize the vault store.

        Args:
            filepath: Path to the vault file. Defaults to config.get_default_vault_path().
            session: Session holding the key. Stores sharing a session share its lock.
            crypto: Key derivation and cipher implementation.
        """
        self.filepath = filepath or config.get_default_vault_path()
        self.session = session or VaultSession()
        self.crypto = crypto or CryptoManager()

    # -------- Session --------

    def exists(self) -> bool:
        return os.path.exists(self.filepath)

    def is_unlocked(self) -> bool:
        return self.session.unlocked

    def status(self) -> VaultStatus:
        return VaultStatus(exists=self.exists(), unlocked=self.is_unlocked())

    def create(self, master_password: str, overwrite: bool = False) -> None:
        """
        Create a new, empty vault and unlock it.

        Args:
            master_password: The master password for encryption
            overwrite: Replace an existing vault file instead of failing

        Raises:
            VaultExistsError: If a vault already exists and overwrite is False
        """
        with self.session.lock:
            if self.exists() and not overwrite:
                raise VaultExistsError(f"A vault already exists at {self.filepath}")

            key = self.crypto.derive_key(master_password)
            record = VaultRecord(
                version=self.VERSION,
                verification=self.crypto.encrypt_string(config.VERIFICATION_PLAINTEXT, key),
                accounts=[],
            )
            directory = os.path.dirname(os.path.abspath(self.filepath))
            try:
                os.makedirs(directory, exist_ok=True)
            except OSError as e:
                raise VaultIOError(f"Failed to create vault directory {directory}: {e}") from e
            self._write_record(record)
            self.session.open(key)
            logger.info(f"Created new vault at {self.filepath}")

    def unlock(self, master_password: str) -> bool:
        """
        Unlock an existing vault.

        Args:
            master_password: The master password

        Returns:
            True if unlock successful, False if the password is wrong

        Raises:
            VaultNotFoundError: If there is no vault file
            VaultParseError: If the vault file is malformed
        """
        with self.session.lock:
            record = self._read_record()
            key = self.crypto.derive_key(master_password)
            try:
                verified = self.crypto.decrypt_string(record.verification, key) == config.VERIFICATION_PLAINTEXT
            except CipherError:
                verified = False

            if not verified:
                logger.warning("Unlock: wrong password for vault")
                return False

            self.session.open(key)
            logger.info("Vault unlocked")
            return True

    def lock(self) -> None:
        """Lock the vault and clear the key from memory."""
        with self.session.lock:
            self.session.close()
            logger.info("Vault locked")

    # -------- Whole-vault load/save --------

    def load_accounts(self) -> List[Account]:
        """
        Decrypt and return every stored account.

        Raises:
            VaultLockedError: If the vault is locked
            CipherError: If any account fails to decrypt
        """
        with self.session.lock:
            key = self.session.key()
            if not self.exists():
                return []
            record = self._read_record()
            return [self._decrypt_account(enc, key) for enc in record.accounts]

    def save_accounts(self, accounts: List[Account]) -> None:
        """
        Encrypt accounts and replace the vault file with them.

        The version tag and verification ciphertext of the existing file are kept.
        Every token is encrypted with a fresh nonce.

        Raises:
            VaultLockedError: If the vault is locked
            VaultNotFoundError: If the vault file is missing
            DuplicateAccountError: If two accounts share an id or a user id
            InvalidAccountError: If a field holds a value of the wrong type
        """
        with self.session.lock:
            key = self.session.key()
            _check_unique(accounts)
            record = self._read_record()
            now = int(time.time())
            record.accounts = [self._encrypt_account(acc, key, now) for acc in accounts]
            self._write_record(record)

    # -------- Account operations --------

    def get_account(self, account_id: str) -> Account:
        for account in self.load_accounts():
            if account.id == account_id:
                return account
        raise AccountNotFoundError("Account not found")

    def add_account(self, token: str, validator: TokenValidator) -> Account:
        """
        Add an account for a session token.

        Args:
            token: The session token
            validator: Resolves the token to its user; called before the vault is touched

        Raises:
            DuplicateAccountError: If the token's user is already stored
        """
        with self.session.lock:
            self.session.key()
            user = validator(token)
            account = Account(
                id=str(uuid.uuid4()),
                token=token,
                user_id=user.user_id,
                username=user.username,
                display_name=user.display_name,
                thumbnail=user.thumbnail,
                created_at=int(time.time()),
            )

            accounts = self.load_accounts()
            if any(a.user_id == account.user_id for a in accounts):
                raise DuplicateAccountError(f"Account {account.display_name} is already added")

            accounts.append(account)
            self.save_accounts(accounts)
            logger.info(f"Added account {account.id} (user {account.user_id})")
            return account

    def update_account(self, account: Account) -> Account:
        """
        Copy the user-editable fields of account onto the stored account with the same id.

        Identity fields and the token are not changed.
        """
        with self.session.lock:
            accounts = self.load_accounts()
            for stored in accounts:
                if stored.id == account.id:
                    stored.alias = account.alias
                    stored.description = account.description
                    stored.is_favorite = account.is_favorite
                    stored.last_played_at = account.last_played_at
                    self.save_accounts(accounts)
                    return stored
            raise AccountNotFoundError("Account not found")

    def mark_played(self, account_id: str, when: Optional[float] = None) -> Account:
        """Record that the account was just used to launch the client."""
        with self.session.lock:
            account = self.get_account(account_id)
            account.last_played_at = int((time.time() if when is None else when) * 1000)
            return self.update_account(account)

    def delete_account(self, account_id: str) -> None:
        with self.session.lock:
            accounts = self.load_accounts()
            remaining = [a for a in accounts if a.id != account_id]
            if len(remaining) == len(accounts):
                raise AccountNotFoundError("Account not found")
            self.save_accounts(remaining)
            logger.info(f"Deleted account {account_id}")

    def clear_accounts(self) -> None:
        with self.session.lock:
            self.save_accounts([])
            logger.info("Cleared all accounts")

    # -------- Backup --------

    def export_accounts(self) -> str:
        """Return the raw vault file for backup; tokens stay encrypted."""
        with self.session.lock:
            self.session.key()
            if not self.exists():
                return "{}"
            return self._read_text()

    def import_accounts(self, data: str, merge: bool) -> int:
        """
        Import accounts from a backup produced by export_accounts.

        Accounts whose token cannot be decrypted with the current key are skipped.

        Args:
            data: Backup file content
            merge: Add to the existing accounts (skipping users already stored)
                instead of replacing them

        Returns:
            Number of accounts decrypted from the backup
        """
        with self.session.lock:
            key = self.session.key()
            backup = self._parse(data)

            imported = []
            for enc in backup.accounts:
                try:
                    imported.append(self._decrypt_account(enc, key))
                except CipherError:
                    logger.warning(f"Import: skipping account {enc.id}, it cannot be decrypted with this vault's key")

            if merge:
                accounts = self.load_accounts()
                known = {a.user_id for a in accounts}
                known_ids = {a.id for a in accounts}
                for account in imported:
                    if account.user_id in known:
                        continue
                    if account.id in known_ids:
                        account.id = str(uuid.uuid4())
                    accounts.append(account)
                    known.add(account.user_id)
                    known_ids.add(account.id)
            else:
                accounts = _dedupe(imported)

            self.save_accounts(accounts)
            logger.info(f"Imported {len(imported)} account(s)")
            return len(imported)

    # -------- File access --------

    def _decrypt_account(self, enc: EncryptedAccount, key: bytes) -> Account:
        return Account(
            id=enc.id,
            token=self.crypto.decrypt_string(enc.encrypted_cookie, key),
            user_id=enc.user_id,
            username=enc.username,
            display_name=enc.display_name,
            thumbnail=enc.thumbnail,
            alias=enc.alias,
            description=enc.description,
            is_favorite=enc.is_favorite,
            last_played_at=enc.last_played_at,
            created_at=enc.created_at,
        )

    def _encrypt_account(self, acc: Account, key: bytes, now: int) -> EncryptedAccount:
        if not isinstance(acc.token, str):
            raise InvalidAccountError(f"Account {acc.id!r}: field 'token' has the wrong type")
        enc = EncryptedAccount(
            id=acc.id,
            encrypted_cookie=self.crypto.encrypt_string(acc.token, key),
            user_id=acc.user_id,
            username=acc.username,
            display_name=acc.display_name,
            thumbnail=acc.thumbnail,
            alias=acc.alias,
            description=acc.description,
            is_favorite=acc.is_favorite,
            last_played_at=acc.last_played_at,
            created_at=acc.created_at if acc.created_at is not None else now,
        )
        enc.validate()
        return enc

    def _read_text(self) -> str:
        try:
            with open(self.filepath, "r", encoding=config.VAULT_FILE_ENCODING) as f:
                return f.read()
        except FileNotFoundError as e:
            raise VaultNotFoundError(f"No vault found at {self.filepath}") from e
        except UnicodeDecodeError as e:
            raise VaultParseError(f"Vault file is not valid text: {e}") from e
        except OSError as e:
            raise VaultIOError(f"Failed to read vault {self.filepath}: {e}") from e

    def _parse(self, text: str) -> VaultRecord:
        try:
            data = json.loads(text)
        except ValueError as e:
            raise VaultParseError(f"Invalid vault format: {e}") from e
        return VaultRecord.from_json(data)

    def _read_record(self) -> VaultRecord:
        return self._parse(self._read_text())

    def _write_record(self, record: VaultRecord) -> None:
        payload = json.dumps(record.to_json(), indent=config.VAULT_JSON_INDENT)
        try:
            atomic_write(self.filepath, payload.encode(config.VAULT_FILE_ENCODING))
        except OSError as e:
            logger.error(f"Error saving vault file {self.filepath}: {e}", exc_info=True)
            raise VaultIOError(f"Failed to write vault {self.filepath}: {e}") from e


def _dedupe(accounts: List[Account]) -> List[Account]:
    seen_users = set()
    seen_ids = set()
    result = []
    for account in accounts:
        if account.user_id in seen_users:
            continue
        if account.id in seen_ids:
            account.id = str(uuid.uuid4())
        seen_users.add(account.user_id)
        seen_ids.add(account.id)
        result.append(account)
    return result


def _check_unique(accounts: List[Account]) -> None:
    ids = set()
    users = set()
    for account in accounts:
        if account.id in ids:
            raise DuplicateAccountError(f"Duplicate account id {account.id}")
        if account.user_id in users:
            raise DuplicateAccountError(f"Duplicate account for user {account.user_id}")
        ids.add(account.id)
        users.add(account.user_id)
