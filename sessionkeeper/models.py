"""
Account and vault record data structures.
"""

from dataclasses import dataclass, asdict, field
from typing import Any, Dict, List, Optional

from .errors import InvalidAccountError, VaultParseError


@dataclass
class UserInfo:
    """User details returned by the external token validator."""
    user_id: int
    username: str
    display_name: str
    thumbnail: Optional[str] = None


@dataclass
class Account:
    """A stored game account with its plaintext session token."""
    id: str
    token: str
    user_id: int
    username: str
    display_name: str
    thumbnail: Optional[str] = None
    alias: str = ""
    description: str = ""
    is_favorite: bool = False
    last_played_at: int = 0  # unix milliseconds
    created_at: Optional[int] = None  # unix seconds

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Account':
        """Create from dictionary."""
        return cls(**data)


# camelCase keys of the vault file, in write order
_ACCOUNT_FIELDS = [
    ("id", "id", str),
    ("encrypted_cookie", "encryptedCookie", str),
    ("user_id", "userId", int),
    ("username", "username", str),
    ("display_name", "displayName", str),
    ("thumbnail", "thumbnail", (str, type(None))),
    ("alias", "alias", str),
    ("description", "description", str),
    ("is_favorite", "isFavorite", bool),
    ("last_played_at", "lastPlayedAt", int),
    ("created_at", "createdAt", int),
]

_ACCOUNT_DEFAULTS = {
    "thumbnail": None,
    "alias": "",
    "description": "",
    "is_favorite": False,
    "last_played_at": 0,
    "created_at": 0,
}


def _has_type(value: Any, expected) -> bool:
    # bool is an int subclass; reject it where an integer is expected
    if expected is int and isinstance(value, bool):
        return False
    return isinstance(value, expected)


@dataclass
class EncryptedAccount:
    """An account as stored on disk: metadata in clear, token encrypted."""
    id: str
    encrypted_cookie: str
    user_id: int
    username: str
    display_name: str
    thumbnail: Optional[str] = None
    alias: str = ""
    description: str = ""
    is_favorite: bool = False
    last_played_at: int = 0
    created_at: int = 0

    def to_json(self) -> Dict[str, Any]:
        return {key: getattr(self, attr) for attr, key, _ in _ACCOUNT_FIELDS}

    def validate(self) -> None:
        """Raise InvalidAccountError unless every field would survive from_json."""
        for attr, _, expected in _ACCOUNT_FIELDS:
            if not _has_type(getattr(self, attr), expected):
                raise InvalidAccountError(f"Account {self.id!r}: field '{attr}' has the wrong type")

    @classmethod
    def from_json(cls, data: Any) -> 'EncryptedAccount':
        if not isinstance(data, dict):
            raise VaultParseError("Invalid vault format: account entry is not an object")
        values = {}
        for attr, key, expected in _ACCOUNT_FIELDS:
            if key not in data:
                if attr in _ACCOUNT_DEFAULTS:
                    values[attr] = _ACCOUNT_DEFAULTS[attr]
                    continue
                raise VaultParseError(f"Invalid vault format: account is missing '{key}'")
            value = data[key]
            if not _has_type(value, expected):
                raise VaultParseError(f"Invalid vault format: account field '{key}' has the wrong type")
            values[attr] = value
        return cls(**values)


@dataclass
class VaultRecord:
    """The whole vault file."""
    version: int
    verification: str
    accounts: List[EncryptedAccount] = field(default_factory=list)

    def to_json(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "verification": self.verification,
            "accounts": [a.to_json() for a in self.accounts],
        }

    @classmethod
    def from_json(cls, data: Any) -> 'VaultRecord':
        if not isinstance(data, dict):
            raise VaultParseError("Invalid vault format: expected a JSON object")
        version = data.get("version")
        verification = data.get("verification")
        accounts = data.get("accounts", [])
        if not isinstance(version, int) or isinstance(version, bool):
            raise VaultParseError("Invalid vault format: missing or invalid 'version'")
        if not isinstance(verification, str):
            raise VaultParseError("Invalid vault format: missing or invalid 'verification'")
        if not isinstance(accounts, list):
            raise VaultParseError("Invalid vault format: 'accounts' must be a list")
        return cls(
            version=version,
            verification=verification,
            accounts=[EncryptedAccount.from_json(a) for a in accounts],
        )
