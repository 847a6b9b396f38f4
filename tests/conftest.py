import pytest

from sessionkeeper.crypto import CryptoManager
from sessionkeeper.hardware import StaticIdentity
from sessionkeeper.models import UserInfo
from sessionkeeper.storage import VaultStore

PASSWORD = "correct-horse"


class FakeValidator:
    """Stands in for the web API lookup that resolves a token to its user."""

    def __init__(self, users=None):
        self.users = dict(users or {})
        self.calls = []

    def __call__(self, token):
        self.calls.append(token)
        if token not in self.users:
            raise ValueError("Invalid session token")
        return self.users[token]


@pytest.fixture
def identity():
    return StaticIdentity("SESSIONKEEPER-TEST-MACHINE")


@pytest.fixture
def crypto(identity):
    return CryptoManager(identity)


@pytest.fixture
def vault_path(tmp_path):
    return str(tmp_path / "data" / "vault.dat")


@pytest.fixture
def store(vault_path, crypto):
    return VaultStore(vault_path, crypto=crypto)


@pytest.fixture
def unlocked_store(store):
    store.create(PASSWORD)
    return store


@pytest.fixture
def validator():
    return FakeValidator({
        "token-alice": UserInfo(1001, "alice", "Alice", "https://cdn.example.com/alice.png"),
        "token-alice-2": UserInfo(1001, "alice", "Alice", None),
        "token-bob": UserInfo(1002, "bob", "Bob B.", None),
        "token-carol": UserInfo(1003, "carol", "Carol", None),
    })
