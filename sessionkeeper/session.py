"""
In-memory vault session: the derived key and the unlocked flag.

A session lives only as long as the process and always starts locked.
"""

import threading
from typing import Optional

from .errors import VaultLockedError


class VaultSession:
    """Holds the vault key while unlocked, guarded by a re-entrant lock."""

    def __init__(self):
        self.lock = threading.RLock()
        self._key: Optional[bytearray] = None
        self._unlocked = False

    @property
    def unlocked(self) -> bool:
        with self.lock:
            return self._unlocked and self._key is not None

    def open(self, key: bytes) -> None:
        """Store a verified key and mark the session unlocked."""
        with self.lock:
            self.close()
            self._key = bytearray(key)
            self._unlocked = True

    def close(self) -> None:
        """Zero and drop the key. Safe to call when already locked."""
        with self.lock:
            if self._key is not None:
                for i in range(len(self._key)):
                    self._key[i] = 0
            self._key = None
            self._unlocked = False

    def key(self) -> bytes:
        """
        Return a copy of the current key.

        Raises:
            VaultLockedError: If the session is locked
        """
        with self.lock:
            if not self._unlocked or self._key is None:
                raise VaultLockedError()
            return bytes(self._key)
