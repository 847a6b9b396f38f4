"""
Exports a session token as the game client's native cookie store.

Locating the client's profile directory (and isolating it per account) is the
launcher's job; this module only builds the container and writes it under a
directory it is given.
"""

import os
import logging
from datetime import datetime, timezone
from typing import List, Optional

from .binarycookies import BinaryCookies, Cookie, Page
from .binarycookies.cookie import DEFAULT_LIFETIME
from .utils import atomic_write
from . import config

logger = logging.getLogger(__name__)


def session_cookie(token: str, now: Optional[datetime] = None) -> Cookie:
    """The authentication cookie the client expects, valid for 30 days."""
    now = now or datetime.now(timezone.utc)
    return Cookie(
        domain=config.COOKIE_DOMAIN,
        name=config.COOKIE_NAME,
        path=config.COOKIE_PATH,
        value=token,
        secure=True,
        http_only=True,
        expiration=now + DEFAULT_LIFETIME,
        creation=now,
    )


def build_cookie_store(token: str, now: Optional[datetime] = None) -> bytes:
    """Serialize a one-page, one-cookie container holding the session token."""
    now = now or datetime.now(timezone.utc)
    return BinaryCookies([Page([session_cookie(token, now)])]).build(now)


def write_cookie_store(path: str, data: bytes) -> None:
    """Write a serialized container to path, creating parent directories."""
    os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
    atomic_write(path, data)
    logger.info(f"Wrote cookie store {path}")


def export_session(home_dir: str, token: str, now: Optional[datetime] = None) -> List[str]:
    """
    Write the token's cookie store to every location the client reads.

    Args:
        home_dir: The client's profile home directory
        token: Plaintext session token

    Returns:
        The paths written
    """
    data = build_cookie_store(token, now)
    written = []
    for relative in config.COOKIE_STORE_FILENAMES:
        path = os.path.join(home_dir, relative)
        write_cookie_store(path, data)
        written.append(path)
    return written
