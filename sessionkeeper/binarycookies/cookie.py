import struct
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from .. import config
from .timestamps import to_cocoa_timestamp

FORMAT_VERSION = 1
HEADER_SIZE = 56  # fixed fields before the string data

FLAG_SECURE = 1 << 0
FLAG_HTTP_ONLY = 1 << 2

DEFAULT_LIFETIME = timedelta(days=config.COOKIE_LIFETIME_DAYS)

# size, version, flags, has port, domain/name/path/value offsets,
# comment offset, comment url offset, expiration, creation
_HEADER = struct.Struct("<10I2d")


def _cstring(value: str) -> bytes:
    return value.encode("utf-8") + b"\x00"


@dataclass
class Cookie:
    """A single cookie record."""
    domain: str
    name: str
    value: str
    path: Optional[str] = None
    secure: bool = False
    http_only: bool = False
    expiration: Optional[datetime] = None
    creation: Optional[datetime] = None

    @property
    def flags(self) -> int:
        flags = 0
        if self.secure:
            flags |= FLAG_SECURE
        if self.http_only:
            flags |= FLAG_HTTP_ONLY
        return flags

    def build(self, now: Optional[datetime] = None) -> bytes:
        """
        Serialize the cookie record.

        Args:
            now: Reference time for a missing expiration (now + 30 days) or
                creation (now). Defaults to the current time.
        """
        now = now or datetime.now(timezone.utc)

        domain = _cstring(self.domain)
        name = _cstring(self.name)
        path = _cstring(self.path if self.path is not None else config.COOKIE_PATH)
        value = _cstring(self.value)

        domain_offset = HEADER_SIZE
        name_offset = domain_offset + len(domain)
        path_offset = name_offset + len(name)
        value_offset = path_offset + len(path)
        size = value_offset + len(value)

        expiration = to_cocoa_timestamp(self.expiration or now + DEFAULT_LIFETIME)
        creation = to_cocoa_timestamp(self.creation or now)

        header = _HEADER.pack(
            size,
            FORMAT_VERSION,
            self.flags,
            0,  # has port
            domain_offset,
            name_offset,
            path_offset,
            value_offset,
            0,  # comment
            0,  # comment url
            expiration,
            creation,
        )
        return header + domain + name + path + value
