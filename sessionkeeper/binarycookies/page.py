import struct
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from .cookie import Cookie

PAGE_HEADER = b"\x00\x00\x01\x00"
PAGE_FOOTER = b"\x00\x00\x00\x00"


@dataclass
class Page:
    """An ordered group of cookies sharing one offset table."""
    cookies: List[Cookie] = field(default_factory=list)

    def build(self, now: Optional[datetime] = None) -> bytes:
        records = [cookie.build(now) for cookie in self.cookies]

        # header + count + offset table + footer
        offset = 12 + 4 * len(records)
        offsets = []
        for record in records:
            offsets.append(offset)
            offset += len(record)

        parts = [PAGE_HEADER, struct.pack("<I", len(records))]
        parts.extend(struct.pack("<I", o) for o in offsets)
        parts.append(PAGE_FOOTER)
        parts.extend(records)
        return b"".join(parts)
