import logging
import struct
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, List, Optional

from .page import Page

logger = logging.getLogger(__name__)

FILE_HEADER = b"cook"
FILE_FOOTER = b"\x07\x17\x20\x05\x00\x00\x00\x4b"


@dataclass
class BinaryCookies:
    """A whole cookie store file: pages, their size table and a checksum."""
    pages: List[Page] = field(default_factory=list)

    @staticmethod
    def checksum(page_blocks: Iterable[bytes]) -> int:
        """
        Sum of every fourth byte of each page, wrapping at 32 bits.

        The byte index restarts at 0 for every page rather than running across
        the concatenated pages. The two readings only agree when every page
        size is a multiple of 4.
        """
        total = 0
        for block in page_blocks:
            total += sum(block[::4])
        return total & 0xFFFFFFFF

    def build(self, now: Optional[datetime] = None) -> bytes:
        """
        Serialize the container.

        Layout (big-endian): magic, page count, one size per page, the pages,
        checksum, footer.
        """
        blocks = [page.build(now) for page in self.pages]

        parts = [FILE_HEADER, struct.pack(">I", len(blocks))]
        parts.extend(struct.pack(">I", len(block)) for block in blocks)
        parts.extend(blocks)
        parts.append(struct.pack(">I", self.checksum(blocks)))
        parts.append(FILE_FOOTER)

        data = b"".join(parts)
        logger.debug(f"Built cookie container: {len(blocks)} page(s), {len(data)} bytes")
        return data
