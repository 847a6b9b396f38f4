"""
Binary cookie container writer.

Builds the `.binarycookies` file format the game client reads as its cookie
store. Only construction is supported; these files are never parsed here.
"""

from .cookie import Cookie
from .page import Page
from .container import BinaryCookies
from .timestamps import COCOA_EPOCH_OFFSET, from_cocoa_timestamp, to_cocoa_timestamp

__all__ = [
    "Cookie",
    "Page",
    "BinaryCookies",
    "COCOA_EPOCH_OFFSET",
    "from_cocoa_timestamp",
    "to_cocoa_timestamp",
]
