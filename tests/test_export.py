"""
Tests for exporting a session token as a cookie store.
"""
import os
import struct
from datetime import datetime, timezone

from sessionkeeper import config
from sessionkeeper.binarycookies import BinaryCookies, Page
from sessionkeeper.export import build_cookie_store, export_session, session_cookie, write_cookie_store

NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)


class TestSessionCookie:

    def test_fields(self):
        cookie = session_cookie("tok", NOW)
        assert cookie.domain == ".roblox.com"
        assert cookie.name == ".ROBLOSECURITY"
        assert cookie.path == "/"
        assert cookie.value == "tok"
        assert cookie.secure and cookie.http_only
        assert cookie.creation == NOW
        assert (cookie.expiration - NOW).days == 30

    def test_store_matches_codec(self):
        expected = BinaryCookies([Page([session_cookie("tok", NOW)])]).build(NOW)
        assert build_cookie_store("tok", NOW) == expected

    def test_store_contains_token(self):
        data = build_cookie_store("tok-123", NOW)
        assert data.startswith(b"cook\x00\x00\x00\x01")
        assert b"tok-123\x00" in data
        # secure + http-only flags of the only cookie
        assert struct.unpack_from("<I", data, 12 + 16 + 8)[0] == 5


class TestWrite:

    def test_write_creates_directories(self, tmp_path):
        path = tmp_path / "a" / "b" / "Cookies.binarycookies"
        write_cookie_store(str(path), b"cook")
        assert path.read_bytes() == b"cook"
        assert os.listdir(path.parent) == ["Cookies.binarycookies"]

    def test_write_replaces_existing(self, tmp_path):
        path = tmp_path / "Cookies.binarycookies"
        path.write_bytes(b"old content")
        write_cookie_store(str(path), b"new")
        assert path.read_bytes() == b"new"

    def test_export_session_writes_every_location(self, tmp_path):
        written = export_session(str(tmp_path), "tok", NOW)
        assert written == [os.path.join(str(tmp_path), p) for p in config.COOKIE_STORE_FILENAMES]
        expected = build_cookie_store("tok", NOW)
        for path in written:
            with open(path, "rb") as f:
                assert f.read() == expected
