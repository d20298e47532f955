"""
Tests for attachment helpers.
"""

from shared.utils.files import content_disposition, sniff_mimetype

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


class TestContentDisposition:

    def test_ascii_name(self):
        assert content_disposition("cover.png") == 'inline; filename="cover.png"'

    def test_quotes_and_line_breaks_are_dropped(self):
        assert content_disposition('a"b\r\n.png') == 'inline; filename="ab.png"'

    def test_non_ascii_name_gets_fallback_and_utf8_form(self):
        value = content_disposition("封面.png")

        assert value == "inline; filename=\"__.png\"; filename*=UTF-8''%E5%B0%81%E9%9D%A2.png"
        value.encode("latin-1")

    def test_latin1_name_is_still_encoded(self):
        value = content_disposition("Übersicht.png")

        assert value.startswith('inline; filename="_bersicht.png"; ')
        assert value.endswith("filename*=UTF-8''%C3%9Cbersicht.png")


class TestSniffMimetype:

    def test_png(self):
        assert sniff_mimetype(PNG_BYTES) == "image/png"

    def test_unknown_content(self):
        assert sniff_mimetype(b"plain text") is None
