"""
Helpers for binary attachments.
"""

from urllib.parse import quote

import filetype

from shared.config.logging import get_logger

logger = get_logger(__name__)


def sniff_mimetype(data: bytes) -> str | None:
    """
    Derive the MIME type from the magic bytes of data.

    The content type declared by the client is never consulted.
    Returns None for unknown or empty content.
    """
    if not data:
        return None
    mimetype = filetype.guess_mime(data)
    logger.debug("sniff_mimetype", mimetype=mimetype, byte_length=len(data))
    return mimetype


def content_disposition(filename: str) -> str:
    """
    Inline Content-Disposition header value for filename.

    Names that are not plain ASCII get an ASCII fallback plus the RFC 5987
    filename* parameter, since header values are sent as latin-1.
    """
    safe_name = filename.replace('"', "").replace("\r", "").replace("\n", "")
    quoted = quote(safe_name)
    if quoted == safe_name:
        return f'inline; filename="{safe_name}"'
    fallback = "".join(c if c.isascii() and c.isprintable() else "_" for c in safe_name)
    return f"inline; filename=\"{fallback}\"; filename*=UTF-8''{quoted}"
