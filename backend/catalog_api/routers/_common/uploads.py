"""
Upload checks and attachment download.
"""

from io import BytesIO

from fastapi import UploadFile
from fastapi.responses import StreamingResponse

from shared.config.constants import DEFAULT_FILE_MIME_TYPE, UPLOAD_MIME_TYPES
from shared.config.logging import get_logger
from shared.config.settings import settings
from shared.utils.exceptions import (
    PayloadTooLargeError,
    UnsupportedMediaTypeError,
    ValidationError,
)
from shared.utils.files import content_disposition

logger = get_logger(__name__)


def read_upload(file: UploadFile) -> bytes:
    """
    Read an uploaded file after checking its declared type and size.

    Raises:
        UnsupportedMediaTypeError: Declared type is not an accepted image or video type.
        PayloadTooLargeError: File exceeds MAX_UPLOAD_SIZE.
        ValidationError: File is empty.
    """
    if file.content_type not in UPLOAD_MIME_TYPES:
        raise UnsupportedMediaTypeError(file.content_type)

    # One byte past the limit is enough to know it is too large
    data = file.file.read(settings.max_upload_size + 1)
    if len(data) > settings.max_upload_size:
        raise PayloadTooLargeError(file.size or len(data), settings.max_upload_size)
    if not data:
        raise ValidationError("The uploaded file is empty.")

    logger.debug("read_upload", filename=file.filename, content_type=file.content_type, size=len(data))
    return data


def file_response(data: bytes, filename: str, mimetype: str | None) -> StreamingResponse:
    """Stream an attachment inline with its stored MIME type."""
    return StreamingResponse(
        BytesIO(data),
        media_type=mimetype or DEFAULT_FILE_MIME_TYPE,
        headers={"Content-Disposition": content_disposition(filename)},
    )
