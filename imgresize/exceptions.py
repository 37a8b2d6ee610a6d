"""
Domain errors for the resize pipeline.

Every error carries a preset status code, status description and plain-text
message so callers never specify these at the raise site. ImageResizer turns
them into the edge response envelope; anything not listed here becomes a
generic 500.
"""
from http import HTTPStatus


class ImageResizeError(Exception):
    status_code: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR
    status_description: str = "Server Error"
    message: str = "Image processing failed"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


# ── 400 ──────────────────────────────────────────────────────────────────────

class InvalidImageRequest(ImageResizeError):
    status_code = HTTPStatus.BAD_REQUEST
    status_description = "Bad Request"
    message = "Invalid image request"


class UnsupportedImageExtension(InvalidImageRequest):
    message = "Unsupported or missing image extension"


class InvalidObjectKey(InvalidImageRequest):
    message = "Invalid image path"


class ImageFormatMismatch(InvalidImageRequest):
    message = "Mismatched image format."


# ── 404 ──────────────────────────────────────────────────────────────────────

class OriginImageNotFound(ImageResizeError):
    status_code = HTTPStatus.NOT_FOUND
    status_description = "Not Found"
    message = "Original image not found"


# ── 413 ──────────────────────────────────────────────────────────────────────

class PayloadTooLarge(ImageResizeError):
    status_code = HTTPStatus.REQUEST_ENTITY_TOO_LARGE
    status_description = "Payload Too Large"


class OriginImageTooLarge(PayloadTooLarge):
    def __init__(self, max_bytes: int) -> None:
        super().__init__(f"Original image exceeds {max_bytes} bytes limit.")


class OutputImageTooLarge(PayloadTooLarge):
    def __init__(self, max_bytes: int) -> None:
        super().__init__(f"Image exceeds size limit of {max_bytes} bytes.")


# ── 500 ──────────────────────────────────────────────────────────────────────

class StorageError(ImageResizeError):
    message = "Image processing failed"


class ImageProcessingFailed(ImageResizeError):
    message = "Image processing failed"
