"""
Image formats, content types and parameter bounds.
"""
import enum


class ImageFormat(str, enum.Enum):
    """Extensions accepted for transformation."""
    PNG = "png"
    JPG = "jpg"
    JPEG = "jpeg"
    WEBP = "webp"
    GIF = "gif"

    @property
    def family(self) -> str:
        """Encoder family; jpg and jpeg are the same codec."""
        return "jpeg" if self is ImageFormat.JPG else self.value


IMAGE_FORMATS: frozenset[str] = frozenset(f.value for f in ImageFormat)

CONTENT_TYPES: dict[str, str] = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "webp": "image/webp",
    "gif": "image/gif",
}
DEFAULT_CONTENT_TYPE = "application/octet-stream"
TEXT_CONTENT_TYPE = "text/plain; charset=utf-8"

# Query parameter bounds: (min, max)
DIMENSION_BOUNDS = (1, 8192)
QUALITY_BOUNDS = (1, 100)

DEFAULT_PNG_COMPRESSION_LEVEL = 6

VARY_HEADER = "Accept,Accept-Encoding"


def content_type_for(extension: str) -> str:
    return CONTENT_TYPES.get(extension, DEFAULT_CONTENT_TYPE)
