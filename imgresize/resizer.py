"""
Request orchestration: parse -> gate -> fetch -> transform -> respond.

Each request ends in exactly one of: the original request passed through,
an error envelope, or a 200 envelope carrying the transformed image.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Protocol

from imgresize.exceptions import ImageResizeError, UnsupportedImageExtension
from imgresize.params import derive_object_key, parse_params
from imgresize.processor import ImageProcessor, png_compression_level
from imgresize.responses import error_response, image_response
from imgresize.schemas import EdgeRequest, EdgeResponse

if TYPE_CHECKING:
    from imgresize.config import Settings

logger = logging.getLogger(__name__)


class ImageStore(Protocol):
    def fetch(self, key: str) -> bytes: ...


class ImageResizer:
    """Stateless per-request pipeline around a shared store and processor."""

    def __init__(self, store: ImageStore, settings: Settings) -> None:
        self._store = store
        self._settings = settings
        self._processor = ImageProcessor(settings.max_output_bytes)

    def handle(self, request: dict[str, Any]) -> dict[str, Any]:
        """Return the request itself for passthrough, otherwise a response envelope."""
        result = self.resolve(request)
        if result is None:
            return request
        return result.to_event()

    def resolve(self, request: dict[str, Any]) -> EdgeResponse | None:
        """Like handle(), but returns None for passthrough and the model otherwise."""
        uri = request.get("uri")
        try:
            edge_request = EdgeRequest.from_event(request)
            params = parse_params(edge_request)

            if not params.has_transform:
                return None

            if params.extension is None:
                if self._settings.unsupported_extension_policy == "passthrough":
                    return None
                raise UnsupportedImageExtension()
            key = derive_object_key(edge_request.uri)

            logger.info(
                "Processing image: %s with params: %s",
                edge_request.uri,
                {
                    "width": params.width,
                    "height": params.height,
                    "quality": params.quality,
                    "fileExtension": params.extension.value,
                    "pngCompressionLevel": png_compression_level(params.quality),
                },
            )

            original = self._store.fetch(key)
            output = self._processor.transform(original, params)
        except ImageResizeError as exc:
            logger.warning("Rejected %s: %s (%d)", uri, exc.message, exc.status_code)
            return error_response(exc)
        except Exception:
            logger.exception("Error processing image: %s", uri)
            return error_response(ImageResizeError())

        return image_response(output, params.extension.value, self._settings.cache_max_age_seconds)
