"""
Image processor — decode, resize and re-encode one image with Pillow.

Output format always equals the request extension, and the source must
already be in that format: a .png request backed by a JPEG object is rejected
rather than converted.

Resize policy matches a "fit inside, never enlarge" box: the image keeps its
aspect ratio, ends up no larger than the requested width/height, and is never
scaled above its original size.
"""
from __future__ import annotations

import io
import logging
import math
from typing import Any

from PIL import Image, ImageSequence

from imgresize.constants import DEFAULT_PNG_COMPRESSION_LEVEL, ImageFormat
from imgresize.exceptions import (
    ImageFormatMismatch,
    ImageProcessingFailed,
    OutputImageTooLarge,
    UnsupportedImageExtension,
)
from imgresize.schemas import TransformParams

logger = logging.getLogger(__name__)

# Pillow format name -> encoder family
_DETECTED_FORMATS = {
    "JPEG": "jpeg",
    "MPO": "jpeg",  # multi-picture JPEGs from phone cameras
    "PNG": "png",
    "WEBP": "webp",
    "GIF": "gif",
}

_SAVE_FORMATS = {
    "jpeg": "JPEG",
    "png": "PNG",
    "webp": "WEBP",
    "gif": "GIF",
}

# Modes the JPEG encoder can write as-is
_JPEG_MODES = ("RGB", "L", "CMYK")

_RESAMPLE = Image.Resampling.LANCZOS


def png_compression_level(quality: int | None) -> int:
    """Map quality 1-100 onto zlib level 0-9; higher quality compresses less."""
    if quality is None:
        return DEFAULT_PNG_COMPRESSION_LEVEL
    # Round half up; (100 - q) / 11 never lands on .5 for integer q anyway.
    level = math.floor((100 - quality) / 11 + 0.5)
    return max(0, min(9, level))


def fit_inside(
    size: tuple[int, int],
    width: int | None,
    height: int | None,
) -> tuple[int, int]:
    """Largest size within (width, height) keeping aspect ratio, capped at size."""
    orig_width, orig_height = size
    ratios = []
    if width is not None:
        ratios.append(width / orig_width)
    if height is not None:
        ratios.append(height / orig_height)
    scale = min(ratios, default=1.0)
    if scale >= 1.0:
        return size
    return (
        max(1, round(orig_width * scale)),
        max(1, round(orig_height * scale)),
    )


class ImageProcessor:
    """Transform original image bytes according to TransformParams."""

    def __init__(self, max_output_bytes: int) -> None:
        self._max_output_bytes = max_output_bytes

    def transform(self, data: bytes, params: TransformParams) -> bytes:
        extension = params.extension
        if extension is None:
            raise UnsupportedImageExtension()

        image = self._open(data)
        try:
            detected = _DETECTED_FORMATS.get(image.format or "")
            if detected != extension.family:
                logger.info(
                    "Format mismatch: requested %s, decoded %s", extension.value, image.format,
                )
                raise ImageFormatMismatch()

            try:
                if extension is ImageFormat.GIF and getattr(image, "is_animated", False):
                    output = self._render_animated_gif(image, params)
                else:
                    output = self._render(image, extension, params)
            except (OSError, ValueError) as exc:
                raise ImageProcessingFailed() from exc
        finally:
            image.close()

        if len(output) > self._max_output_bytes:
            logger.warning(
                "Transformed image exceeds %d bytes (%d bytes)",
                self._max_output_bytes, len(output),
            )
            raise OutputImageTooLarge(self._max_output_bytes)
        return output

    # ── Decode ───────────────────────────────────────────────────────────────

    @staticmethod
    def _open(data: bytes) -> Image.Image:
        try:
            return Image.open(io.BytesIO(data))
        except (OSError, Image.DecompressionBombError) as exc:
            raise ImageProcessingFailed() from exc

    # ── Static images ────────────────────────────────────────────────────────

    def _render(self, image: Image.Image, extension: ImageFormat, params: TransformParams) -> bytes:
        frame: Image.Image = image
        if params.has_resize:
            target = fit_inside(image.size, params.width, params.height)
            if target != image.size:
                if frame.mode in ("P", "1"):
                    frame = frame.convert("RGBA")
                frame = frame.resize(target, _RESAMPLE)

        family = extension.family
        if family == "jpeg" and frame.mode not in _JPEG_MODES:
            frame = frame.convert("RGB")

        buf = io.BytesIO()
        frame.save(buf, format=_SAVE_FORMATS[family], **self._save_options(family, params))
        return buf.getvalue()

    @staticmethod
    def _save_options(family: str, params: TransformParams) -> dict[str, Any]:
        if family in ("jpeg", "webp"):
            return {"quality": params.quality} if params.quality is not None else {}
        if family == "png":
            return {"compress_level": png_compression_level(params.quality)}
        # gif ignores quality
        return {}

    # ── Animated GIF ─────────────────────────────────────────────────────────

    def _render_animated_gif(self, image: Image.Image, params: TransformParams) -> bytes:
        target = fit_inside(image.size, params.width, params.height)

        frames: list[Image.Image] = []
        durations: list[int] = []
        for frame in ImageSequence.Iterator(image):
            durations.append(frame.info.get("duration", image.info.get("duration", 100)))
            current = frame.convert("RGBA")
            if target != image.size:
                current = current.resize(target, _RESAMPLE)
            frames.append(current)

        save_kwargs: dict[str, Any] = {
            "format": "GIF",
            "save_all": True,
            "append_images": frames[1:],
            "duration": durations,
            # Every frame is a full RGBA canvas, so clear it before the next one.
            "disposal": 2,
        }
        if "loop" in image.info:
            save_kwargs["loop"] = image.info["loop"]

        buf = io.BytesIO()
        frames[0].save(buf, **save_kwargs)
        return buf.getvalue()
