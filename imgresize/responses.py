"""
Edge response builders — one envelope per outcome.
"""
from __future__ import annotations

import base64
from http import HTTPStatus

from imgresize.constants import TEXT_CONTENT_TYPE, VARY_HEADER, content_type_for
from imgresize.exceptions import ImageResizeError
from imgresize.schemas import EdgeResponse


def cache_control(max_age: int) -> str:
    return f"public, max-age={max_age}, immutable"


def image_response(data: bytes, extension: str, max_age: int) -> EdgeResponse:
    return EdgeResponse.build(
        HTTPStatus.OK,
        "OK",
        headers={
            "content-type": content_type_for(extension),
            "cache-control": cache_control(max_age),
            "vary": VARY_HEADER,
        },
        body=base64.b64encode(data).decode("ascii"),
        body_encoding="base64",
    )


def error_response(error: ImageResizeError) -> EdgeResponse:
    return EdgeResponse.build(
        error.status_code,
        error.status_description,
        headers={"content-type": TEXT_CONTENT_TYPE},
        body=error.message,
        body_encoding="text",
    )
