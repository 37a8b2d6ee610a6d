"""
Request parsing — transform parameters, extension and S3 object key.

Everything here is a pure function of the request's uri and querystring.
"""
from __future__ import annotations

import re
from urllib.parse import parse_qsl, unquote

from imgresize.constants import DIMENSION_BOUNDS, IMAGE_FORMATS, QUALITY_BOUNDS, ImageFormat
from imgresize.exceptions import InvalidObjectKey
from imgresize.schemas import EdgeRequest, TransformParams

_LEADING_INT_RE = re.compile(r"^\s*([+-]?)([0-9]+)")
_EXTENSION_RE = re.compile(r"\.([A-Za-z0-9]+)$")
_REPEATED_SLASH_RE = re.compile(r"/{2,}")


def to_int(
    value: str | None,
    min_value: int = DIMENSION_BOUNDS[0],
    max_value: int = DIMENSION_BOUNDS[1],
) -> int | None:
    """Parse a base-10 integer prefix and clamp it into [min_value, max_value].

    Mirrors the edge runtime's lenient integer parsing: "120px" is 120, while
    "", "abc" and None are absent (None), never zero.
    """
    if not value:
        return None
    match = _LEADING_INT_RE.match(value)
    if match is None:
        return None
    sign, digits = match.groups()
    digits = digits.lstrip("0") or "0"
    # Longer digit runs are out of range anyway; int() refuses very long strings.
    if len(digits) > len(str(max_value)):
        return min_value if sign == "-" else max_value
    number = -int(digits) if sign == "-" else int(digits)
    return min(max(number, min_value), max_value)


def parse_query(querystring: str) -> dict[str, str]:
    """Decode a querystring into a flat dict; the last duplicate key wins."""
    return dict(parse_qsl(querystring, keep_blank_values=True))


def extract_extension(uri: str) -> ImageFormat | None:
    match = _EXTENSION_RE.search(uri)
    if match is None:
        return None
    raw = match.group(1).lower()
    if raw not in IMAGE_FORMATS:
        return None
    return ImageFormat(raw)


def parse_params(request: EdgeRequest) -> TransformParams:
    query = parse_query(request.querystring)
    return TransformParams(
        width=to_int(query.get("w")),
        height=to_int(query.get("h")),
        quality=to_int(query.get("q"), *QUALITY_BOUNDS),
        extension=extract_extension(request.uri),
    )


def derive_object_key(uri: str) -> str:
    """Turn a request path into an S3 key.

    Percent-decodes, collapses repeated slashes and drops the leading slash.
    Raises InvalidObjectKey for empty keys and ".." traversal segments.
    """
    decoded = _REPEATED_SLASH_RE.sub("/", unquote(uri))
    key = decoded.lstrip("/")
    if not key or "\x00" in key:
        raise InvalidObjectKey()
    if any(segment == ".." for segment in key.split("/")):
        raise InvalidObjectKey()
    return key
