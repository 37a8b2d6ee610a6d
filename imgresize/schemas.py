"""
Edge request/response envelope and parsed transform parameters — Pydantic V2.

The response shape is the CloudFront Lambda@Edge generated-response contract:
string status codes and header values wrapped in lists of {"value": ...}.
"""
from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from imgresize.constants import ImageFormat


class EdgeRequest(BaseModel):
    """The part of a CloudFront request this handler reads."""
    model_config = ConfigDict(extra="ignore", frozen=True)

    uri: str = "/"
    querystring: str = ""

    @classmethod
    def from_event(cls, request: dict[str, Any]) -> EdgeRequest:
        return cls(
            uri=request.get("uri") or "/",
            querystring=request.get("querystring") or "",
        )


class TransformParams(BaseModel):
    """Transform parameters derived from an edge request. Absent means unset."""
    model_config = ConfigDict(frozen=True)

    width: int | None = Field(default=None, ge=1, le=8192)
    height: int | None = Field(default=None, ge=1, le=8192)
    quality: int | None = Field(default=None, ge=1, le=100)
    extension: ImageFormat | None = None

    @property
    def has_transform(self) -> bool:
        return self.width is not None or self.height is not None or self.quality is not None

    @property
    def has_resize(self) -> bool:
        return self.width is not None or self.height is not None


class HeaderValue(BaseModel):
    model_config = ConfigDict(frozen=True)

    value: str


class EdgeResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: str
    statusDescription: str
    headers: dict[str, list[HeaderValue]] = Field(default_factory=dict)
    body: str | None = None
    bodyEncoding: Literal["base64", "text"] | None = None

    @classmethod
    def build(
        cls,
        status: int,
        description: str,
        headers: dict[str, str],
        body: str | None = None,
        body_encoding: Literal["base64", "text"] | None = None,
    ) -> EdgeResponse:
        return cls(
            status=str(int(status)),
            statusDescription=description,
            headers={name: [HeaderValue(value=value)] for name, value in headers.items()},
            body=body,
            bodyEncoding=body_encoding,
        )

    def to_event(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)
