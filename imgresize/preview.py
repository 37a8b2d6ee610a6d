"""
Local preview server.

Serves the resize handler over plain HTTP so transforms can be checked in a
browser without deploying to CloudFront:

    GET /photos/cat.jpg?w=300&q=70

A passthrough result is answered by reading the original object from the
same bucket, standing in for CloudFront's origin fetch.
"""
from __future__ import annotations

import base64

from fastapi import FastAPI, Request
from fastapi.responses import Response
from pydantic import BaseModel

from imgresize.config import Settings, get_settings
from imgresize.constants import content_type_for
from imgresize.exceptions import ImageResizeError
from imgresize.params import derive_object_key
from imgresize.resizer import ImageResizer, ImageStore
from imgresize.responses import error_response
from imgresize.s3 import S3ImageStore
from imgresize.schemas import EdgeResponse


class HealthResponse(BaseModel):
    status: str
    service: str


def _to_http(envelope: EdgeResponse) -> Response:
    if envelope.bodyEncoding == "base64" and envelope.body is not None:
        content = base64.b64decode(envelope.body)
    else:
        content = (envelope.body or "").encode("utf-8")
    headers = {name: values[0].value for name, values in envelope.headers.items() if values}
    return Response(
        content=content,
        status_code=int(envelope.status),
        headers=headers,
    )


def create_app(
    store: ImageStore | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    if settings is None:
        settings = get_settings()
    if store is None:
        store = S3ImageStore.from_settings(settings)
    resizer = ImageResizer(store, settings)

    app = FastAPI(
        title="Image Resize Preview",
        version="1.0.0",
        docs_url=None,
        redoc_url=None,
    )

    @app.get("/health", response_model=HealthResponse, tags=["health"])
    def health() -> HealthResponse:
        return HealthResponse(status="ok", service="imgresize")

    @app.get("/{path:path}")
    def preview(path: str, request: Request) -> Response:
        # Keep the path percent-encoded, as CloudFront passes it in request.uri.
        raw_path = request.scope.get("raw_path")
        uri = raw_path.decode("latin-1") if raw_path else "/" + path
        envelope = resizer.resolve({"uri": uri, "querystring": request.url.query})
        if envelope is not None:
            return _to_http(envelope)

        # Passthrough: serve the untouched original.
        try:
            data = store.fetch(derive_object_key(uri))
        except ImageResizeError as exc:
            return _to_http(error_response(exc))
        extension = uri.rsplit(".", 1)[-1].lower() if "." in uri else ""
        return Response(content=data, media_type=content_type_for(extension))

    return app
