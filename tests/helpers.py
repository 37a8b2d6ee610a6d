import io

from PIL import Image

from imgresize.exceptions import OriginImageNotFound
from imgresize.schemas import EdgeResponse


class FakeImageStore:
    """In-memory stand-in for S3ImageStore."""

    def __init__(self, objects: dict[str, bytes] | None = None) -> None:
        self.objects = dict(objects or {})
        self.fetched: list[str] = []

    def fetch(self, key: str) -> bytes:
        self.fetched.append(key)
        if key not in self.objects:
            raise OriginImageNotFound()
        return self.objects[key]


def encode_image(image: Image.Image, fmt: str, **save_kwargs) -> bytes:
    buf = io.BytesIO()
    image.save(buf, format=fmt, **save_kwargs)
    return buf.getvalue()


def decode_image(data: bytes) -> Image.Image:
    return Image.open(io.BytesIO(data))


def cf_event(uri: str, querystring: str = "") -> dict:
    return {
        "Records": [
            {
                "cf": {
                    "config": {"distributionId": "EDFDVBD6EXAMPLE", "eventType": "origin-request"},
                    "request": {
                        "clientIp": "203.0.113.178",
                        "method": "GET",
                        "uri": uri,
                        "querystring": querystring,
                        "headers": {"host": [{"key": "Host", "value": "d111111abcdef8.cloudfront.net"}]},
                    },
                }
            }
        ]
    }


def header_value(response: EdgeResponse, name: str) -> str | None:
    values = response.headers.get(name.lower())
    return values[0].value if values else None
