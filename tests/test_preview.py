from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from imgresize.preview import create_app
from tests.helpers import FakeImageStore, decode_image


@pytest.fixture
def store(make_image) -> FakeImageStore:
    return FakeImageStore(
        {
            "photos/cat.jpg": make_image("JPEG", (800, 600)),
            "docs/readme.txt": b"hello",
        }
    )


@pytest.fixture
def client(store, settings) -> Generator[TestClient, None, None]:
    with TestClient(create_app(store=store, settings=settings)) as c:
        yield c


def test_health(client) -> None:
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "service": "imgresize"}


def test_preview_transforms(client) -> None:
    resp = client.get("/photos/cat.jpg", params={"w": 300, "q": 70})
    assert resp.status_code == 200
    assert resp.headers["content-type"] == "image/jpeg"
    assert resp.headers["cache-control"] == "public, max-age=2592000, immutable"
    assert decode_image(resp.content).size == (300, 225)


def test_preview_passthrough_serves_original(client, store) -> None:
    resp = client.get("/photos/cat.jpg")
    assert resp.status_code == 200
    assert resp.headers["content-type"] == "image/jpeg"
    assert resp.content == store.objects["photos/cat.jpg"]


def test_preview_passthrough_unknown_type(client) -> None:
    resp = client.get("/docs/readme.txt")
    assert resp.status_code == 200
    assert resp.headers["content-type"] == "application/octet-stream"
    assert resp.content == b"hello"


def test_preview_not_found(client) -> None:
    resp = client.get("/photos/dog.png", params={"w": 100})
    assert resp.status_code == 404
    assert resp.headers["content-type"] == "text/plain; charset=utf-8"
    assert resp.text == "Original image not found"


def test_preview_passthrough_not_found(client) -> None:
    resp = client.get("/photos/dog.png")
    assert resp.status_code == 404


def test_preview_bad_request(client) -> None:
    resp = client.get("/file.bmp", params={"w": 100})
    assert resp.status_code == 400
    assert resp.text == "Unsupported or missing image extension"


def test_preview_keeps_percent_encoding_in_key(client, store, make_image) -> None:
    store.objects["my%20photo.jpg"] = make_image("JPEG", (40, 30))
    resp = client.get("/my%2520photo.jpg", params={"w": 20})
    assert resp.status_code == 200
    assert store.fetched == ["my%20photo.jpg"]
    assert decode_image(resp.content).size == (20, 15)
