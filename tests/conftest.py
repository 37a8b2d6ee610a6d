import os
from collections.abc import Callable

import pytest
from PIL import Image

from imgresize.config import Settings
from tests.helpers import FakeImageStore, encode_image


@pytest.fixture
def make_image() -> Callable[..., bytes]:
    def _make(
        fmt: str = "JPEG",
        size: tuple[int, int] = (800, 600),
        mode: str = "RGB",
        color: int | tuple[int, ...] = 128,
    ) -> bytes:
        return encode_image(Image.new(mode, size, color), fmt)

    return _make


@pytest.fixture
def noise_image() -> Callable[..., bytes]:
    """Incompressible RGB content, for size-sensitive assertions."""
    def _make(fmt: str = "PNG", size: tuple[int, int] = (700, 700), **save_kwargs) -> bytes:
        width, height = size
        image = Image.frombytes("RGB", size, os.urandom(width * height * 3))
        return encode_image(image, fmt, **save_kwargs)

    return _make


@pytest.fixture
def animated_gif() -> bytes:
    colors = [(255, 0, 0), (0, 255, 0), (0, 0, 255)]
    frames = [Image.new("RGB", (80, 40), color) for color in colors]
    return encode_image(
        frames[0], "GIF", save_all=True, append_images=frames[1:], duration=120, loop=0,
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        aws_region="us-east-1",
        s3_bucket_images="test-bucket",
        _env_file=None,
    )


@pytest.fixture
def fake_store() -> FakeImageStore:
    return FakeImageStore()
