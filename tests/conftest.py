from io import BytesIO

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from imgtransform.main import create_app


def make_image_bytes(size=(64, 48), fmt="PNG", mode="RGB", color=(200, 30, 30)) -> bytes:
    if mode == "P":
        img = Image.new("RGB", size, color).convert("P")
    else:
        img = Image.new(mode, size, color)
    buffer = BytesIO()
    img.save(buffer, format=fmt)
    return buffer.getvalue()


def open_image(data: bytes) -> Image.Image:
    return Image.open(BytesIO(data))


@pytest.fixture
def app():
    return create_app()


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client
