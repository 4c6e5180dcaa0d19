import pytest
from fastapi.testclient import TestClient

from conftest import make_image_bytes, open_image
from imgtransform.codec import PillowCodec
from imgtransform.deps import get_codec
from imgtransform.main import create_app
from imgtransform.schemas import HeaderPolicy


class RecordingCodec(PillowCodec):

    def __init__(self):
        super().__init__()
        self.calls = []

    def decode(self, data):
        self.calls.append("decode")
        return super().decode(data)

    def crop(self, img, x, y, width, height):
        self.calls.append(("crop", x, y, width, height))
        return super().crop(img, x, y, width, height)

    def resize(self, img, width, height):
        self.calls.append(("resize", width, height))
        return super().resize(img, width, height)

    def resize_exact(self, img, width, height):
        self.calls.append(("resize_exact", width, height))
        return super().resize_exact(img, width, height)

    def encode_jpeg(self, img, quality):
        self.calls.append(("encode_jpeg", quality))
        return super().encode_jpeg(img, quality)


def recording_client():
    app = create_app()
    codec = RecordingCodec()
    app.dependency_overrides[get_codec] = lambda: codec
    return TestClient(app), codec


def test_post_png_without_headers(client):
    response = client.post("/", content=make_image_bytes((64, 48)))
    assert response.status_code == 200
    assert response.headers["content-type"] == "image/jpeg"
    img = open_image(response.content)
    assert img.format == "JPEG"
    assert img.size == (64, 48)


def test_post_exact_resize(client):
    response = client.post(
        "/",
        content=make_image_bytes((200, 80)),
        headers={"X-Size": "100x100", "X-ignore-Aspect-Ratio": "true"},
    )
    assert response.status_code == 200
    assert open_image(response.content).size == (100, 100)


def test_post_crop():
    client, codec = recording_client()
    response = client.post(
        "/upload", content=make_image_bytes((120, 90)), headers={"X-Crop": "0p0p50x50"}
    )
    assert response.status_code == 200
    assert open_image(response.content).size == (50, 50)
    assert codec.calls == ["decode", ("crop", 0, 0, 50, 50), ("encode_jpeg", 80)]


def test_post_uses_requested_compression():
    client, codec = recording_client()
    response = client.post(
        "/",
        content=make_image_bytes(),
        headers={"X-Compress": "55", "X-Size": "32x32", "Content-Type": "image/png"},
    )
    assert response.status_code == 200
    assert codec.calls == ["decode", ("resize", 32, 32), ("encode_jpeg", 55)]


def test_post_invalid_image(client):
    response = client.post("/", content=b"this is not an image")
    assert response.status_code == 500
    assert response.text


@pytest.mark.parametrize(
    "headers",
    [
        {"X-Crop": "200p0p10x10"},
        {"X-Crop": "200p0p10x10", "X-Size": "50x50"},
        {"X-Crop": "200p0p10x10", "X-Size": "50x50", "X-ignore-Aspect-Ratio": "true"},
    ],
)
def test_post_crop_outside_image_is_server_error(client, headers):
    response = client.post("/", content=make_image_bytes((100, 80)), headers=headers)
    assert response.status_code == 500
    assert "outside" in response.text


@pytest.mark.parametrize("ignore", ["true", "false"])
def test_post_oversized_resize_is_server_error(client, ignore):
    response = client.post(
        "/",
        content=make_image_bytes((10, 10)),
        headers={"X-Size": "4000000000x4000000000", "X-ignore-Aspect-Ratio": ignore},
    )
    assert response.status_code == 500
    assert "Error resizing" in response.text


def test_get_does_not_touch_codec():
    client, codec = recording_client()
    response = client.get("/anything/here")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert response.text == "you need to post data"
    assert codec.calls == []


def test_other_methods_not_found(client):
    for method in ("PUT", "DELETE", "PATCH"):
        response = client.request(method, "/")
        assert response.status_code == 404
        assert response.content == b""


def test_preflight_not_found(client):
    response = client.options(
        "/",
        headers={"Origin": "http://x.example", "Access-Control-Request-Method": "POST"},
    )
    assert response.status_code == 404
    assert response.content == b""
    assert "access-control-allow-origin" not in response.headers


def test_lenient_policy_ignores_bad_headers(client):
    response = client.post(
        "/", content=make_image_bytes((40, 30)), headers={"X-Compress": "abc", "X-Size": "wide"}
    )
    assert response.status_code == 200
    assert open_image(response.content).size == (40, 30)


def test_strict_policy_rejects_bad_headers():
    with TestClient(create_app(HeaderPolicy.STRICT)) as client:
        response = client.post(
            "/", content=make_image_bytes(), headers={"X-Compress": "abc"}
        )
        assert response.status_code == 400
        detail = response.json()["detail"]
        assert detail == [{"header": "X-Compress", "value": "abc", "reason": "not an integer"}]

        response = client.post("/", content=make_image_bytes(), headers={"X-Compress": "70"})
        assert response.status_code == 200
