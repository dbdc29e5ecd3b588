"""
Tests for loading base images from files and URLs
"""

import io

import httpx
import pytest
from PIL import Image

from config import Settings
from modules.ingestor import Ingestor
from utils.exceptions import ImageLoadError


def _png_bytes(size=(40, 30), mode="RGB"):
    buffer = io.BytesIO()
    Image.new(mode, size).save(buffer, format="PNG")
    return buffer.getvalue()


def _client(handler):
    return httpx.Client(transport=httpx.MockTransport(handler))


def test_load_from_path(tmp_path):
    path = tmp_path / "base.png"
    path.write_bytes(_png_bytes(mode="RGBA"))

    img = Ingestor().load(path)

    assert img.size == (40, 30)
    assert img.mode == "RGBA"


def test_load_accepts_upper_case_extension(tmp_path):
    path = tmp_path / "BASE.PNG"
    path.write_bytes(_png_bytes())

    assert Ingestor().load(str(path)).size == (40, 30)


def test_load_missing_file(tmp_path):
    with pytest.raises(ImageLoadError, match="not found"):
        Ingestor().load(tmp_path / "missing.png")


def test_load_directory_with_image_suffix(tmp_path):
    folder = tmp_path / "photos.png"
    folder.mkdir()

    with pytest.raises(ImageLoadError, match="Not a file"):
        Ingestor().load(folder)


def test_load_unsupported_extension(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("hello")

    with pytest.raises(ImageLoadError, match="Unsupported"):
        Ingestor().load(path)


def test_load_corrupt_file(tmp_path):
    path = tmp_path / "broken.jpg"
    path.write_bytes(b"definitely not a jpeg")

    with pytest.raises(ImageLoadError, match="decode"):
        Ingestor().load(path)


def test_load_animated_gif_uses_first_frame(tmp_path):
    path = tmp_path / "anim.gif"
    frames = [Image.new("RGB", (20, 20), color) for color in ("red", "blue")]
    frames[0].save(path, save_all=True, append_images=frames[1:])

    img = Ingestor().load(path)

    assert img.size == (20, 20)
    assert img.convert("RGB").getpixel((0, 0)) == (255, 0, 0)


def test_is_url():
    assert Ingestor.is_url("https://example.com/cat.jpg")
    assert Ingestor.is_url("http://example.com/cat.jpg")
    assert not Ingestor.is_url("/tmp/cat.jpg")
    assert not Ingestor.is_url("ftp://example.com/cat.jpg")


def test_load_from_url():
    def handler(request):
        assert request.url == "https://example.com/cat.png"
        return httpx.Response(200, content=_png_bytes())

    img = Ingestor(client=_client(handler)).load("https://example.com/cat.png")

    assert img.size == (40, 30)


def test_load_from_url_http_error():
    ingestor = Ingestor(client=_client(lambda request: httpx.Response(404)))

    with pytest.raises(ImageLoadError, match="404"):
        ingestor.load("https://example.com/missing.png")


def test_load_from_url_connection_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ImageLoadError, match="HTTP error"):
        Ingestor(client=_client(handler)).load("https://example.com/cat.png")


def test_load_from_url_timeout():
    def handler(request):
        raise httpx.ReadTimeout("too slow", request=request)

    with pytest.raises(ImageLoadError, match="timeout"):
        Ingestor(client=_client(handler)).load("https://example.com/cat.png")


def test_load_from_url_too_large():
    ingestor = Ingestor(
        Settings(MAX_DOWNLOAD_BYTES=10),
        client=_client(lambda request: httpx.Response(200, content=_png_bytes())),
    )

    with pytest.raises(ImageLoadError, match="too large"):
        ingestor.load("https://example.com/cat.png")


def test_load_from_url_not_an_image():
    ingestor = Ingestor(client=_client(lambda request: httpx.Response(200, text="<html></html>")))

    with pytest.raises(ImageLoadError):
        ingestor.load("https://example.com/page.html")
