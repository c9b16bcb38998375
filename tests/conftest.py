# tests/conftest.py

import base64
import io

import cv2
import numpy as np
import pytest
import qrcode
import requests

from qr_scanner_mcp.tools import image_loader_tool


def make_qr_png(text: str, box_size: int = 10, border: int = 4) -> bytes:
    img = qrcode.make(text, box_size=box_size, border=border)
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def _encode(img: np.ndarray, ext: str) -> bytes:
    ok, out = cv2.imencode(ext, img)
    assert ok
    return out.tobytes()


def to_jpeg(png: bytes) -> bytes:
    img = cv2.imdecode(np.frombuffer(png, dtype=np.uint8), cv2.IMREAD_COLOR)
    return _encode(img, ".jpg")


def to_bgra_png(png: bytes) -> bytes:
    img = cv2.imdecode(np.frombuffer(png, dtype=np.uint8), cv2.IMREAD_COLOR)
    return _encode(cv2.cvtColor(img, cv2.COLOR_BGR2BGRA), ".png")


def blank_png(width: int = 200, height: int = 200) -> bytes:
    return _encode(np.full((height, width, 3), 255, dtype=np.uint8), ".png")


def b64(raw: bytes) -> str:
    return base64.b64encode(raw).decode("ascii")


class FakeResponse:
    """Just enough of requests.Response for the streamed fetch in image_loader_tool."""

    def __init__(self, content: bytes = b"", status_code: int = 200, url: str = "", headers=None):
        self.content = content
        self.status_code = status_code
        self.url = url
        self.headers = {"Content-Length": str(len(content))} if headers is None else headers

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Client Error: Not Found for url: {self.url}")

    def iter_content(self, chunk_size=1):
        for i in range(0, len(self.content), chunk_size):
            yield self.content[i:i + chunk_size]


@pytest.fixture
def qr_png():
    return make_qr_png("https://example.com/pay?id=42")


@pytest.fixture
def serve_url(monkeypatch):
    """
    Route requests.get to a fake response. Returns the list of fetched URLs.
    """
    calls = []

    def install(content: bytes = b"", status_code: int = 200, headers=None, exc: Exception = None):
        def fake_get(url, **kwargs):
            calls.append({"url": url, **kwargs})
            if exc is not None:
                raise exc
            return FakeResponse(content, status_code=status_code, url=url, headers=headers)

        monkeypatch.setattr(image_loader_tool.requests, "get", fake_get)
        return calls

    return install


@pytest.fixture
def no_network(monkeypatch):
    def fail(*args, **kwargs):
        raise AssertionError("network access attempted")

    monkeypatch.setattr(image_loader_tool.requests, "get", fail)
