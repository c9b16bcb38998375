# tests/test_decode_qr_image.py

from conftest import b64, blank_png, make_qr_png, to_jpeg
from qr_scanner_mcp.tools.decode_qr_image_tool import decode
from qr_scanner_mcp.tools.image_loader_tool import load_from_inline_data


def _in_bounds(point, buf):
    return 0 <= point.x <= buf.width and 0 <= point.y <= buf.height


def test_decode_returns_payload_and_corners():
    text = "https://example.com/pay?id=42"
    buf = load_from_inline_data(b64(make_qr_png(text)))

    result = decode(buf)

    assert result is not None
    assert result.data == text

    loc = result.location
    for corner in (loc.topLeft, loc.topRight, loc.bottomLeft, loc.bottomRight):
        assert _in_bounds(corner, buf)

    # generated codes are upright
    assert loc.topLeft.x < loc.topRight.x
    assert loc.topLeft.y < loc.bottomLeft.y
    assert loc.bottomLeft.x < loc.bottomRight.x


def test_decode_passes_payload_through_verbatim():
    text = "  WIFI:T:WPA;S:cafe;P:p@ss;;  "
    result = decode(load_from_inline_data(b64(make_qr_png(text))))

    assert result is not None
    assert result.data == text


def test_decode_jpeg_source():
    text = "QR:JP:JPY:1500"
    result = decode(load_from_inline_data(b64(to_jpeg(make_qr_png(text)))))

    assert result is not None
    assert result.data == text


def test_decode_no_qr_is_none():
    assert decode(load_from_inline_data(b64(blank_png()))) is None


def test_decode_empty_payload_reads_as_not_found():
    # OpenCV returns "" both for an empty payload and for a located but
    # undecodable code, so an empty-string QR cannot be reported as a hit
    assert decode(load_from_inline_data(b64(make_qr_png("")))) is None
