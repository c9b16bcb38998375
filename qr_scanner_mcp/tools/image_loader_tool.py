# qr_scanner_mcp/tools/image_loader_tool.py
from __future__ import annotations

import base64
import logging
import re

import cv2
import numpy as np
import requests

from qr_scanner_mcp.api.models import PixelBuffer
from qr_scanner_mcp.config import FETCH_TIMEOUT_SECONDS, MAX_IMAGE_BYTES, SERVER_NAME, SERVER_VERSION

logger = logging.getLogger(__name__)

# e.g. "data:image/png;base64," or "data:image/svg+xml;base64,"
_DATA_URL_PREFIX = re.compile(r"^data:image/[a-z0-9.+-]+;base64,", re.IGNORECASE)

_FETCH_HEADERS = {"User-Agent": f"{SERVER_NAME}/{SERVER_VERSION}"}


class DecodeError(Exception):
    """Image bytes could not be obtained or turned into pixels."""


def _strip_data_url(encoded: str) -> str:
    return _DATA_URL_PREFIX.sub("", encoded.strip(), count=1)


def _b64_to_bytes(encoded: str) -> bytes:
    """
    Base64 -> raw bytes.
    Line breaks and the url-safe alphabet are accepted, missing padding is
    restored; anything else outside the alphabet is rejected.
    """
    compact = "".join(encoded.split())
    compact = compact.replace("-", "+").replace("_", "/")
    compact += "=" * (-len(compact) % 4)
    return base64.b64decode(compact, validate=True)


def _to_rgba(img: np.ndarray) -> np.ndarray:
    # 16-bit PNG/TIFF -> 8-bit
    if img.dtype == np.uint16:
        img = (img >> 8).astype(np.uint8)
    elif img.dtype != np.uint8:
        raise ValueError(f"Unsupported image bit depth: {img.dtype}")

    if img.ndim == 2:
        return cv2.cvtColor(img, cv2.COLOR_GRAY2RGBA)

    channels = img.shape[2]
    if channels == 1:
        return cv2.cvtColor(img[:, :, 0], cv2.COLOR_GRAY2RGBA)
    if channels == 3:
        return cv2.cvtColor(img, cv2.COLOR_BGR2RGBA)
    if channels == 4:
        return cv2.cvtColor(img, cv2.COLOR_BGRA2RGBA)

    raise ValueError(f"Unsupported channel count: {channels}")


def decode_image_bytes(raw: bytes) -> PixelBuffer:
    """
    Decode PNG/JPEG/BMP/TIFF/WebP... bytes with OpenCV and normalize the
    result to RGBA regardless of the source layout (gray, BGR, BGRA, 16-bit).
    """
    if not raw:
        raise ValueError("Image data is empty")

    img = cv2.imdecode(np.frombuffer(raw, dtype=np.uint8), cv2.IMREAD_UNCHANGED)
    if img is None:
        raise ValueError("Unsupported or corrupt image data")

    rgba = _to_rgba(img)
    height, width = rgba.shape[:2]
    logger.debug("Decoded image: %dx%d from %d bytes", width, height, len(raw))

    return PixelBuffer(pixels=np.ascontiguousarray(rgba).tobytes(), width=width, height=height)


def load_from_inline_data(encoded: str) -> PixelBuffer:
    """Base64 string (optionally a data URL) -> PixelBuffer."""
    try:
        raw = _b64_to_bytes(_strip_data_url(encoded))
        return decode_image_bytes(raw)
    except Exception as e:
        raise DecodeError(f"Failed to decode QR code: {e}") from e


def _fetch_bytes(url: str) -> bytes:
    with requests.get(url, headers=_FETCH_HEADERS, timeout=FETCH_TIMEOUT_SECONDS, stream=True) as resp:
        resp.raise_for_status()

        declared = resp.headers.get("Content-Length")
        if declared and declared.isdigit() and int(declared) > MAX_IMAGE_BYTES:
            raise ValueError(f"Image is too large ({declared} bytes, limit {MAX_IMAGE_BYTES})")

        chunks = []
        total = 0
        for chunk in resp.iter_content(chunk_size=64 * 1024):
            total += len(chunk)
            if total > MAX_IMAGE_BYTES:
                raise ValueError(f"Image is too large (over {MAX_IMAGE_BYTES} bytes)")
            chunks.append(chunk)

    return b"".join(chunks)


def load_from_url(url: str) -> PixelBuffer:
    """Fetch an image over HTTP(S) -> PixelBuffer."""
    try:
        raw = _fetch_bytes(url)
        logger.debug("Fetched %d bytes from %s", len(raw), url)
        return decode_image_bytes(raw)
    except Exception as e:
        raise DecodeError(f"Failed to fetch or decode QR code from URL: {e}") from e
