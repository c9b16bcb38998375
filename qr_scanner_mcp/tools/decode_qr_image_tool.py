# qr_scanner_mcp/tools/decode_qr_image_tool.py
from __future__ import annotations

import logging
from typing import Any, Optional

import cv2
import numpy as np

from qr_scanner_mcp.api.models import PixelBuffer, Point, QRLocation, QRScanResult

logger = logging.getLogger(__name__)


def _as_point(xy: Any) -> Point:
    return Point(x=int(round(float(xy[0]))), y=int(round(float(xy[1]))))


def _corners(points: Any) -> Optional[np.ndarray]:
    """
    cv2 QRCodeDetector returns the corners as (1, 4, 2) or (4, 1, 2)
    float arrays depending on version. Flatten to (4, 2).
    """
    if points is None:
        return None
    pts = np.asarray(points, dtype=np.float32).reshape(-1, 2)
    if pts.shape[0] != 4:
        return None
    return pts


def decode(buffer: PixelBuffer) -> Optional[QRScanResult]:
    """
    Look for a single QR code in an RGBA pixel buffer using OpenCV.
    Returns None when nothing was found; that is a normal outcome, not an error.
    The decoded text is returned exactly as the detector produced it.
    """
    rgba = np.frombuffer(buffer.pixels, dtype=np.uint8).reshape(buffer.height, buffer.width, 4)
    gray = cv2.cvtColor(rgba, cv2.COLOR_RGBA2GRAY)

    detector = cv2.QRCodeDetector()
    data, points, _ = detector.detectAndDecode(gray)

    pts = _corners(points)
    if pts is None or not data:
        logger.debug("No QR code in %dx%d image", buffer.width, buffer.height)
        return None

    # OpenCV corner order: top-left, top-right, bottom-right, bottom-left
    top_left, top_right, bottom_right, bottom_left = pts
    return QRScanResult(
        data=data,
        location=QRLocation(
            topLeft=_as_point(top_left),
            topRight=_as_point(top_right),
            bottomLeft=_as_point(bottom_left),
            bottomRight=_as_point(bottom_right),
        ),
    )
