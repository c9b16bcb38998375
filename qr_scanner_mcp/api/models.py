import json
from dataclasses import dataclass
from typing import Any, Dict

from pydantic import AnyUrl, BaseModel, ConfigDict, Field


@dataclass
class PixelBuffer:
    """
    Decoded raster image, RGBA, row-major.
    Built fresh for every request and dropped once the decoder is done with it.
    """
    pixels: bytes
    width: int
    height: int

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Invalid image size: {self.width}x{self.height}")
        expected = self.width * self.height * 4
        if len(self.pixels) != expected:
            raise ValueError(
                f"Pixel buffer has {len(self.pixels)} bytes, expected {expected} "
                f"for a {self.width}x{self.height} RGBA image"
            )


class Point(BaseModel):
    x: int
    y: int


class QRLocation(BaseModel):
    topLeft: Point
    topRight: Point
    bottomLeft: Point
    bottomRight: Point


class QRScanResult(BaseModel):
    data: str
    location: QRLocation


# -----------------------------
# Tool inputs
# -----------------------------
class ScanQRCodeInput(BaseModel):
    imageData: str = Field(
        min_length=1,
        description="Base64-encoded image data (with or without data URL prefix)",
    )


class ScanQRCodeFromURLInput(BaseModel):
    imageUrl: AnyUrl = Field(description="URL of the image to scan")


# -----------------------------
# Catalog + envelope
# -----------------------------
class ToolDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    inputSchema: Dict[str, Any]


class ToolResponse(BaseModel):
    """
    What a tool call hands back to the transport.

    `is_error` is the transport-level flag. It is independent of any `error`
    key inside `payload`: a "no QR code" answer carries an `error` key but
    is not a failed call.
    """
    payload: Dict[str, Any]
    is_error: bool = False

    @property
    def text(self) -> str:
        return json.dumps(self.payload, indent=2, ensure_ascii=False)
