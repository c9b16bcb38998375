import logging
from typing import Any, Dict, Optional

from qr_scanner_mcp.api.models import QRScanResult, ScanQRCodeFromURLInput, ScanQRCodeInput
from qr_scanner_mcp.tools.decode_qr_image_tool import decode
from qr_scanner_mcp.tools.image_loader_tool import load_from_inline_data, load_from_url

logger = logging.getLogger(__name__)

NO_QR_CODE_FOUND_MESSAGE = "No QR code found in the image"


def _shape(result: Optional[QRScanResult]) -> Dict[str, Any]:
    if result is None:
        return {"error": NO_QR_CODE_FOUND_MESSAGE}
    return result.model_dump()


class QRDataScanAgent:
    """scan_qr_code: base64 image (data URL header optional) -> QR payload + corners."""

    def handle(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        # pydantic.ValidationError propagates before any decoding starts
        args = ScanQRCodeInput.model_validate(arguments)

        pixels = load_from_inline_data(args.imageData)
        result = decode(pixels)
        logger.info("scan_qr_code: %s", "found" if result else "no QR code")
        return _shape(result)


class QRUrlScanAgent:
    """scan_qr_code_from_url: fetch image -> QR payload + corners."""

    def handle(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        args = ScanQRCodeFromURLInput.model_validate(arguments)
        url = str(args.imageUrl)

        pixels = load_from_url(url)
        result = decode(pixels)
        logger.info("scan_qr_code_from_url %s: %s", url, "found" if result else "no QR code")
        return _shape(result)
