import json
import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from qr_scanner_mcp.agents.qr_scan_agent import QRDataScanAgent, QRUrlScanAgent
from qr_scanner_mcp.api.models import ToolDescriptor, ToolResponse
from qr_scanner_mcp.tools.image_loader_tool import DecodeError

logger = logging.getLogger(__name__)


class UnknownToolError(Exception):
    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


# -----------------------------
# Tool catalog (built once)
# -----------------------------
SCAN_QR_CODE = ToolDescriptor(
    name="scan_qr_code",
    description=(
        "Scan QR codes from base64-encoded images. "
        "Returns the decoded content and location coordinates of the QR code."
    ),
    inputSchema={
        "type": "object",
        "properties": {
            "imageData": {
                "type": "string",
                "description": "Base64-encoded image data (with or without data URL prefix)",
            },
        },
        "required": ["imageData"],
    },
)

SCAN_QR_CODE_FROM_URL = ToolDescriptor(
    name="scan_qr_code_from_url",
    description=(
        "Scan QR codes from image URLs. Fetches the image from the provided URL "
        "and returns the decoded content and location coordinates."
    ),
    inputSchema={
        "type": "object",
        "properties": {
            "imageUrl": {
                "type": "string",
                "description": "URL of the image to scan",
            },
        },
        "required": ["imageUrl"],
    },
)

TOOLS: List[ToolDescriptor] = [SCAN_QR_CODE, SCAN_QR_CODE_FROM_URL]


def _validation_details(e: ValidationError) -> List[Dict[str, Any]]:
    # round-trip through pydantic's own JSON so ctx values are always serializable
    return json.loads(e.json(include_url=False))


class ToolDispatcher:
    """
    Routes a tool call to its agent and turns every outcome into a ToolResponse.
    Holds no per-call state; calls are independent of each other.
    """

    def __init__(self):
        self.handlers = {
            SCAN_QR_CODE.name: QRDataScanAgent(),
            SCAN_QR_CODE_FROM_URL.name: QRUrlScanAgent(),
        }

    def list_tools(self) -> List[ToolDescriptor]:
        return list(TOOLS)

    def call_tool(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> ToolResponse:
        logger.info("Tool call: %s", name)
        try:
            handler = self.handlers.get(name)
            if handler is None:
                raise UnknownToolError(name)
            payload = handler.handle(arguments or {})
            return ToolResponse(payload=payload)
        except ValidationError as e:
            logger.info("Invalid input for %s: %d error(s)", name, e.error_count())
            return ToolResponse(
                payload={"error": "Invalid input", "details": _validation_details(e)},
                is_error=True,
            )
        except (UnknownToolError, DecodeError) as e:
            logger.warning("%s", e)
            return ToolResponse(payload={"error": str(e)}, is_error=True)
        except Exception as e:
            logger.exception("Tool %s failed", name)
            return ToolResponse(payload={"error": str(e)}, is_error=True)
