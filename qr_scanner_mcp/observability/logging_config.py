import logging
import sys

from qr_scanner_mcp.config import LOG_LEVEL


def setup_logging():
    # stdout is the MCP channel, diagnostics go to stderr only
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        stream=sys.stderr,
    )
