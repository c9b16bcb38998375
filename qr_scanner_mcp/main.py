import argparse
import asyncio
import logging
import sys

from qr_scanner_mcp.config import HTTP_HOST, HTTP_PORT
from qr_scanner_mcp.observability.logging_config import setup_logging

logger = logging.getLogger("qr_scanner_mcp")


def _parse_args(argv=None):
    parser = argparse.ArgumentParser(description="QR Code Scanner MCP Server")
    parser.add_argument("--transport", choices=["stdio", "http"], default="stdio")
    parser.add_argument("--host", default=HTTP_HOST, help="HTTP bind address (http transport)")
    parser.add_argument("--port", type=int, default=HTTP_PORT, help="HTTP port (http transport)")
    return parser.parse_args(argv)


def _serve_http(host: str, port: int) -> None:
    import uvicorn

    from qr_scanner_mcp.api.server import app

    logger.info("QR Code Scanner API running on http://%s:%d", host, port)
    uvicorn.run(app, host=host, port=port, log_level="info")


def main(argv=None):
    setup_logging()
    args = _parse_args(argv)

    try:
        if args.transport == "http":
            _serve_http(args.host, args.port)
        else:
            from qr_scanner_mcp.mcp_server import run_stdio

            asyncio.run(run_stdio())
    except KeyboardInterrupt:
        pass
    except Exception as e:
        logger.critical("Fatal error: %s", e, exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
