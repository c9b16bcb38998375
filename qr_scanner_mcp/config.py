import os

# Identity reported to MCP clients
SERVER_NAME = os.getenv("SERVER_NAME", "qr-code-scanner-mcp")
SERVER_VERSION = os.getenv("SERVER_VERSION", "1.0.0")

# Image fetching (scan_qr_code_from_url)
FETCH_TIMEOUT_SECONDS = float(os.getenv("FETCH_TIMEOUT_SECONDS", "15"))
MAX_IMAGE_BYTES = int(os.getenv("MAX_IMAGE_BYTES", str(20 * 1024 * 1024)))

# HTTP debug surface
HTTP_HOST = os.getenv("HTTP_HOST", "127.0.0.1")
HTTP_PORT = int(os.getenv("HTTP_PORT", "8000"))

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
