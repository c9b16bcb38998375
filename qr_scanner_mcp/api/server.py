from typing import Any, Dict

from fastapi import Body, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from qr_scanner_mcp.orchestration.dispatcher import ToolDispatcher

# -----------------------------
# App init
# -----------------------------
app = FastAPI(title="QR Code Scanner API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # local debugging only
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

dispatcher = ToolDispatcher()


# -----------------------------
# Routes
# -----------------------------
@app.get("/api/health")
def health():
    return {"ok": True}


@app.get("/api/tools")
def list_tools() -> Dict[str, Any]:
    return {"tools": [d.model_dump() for d in dispatcher.list_tools()]}


@app.post("/api/tools/{name}")
def call_tool(name: str, arguments: Dict[str, Any] = Body(default={})) -> Dict[str, Any]:
    # Same envelope as MCP: failures are reported in the body, not as HTTP errors
    response = dispatcher.call_tool(name, arguments)
    return {"isError": response.is_error, "result": response.payload}
