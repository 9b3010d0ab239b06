from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any

from tenxer.domain.models import Command, CommandKind
from tenxer.domain.prompt_builder import GENERAL_QA_DISABLED, HELP_TEXT
from tenxer.usecases.navigation_service import NavigationService

log = logging.getLogger("tenxer.mcp")

METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603

CONTEXT_URI = "tenxer://navigation/context"
HELP_URI = "tenxer://interface/help"

NAVIGATE_TARGETS: list[str] = [
    "ruka-hand", "amazing-hand", "interactive-hand", "next", "previous", "back",
    "home", "exit", "split", "video", "video-only", "live-video",
]


def _tools() -> list[dict[str, Any]]:
    return [
        {
            "name": "navigate",
            "description": "Navigate to different pages in the interface",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "target": {"type": "string", "enum": list(NAVIGATE_TARGETS)},
                    "parameters": {"type": "object"},
                },
                "required": ["target"],
            },
        },
        {
            "name": "interact",
            "description": "Interact with elements in the interface",
            "inputSchema": {
                "type": "object",
                "properties": {"target": {"type": "string"}, "parameters": {"type": "object"}},
                "required": ["target"],
            },
        },
        {
            "name": "get_info",
            "description": "Get information about the interface or general topics",
            "inputSchema": {
                "type": "object",
                "properties": {"query": {"type": "string"}},
                "required": ["query"],
            },
        },
    ]


def _resources() -> list[dict[str, str]]:
    return [
        {
            "uri": CONTEXT_URI,
            "name": "Navigation Context",
            "description": "Current navigation state and context",
            "mimeType": "application/json",
        },
        {
            "uri": HELP_URI,
            "name": "Interface Help",
            "description": "Available commands and interface guide",
            "mimeType": "text/plain",
        },
    ]


class InvalidParams(ValueError):
    pass


@dataclass
class McpServer:
    """Tool/resource request surface over the same navigation entry points."""

    navigation: NavigationService
    tools: list[dict[str, Any]] = field(default_factory=_tools)
    resources: list[dict[str, str]] = field(default_factory=_resources)

    async def handle_request(self, request: dict[str, Any]) -> dict[str, Any]:
        req_id = request.get("id")
        method = request.get("method")
        params = request.get("params") or {}
        try:
            if method == "tools/list":
                return {"id": req_id, "result": {"tools": self.tools}}
            if method == "resources/list":
                return {"id": req_id, "result": {"resources": self.resources}}
            if method == "tools/call":
                return {"id": req_id, "result": self._call_tool(params)}
            if method == "resources/read":
                return {"id": req_id, "result": self._read_resource(params)}
            return _error(req_id, METHOD_NOT_FOUND, f"Method not found: {method}")
        except InvalidParams as e:
            return _error(req_id, INVALID_PARAMS, str(e))
        except Exception as e:
            log.exception("request %s failed", method)
            return _error(req_id, INTERNAL_ERROR, "Internal error", data=str(e))

    def _call_tool(self, params: dict[str, Any]) -> dict[str, Any]:
        name = params.get("name")
        args = params.get("arguments") or {}
        if not isinstance(args, dict):
            raise InvalidParams("Invalid params")

        if name == "get_info":
            return {"response": GENERAL_QA_DISABLED}

        target = args.get("target")
        if name not in ("navigate", "interact") or not isinstance(target, str) or not target:
            raise InvalidParams("Invalid params")
        parameters = args.get("parameters") if isinstance(args.get("parameters"), dict) else {}

        if name == "navigate":
            cmd = Command(CommandKind.NAVIGATE, target=target, parameters=parameters)
        else:
            cmd = Command(CommandKind.INTERACT, target=target, parameters=parameters)
        result = self.navigation.execute(cmd)
        return {"success": result.applied, "message": result.response}

    def _read_resource(self, params: dict[str, Any]) -> dict[str, Any]:
        uri = params.get("uri")
        if uri == CONTEXT_URI:
            text = json.dumps(self.navigation.context().to_dict(), indent=2)
            mime = "application/json"
        elif uri == HELP_URI:
            text = HELP_TEXT
            mime = "text/plain"
        else:
            raise InvalidParams(f"Resource not found: {uri}")
        return {"contents": [{"uri": uri, "mimeType": mime, "text": text}]}


def _error(req_id: Any, code: int, message: str, data: Any = None) -> dict[str, Any]:
    err: dict[str, Any] = {"code": code, "message": message}
    if data is not None:
        err["data"] = data
    return {"id": req_id, "error": err}
