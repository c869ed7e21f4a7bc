"""MCP-style routes: tool listing, tool calls and the bearer-token handshake.

The tool routes are mounted twice by the app, at the root and under ``/mcp``,
because MCP clients disagree on where to look for them.
"""
from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional

from fastapi import APIRouter, Body, Depends, Header

from budget_date import __version__
from budget_date.api.dependencies import get_tool_bundle
from budget_date.api.schemas import (
    TextContent,
    TokenRequest,
    ToolCallRequest,
    ToolCallResponse,
    ValidateResponse,
)
from budget_date.api.tool_service import ToolBundle
from budget_date.core.errors import UnauthorizedError

logger = logging.getLogger(__name__)

SERVER_NAME = "BudgetDate MCP"
MCP_ENDPOINTS = {
    "health": "/mcp/health",
    "toolsList": "/mcp/tools/list",
    "toolsCall": "/mcp/tools/call",
}

_BEARER_PATTERN = re.compile(r"^Bearer\s+(.+)$", re.IGNORECASE)

router = APIRouter()
index_router = APIRouter()


def resolve_token(
    payload: Optional[Mapping[str, Any]],
    authorization: Optional[str],
) -> Optional[str]:
    """Find the bearer token in the body (``token`` / ``bearer_token``) or header."""

    if payload:
        token = payload.get("token") or payload.get("bearer_token")
        if token:
            return token
    match = _BEARER_PATTERN.match(authorization or "")
    if match:
        return match.group(1).strip()
    return None


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


async def _handshake(
    payload: Optional[TokenRequest],
    authorization: Optional[str],
    bundle: ToolBundle,
) -> str:
    token = resolve_token(payload.model_dump() if payload else None, authorization)
    if not token:
        raise UnauthorizedError("Missing bearer token")
    return await bundle.validate({"token": token})


@router.get("/health")
async def health_check() -> Dict[str, Any]:
    """Lightweight readiness probe."""

    return {"ok": True, "service": "mcp", "time": _now()}


@router.get("/tools")
@router.get("/tools/list")
async def list_tools(bundle: ToolBundle = Depends(get_tool_bundle)) -> Dict[str, Any]:
    return bundle.list_tools()


@router.post("/tools/call", response_model=ToolCallResponse)
async def call_tool(
    payload: ToolCallRequest,
    authorization: Optional[str] = Header(default=None),
    bundle: ToolBundle = Depends(get_tool_bundle),
) -> ToolCallResponse:
    """Invoke a tool and wrap its result as MCP text content."""

    logger.info("Tool call: %s", payload.name)
    if payload.name == "validate":
        token = resolve_token(payload.arguments, authorization)
        if not token:
            raise UnauthorizedError("Missing bearer token")
        phone = await bundle.call_tool("validate", {"token": token})
        return ToolCallResponse(content=[TextContent(text=str(phone))])

    result = await bundle.call_tool(payload.name, payload.arguments)
    return ToolCallResponse(content=[TextContent(text=result.model_dump_json(exclude_none=True))])


@router.post("/tools/validate", response_model=ValidateResponse, response_model_exclude_none=True)
@router.post("/validate", response_model=ValidateResponse, response_model_exclude_none=True)
async def validate_token(
    payload: Optional[TokenRequest] = Body(default=None),
    authorization: Optional[str] = Header(default=None),
    bundle: ToolBundle = Depends(get_tool_bundle),
) -> ValidateResponse:
    phone = await _handshake(payload, authorization, bundle)
    return ValidateResponse(phone=phone)


@index_router.get("/")
async def server_info() -> Dict[str, Any]:
    return {"ok": True, "name": SERVER_NAME, "version": __version__}


@index_router.get("/mcp")
async def mcp_index() -> Dict[str, Any]:
    return {"ok": True, "service": "mcp", "time": _now(), "endpoints": MCP_ENDPOINTS}


@index_router.post("/mcp", response_model=ValidateResponse, response_model_exclude_none=True)
@index_router.post("/", response_model=ValidateResponse, response_model_exclude_none=True)
async def connect(
    payload: Optional[TokenRequest] = Body(default=None),
    authorization: Optional[str] = Header(default=None),
    bundle: ToolBundle = Depends(get_tool_bundle),
) -> ValidateResponse:
    """Connect handshake: validate the bearer token and return the owner phone."""

    phone = await _handshake(payload, authorization, bundle)
    return ValidateResponse(
        phone=phone,
        endpoints={"toolsList": MCP_ENDPOINTS["toolsList"], "toolsCall": MCP_ENDPOINTS["toolsCall"]},
        server={"name": SERVER_NAME, "version": __version__},
    )
