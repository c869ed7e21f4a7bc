from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field


class ToolCallRequest(BaseModel):
    """Body of ``POST /tools/call``."""

    name: Literal["validate", "budgetDate"] = Field(..., description="Tool to invoke")
    arguments: Dict[str, Any] = Field(default_factory=dict, description="Tool arguments")


class TextContent(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ToolCallResponse(BaseModel):
    """MCP-style tool result wrapping the payload as text content."""

    content: List[TextContent]


class TokenRequest(BaseModel):
    """Body accepted by the validate handshake endpoints; both keys optional."""

    token: Optional[str] = None
    bearer_token: Optional[str] = None


class ValidateResponse(BaseModel):
    ok: bool = True
    phone: str
    endpoints: Optional[Dict[str, str]] = None
    server: Optional[Dict[str, str]] = None
