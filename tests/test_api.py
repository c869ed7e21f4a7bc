"""Integration-focused tests for the BudgetDate FastAPI surface."""
from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Optional

import pytest
from fastapi.testclient import TestClient

from budget_date.api import app as api_app
from budget_date.api.dependencies import get_tool_bundle
from budget_date.api.tool_service import TOOL_DEFINITIONS
from budget_date.core.errors import (
    BadRequestError,
    ConfigurationError,
    ModelOutputError,
    ToolNotFoundError,
    UnauthorizedError,
    UpstreamError,
)
from budget_date.core.schemas import ItineraryPlan


def _make_plan() -> ItineraryPlan:
    return ItineraryPlan(
        title="💘 Gelato Walk",
        steps=["Gelato", "River walk", "Jazz bar"],
        total_cost=30,
        weather_note="Clear skies",
    )


class StubBundle:
    """Asynchronous stub that mimics the ToolBundle used by the API."""

    def __init__(self) -> None:
        self.calls: List[Dict[str, Any]] = []
        self.tokens: Dict[str, str] = {"good-token": "15551234567"}
        self.budget_date_error: Optional[Exception] = None

    def list_tools(self) -> Dict[str, Any]:
        return {"tools": TOOL_DEFINITIONS}

    async def validate(self, arguments: Mapping[str, Any]) -> str:
        token = arguments.get("token")
        if not token:
            raise UnauthorizedError("Missing bearer token")
        if token not in self.tokens:
            raise UnauthorizedError("Unauthorized: token not recognized and OWNER_PHONE not set")
        return self.tokens[token]

    async def budget_date(self, arguments: Mapping[str, Any]) -> ItineraryPlan:
        if self.budget_date_error is not None:
            raise self.budget_date_error
        return _make_plan()

    async def call_tool(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> Any:
        self.calls.append({"name": name, "arguments": dict(arguments or {})})
        if name == "validate":
            return await self.validate(arguments or {})
        if name == "budgetDate":
            return await self.budget_date(arguments or {})
        raise ToolNotFoundError(f"Tool not found: {name}")

    async def close(self) -> None:
        return None


@pytest.fixture
def stub_bundle() -> StubBundle:
    bundle = StubBundle()
    api_app.app.dependency_overrides[get_tool_bundle] = lambda: bundle
    yield bundle
    api_app.app.dependency_overrides.clear()


@pytest.fixture
def client(stub_bundle: StubBundle) -> TestClient:
    """Yield a TestClient that uses the stubbed tool bundle."""

    with TestClient(api_app.app) as test_client:
        yield test_client


def test_server_info(client: TestClient) -> None:
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {"ok": True, "name": "BudgetDate MCP", "version": "1.0.0"}
    assert response.headers["cache-control"] == "no-store"


@pytest.mark.parametrize("path", ["/health", "/mcp/health"])
def test_health_endpoint(client: TestClient, path: str) -> None:
    response = client.get(path)
    assert response.status_code == 200
    data = response.json()
    assert data["ok"] is True
    assert data["service"] == "mcp"


def test_mcp_index_lists_endpoints(client: TestClient) -> None:
    data = client.get("/mcp").json()
    assert data["endpoints"]["toolsCall"] == "/mcp/tools/call"


@pytest.mark.parametrize("path", ["/tools", "/tools/list", "/mcp/tools", "/mcp/tools/list"])
def test_list_tools(client: TestClient, path: str) -> None:
    response = client.get(path)
    assert response.status_code == 200
    assert [tool["name"] for tool in response.json()["tools"]] == ["validate", "budgetDate"]


@pytest.mark.parametrize("path", ["/tools/call", "/mcp/tools/call"])
def test_call_budget_date(client: TestClient, stub_bundle: StubBundle, path: str) -> None:
    payload = {"name": "budgetDate", "arguments": {"budget": 50, "city": "Rome"}}

    response = client.post(path, json=payload)

    assert response.status_code == 200
    content = response.json()["content"]
    assert content[0]["type"] == "text"
    plan = json.loads(content[0]["text"])
    assert plan["title"] == "💘 Gelato Walk"
    assert plan["total_cost"] == 30
    assert "breakdown" not in plan
    assert stub_bundle.calls[-1] == {"name": "budgetDate", "arguments": {"budget": 50, "city": "Rome"}}


def test_call_validate_reads_bearer_header(client: TestClient) -> None:
    response = client.post(
        "/tools/call",
        json={"name": "validate"},
        headers={"Authorization": "Bearer good-token"},
    )

    assert response.status_code == 200
    assert response.json() == {"content": [{"type": "text", "text": "15551234567"}]}


def test_call_validate_accepts_bearer_token_alias(client: TestClient) -> None:
    response = client.post(
        "/tools/call", json={"name": "validate", "arguments": {"bearer_token": "good-token"}}
    )
    assert response.json()["content"][0]["text"] == "15551234567"


def test_call_validate_without_token_is_unauthorized(client: TestClient) -> None:
    response = client.post("/tools/call", json={"name": "validate", "arguments": {}})

    assert response.status_code == 401
    assert response.json()["error"] == "Missing bearer token"


def test_call_unknown_tool_is_invalid_request(client: TestClient, stub_bundle: StubBundle) -> None:
    response = client.post("/tools/call", json={"name": "teleport"})

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid request"
    assert stub_bundle.calls == []


def test_call_with_malformed_body(client: TestClient) -> None:
    response = client.post("/tools/call", json={"arguments": {}})

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid request"


@pytest.mark.parametrize(
    "error, status",
    [
        (BadRequestError("Could not find city"), 400),
        (ModelOutputError("Model output failed schema validation", details=[{"loc": "steps"}]), 502),
        (UpstreamError("Overpass", 429, "slow down"), 429),
        (ConfigurationError("Missing configuration value: gemini_api_key"), 500),
    ],
)
def test_tool_errors_map_to_status(client: TestClient, stub_bundle: StubBundle, error, status) -> None:
    stub_bundle.budget_date_error = error

    response = client.post("/tools/call", json={"name": "budgetDate", "arguments": {"budget": 10}})

    assert response.status_code == status
    body = response.json()
    assert body["ok"] is False
    assert body["error"] == error.message
    if error.details is not None:
        assert body["details"] == error.details


def test_connect_handshake(client: TestClient) -> None:
    response = client.post("/mcp", json={"token": "good-token"})

    assert response.status_code == 200
    data = response.json()
    assert data["ok"] is True
    assert data["phone"] == "15551234567"
    assert data["endpoints"]["toolsList"] == "/mcp/tools/list"
    assert data["server"]["name"] == "BudgetDate MCP"


def test_connect_handshake_without_body_uses_header(client: TestClient) -> None:
    response = client.post("/", headers={"Authorization": "bearer good-token"})
    assert response.json()["phone"] == "15551234567"


@pytest.mark.parametrize("path", ["/validate", "/tools/validate", "/mcp/validate", "/mcp/tools/validate"])
def test_validate_aliases(client: TestClient, path: str) -> None:
    response = client.post(path, json={"bearer_token": "good-token"})

    assert response.status_code == 200
    assert response.json() == {"ok": True, "phone": "15551234567"}


def test_validate_unknown_token(client: TestClient) -> None:
    response = client.post("/validate", json={"token": "nope"})
    assert response.status_code == 401
    assert response.json()["ok"] is False


def test_validate_missing_token(client: TestClient) -> None:
    response = client.post("/validate", json={})
    assert response.status_code == 401
    assert response.json()["error"] == "Missing bearer token"
