"""Tests for the HTTP transport."""

import pytest
from fastapi.testclient import TestClient

from calcufy.api.main import create_app
from calcufy.utils.config import Settings


@pytest.fixture
def client():
    """Create a test client with the lifespan running."""
    app = create_app(Settings(widget_source="remote", base_url="https://assets.example"))
    with TestClient(app) as test_client:
        yield test_client


def rpc(method, params=None, request_id=1):
    message = {"jsonrpc": "2.0", "id": request_id, "method": method}
    if params is not None:
        message["params"] = params
    return message


@pytest.mark.parametrize("path", ["/mcp", "/api/mcp"])
def test_server_info(client, path):
    """Test GET describes the server."""
    response = client.get(path)
    assert response.status_code == 200
    assert response.json()["name"] == "calcufy-calculator"
    assert response.json()["protocol"] == "MCP/JSON-RPC 2.0"


def test_health(client):
    """Test the health endpoint."""
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "service": "calcufy-calculator"}


def test_widgets_health(client):
    """Test the loaded widgets are reported."""
    response = client.get("/api/health/widgets")
    assert response.status_code == 200
    assert len(response.json()["widgets"]) == 3


@pytest.mark.parametrize("path", ["/mcp", "/api/mcp"])
def test_tools_call_result(client, path):
    """Test a completed calculation over HTTP."""
    response = client.post(
        path,
        json=rpc("tools/call", {"name": "calculator_tool", "arguments": {"operation": "add", "operand1": 2, "operand2": 3}}),
    )
    assert response.status_code == 200
    body = response.json()
    assert body["id"] == 1
    assert body["result"]["content"][0]["text"] == "2 + 3 = 5"
    assert body["result"]["structuredContent"] == {
        "step": "show-result",
        "operation": "add",
        "symbol": "+",
        "operand1": 2,
        "operand2": 3,
        "value": 5,
    }


def test_division_by_zero_is_http_200(client):
    """Test domain errors travel as successful responses."""
    response = client.post(
        "/mcp",
        json=rpc("tools/call", {"name": "calculator_tool", "arguments": {"operation": "divide", "operand1": 4, "operand2": 0}}),
    )
    assert response.status_code == 200
    assert response.json()["result"]["isError"] is True


def test_unknown_tool(client):
    """Test unknown tools are protocol errors."""
    response = client.post("/mcp", json=rpc("tools/call", {"name": "nope", "arguments": {}}))
    assert response.status_code == 200
    assert response.json()["error"]["code"] == -32601


def test_unknown_method(client):
    """Test unknown methods are protocol errors."""
    response = client.post("/mcp", json=rpc("sampling/createMessage"))
    assert response.status_code == 200
    assert response.json()["error"]["code"] == -32601


def test_resources_read(client):
    """Test widget markup over HTTP."""
    response = client.post("/mcp", json=rpc("resources/read", {"uri": "ui://widget/operation-selector.html"}))
    assert response.status_code == 200
    assert "https://assets.example/assets/operation-selector.js" in response.json()["result"]["contents"][0]["text"]


def test_parse_error(client):
    """Test malformed JSON bodies."""
    response = client.post("/mcp", content=b"{not json", headers={"Content-Type": "application/json"})
    assert response.status_code == 400
    assert response.json()["error"]["code"] == -32700


def test_invalid_request(client):
    """Test bodies without a method."""
    response = client.post("/mcp", json={"jsonrpc": "2.0", "id": 5})
    assert response.status_code == 400
    assert response.json() == {"jsonrpc": "2.0", "id": 5, "error": {"code": -32600, "message": "Invalid Request"}}


def test_notification_accepted(client):
    """Test notifications get an empty 202."""
    response = client.post("/mcp", json={"jsonrpc": "2.0", "method": "notifications/initialized"})
    assert response.status_code == 202
    assert response.content == b""


def test_cors_preflight(client):
    """Test browsers may call the endpoint cross-origin."""
    response = client.options(
        "/mcp",
        headers={
            "Origin": "https://chat.example",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Content-Type",
        },
    )
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"


def test_overflowing_result_is_valid_json(client):
    """Test an infinite result still yields a JSON-RPC envelope."""
    response = client.post(
        "/mcp",
        json=rpc("tools/call", {"name": "calculator_tool", "arguments": {"operation": "multiply", "operand1": 1e308, "operand2": 10}}),
    )
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/json")
    result = response.json()["result"]
    assert result["structuredContent"]["value"] is None
    assert result["content"][0]["text"] == "1e+308 × 10 = Infinity"
