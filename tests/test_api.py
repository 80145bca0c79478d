"""
API Contract Tests

The HTTP transport must always answer tool calls with a well-formed
envelope, whatever happens in the adapter behind it.
"""

import pytest
from fastapi.testclient import TestClient

from poly_observability_mcp.adapters.function import FunctionAdapter
from poly_observability_mcp.main import create_app
from poly_observability_mcp.models.tool import StringParam
from poly_observability_mcp.services.gateway import Gateway

from .conftest import FailingAdapter, make_tool


@pytest.fixture
def gateway():
    return Gateway(
        [
            FunctionAdapter(
                "prometheus",
                [make_tool("prometheus_query", {"value": 42}, params={"query": StringParam(required=True)})],
            ),
            FunctionAdapter(
                "grafana", [make_tool("grafana_dashboards", error=RuntimeError("grafana returned 500"))]
            ),
            FailingAdapter("loki", [make_tool("loki_query")], ConnectionRefusedError("refused")),
        ]
    )


@pytest.fixture
def client(gateway):
    """Test client; entering it runs the app lifespan, which starts the gateway"""
    with TestClient(create_app(gateway)) as client:
        yield client


class TestToolEndpoints:
    def test_list_tools(self, client):
        response = client.get("/api/tools")

        assert response.status_code == 200
        tools = response.json()["tools"]
        assert [t["name"] for t in tools] == ["prometheus_query", "grafana_dashboards"]
        assert tools[0] == {
            "name": "prometheus_query",
            "description": "prometheus_query test tool",
            "inputSchema": {
                "type": "object",
                "properties": {"query": {"type": "string"}},
                "required": ["query"],
            },
        }

    def test_call_tool_success(self, client):
        response = client.post(
            "/api/tools/call", json={"name": "prometheus_query", "arguments": {"query": "up"}}
        )

        assert response.status_code == 200
        assert response.json() == {
            "content": [{"type": "text", "text": '{\n  "value": 42\n}'}],
            "isError": False,
        }

    def test_call_unknown_tool(self, client):
        response = client.post("/api/tools/call", json={"name": "loki_query", "arguments": {}})

        assert response.status_code == 200
        assert response.json() == {
            "content": [{"type": "text", "text": "Unknown tool: loki_query"}],
            "isError": True,
        }

    def test_call_handler_failure(self, client):
        response = client.post("/api/tools/call", json={"name": "grafana_dashboards"})

        assert response.status_code == 200
        data = response.json()
        assert data["isError"] is True
        assert data["content"][0]["text"] == "Error: grafana returned 500"

        # Server keeps serving
        assert client.get("/api/tools").status_code == 200

    def test_call_invalid_arguments(self, client):
        response = client.post(
            "/api/tools/call", json={"name": "prometheus_query", "arguments": {"query": 1}}
        )

        data = response.json()
        assert data["isError"] is True
        assert data["content"][0]["text"].startswith("Invalid arguments for prometheus_query")

    def test_malformed_request(self, client):
        response = client.post("/api/tools/call", json={"arguments": {}})

        assert response.status_code == 422

    def test_adapters(self, client):
        response = client.get("/api/adapters")

        assert response.status_code == 200
        states = {a["name"]: (a["state"], a["tool_count"]) for a in response.json()}
        assert states == {
            "prometheus": ("connected", 1),
            "grafana": ("connected", 1),
            "loki": ("failed", 0),
        }


class TestServiceEndpoints:
    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert "message" in response.json()

    def test_health(self, client):
        response = client.get("/health")

        assert response.json() == {"status": "healthy", "message": "Service is running", "tools": 2}

    def test_not_started(self, gateway):
        # Without entering the client the lifespan never runs
        client = TestClient(create_app(gateway))

        assert client.get("/api/tools").status_code == 503
        assert client.get("/health").json()["status"] == "starting"

    def test_shutdown_stops_gateway(self, gateway):
        with TestClient(create_app(gateway)):
            assert gateway.started

        assert not gateway.started

    def test_restart_with_factory_builds_new_gateway(self):
        built = []

        def factory():
            gateway = Gateway([FunctionAdapter("prometheus", [make_tool("prometheus_query")])])
            built.append(gateway)
            return gateway

        app = create_app(gateway_factory=factory)
        for _ in range(2):
            with TestClient(app) as client:
                assert client.get("/health").json()["status"] == "healthy"

        assert len(built) == 2
        assert built[0] is not built[1]
        assert all(g.stopped for g in built)

    def test_restart_without_factory_fails(self, gateway):
        app = create_app(gateway)
        with TestClient(app):
            pass

        with pytest.raises(RuntimeError, match="gateway_factory"):
            with TestClient(app):
                pass
