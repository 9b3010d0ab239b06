"""
Tests for tenxer/usecases/mcp_server.py
Tool/resource request surface.
"""
import json

import pytest

from tenxer.domain.models import ViewMode
from tenxer.domain.prompt_builder import GENERAL_QA_DISABLED, HELP_TEXT
from tenxer.usecases.mcp_server import CONTEXT_URI, HELP_URI, McpServer


@pytest.fixture
def server(local_only_service):
    return McpServer(navigation=local_only_service)


class TestListing:

    async def test_tools_list(self, server):
        resp = await server.handle_request({"id": "1", "method": "tools/list"})
        names = [t["name"] for t in resp["result"]["tools"]]
        assert names == ["navigate", "interact", "get_info"]

    async def test_resources_list(self, server):
        resp = await server.handle_request({"id": "2", "method": "resources/list"})
        uris = [r["uri"] for r in resp["result"]["resources"]]
        assert uris == [CONTEXT_URI, HELP_URI]

    async def test_unknown_method(self, server):
        resp = await server.handle_request({"id": "3", "method": "prompts/list"})
        assert resp["error"]["code"] == -32601


class TestToolCalls:

    async def test_navigate(self, server, local_only_service):
        resp = await server.handle_request({
            "id": "4", "method": "tools/call",
            "params": {"name": "navigate", "arguments": {"target": "ruka-hand", "parameters": {"page": 1}}},
        })
        assert resp["result"]["success"] is True
        assert local_only_service.state.page_index == 1

    async def test_interact_goes_through_dispatcher(self, server, local_only_service):
        local_only_service.on_dot_clicked(3)
        resp = await server.handle_request({
            "id": "5", "method": "tools/call",
            "params": {"name": "interact", "arguments": {"target": "dot-1"}},
        })
        assert resp["result"]["success"] is True
        assert local_only_service.state.view is ViewMode.SPLIT

    async def test_rejected_interaction_reports_failure(self, server, local_only_service):
        before = local_only_service.state
        resp = await server.handle_request({
            "id": "6", "method": "tools/call",
            "params": {"name": "interact", "arguments": {"target": "point-1"}},
        })
        assert resp["result"]["success"] is False
        assert local_only_service.state == before

    async def test_get_info_is_disabled(self, server):
        resp = await server.handle_request({
            "id": "7", "method": "tools/call",
            "params": {"name": "get_info", "arguments": {"query": "what is a hand"}},
        })
        assert resp["result"]["response"] == GENERAL_QA_DISABLED

    @pytest.mark.parametrize("params", [
        {"name": "navigate", "arguments": {}},
        {"name": "teleport", "arguments": {"target": "mars"}},
        {"name": "navigate", "arguments": "next"},
    ])
    async def test_invalid_params(self, server, params):
        resp = await server.handle_request({"id": "8", "method": "tools/call", "params": params})
        assert resp["error"]["code"] == -32602


class TestResources:

    async def test_read_context(self, server, local_only_service):
        local_only_service.on_home_toggle()
        resp = await server.handle_request({"id": "9", "method": "resources/read", "params": {"uri": CONTEXT_URI}})
        content = resp["result"]["contents"][0]
        assert content["mimeType"] == "application/json"
        assert json.loads(content["text"]) == {
            "currentView": "video-only",
            "currentIndex": 0,
            "videoPlaying": True,
            "selectedPoint": None,
        }

    async def test_read_help(self, server):
        resp = await server.handle_request({"id": "10", "method": "resources/read", "params": {"uri": HELP_URI}})
        assert resp["result"]["contents"][0]["text"] == HELP_TEXT

    async def test_unknown_resource(self, server):
        resp = await server.handle_request({"id": "11", "method": "resources/read", "params": {"uri": "tenxer://nope"}})
        assert resp["error"]["code"] == -32602
