"""Tests for JSON-RPC envelopes and MCP payload models."""

import pytest
from pydantic import ValidationError

from weather_mcp.protocols.mcp.models import (
    InitializeParams,
    JsonRpcError,
    JsonRpcRequest,
    JsonRpcResponse,
    ToolCallParams,
    ToolDescriptor,
)


class TestJsonRpcRequest:
    def test_defaults(self) -> None:
        req = JsonRpcRequest(method="tools/list")
        assert req.jsonrpc == "2.0"
        assert req.id is None
        assert req.params is None

    def test_string_and_int_ids(self) -> None:
        assert JsonRpcRequest(method="x", id="abc").id == "abc"
        assert JsonRpcRequest(method="x", id=7).id == 7

    def test_method_required(self) -> None:
        with pytest.raises(ValidationError):
            JsonRpcRequest.model_validate({"id": 1})

    def test_params_must_be_object(self) -> None:
        with pytest.raises(ValidationError):
            JsonRpcRequest.model_validate({"method": "tools/call", "params": [1, 2]})


class TestJsonRpcResponse:
    def test_success_wire_shape(self) -> None:
        resp = JsonRpcResponse.success(1, {"tools": []})
        assert resp.to_wire() == {"jsonrpc": "2.0", "id": 1, "result": {"tools": []}}

    def test_failure_wire_shape(self) -> None:
        resp = JsonRpcResponse.failure("a", -32601, "Method not found: x")
        assert resp.to_wire() == {
            "jsonrpc": "2.0",
            "id": "a",
            "error": {"code": -32601, "message": "Method not found: x"},
        }

    def test_id_omitted_when_absent(self) -> None:
        assert "id" not in JsonRpcResponse.success(None, {}).to_wire()

    def test_requires_exactly_one_outcome(self) -> None:
        with pytest.raises(ValidationError):
            JsonRpcResponse(id=1)
        with pytest.raises(ValidationError):
            JsonRpcResponse(id=1, result={}, error=JsonRpcError(code=-32603, message="x"))


class TestParams:
    def test_initialize_aliases(self) -> None:
        params = InitializeParams.model_validate({
            "protocolVersion": "2025-06-18",
            "capabilities": {},
            "clientInfo": {"name": "test-client", "version": "1.0.0"},
        })
        assert params.protocol_version == "2025-06-18"
        assert params.client_info is not None
        assert params.client_info.name == "test-client"

    def test_initialize_all_optional(self) -> None:
        params = InitializeParams()
        assert params.client_info is None
        assert params.capabilities == {}

    def test_tool_call_defaults_arguments(self) -> None:
        assert ToolCallParams(name="get_alerts").arguments == {}

    def test_tool_call_requires_name(self) -> None:
        with pytest.raises(ValidationError):
            ToolCallParams.model_validate({"arguments": {}})


class TestToolDescriptor:
    def test_alias_round_trip(self) -> None:
        raw = {"name": "t", "description": "d", "inputSchema": {"type": "object"}}
        tool = ToolDescriptor.model_validate(raw)
        assert tool.input_schema == {"type": "object"}
        assert tool.to_wire() == raw
