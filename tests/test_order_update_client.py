"""Tests for the order update client using an in-memory HTTP transport."""

import asyncio
import json

import httpx
import pytest

from orderflow.common.state_machine import InvalidStatusTransition, InvalidStatusValue
from orderflow.services.order_updates.client import OrderUpdateClient, OrderUpdateError


def _client(handler, role: str | None = None, token: str | None = None) -> OrderUpdateClient:
    return OrderUpdateClient(
        base_url="http://orders.test/",
        token=token,
        role=role,
        transport=httpx.MockTransport(handler),
    )


def test_patch_sent_with_status_and_auth():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"id": "o-1", "status": "confirmed"})

    client = _client(handler, role="csr", token="tkn")
    result = asyncio.run(client.update_status("o-1", "confirmed", current_status="received", trace_id="t-9"))

    assert result == {"id": "o-1", "status": "confirmed"}
    assert len(seen) == 1
    request = seen[0]
    assert request.method == "PATCH"
    assert request.url == "http://orders.test/v1/orders/o-1"
    assert request.headers["authorization"] == "Bearer tkn"
    assert request.headers["x-correlation-id"] == "t-9"
    assert json.loads(request.content) == {"status": "confirmed"}


def test_invalid_status_value_never_sent():
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("request must not be sent")

    with pytest.raises(InvalidStatusValue):
        asyncio.run(_client(handler).update_status("o-1", "cancelled"))


def test_transition_hidden_from_role_never_sent():
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("request must not be sent")

    with pytest.raises(InvalidStatusTransition):
        asyncio.run(_client(handler, role="rider").update_status("o-1", "preparing", current_status="confirmed"))


def test_transition_checked_without_role():
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("request must not be sent")

    with pytest.raises(InvalidStatusTransition):
        asyncio.run(_client(handler).update_status("o-1", "arrived", current_status="received"))


def test_api_validation_messages_joined():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"message": ["status is locked", "order is closed"]})

    with pytest.raises(OrderUpdateError, match="status is locked, order is closed") as info:
        asyncio.run(_client(handler, role="admin").update_status("o-2", "failed"))
    assert info.value.status_code == 400


def test_api_error_without_json_body():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="bad gateway")

    with pytest.raises(OrderUpdateError, match="bad gateway"):
        asyncio.run(_client(handler).update_status("o-3", "ready"))


def test_empty_success_body():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(204)

    assert asyncio.run(_client(handler).update_status("o-4", "arrived", current_status="in_transit")) == {}


def test_connection_failure_wrapped():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(OrderUpdateError, match="connection refused") as info:
        asyncio.run(_client(handler).update_status("o-5", "confirmed", current_status="received"))
    assert info.value.status_code is None
    assert isinstance(info.value.__cause__, httpx.ConnectError)


def test_timeout_without_message_uses_default():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("", request=request)

    with pytest.raises(OrderUpdateError, match="Failed to update order status"):
        asyncio.run(_client(handler).update_status("o-6", "confirmed"))


def test_non_json_success_body_wrapped():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="OK")

    with pytest.raises(OrderUpdateError, match="Failed to update order status") as info:
        asyncio.run(_client(handler).update_status("o-7", "ready"))
    assert info.value.status_code == 200


def test_non_string_api_message_stringified():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(409, json={"message": 5})

    with pytest.raises(OrderUpdateError) as info:
        asyncio.run(_client(handler).update_status("o-8", "ready"))
    assert str(info.value) == "5"
    assert info.value.status_code == 409


def test_api_error_without_message_uses_default():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"error": "boom"})

    with pytest.raises(OrderUpdateError, match="Failed to update order status"):
        asyncio.run(_client(handler).update_status("o-9", "ready"))
