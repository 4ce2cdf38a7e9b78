"""Client for pushing order status changes to the orders API.

Proposed statuses are checked against the registry vocabulary, and against
the role-filtered transition table when the current status is known, before
any PATCH is sent.
"""

import httpx

from orderflow.common.config import settings
from orderflow.common.logging import logger, order_id_ctx, status_ctx
from orderflow.common.metrics import status_update_rejected_total, status_update_requests_total
from orderflow.common.state_machine import (
    InvalidStatusTransition,
    InvalidStatusValue,
    validate_status_value,
    validate_transition,
)

DEFAULT_ERROR_MESSAGE = "Failed to update order status"


class OrderUpdateError(Exception):
    """The orders API refused or failed a status update."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def _error_message(resp: httpx.Response) -> str:
    # Validation errors arrive as {"message": [..]}, others as {"message": ".."}.
    try:
        body = resp.json()
    except ValueError:
        return resp.text or DEFAULT_ERROR_MESSAGE
    message = body.get("message") if isinstance(body, dict) else None
    if isinstance(message, list):
        return ", ".join(str(item) for item in message)
    if message is None or message == "":
        return DEFAULT_ERROR_MESSAGE
    return str(message)


class OrderUpdateClient:
    """Sends validated `PATCH /v1/orders/{order_id}` requests."""

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        role: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or settings.orders_api_url).rstrip("/")
        self.token = token
        self.role = role
        self.timeout = timeout if timeout is not None else settings.http_timeout_seconds
        self.transport = transport

    def _headers(self, trace_id: str | None) -> dict[str, str]:
        headers = {"content-type": "application/json"}
        if self.token:
            headers["authorization"] = f"Bearer {self.token}"
        if trace_id:
            headers["x-correlation-id"] = trace_id
        return headers

    def check_update(self, new_status: str, current_status: str | None = None) -> None:
        """Raise InvalidStatusValue/InvalidStatusTransition for updates that must not be sent."""

        try:
            validate_status_value(new_status)
            if current_status is not None:
                validate_transition(current_status, new_status, self.role)
        except InvalidStatusValue:
            status_update_rejected_total.labels(service=settings.service_name, reason="invalid_status").inc()
            raise
        except InvalidStatusTransition:
            status_update_rejected_total.labels(
                service=settings.service_name, reason="invalid_transition"
            ).inc()
            raise

    async def update_status(
        self,
        order_id: str,
        new_status: str,
        current_status: str | None = None,
        trace_id: str | None = None,
    ) -> dict:
        """Validate locally, then PATCH the new status and return the API payload."""

        order_id_ctx.set(order_id)
        status_ctx.set(new_status)
        self.check_update(new_status, current_status)

        status_update_requests_total.labels(service=settings.service_name, status=new_status).inc()
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url, timeout=self.timeout, transport=self.transport
            ) as client:
                resp = await client.patch(
                    f"/v1/orders/{order_id}",
                    headers=self._headers(trace_id),
                    json={"status": new_status},
                )
        except httpx.HTTPError as exc:
            status_update_rejected_total.labels(service=settings.service_name, reason="transport").inc()
            logger.error("order_status_update_unreachable error=%r", exc)
            raise OrderUpdateError(str(exc) or DEFAULT_ERROR_MESSAGE) from exc
        if resp.status_code >= 400:
            message = _error_message(resp)
            status_update_rejected_total.labels(service=settings.service_name, reason="api_error").inc()
            logger.error("order_status_update_failed status_code=%s message=%s", resp.status_code, message)
            raise OrderUpdateError(message, status_code=resp.status_code)
        try:
            payload = resp.json() if resp.content else {}
        except ValueError as exc:
            status_update_rejected_total.labels(service=settings.service_name, reason="bad_response").inc()
            logger.error("order_status_update_bad_response status_code=%s", resp.status_code)
            raise OrderUpdateError(DEFAULT_ERROR_MESSAGE, status_code=resp.status_code) from exc
        logger.info("order_status_updated")
        return payload
