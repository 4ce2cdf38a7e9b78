"""HTTP surface for the order status engine.

The caller's role comes from the `x-user-role` header; a missing header falls
back to the configured default role, an empty one sees nothing. Lookups never
produce errors: unknown statuses and roles come back as passthrough labels
and empty lists. Only status updates can fail, mapped to HTTP errors.
"""

from dataclasses import asdict
from datetime import datetime
from time import perf_counter
from uuid import uuid4

import httpx
from fastapi import FastAPI, Header, HTTPException, Request

from orderflow.common.config import settings
from orderflow.common.logging import configure_logging, role_ctx, trace_id_ctx
from orderflow.common.metrics import (
    http_request_duration_seconds,
    http_requests_total,
    metrics_response,
)
from orderflow.common.state_machine import InvalidStatusTransition, InvalidStatusValue
from orderflow.common.startup import log_startup_config
from orderflow.common.statuses import get_all_order_statuses, get_status_details, is_known_status
from orderflow.common.tracing import instrument_app, setup_tracing
from orderflow.services.order_status.schemas import (
    CompletionResponse,
    StatusDetailResponse,
    StatusListResponse,
    StatusUpdateRequest,
    StatusViewResponse,
    TimelineStepResponse,
)
from orderflow.services.order_status.service import OrderStatusView
from orderflow.services.order_updates.client import OrderUpdateClient, OrderUpdateError

configure_logging()
tracing_on = setup_tracing(settings.service_name)
log_startup_config(
    settings,
    ["service_name", "log_level", "default_role", "tracing_enabled"],
)
app = FastAPI(title="Order Status Engine")
# Overridable for tests; None means the real network.
orders_transport: httpx.AsyncBaseTransport | None = None
if tracing_on:
    instrument_app(app)


@app.middleware("http")
async def metrics_middleware(request: Request, call_next):
    """Record request count and latency for every HTTP call."""

    start = perf_counter()
    route = request.url.path
    method = request.method
    status_code = 500
    trace_id_ctx.set(request.headers.get("x-correlation-id") or str(uuid4()))
    try:
        response = await call_next(request)
        status_code = response.status_code
        route_obj = request.scope.get("route")
        if route_obj is not None and getattr(route_obj, "path", None):
            route = route_obj.path
        return response
    finally:
        elapsed = max(0.0, perf_counter() - start)
        http_request_duration_seconds.labels(
            service=settings.service_name,
            route=route,
            method=method,
        ).observe(elapsed)
        http_requests_total.labels(
            service=settings.service_name,
            route=route,
            method=method,
            status_code=str(status_code),
        ).inc()


def _detail(status: str) -> StatusDetailResponse:
    detail = get_status_details(status)
    return StatusDetailResponse(status=status, known=is_known_status(status), **asdict(detail))


def _view(x_user_role: str | None) -> OrderStatusView:
    view = OrderStatusView(x_user_role)
    role_ctx.set(view.role)
    return view


@app.get("/statuses", response_model=list[StatusDetailResponse])
def list_statuses():
    """Every status in registry order with its display metadata."""

    return [_detail(status) for status in get_all_order_statuses()]


@app.get("/statuses/{status}", response_model=StatusDetailResponse)
def status_details(status: str):
    return _detail(status)


@app.get("/roles/{role}/statuses", response_model=StatusListResponse)
def role_statuses(role: str):
    """Statuses visible to `role`; empty for unknown roles."""

    return StatusListResponse(statuses=OrderStatusView(role).visible_statuses)


@app.get("/statuses/{status}/next", response_model=StatusListResponse)
def next_statuses(status: str, x_user_role: str | None = Header(default=None)):
    """Transitions the caller's role may be offered from `status`."""

    return StatusListResponse(statuses=_view(x_user_role).next_statuses(status))


@app.get("/statuses/{status}/completed", response_model=CompletionResponse)
def status_completed(status: str, current: str, x_user_role: str | None = Header(default=None)):
    completed = _view(x_user_role).is_completed(status, current)
    return CompletionResponse(target=status, current=current, completed=completed)


@app.get("/orders/status-view", response_model=StatusViewResponse)
def status_view(
    status: str,
    created_at: datetime | None = None,
    updated_at: datetime | None = None,
    x_user_role: str | None = Header(default=None),
):
    """Label, color, legal next steps and progress timeline for one order status."""

    view = _view(x_user_role)
    timeline = view.timeline(status, created_at=created_at, updated_at=updated_at)
    return StatusViewResponse(
        status=status,
        role=view.role,
        label=view.label(status),
        color=view.color(status),
        can_see=view.can_see(status),
        next_statuses=view.next_statuses(status),
        current_step_index=view.current_step_index(status),
        timeline=[TimelineStepResponse(**asdict(step)) for step in timeline],
    )


@app.patch("/orders/{order_id}/status")
async def update_order_status(
    order_id: str,
    req: StatusUpdateRequest,
    x_user_role: str | None = Header(default=None),
    authorization: str | None = Header(default=None),
):
    """Forward a status change to the orders API after checking it for the caller's role."""

    view = _view(x_user_role)
    token = authorization.removeprefix("Bearer ").strip() if authorization else None
    client = OrderUpdateClient(token=token, role=view.role, transport=orders_transport)
    try:
        return await client.update_status(
            order_id, req.status, current_status=req.current_status, trace_id=trace_id_ctx.get()
        )
    except (InvalidStatusValue, InvalidStatusTransition) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except OrderUpdateError as exc:
        raise HTTPException(status_code=exc.status_code or 502, detail=str(exc)) from exc


@app.get("/metrics")
def metrics():
    """Prometheus scrape endpoint."""

    return metrics_response()


@app.get("/health")
def health():
    """Container health probe endpoint."""

    return {"ok": True}
