"""API response schemas for status lookup endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field


class StatusDetailResponse(BaseModel):
    """Display metadata for one status value."""

    status: str
    label: str
    color: str
    customer_label: str | None = None
    known: bool = True


class StatusListResponse(BaseModel):
    statuses: list[str]


class CompletionResponse(BaseModel):
    target: str
    current: str
    completed: bool


class TimelineStepResponse(BaseModel):
    status: str
    label: str
    color: str
    state: str
    time: datetime | None = None


class StatusViewResponse(BaseModel):
    """Everything an order detail page needs to render one order status."""

    status: str
    role: str
    label: str
    color: str
    can_see: bool
    next_statuses: list[str]
    current_step_index: int
    timeline: list[TimelineStepResponse]


class StatusUpdateRequest(BaseModel):
    """Payload accepted by `PATCH /orders/{order_id}/status`."""

    status: str = Field(min_length=1)
    current_status: str | None = None
