"""Role-bound view over the status engine, used by order list/detail rendering.

Binds one caller role to the registry, visibility and transition lookups and
builds the progress timeline shown on order detail pages. Unexpected roles and
statuses are logged and counted but never raised.
"""

from dataclasses import dataclass
from datetime import datetime

from orderflow.common.config import settings
from orderflow.common.logging import logger, status_ctx
from orderflow.common.metrics import unknown_role_total, unknown_status_total
from orderflow.common.progress import is_status_completed
from orderflow.common.roles import ROLE_CUSTOMER, get_statuses_by_role, normalize_role
from orderflow.common.state_machine import get_next_statuses
from orderflow.common.statuses import (
    OrderStatus,
    get_customer_timeline_label,
    get_status_details,
    is_known_status,
)

STEP_COMPLETED = "completed"
STEP_CURRENT = "current"
STEP_PENDING = "pending"


@dataclass(frozen=True)
class TimelineStep:
    """One row of an order progress timeline."""

    status: str
    label: str
    color: str
    state: str
    time: datetime | None = None


class OrderStatusView:
    """Status lookups for a single caller role."""

    def __init__(self, role: str | None = None, service_name: str | None = None) -> None:
        self.role = role if role is not None else settings.default_role
        self.service_name = service_name or settings.service_name
        self.visible_statuses = get_statuses_by_role(self.role)
        if normalize_role(self.role) is None:
            unknown_role_total.labels(service=self.service_name).inc()
            logger.warning("unknown_role role=%s", self.role)

    @property
    def is_customer(self) -> bool:
        return normalize_role(self.role) == ROLE_CUSTOMER

    def _check_status(self, status: str, source: str) -> None:
        if not is_known_status(status):
            unknown_status_total.labels(service=self.service_name, source=source).inc()
            logger.warning("unknown_status status=%s source=%s", status, source)

    def next_statuses(self, current_status: str) -> list[str]:
        """Transitions this role may be offered from `current_status`."""

        status_ctx.set(current_status)
        self._check_status(current_status, "next_statuses")
        return get_next_statuses(current_status, self.role)

    def can_see(self, status: str) -> bool:
        return status in self.visible_statuses

    def label(self, status: str, is_customer: bool = False) -> str:
        """Customer alias for customer audiences, operator label otherwise."""

        self._check_status(status, "label")
        if is_customer or self.is_customer:
            return get_customer_timeline_label(status)
        return get_status_details(status).label

    def color(self, status: str) -> str:
        return get_status_details(status).color

    def is_completed(self, target_status: str, current_status: str) -> bool:
        return is_status_completed(target_status, current_status)

    def timeline(
        self,
        current_status: str,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> list[TimelineStep]:
        """Progress timeline over the statuses this role can see.

        `received` is stamped with the order creation time. `arrived` is only
        stamped once the order is actually there; every other step is stamped
        with the last update time once reached.
        """

        status_ctx.set(current_status)
        self._check_status(current_status, "timeline")
        steps = []
        for status in self.visible_statuses:
            if status == current_status:
                state = STEP_CURRENT
            elif is_status_completed(status, current_status):
                state = STEP_COMPLETED
            else:
                state = STEP_PENDING

            if status == OrderStatus.RECEIVED.value:
                time = created_at
            elif status == OrderStatus.ARRIVED.value:
                time = updated_at if state == STEP_CURRENT else None
            else:
                time = updated_at if state != STEP_PENDING else None

            steps.append(
                TimelineStep(
                    status=status,
                    label=self.label(status),
                    color=self.color(status),
                    state=state,
                    time=time,
                )
            )
        return steps

    def current_step_index(self, current_status: str) -> int:
        """Index of the current status in the timeline, or -1 when it is not shown."""

        try:
            return self.visible_statuses.index(current_status)
        except ValueError:
            return -1
