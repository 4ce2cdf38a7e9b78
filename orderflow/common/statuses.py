"""Order status registry: the closed set of lifecycle states and their display metadata.

Lookups never raise. Status strings outside the registry (legacy or future
backend values) fall through to passthrough labels so render paths keep
working.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class OrderStatus(str, Enum):
    """Lifecycle states in registry order."""

    RECEIVED = "received"
    CONFIRMED = "confirmed"
    FAILED = "failed"
    PREPARING = "preparing"
    READY = "ready"
    ASSIGNED_TO_RIDER = "assigned_to_rider"
    IN_TRANSIT = "in_transit"
    ARRIVED = "arrived"


@dataclass(frozen=True)
class StatusDetail:
    """Display metadata for one status."""

    label: str
    color: str
    customer_label: str | None = None


DEFAULT_STATUS_COLOR = "bg-gray-100 text-gray-800"

STATUS_DETAILS: Mapping[str, StatusDetail] = MappingProxyType(
    {
        OrderStatus.RECEIVED.value: StatusDetail(
            "Order Received", "bg-yellow-100 text-yellow-800", "Order Placed"
        ),
        OrderStatus.CONFIRMED.value: StatusDetail(
            "Confirmed", "bg-blue-100 text-blue-800", "Order Confirmed"
        ),
        OrderStatus.FAILED.value: StatusDetail("Failed", "bg-red-100 text-red-800"),
        OrderStatus.PREPARING.value: StatusDetail("Preparing", "bg-orange-100 text-orange-800"),
        OrderStatus.READY.value: StatusDetail(
            "Ready for Pickup", "bg-purple-100 text-purple-800", "Ready for Delivery"
        ),
        OrderStatus.ASSIGNED_TO_RIDER.value: StatusDetail(
            "Assigned to Rider", "bg-indigo-100 text-indigo-800"
        ),
        OrderStatus.IN_TRANSIT.value: StatusDetail(
            "In Transit", "bg-cyan-100 text-cyan-800", "On the Way"
        ),
        OrderStatus.ARRIVED.value: StatusDetail(
            "Delivered", "bg-green-100 text-green-800", "Delivered"
        ),
    }
)

# Spaced forms still emitted by older orders API builds.
LEGACY_STATUS_ALIASES: Mapping[str, OrderStatus] = MappingProxyType(
    {
        "assigned to a rider": OrderStatus.ASSIGNED_TO_RIDER,
        "in transit": OrderStatus.IN_TRANSIT,
    }
)

_ALL_STATUSES: tuple[str, ...] = tuple(member.value for member in OrderStatus)


def get_status_details(status: str) -> StatusDetail:
    """Return label/color for a status, passing unknown values through as the label."""

    detail = STATUS_DETAILS.get(status)
    if detail is None:
        return StatusDetail(label=status, color=DEFAULT_STATUS_COLOR)
    return detail


def get_customer_timeline_label(status: str) -> str:
    """Return the customer-facing alias, or the raw status when none is configured."""

    detail = STATUS_DETAILS.get(status)
    if detail is None or detail.customer_label is None:
        return status
    return detail.customer_label


def get_all_order_statuses() -> list[str]:
    """Every status value in registry order."""

    return list(_ALL_STATUSES)


def is_known_status(status: str) -> bool:
    return status in STATUS_DETAILS


def parse_status(value: object) -> OrderStatus | None:
    """Map external input onto a registry member, or None when it is not one.

    Accepts surrounding whitespace, any letter case and the legacy spaced
    wire forms.
    """

    if isinstance(value, OrderStatus):
        return value
    if not isinstance(value, str):
        return None
    cleaned = value.strip().lower()
    if cleaned in STATUS_DETAILS:
        return OrderStatus(cleaned)
    return LEGACY_STATUS_ALIASES.get(cleaned)
