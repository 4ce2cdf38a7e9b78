"""Order status transitions and the role-filtered next-step query.

`get_next_statuses` is a render-path query and never raises. The
`validate_*` guards are for the write path (order updates) and raise
`ValueError` subclasses.
"""

from types import MappingProxyType
from typing import Mapping

from orderflow.common.roles import get_statuses_by_role
from orderflow.common.statuses import OrderStatus, get_all_order_statuses, is_known_status

ALLOWED_TRANSITIONS: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        OrderStatus.RECEIVED.value: (OrderStatus.CONFIRMED.value, OrderStatus.FAILED.value),
        OrderStatus.CONFIRMED.value: (OrderStatus.PREPARING.value, OrderStatus.FAILED.value),
        OrderStatus.PREPARING.value: (OrderStatus.READY.value,),
        OrderStatus.READY.value: (OrderStatus.ASSIGNED_TO_RIDER.value,),
        OrderStatus.ASSIGNED_TO_RIDER.value: (OrderStatus.IN_TRANSIT.value,),
        OrderStatus.IN_TRANSIT.value: (OrderStatus.ARRIVED.value,),
        OrderStatus.ARRIVED.value: (),
        OrderStatus.FAILED.value: (),
    }
)

TERMINAL_STATUSES = frozenset(
    status for status, targets in ALLOWED_TRANSITIONS.items() if not targets
)


class InvalidStatusValue(ValueError):
    """Status string is not part of the registry."""


class InvalidStatusTransition(ValueError):
    """Transition is not allowed by the state machine (or not for this role)."""


def is_terminal_status(status: str) -> bool:
    return status in TERMINAL_STATUSES


def get_next_statuses(current_status: str, role: str) -> list[str]:
    """Direct successors of `current_status` that `role` is also allowed to see.

    A role is never offered a transition into a status it could not observe
    afterwards. Terminal or unknown statuses and unknown roles yield [].
    """

    visible = get_statuses_by_role(role)
    return [status for status in ALLOWED_TRANSITIONS.get(current_status, ()) if status in visible]


def validate_status_value(status: str) -> None:
    """Raise when a status is outside the registry vocabulary."""

    if not is_known_status(status):
        valid = ", ".join(get_all_order_statuses())
        raise InvalidStatusValue(f"Invalid status value. Must be one of: {valid}")


def validate_transition(current: str, new: str, role: str | None = None) -> None:
    """Raise when a transition is not allowed, optionally for a specific role."""

    if role is None:
        allowed = ALLOWED_TRANSITIONS.get(current, ())
    else:
        allowed = get_next_statuses(current, role)
    if new not in allowed:
        suffix = f" for role {role!r}" if role is not None else ""
        raise InvalidStatusTransition(f"Invalid transition: {current} -> {new}{suffix}")
