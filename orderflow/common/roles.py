"""Role visibility table: which lifecycle states each role may observe.

Unknown roles see nothing.
"""

from types import MappingProxyType
from typing import Mapping

from orderflow.common.statuses import OrderStatus

ROLE_CUSTOMER = "customer"
ROLE_RIDER = "rider"
ROLE_ADMIN = "admin"
ROLE_CSR = "csr"

ALL_ROLES = (ROLE_CUSTOMER, ROLE_RIDER, ROLE_ADMIN, ROLE_CSR)

_EVERY_STATUS = tuple(member.value for member in OrderStatus)

# Sequences are in lifecycle order; timelines render them as-is.
ROLE_STATUS_VISIBILITY: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        ROLE_CUSTOMER: (
            OrderStatus.RECEIVED.value,
            OrderStatus.CONFIRMED.value,
            OrderStatus.READY.value,
            OrderStatus.IN_TRANSIT.value,
            OrderStatus.ARRIVED.value,
        ),
        ROLE_RIDER: (
            OrderStatus.READY.value,
            OrderStatus.ASSIGNED_TO_RIDER.value,
            OrderStatus.IN_TRANSIT.value,
            OrderStatus.ARRIVED.value,
        ),
        ROLE_ADMIN: _EVERY_STATUS,
        ROLE_CSR: _EVERY_STATUS,
    }
)


def normalize_role(role: str | None) -> str | None:
    """Lower-cased known role, or None."""

    if not isinstance(role, str):
        return None
    lowered = role.lower()
    return lowered if lowered in ROLE_STATUS_VISIBILITY else None


def get_statuses_by_role(role: str) -> list[str]:
    """Statuses visible to a role (case-insensitive); empty for unknown roles."""

    normalized = normalize_role(role)
    if normalized is None:
        return []
    return list(ROLE_STATUS_VISIBILITY[normalized])


def can_role_see_status(role: str, status: str) -> bool:
    return status in get_statuses_by_role(role)
