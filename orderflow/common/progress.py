"""Progress-bar completion over the canonical lifecycle order."""

from orderflow.common.statuses import OrderStatus

# `failed` is an alternate terminal branch, not a progression point.
PROGRESS_ORDER: tuple[str, ...] = (
    OrderStatus.RECEIVED.value,
    OrderStatus.CONFIRMED.value,
    OrderStatus.PREPARING.value,
    OrderStatus.READY.value,
    OrderStatus.ASSIGNED_TO_RIDER.value,
    OrderStatus.IN_TRANSIT.value,
    OrderStatus.ARRIVED.value,
)

_PROGRESS_INDEX = {status: index for index, status in enumerate(PROGRESS_ORDER)}


def is_status_completed(target_status: str, current_status: str) -> bool:
    """True when `current_status` has reached or passed `target_status`.

    Anything outside the progress order (including `failed`) completes nothing.
    """

    current_index = _PROGRESS_INDEX.get(current_status)
    target_index = _PROGRESS_INDEX.get(target_status)
    if current_index is None or target_index is None:
        return False
    return current_index >= target_index
