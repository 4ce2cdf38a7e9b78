"""Unit tests for the status registry and its passthrough fallbacks."""

import pytest

from orderflow.common.statuses import (
    DEFAULT_STATUS_COLOR,
    OrderStatus,
    StatusDetail,
    get_all_order_statuses,
    get_customer_timeline_label,
    get_status_details,
    is_known_status,
    parse_status,
)


def test_all_statuses_in_registry_order():
    assert get_all_order_statuses() == [
        "received",
        "confirmed",
        "failed",
        "preparing",
        "ready",
        "assigned_to_rider",
        "in_transit",
        "arrived",
    ]
    assert get_all_order_statuses() == get_all_order_statuses()


def test_all_statuses_returns_a_copy():
    statuses = get_all_order_statuses()
    statuses.clear()
    assert len(get_all_order_statuses()) == 8


@pytest.mark.parametrize("status", [member.value for member in OrderStatus])
def test_known_status_details(status):
    detail = get_status_details(status)
    assert detail.label
    assert detail.color != DEFAULT_STATUS_COLOR
    assert get_status_details(status) == detail


def test_operator_labels():
    assert get_status_details("assigned_to_rider").label == "Assigned to Rider"
    assert get_status_details("arrived").label == "Delivered"
    assert get_status_details(OrderStatus.READY).label == "Ready for Pickup"


@pytest.mark.parametrize("status", ["", "cancelled", "in transit", "RECEIVED"])
def test_unknown_status_passes_through(status):
    assert get_status_details(status) == StatusDetail(label=status, color=DEFAULT_STATUS_COLOR)


def test_customer_labels():
    assert get_customer_timeline_label("in_transit") == "On the Way"
    assert get_customer_timeline_label("received") == "Order Placed"
    assert get_customer_timeline_label("ready") == "Ready for Delivery"


def test_customer_label_falls_back_to_raw_status():
    assert get_customer_timeline_label("preparing") == "preparing"
    assert get_customer_timeline_label("no-such-status") == "no-such-status"


def test_is_known_status():
    assert is_known_status("failed")
    assert not is_known_status("Failed")


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("ready", OrderStatus.READY),
        ("  Confirmed ", OrderStatus.CONFIRMED),
        ("assigned to a rider", OrderStatus.ASSIGNED_TO_RIDER),
        ("In Transit", OrderStatus.IN_TRANSIT),
        (OrderStatus.ARRIVED, OrderStatus.ARRIVED),
        ("lost", None),
        (None, None),
        (3, None),
    ],
)
def test_parse_status(raw, expected):
    assert parse_status(raw) is expected
