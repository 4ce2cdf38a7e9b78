"""Unit tests for role-based status visibility."""

import pytest

from orderflow.common.roles import (
    ALL_ROLES,
    can_role_see_status,
    get_statuses_by_role,
    normalize_role,
)
from orderflow.common.statuses import get_all_order_statuses


@pytest.mark.parametrize("role", ["admin", "csr", "Admin", "CSR"])
def test_operational_roles_see_everything(role):
    assert get_statuses_by_role(role) == get_all_order_statuses()


def test_customer_sees_curated_subset():
    visible = get_statuses_by_role("customer")
    assert visible == ["received", "confirmed", "ready", "in_transit", "arrived"]
    assert set(visible) < set(get_all_order_statuses())
    for hidden in ("preparing", "failed", "assigned_to_rider"):
        assert hidden not in visible


def test_rider_visibility():
    assert get_statuses_by_role("RIDER") == ["ready", "assigned_to_rider", "in_transit", "arrived"]


@pytest.mark.parametrize("role", ["", "guest", "superadmin", " admin", None])
def test_unknown_roles_see_nothing(role):
    assert get_statuses_by_role(role) == []
    assert normalize_role(role) is None


def test_can_see_matches_visible_list():
    candidates = get_all_order_statuses() + ["unknown", ""]
    for role in [*ALL_ROLES, "guest"]:
        visible = get_statuses_by_role(role)
        for status in candidates:
            assert can_role_see_status(role, status) == (status in visible)


def test_visibility_table_not_mutable_through_results():
    get_statuses_by_role("customer").append("preparing")
    assert not can_role_see_status("customer", "preparing")
