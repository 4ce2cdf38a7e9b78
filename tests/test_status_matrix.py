"""Tests for the status matrix CLI helpers."""

from scripts.status_matrix import build_matrix, render_table


def test_matrix_rows():
    matrix = build_matrix(["customer", "admin"])
    assert matrix["customer"]["preparing"] == {"visible": False, "next": ["ready"]}
    assert matrix["customer"]["received"] == {"visible": True, "next": ["confirmed"]}
    assert matrix["admin"]["received"]["next"] == ["confirmed", "failed"]


def test_unknown_role_has_nothing_visible():
    matrix = build_matrix(["guest"])
    assert not any(row["visible"] or row["next"] for row in matrix["guest"].values())


def test_render_table():
    text = render_table(build_matrix(["rider"]))
    assert text.startswith("[rider]")
    assert "assigned_to_rider" in text
    assert "Assigned to Rider" in text
