"""Print the role/status matrix: visibility and legal next steps per role.

Useful when reviewing changes to the visibility or transition tables.
"""

import argparse
import json

from orderflow.common.roles import ALL_ROLES, get_statuses_by_role
from orderflow.common.state_machine import get_next_statuses
from orderflow.common.statuses import get_all_order_statuses, get_status_details


def build_matrix(roles: list[str]) -> dict:
    """Map each role to {status: {"visible": bool, "next": [...]}}."""

    matrix = {}
    for role in roles:
        visible = get_statuses_by_role(role)
        matrix[role] = {
            status: {"visible": status in visible, "next": get_next_statuses(status, role)}
            for status in get_all_order_statuses()
        }
    return matrix


def render_table(matrix: dict) -> str:
    """Plain-text table, one block per role."""

    lines = []
    for role, rows in matrix.items():
        lines.append(f"[{role}]")
        for status, row in rows.items():
            mark = "x" if row["visible"] else " "
            label = get_status_details(status).label
            nxt = ", ".join(row["next"]) or "-"
            lines.append(f"  [{mark}] {status:<18} {label:<18} -> {nxt}")
        lines.append("")
    return "\n".join(lines)


def main() -> None:
    """Parse CLI args and print the matrix."""

    parser = argparse.ArgumentParser(description="Show status visibility and transitions per role.")
    parser.add_argument("--role", action="append", dest="roles", default=None, help="Repeatable; defaults to all roles")
    parser.add_argument("--json", action="store_true", help="Emit JSON instead of a table")
    args = parser.parse_args()

    matrix = build_matrix(args.roles or list(ALL_ROLES))
    if args.json:
        print(json.dumps(matrix, indent=2))
    else:
        print(render_table(matrix))


if __name__ == "__main__":
    main()
