from __future__ import annotations

"""On-call rotation domain tools.

Tools:
- `get_on_call_rotation`

The primary rotates weekly: ISO week number mod team size, indexing into the
team members in load order. If the primary is off duty, the first on-duty
member in list order is returned as backup.
"""

import logging
from typing import Any

from owner_agent.context._common import ToolContext, iso_week, not_found
from owner_agent.context.availability import evaluate_duty

logger = logging.getLogger(__name__)


def get_on_call_rotation(*, team_name: str, ctx: ToolContext) -> dict[str, Any]:
    """Get the current on-call rotation for a team, with a backup if the primary is unavailable."""

    members = ctx.store.team_members(team_name)
    if not members:
        return not_found(f"No team members found for team: {team_name}")

    now = ctx.now()
    week = iso_week(now)
    primary = members[week % len(members)]
    primary_status = evaluate_duty(primary, now)
    logger.debug(
        "[rotation:get_on_call_rotation] team=%r week=%d members=%d primary=%r on_duty=%s",
        team_name,
        week,
        len(members),
        primary.person_name,
        primary_status["on_duty"],
    )

    base = {"found": True, "team": primary.team, "week": week, "team_size": len(members)}

    if not primary_status["on_duty"]:
        for member in members:
            if member is primary:
                continue
            if evaluate_duty(member, now)["on_duty"]:
                return {
                    **base,
                    "on_call": {
                        "primary": {
                            "name": primary.person_name,
                            "available": False,
                            "status": primary_status["status"],
                            "note": primary_status["details"].get("note"),
                        },
                        "backup": {
                            "name": member.person_name,
                            "available": True,
                            "contact": dict(member.contact),
                        },
                    },
                }

    return {
        **base,
        "on_call": {
            "primary": {
                "name": primary.person_name,
                "available": primary_status["on_duty"],
                "status": primary_status["status"],
                "contact": dict(primary.contact),
            }
        },
    }
