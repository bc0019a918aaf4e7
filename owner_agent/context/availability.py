from __future__ import annotations

"""Availability domain tools.

Tools:
- `check_on_duty_status`

Evaluation order (first match wins): vacation, sick leave, work hours.
All checks use the person's own timezone, so the date used for absences and
the weekday/time used for work hours always agree.
"""

import logging
from datetime import datetime
from typing import Any

from owner_agent.context._common import ToolContext, hhmm, local_now, not_found, other_matches, weekday_name
from owner_agent.directory.models import WorkSchedule

logger = logging.getLogger(__name__)


def evaluate_duty(schedule: WorkSchedule, now: datetime) -> dict[str, Any]:
    """Duty status of one schedule at `now` (aware datetime)."""

    local = local_now(now, schedule.timezone)
    today = local.date()

    for vacation in schedule.vacations:
        if vacation.covers(today):
            return {
                "found": True,
                "on_duty": False,
                "status": "vacation",
                "details": {
                    "return_date": vacation.end_date.isoformat() if vacation.end_date else "unknown",
                    "note": vacation.note or "On vacation",
                },
            }

    sick = schedule.sick_leave
    if sick is not None and sick.covers(today):
        return {
            "found": True,
            "on_duty": False,
            "status": "sick",
            "details": {
                "return_date": sick.end_date.isoformat() if sick.end_date else "unknown",
                "note": sick.note or "On sick leave",
            },
        }

    day = weekday_name(local)
    window = schedule.work_hours.get(day)
    if window is None:
        return {
            "found": True,
            "on_duty": False,
            "status": "off",
            "details": {
                "note": f"Not scheduled to work on {day.capitalize()}",
                "timezone": schedule.timezone,
                "current_local_time": hhmm(local),
            },
        }

    current = hhmm(local)
    working = window.contains(current)
    return {
        "found": True,
        "on_duty": working,
        "status": "available" if working else "off",
        "details": {
            "timezone": schedule.timezone,
            "work_hours": window.to_dict(),
            "current_local_time": current,
        },
    }


def check_on_duty_status(*, person_name: str, ctx: ToolContext) -> dict[str, Any]:
    """Check if a person is currently on duty (available, vacation, sick or off)."""

    logger.debug("[availability:check_on_duty_status] person=%r", person_name)
    matches = ctx.store.find_schedules(person_name)
    if not matches:
        return not_found(f"No schedule information found for {person_name}")

    schedule = matches[0]
    out = evaluate_duty(schedule, ctx.now())
    return {"person": schedule.person_name, **out, **other_matches([m.person_name for m in matches])}
