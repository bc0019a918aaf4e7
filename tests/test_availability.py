from __future__ import annotations

from datetime import datetime, timezone

from owner_agent.context._common import ToolContext
from owner_agent.context.api import check_on_duty_status
from owner_agent.directory.store import DirectoryStore

_WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday"]


def _schedule(name: str = "Jane Smith", **overrides) -> dict:
    rec = {
        "name": name,
        "email": "jane.smith@example.com",
        "timezone": "America/New_York",
        "team": "Infrastructure",
        "workHours": {d: {"start": "09:00", "end": "17:00"} for d in _WEEKDAYS},
        "vacations": [],
        "sickLeave": None,
        "contact": {"slack": "@janesmith"},
    }
    rec.update(overrides)
    return rec


def _ctx(now: datetime, *schedules: dict) -> ToolContext:
    store = DirectoryStore.from_records(schedules=list(schedules) or [_schedule()])
    return ToolContext(store=store, clock=lambda: now)


# 2023-08-07 is a Monday; New York is UTC-4 in August.
MONDAY_1430_NY = datetime(2023, 8, 7, 18, 30, tzinfo=timezone.utc)
MONDAY_1800_NY = datetime(2023, 8, 7, 22, 0, tzinfo=timezone.utc)


def test_unknown_person_is_not_found() -> None:
    out = check_on_duty_status(person_name="Nobody", ctx=_ctx(MONDAY_1430_NY))
    assert out["found"] is False
    assert "Nobody" in out["message"]


def test_inside_work_hours_is_available() -> None:
    out = check_on_duty_status(person_name="jane", ctx=_ctx(MONDAY_1430_NY))
    assert out["found"] is True
    assert out["on_duty"] is True
    assert out["status"] == "available"
    assert out["details"]["timezone"] == "America/New_York"
    assert out["details"]["work_hours"] == {"start": "09:00", "end": "17:00"}
    assert out["details"]["current_local_time"] == "14:30"


def test_outside_work_hours_is_off() -> None:
    out = check_on_duty_status(person_name="Jane Smith", ctx=_ctx(MONDAY_1800_NY))
    assert out["on_duty"] is False
    assert out["status"] == "off"
    assert out["details"]["current_local_time"] == "18:00"


def test_unscheduled_day_is_off() -> None:
    saturday = datetime(2023, 8, 12, 16, 0, tzinfo=timezone.utc)
    out = check_on_duty_status(person_name="Jane", ctx=_ctx(saturday))
    assert out["status"] == "off"
    assert out["on_duty"] is False
    assert "Saturday" in out["details"]["note"]


def test_vacation_wins_over_work_hours() -> None:
    sched = _schedule(vacations=[{"startDate": "2023-08-01", "endDate": "2023-08-15", "note": "Summer"}])
    now = datetime(2023, 8, 10, 15, 0, tzinfo=timezone.utc)
    out = check_on_duty_status(person_name="Jane", ctx=_ctx(now, sched))
    assert out["on_duty"] is False
    assert out["status"] == "vacation"
    assert out["details"] == {"return_date": "2023-08-15", "note": "Summer"}


def test_vacation_end_date_is_inclusive() -> None:
    sched = _schedule(vacations=[{"startDate": "2023-08-01", "endDate": "2023-08-15"}])
    # 16:00 local on the 15th.
    now = datetime(2023, 8, 15, 20, 0, tzinfo=timezone.utc)
    out = check_on_duty_status(person_name="Jane", ctx=_ctx(now, sched))
    assert out["status"] == "vacation"
    assert out["details"]["note"] == "On vacation"


def test_absences_use_the_persons_local_date() -> None:
    # 02:00 UTC on Tuesday is still Monday 22:00 in New York: vacation has not started.
    sched = _schedule(vacations=[{"startDate": "2023-08-08", "endDate": "2023-08-20"}])
    now = datetime(2023, 8, 8, 2, 0, tzinfo=timezone.utc)
    out = check_on_duty_status(person_name="Jane", ctx=_ctx(now, sched))
    assert out["status"] == "off"
    assert out["details"]["current_local_time"] == "22:00"


def test_open_ended_sick_leave() -> None:
    sched = _schedule(sickLeave={"startDate": "2023-08-01", "note": "Flu"})
    out = check_on_duty_status(person_name="Jane", ctx=_ctx(MONDAY_1430_NY, sched))
    assert out["status"] == "sick"
    assert out["on_duty"] is False
    assert out["details"] == {"return_date": "unknown", "note": "Flu"}


def test_finished_sick_leave_is_ignored() -> None:
    sched = _schedule(sickLeave={"startDate": "2023-08-01", "endDate": "2023-08-05"})
    out = check_on_duty_status(person_name="Jane", ctx=_ctx(MONDAY_1430_NY, sched))
    assert out["status"] == "available"


def test_ambiguous_name_picks_first_and_reports_others() -> None:
    ctx = _ctx(MONDAY_1430_NY, _schedule("John Doe"), _schedule("Johnny Walker"))
    out = check_on_duty_status(person_name="john", ctx=ctx)
    assert out["person"] == "John Doe"
    assert out["other_matches"] == ["Johnny Walker"]

    single = check_on_duty_status(person_name="walker", ctx=ctx)
    assert single["person"] == "Johnny Walker"
    assert "other_matches" not in single
