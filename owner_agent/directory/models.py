from __future__ import annotations

"""Directory records (ownership, schedules, contact preferences).

Records are loaded from JSON and never mutated afterwards. `from_dict` accepts
the external camelCase keys used by the data files.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any


WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


def _str(value: Any) -> str:
    return str(value).strip() if value is not None else ""


def parse_date(value: Any) -> date | None:
    """Parse "YYYY-MM-DD" (a trailing time part is ignored)."""
    s = _str(value)
    if not s:
        return None
    return date.fromisoformat(s[:10])


@dataclass(frozen=True)
class TimeWindow:
    """A daily "HH:MM"-"HH:MM" window in local time.

    Bounds are zero-padded 24h strings, so plain string comparison orders them.
    A window with start > end wraps past midnight.
    """

    start: str
    end: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TimeWindow":
        return cls(start=_str(data.get("start")), end=_str(data.get("end")))

    def contains(self, hhmm: str) -> bool:
        if self.start <= self.end:
            return self.start <= hhmm <= self.end
        return hhmm >= self.start or hhmm <= self.end

    def to_dict(self) -> dict[str, str]:
        return {"start": self.start, "end": self.end}


@dataclass(frozen=True)
class Person:
    name: str
    email: str = ""
    role: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Person":
        return cls(name=_str(data.get("name")), email=_str(data.get("email")), role=_str(data.get("role")))

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "email": self.email, "role": self.role}


@dataclass(frozen=True)
class ResourceOwnership:
    resource_type: str
    resource_name: str
    description: str
    owner: Person
    team: str
    backup_owners: tuple[Person, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ResourceOwnership":
        return cls(
            resource_type=_str(data.get("resourceType") or data.get("type")),
            resource_name=_str(data.get("resourceName") or data.get("name")),
            description=_str(data.get("description")),
            owner=Person.from_dict(data.get("owner") or {}),
            team=_str(data.get("team")),
            backup_owners=tuple(Person.from_dict(p) for p in data.get("backupOwners") or []),
        )


@dataclass(frozen=True)
class Absence:
    """Vacation or sick leave. An open-ended absence has no end_date."""

    start_date: date
    end_date: date | None = None
    note: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Absence":
        start = parse_date(data.get("startDate"))
        if start is None:
            raise ValueError("absence is missing startDate")
        return cls(start_date=start, end_date=parse_date(data.get("endDate")), note=_str(data.get("note")))

    def covers(self, day: date) -> bool:
        if day < self.start_date:
            return False
        return self.end_date is None or day <= self.end_date


@dataclass(frozen=True)
class WorkSchedule:
    person_name: str
    email: str
    timezone: str
    team: str
    work_hours: dict[str, TimeWindow] = field(default_factory=dict)
    vacations: tuple[Absence, ...] = ()
    sick_leave: Absence | None = None
    contact: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WorkSchedule":
        hours = data.get("workHours") or {}
        sick = data.get("sickLeave")
        return cls(
            person_name=_str(data.get("personName") or data.get("name")),
            email=_str(data.get("email")),
            timezone=_str(data.get("timezone")) or "UTC",
            team=_str(data.get("team")),
            work_hours={str(day).lower(): TimeWindow.from_dict(w) for day, w in hours.items() if w},
            vacations=tuple(Absence.from_dict(v) for v in data.get("vacations") or []),
            sick_leave=Absence.from_dict(sick) if sick else None,
            contact={str(k): _str(v) for k, v in (data.get("contact") or {}).items()},
        )


@dataclass(frozen=True)
class ContactPreference:
    method: str
    contact: str
    priority: int
    hours: TimeWindow
    days_of_week: tuple[str, ...] = WEEKDAYS

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ContactPreference":
        days = data.get("daysOfWeek")
        return cls(
            method=_str(data.get("method")),
            contact=_str(data.get("contact")),
            priority=int(data.get("priority", 0)),
            hours=TimeWindow.from_dict(data.get("hours") or {"start": "00:00", "end": "23:59"}),
            days_of_week=tuple(str(d).lower() for d in days) if days is not None else WEEKDAYS,
        )

    def is_open(self, weekday: str, hhmm: str) -> bool:
        return weekday in self.days_of_week and self.hours.contains(hhmm)


@dataclass(frozen=True)
class EmergencyContact:
    method: str
    contact: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EmergencyContact":
        return cls(method=_str(data.get("method")), contact=_str(data.get("contact")))


@dataclass(frozen=True)
class DoNotDisturb:
    hours: TimeWindow
    days_of_week: tuple[str, ...] = WEEKDAYS

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DoNotDisturb":
        days = data.get("daysOfWeek")
        return cls(
            hours=TimeWindow.from_dict(data.get("hours") or {}),
            days_of_week=tuple(str(d).lower() for d in days) if days is not None else WEEKDAYS,
        )

    def is_active(self, weekday: str, hhmm: str) -> bool:
        return weekday in self.days_of_week and self.hours.contains(hhmm)


@dataclass(frozen=True)
class ContactProfile:
    person_name: str
    email: str
    timezone: str
    preferences: tuple[ContactPreference, ...] = ()
    emergency_contact: EmergencyContact | None = None
    do_not_disturb: DoNotDisturb | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ContactProfile":
        emergency = data.get("emergencyContact")
        dnd = data.get("doNotDisturb")
        return cls(
            person_name=_str(data.get("personName") or data.get("name")),
            email=_str(data.get("email")),
            timezone=_str(data.get("timezone")) or "UTC",
            preferences=tuple(ContactPreference.from_dict(p) for p in data.get("preferences") or []),
            emergency_contact=EmergencyContact.from_dict(emergency) if emergency else None,
            do_not_disturb=DoNotDisturb.from_dict(dnd) if dnd else None,
        )

    def preference_for(self, method: str) -> ContactPreference | None:
        for p in self.preferences:
            if p.method == method:
                return p
        return None
