from __future__ import annotations

"""Shared utilities for directory tools.

Why this module exists:
- Keep domain tool modules small and focused
- One explicit context object instead of module-level tables
- Consistent not-found / error result shapes and local-time helpers
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from owner_agent.directory.store import DirectoryStore

logger = logging.getLogger(__name__)

ErrorCode = Literal["INVALID_PARAMETER", "TOOL_NOT_FOUND"]
Urgency = Literal["low", "medium", "high"]
URGENCY_LEVELS: tuple[str, ...] = ("low", "medium", "high")


@dataclass(frozen=True)
class Notification:
    person: str
    method: str
    contact: str
    message: str
    urgency: str
    timestamp: str


def log_notification(n: Notification) -> None:
    """Default notifier: delivery is external, we only record the send."""
    logger.info(
        "[notify] sent to %s via %s (%s) urgency=%s: %s",
        n.person,
        n.method,
        n.contact,
        n.urgency,
        n.message,
    )


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ToolContext:
    """Everything a tool needs at call time, built once at startup."""

    store: DirectoryStore
    clock: Callable[[], datetime] = utc_now
    notifier: Callable[[Notification], None] = field(default=log_notification)

    def now(self) -> datetime:
        now = self.clock()
        return now if now.tzinfo else now.replace(tzinfo=timezone.utc)


def error(message: str, *, code: ErrorCode) -> dict[str, Any]:
    return {"error": True, "message": message, "code": code}


def not_found(message: str) -> dict[str, Any]:
    return {"found": False, "message": message}


def zone(tz_name: str) -> ZoneInfo:
    try:
        return ZoneInfo(tz_name or "UTC")
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("[context] unknown timezone %r; using UTC", tz_name)
        return ZoneInfo("UTC")


def local_now(now: datetime, tz_name: str) -> datetime:
    return now.astimezone(zone(tz_name))


def weekday_name(dt: datetime) -> str:
    """Lower-case English weekday, e.g. "monday" (locale independent)."""
    return ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")[dt.weekday()]


def hhmm(dt: datetime) -> str:
    return dt.strftime("%H:%M")


def iso_week(dt: datetime) -> int:
    return dt.isocalendar()[1]


def normalize_urgency(value: Any) -> str | None:
    u = str(value or "medium").strip().lower()
    return u if u in URGENCY_LEVELS else None


def other_matches(names: list[str]) -> dict[str, Any]:
    """Extra payload listing the candidates that were not picked."""
    return {"other_matches": names[1:]} if len(names) > 1 else {}
