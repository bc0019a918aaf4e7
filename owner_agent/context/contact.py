from __future__ import annotations

"""Contact domain tools.

Tools:
- `get_contact_preferences`
- `recommend_contact_method`
- `notify_person`
"""

import logging
from typing import Any

from owner_agent.context._common import (
    Notification,
    ToolContext,
    error,
    hhmm,
    local_now,
    normalize_urgency,
    not_found,
    other_matches,
    weekday_name,
)
from owner_agent.directory.models import ContactPreference, ContactProfile

logger = logging.getLogger(__name__)


def get_contact_preferences(*, person_name: str, ctx: ToolContext) -> dict[str, Any]:
    """Get a person's contact preferences (time independent)."""

    matches = ctx.store.find_contact_profiles(person_name)
    if not matches:
        return not_found(f"No contact preferences found for {person_name}")

    profile = matches[0]
    return {
        "found": True,
        "person": profile.person_name,
        "preferences": [{"method": p.method, "contact": p.contact, "priority": p.priority} for p in profile.preferences],
        **other_matches([m.person_name for m in matches]),
    }


def _pick(pref: ContactPreference, reason: str) -> dict[str, Any]:
    return {"found": True, "method": pref.method, "contact": pref.contact, "reason": reason}


def recommend_for_profile(profile: ContactProfile, urgency: str, ctx: ToolContext) -> dict[str, Any]:
    """Decision order: emergency (high), do-not-disturb, open preferences, fallback."""

    if urgency == "high" and profile.emergency_contact is not None:
        return {
            "found": True,
            "method": profile.emergency_contact.method,
            "contact": profile.emergency_contact.contact,
            "reason": "High urgency requires immediate attention",
        }

    local = local_now(ctx.now(), profile.timezone)
    day = weekday_name(local)
    current = hhmm(local)

    dnd = profile.do_not_disturb
    if dnd is not None and urgency != "high" and dnd.is_active(day, current):
        email = profile.preference_for("email")
        if email is not None:
            return _pick(email, "Person is in do not disturb hours, email is recommended")

    open_now = sorted((p for p in profile.preferences if p.is_open(day, current)), key=lambda p: p.priority)
    if open_now:
        best = open_now[0]
        return _pick(best, f"{best.method} is the preferred contact method at this time")

    email = profile.preference_for("email")
    if email is not None:
        return _pick(email, "No contact methods available at this time, email is recommended as fallback")

    if profile.preferences:
        return _pick(profile.preferences[0], "No contact methods available at this time, using default preference")

    return not_found(f"No contact methods configured for {profile.person_name}")


def recommend_contact_method(*, person_name: str, urgency: str = "medium", ctx: ToolContext) -> dict[str, Any]:
    """Recommend the best way to contact a person based on time, urgency and availability."""

    u = normalize_urgency(urgency)
    if u is None:
        return error(f"Invalid urgency: {urgency} (expected low, medium or high)", code="INVALID_PARAMETER")

    logger.debug("[contact:recommend_contact_method] person=%r urgency=%s", person_name, u)
    matches = ctx.store.find_contact_profiles(person_name)
    if not matches:
        return not_found(f"No contact preferences found for {person_name}")

    profile = matches[0]
    out = recommend_for_profile(profile, u, ctx)
    if out.get("found"):
        out = {"person": profile.person_name, **out}
    return {**out, **other_matches([m.person_name for m in matches])}


def notify_person(*, person_name: str, message: str, urgency: str = "medium", ctx: ToolContext) -> dict[str, Any]:
    """Send a notification to a person using their recommended contact method."""

    recommendation = recommend_contact_method(person_name=person_name, urgency=urgency, ctx=ctx)
    if recommendation.get("error"):
        return recommendation
    if not recommendation.get("found"):
        return {"success": False, "message": recommendation.get("message")}

    timestamp = ctx.now().isoformat()
    ctx.notifier(
        Notification(
            person=recommendation.get("person", person_name),
            method=recommendation["method"],
            contact=recommendation["contact"],
            message=message,
            urgency=normalize_urgency(urgency) or "medium",
            timestamp=timestamp,
        )
    )

    return {
        "success": True,
        "method": recommendation["method"],
        "contact": recommendation["contact"],
        "timestamp": timestamp,
    }
