from __future__ import annotations

"""Directory tool implementations (public API).

This module is the stable entrypoint used by the tool registry.

Implementation is split into focused modules under `owner_agent/context/`:
- `ownership.py`
- `availability.py`
- `rotation.py`
- `contact.py`

Design:
- Every tool takes keyword arguments plus an explicit `ctx: ToolContext`
- Return plain dicts (JSON-serializable)
- Not-found is `{"found": False, ...}`, bad input is `{"error": True, ...}`
"""

from owner_agent.context._common import Notification, ToolContext
from owner_agent.context.availability import check_on_duty_status
from owner_agent.context.contact import get_contact_preferences, notify_person, recommend_contact_method
from owner_agent.context.ownership import find_resource_owner, find_team_resources, list_owned_resources
from owner_agent.context.rotation import get_on_call_rotation

__all__ = [
    "Notification",
    "ToolContext",
    "find_resource_owner",
    "list_owned_resources",
    "find_team_resources",
    "check_on_duty_status",
    "get_on_call_rotation",
    "get_contact_preferences",
    "recommend_contact_method",
    "notify_person",
]
