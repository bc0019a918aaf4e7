from __future__ import annotations

"""Ownership domain tools.

Tools:
- `find_resource_owner`
- `list_owned_resources`
- `find_team_resources`
"""

import logging
from typing import Any

from owner_agent.context._common import ToolContext, error, not_found

logger = logging.getLogger(__name__)


def find_resource_owner(*, resource_type: str, resource_name: str, ctx: ToolContext) -> dict[str, Any]:
    """Find the owner of a specific resource."""

    if not resource_name:
        return error("resource_name is required", code="INVALID_PARAMETER")

    logger.debug("[ownership:find_resource_owner] type=%r name=%r", resource_type, resource_name)
    r = ctx.store.find_resource(resource_type, resource_name)
    if r is None:
        return not_found(f"No ownership information found for {resource_type}: {resource_name}")

    return {
        "found": True,
        "resource": {"type": r.resource_type, "name": r.resource_name, "description": r.description},
        "owner": r.owner.to_dict(),
        "team": r.team,
        "backup_owners": [p.to_dict() for p in r.backup_owners],
    }


def list_owned_resources(*, owner_name: str, ctx: ToolContext) -> dict[str, Any]:
    """List resources owned by a specific person."""

    owned = ctx.store.resources_owned_by(owner_name)
    if not owned:
        return not_found(f"No resources found for owner: {owner_name}")

    return {
        "found": True,
        "resources": [
            {"type": r.resource_type, "name": r.resource_name, "description": r.description, "team": r.team}
            for r in owned
        ],
    }


def find_team_resources(*, team_name: str, ctx: ToolContext) -> dict[str, Any]:
    """Find resources owned by a specific team."""

    owned = ctx.store.resources_for_team(team_name)
    if not owned:
        return not_found(f"No resources found for team: {team_name}")

    return {
        "found": True,
        "resources": [
            {
                "type": r.resource_type,
                "name": r.resource_name,
                "description": r.description,
                "owner": {"name": r.owner.name, "role": r.owner.role},
            }
            for r in owned
        ],
    }
