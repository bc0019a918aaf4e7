from __future__ import annotations

"""Tool registry: a uniform invocation surface over the directory tools.

Each tool exposes `describe()` (the declared input/output schema, rendered
verbatim into the system prompt) and `execute(tool_input, ctx)`. Execution only
checks structure (object input, required keys present); business rules live in
`owner_agent/context/`.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Protocol

from owner_agent.context import api as context_api
from owner_agent.context._common import ToolContext, error

logger = logging.getLogger(__name__)

ToolFn = Callable[..., dict[str, Any]]


class Tool(Protocol):
    name: str

    def describe(self) -> dict[str, Any]: ...

    def execute(self, tool_input: Any, ctx: ToolContext) -> dict[str, Any]: ...


@dataclass(frozen=True)
class SchemaField:
    type: str
    description: str
    required: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "description": self.description, "required": self.required}


@dataclass(frozen=True)
class FunctionTool:
    """A tool backed by a plain keyword-only function `fn(**params, ctx=...)`."""

    name: str
    description: str
    fn: ToolFn
    parameters: dict[str, SchemaField] = field(default_factory=dict)
    returns: dict[str, SchemaField] = field(default_factory=dict)

    def describe(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "parameters": {k: v.to_dict() for k, v in self.parameters.items()},
            "returns": {k: {"type": v.type, "description": v.description} for k, v in self.returns.items()},
        }

    def execute(self, tool_input: Any, ctx: ToolContext) -> dict[str, Any]:
        if tool_input is None:
            tool_input = {}
        if not isinstance(tool_input, dict):
            return error(
                f"Tool '{self.name}' expects a JSON object input, got: {str(tool_input)[:200]}",
                code="INVALID_PARAMETER",
            )
        missing = [k for k, p in self.parameters.items() if p.required and tool_input.get(k) in (None, "")]
        if missing:
            return error(f"Missing required parameter(s) for {self.name}: {', '.join(missing)}", code="INVALID_PARAMETER")

        # Unknown keys are dropped rather than rejected.
        kwargs = {k: v for k, v in tool_input.items() if k in self.parameters}
        return self.fn(**kwargs, ctx=ctx)


@dataclass(frozen=True)
class ToolRegistry:
    tools: dict[str, Tool]
    ctx: ToolContext

    def names(self) -> list[str]:
        return list(self.tools)

    def get(self, name: str) -> Tool | None:
        return self.tools.get(name)

    def list_tools(self) -> list[dict[str, Any]]:
        return [t.describe() for t in self.tools.values()]

    def execute(self, name: str, tool_input: Any) -> dict[str, Any]:
        """Run a tool. Unknown names return a TOOL_NOT_FOUND result; tool exceptions propagate."""
        tool = self.tools.get(name)
        if tool is None:
            return error(f"Tool '{name}' not found", code="TOOL_NOT_FOUND")
        logger.info("[tools] execute name=%r input=%r", name, tool_input)
        return tool.execute(tool_input, self.ctx)


_PERSON = SchemaField("string", "Name of the person (case-insensitive, partial names allowed)")
_URGENCY = SchemaField("string", "Urgency level: low, medium or high (default medium)", required=False)
_FOUND = SchemaField("boolean", "Whether a matching record was found")


def default_tools() -> list[Tool]:
    return [
        FunctionTool(
            name="find_resource_owner",
            description="Find the owner of a specific resource",
            fn=context_api.find_resource_owner,
            parameters={
                "resource_type": SchemaField("string", "Type of resource (e.g., database, server, application)"),
                "resource_name": SchemaField("string", "Name of the resource"),
            },
            returns={
                "found": _FOUND,
                "owner": SchemaField("object", "Resource owner information"),
                "team": SchemaField("string", "Team responsible for the resource"),
                "backup_owners": SchemaField("array", "Backup owners"),
            },
        ),
        FunctionTool(
            name="list_owned_resources",
            description="List resources owned by a specific person",
            fn=context_api.list_owned_resources,
            parameters={"owner_name": SchemaField("string", "Name of the owner")},
            returns={"found": _FOUND, "resources": SchemaField("array", "Resources owned by the person")},
        ),
        FunctionTool(
            name="find_team_resources",
            description="Find resources owned by a specific team",
            fn=context_api.find_team_resources,
            parameters={"team_name": SchemaField("string", "Name of the team")},
            returns={"found": _FOUND, "resources": SchemaField("array", "Resources owned by the team")},
        ),
        FunctionTool(
            name="check_on_duty_status",
            description="Check if a person is currently on duty",
            fn=context_api.check_on_duty_status,
            parameters={"person_name": _PERSON},
            returns={
                "found": _FOUND,
                "on_duty": SchemaField("boolean", "Whether the person is currently on duty"),
                "status": SchemaField("string", "Current status (available, vacation, sick, off)"),
                "details": SchemaField("object", "Return date, note, timezone, work hours, current local time"),
            },
        ),
        FunctionTool(
            name="get_on_call_rotation",
            description="Get the current on-call rotation for a team",
            fn=context_api.get_on_call_rotation,
            parameters={"team_name": SchemaField("string", "Name of the team")},
            returns={
                "found": _FOUND,
                "on_call": SchemaField("object", "Primary on-call person and, if the primary is unavailable, a backup"),
            },
        ),
        FunctionTool(
            name="get_contact_preferences",
            description="Get a person's contact preferences",
            fn=context_api.get_contact_preferences,
            parameters={"person_name": _PERSON},
            returns={"found": _FOUND, "preferences": SchemaField("array", "Contact methods with their priority")},
        ),
        FunctionTool(
            name="recommend_contact_method",
            description="Recommend the best way to contact a person based on time and availability",
            fn=context_api.recommend_contact_method,
            parameters={"person_name": _PERSON, "urgency": _URGENCY},
            returns={
                "found": _FOUND,
                "method": SchemaField("string", "Recommended contact method"),
                "contact": SchemaField("string", "Contact information"),
                "reason": SchemaField("string", "Reason for the recommendation"),
            },
        ),
        FunctionTool(
            name="notify_person",
            description="Send a notification to a person using their preferred contact method",
            fn=context_api.notify_person,
            parameters={
                "person_name": _PERSON,
                "message": SchemaField("string", "Message to send"),
                "urgency": _URGENCY,
            },
            returns={
                "success": SchemaField("boolean", "Whether the notification was sent"),
                "method": SchemaField("string", "Contact method used"),
                "contact": SchemaField("string", "Contact address used"),
                "timestamp": SchemaField("string", "Time the notification was sent"),
            },
        ),
    ]


def default_tool_registry(ctx: ToolContext) -> ToolRegistry:
    return ToolRegistry(tools={t.name: t for t in default_tools()}, ctx=ctx)
