from __future__ import annotations

"""Agent-to-agent message envelopes.

Request:  {type: query|tool_call|status, id, timestamp, sender: {id, ...}, content}
Response: {type: response|tool_result|status_response|error, id, timestamp,
           inResponseTo, sender, content}
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

RequestType = Literal["query", "tool_call", "status"]
ResponseType = Literal["response", "tool_result", "status_response", "error"]


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def generate_id() -> str:
    return f"msg-{uuid.uuid4().hex}"


class Sender(BaseModel):
    """Envelope sender. Only `id` is required; extra fields (name, ...) are kept."""

    model_config = ConfigDict(extra="allow")

    id: str = Field(..., min_length=1, description="Sender agent id.")


class RequestEnvelope(BaseModel):
    type: RequestType = Field(..., description="query, tool_call or status.")
    id: str = Field(..., min_length=1)
    timestamp: str = Field(..., min_length=1)
    sender: Sender
    content: dict[str, Any]

    @model_validator(mode="after")
    def _check_content(self) -> "RequestEnvelope":
        errors: list[str] = []
        if self.type == "query" and not self.content.get("query"):
            errors.append("Query content is required for query messages")
        if self.type == "tool_call":
            if not self.content.get("tool"):
                errors.append("Tool name is required for tool_call messages")
            if "input" not in self.content:
                errors.append("Tool input is required for tool_call messages")
        if errors:
            raise ValueError("; ".join(errors))
        return self


class ResponseEnvelope(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: ResponseType
    id: str = Field(default_factory=generate_id)
    timestamp: str = Field(default_factory=_now_iso)
    in_response_to: str | None = Field(None, alias="inResponseTo")
    sender: dict[str, Any]
    content: dict[str, Any]


def format_validation_error(exc: ValidationError) -> str:
    """All problems in one string, e.g. "sender.id: String should have at least 1 character"."""
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc") or ())
        parts.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return ", ".join(parts)


def parse_request(message: Any) -> RequestEnvelope:
    """Validate a raw request envelope. Raises pydantic.ValidationError."""
    return RequestEnvelope.model_validate(message)


def _request(mtype: RequestType, sender: dict[str, Any], content: dict[str, Any]) -> dict[str, Any]:
    envelope = RequestEnvelope(type=mtype, id=generate_id(), timestamp=_now_iso(), sender=Sender(**sender), content=content)
    return envelope.model_dump()


def create_query_message(query: str, sender: dict[str, Any], *, conversation_id: str | None = None) -> dict[str, Any]:
    content: dict[str, Any] = {"query": query}
    if conversation_id:
        content["conversationId"] = conversation_id
    return _request("query", sender, content)


def create_tool_call_message(tool: str, tool_input: Any, sender: dict[str, Any]) -> dict[str, Any]:
    return _request("tool_call", sender, {"tool": tool, "input": tool_input})


def create_status_message(sender: dict[str, Any]) -> dict[str, Any]:
    return _request("status", sender, {})


def create_response(
    mtype: ResponseType,
    *,
    in_response_to: str | None,
    sender: dict[str, Any],
    content: dict[str, Any],
) -> dict[str, Any]:
    envelope = ResponseEnvelope(type=mtype, in_response_to=in_response_to, sender=sender, content=content)
    return envelope.model_dump(by_alias=True)
