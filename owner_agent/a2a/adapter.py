from __future__ import annotations

"""Envelope handler: validates a request envelope and dispatches it to the agent.

`handle_message` never raises; every failure becomes an `error` envelope with
one of: invalid_message, tool_not_found, tool_execution_error,
query_processing_error, status_error, internal_error.
"""

import logging
from typing import Any

from pydantic import ValidationError

from owner_agent.a2a.schema import RequestEnvelope, create_response, format_validation_error, parse_request
from owner_agent.agent.service import OwnerAgent

logger = logging.getLogger(__name__)


def _sender(agent: OwnerAgent) -> dict[str, Any]:
    name = agent.settings.agent_name
    return {"id": name, "name": name}


def error_response(agent: OwnerAgent, message: Any, code: str, error_message: str) -> dict[str, Any]:
    raw_id = message.get("id") if isinstance(message, dict) else None
    return create_response(
        "error",
        in_response_to=None if raw_id is None else str(raw_id),
        sender=_sender(agent),
        content={"error": {"code": code, "message": error_message}},
    )


def handle_message(agent: OwnerAgent, message: Any) -> dict[str, Any]:
    """Handle one incoming request envelope and return the response envelope."""

    logger.debug("[a2a] handling message type=%r", message.get("type") if isinstance(message, dict) else None)
    try:
        try:
            request = parse_request(message)
        except ValidationError as e:
            logger.info("[a2a] invalid message: %s", e.error_count())
            return error_response(agent, message, "invalid_message", format_validation_error(e))

        if request.type == "query":
            return _handle_query(agent, request)
        if request.type == "tool_call":
            return _handle_tool_call(agent, request)
        return _handle_status(agent, request)
    except Exception as e:
        logger.exception("[a2a] error handling message")
        return error_response(agent, message, "internal_error", str(e))


def _handle_query(agent: OwnerAgent, request: RequestEnvelope) -> dict[str, Any]:
    conversation_id = request.content.get("conversationId") or request.id
    try:
        out = agent.process_query(request.content["query"], conversation_id)
    except Exception as e:
        logger.exception("[a2a] error processing query")
        return error_response(agent, request.model_dump(), "query_processing_error", str(e))

    return create_response(
        "response",
        in_response_to=request.id,
        sender=_sender(agent),
        content={
            "conversationId": out["conversation_id"],
            "response": out["response"],
            "thinking": out["thinking"],
        },
    )


def _handle_tool_call(agent: OwnerAgent, request: RequestEnvelope) -> dict[str, Any]:
    tool = request.content["tool"]
    try:
        out = agent.execute_tool(tool, request.content["input"])
    except Exception as e:
        logger.exception("[a2a] error executing tool %r", tool)
        return error_response(agent, request.model_dump(), "tool_execution_error", str(e))

    if out.get("error") and out.get("code") == "TOOL_NOT_FOUND":
        return error_response(agent, request.model_dump(), "tool_not_found", out.get("message", f"Tool '{tool}' not found"))

    return create_response(
        "tool_result",
        in_response_to=request.id,
        sender=_sender(agent),
        content={"tool": tool, "result": out},
    )


def _handle_status(agent: OwnerAgent, request: RequestEnvelope) -> dict[str, Any]:
    try:
        info = agent.get_info()
    except Exception as e:
        logger.exception("[a2a] error getting agent status")
        return error_response(agent, request.model_dump(), "status_error", str(e))

    return create_response(
        "status_response",
        in_response_to=request.id,
        sender=_sender(agent),
        content={"status": "ok", "info": info},
    )
