from __future__ import annotations

"""ReAct loop agent (two-node graph).

Design:
- Exactly two nodes: `plan` -> `execute` -> `plan` (loop)
- `plan` calls the model once and parses the Thought/Action/Action Input/Final Answer text
- `execute` runs at most one tool through the registry and feeds the JSON result back
  as an "Observation:" message
- Maximum iterations enforced (default: 10); hitting it yields a fixed fallback answer
- Tool failures become "Error: ..." observations, so the loop is total over tool outcomes
"""

import json
import logging
from dataclasses import asdict, dataclass, replace
from typing import Any, TypedDict

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from langgraph.graph import END, StateGraph

from owner_agent.agent.llm import get_executor_llm, message_text
from owner_agent.agent.parser import parse_react_output
from owner_agent.agent.prompts import observation_message, react_system_prompt
from owner_agent.agent.tools import ToolRegistry

logger = logging.getLogger(__name__)

FALLBACK_ANSWER = "I'm sorry, I wasn't able to find a complete answer within the allowed number of steps."


@dataclass(frozen=True)
class ReasoningStep:
    thought: str | None = None
    action: str | None = None
    action_input: Any = None
    observation: str | None = None
    final_answer: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class ReactState(TypedDict, total=False):
    query: str
    history: list[dict[str, Any]]
    step: int
    max_steps: int
    messages: list[Any]
    thinking: list[ReasoningStep]
    tools_used: list[str]
    response: str


def history_messages(history: list[dict[str, Any]], limit: int) -> list[BaseMessage]:
    """Most recent `limit` conversation turns as chat messages (agent turns -> AIMessage)."""
    recent = history[-limit:] if limit > 0 else []
    out: list[BaseMessage] = []
    for m in recent:
        content = (m.get("content") or "").strip()
        if not content:
            continue
        if (m.get("role") or "user") in ("agent", "assistant"):
            out.append(AIMessage(content=content))
        else:
            out.append(HumanMessage(content=content))
    return out


def recursion_limit_for(max_steps: int) -> int:
    # plan + execute per iteration, plus the final plan that answers or stops.
    return 2 * max_steps + 5


def observe(registry: ToolRegistry, action: str, action_input: Any) -> str:
    """Run one tool and serialize its result; exceptions become an error string."""
    try:
        result = registry.execute(action, {} if action_input is None else action_input)
    except Exception as e:
        logger.exception("[react:execute] tool %r failed", action)
        return f"Error: {e}"
    return json.dumps(result, ensure_ascii=False, default=str)


def build_react_graph(
    *,
    registry: ToolRegistry,
    llm: Any | None = None,
    max_steps: int = 10,
    history_limit: int = 10,
):
    """Build a two-node ReAct loop graph."""

    llm = llm or get_executor_llm()
    system_prompt = react_system_prompt(registry.list_tools())

    def _plan(state: ReactState) -> ReactState:
        q = state.get("query", "")
        step = int(state.get("step") or 0)
        cap = int(state.get("max_steps") or max_steps)
        msgs = list(state.get("messages") or [])
        thinking = list(state.get("thinking") or [])

        if not msgs:
            msgs = [
                SystemMessage(content=system_prompt),
                *history_messages(list(state.get("history") or []), history_limit),
                HumanMessage(content=q),
            ]

        if step >= cap:
            # Hard stop: do NOT call the LLM again (it might keep acting).
            logger.info("[react:plan] max steps reached (max_steps=%d)", cap)
            return {"messages": msgs, "response": FALLBACK_ANSWER, "step": step, "max_steps": cap}

        try:
            ai = llm.invoke(msgs)
        except Exception:
            logger.exception("[react:plan] model call failed at step=%d", step)
            return {"messages": msgs, "response": FALLBACK_ANSWER, "step": step, "max_steps": cap}

        text = message_text(ai)
        parsed = parse_react_output(text)
        logger.info(
            "[react:plan] step=%d action=%r final=%s",
            step,
            parsed.action,
            parsed.has_final_answer,
        )
        thinking.append(
            ReasoningStep(
                thought=parsed.thought,
                action=None if parsed.has_final_answer else parsed.action,
                action_input=None if parsed.has_final_answer else parsed.action_input,
                final_answer=parsed.final_answer,
            )
        )
        msgs.append(AIMessage(content=text))

        out: ReactState = {"messages": msgs, "thinking": thinking, "step": step, "max_steps": cap}
        if parsed.has_final_answer:
            out["response"] = (parsed.final_answer or "").strip() or FALLBACK_ANSWER
        elif not parsed.has_action:
            # No recognized marker: the raw output is the answer.
            out["response"] = text.strip() or FALLBACK_ANSWER
        return out

    def _execute(state: ReactState) -> ReactState:
        thinking = list(state.get("thinking") or [])
        if not thinking or not thinking[-1].action:
            return {}

        last = thinking[-1]
        observation = observe(registry, last.action, last.action_input)
        thinking[-1] = replace(last, observation=observation)

        msgs = list(state.get("messages") or [])
        msgs.append(HumanMessage(content=observation_message(observation)))

        return {
            "messages": msgs,
            "thinking": thinking,
            "tools_used": [*(state.get("tools_used") or []), last.action],
            "step": int(state.get("step") or 0) + 1,
        }

    g = StateGraph(ReactState)
    g.add_node("plan", _plan)
    g.add_node("execute", _execute)
    g.set_entry_point("plan")

    def _route_after_plan(state: ReactState) -> str:
        if state.get("response"):
            return "end"
        return "execute"

    g.add_conditional_edges("plan", _route_after_plan, {"execute": "execute", "end": END})
    g.add_edge("execute", "plan")
    return g.compile()


def run_react_loop(
    app: Any,
    query: str,
    *,
    history: list[dict[str, Any]] | None = None,
    max_steps: int = 10,
) -> dict[str, Any]:
    """Invoke a compiled graph; returns {"response", "thinking", "tools_used"}."""
    out = app.invoke(
        {"query": query, "history": list(history or []), "max_steps": max_steps},
        config={"recursion_limit": recursion_limit_for(max_steps)},
    )
    return {
        "response": out.get("response") or FALLBACK_ANSWER,
        "thinking": [s.to_dict() for s in out.get("thinking") or []],
        "tools_used": list(out.get("tools_used") or []),
    }
