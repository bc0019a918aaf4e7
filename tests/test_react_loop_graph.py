from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any

from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from owner_agent.agent.react_loop_graph import FALLBACK_ANSWER, build_react_graph, run_react_loop
from owner_agent.agent.tools import FunctionTool, ToolRegistry, default_tool_registry
from owner_agent.context._common import ToolContext
from owner_agent.directory.seed import make_contacts, make_resources, make_schedules
from owner_agent.directory.store import DirectoryStore


def _ctx() -> ToolContext:
    store = DirectoryStore.from_records(
        resources=make_resources(),
        schedules=make_schedules(),
        contacts=make_contacts(),
    )
    return ToolContext(store=store, clock=lambda: datetime(2023, 8, 7, 15, 0, tzinfo=timezone.utc))


def _observations(messages: list[Any]) -> list[str]:
    return [m.content for m in messages if isinstance(m, HumanMessage) and m.content.startswith("Observation:")]


class ScriptedLLM:
    """Replays canned outputs in order; records every prompt it was given."""

    def __init__(self, *outputs: str):
        self.outputs = list(outputs)
        self.calls: list[list[Any]] = []

    def invoke(self, messages: list[Any]):
        self.calls.append(list(messages))
        return AIMessage(content=self.outputs[min(len(self.calls), len(self.outputs)) - 1])


class DummyOwnerLLM:
    """Looks up the owner, then answers from the observation."""

    def __init__(self):
        self.calls = 0

    def invoke(self, messages: list[Any]):
        self.calls += 1
        obs = _observations(messages)
        if not obs:
            return AIMessage(
                content=(
                    "Thought: I need the owner of DB001.\n"
                    "Action: find_resource_owner\n"
                    'Action Input: {"resource_type": "database", "resource_name": "DB001"}'
                )
            )
        data = json.loads(obs[-1][len("Observation: "):])
        return AIMessage(content=f"Thought: Found it.\nFinal Answer: DB001 is owned by {data['owner']['name']}.")


class DummyInfiniteLLM:
    """Always asks for another tool call."""

    def __init__(self, action: str = "check_on_duty_status"):
        self.action = action
        self.calls = 0

    def invoke(self, messages: list[Any]):
        self.calls += 1
        return AIMessage(content=f'Thought: keep going\nAction: {self.action}\nAction Input: {{"person_name": "Jane"}}')


class FailingLLM:
    def invoke(self, messages: list[Any]):
        raise TimeoutError("model timed out")


def test_react_loop_executes_tool_and_stops() -> None:
    llm = DummyOwnerLLM()
    app = build_react_graph(registry=default_tool_registry(_ctx()), llm=llm, max_steps=10)
    out = run_react_loop(app, "Who owns DB001?", max_steps=10)

    assert out["response"] == "DB001 is owned by Jane Smith."
    assert out["tools_used"] == ["find_resource_owner"]
    assert llm.calls == 2

    first, last = out["thinking"]
    assert first["action"] == "find_resource_owner"
    assert first["action_input"] == {"resource_type": "database", "resource_name": "DB001"}
    assert json.loads(first["observation"])["owner"]["name"] == "Jane Smith"
    assert last["final_answer"] == "DB001 is owned by Jane Smith."
    assert last["action"] is None


def test_react_loop_stops_at_max_steps() -> None:
    llm = DummyInfiniteLLM()
    app = build_react_graph(registry=default_tool_registry(_ctx()), llm=llm, max_steps=3)
    out = run_react_loop(app, "Keep going forever", max_steps=3)

    assert out["response"] == FALLBACK_ANSWER
    assert llm.calls == 3
    assert len(out["thinking"]) == 3
    assert out["tools_used"] == ["check_on_duty_status"] * 3


def test_unknown_tool_forever_still_terminates() -> None:
    llm = DummyInfiniteLLM(action="no_such_tool")
    app = build_react_graph(registry=default_tool_registry(_ctx()), llm=llm, max_steps=2)
    out = run_react_loop(app, "loop", max_steps=2)

    assert out["response"] == FALLBACK_ANSWER
    assert llm.calls == 2
    obs = json.loads(out["thinking"][0]["observation"])
    assert obs["code"] == "TOOL_NOT_FOUND"


def test_output_without_markers_is_the_answer() -> None:
    llm = ScriptedLLM("Hello! Ask me about resource owners.")
    app = build_react_graph(registry=default_tool_registry(_ctx()), llm=llm)
    out = run_react_loop(app, "hi")

    assert out["response"] == "Hello! Ask me about resource owners."
    assert out["tools_used"] == []
    assert len(llm.calls) == 1


def test_empty_model_output_yields_fallback() -> None:
    app = build_react_graph(registry=default_tool_registry(_ctx()), llm=ScriptedLLM(""))
    assert run_react_loop(app, "hi")["response"] == FALLBACK_ANSWER


def test_tool_exception_becomes_error_observation() -> None:
    def boom(*, ctx: ToolContext) -> dict:
        raise RuntimeError("directory offline")

    registry = ToolRegistry(tools={"boom": FunctionTool("boom", "Always fails", boom)}, ctx=_ctx())
    llm = ScriptedLLM(
        "Thought: try it\nAction: boom\nAction Input: {}",
        "Thought: it failed\nFinal Answer: The directory is unavailable.",
    )
    app = build_react_graph(registry=registry, llm=llm)
    out = run_react_loop(app, "try boom")

    assert out["thinking"][0]["observation"] == "Error: directory offline"
    assert out["response"] == "The directory is unavailable."
    assert _observations(llm.calls[1]) == ["Observation: Error: directory offline"]


def test_model_failure_yields_fallback() -> None:
    app = build_react_graph(registry=default_tool_registry(_ctx()), llm=FailingLLM())
    out = run_react_loop(app, "Who owns DB001?")
    assert out["response"] == FALLBACK_ANSWER
    assert out["thinking"] == []


def test_prompt_contains_tool_catalog_and_history() -> None:
    llm = ScriptedLLM("Final Answer: ok")
    app = build_react_graph(registry=default_tool_registry(_ctx()), llm=llm, history_limit=2)
    history = [
        {"role": "user", "content": "old question"},
        {"role": "user", "content": "Who owns DB001?"},
        {"role": "agent", "content": "Jane Smith."},
    ]
    run_react_loop(app, "How do I reach her?", history=history)

    msgs = llm.calls[0]
    assert isinstance(msgs[0], SystemMessage)
    for name in ("find_resource_owner", "get_on_call_rotation", "notify_person"):
        assert f"Tool: {name}" in msgs[0].content
    # Only the last two history messages are replayed, in order, before the query.
    assert [type(m) for m in msgs[1:]] == [HumanMessage, AIMessage, HumanMessage]
    assert [m.content for m in msgs[1:]] == ["Who owns DB001?", "Jane Smith.", "How do I reach her?"]


def test_graph_has_two_nodes() -> None:
    app = build_react_graph(registry=default_tool_registry(_ctx()), llm=ScriptedLLM("Final Answer: ok"))
    nodes = set(app.get_graph().nodes) - {"__start__", "__end__"}
    assert nodes == {"plan", "execute"}
