from __future__ import annotations

import os
import tempfile
from datetime import datetime, timezone
from typing import Any

import pytest
from langchain_core.messages import AIMessage, HumanMessage

from owner_agent.agent.service import OwnerAgent
from owner_agent.config import Settings
from owner_agent.context._common import Notification

FIXED_NOW = datetime(2023, 8, 7, 15, 0, tzinfo=timezone.utc)


class EchoLLM:
    """Answers with the number of earlier user turns it was shown."""

    def __init__(self):
        self.prompts: list[list[Any]] = []

    def invoke(self, messages: list[Any]):
        self.prompts.append(list(messages))
        earlier = [m for m in messages[1:-1] if isinstance(m, HumanMessage)]
        return AIMessage(content=f"Thought: count\nFinal Answer: seen {len(earlier)}")


@pytest.fixture
def data_dir():
    with tempfile.TemporaryDirectory() as td:
        yield td


def _agent(data_dir: str, llm: Any, **kw: Any) -> OwnerAgent:
    settings = Settings(data_dir=data_dir, max_iterations=4, history_limit=10)
    return OwnerAgent.from_settings(settings, llm=llm, clock=lambda: FIXED_NOW, **kw)


def test_from_settings_seeds_data_dir(data_dir: str) -> None:
    agent = _agent(data_dir, EchoLLM())
    assert os.path.exists(os.path.join(data_dir, "resources.json"))
    assert agent.ctx.store.find_resource("database", "DB001") is not None


def test_process_query_creates_conversation_and_keeps_history(data_dir: str) -> None:
    llm = EchoLLM()
    agent = _agent(data_dir, llm)

    first = agent.process_query("Who owns DB001?")
    assert first["conversation_id"]
    assert first["response"] == "seen 0"
    assert first["thinking"][0]["final_answer"] == "seen 0"

    second = agent.process_query("How do I reach them?", first["conversation_id"])
    assert second["conversation_id"] == first["conversation_id"]
    assert second["response"] == "seen 1"
    # The earlier agent answer is replayed too.
    assert any(isinstance(m, AIMessage) and m.content == "seen 0" for m in llm.prompts[1])

    history = agent.conversations.history(first["conversation_id"])
    assert [m["role"] for m in history] == ["user", "agent", "user", "agent"]
    assert history[-1]["content"] == "seen 1"


def test_unknown_conversation_id_starts_new_conversation(data_dir: str) -> None:
    agent = _agent(data_dir, EchoLLM())
    out = agent.process_query("hello", "conv-42")
    assert out["conversation_id"] == "conv-42"
    assert out["response"] == "seen 0"
    assert len(agent.conversations) == 1


def test_info_and_tools(data_dir: str) -> None:
    agent = _agent(data_dir, EchoLLM())
    info = agent.get_info()
    assert info["name"] == "owner-ai-agent"
    assert info["version"] == "1.0.0"
    assert info["capabilities"] == ["react", "tools", "memory"]
    assert len(info["tools"]) == len(agent.get_tools()) == 8


def test_execute_tool_uses_injected_clock_and_notifier(data_dir: str) -> None:
    sent: list[Notification] = []
    agent = _agent(data_dir, EchoLLM(), notifier=sent.append)

    # 15:00 UTC is 11:00 in New York (Monday).
    status = agent.execute_tool("check_on_duty_status", {"person_name": "Jane Smith"})
    assert status["on_duty"] is True
    assert status["details"]["current_local_time"] == "11:00"

    out = agent.execute_tool("notify_person", {"person_name": "Jane Smith", "message": "DB001 latency"})
    assert out["success"] is True
    assert out["method"] == "slack"
    assert [n.message for n in sent] == ["DB001 latency"]


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MAX_ITERATIONS", "3")
    monkeypatch.setenv("LLM_PROVIDER", "Ollama")
    monkeypatch.setenv("AGENT_NAME", "owner-test")
    monkeypatch.delenv("HISTORY_LIMIT", raising=False)
    s = Settings.from_env(dotenv=False)
    assert s.max_iterations == 3
    assert s.llm_provider == "ollama"
    assert s.agent_name == "owner-test"
    assert s.history_limit == 10
