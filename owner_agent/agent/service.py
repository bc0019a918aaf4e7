from __future__ import annotations

"""Owner agent facade: conversations + ReAct loop + tool registry.

Everything is wired from one explicit `ToolContext` built at startup; there is
no module-level state.
"""

import logging
from datetime import datetime
from typing import Any, Callable

from owner_agent.agent.conversations import ConversationStore
from owner_agent.agent.llm import get_executor_llm
from owner_agent.agent.react_loop_graph import build_react_graph, run_react_loop
from owner_agent.agent.tools import ToolRegistry, default_tool_registry
from owner_agent.config import Settings
from owner_agent.context._common import Notification, ToolContext, log_notification, utc_now
from owner_agent.directory.store import load_directory

logger = logging.getLogger(__name__)

CAPABILITIES = ["react", "tools", "memory"]


class OwnerAgent:
    def __init__(
        self,
        *,
        ctx: ToolContext,
        settings: Settings | None = None,
        registry: ToolRegistry | None = None,
        llm: Any | None = None,
        conversations: ConversationStore | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.ctx = ctx
        self.registry = registry or default_tool_registry(ctx)
        self.conversations = conversations or ConversationStore()
        self._llm = llm
        self._app: Any | None = None

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        *,
        llm: Any | None = None,
        clock: Callable[[], datetime] = utc_now,
        notifier: Callable[[Notification], None] = log_notification,
    ) -> "OwnerAgent":
        """Load the directory from settings.data_dir and build the agent."""
        settings = settings or Settings.from_env()
        store = load_directory(settings.data_dir)
        ctx = ToolContext(store=store, clock=clock, notifier=notifier)
        return cls(ctx=ctx, settings=settings, llm=llm)

    @property
    def app(self) -> Any:
        # The model client is only needed once a query is processed.
        if self._app is None:
            llm = self._llm or get_executor_llm(self.settings)
            self._app = build_react_graph(
                registry=self.registry,
                llm=llm,
                max_steps=self.settings.max_iterations,
                history_limit=self.settings.history_limit,
            )
        return self._app

    def process_query(self, query: str, conversation_id: str | None = None) -> dict[str, Any]:
        """Answer one query within a conversation; returns conversation_id, response, thinking."""
        conv = self.conversations.get_or_create(conversation_id)
        history = self.conversations.history(conv.id)
        self.conversations.append(conv.id, "user", query)

        logger.info("[agent:process_query] conversation=%s query=%r history=%d", conv.id, query, len(history))
        result = run_react_loop(self.app, query, history=history, max_steps=self.settings.max_iterations)

        self.conversations.append(conv.id, "agent", result["response"])
        logger.info(
            "[agent:process_query] conversation=%s steps=%d tools_used=%s",
            conv.id,
            len(result["thinking"]),
            result["tools_used"],
        )
        return {"conversation_id": conv.id, "response": result["response"], "thinking": result["thinking"]}

    def get_tools(self) -> list[dict[str, Any]]:
        return self.registry.list_tools()

    def execute_tool(self, name: str, tool_input: Any) -> dict[str, Any]:
        return self.registry.execute(name, tool_input)

    def get_info(self) -> dict[str, Any]:
        return {
            "name": self.settings.agent_name,
            "description": self.settings.agent_description,
            "version": self.settings.agent_version,
            "capabilities": list(CAPABILITIES),
            "tools": self.registry.names(),
        }
