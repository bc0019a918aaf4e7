from __future__ import annotations

"""In-memory conversation store keyed by conversation id.

Conversations are created on first use and only appended to; retention is
handled outside the agent.
"""

import logging
import threading
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Literal

logger = logging.getLogger(__name__)

Role = Literal["user", "agent"]


@dataclass(frozen=True)
class ConversationMessage:
    role: Role
    content: str
    timestamp: datetime

    def to_dict(self) -> dict[str, Any]:
        return {"role": self.role, "content": self.content, "timestamp": self.timestamp.isoformat()}


@dataclass
class Conversation:
    id: str
    messages: list[ConversationMessage] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class ConversationStore:
    def __init__(self) -> None:
        self._conversations: dict[str, Conversation] = {}
        self._lock = threading.Lock()

    def get_or_create(self, conversation_id: str | None = None) -> Conversation:
        """Return the conversation for id, creating it (with a new uuid when id is empty)."""
        cid = (conversation_id or "").strip() or str(uuid.uuid4())
        with self._lock:
            conv = self._conversations.get(cid)
            if conv is None:
                conv = Conversation(id=cid)
                self._conversations[cid] = conv
                logger.info("[conversations] created id=%s", cid)
        return conv

    def get(self, conversation_id: str) -> Conversation | None:
        with self._lock:
            return self._conversations.get(conversation_id)

    def history(self, conversation_id: str) -> list[dict[str, Any]]:
        """Messages as plain dicts (a copy, so callers cannot mutate the store)."""
        with self._lock:
            conv = self._conversations.get(conversation_id)
            return [m.to_dict() for m in conv.messages] if conv else []

    def append(self, conversation_id: str, role: Role, content: str) -> None:
        msg = ConversationMessage(role=role, content=content or "", timestamp=datetime.now(timezone.utc))
        with self._lock:
            conv = self._conversations.get(conversation_id)
            if conv is None:
                conv = Conversation(id=conversation_id)
                self._conversations[conversation_id] = conv
            conv.messages.append(msg)
        logger.debug("[conversations] append id=%s role=%s content_len=%d", conversation_id, role, len(content or ""))

    def __len__(self) -> int:
        with self._lock:
            return len(self._conversations)
