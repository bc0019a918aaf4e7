from __future__ import annotations

"""LLM factory for the ReAct agent.

The loop speaks the plain-text ReAct protocol, so any chat model with
`invoke(messages) -> message.content` works; tool binding is not required.

Providers (see `owner_agent/config.py`):
- LLM_PROVIDER=openai (default): langchain-openai ChatOpenAI
- LLM_PROVIDER=ollama: langchain-ollama ChatOllama
"""

from typing import Any

from owner_agent.config import Settings


def get_executor_llm(settings: Settings | None = None) -> Any:
    """Executor LLM used by the ReAct loop."""
    settings = settings or Settings.from_env()
    provider = settings.llm_provider

    if provider == "openai":
        try:
            from langchain_openai import ChatOpenAI
        except Exception as e:  # pragma: no cover
            raise RuntimeError("Missing dependency: langchain-openai. Install the package dependencies.") from e

        if not settings.openai_api_key:
            raise RuntimeError("OPENAI_API_KEY environment variable is required for LLM_PROVIDER=openai")

        return ChatOpenAI(
            api_key=settings.openai_api_key,
            base_url=settings.openai_base_url,
            model=settings.openai_model,
            temperature=settings.temperature,
            max_tokens=settings.max_response_tokens,
            timeout=settings.llm_timeout,
        )

    if provider == "ollama":
        try:
            from langchain_ollama import ChatOllama
        except Exception as e:  # pragma: no cover
            raise RuntimeError("Missing dependency: langchain-ollama. Install the package dependencies.") from e

        return ChatOllama(
            base_url=settings.ollama_base_url,
            model=settings.ollama_model,
            reasoning=False,
            temperature=settings.temperature,
            num_predict=settings.max_response_tokens,
            client_kwargs={"timeout": settings.llm_timeout},
        )

    raise ValueError(f"Unknown LLM_PROVIDER: {provider}")


def message_text(msg: Any) -> str:
    """Text content of a chat model reply (str content or list of content blocks)."""
    content = getattr(msg, "content", msg)
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                parts.append(str(block.get("text") or ""))
        return "".join(parts)
    return "" if content is None else str(content)
