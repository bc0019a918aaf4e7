from __future__ import annotations

"""Application configuration (env, settings, constants).

Env vars (a `.env` file in the working directory is loaded first):
- DATA_DIR (default: ./data) directory with resources/schedules/contacts JSON
- MAX_ITERATIONS (default: 10) ReAct iteration ceiling
- HISTORY_LIMIT (default: 10) conversation messages replayed into the prompt
- LLM_PROVIDER: "openai" (default) or "ollama"
- OPENAI_API_KEY, OPENAI_BASE_URL, OPENAI_MODEL (default: gpt-4o-mini)
- OLLAMA_BASE_URL, OLLAMA_MODEL (default: qwen3:8b)
- TEMPERATURE (default: 0.2), MAX_RESPONSE_TOKENS (default: 1000), LLM_TIMEOUT seconds (default: 60)
- LOG_LEVEL (default: INFO)
- AGENT_NAME, AGENT_DESCRIPTION, AGENT_VERSION
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv


def _int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    return int(raw) if raw else default


def _float(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    return float(raw) if raw else default


def _str(name: str, default: str) -> str:
    return (os.getenv(name) or "").strip() or default


@dataclass(frozen=True)
class Settings:
    data_dir: str = "./data"
    max_iterations: int = 10
    history_limit: int = 10

    llm_provider: str = "openai"
    openai_api_key: str = ""
    openai_base_url: str | None = None
    openai_model: str = "gpt-4o-mini"
    ollama_base_url: str | None = None
    ollama_model: str = "qwen3:8b"
    temperature: float = 0.2
    max_response_tokens: int = 1000
    llm_timeout: float = 60.0

    log_level: str = "INFO"

    agent_name: str = "owner-ai-agent"
    agent_description: str = "AI Agent for finding resource owners and contact information"
    agent_version: str = "1.0.0"

    @classmethod
    def from_env(cls, *, dotenv: bool = True) -> "Settings":
        if dotenv:
            load_dotenv()
        return cls(
            data_dir=_str("DATA_DIR", cls.data_dir),
            max_iterations=_int("MAX_ITERATIONS", cls.max_iterations),
            history_limit=_int("HISTORY_LIMIT", cls.history_limit),
            llm_provider=_str("LLM_PROVIDER", cls.llm_provider).lower(),
            openai_api_key=_str("OPENAI_API_KEY", ""),
            openai_base_url=os.getenv("OPENAI_BASE_URL") or None,
            openai_model=_str("OPENAI_MODEL", cls.openai_model),
            ollama_base_url=os.getenv("OLLAMA_BASE_URL") or None,
            ollama_model=_str("OLLAMA_MODEL", cls.ollama_model),
            temperature=_float("TEMPERATURE", cls.temperature),
            max_response_tokens=_int("MAX_RESPONSE_TOKENS", cls.max_response_tokens),
            llm_timeout=_float("LLM_TIMEOUT", cls.llm_timeout),
            log_level=_str("LOG_LEVEL", cls.log_level).upper(),
            agent_name=_str("AGENT_NAME", cls.agent_name),
            agent_description=_str("AGENT_DESCRIPTION", cls.agent_description),
            agent_version=_str("AGENT_VERSION", cls.agent_version),
        )
