from __future__ import annotations

"""CLI entrypoint to run the owner agent.

Usage:
  python -m owner_agent.main --once "Who owns DB001 and how do I reach them?"
  python -m owner_agent.main --list-tools
  python -m owner_agent.main --message request.json     # handle one envelope ("-" reads stdin)
  python -m owner_agent.main --show-graph

Configuration comes from the environment / `.env` (see `owner_agent/config.py`).
"""

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path
from typing import Any

# Allow running directly: `python owner_agent/main.py ...`
if __package__ is None or __package__ == "":  # pragma: no cover
    _ROOT = Path(__file__).resolve().parents[1]
    if str(_ROOT) not in sys.path:
        sys.path.insert(0, str(_ROOT))

from owner_agent.a2a.adapter import handle_message
from owner_agent.agent.service import OwnerAgent
from owner_agent.config import Settings


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def _print_json(obj: Any) -> None:
    print(json.dumps(obj, indent=2, ensure_ascii=False, default=str))


def _print_graph(agent: OwnerAgent) -> None:
    g = agent.app.get_graph()

    print("\nCURRENT LANGGRAPH (from app.get_graph())\n")
    print("Nodes:")
    for node_id in sorted(g.nodes.keys()):
        print(f"- {node_id}")

    print("\nEdges:")
    for e in g.edges:
        flag = " (conditional)" if getattr(e, "conditional", False) else ""
        print(f"- {e.source} -> {e.target}{flag}")


def _dump_thinking(out: dict[str, Any]) -> None:
    steps = out.get("thinking") or []
    if not steps:
        print("\n[debug] No reasoning steps.\n")
        return
    print("\n[debug] Reasoning steps:")
    for i, s in enumerate(steps, 1):
        print(f"- #{i}")
        for key in ("thought", "action", "action_input", "observation", "final_answer"):
            value = s.get(key)
            if value is not None:
                print(f"  {key}: {value}")
    print()


def _read_message(path: str) -> Any:
    if path == "-":
        return json.load(sys.stdin)
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def main() -> int:
    settings = Settings.from_env()

    ap = argparse.ArgumentParser(description="Run the owner agent (LangGraph ReAct loop).")
    ap.add_argument("--data-dir", default=settings.data_dir, help="Directory with resources/schedules/contacts JSON")
    ap.add_argument("--max-iterations", type=int, default=settings.max_iterations, help="ReAct iteration ceiling")
    ap.add_argument("--dump-thinking", action="store_true", help="Print the reasoning steps after each run")
    ap.add_argument("--show-graph", action="store_true", help="Print the current graph structure")
    ap.add_argument("--list-tools", action="store_true", help="Print the tool schemas and exit")
    ap.add_argument("--info", action="store_true", help="Print agent metadata and exit")
    ap.add_argument("--message", default=None, help="Handle one request envelope from a JSON file ('-' for stdin)")
    ap.add_argument("--once", default=None, help="Run a single query and exit")
    args = ap.parse_args()

    configure_logging(settings.log_level)
    settings = dataclasses.replace(settings, data_dir=args.data_dir, max_iterations=args.max_iterations)
    agent = OwnerAgent.from_settings(settings)

    if args.list_tools:
        _print_json({"tools": agent.get_tools()})
        return 0
    if args.info:
        _print_json(agent.get_info())
        return 0
    if args.show_graph:
        _print_graph(agent)
        return 0
    if args.message:
        _print_json(handle_message(agent, _read_message(args.message)))
        return 0

    if args.once:
        out = agent.process_query(args.once)
        print(out["response"])
        if args.dump_thinking:
            _dump_thinking(out)
        return 0

    print(f"Data: {args.data_dir}")
    print("Enter a question (empty line to quit).")
    conversation_id: str | None = None
    while True:
        try:
            q = input("\n> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            return 0
        if not q:
            return 0
        out = agent.process_query(q, conversation_id)
        conversation_id = out["conversation_id"]
        print(out["response"])
        if args.dump_thinking:
            _dump_thinking(out)


if __name__ == "__main__":
    raise SystemExit(main())
