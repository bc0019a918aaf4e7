from __future__ import annotations

"""Parser for the ReAct text protocol.

Grammar (one section per marker, markers at the start of a line):

    output   := preamble? section*
    section  := MARKER ":" text
    MARKER   := "Thought" | "Action" | "Action Input" | "Final Answer" | "Observation"

A section's text runs until the next marker line; a Final Answer runs to the
end of the output. Text before the first marker is used as the thought when
there is no explicit Thought section. Anything from a model-written
"Observation:" onwards is dropped (observations only ever come from tool
execution). Action Input is decoded as JSON when possible, otherwise kept as
the raw string.
"""

import json
import re
from dataclasses import dataclass
from typing import Any

THOUGHT = "Thought"
ACTION = "Action"
ACTION_INPUT = "Action Input"
FINAL_ANSWER = "Final Answer"
OBSERVATION = "Observation"

# "Action Input" must be tried before "Action".
_MARKER_RE = re.compile(r"^\s*(Thought|Action Input|Action|Final Answer|Observation)\s*:\s?(.*)$", re.IGNORECASE)
_CANONICAL = {m.lower(): m for m in (THOUGHT, ACTION, ACTION_INPUT, FINAL_ANSWER, OBSERVATION)}
_FENCE_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


@dataclass(frozen=True)
class ParsedOutput:
    raw: str
    thought: str | None = None
    action: str | None = None
    action_input: Any = None
    final_answer: str | None = None

    @property
    def has_action(self) -> bool:
        return bool(self.action)

    @property
    def has_final_answer(self) -> bool:
        return self.final_answer is not None


def split_sections(text: str) -> list[tuple[str, str]]:
    """Split text into (marker, body) pairs; the preamble gets marker "".

    A Final Answer section is terminal: every later line belongs to it, even
    one that looks like a marker.
    """
    sections: list[tuple[str, list[str]]] = [("", [])]
    for line in (text or "").splitlines():
        m = _MARKER_RE.match(line)
        if m:
            marker = _CANONICAL[m.group(1).lower()]
            if marker == OBSERVATION:
                break
            if sections[-1][0] == FINAL_ANSWER:
                sections[-1][1].append(line)
                continue
            sections.append((marker, [m.group(2)]))
        else:
            sections[-1][1].append(line)
    return [(marker, "\n".join(lines).strip()) for marker, lines in sections if marker or "\n".join(lines).strip()]


def parse_action_input(text: str) -> Any:
    s = (text or "").strip()
    if not s:
        return None
    fenced = _FENCE_RE.match(s)
    if fenced:
        s = fenced.group(1).strip()
    try:
        return json.loads(s)
    except ValueError:
        return s


def parse_react_output(text: str) -> ParsedOutput:
    """Parse one model output. The first occurrence of each section wins."""
    found: dict[str, str] = {}
    preamble = ""
    for marker, body in split_sections(text):
        if not marker:
            preamble = body
            continue
        found.setdefault(marker, body)
    if not found.get(THOUGHT) and preamble:
        found[THOUGHT] = preamble

    action = found.get(ACTION)
    # Tool names are single tokens; ignore trailing prose like "Action: foo (to check)".
    action = action.split()[0].strip("`'\"") if action else None

    return ParsedOutput(
        raw=text or "",
        thought=found.get(THOUGHT) or None,
        action=action or None,
        action_input=parse_action_input(found[ACTION_INPUT]) if ACTION_INPUT in found else None,
        final_answer=found.get(FINAL_ANSWER),
    )
