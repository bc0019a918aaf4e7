from __future__ import annotations

"""ReAct prompts for the owner agent.

The system prompt includes:
- role + formatting contract (Thought / Action / Action Input / Final Answer)
- the tool catalog, rendered from the registry's declared schemas
- short guidance + examples
"""

from typing import Any

FORMAT_CONTRACT = """When responding to user queries, follow this format:

Thought: Think about what the user is asking and how to approach the problem.
Action: The name of ONE tool from the available tools.
Action Input: The input for the tool as a JSON object.

After receiving an observation, continue with:

Thought: Analyze the observation and decide on next steps.
Action: Choose another tool if needed.
Action Input: Provide the input for the tool.

When you have the final answer:

Thought: Summarize your findings.
Final Answer: Provide a clear, concise answer to the user's question.

Never write "Observation:" yourself; observations come from the tools.
"""

GUIDANCE = """Remember:
1. Always start with a Thought.
2. Use tools to gather information before providing a final answer.
3. Be helpful, concise, and accurate.
4. Consider time zones and availability when recommending contact methods.
5. If a tool returns found=false, say so rather than making up information.
6. If the primary on-call person is unavailable, mention the backup.
"""

EXAMPLES = """Examples (ReAct style):
User: Who owns the DB001 database and how do I reach them right now?
Thought: I need the owner of DB001 first.
Action: find_resource_owner
Action Input: {"resource_type": "database", "resource_name": "DB001"}
(Observation arrives)
Thought: The owner is Jane Smith. Now the best contact method.
Action: recommend_contact_method
Action Input: {"person_name": "Jane Smith", "urgency": "medium"}
(Observation arrives)
Thought: I have the owner and the contact method.
Final Answer: DB001 is owned by Jane Smith (Infrastructure). Reach her on Slack at @janesmith.

User: Who is on call for Infrastructure?
Thought: Check the rotation.
Action: get_on_call_rotation
Action Input: {"team_name": "Infrastructure"}
"""


def render_tool(tool: dict[str, Any]) -> str:
    params = tool.get("parameters") or {}
    lines = [f"Tool: {tool['name']}", f"Description: {tool.get('description', '')}", "Parameters:"]
    if not params:
        lines.append("  (none)")
    for name, p in params.items():
        optional = "" if p.get("required", True) else " (optional)"
        lines.append(f"  - {name} ({p.get('type', 'string')}): {p.get('description', '')}{optional}")
    returns = tool.get("returns") or {}
    if returns:
        lines.append("Returns: " + ", ".join(returns))
    return "\n".join(lines)


def tool_catalog(tools: list[dict[str, Any]]) -> str:
    return "\n\n".join(render_tool(t) for t in tools)


def react_system_prompt(tools: list[dict[str, Any]]) -> str:
    """Full system prompt for the ReAct loop."""

    blocks = [
        "You are an AI assistant that helps users find the right person to contact for various "
        "resources and issues. You use the ReAct (Reasoning + Acting) approach to solve problems step by step.",
        FORMAT_CONTRACT,
        "Available Tools:\n\n" + tool_catalog(tools),
        GUIDANCE,
        EXAMPLES,
    ]
    return "\n\n".join(b.strip() for b in blocks) + "\n"


def observation_message(observation: str) -> str:
    return f"Observation: {observation}"
