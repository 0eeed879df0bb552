"""Read and write the AGENTS.md convention.

Text before the first recognised ``##`` heading becomes the instructions.
``## Rule: <name>``, ``## Skill: <name>``, ``## Agent: <name>`` and
``## MCP: <name>`` start sections whose settings live in HTML comments such as
``<!-- activation: glob **/*.ts -->``.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

from conforme.config import (
    ActivationKind,
    ActivationMode,
    HttpTransport,
    NormalizedAgent,
    NormalizedConfig,
    NormalizedMcpServer,
    NormalizedRule,
    NormalizedSkill,
    StdioTransport,
)


class AgentsMdError(ValueError):
    """Raised when AGENTS.md content cannot be understood."""


class _SectionKind(enum.Enum):
    RULE = "## Rule: "
    SKILL = "## Skill: "
    AGENT = "## Agent: "
    MCP = "## MCP: "


@dataclass
class _Section:
    kind: _SectionKind
    name: str
    lines: List[str] = field(default_factory=list)


def _lines(content: str) -> Iterator[str]:
    """Yield lines split on newlines, without a trailing empty line or CR."""
    parts = content.split("\n")
    if parts and parts[-1] == "":
        parts.pop()
    for part in parts:
        yield part[:-1] if part.endswith("\r") else part


def _directive(trimmed: str, key: str) -> Optional[str]:
    """Return the inside of ``<!-- key: ... -->`` or None if the line is not one."""
    prefix = f"<!-- {key}:"
    if trimmed.startswith(prefix) and trimmed.endswith("-->"):
        inner = trimmed[len(prefix):]
        if len(inner) >= 3:
            return inner[:-3]
    return None


def _split_list(text: str) -> List[str]:
    return [item.strip() for item in text.split(",") if item.strip()]


def _section_start(line: str) -> Optional[_Section]:
    for kind in _SectionKind:
        if line.startswith(kind.value):
            return _Section(kind, line[len(kind.value):].strip())
    return None


def parse_agents_md(content: str) -> NormalizedConfig:
    """Parse AGENTS.md text into a NormalizedConfig."""
    config = NormalizedConfig()
    instructions: List[str] = []
    current: Optional[_Section] = None

    for line in _lines(content):
        started = _section_start(line)
        if started is not None:
            _flush(config, current)
            current = started
        elif current is not None:
            current.lines.append(line)
        else:
            instructions.append(line + "\n")

    _flush(config, current)
    config.instructions = "".join(instructions).strip()
    return config


def _flush(config: NormalizedConfig, section: Optional[_Section]) -> None:
    if section is None:
        return
    if section.kind is _SectionKind.RULE:
        config.rules.append(_build_rule(section.name, section.lines))
    elif section.kind is _SectionKind.SKILL:
        config.skills.append(_build_skill(section.name, section.lines))
    elif section.kind is _SectionKind.AGENT:
        config.agents.append(_build_agent(section.name, section.lines))
    else:
        server = _build_mcp(section.name, section.lines)
        if server is not None:
            config.mcp_servers.append(server)


def _build_rule(name: str, lines: List[str]) -> NormalizedRule:
    activation = ActivationMode.always()
    description: Optional[str] = None
    content_lines = []

    for line in lines:
        trimmed = line.strip()
        if (inner := _directive(trimmed, "activation")) is not None:
            activation = parse_activation(inner.strip())
        elif (inner := _directive(trimmed, "description")) is not None:
            description = inner.strip()
        else:
            content_lines.append(line)

    if description is not None and activation.kind is ActivationKind.AGENT_DECISION:
        activation = ActivationMode.agent_decision(description)

    if not name:
        raise AgentsMdError("empty rule name")

    return NormalizedRule(
        name=name,
        content="\n".join(content_lines).strip(),
        activation=activation,
    )


def _build_skill(name: str, lines: List[str]) -> NormalizedSkill:
    description = ""
    allowed_tools: List[str] = []
    content_lines = []

    for line in lines:
        trimmed = line.strip()
        if (inner := _directive(trimmed, "description")) is not None:
            description = inner.strip()
        elif (inner := _directive(trimmed, "tools")) is not None:
            allowed_tools = _split_list(inner)
        else:
            content_lines.append(line)

    return NormalizedSkill(
        name=name,
        description=description,
        content="\n".join(content_lines).strip(),
        allowed_tools=allowed_tools,
    )


def _build_agent(name: str, lines: List[str]) -> NormalizedAgent:
    description = ""
    model: Optional[str] = None
    tools: List[str] = []
    content_lines = []

    for line in lines:
        trimmed = line.strip()
        if (inner := _directive(trimmed, "description")) is not None:
            description = inner.strip()
        elif (inner := _directive(trimmed, "model")) is not None:
            model = inner.strip()
        elif (inner := _directive(trimmed, "tools")) is not None:
            tools = _split_list(inner)
        else:
            content_lines.append(line)

    return NormalizedAgent(
        name=name,
        description=description,
        content="\n".join(content_lines).strip(),
        model=model,
        tools=tools,
    )


def _build_mcp(name: str, lines: List[str]) -> Optional[NormalizedMcpServer]:
    command: Optional[str] = None
    args: List[str] = []
    url: Optional[str] = None
    env: Dict[str, str] = {}

    for line in lines:
        trimmed = line.strip()
        if (inner := _directive(trimmed, "command")) is not None:
            command = inner.strip()
        elif (inner := _directive(trimmed, "args")) is not None:
            args = _split_list(inner)
        elif (inner := _directive(trimmed, "url")) is not None:
            url = inner.strip()
        elif (inner := _directive(trimmed, "env")) is not None:
            for pair in inner.split(","):
                key, sep, value = pair.strip().partition("=")
                if sep:
                    env[key.strip()] = value.strip()

    if url is not None:
        transport = HttpTransport(url=url)
    elif command is not None:
        transport = StdioTransport(command=command, args=args)
    else:
        return None

    return NormalizedMcpServer(name=name, transport=transport, env=dict(sorted(env.items())))


def parse_activation(text: str) -> ActivationMode:
    """Parse an activation value such as ``always`` or ``glob **/*.ts,**/*.tsx``."""
    if text == "always":
        return ActivationMode.always()
    if text == "manual":
        return ActivationMode.manual()
    if text == "agent-decision":
        return ActivationMode.agent_decision("")
    if text.startswith("glob "):
        patterns = [pattern.strip() for pattern in text[len("glob "):].split(",")]
        return ActivationMode.glob_match(patterns)
    raise AgentsMdError(f"unknown activation mode: {text}")


def template_agents_md() -> str:
    """Return the starter AGENTS.md written for a new project."""
    return (
        "# Project Instructions\n"
        "\n"
        "<!-- Add your project-wide instructions here. -->\n"
        "<!-- conforme will sync this file to all detected AI coding tools. -->\n"
        "\n"
        "## Rule: General Conventions\n"
        "<!-- activation: always -->\n"
        "\n"
        "<!-- Add conventions that should always apply. -->\n"
    )


def _activation_lines(activation: ActivationMode) -> List[str]:
    kind = activation.kind
    if kind is ActivationKind.GLOB_MATCH:
        return [f"<!-- activation: glob {','.join(activation.patterns)} -->\n"]
    if kind is ActivationKind.AGENT_DECISION:
        out = ["<!-- activation: agent-decision -->\n"]
        if activation.description:
            out.append(f"<!-- description: {activation.description} -->\n")
        return out
    if kind is ActivationKind.MANUAL:
        return ["<!-- activation: manual -->\n"]
    return ["<!-- activation: always -->\n"]


def export_as_agents_md(config: NormalizedConfig) -> str:
    """Render a NormalizedConfig in AGENTS.md form."""
    out: List[str] = []

    if config.instructions:
        out.append("# Project Instructions\n\n")
        out.append(config.instructions)
        out.append("\n")

    for rule in config.rules:
        out.append(f"\n## Rule: {rule.name}\n")
        out.extend(_activation_lines(rule.activation))
        out.append("\n")
        out.append(rule.content)
        out.append("\n")

    for skill in config.skills:
        out.append(f"\n## Skill: {skill.name}\n")
        if skill.description:
            out.append(f"<!-- description: {skill.description} -->\n")
        if skill.allowed_tools:
            out.append(f"<!-- tools: {', '.join(skill.allowed_tools)} -->\n")
        out.append("\n")
        out.append(skill.content)
        out.append("\n")

    for agent in config.agents:
        out.append(f"\n## Agent: {agent.name}\n")
        if agent.description:
            out.append(f"<!-- description: {agent.description} -->\n")
        if agent.model is not None:
            out.append(f"<!-- model: {agent.model} -->\n")
        if agent.tools:
            out.append(f"<!-- tools: {', '.join(agent.tools)} -->\n")
        out.append("\n")
        out.append(agent.content)
        out.append("\n")

    for server in config.mcp_servers:
        out.append(f"\n## MCP: {server.name}\n")
        transport = server.transport
        if isinstance(transport, StdioTransport):
            out.append(f"<!-- command: {transport.command} -->\n")
            if transport.args:
                out.append(f"<!-- args: {', '.join(transport.args)} -->\n")
        else:
            out.append(f"<!-- url: {transport.url} -->\n")
        if server.env:
            pairs = ", ".join(f"{key}={value}" for key, value in sorted(server.env.items()))
            out.append(f"<!-- env: {pairs} -->\n")
        out.append("\n")

    return "".join(out)