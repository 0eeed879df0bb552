"""Normalized configuration model shared by every tool adapter."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Union


class ActivationKind(enum.Enum):
    """When a rule applies."""

    ALWAYS = "always"
    GLOB_MATCH = "glob"
    AGENT_DECISION = "agent-decision"
    MANUAL = "manual"


@dataclass(frozen=True)
class ActivationMode:
    """Activation mode of a rule, with the data its kind carries."""

    kind: ActivationKind
    patterns: Tuple[str, ...] = ()
    description: str = ""

    @staticmethod
    def always() -> "ActivationMode":
        """Active in every session."""
        return ActivationMode(ActivationKind.ALWAYS)

    @staticmethod
    def glob_match(patterns) -> "ActivationMode":
        """Active when files matching any of the glob patterns are in context."""
        return ActivationMode(ActivationKind.GLOB_MATCH, patterns=tuple(patterns))

    @staticmethod
    def agent_decision(description: str = "") -> "ActivationMode":
        """The agent decides from the description."""
        return ActivationMode(ActivationKind.AGENT_DECISION, description=description)

    @staticmethod
    def manual() -> "ActivationMode":
        """Active only when explicitly mentioned."""
        return ActivationMode(ActivationKind.MANUAL)


@dataclass
class NormalizedRule:
    """A rule extracted from AGENTS.md or a tool-specific config."""

    name: str
    content: str
    activation: ActivationMode = field(default_factory=ActivationMode.always)


@dataclass
class NormalizedSkill:
    """A reusable prompt template."""

    name: str
    description: str = ""
    content: str = ""
    allowed_tools: List[str] = field(default_factory=list)


@dataclass
class StdioTransport:
    """MCP server started as a local command."""

    command: str
    args: List[str] = field(default_factory=list)


@dataclass
class HttpTransport:
    """MCP server reached over HTTP."""

    url: str
    headers: Dict[str, str] = field(default_factory=dict)


McpTransport = Union[StdioTransport, HttpTransport]


@dataclass
class NormalizedMcpServer:
    """An MCP server definition."""

    name: str
    transport: McpTransport
    env: Dict[str, str] = field(default_factory=dict)


@dataclass
class NormalizedAgent:
    """A custom agent definition."""

    name: str
    description: str = ""
    content: str = ""
    model: Optional[str] = None
    tools: List[str] = field(default_factory=list)


@dataclass
class NormalizedConfig:
    """Instructions plus rules, skills, MCP servers and agents."""

    instructions: str = ""
    rules: List[NormalizedRule] = field(default_factory=list)
    skills: List[NormalizedSkill] = field(default_factory=list)
    mcp_servers: List[NormalizedMcpServer] = field(default_factory=list)
    agents: List[NormalizedAgent] = field(default_factory=list)


def sanitize_name(name: str) -> str:
    """Turn a rule name into a filesystem-safe identifier.

    "TypeScript Conventions" becomes "typescript-conventions".
    """
    mapped = "".join(
        (ch.lower() if ch.isascii() else ch) if ch.isalnum() else "-" for ch in name
    )
    return "-".join(part for part in mapped.split("-") if part)