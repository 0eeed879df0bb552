"""Roo Code / Cline adapter: plain Markdown rules in .roo/rules/*.md.

Rules carry no frontmatter and are loaded alphabetically, so generated files
get a numeric prefix (00-general, 01-<rule>, ...).
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

from conforme import frontmatter
from conforme.adapters.base import AdapterCapabilities, GeneratedFile, ToolAdapter
from conforme.config import (
    ActivationKind,
    ActivationMode,
    NormalizedConfig,
    NormalizedMcpServer,
    NormalizedRule,
    NormalizedSkill,
    StdioTransport,
    sanitize_name,
)

_GENERAL_NAMES = {"00-general", "general"}


class RooCodeAdapter(ToolAdapter):
    """Reads and writes Roo Code rules, skills and MCP settings."""

    name = "Roo Code"
    id = "roocode"

    def detect(self, project_root) -> bool:
        root = Path(project_root)
        return (
            (root / ".roo").is_dir()
            or (root / ".roorules").exists()
            or (root / ".clinerules").exists()
        )

    def capabilities(self) -> AdapterCapabilities:
        return AdapterCapabilities(activation_modes=False, skills=True, agents=False, mcp=True)

    def managed_directories(self, project_root) -> List[Path]:
        root = Path(project_root)
        return [root / ".roo" / "rules", root / ".roo" / "skills"]

    def read(self, project_root) -> NormalizedConfig:
        instructions = ""
        rules: List[NormalizedRule] = []

        rules_dir = Path(project_root) / ".roo" / "rules"
        if rules_dir.is_dir():
            for path in sorted(rules_dir.iterdir(), key=lambda p: p.name):
                if path.suffix != ".md":
                    continue
                try:
                    content = path.read_text(encoding="utf-8")
                except OSError as exc:
                    raise OSError(f"failed to read {path}: {exc}") from exc
                name = path.stem
                if name in _GENERAL_NAMES:
                    instructions = content.strip()
                else:
                    rules.append(
                        NormalizedRule(
                            name=name,
                            content=content.strip(),
                            activation=ActivationMode.always(),
                        )
                    )

        return NormalizedConfig(instructions=instructions, rules=rules)

    def generate(self, project_root, config: NormalizedConfig) -> List[GeneratedFile]:
        root = Path(project_root)
        rules_dir = root / ".roo" / "rules"
        files: List[GeneratedFile] = []
        index = 0

        if config.instructions:
            files.append((rules_dir / "00-general.md", f"{config.instructions}\n"))
            index += 1

        for rule in config.rules:
            filename = f"{index:02d}-{sanitize_name(rule.name)}.md"
            content = _scope_comment(rule) + rule.content
            files.append((rules_dir / filename, f"{content.strip()}\n"))
            index += 1

        files.extend(_skill_file(root, skill) for skill in config.skills)

        if config.mcp_servers:
            files.append((root / ".roo" / "mcp.json", f"{_mcp_json(config.mcp_servers)}\n"))

        return files


def _scope_comment(rule: NormalizedRule) -> str:
    """Roo Code has no activation modes, so note the intended scope instead."""
    activation = rule.activation
    if activation.kind is ActivationKind.GLOB_MATCH:
        return f"<!-- Intended scope: {', '.join(activation.patterns)} -->\n\n"
    if activation.kind is ActivationKind.AGENT_DECISION and activation.description:
        return f"<!-- {activation.description} -->\n\n"
    return ""


def _skill_file(root: Path, skill: NormalizedSkill) -> GeneratedFile:
    fields: Dict[str, Any] = {"name": skill.name}
    if skill.description:
        fields["description"] = skill.description
    path = root / ".roo" / "skills" / sanitize_name(skill.name) / "SKILL.md"
    return path, frontmatter.serialize(fields, f"{skill.content}\n")


def _mcp_json(servers: List[NormalizedMcpServer]) -> str:
    entries: Dict[str, Dict[str, Any]] = {}
    for server in servers:
        transport = server.transport
        if isinstance(transport, StdioTransport):
            entry: Dict[str, Any] = {"command": transport.command, "args": list(transport.args)}
        else:
            entry = {"type": "http", "url": transport.url}
            if transport.headers:
                entry["headers"] = dict(transport.headers)
        if server.env:
            entry["env"] = dict(server.env)
        entries[server.name] = entry
    return json.dumps({"mcpServers": entries}, indent=2, sort_keys=True, ensure_ascii=False)