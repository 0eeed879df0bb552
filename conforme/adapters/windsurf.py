"""Windsurf adapter: rules in .windsurf/rules/*.md with a trigger frontmatter."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Mapping

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


class WindsurfAdapter(ToolAdapter):
    """Reads and writes Windsurf rules, skills and MCP settings."""

    name = "Windsurf"
    id = "windsurf"

    def detect(self, project_root) -> bool:
        root = Path(project_root)
        return (root / ".windsurf").is_dir() or (root / ".windsurfrules").exists()

    def capabilities(self) -> AdapterCapabilities:
        return AdapterCapabilities(activation_modes=True, skills=True, agents=False, mcp=True)

    def managed_directories(self, project_root) -> List[Path]:
        root = Path(project_root)
        return [root / ".windsurf" / "rules", root / ".windsurf" / "skills"]

    def read(self, project_root) -> NormalizedConfig:
        instructions = ""
        rules: List[NormalizedRule] = []

        rules_dir = Path(project_root) / ".windsurf" / "rules"
        if rules_dir.is_dir():
            for path in sorted(rules_dir.iterdir(), key=lambda p: p.name):
                if path.suffix != ".md":
                    continue
                try:
                    content = path.read_text(encoding="utf-8")
                except OSError as exc:
                    raise OSError(f"failed to read {path}: {exc}") from exc
                fields, body = frontmatter.parse(content)
                name = path.stem
                activation = parse_windsurf_activation(fields)

                if name == "general" and activation == ActivationMode.always():
                    instructions = body.strip()
                else:
                    rules.append(
                        NormalizedRule(name=name, content=body.strip(), activation=activation)
                    )

        return NormalizedConfig(instructions=instructions, rules=rules)

    def generate(self, project_root, config: NormalizedConfig) -> List[GeneratedFile]:
        root = Path(project_root)
        rules_dir = root / ".windsurf" / "rules"
        files: List[GeneratedFile] = []

        if config.instructions:
            content = frontmatter.serialize(
                {"trigger": "always_on"}, f"{config.instructions}\n"
            )
            files.append((rules_dir / "general.md", content))

        for rule in config.rules:
            content = frontmatter.serialize(build_windsurf_fields(rule), f"{rule.content}\n")
            files.append((rules_dir / f"{sanitize_name(rule.name)}.md", content))

        files.extend(_skill_file(root, skill) for skill in config.skills)

        # Project-level MCP config; Windsurf's schema uses serverUrl and no type field.
        if config.mcp_servers:
            files.append(
                (root / ".windsurf" / "mcp.json", f"{_mcp_json(config.mcp_servers)}\n")
            )

        return files


def _skill_file(root: Path, skill: NormalizedSkill) -> GeneratedFile:
    fields: Dict[str, Any] = {"name": skill.name}
    if skill.description:
        fields["description"] = skill.description
    path = root / ".windsurf" / "skills" / sanitize_name(skill.name) / "SKILL.md"
    return path, frontmatter.serialize(fields, f"{skill.content}\n")


def _mcp_json(servers: List[NormalizedMcpServer]) -> str:
    entries: Dict[str, Dict[str, Any]] = {}
    for server in servers:
        transport = server.transport
        if isinstance(transport, StdioTransport):
            entry: Dict[str, Any] = {"command": transport.command, "args": list(transport.args)}
        else:
            entry = {"serverUrl": transport.url}
            if transport.headers:
                entry["headers"] = dict(transport.headers)
        if server.env:
            entry["env"] = dict(server.env)
        entries[server.name] = entry
    return json.dumps({"mcpServers": entries}, indent=2, sort_keys=True, ensure_ascii=False)


def _text_field(fields: Mapping[str, Any], key: str, default: str) -> str:
    value = fields.get(key)
    return value if isinstance(value, str) else default


def parse_windsurf_activation(fields: Mapping[str, Any]) -> ActivationMode:
    """Map Windsurf frontmatter fields to an activation mode."""
    trigger = _text_field(fields, "trigger", "always_on")

    if trigger == "glob":
        globs = _text_field(fields, "globs", "")
        patterns = [p.strip() for p in globs.split(",") if p.strip()]
        return ActivationMode.glob_match(patterns) if patterns else ActivationMode.always()
    if trigger == "model_decision":
        return ActivationMode.agent_decision(_text_field(fields, "description", ""))
    if trigger == "manual":
        return ActivationMode.manual()
    return ActivationMode.always()


def build_windsurf_fields(rule: NormalizedRule) -> Dict[str, Any]:
    """Build the Windsurf frontmatter fields for a rule."""
    activation = rule.activation
    kind = activation.kind
    if kind is ActivationKind.GLOB_MATCH:
        return {
            "trigger": "glob",
            "description": rule.name,
            "globs": ", ".join(activation.patterns),
        }
    if kind is ActivationKind.AGENT_DECISION:
        return {"trigger": "model_decision", "description": activation.description}
    if kind is ActivationKind.MANUAL:
        return {"trigger": "manual", "description": rule.name}
    return {"trigger": "always_on", "description": rule.name}