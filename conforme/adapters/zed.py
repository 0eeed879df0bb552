"""Zed AI adapter: a single .rules file plus .zed/settings.json for MCP."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

from conforme.adapters.base import AdapterCapabilities, GeneratedFile, ToolAdapter
from conforme.config import NormalizedConfig, NormalizedMcpServer, StdioTransport


class ZedAdapter(ToolAdapter):
    """Reads and writes Zed's .rules file and context servers."""

    name = "Zed AI"
    id = "zed"

    def detect(self, project_root) -> bool:
        return (Path(project_root) / ".rules").exists()

    def capabilities(self) -> AdapterCapabilities:
        return AdapterCapabilities(activation_modes=False, skills=False, agents=False, mcp=True)

    def read(self, project_root) -> NormalizedConfig:
        rules_file = Path(project_root) / ".rules"
        instructions = ""
        if rules_file.exists():
            try:
                instructions = rules_file.read_text(encoding="utf-8").strip()
            except OSError as exc:
                raise OSError(f"failed to read {rules_file}: {exc}") from exc
        return NormalizedConfig(instructions=instructions)

    def generate(self, project_root, config: NormalizedConfig) -> List[GeneratedFile]:
        root = Path(project_root)
        parts = [config.instructions]
        parts.extend(f"\n\n## {rule.name}\n\n{rule.content}" for rule in config.rules)
        content = "".join(parts)

        files: List[GeneratedFile] = [(root / ".rules", f"{content.strip()}\n")]

        if config.mcp_servers:
            files.append(
                (root / ".zed" / "settings.json", f"{_context_servers_json(config.mcp_servers)}\n")
            )

        return files


def _context_servers_json(servers: List[NormalizedMcpServer]) -> str:
    entries: Dict[str, Dict[str, Any]] = {}
    for server in servers:
        transport = server.transport
        if isinstance(transport, StdioTransport):
            entry: Dict[str, Any] = {"command": transport.command, "args": list(transport.args)}
        else:
            entry = {"url": transport.url}
            if transport.headers:
                entry["headers"] = dict(transport.headers)
        if server.env:
            entry["env"] = dict(server.env)
        entries[server.name] = entry
    return json.dumps(
        {"context_servers": entries}, indent=2, sort_keys=True, ensure_ascii=False
    )