"""Manage the .gitignore block that lists generated tool configs."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator, List, Optional, Tuple

BLOCK_START = "# ── conforme: generated tool configs ──"
BLOCK_END = "# ── end conforme ──"

# Every supported tool as (id, display name), in sync order.
_TOOLS: Tuple[Tuple[str, str], ...] = (
    ("claude", "Claude Code"),
    ("cursor", "Cursor"),
    ("windsurf", "Windsurf"),
    ("copilot", "GitHub Copilot"),
    ("codex", "Codex CLI"),
    ("opencode", "OpenCode"),
    ("roocode", "Roo Code"),
    ("gemini", "Gemini CLI"),
    ("continue", "Continue.dev"),
    ("zed", "Zed AI"),
    ("amazonq", "Amazon Q"),
    ("kiro", "Kiro"),
    ("amp", "Amp"),
)

_PATTERNS = {
    "claude": ["CLAUDE.md", ".claude/rules/", ".claude/skills/", ".claude/agents/"],
    "cursor": [".cursor/rules/", ".cursor/skills/", ".cursor/agents/", ".cursor/mcp.json"],
    "windsurf": [".windsurf/rules/", ".windsurf/skills/", ".windsurf/mcp.json"],
    "copilot": [
        ".github/copilot-instructions.md",
        ".github/instructions/",
        ".github/prompts/",
        ".github/agents/",
        ".vscode/mcp.json",
    ],
    "codex": [".agents/skills/"],
    "opencode": [".opencode/skills/", ".opencode/mcp.json", ".opencode/agents.json"],
    "roocode": [".roo/rules/", ".roo/skills/", ".roo/mcp.json"],
    "gemini": ["GEMINI.md", ".gemini/skills/", ".gemini/agents/", ".gemini/settings.json"],
    "continue": [".continue/rules/", ".continue/mcpServers/"],
    "zed": [".rules", ".zed/settings.json"],
    "amazonq": [".amazonq/rules/", ".amazonq/cli-agents/", ".amazonq/mcp.json"],
    "kiro": [".kiro/steering/", ".kiro/skills/", ".kiro/agents/", ".kiro/settings/"],
    "amp": [".agents/skills/", ".amp/settings.json"],
}

_DEFAULT_SOURCE = "agents.md"


def adapter_gitignore_patterns(tool_id: str) -> List[str]:
    """Return the gitignore patterns for the files a tool's output produces."""
    return list(_PATTERNS.get(tool_id, ()))


def build_gitignore_block(source_id: Optional[str], generate_agents_md: bool = True) -> str:
    """Build the managed block, leaving the source tool's files tracked."""
    source = source_id or _DEFAULT_SOURCE
    lines = [
        BLOCK_START,
        f"# Source: {source} — only generated outputs are ignored.",
        "# Managed by `conforme gitignore install`. Do not edit this block.",
    ]

    for tool_id, name in _TOOLS:
        if tool_id == source:
            continue
        patterns = adapter_gitignore_patterns(tool_id)
        if not patterns:
            continue
        lines.append(f"# {name}")
        lines.extend(patterns)

    if source != _DEFAULT_SOURCE and generate_agents_md:
        lines.append("# Generated AGENTS.md")
        lines.append("AGENTS.md")

    lines.append(BLOCK_END)
    return "\n".join(lines)


def _lines(content: str) -> Iterator[str]:
    parts = content.split("\n")
    if parts and parts[-1] == "":
        parts.pop()
    for part in parts:
        yield part[:-1] if part.endswith("\r") else part


def _outside_block(content: str, new_block: Optional[str]) -> Iterator[str]:
    """Yield lines outside managed blocks, putting new_block where the first one was."""
    in_block = False
    replaced = False
    for line in _lines(content):
        marker = line.strip()
        if marker == BLOCK_START:
            in_block = True
            if new_block is not None and not replaced:
                yield new_block
                replaced = True
            continue
        if marker == BLOCK_END:
            in_block = False
            continue
        if not in_block:
            yield line


def replace_block(content: str, new_block: str) -> str:
    """Replace the managed block in gitignore text with new_block."""
    return "".join(f"{line}\n" for line in _outside_block(content, new_block))


def remove_block(content: str) -> str:
    """Remove the managed block from gitignore text."""
    result = "".join(f"{line}\n" for line in _outside_block(content, None)).rstrip()
    return f"{result}\n" if result else ""


def install(
    project_root,
    source_id: Optional[str] = None,
    generate_agents_md: bool = True,
    verbose: bool = False,
) -> Path:
    """Add or refresh the managed block in .gitignore. Returns its path."""
    gitignore_path = Path(project_root) / ".gitignore"
    block = build_gitignore_block(source_id, generate_agents_md)

    if gitignore_path.exists():
        try:
            existing = gitignore_path.read_text(encoding="utf-8")
        except OSError as exc:
            raise OSError(f"failed to read {gitignore_path}: {exc}") from exc

        if BLOCK_START in existing:
            gitignore_path.write_text(replace_block(existing, block), encoding="utf-8")
            print("+ .gitignore updated.")
            if verbose:
                print("  Replaced existing conforme block")
        else:
            gitignore_path.write_text(f"{existing.rstrip()}\n\n{block}\n", encoding="utf-8")
            print("+ .gitignore updated.")
            if verbose:
                print("  Appended conforme block")
    else:
        gitignore_path.write_text(f"{block}\n", encoding="utf-8")
        print("+ .gitignore created.")

    source = source_id or _DEFAULT_SOURCE
    ignored_count = sum(1 for tool_id, _ in _TOOLS if tool_id != source)
    print(f"  {ignored_count} generated tool config(s) ignored (source: {source}).")
    return gitignore_path


def uninstall(project_root, verbose: bool = False) -> bool:
    """Remove the managed block from .gitignore. Returns True if it was removed."""
    gitignore_path = Path(project_root) / ".gitignore"

    if not gitignore_path.exists():
        print("= No .gitignore found.")
        return False

    content = gitignore_path.read_text(encoding="utf-8")
    if BLOCK_START not in content:
        print("= .gitignore has no conforme-managed block.")
        return False

    gitignore_path.write_text(remove_block(content), encoding="utf-8")
    print("+ Removed conforme block from .gitignore.")
    if verbose:
        print("  .gitignore cleaned up")
    return True