"""Detect which AI coding tools a project already uses."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List

from conforme.adapters.base import ToolAdapter


@dataclass(frozen=True)
class DetectedTool:
    """Detection result for one tool."""

    name: str
    detected: bool


def detect_tools(project_root, adapters: Iterable[ToolAdapter]) -> List[DetectedTool]:
    """Return the detection status of every given adapter, in order."""
    root = Path(project_root)
    return [DetectedTool(name=adapter.name, detected=adapter.detect(root)) for adapter in adapters]


def has_agents_md(project_root) -> bool:
    """Tell whether AGENTS.md exists in the project root."""
    return (Path(project_root) / "AGENTS.md").exists()