"""YAML frontmatter parsing and serialization for Markdown files."""

from __future__ import annotations

import re
from typing import Any, Dict, Mapping, Tuple

import yaml

_FRONTMATTER = re.compile(
    r"\A---[ \t]*\r?\n(?P<yaml>.*?)^---[ \t]*(?:\r?\n|\Z)",
    re.DOTALL | re.MULTILINE,
)


class FrontmatterError(ValueError):
    """Raised when frontmatter cannot be parsed or serialized."""


def parse(content: str) -> Tuple[Dict[str, Any], str]:
    """Split Markdown into (frontmatter fields, body)."""
    match = _FRONTMATTER.match(content)
    if match is None:
        return {}, content

    try:
        data = yaml.safe_load(match.group("yaml"))
    except yaml.YAMLError as exc:
        raise FrontmatterError(f"failed to parse frontmatter: {exc}") from exc

    if data is None:
        data = {}
    elif not isinstance(data, dict):
        raise FrontmatterError("failed to parse frontmatter: expected a mapping")

    fields = {str(key): value for key, value in data.items()}
    return fields, content[match.end():]


def serialize(fields: Mapping[str, Any], body: str) -> str:
    """Render frontmatter fields followed by the body."""
    if not fields:
        return body

    ordered = {key: fields[key] for key in sorted(fields)}
    try:
        text = yaml.safe_dump(
            ordered,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
            width=2**31 - 1,
        )
    except yaml.YAMLError as exc:
        raise FrontmatterError(f"failed to serialize frontmatter: {exc}") from exc

    return f"---\n{text.rstrip()}\n---\n\n{body}"