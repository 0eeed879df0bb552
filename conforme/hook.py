"""Install and remove the git pre-commit hook that runs ``conforme check``."""

from __future__ import annotations

import os
from pathlib import Path

HOOK_MARKER = "# conforme pre-commit hook"


class HookError(RuntimeError):
    """Raised when the hook cannot be installed."""


def hook_script() -> str:
    """Return the shell script written into the pre-commit hook."""
    return (
        "#!/bin/sh\n"
        f"{HOOK_MARKER}\n"
        "# Automatically installed by conforme — do not edit this block.\n"
        "\n"
        "conforme check\n"
    )


def _hook_path(project_root: Path) -> Path:
    return Path(project_root) / ".git" / "hooks" / "pre-commit"


def install(project_root, verbose: bool = False) -> Path:
    """Install the pre-commit hook, appending to an existing one if present.

    Returns the path of the hook file.
    """
    root = Path(project_root)
    git_dir = root / ".git"
    if not git_dir.is_dir():
        raise HookError(
            f"No .git directory found in {root}. Run this in a git repository."
        )

    hook_path = _hook_path(root)
    hook_path.parent.mkdir(parents=True, exist_ok=True)

    if hook_path.exists():
        try:
            existing = hook_path.read_text(encoding="utf-8")
        except OSError as exc:
            raise HookError(f"failed to read {hook_path}: {exc}") from exc

        if HOOK_MARKER in existing:
            print("= Pre-commit hook already installed.")
            return hook_path

        hook_path.write_text(f"{existing.rstrip()}\n\n{hook_script()}", encoding="utf-8")
        if verbose:
            print("  Appended conforme check to existing pre-commit hook")
    else:
        hook_path.write_text(hook_script(), encoding="utf-8")

    if os.name == "posix":
        os.chmod(hook_path, 0o755)

    print(f"+ Pre-commit hook installed at {hook_path.relative_to(root)}")
    print("  Configs will be checked automatically before each commit.")
    return hook_path


def _is_foreign_line(line: str) -> bool:
    trimmed = line.strip()
    return (
        bool(trimmed)
        and not trimmed.startswith("#")
        and not trimmed.startswith("conforme check")
        and trimmed != "#!/bin/sh"
    )


def _strip_conforme_block(content: str) -> str:
    kept = []
    in_block = False
    for line in content.splitlines():
        if HOOK_MARKER in line:
            in_block = True
            continue
        if in_block:
            trimmed = line.strip()
            if trimmed.startswith("#") or trimmed.startswith("conforme ") or not trimmed:
                if "conforme" in trimmed or "do not edit this block" in trimmed:
                    continue
                if not trimmed:
                    continue
            in_block = False
        kept.append(line)
    return "\n".join(kept).rstrip() + "\n"


def uninstall(project_root, verbose: bool = False) -> bool:
    """Remove the conforme hook. Returns True if anything was removed."""
    hook_path = _hook_path(Path(project_root))

    if not hook_path.exists():
        print("= No pre-commit hook found.")
        return False

    content = hook_path.read_text(encoding="utf-8")
    if HOOK_MARKER not in content:
        print("! Pre-commit hook exists but was not installed by conforme.")
        return False

    if not any(_is_foreign_line(line) for line in content.splitlines()):
        hook_path.unlink()
        if verbose:
            print("  Removed pre-commit hook file")
    else:
        hook_path.write_text(_strip_conforme_block(content), encoding="utf-8")
        if verbose:
            print("  Removed conforme block from pre-commit hook")

    print("+ Pre-commit hook uninstalled.")
    return True