# conforme

Keep the configuration of your AI coding agents in sync from a single source.

`conforme` reads a normalized project configuration, usually written in an
`AGENTS.md` file. That configuration holds instructions, rules, skills, custom
agents and MCP servers. From it, `conforme` generates the files that Windsurf,
Roo Code and Zed expect.

## Installation

```
pip install conforme
```

## The AGENTS.md convention

Text before the first `## Rule:`, `## Skill:`, `## Agent:` or `## MCP:`
heading becomes the project-wide instructions. Each of those sections declares
one item, and its options are given in HTML comments:

```markdown
# Project Instructions

Use TypeScript everywhere.

## Rule: TypeScript
<!-- activation: glob **/*.ts,**/*.tsx -->

Use strict mode.

## Rule: Security
<!-- activation: agent-decision -->
<!-- description: Apply for security reviews -->

Check for XSS.

## Skill: deploy
<!-- description: Deploy the application -->
<!-- tools: Bash, Read -->

Run the deploy script.

## Agent: reviewer
<!-- description: Find bugs and security issues -->
<!-- model: some-model -->
<!-- tools: Read, Grep -->

Review code for correctness.

## MCP: filesystem
<!-- command: npx -->
<!-- args: -y, server-filesystem, /tmp -->
```

A rule's activation mode is one of `always` (the default), `manual`,
`agent-decision` or `glob <patterns>`. Any other value raises
`conforme.markdown.AgentsMdError`. An MCP section can also take
`<!-- url: ... -->` for an HTTP server and `<!-- env: KEY=VALUE, ... -->`.
An MCP section with neither a command nor a URL is dropped.

## Library use

```python
from pathlib import Path

from conforme.markdown import parse_agents_md, export_as_agents_md
from conforme.adapters.windsurf import WindsurfAdapter
from conforme.adapters.roocode import RooCodeAdapter
from conforme.adapters.zed import ZedAdapter

root = Path(".")
config = parse_agents_md((root / "AGENTS.md").read_text())

for adapter in (WindsurfAdapter(), RooCodeAdapter(), ZedAdapter()):
    # Preview the files without writing them
    for path, content in adapter.generate(root, config):
        print(path)
    # Or write them; files whose content is unchanged are left alone
    report = adapter.write(root, config)
    print(report.files_written, report.files_unchanged)

print(export_as_agents_md(config))
```

Each adapter can also `read` a project's existing files back into a
`NormalizedConfig`, and report its `capabilities()` and
`managed_directories(root)`.

What each adapter generates:

- `WindsurfAdapter`: `.windsurf/rules/*.md` with a `trigger` frontmatter,
  `.windsurf/skills/<name>/SKILL.md`, and `.windsurf/mcp.json`.
- `RooCodeAdapter`: plain Markdown in `.roo/rules/`, numbered `00-general.md`,
  `01-<rule>.md` and so on. It also writes `.roo/skills/<name>/SKILL.md` and
  `.roo/mcp.json`.
- `ZedAdapter`: a single `.rules` file, plus `context_servers` in
  `.zed/settings.json`.

Other helpers:

- `conforme.config.sanitize_name` turns a rule name into a file-safe identifier.
  For example, `"TypeScript Conventions"` becomes `"typescript-conventions"`.
- `conforme.frontmatter.parse` and `conforme.frontmatter.serialize` read and
  write YAML frontmatter.
- `conforme.hashing.content_hash` returns the SHA-256 hex digest of a text.
- `conforme.detect.detect_tools(root, adapters)` reports which of the given
  tools a project already uses. `conforme.detect.has_agents_md(root)` tells
  whether the project has an `AGENTS.md`.
- `conforme.adapters.base.clean_orphans` removes stale files from the
  directories an adapter manages.
- `conforme.gitignore.install(root, source_id)` adds or refreshes a managed
  block of generated-config patterns in `.gitignore`. The source tool's own
  files stay tracked. `conforme.gitignore.uninstall(root)` removes the block.
- `conforme.hook.install(root)` writes a git pre-commit hook, or appends to an
  existing one, and `conforme.hook.uninstall(root)` takes it out again.
  `install` raises `HookError` when the project has no `.git` directory.

## What this package does not do

- It installs no command-line program. Everything is used from Python.
- The pre-commit hook written by `conforme.hook.install` runs `conforme check`.
  This package provides no such command, so the hook only works if one is
  available on `PATH`.
- Adapters exist only for Windsurf, Roo Code and Zed. The `.gitignore` block
  also lists patterns for other tools, but this package cannot generate their
  files.
- There is no watching for file changes and no migration between tools.

## Running the tests

```
pip install -e ".[test]"
pytest
```