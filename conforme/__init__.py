"""Parse AGENTS.md and generate Windsurf, Roo Code and Zed configuration."""

__version__ = "1.9.2"