"""Adapters that read and generate Windsurf, Roo Code and Zed configuration files."""

__all__ = ["base", "roocode", "windsurf", "zed"]