"""Common interface and file helpers for tool adapters."""

from __future__ import annotations

import abc
from dataclasses import dataclass, field
from pathlib import Path
from typing import ClassVar, Iterable, List, Sequence, Tuple

from conforme.config import NormalizedConfig
from conforme.hashing import contents_match

GeneratedFile = Tuple[Path, str]


@dataclass
class WriteReport:
    """Which files an adapter wrote and which were already up to date."""

    files_written: List[Path] = field(default_factory=list)
    files_unchanged: List[Path] = field(default_factory=list)


@dataclass(frozen=True)
class AdapterCapabilities:
    """Features an adapter supports."""

    activation_modes: bool = False
    skills: bool = False
    agents: bool = False
    mcp: bool = False


class ToolAdapter(abc.ABC):
    """Reads and writes the configuration of one AI coding tool."""

    name: ClassVar[str] = ""
    id: ClassVar[str] = ""

    @abc.abstractmethod
    def detect(self, project_root) -> bool:
        """Tell whether this tool's config files or directories exist."""

    @abc.abstractmethod
    def read(self, project_root) -> NormalizedConfig:
        """Read this tool's current config into normalized form."""

    def capabilities(self) -> AdapterCapabilities:
        """Features this adapter supports; none by default."""
        return AdapterCapabilities()

    def managed_directories(self, project_root) -> List[Path]:
        """Directories whose unexpected files are removed as orphans."""
        return []

    @abc.abstractmethod
    def generate(self, project_root, config: NormalizedConfig) -> List[GeneratedFile]:
        """Return the expected (path, content) pairs without writing them."""

    def write(self, project_root, config: NormalizedConfig) -> WriteReport:
        """Generate the files and write those whose content changed."""
        report = WriteReport()
        for path, content in self.generate(project_root, config):
            write_if_changed(path, content, report)
        return report


def clean_orphans(
    managed_dirs: Iterable, expected_files: Sequence[GeneratedFile]
) -> List[Path]:
    """Remove files in the managed directories that are not expected.

    Only files directly inside each directory are considered. Returns the
    removed paths.
    """
    expected = {Path(path) for path, _ in expected_files}
    cleaned: List[Path] = []
    for directory in map(Path, managed_dirs):
        if not directory.is_dir():
            continue
        for path in sorted(directory.iterdir()):
            if path.is_file() and path not in expected:
                path.unlink()
                cleaned.append(path)
    return cleaned


def write_if_changed(path, content: str, report: WriteReport) -> None:
    """Write the file only if its content differs from what is on disk."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    if path.exists():
        existing = path.read_bytes().decode("utf-8")
        if contents_match(existing, content):
            report.files_unchanged.append(path)
            return

    path.write_bytes(content.encode("utf-8"))
    report.files_written.append(path)