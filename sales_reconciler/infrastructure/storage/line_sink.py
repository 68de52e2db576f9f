"""Line sinks receiving the generated reports."""
from __future__ import annotations

from pathlib import Path
from typing import Sequence

from sales_reconciler.domain.repositories import LineSink


class DirectoryLineSink(LineSink):
    """Writes each named output as a text file, replacing earlier content."""

    def __init__(self, root: Path, encoding: str | None = None) -> None:
        self._root = Path(root)
        self._encoding = encoding

    def write_lines(self, name: str, lines: Sequence[str]) -> None:
        target = self._root / name
        with target.open("w", encoding=self._encoding) as handle:
            for line in lines:
                handle.write(line)
                handle.write("\n")


class MemoryLineSink(LineSink):
    def __init__(self) -> None:
        self.outputs: dict[str, list[str]] = {}

    def write_lines(self, name: str, lines: Sequence[str]) -> None:
        self.outputs[name] = list(lines)

    def render(self, name: str) -> bytes:
        return "".join(f"{line}\n" for line in self.outputs.get(name, [])).encode("utf-8")
