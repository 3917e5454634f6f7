from __future__ import annotations

from typing import List


class CodeWriter:
    """Simple indented string accumulator. Indent unit defaults to two spaces."""

    def __init__(self, indent: int = 0, unit: str = "  "):
        self._lines: List[str] = []
        self._indent = indent
        self._unit = unit

    def writeln(self, line: str = "") -> "CodeWriter":
        if line:
            self._lines.append(self._unit * self._indent + line)
        else:
            self._lines.append("")
        return self

    def push(self) -> "CodeWriter":
        self._indent += 1
        return self

    def pop(self) -> "CodeWriter":
        self._indent = max(0, self._indent - 1)
        return self

    def body(self, text: str) -> "CodeWriter":
        """Write user-supplied multi-line text, one writer line per source line."""
        lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
        while lines and not lines[-1].strip():
            lines.pop()
        while lines and not lines[0].strip():
            lines.pop(0)
        for line in lines:
            self.writeln(line.rstrip())
        return self

    def lines(self) -> List[str]:
        return self._lines
