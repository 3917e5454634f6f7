"""
Visualencer Compiler — Intermediate Representation
===================================================
Transient structures shared by one compile pass:

    Graph  →  [builder]  →  List[Block | Statement]  →  [emitter]  →  script str

  Block               one root's chain: opener line + continuation lines,
                      named slots for lines that later children may rewrite,
                      declarations hoisted in front of it.
  Statement           lines produced by one utility node (already terminated).
  CompilationContext  per-pass mutable state: top-level instruction list,
                      auxiliary declarations, identifier counter, diagnostics.

Nothing here outlives a single GraphCompiler.compile() call.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from ..core.Types import DiagnosticKind


# ── Block ────────────────────────────────────────────────────────────────────

@dataclass
class Block:
    node_id: str
    family: str
    lines: List[str] = field(default_factory=list)
    declarations: List[str] = field(default_factory=list)

    # slot name → index into lines, and the raw value that produced the line
    slots: Dict[str, int] = field(default_factory=dict)
    slot_values: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.lines

    def push(self, line: str) -> "Block":
        self.lines.append(line)
        return self

    def extend(self, lines: List[str]) -> "Block":
        self.lines.extend(lines)
        return self

    def reserve(self, slot: str, line: str, value: Any = None) -> int:
        """Append a line and remember its position under *slot*."""
        self.lines.append(line)
        index = len(self.lines) - 1
        self.slots[slot] = index
        self.slot_values[slot] = value
        return index

    def has_slot(self, slot: str) -> bool:
        return slot in self.slots

    def slot_value(self, slot: str, default: Any = None) -> Any:
        return self.slot_values.get(slot, default)

    def fill(self, slot: str, line: str) -> bool:
        """
        Overwrite the reserved line in place. Returns False when the root never
        reserved *slot*, leaving the caller to decide whether to append.
        """
        index = self.slots.get(slot)
        if index is None:
            return False
        self.lines[index] = line
        return True


# ── Standalone statement ─────────────────────────────────────────────────────

@dataclass
class Statement:
    node_id: str
    lines: List[str] = field(default_factory=list)
    declarations: List[str] = field(default_factory=list)


Entry = Union[Block, Statement]


# ── Diagnostics ──────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Diagnostic:
    node_id: str
    type_id: str
    kind: DiagnosticKind
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "nodeId": self.node_id,
            "type": self.type_id,
            "kind": self.kind.value,
            "message": self.message,
        }


# ── Compilation context ──────────────────────────────────────────────────────

class CompilationContext:
    """Shared mutable state threaded through one compile pass."""

    def __init__(self):
        self.lines: List[str] = []                 # top-level instruction list
        self.declarations: List[str] = []          # every declaration, in order
        self.diagnostics: List[Diagnostic] = []
        self._pending: List[str] = []              # not yet claimed by an entry
        self._counter = 0

    def emit(self, line: str) -> None:
        self.lines.append(line)

    def next_id(self, prefix: str) -> str:
        self._counter += 1
        return f"{prefix}{self._counter}"

    def declare(self, prefix: str, value_expr: str) -> str:
        """Hoist `const <prefix>N = <value_expr>;` and return the generated name."""
        name = self.next_id(prefix)
        line = f"const {name} = {value_expr};"
        self.declarations.append(line)
        self._pending.append(line)
        return name

    def take_declarations(self) -> List[str]:
        pending, self._pending = self._pending, []
        return pending

    def report(self, node_id: str, type_id: str, kind: DiagnosticKind, message: str) -> Diagnostic:
        diagnostic = Diagnostic(node_id, type_id, kind, message)
        self.diagnostics.append(diagnostic)
        return diagnostic


# ── Compile result ───────────────────────────────────────────────────────────

@dataclass
class CompiledScript:
    text: str
    entries: List[Entry] = field(default_factory=list)
    declarations: List[str] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)

    def blocks(self) -> List[Block]:
        return [e for e in self.entries if isinstance(e, Block)]

    def statements(self) -> List[Statement]:
        return [e for e in self.entries if isinstance(e, Statement)]

    def entry_for(self, node_id: str) -> Optional[Entry]:
        return next((e for e in self.entries if e.node_id == node_id), None)

    def __str__(self) -> str:
        return self.text
