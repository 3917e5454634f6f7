"""
Visualencer Compiler — Script Emitter
======================================
Linearises the builder's entries into the final script text.

    [header]          const seq = new Sequence();   (wrap only)
    entry 1           declarations, then lines
    ...
    entry N
    [footer]          seq.play();                   (wrap only)

Chains get the statement terminator on their last line; standalone
statements already carry theirs. Output is byte-stable: no timestamps, no
environment-dependent text.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from ..config import CompilerOptions
from .ir import Block, Entry


# ── Wrapper ──────────────────────────────────────────────────────────────────

def _header() -> List[str]:
    return ["const seq = new Sequence();", ""]


def _footer() -> List[str]:
    return ["", "seq.play();"]


# ── Entries ──────────────────────────────────────────────────────────────────

def _entry_lines(entry: Entry) -> List[str]:
    lines = list(entry.declarations)
    body = list(entry.lines)
    if isinstance(entry, Block) and body:
        body[-1] = body[-1] + ";"
    lines.extend(body)
    return lines


def _body(entries: Iterable[Entry], separate: bool) -> List[str]:
    lines: List[str] = []
    for entry in entries:
        chunk = _entry_lines(entry)
        if not chunk:
            continue
        if separate and lines:
            lines.append("")
        lines.extend(chunk)
    return lines


# ── Public API ────────────────────────────────────────────────────────────────

def emit(entries: Iterable[Entry], options: Optional[CompilerOptions] = None) -> str:
    options = options or CompilerOptions()
    body = _body(entries, options.separate_entries)

    if not options.wrap:
        sections = [body]
    elif body:
        sections = [_header(), body, _footer()]
    else:
        sections = [_header()[:1], _footer()[1:]]

    lines: List[str] = []
    for section in sections:
        lines.extend(section)
    return "\n".join(lines) + "\n" if lines else ""
