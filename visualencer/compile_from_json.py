"""
compile_from_json.py — CLI for the Visualencer graph compiler
==============================================================
Compiles a serialised graph JSON file into Sequencer script text.

Usage
-----
    visualencer-compile <graph.json> [options]
    python -m visualencer.compile_from_json <graph.json> [options]

Options
-------
    --out        <file>   Write the script to this file (default: print to stdout)
    --no-wrap             Omit the `const seq = new Sequence();` / `seq.play();` wrapper
    --compact             No blank line between chains and statements
    --strict              Treat unknown node types as errors (default: warnings only)
    --log-level  <level>  Logging level (default: VISUALENCER_LOG_LEVEL or WARNING)

Status lines and compile diagnostics go to stderr, so stdout carries only the
script and can be piped.

Examples
--------
    # Preview a graph:
    visualencer-compile graphs/fireball.json

    # Write a macro body without the wrapper:
    visualencer-compile graphs/fireball.json --no-wrap --out macros/fireball.js
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path

from visualencer.compiler import GraphCompiler
from visualencer.compiler.deserialiser import json_to_graph
from visualencer.compiler.schema import SchemaError, validate_file
from visualencer.config import load_options


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="visualencer-compile",
        description="Compile a Visualencer JSON graph to Sequencer script.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    p.add_argument(
        "graph_json",
        metavar="graph.json",
        help="Path to the graph JSON file to compile.",
    )
    p.add_argument(
        "--out",
        metavar="FILE",
        default=None,
        help="Output file for the script (default: print to stdout).",
    )
    p.add_argument(
        "--no-wrap",
        dest="wrap",
        action="store_false",
        default=None,
        help="Omit the Sequence constructor and play() call.",
    )
    p.add_argument(
        "--compact",
        action="store_true",
        help="Do not separate chains and statements with blank lines.",
    )
    p.add_argument(
        "--strict",
        action="store_true",
        help="Treat unknown node types as errors rather than warnings.",
    )
    p.add_argument(
        "--log-level",
        metavar="LEVEL",
        default=None,
        help="Logging level name (DEBUG, INFO, WARNING, ...).",
    )
    return p


def _status(message: str) -> None:
    print(f"[visualencer-compile] {message}", file=sys.stderr)


def main(argv=None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    options = load_options()
    if args.wrap is not None:
        options = dataclasses.replace(options, wrap=args.wrap)
    if args.compact:
        options = dataclasses.replace(options, separate_entries=False)
    if args.log_level:
        options = dataclasses.replace(options, log_level=args.log_level.upper())

    logging.basicConfig(level=getattr(logging, options.log_level, logging.WARNING),
                        format="%(levelname)s %(name)s: %(message)s")

    json_path = Path(args.graph_json)
    if not json_path.exists():
        print(f"[error] File not found: {json_path}", file=sys.stderr)
        return 1

    # ── Validate + deserialise ───────────────────────────────────────────────
    try:
        data = validate_file(json_path, strict=args.strict)
        graph = json_to_graph(data, validate_schema=False)
    except SchemaError as exc:
        print(f"[error] Schema validation failed: {exc}", file=sys.stderr)
        return 1

    _status(f"graph  : {graph.name}")
    _status(f"nodes  : {len(graph)}")

    # ── Compile ──────────────────────────────────────────────────────────────
    result = GraphCompiler(options=options).compile(graph)
    for diagnostic in result.diagnostics:
        print(f"[{diagnostic.kind.value}] {diagnostic.node_id}: {diagnostic.message}", file=sys.stderr)

    # ── Output ───────────────────────────────────────────────────────────────
    if args.out is None:
        sys.stdout.write(result.text)
        return 0

    out_path = Path(args.out)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(result.text, encoding="utf-8")
    _status(f"wrote  : {out_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
