"""
Escaping and formatting helpers shared by every node descriptor.

All of these are total: any config value, however malformed, maps to safe
output text. Generated script never contains NaN, undefined or Infinity.
"""

from __future__ import annotations

import math
from decimal import Decimal
from typing import Any, FrozenSet, Iterable, List, Mapping, Optional, Sequence

from ..core.Types import Family, TargetMode


INDENT = "  "


def families(*members: Any) -> FrozenSet[str]:
    """Family set as plain strings, so lookups by family name work."""
    return frozenset(m.value if isinstance(m, Family) else str(m) for m in members)

_RADIX_PREFIXES = {"0x": 16, "0o": 8, "0b": 2}


# ── Numbers ───────────────────────────────────────────────────────────────────

def parse_number(value: Any) -> Optional[float]:
    """
    Numeric interpretation of *value*, or None when it is not a number.
    None, empty and whitespace-only strings are 0, booleans are 1/0.
    """
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        if "_" in text:
            return None
        radix = _RADIX_PREFIXES.get(text[:2].lower())
        try:
            number = float(int(text[2:], radix)) if radix else float(text)
        except (ValueError, OverflowError):
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def to_number(value: Any) -> float:
    number = parse_number(value)
    return 0.0 if number is None else number


def format_number(value: Any) -> str:
    """Render a number the way the target language prints it (1000, 0.5, 1e-7)."""
    number = to_number(value)
    if number == 0:
        return "0"
    magnitude = abs(number)
    # from 2**53 up, whole numbers print as shortest round-trip digits padded with zeros
    if number.is_integer() and magnitude < 2 ** 53:
        return str(int(number))

    text = repr(number)
    if 1e-6 <= magnitude < 1e21:
        if "e" in text:
            text = format(Decimal(text), "f")
        if text.endswith(".0"):
            text = text[:-2]
        return text

    mantissa, _, exponent = text.partition("e")
    if not exponent:
        return mantissa
    exp = int(exponent)
    return f"{mantissa}e{'+' if exp > 0 else '-'}{abs(exp)}"


# ── Strings ───────────────────────────────────────────────────────────────────

def to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return format_number(value)
    return str(value)


def escape_string_literal(value: Any) -> str:
    # Backslashes first, otherwise the inserted ones get doubled
    return to_text(value).replace("\\", "\\\\").replace('"', '\\"')


def escape_template_literal(value: Any) -> str:
    return to_text(value).replace("`", "\\`")


def quote(value: Any) -> str:
    return f'"{escape_string_literal(value)}"'


def ease_delay_options(ease: Any, delay: Any) -> str:
    """`{ ease: "...", delay: N }` with only the keys present, or "" for neither."""
    parts = []
    if ease and to_text(ease).strip():
        parts.append(f"ease: {quote(ease)}")
    d = parse_number(delay)
    if d is not None and d != 0:
        parts.append(f"delay: {format_number(d)}")
    if not parts:
        return ""
    return "{ " + ", ".join(parts) + " }"


def point(x: Any, y: Any) -> str:
    return f"{{ x: {format_number(x)}, y: {format_number(y)} }}"


def chain_call(method: str, *args: str, options: Optional[Sequence[str]] = None) -> str:
    """`  .method(args)` or, when options are present, `  .method(args, { k: v })`."""
    parts = list(args)
    if options:
        parts.append("{ " + ", ".join(options) + " }")
    return f"{INDENT}.{method}({', '.join(parts)})"


def text_call(text: Any, style: Optional[str] = None) -> str:
    """`` .text(`...`) `` with an optional style identifier."""
    args = [f"`{escape_template_literal(text)}`"]
    if style:
        args.append(style)
    return chain_call("text", *args)


def object_literal(parts: Sequence[str]) -> str:
    return "{ " + ", ".join(parts) + " }"


# ── Config access ─────────────────────────────────────────────────────────────

class ConfigView:
    """Read-only accessor over node.config applying inline fallbacks."""

    def __init__(self, config: Optional[Mapping[str, Any]]):
        self._config: Mapping[str, Any] = config if isinstance(config, Mapping) else {}

    def get(self, key: str, default: Any = None) -> Any:
        value = self._config.get(key)
        return default if value is None else value

    def text(self, key: str, default: str = "") -> str:
        value = self._config.get(key)
        return default if value is None else to_text(value)

    def stripped(self, key: str, default: str = "") -> str:
        return self.text(key, default).strip()

    def num(self, key: str) -> float:
        return to_number(self._config.get(key))

    def flag(self, key: str, default: bool = False) -> bool:
        value = self._config.get(key)
        return default if value is None else bool(value)

    def fmt(self, key: str) -> str:
        return format_number(self._config.get(key))

    def has_value(self, key: str) -> bool:
        value = self._config.get(key)
        return value is not None and value != ""

    def finite(self, key: str) -> Optional[float]:
        """The value as a number when present and numeric, else None."""
        if not self.has_value(key):
            return None
        return parse_number(self._config.get(key))


# ── Target resolution ─────────────────────────────────────────────────────────

def resolve_target(cfg: ConfigView,
                   modes: Iterable[str],
                   default_mode: Optional[str] = None,
                   mode_key: str = "mode") -> Optional[str]:
    """
    Expression for the entity a node points at, or None when the selected mode
    is not allowed for this node or its required field is blank.
    """
    mode = cfg.text(mode_key) or default_mode
    allowed = {m.value if isinstance(m, TargetMode) else m for m in modes}
    if mode not in allowed:
        return None

    if mode == TargetMode.SELECTED_TOKEN:
        return "canvas.tokens.controlled[0]"
    if mode == TargetMode.SELECTED_TARGET:
        return "Array.from(game.user.targets)[0]"
    if mode == TargetMode.TOKEN_ID:
        if not cfg.stripped("tokenId"):
            return None
        return f"canvas.tokens.get({quote(cfg.text('tokenId'))})"
    if mode == TargetMode.TOKEN_NAME:
        if not cfg.stripped("tokenName"):
            return None
        return f"canvas.tokens.placeables.find(t => t.name === {quote(cfg.text('tokenName'))})"
    if mode == TargetMode.TILE_ID:
        if not cfg.stripped("tileId"):
            return None
        return f"canvas.tiles.get({quote(cfg.text('tileId'))})"
    if mode == TargetMode.POINT:
        return point(cfg.get("x"), cfg.get("y"))
    if mode in (TargetMode.STORED_NAME, TargetMode.NAME):
        stored = cfg.stripped("storedName") or cfg.stripped("name")
        return quote(stored) if stored else None
    if mode == TargetMode.IN_TOKEN:
        return "inToken"
    if mode == TargetMode.IN_TILE:
        return "inTile"
    return None


def split_list(value: Any) -> List[str]:
    """Comma separated text (or a list) → non-blank stripped items."""
    if isinstance(value, (list, tuple)):
        items = [to_text(v) for v in value]
    else:
        items = to_text(value).split(",")
    return [item.strip() for item in items if item.strip()]
