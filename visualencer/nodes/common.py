"""
Modifiers shared by several sections: placement, timing, audio/visual fades,
naming, visibility, overrides and the floating text label.
"""

from __future__ import annotations

import re
from typing import Any, Dict, List

from ..compiler.writer import CodeWriter
from ..core.Types import Family, TargetMode
from ..noderegistry.NodeRegistry import ChildNodeType, NodeTypeRegistry
from .helpers import (
    ConfigView,
    chain_call,
    ease_delay_options,
    families,
    format_number,
    object_literal,
    point,
    quote,
    resolve_target,
    split_list,
    text_call,
)
from .sections import TEXT_SLOT


MEDIA = families(Family.EFFECT, Family.SOUND)

_RETURN = re.compile(r"\breturn\b")


@NodeTypeRegistry.builtin("atLocation")
class AtLocationNode(ChildNodeType):
    label = "At Location"
    category = "common"
    families = families(Family.EFFECT, Family.ANIMATION, Family.SOUND)

    MODES = (
        TargetMode.SELECTED_TOKEN,
        TargetMode.SELECTED_TARGET,
        TargetMode.TOKEN_ID,
        TargetMode.TOKEN_NAME,
        TargetMode.TILE_ID,
        TargetMode.POINT,
        TargetMode.STORED_NAME,
        TargetMode.NAME,
    )

    def create_config(self) -> Dict[str, Any]:
        return {
            "mode": "selected-token",
            "tokenId": "",
            "tokenName": "",
            "tileId": "",
            "storedName": "",
            "x": 0,
            "y": 0,
            "cacheLocation": False,
            "randomOffset": 0,
            "offsetX": 0,
            "offsetY": 0,
            "local": False,
            "gridUnits": False,
        }

    def compile_child(self, node, block, ctx):
        c = ConfigView(node.config)
        target = resolve_target(c, self.MODES, default_mode=TargetMode.SELECTED_TOKEN.value)
        if target is None:
            return

        opts = []
        if c.flag("cacheLocation"):
            opts.append("cacheLocation: true")
        if c.num("randomOffset"):
            opts.append(f"randomOffset: {c.fmt('randomOffset')}")
        if c.num("offsetX") or c.num("offsetY"):
            opts.append(f"offset: {point(c.get('offsetX'), c.get('offsetY'))}")
        if c.flag("local"):
            opts.append("local: true")
        if c.flag("gridUnits"):
            opts.append("gridUnits: true")

        block.push(chain_call("atLocation", target, options=opts))


class BareCallNode(ChildNodeType):
    """Emits `.<method>()` unconditionally."""
    method = ""

    def compile_child(self, node, block, ctx):
        block.push(chain_call(self.method))


class ValueOverrideNode(ChildNodeType):
    """Single-value call emitted whenever the field holds a number, including 0."""
    method = ""
    field = ""
    default: Any = 0

    def create_config(self) -> Dict[str, Any]:
        return {self.field: self.default}

    def compile_child(self, node, block, ctx):
        value = ConfigView(node.config).finite(self.field)
        if value is None:
            return
        block.push(chain_call(self.method, format_number(value)))


@NodeTypeRegistry.builtin("duration")
class DurationNode(ValueOverrideNode):
    label = "Duration"
    category = "common"
    families = families(Family.ANIMATION, Family.EFFECT, Family.SOUND,
                        Family.SCROLLING_TEXT, Family.CANVAS_PAN)
    method = field = "duration"
    default = 500


@NodeTypeRegistry.builtin("opacity")
class OpacityNode(ValueOverrideNode):
    label = "Opacity"
    category = "visual"
    families = families(Family.ANIMATION, Family.EFFECT)
    method = field = "opacity"
    default = 1


@NodeTypeRegistry.builtin("volume")
class VolumeNode(ValueOverrideNode):
    label = "Volume"
    category = "common"
    families = families(Family.SOUND)
    method = field = "volume"
    default = 0.8


class _FadePairNode(ChildNodeType):
    fade_in = ""
    fade_out = ""

    def create_config(self) -> Dict[str, Any]:
        return {
            "fadeInDuration": 0,
            "fadeInEase": "",
            "fadeInDelay": 0,
            "fadeOutDuration": 0,
            "fadeOutEase": "",
            "fadeOutDelay": 0,
        }

    def compile_child(self, node, block, ctx):
        c = ConfigView(node.config)
        for method, prefix in ((self.fade_in, "fadeIn"), (self.fade_out, "fadeOut")):
            duration = c.num(f"{prefix}Duration")
            if duration <= 0:
                continue
            opts = ease_delay_options(c.get(f"{prefix}Ease"), c.get(f"{prefix}Delay"))
            if opts:
                block.push(chain_call(method, format_number(duration), opts))
            else:
                block.push(chain_call(method, format_number(duration)))


@NodeTypeRegistry.builtin("fade")
class FadeNode(_FadePairNode):
    label = "Fade (Visual)"
    category = "common"
    families = families(Family.EFFECT, Family.ANIMATION)
    fade_in = "fadeIn"
    fade_out = "fadeOut"


@NodeTypeRegistry.builtin("fadeAudio")
class FadeAudioNode(_FadePairNode):
    label = "Fade (Audio)"
    category = "common"
    families = families(Family.EFFECT, Family.SOUND, Family.ANIMATION)
    fade_in = "fadeInAudio"
    fade_out = "fadeOutAudio"


class _TimeBoundNode(ChildNodeType):
    """`.<bound>(ms)` when positive, `.<bound>Perc(p)` whenever a percentage is given."""
    bound = ""
    perc_default: Any = ""

    def create_config(self) -> Dict[str, Any]:
        return {self.bound: 0, f"{self.bound}Perc": self.perc_default}

    def compile_child(self, node, block, ctx):
        c = ConfigView(node.config)
        if c.num(self.bound) > 0:
            block.push(chain_call(self.bound, c.fmt(self.bound)))

        perc = c.finite(f"{self.bound}Perc")
        if perc is not None:
            block.push(chain_call(f"{self.bound}Perc", format_number(perc)))


@NodeTypeRegistry.builtin("startTime")
class StartTimeNode(_TimeBoundNode):
    label = "Start Time"
    category = "common"
    families = MEDIA
    bound = "startTime"
    perc_default = 0


@NodeTypeRegistry.builtin("endTime")
class EndTimeNode(_TimeBoundNode):
    label = "End Time"
    category = "common"
    families = MEDIA
    bound = "endTime"


@NodeTypeRegistry.builtin("timeRange")
class TimeRangeNode(ChildNodeType):
    label = "Time Range"
    category = "common"
    families = MEDIA

    def create_config(self) -> Dict[str, Any]:
        return {"inMs": 0, "outMs": 0}

    def compile_child(self, node, block, ctx):
        c = ConfigView(node.config)
        start, end = c.num("inMs"), c.num("outMs")
        if end > start:
            block.push(chain_call("timeRange", format_number(start), format_number(end)))


@NodeTypeRegistry.builtin("playbackRate")
class PlaybackRateNode(ChildNodeType):
    label = "Playback Rate"
    category = "common"
    families = MEDIA

    def create_config(self) -> Dict[str, Any]:
        return {"rate": 1}

    def compile_child(self, node, block, ctx):
        rate = ConfigView(node.config).num("rate")
        if rate > 0 and rate != 1:
            block.push(chain_call("playbackRate", format_number(rate)))


@NodeTypeRegistry.builtin("name")
class NameNode(ChildNodeType):
    label = "Name"
    category = "common"
    families = MEDIA

    def create_config(self) -> Dict[str, Any]:
        return {"name": ""}

    def compile_child(self, node, block, ctx):
        name = ConfigView(node.config).stripped("name")
        if name:
            block.push(chain_call("name", quote(name)))


@NodeTypeRegistry.builtin("forUsers")
class ForUsersNode(ChildNodeType):
    label = "For Users"
    category = "common"
    families = MEDIA

    def create_config(self) -> Dict[str, Any]:
        return {"users": ""}

    def compile_child(self, node, block, ctx):
        users = split_list(ConfigView(node.config).get("users"))
        if users:
            block.push(chain_call("forUsers", "[" + ", ".join(quote(u) for u in users) + "]"))


@NodeTypeRegistry.builtin("override")
class OverrideNode(ChildNodeType):
    """
    `.addOverride(async (section, data) => { ... })` around user code.

    The body is re-indented one level inside the continuation indent. When it
    has no return statement of its own, `return data;` closes it so the
    section keeps its data.
    """
    label = "Override"
    category = "advanced"
    families = families(Family.EFFECT, Family.SOUND, Family.ANIMATION)

    def create_config(self) -> Dict[str, Any]:
        return {"body": ""}

    def compile_child(self, node, block, ctx):
        body = ConfigView(node.config).text("body")
        if not body.strip():
            return

        writer = CodeWriter(indent=1)
        writer.writeln(".addOverride(async (section, data) => {")
        writer.push()
        writer.body(body)
        if not _RETURN.search(body):
            writer.writeln("return data;")
        writer.pop()
        writer.writeln("})")
        block.extend(writer.lines())


@NodeTypeRegistry.builtin("text")
class TextNode(ChildNodeType):
    """
    Floating text label.

    On a root that reserved the text slot (scrollingText) the slot line is
    rebuilt in place: this node's text when non-blank, otherwise the root's
    own text. Elsewhere a new `.text(...)` line is appended. Style fields are
    hoisted into a `const textStyleN = {...};` declaration.
    """
    label = "Text"
    category = "visual"
    families = families(Family.SCROLLING_TEXT, Family.EFFECT)

    # style key -> value kind, in output order
    STYLE_KEYS = (
        ("fontFamily", "text"),
        ("fontSize", "number"),
        ("fontWeight", "text"),
        ("fill", "text"),
        ("stroke", "text"),
        ("strokeThickness", "number"),
        ("align", "text"),
        ("dropShadow", "flag"),
        ("wordWrap", "flag"),
        ("wordWrapWidth", "number"),
    )

    def create_config(self) -> Dict[str, Any]:
        return {
            "text": "",
            "fontFamily": "",
            "fontSize": 0,
            "fontWeight": "",
            "fill": "",
            "stroke": "",
            "strokeThickness": 0,
            "align": "",
            "dropShadow": False,
            "wordWrap": False,
            "wordWrapWidth": 0,
        }

    def _style_parts(self, c: ConfigView) -> List[str]:
        parts = []
        for key, kind in self.STYLE_KEYS:
            if kind == "text" and c.stripped(key):
                parts.append(f"{key}: {quote(c.text(key))}")
            elif kind == "number" and c.num(key) > 0:
                parts.append(f"{key}: {c.fmt(key)}")
            elif kind == "flag" and c.flag(key):
                parts.append(f"{key}: true")
        return parts

    def compile_child(self, node, block, ctx):
        c = ConfigView(node.config)
        own = c.text("text")

        if block.has_slot(TEXT_SLOT):
            text = own if own.strip() else block.slot_value(TEXT_SLOT, "")
        elif own.strip():
            text = own
        else:
            return

        parts = self._style_parts(c)
        style = ctx.declare("textStyle", object_literal(parts)) if parts else None
        line = text_call(text, style)

        if not block.fill(TEXT_SLOT, line):
            block.push(line)
