"""
Flow nodes: standalone statements (utility role) and the timing/conditional
modifiers that can be chained onto most sections.
"""

from __future__ import annotations

from typing import Any, Dict

from ..compiler.writer import CodeWriter
from ..core.Types import Family
from ..noderegistry.NodeRegistry import ChildNodeType, NodeTypeRegistry, UtilityNodeType
from .helpers import ConfigView, chain_call, families, format_number, quote


TIMED_FAMILIES = families(Family.ANIMATION, Family.EFFECT, Family.SOUND,
                          Family.SCROLLING_TEXT, Family.CANVAS_PAN)


# ── Utility nodes ─────────────────────────────────────────────────────────────

@NodeTypeRegistry.builtin("start")
class StartNode(UtilityNodeType):
    """Anchors the graph on the canvas; emits nothing."""
    label = "Start / Sequence"
    category = "flow"

    def create_config(self) -> Dict[str, Any]:
        return {"label": "Sequence start"}

    def compile(self, node, ctx):
        pass


@NodeTypeRegistry.builtin("play")
class PlayNode(UtilityNodeType):
    """Marks the end of the graph; the emitter writes the play call."""
    label = "Play"
    category = "flow"

    def compile(self, node, ctx):
        pass


@NodeTypeRegistry.builtin("wait")
class WaitNode(UtilityNodeType):
    label = "Wait"
    category = "flow"

    def create_config(self) -> Dict[str, Any]:
        return {"ms": 1000, "msMax": 0}

    def compile(self, node, ctx):
        c = ConfigView(node.config)
        ms = c.num("ms")
        if ms <= 0:
            return
        if c.num("msMax") > ms:
            ctx.emit(f"seq.wait({format_number(ms)}, {c.fmt('msMax')});")
        else:
            ctx.emit(f"seq.wait({format_number(ms)});")


@NodeTypeRegistry.builtin("macro")
class MacroNode(UtilityNodeType):
    label = "Macro"
    category = "flow"

    def create_config(self) -> Dict[str, Any]:
        return {"macroName": "MacroName"}

    def compile(self, node, ctx):
        c = ConfigView(node.config)
        name = c.get("macroName") or "Macro"
        ctx.emit(f"seq.macro({quote(name)});")


@NodeTypeRegistry.builtin("callback")
class CallbackNode(UtilityNodeType):
    """
    `seq.thenDo(...)` wrapping user code. The body is re-indented one level and
    emitted verbatim; unlike the override node no return is ever added.
    """
    label = "Callback (thenDo)"
    category = "flow"

    def create_config(self) -> Dict[str, Any]:
        return {"body": "", "async": True}

    def compile(self, node, ctx):
        c = ConfigView(node.config)
        body = c.text("body")
        if not body.strip():
            return

        header = "async () => {" if c.flag("async", True) else "() => {"
        writer = CodeWriter()
        writer.writeln(f"seq.thenDo({header}")
        writer.push()
        writer.body(body)
        writer.pop()
        writer.writeln("});")
        for line in writer.lines():
            ctx.emit(line)


# ── Chained flow modifiers ────────────────────────────────────────────────────

@NodeTypeRegistry.builtin("waitUntilFinished")
class WaitUntilFinishedNode(ChildNodeType):
    label = "Wait Until Finished"
    category = "common"
    families = TIMED_FAMILIES

    def create_config(self) -> Dict[str, Any]:
        return {"minDelay": 0}

    def compile_child(self, node, block, ctx):
        c = ConfigView(node.config)
        if c.num("minDelay"):
            block.push(chain_call("waitUntilFinished", c.fmt("minDelay")))
        else:
            block.push(chain_call("waitUntilFinished"))


@NodeTypeRegistry.builtin("async")
class AsyncNode(ChildNodeType):
    label = "Async"
    category = "common"
    families = TIMED_FAMILIES

    def compile_child(self, node, block, ctx):
        block.push(chain_call("async"))


@NodeTypeRegistry.builtin("repeats")
class RepeatsNode(ChildNodeType):
    label = "Repeats"
    category = "flow"
    families = families(Family.EFFECT, Family.ANIMATION, Family.SOUND, Family.SCROLLING_TEXT)

    def create_config(self) -> Dict[str, Any]:
        return {"repeats": 1, "repeatDelayMin": 0, "repeatDelayMax": 0}

    def compile_child(self, node, block, ctx):
        c = ConfigView(node.config)
        count = c.num("repeats")
        if count <= 1:
            return

        low = c.num("repeatDelayMin")
        high = c.num("repeatDelayMax")
        if high and high > low:
            block.push(chain_call("repeats", format_number(count), format_number(low), format_number(high)))
        elif low:
            block.push(chain_call("repeats", format_number(count), format_number(low)))
        else:
            block.push(chain_call("repeats", format_number(count)))


@NodeTypeRegistry.builtin("playIf")
class PlayIfNode(ChildNodeType):
    label = "Play If"
    category = "flow"
    families = TIMED_FAMILIES

    def create_config(self) -> Dict[str, Any]:
        return {"mode": "always", "bool": True, "chance": 0.5}

    def compile_child(self, node, block, ctx):
        c = ConfigView(node.config)
        mode = c.text("mode") or "always"

        if mode == "boolean":
            block.push(chain_call("playIf", "true" if c.flag("bool") else "false"))
        elif mode == "chance":
            chance = c.finite("chance")
            if chance is not None and 0 < chance < 1:
                block.push(chain_call("playIf", f"() => Math.random() < {format_number(chance)}"))


@NodeTypeRegistry.builtin("delay")
class DelayNode(ChildNodeType):
    label = "Delay"
    category = "common"
    families = TIMED_FAMILIES

    def create_config(self) -> Dict[str, Any]:
        return {"delayMin": 0, "delayMax": 0}

    def compile_child(self, node, block, ctx):
        c = ConfigView(node.config)
        if c.num("delayMax") > 0:
            # separator spacing is part of the output format
            block.push(f"  .delay({c.fmt('delayMin')} , {c.fmt('delayMax')})")
        else:
            block.push(chain_call("delay", c.fmt("delayMin")))
