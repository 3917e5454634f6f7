"""
Root node types. Each opens one chain (`seq.<section>()`) in a fresh Block.

A root that cannot produce a valid opener leaves the block empty; the
compiler then drops the block together with every child attached to it.
"""

from __future__ import annotations

from typing import Any, Dict

from ..core.Types import Family
from ..noderegistry.NodeRegistry import NodeTypeRegistry, RootNodeType
from .helpers import ConfigView, chain_call, quote, text_call


TEXT_SLOT = "text"


@NodeTypeRegistry.builtin("effect")
class EffectNode(RootNodeType):
    label = "Effect"
    category = "sequencer"
    family = Family.EFFECT.value

    def create_config(self) -> Dict[str, Any]:
        return {"file": "", "baseFolder": ""}

    def compile_root(self, node, block, ctx):
        c = ConfigView(node.config)
        file = c.stripped("file")
        if not file:
            return

        block.push("seq.effect()")
        if c.stripped("baseFolder"):
            block.push(chain_call("baseFolder", quote(c.text("baseFolder"))))
        block.push(chain_call("file", quote(file)))


@NodeTypeRegistry.builtin("sound")
class SoundNode(RootNodeType):
    label = "Sound"
    category = "sequencer"
    family = Family.SOUND.value

    def create_config(self) -> Dict[str, Any]:
        return {"file": "", "waitUntilFinished": False, "locally": False}

    def compile_root(self, node, block, ctx):
        c = ConfigView(node.config)
        file = c.stripped("file")
        if not file:
            return

        block.push("seq.sound()")
        block.push(chain_call("file", quote(file)))
        if c.flag("locally"):
            block.push(chain_call("locally", "true"))
        if c.flag("waitUntilFinished"):
            block.push(chain_call("waitUntilFinished"))


@NodeTypeRegistry.builtin("animation")
class AnimationNode(RootNodeType):
    label = "Animation"
    category = "sequencer"
    family = Family.ANIMATION.value

    def create_config(self) -> Dict[str, Any]:
        return {"preset": ""}

    def compile_root(self, node, block, ctx):
        c = ConfigView(node.config)
        block.push("seq.animation()")
        if c.stripped("preset"):
            block.push(chain_call("preset", quote(c.text("preset"))))


@NodeTypeRegistry.builtin("scrollingText")
class ScrollingTextNode(RootNodeType):
    label = "ScrollingText"
    category = "sequencer"
    family = Family.SCROLLING_TEXT.value

    def create_config(self) -> Dict[str, Any]:
        return {"text": "Text", "at": "selected-token", "durationMs": 1000}

    def compile_root(self, node, block, ctx):
        c = ConfigView(node.config)
        block.push("seq.scrollingText()")

        if c.text("at") == "selected-token":
            block.push(chain_call("atLocation", "canvas.tokens.controlled[0]"))

        # text children rewrite this line in place
        text = c.text("text")
        block.reserve(TEXT_SLOT, text_call(text), value=text)

        if c.num("durationMs") > 0:
            block.push(chain_call("duration", c.fmt("durationMs")))


@NodeTypeRegistry.builtin("canvasPan")
class CanvasPanNode(RootNodeType):
    label = "CanvasPan"
    category = "sequencer"
    family = Family.CANVAS_PAN.value

    def create_config(self) -> Dict[str, Any]:
        return {"at": "selected-token", "durationMs": 1000, "scale": 1.0, "lockViewMs": 0}

    def compile_root(self, node, block, ctx):
        c = ConfigView(node.config)
        block.push("seq.canvasPan()")

        if c.text("at") == "selected-token":
            block.push(chain_call("atLocation", "canvas.tokens.controlled[0]"))
        if c.num("durationMs") > 0:
            block.push(chain_call("duration", c.fmt("durationMs")))

        scale = c.finite("scale")
        if scale is not None and scale not in (0, 1):
            block.push(chain_call("scale", c.fmt("scale")))

        if c.num("lockViewMs") > 0:
            block.push(chain_call("lockView", c.fmt("lockViewMs")))


@NodeTypeRegistry.builtin("crosshair")
class CrosshairNode(RootNodeType):
    label = "Crosshair"
    category = "sequencer"
    family = Family.CROSSHAIR.value

    def create_config(self) -> Dict[str, Any]:
        return {"name": "target", "file": ""}

    def compile_root(self, node, block, ctx):
        c = ConfigView(node.config)
        name = c.get("name") or "target"
        block.push(f"seq.crosshair({quote(name)})")

        file = c.stripped("file")
        if file:
            block.push(chain_call("texture", quote(file)))
