"""
Camera and targeting modifiers: canvas shake for pans, distance and label
for crosshairs.
"""

from __future__ import annotations

from typing import Any, Dict

from ..core.Types import Family
from ..noderegistry.NodeRegistry import ChildNodeType, NodeTypeRegistry
from .helpers import ConfigView, chain_call, families, object_literal, quote


CROSSHAIR = families(Family.CROSSHAIR)


@NodeTypeRegistry.builtin("shake")
class ShakeNode(ChildNodeType):
    label = "Shake"
    category = "canvas"
    families = families(Family.CANVAS_PAN)

    TIMINGS = ("duration", "frequency", "fadeInDuration", "fadeOutDuration")

    def create_config(self) -> Dict[str, Any]:
        return {
            "strength": 5,
            "duration": 500,
            "frequency": 0,
            "fadeInDuration": 0,
            "fadeOutDuration": 0,
            "rotation": True,
        }

    def compile_child(self, node, block, ctx):
        c = ConfigView(node.config)
        if c.num("strength") <= 0:
            return

        parts = [f"strength: {c.fmt('strength')}"]
        for key in self.TIMINGS:
            if c.num(key) > 0:
                parts.append(f"{key}: {c.fmt(key)}")
        if not c.flag("rotation", True):
            parts.append("rotation: false")
        block.push(chain_call("shake", object_literal(parts)))


@NodeTypeRegistry.builtin("crosshairDistance")
class CrosshairDistanceNode(ChildNodeType):
    label = "Crosshair Distance"
    category = "crosshair"
    families = CROSSHAIR

    def create_config(self) -> Dict[str, Any]:
        return {"distance": 0}

    def compile_child(self, node, block, ctx):
        c = ConfigView(node.config)
        if c.num("distance") > 0:
            block.push(chain_call("distance", c.fmt("distance")))


@NodeTypeRegistry.builtin("crosshairLabel")
class CrosshairLabelNode(ChildNodeType):
    label = "Crosshair Label"
    category = "crosshair"
    families = CROSSHAIR

    def create_config(self) -> Dict[str, Any]:
        return {"text": "", "dx": 0, "dy": 0}

    def compile_child(self, node, block, ctx):
        c = ConfigView(node.config)
        text = c.stripped("text")
        if not text:
            return

        opts = []
        if c.num("dx") or c.num("dy"):
            opts = [f"dx: {c.fmt('dx')}", f"dy: {c.fmt('dy')}"]
        block.push(chain_call("label", quote(text), options=opts))
