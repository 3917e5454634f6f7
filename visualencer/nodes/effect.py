"""
Effect modifiers
================

Sizing, anchoring, mirroring and render-layer options that only make sense on
an effect section (attachTo is shared with sounds so a sound can follow a
token).
"""

from __future__ import annotations

from typing import Any, Dict, List

from ..core.Types import Family, TargetMode
from ..noderegistry.NodeRegistry import ChildNodeType, NodeTypeRegistry
from .common import BareCallNode, ValueOverrideNode
from .helpers import ConfigView, chain_call, ease_delay_options, families, format_number, point, quote, resolve_target


EFFECT = families(Family.EFFECT)

ENTITY_MODES = (
    TargetMode.SELECTED_TOKEN,
    TargetMode.SELECTED_TARGET,
    TargetMode.TOKEN_ID,
    TargetMode.TOKEN_NAME,
    TargetMode.TILE_ID,
    TargetMode.STORED_NAME,
    TargetMode.NAME,
)
ALL_MODES = ENTITY_MODES + (TargetMode.POINT,)


def _entity_config(mode: str, **extra: Any) -> Dict[str, Any]:
    config = {"mode": mode, "tokenId": "", "tokenName": "", "tileId": "", "storedName": "", "x": 0, "y": 0}
    config.update(extra)
    return config


@NodeTypeRegistry.builtin("persist")
class PersistNode(ChildNodeType):
    label = "Persist"
    category = "effect"
    families = EFFECT

    def create_config(self) -> Dict[str, Any]:
        return {"persistTokenPrototype": False}

    def compile_child(self, node, block, ctx):
        if ConfigView(node.config).flag("persistTokenPrototype"):
            block.push(chain_call("persist", "true", options=["persistTokenPrototype: true"]))
        else:
            block.push(chain_call("persist"))


# ── Size ──────────────────────────────────────────────────────────────────────

@NodeTypeRegistry.builtin("scale")
class ScaleNode(ChildNodeType):
    """mode "uniform" scales both axes by `scale`; mode "xy" takes scaleX/scaleY."""
    label = "Scale"
    category = "effect"
    families = EFFECT

    def create_config(self) -> Dict[str, Any]:
        return {"mode": "uniform", "scale": 1, "scaleX": 1, "scaleY": 1}

    def compile_child(self, node, block, ctx):
        c = ConfigView(node.config)
        if c.text("mode") == "xy":
            x = format_number(c.get("scaleX", 1))
            y = format_number(c.get("scaleY", 1))
            block.push(chain_call("scale", f"{{ x: {x}, y: {y} }}"))
        else:
            block.push(chain_call("scale", format_number(c.get("scale", 1))))


class _ScaleTransitionNode(ChildNodeType):
    method = ""

    def create_config(self) -> Dict[str, Any]:
        return {"scale": 0, "duration": 500, "ease": "", "delay": 0}

    def compile_child(self, node, block, ctx):
        c = ConfigView(node.config)
        if c.num("duration") <= 0:
            return
        args = [c.fmt("scale"), c.fmt("duration")]
        opts = ease_delay_options(c.get("ease"), c.get("delay"))
        if opts:
            args.append(opts)
        block.push(chain_call(self.method, *args))


@NodeTypeRegistry.builtin("scaleIn")
class ScaleInNode(_ScaleTransitionNode):
    label = "Scale In"
    category = "effect"
    families = EFFECT
    method = "scaleIn"


@NodeTypeRegistry.builtin("scaleOut")
class ScaleOutNode(_ScaleTransitionNode):
    label = "Scale Out"
    category = "effect"
    families = EFFECT
    method = "scaleOut"


@NodeTypeRegistry.builtin("scaleToObject")
class ScaleToObjectNode(ChildNodeType):
    label = "Scale To Object"
    category = "effect"
    families = EFFECT

    def create_config(self) -> Dict[str, Any]:
        return {"scale": 1, "uniform": False, "considerTokenScale": False}

    def compile_child(self, node, block, ctx):
        c = ConfigView(node.config)
        opts = []
        if c.flag("uniform"):
            opts.append("uniform: true")
        if c.flag("considerTokenScale"):
            opts.append("considerTokenScale: true")

        scale = c.finite("scale")
        args = []
        # options need the positional scale in front of them
        if (scale is not None and scale not in (0, 1)) or opts:
            args.append(format_number(1 if scale in (None, 0) else scale))
        block.push(chain_call("scaleToObject", *args, options=opts))


@NodeTypeRegistry.builtin("size")
class SizeNode(ChildNodeType):
    label = "Size"
    category = "effect"
    families = EFFECT

    def create_config(self) -> Dict[str, Any]:
        return {"width": 0, "height": 0, "gridUnits": False}

    def compile_child(self, node, block, ctx):
        c = ConfigView(node.config)
        if c.num("width") <= 0:
            return

        if c.num("height") > 0:
            size = f"{{ width: {c.fmt('width')}, height: {c.fmt('height')} }}"
        else:
            size = c.fmt("width")
        opts = ["gridUnits: true"] if c.flag("gridUnits") else []
        block.push(chain_call("size", size, options=opts))


# ── Anchoring ─────────────────────────────────────────────────────────────────

@NodeTypeRegistry.builtin("stretchTo")
class StretchToNode(ChildNodeType):
    label = "Stretch To"
    category = "effect"
    families = EFFECT

    def create_config(self) -> Dict[str, Any]:
        return _entity_config("selected-target", cacheLocation=False, attachTo=False, onlyX=False,
                              tiling=False, randomOffset=0, gridUnits=False)

    def compile_child(self, node, block, ctx):
        c = ConfigView(node.config)
        target = resolve_target(c, ALL_MODES, default_mode=TargetMode.SELECTED_TARGET.value)
        if target is None:
            return

        opts = []
        for key in ("cacheLocation", "attachTo", "onlyX", "tiling"):
            if c.flag(key):
                opts.append(f"{key}: true")
        if c.num("randomOffset"):
            opts.append(f"randomOffset: {c.fmt('randomOffset')}")
        if c.flag("gridUnits"):
            opts.append("gridUnits: true")

        block.push(chain_call("stretchTo", target, options=opts))


@NodeTypeRegistry.builtin("attachTo")
class AttachToNode(ChildNodeType):
    """
    Binds the section to a token/tile. The bind* and followRotation flags
    default to true on the host side, so only an explicit false is written.
    """
    label = "Attach To"
    category = "effect"
    families = families(Family.EFFECT, Family.SOUND)

    def create_config(self) -> Dict[str, Any]:
        return _entity_config("selected-token", align="center", edge="on", bindVisibility=True,
                              bindAlpha=True, followRotation=True, randomOffset=0, offsetX=0,
                              offsetY=0, gridUnits=False, local=False)

    def _options(self, c: ConfigView) -> List[str]:
        opts = []
        align = c.stripped("align")
        if align and align != "center":
            opts.append(f"align: {quote(align)}")
        edge = c.stripped("edge")
        if edge and edge != "on":
            opts.append(f"edge: {quote(edge)}")
        for key in ("bindVisibility", "bindAlpha", "followRotation"):
            if not c.flag(key, True):
                opts.append(f"{key}: false")
        if c.num("randomOffset"):
            opts.append(f"randomOffset: {c.fmt('randomOffset')}")
        if c.num("offsetX") or c.num("offsetY"):
            opts.append(f"offset: {point(c.get('offsetX'), c.get('offsetY'))}")
        if c.flag("gridUnits"):
            opts.append("gridUnits: true")
        if c.flag("local"):
            opts.append("local: true")
        return opts

    def compile_child(self, node, block, ctx):
        c = ConfigView(node.config)
        target = resolve_target(c, ENTITY_MODES, default_mode=TargetMode.SELECTED_TOKEN.value)
        if target is None:
            return
        block.push(chain_call("attachTo", target, options=self._options(c)))


@NodeTypeRegistry.builtin("spriteOffset")
class SpriteOffsetNode(ChildNodeType):
    label = "Sprite Offset"
    category = "effect"
    families = EFFECT

    def create_config(self) -> Dict[str, Any]:
        return {"x": 0, "y": 0, "gridUnits": False, "local": False}

    def compile_child(self, node, block, ctx):
        c = ConfigView(node.config)
        if not c.num("x") and not c.num("y"):
            return

        opts = []
        if c.flag("gridUnits"):
            opts.append("gridUnits: true")
        if c.flag("local"):
            opts.append("local: true")
        block.push(chain_call("spriteOffset", point(c.get("x"), c.get("y")), options=opts))


# ── Rendering ─────────────────────────────────────────────────────────────────

@NodeTypeRegistry.builtin("mirror")
class MirrorNode(ChildNodeType):
    label = "Mirror"
    category = "effect"
    families = EFFECT

    FLAGS = ("mirrorX", "mirrorY", "randomizeMirrorX", "randomizeMirrorY")

    def create_config(self) -> Dict[str, Any]:
        return {key: False for key in self.FLAGS}

    def compile_child(self, node, block, ctx):
        c = ConfigView(node.config)
        for key in self.FLAGS:
            if c.flag(key):
                block.push(chain_call(key))


@NodeTypeRegistry.builtin("randomRotation")
class RandomRotationNode(BareCallNode):
    label = "Random Rotation"
    category = "effect"
    families = EFFECT
    method = "randomRotation"


@NodeTypeRegistry.builtin("belowTokens")
class BelowTokensNode(BareCallNode):
    label = "Below Tokens"
    category = "effect"
    families = EFFECT
    method = "belowTokens"


@NodeTypeRegistry.builtin("locally")
class LocallyNode(BareCallNode):
    label = "Locally"
    category = "effect"
    families = EFFECT
    method = "locally"


@NodeTypeRegistry.builtin("screenSpace")
class ScreenSpaceNode(ChildNodeType):
    label = "Screen Space"
    category = "effect"
    families = EFFECT

    def create_config(self) -> Dict[str, Any]:
        return {"aboveUI": False, "positionX": 0, "positionY": 0, "anchorX": 0.5, "anchorY": 0.5}

    def compile_child(self, node, block, ctx):
        c = ConfigView(node.config)
        block.push(chain_call("screenSpace"))
        if c.flag("aboveUI"):
            block.push(chain_call("screenSpaceAboveUI"))
        if c.num("positionX") or c.num("positionY"):
            block.push(chain_call("screenSpacePosition", point(c.get("positionX"), c.get("positionY"))))

        anchor_x = c.finite("anchorX")
        anchor_y = c.finite("anchorY")
        anchor_x = 0.5 if anchor_x is None else anchor_x
        anchor_y = 0.5 if anchor_y is None else anchor_y
        if (anchor_x, anchor_y) != (0.5, 0.5):
            block.push(chain_call("screenSpaceAnchor", point(anchor_x, anchor_y)))


@NodeTypeRegistry.builtin("zIndex")
class ZIndexNode(ValueOverrideNode):
    label = "Z-Index"
    category = "effect"
    families = EFFECT
    method = field = "zIndex"
