"""
Animation modifiers: movement, rotation and visibility of the object an
animation (and, for a few of them, an effect) is bound to.
"""

from __future__ import annotations

from typing import Any, Dict

from ..core.Types import Family, TargetMode
from ..noderegistry.NodeRegistry import ChildNodeType, NodeTypeRegistry
from .common import BareCallNode, ValueOverrideNode
from .helpers import (
    ConfigView,
    chain_call,
    ease_delay_options,
    families,
    format_number,
    point,
    quote,
    resolve_target,
)


ANIMATION = families(Family.ANIMATION)
ANIMATION_OR_EFFECT = families(Family.ANIMATION, Family.EFFECT)

# Symbolic placement targets plus explicit lookups
PLACEMENT_MODES = (
    TargetMode.IN_TOKEN,
    TargetMode.IN_TILE,
    TargetMode.TOKEN_ID,
    TargetMode.TILE_ID,
    TargetMode.POINT,
)


def _placement_config(**extra: Any) -> Dict[str, Any]:
    config = {"mode": "inToken", "tokenId": "", "tileId": "", "x": 0, "y": 0}
    config.update(extra)
    return config


@NodeTypeRegistry.builtin("on")
class OnNode(ChildNodeType):
    label = "On (Target)"
    category = "animation"
    families = ANIMATION_OR_EFFECT

    def create_config(self) -> Dict[str, Any]:
        return _placement_config()

    def compile_child(self, node, block, ctx):
        target = resolve_target(ConfigView(node.config), PLACEMENT_MODES,
                                default_mode=TargetMode.IN_TOKEN.value)
        if target is not None:
            block.push(chain_call("on", target))


@NodeTypeRegistry.builtin("moveTowards")
class MoveTowardsNode(ChildNodeType):
    label = "Move Towards"
    category = "visual"
    families = ANIMATION_OR_EFFECT

    def create_config(self) -> Dict[str, Any]:
        return _placement_config(ease="linear", delay=0, relativeToCenter=False)

    def compile_child(self, node, block, ctx):
        c = ConfigView(node.config)
        mode = c.text("mode") or TargetMode.IN_TOKEN.value
        target = resolve_target(c, PLACEMENT_MODES, default_mode=TargetMode.IN_TOKEN.value)
        if target is None:
            return

        opts = []
        # no easing towards the bound token
        if c.stripped("ease") and mode != TargetMode.IN_TOKEN:
            opts.append(f"ease: {quote(c.text('ease'))}")
        if c.num("delay"):
            opts.append(f"delay: {c.fmt('delay')}")
        if c.flag("relativeToCenter"):
            opts.append("relativeToCenter: true")

        block.push(chain_call("moveTowards", target, options=opts))


@NodeTypeRegistry.builtin("moveSpeed")
class MoveSpeedNode(ValueOverrideNode):
    label = "Move Speed"
    category = "visual"
    families = ANIMATION_OR_EFFECT
    method = field = "moveSpeed"
    default = 500


@NodeTypeRegistry.builtin("rotateTowards")
class RotateTowardsNode(ChildNodeType):
    label = "Rotate Towards"
    category = "animation"
    families = ANIMATION

    def create_config(self) -> Dict[str, Any]:
        return _placement_config(duration=500, ease="linear", delay=0, rotationOffset=0,
                                 towardsCenter=True, cacheLocation=False)

    def compile_child(self, node, block, ctx):
        c = ConfigView(node.config)
        target = resolve_target(c, PLACEMENT_MODES, default_mode=TargetMode.IN_TOKEN.value)
        if target is None:
            return

        opts = []
        if c.num("duration"):
            opts.append(f"duration: {c.fmt('duration')}")
        if c.stripped("ease"):
            opts.append(f"ease: {quote(c.text('ease'))}")
        if c.num("delay"):
            opts.append(f"delay: {c.fmt('delay')}")
        if c.num("rotationOffset"):
            opts.append(f"rotationOffset: {c.fmt('rotationOffset')}")
        if not c.flag("towardsCenter", True):
            opts.append("towardsCenter: false")
        if c.flag("cacheLocation"):
            opts.append("cacheLocation: true")

        block.push(chain_call("rotateTowards", target, options=opts))


@NodeTypeRegistry.builtin("teleportTo")
class TeleportToNode(ChildNodeType):
    label = "Teleport To"
    category = "animation"
    families = ANIMATION

    def create_config(self) -> Dict[str, Any]:
        return _placement_config(delay=0, relativeToCenter=False)

    def compile_child(self, node, block, ctx):
        c = ConfigView(node.config)
        target = resolve_target(c, PLACEMENT_MODES, default_mode=TargetMode.IN_TOKEN.value)
        if target is None:
            return

        opts = []
        if c.num("delay"):
            opts.append(f"delay: {c.fmt('delay')}")
        if c.flag("relativeToCenter"):
            opts.append("relativeToCenter: true")

        block.push(chain_call("teleportTo", target, options=opts))


@NodeTypeRegistry.builtin("offset")
class OffsetNode(ChildNodeType):
    label = "Offset"
    category = "animation"
    families = ANIMATION

    def create_config(self) -> Dict[str, Any]:
        return {"x": 0, "y": 0}

    def compile_child(self, node, block, ctx):
        c = ConfigView(node.config)
        block.push(chain_call("offset", point(c.get("x"), c.get("y"))))


@NodeTypeRegistry.builtin("closestSquare")
class ClosestSquareNode(BareCallNode):
    label = "Closest Square"
    category = "animation"
    families = ANIMATION
    method = "closestSquare"


@NodeTypeRegistry.builtin("snapToGrid")
class SnapToGridNode(BareCallNode):
    label = "Snap to Grid"
    category = "animation"
    families = ANIMATION
    method = "snapToGrid"


@NodeTypeRegistry.builtin("hide")
class HideNode(BareCallNode):
    label = "Hide"
    category = "animation"
    families = ANIMATION
    method = "hide"


@NodeTypeRegistry.builtin("show")
class ShowNode(BareCallNode):
    label = "Show"
    category = "animation"
    families = ANIMATION
    method = "show"


@NodeTypeRegistry.builtin("rotate")
class RotateNode(ValueOverrideNode):
    label = "Rotate"
    category = "animation"
    families = ANIMATION
    method = field = "rotate"


class _RotateTransitionNode(ChildNodeType):
    method = ""

    def create_config(self) -> Dict[str, Any]:
        return {"degrees": 0, "duration": 500, "ease": "", "delay": 0}

    def compile_child(self, node, block, ctx):
        c = ConfigView(node.config)
        args = [c.fmt("degrees"), c.fmt("duration")]
        opts = ease_delay_options(c.get("ease"), c.get("delay"))
        if opts:
            args.append(opts)
        block.push(chain_call(self.method, *args))


@NodeTypeRegistry.builtin("rotateIn")
class RotateInNode(_RotateTransitionNode):
    label = "Rotate In"
    category = "animation"
    families = ANIMATION
    method = "rotateIn"


@NodeTypeRegistry.builtin("rotateOut")
class RotateOutNode(_RotateTransitionNode):
    label = "Rotate Out"
    category = "animation"
    families = ANIMATION
    method = "rotateOut"


@NodeTypeRegistry.builtin("tint")
class TintNode(ChildNodeType):
    """
    mode "reset" clears the tint, "hex" passes a colour string, "decimal" a
    numeric colour. A decimal that does not parse as a number emits nothing.
    """
    label = "Tint"
    category = "animation"
    families = ANIMATION

    def create_config(self) -> Dict[str, Any]:
        return {"mode": "none", "hex": "", "dec": ""}

    def compile_child(self, node, block, ctx):
        c = ConfigView(node.config)
        mode = c.text("mode")
        if mode == "reset":
            block.push(chain_call("tint"))
        elif mode == "hex" and c.stripped("hex"):
            block.push(chain_call("tint", quote(c.text("hex"))))
        elif mode == "decimal" and c.stripped("dec"):
            value = c.finite("dec")
            if value is not None:
                block.push(chain_call("tint", format_number(value)))
