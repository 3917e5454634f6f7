from __future__ import annotations

from typing import Any, Dict

from ..core.Types import Family
from ..noderegistry.NodeRegistry import ChildNodeType, NodeTypeRegistry
from .helpers import ConfigView, chain_call, families, quote


SOUND = families(Family.SOUND)


@NodeTypeRegistry.builtin("audioChannel")
class AudioChannelNode(ChildNodeType):
    label = "Audio Channel"
    category = "sound"
    families = SOUND

    def create_config(self) -> Dict[str, Any]:
        return {"channel": ""}

    def compile_child(self, node, block, ctx):
        channel = ConfigView(node.config).stripped("channel")
        if channel:
            block.push(chain_call("audioChannel", quote(channel)))


@NodeTypeRegistry.builtin("soundRadius")
class SoundRadiusNode(ChildNodeType):
    """Positional audio. distanceEasing is on by default, so only false is written."""
    label = "Sound Radius"
    category = "sound"
    families = SOUND

    def create_config(self) -> Dict[str, Any]:
        return {"radius": 0, "constrainedByWalls": False, "distanceEasing": True}

    def compile_child(self, node, block, ctx):
        c = ConfigView(node.config)
        if c.num("radius") > 0:
            block.push(chain_call("radius", c.fmt("radius")))
        if c.flag("constrainedByWalls"):
            block.push(chain_call("constrainedByWalls", "true"))
        if not c.flag("distanceEasing", True):
            block.push(chain_call("distanceEasing", "false"))
