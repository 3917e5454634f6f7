from enum import Enum


class NodeRole(Enum):
    ROOT = "root"          # opens a method chain, anchors a family
    CHILD = "child"        # continuation lines under a root
    UTILITY = "utility"    # standalone statement, never chained

    @staticmethod
    def parse(value) -> 'NodeRole':
        if isinstance(value, NodeRole):
            return value
        try:
            return NodeRole(str(value))
        except ValueError:
            raise ValueError(f"Unknown node role '{value}'")


class Family(str, Enum):
    """Built-in chain families. Extensions may use any other string."""
    EFFECT = "effect"
    SOUND = "sound"
    ANIMATION = "animation"
    SCROLLING_TEXT = "scrollingText"
    CANVAS_PAN = "canvasPan"
    CROSSHAIR = "crosshair"


class TargetMode(str, Enum):
    SELECTED_TOKEN = "selected-token"
    SELECTED_TARGET = "selected-target"
    TOKEN_ID = "token-id"
    TOKEN_NAME = "token-name"
    TILE_ID = "tile-id"
    POINT = "point"
    STORED_NAME = "stored-name"
    NAME = "name"              # alias of STORED_NAME
    IN_TOKEN = "inToken"       # object the surrounding effect is centered on
    IN_TILE = "inTile"         # tile the surrounding effect is centered on


class DiagnosticKind(Enum):
    UNKNOWN_TYPE = "unknown-type"
    FAMILY_MISMATCH = "family-mismatch"
    ROLE_MISMATCH = "role-mismatch"
    ORPHAN_CHILD = "orphan-child"
    ROOT_OMITTED = "root-omitted"
