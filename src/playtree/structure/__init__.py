"""
Playback tree building.

Validation and linking passes plus the `PlaybackTree` coordinator.
"""

from playtree.structure.builder import PlaybackGraph, PlaybackTree, build_playback_tree
from playtree.structure.frames import BlockFrame
from playtree.structure.linking import (
    LinkingPass,
    NodeLinks,
    first_end_node_at_level,
    first_node_at_level,
)
from playtree.structure.validation import ValidationPass

__all__ = [
    "PlaybackTree",
    "PlaybackGraph",
    "build_playback_tree",
    "BlockFrame",
    "ValidationPass",
    "LinkingPass",
    "NodeLinks",
    "first_node_at_level",
    "first_end_node_at_level",
]
