"""
Core playback tree components.

This package provides the fundamental building blocks: the control-flow
vocabulary and the node type the playback graph is made of.
"""

from playtree.core.command_node import CommandNode
from playtree.core.types import (
    LOOP_HEADER_KEYWORDS,
    LOOP_KEYWORDS,
    CommandKind,
    CommandLike,
    Keyword,
    is_control_flow,
    is_loop,
    kind_of,
)

__all__ = [
    "CommandNode",
    "CommandKind",
    "CommandLike",
    "Keyword",
    "LOOP_KEYWORDS",
    "LOOP_HEADER_KEYWORDS",
    "is_control_flow",
    "is_loop",
    "kind_of",
]
