"""
playtree - Turn recorded test steps into a playback graph

playtree validates the control-flow structure of a flat recorded command
sequence (if / elseIf / else, while, times, do / repeatIf, end) and links it
into a graph of command nodes that a playback engine can walk.
"""

from importlib.metadata import version

from playtree.config import KeywordTable, PlaybackConfig
from playtree.core import CommandKind, CommandNode, Keyword, is_control_flow
from playtree.exceptions import (
    ErrorLevel,
    InvalidCommandError,
    InvalidElseOrderError,
    MalformedBlockError,
    MisplacedKeywordError,
    PlaybackTreeError,
)
from playtree.models import Command
from playtree.structure import PlaybackGraph, PlaybackTree, build_playback_tree

__version__ = version("playtree")

__all__ = [
    "__version__",
    "Command",
    "CommandNode",
    "CommandKind",
    "Keyword",
    "is_control_flow",
    "PlaybackTree",
    "PlaybackGraph",
    "build_playback_tree",
    "PlaybackConfig",
    "KeywordTable",
    "ErrorLevel",
    "PlaybackTreeError",
    "InvalidCommandError",
    "MalformedBlockError",
    "MisplacedKeywordError",
    "InvalidElseOrderError",
]
