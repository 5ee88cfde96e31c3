"""
Playback tree exception classes.

This package provides all exception types raised while building a playback
tree, for consistent error handling and reporting.
"""

from playtree.exceptions.core import (
    ErrorContext,
    ErrorLevel,
    InvalidCommandError,
    InvalidElseOrderError,
    MalformedBlockError,
    MisplacedKeywordError,
    PlaybackTreeError,
)

__all__ = [
    "PlaybackTreeError",
    "InvalidCommandError",
    "MalformedBlockError",
    "MisplacedKeywordError",
    "InvalidElseOrderError",
    "ErrorContext",
    "ErrorLevel",
]
