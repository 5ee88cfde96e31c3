"""
Exception classes for playback tree building.

This module defines specific exception types for the structural errors that
can occur while validating and linking a recorded command sequence.
"""

from dataclasses import dataclass, field
from enum import Enum


class ErrorLevel(Enum):
    """Error message detail level for end users vs developers."""

    USER = "user"  # Message and command position only
    DEVELOPER = "developer"  # Adds the open block stack at the failure point


@dataclass
class ErrorContext:
    """
    Context information for error messages.

    Captures where a structural error occurred in the recorded sequence and,
    for developers, which blocks were still open at that point.

    Params:
        index: Position of the offending command in the input sequence
        command_name: Recorded name of the offending command
        open_blocks: Keywords of the open blocks, outermost first
    """

    index: int | None = None
    command_name: str | None = None
    open_blocks: list[str] = field(default_factory=list)

    def format_location(self, error_level: ErrorLevel) -> str:
        """
        Format location information based on error level.

        Params:
            error_level: Whether to show USER or DEVELOPER level details

        Returns:
            Formatted location string with appropriate detail level
        """
        lines = []

        if self.index is not None:
            lines.append(f"  at command {self.index}")

        if self.command_name:
            lines.append(f"  command: {self.command_name}")

        if error_level == ErrorLevel.DEVELOPER:
            if self.open_blocks:
                lines.append(f"  open blocks: {' > '.join(self.open_blocks)}")
            else:
                lines.append("  open blocks: none")

        return "\n".join(lines)


class PlaybackTreeError(Exception):
    """Base exception for all playback tree errors."""

    def __init__(
        self,
        message: str,
        keyword: str | None = None,
        index: int | None = None,
        context: ErrorContext | None = None,
        error_level: ErrorLevel = ErrorLevel.USER,
    ):
        """
        Initialize the exception.

        Params:
            message: Primary error message
            keyword: Control-flow keyword the error is about
            index: Position of the offending command, if any
            context: ErrorContext with location information
            error_level: Level of detail to show in error message
        """
        self.message = message
        self.keyword = keyword
        self.index = index
        self.context = context
        self.error_level = error_level

        if context:
            location_info = context.format_location(error_level)
            full_message = f"{message}\n{location_info}" if location_info else message
        else:
            full_message = message

        super().__init__(full_message)


class InvalidCommandError(PlaybackTreeError):
    """Raised when an input item does not expose a usable command name."""

    def __init__(self, index: int, reason: str):
        """
        Initialize the exception.

        Params:
            index: Position of the invalid item in the input sequence
            reason: Why the item cannot be used as a command
        """
        self.reason = reason
        super().__init__(f"Invalid command at position {index}: {reason}", index=index)


class MalformedBlockError(PlaybackTreeError):
    """Raised when a block is still open after the whole sequence was scanned."""

    pass


class MisplacedKeywordError(PlaybackTreeError):
    """Raised when a control-flow keyword appears outside the block it belongs to."""

    pass


class InvalidElseOrderError(PlaybackTreeError):
    """Raised when an if block has several else arms or an elseIf after its else."""

    pass
