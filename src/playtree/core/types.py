"""
Core type definitions for playback tree building.

This module contains the control-flow vocabulary shared by the validation and
linking passes: the keywords a recorded command may carry and the structural
kind each keyword belongs to.
"""

from enum import Enum
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from playtree.config import KeywordTable


@runtime_checkable
class CommandLike(Protocol):
    """Anything recorded as a test step; only the name matters here."""

    name: str


class Keyword(Enum):
    """Control-flow keyword, valued by its canonical recorded name."""

    IF = "if"
    ELSE_IF = "elseIf"
    ELSE = "else"
    END = "end"
    WHILE = "while"
    TIMES = "times"
    DO = "do"
    REPEAT_IF = "repeatIf"

    @classmethod
    def from_name(cls, name: str) -> "Keyword | None":
        """Return the keyword with this canonical name, or None for ordinary steps."""
        return _KEYWORDS_BY_NAME.get(name)

    @property
    def kind(self) -> "CommandKind":
        return _KIND_OF_KEYWORD[self]


class CommandKind(Enum):
    """Structural role of a command in block nesting."""

    OPENING = "opening"  # if, do, times
    BRANCH_ARM = "branch_arm"  # elseIf, else
    LOOP_TEST = "loop_test"  # while, repeatIf
    BLOCK_END = "block_end"  # end
    ORDINARY = "ordinary"


_KEYWORDS_BY_NAME = {keyword.value: keyword for keyword in Keyword}

_KIND_OF_KEYWORD = {
    Keyword.IF: CommandKind.OPENING,
    Keyword.DO: CommandKind.OPENING,
    Keyword.TIMES: CommandKind.OPENING,
    Keyword.ELSE_IF: CommandKind.BRANCH_ARM,
    Keyword.ELSE: CommandKind.BRANCH_ARM,
    Keyword.WHILE: CommandKind.LOOP_TEST,
    Keyword.REPEAT_IF: CommandKind.LOOP_TEST,
    Keyword.END: CommandKind.BLOCK_END,
}

LOOP_KEYWORDS = frozenset({Keyword.WHILE, Keyword.TIMES, Keyword.DO})

# Loops whose header tests the condition before running the body
LOOP_HEADER_KEYWORDS = frozenset({Keyword.WHILE, Keyword.TIMES})


def kind_of(keyword: Keyword | None) -> CommandKind:
    """Structural kind of a classified command; None means an ordinary step."""
    if keyword is None:
        return CommandKind.ORDINARY
    return keyword.kind


def is_loop(keyword: Keyword | None) -> bool:
    return keyword in LOOP_KEYWORDS


def is_control_flow(
    command: CommandLike, keywords: "KeywordTable | None" = None
) -> bool:
    """
    Check whether a command participates in block nesting.

    Params:
        command: Recorded command exposing a `name`
        keywords: Keyword table used to classify names; canonical names if omitted

    Returns:
        True if the command name maps to a control-flow keyword
    """
    if keywords is None:
        return Keyword.from_name(command.name) is not None
    return keywords.classify(command.name) is not None
