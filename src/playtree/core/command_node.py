"""
CommandNode: one executable step of a playback graph.

Nodes are created by the validation pass, one per recorded command and in
input order, and wired by the linking pass. Graphs contain back-edges, so
nodes compare by identity and their repr never follows the pointers.
"""

from dataclasses import dataclass, field
from typing import Optional

from playtree.core.types import CommandKind, CommandLike, Keyword, kind_of


@dataclass(eq=False)
class CommandNode:
    """Node of the playback graph wrapping a single recorded command.

    A linked node either exposes `next` alone (unconditional continuation) or
    `left` and `right` together (the playback engine evaluates the command's
    condition and follows `right` when it holds, `left` otherwise). The last
    node of a sequence and an `end` closing a top-level block expose none of them.
    """

    command: CommandLike
    level: int
    index: int
    keyword: Keyword | None = None
    next: Optional["CommandNode"] = field(default=None, repr=False)
    left: Optional["CommandNode"] = field(default=None, repr=False)
    right: Optional["CommandNode"] = field(default=None, repr=False)

    @property
    def name(self) -> str:
        return self.command.name

    @property
    def kind(self) -> CommandKind:
        return kind_of(self.keyword)

    @property
    def is_control_flow(self) -> bool:
        return self.keyword is not None

    @property
    def is_conditional(self) -> bool:
        """True if the engine has to evaluate a condition to leave this node."""
        return self.left is not None or self.right is not None

    @property
    def is_terminal(self) -> bool:
        return self.next is None and self.left is None and self.right is None

    def __repr__(self) -> str:
        def _index(node: "CommandNode | None") -> int | None:
            return node.index if node is not None else None

        return (
            f"CommandNode(index={self.index}, name={self.name!r}, level={self.level}, "
            f"next={_index(self.next)}, left={_index(self.left)}, right={_index(self.right)})"
        )
