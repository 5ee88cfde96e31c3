"""
Linking pass: wire validated nodes into an executable graph.

The pass rebuilds block context from the leveled nodes, records every
pointer in a link table keyed by node position, and only assigns the
pointers once the whole sequence has been resolved.
"""

import logging
from dataclasses import dataclass

from playtree.core.command_node import CommandNode
from playtree.core.types import LOOP_HEADER_KEYWORDS, CommandKind, Keyword
from playtree.structure.frames import BlockFrame, top_of

logger = logging.getLogger(__name__)


def first_node_at_level(
    nodes: list[CommandNode], from_index: int, level: int
) -> CommandNode | None:
    """
    Find the nearest later node at the given level, whatever its kind.

    Used to locate the next sibling branch arm or the block terminator.

    Params:
        nodes: Leveled nodes in input order
        from_index: Position to search after
        level: Nesting level to match

    Returns:
        The matching node, or None if no later node sits at that level
    """
    for node in nodes[from_index + 1 :]:
        if node.level == level:
            return node
    return None


def first_end_node_at_level(
    nodes: list[CommandNode], from_index: int, level: int
) -> CommandNode | None:
    """
    Find the nearest later `end` node at the given level.

    Skips sibling branch arms, so it locates the definite block terminator.

    Params:
        nodes: Leveled nodes in input order
        from_index: Position to search after
        level: Nesting level to match

    Returns:
        The matching node, or None if no later `end` sits at that level
    """
    for node in nodes[from_index + 1 :]:
        if node.level == level and node.keyword is Keyword.END:
            return node
    return None


@dataclass
class NodeLinks:
    """Resolved pointers of one node, as positions in the node list."""

    next: int | None = None
    left: int | None = None
    right: int | None = None


def _position(node: CommandNode | None) -> int | None:
    return node.index if node is not None else None


class LinkingPass:
    """Assign `next` / `left` / `right` to the nodes of a validated sequence.

    Pointer rules:
    - `do`: `next` enters the body
    - `if` / `elseIf`: `right` enters the arm body, `left` goes to the next arm or `end`
    - `else`: `next` enters the arm body
    - `while` / `times` loop header: `right` enters the body, `left` goes to the loop's `end`
    - `while` inside `do`: `right` goes back to the `do`, `left` to its `end`
    - `end`: pops its block; with blocks still open, a control-flow successor sends
      it to the enclosing block's `end`, anything else falls through; with no block
      open it stays unlinked
    - ordinary steps and `repeatIf`: the last step of an if arm skips to the if's
      `end`, a loop body step followed by a control-flow keyword goes back to the
      loop header, anything else falls through
    """

    def __init__(self, nodes: list[CommandNode]):
        self._nodes = nodes

    def run(self) -> list[CommandNode]:
        """
        Resolve and assign all pointers.

        Returns:
            The same nodes, linked; the first one is the graph entry
        """
        logger.debug("Linking %d nodes", len(self._nodes))
        table = self.resolve()
        for node, links in zip(self._nodes, table):
            node.next = self._node_at(links.next)
            node.left = self._node_at(links.left)
            node.right = self._node_at(links.right)
        return self._nodes

    def resolve(self) -> list[NodeLinks]:
        """Compute the link table without touching the nodes."""
        frames: list[BlockFrame] = []
        table = [NodeLinks() for _ in self._nodes]
        for position, node in enumerate(self._nodes):
            if position + 1 < len(self._nodes):
                table[position] = self._link_node(node, position, frames)
        return table

    def _link_node(
        self, node: CommandNode, position: int, frames: list[BlockFrame]
    ) -> NodeLinks:
        nodes = self._nodes
        following = nodes[position + 1]
        innermost = top_of(frames)
        keyword = node.keyword
        kind = node.kind

        if kind is CommandKind.OPENING:
            frames.append(BlockFrame(keyword=keyword, index=position, level=node.level))
            if keyword is Keyword.DO:
                return NodeLinks(next=following.index)
            if keyword is Keyword.IF:
                return NodeLinks(
                    right=following.index,
                    left=_position(first_node_at_level(nodes, position, node.level)),
                )
            return self._loop_header(node, position, following)

        if kind is CommandKind.BRANCH_ARM:
            if keyword is Keyword.ELSE:
                return NodeLinks(next=following.index)
            return NodeLinks(
                right=following.index,
                left=_position(first_node_at_level(nodes, position, node.level)),
            )

        if kind is CommandKind.LOOP_TEST and keyword is Keyword.WHILE:
            if innermost is not None and innermost.keyword is Keyword.DO:
                return NodeLinks(
                    right=innermost.index,
                    left=_position(
                        first_end_node_at_level(nodes, position, innermost.level)
                    ),
                )
            frames.append(BlockFrame(keyword=keyword, index=position, level=node.level))
            return self._loop_header(node, position, following)

        if kind is CommandKind.BLOCK_END:
            frames.pop()
            enclosing = top_of(frames)
            if enclosing is None:
                return NodeLinks()
            if following.is_control_flow:
                return NodeLinks(
                    next=_position(
                        first_end_node_at_level(nodes, position, enclosing.level)
                    )
                )
            return NodeLinks(next=following.index)

        # Ordinary steps and repeatIf
        return NodeLinks(next=self._continuation(position, following, innermost))

    def _loop_header(
        self, node: CommandNode, position: int, following: CommandNode
    ) -> NodeLinks:
        return NodeLinks(
            right=following.index,
            left=_position(first_end_node_at_level(self._nodes, position, node.level)),
        )

    def _continuation(
        self, position: int, following: CommandNode, innermost: BlockFrame | None
    ) -> int | None:
        """Where execution goes after a step that leaves no decision to make."""
        if innermost is None:
            return following.index
        if innermost.keyword is Keyword.IF and following.keyword in (
            Keyword.ELSE,
            Keyword.ELSE_IF,
            Keyword.END,
        ):
            return _position(
                first_end_node_at_level(self._nodes, position, innermost.level)
            )
        if innermost.keyword in LOOP_HEADER_KEYWORDS and following.is_control_flow:
            return innermost.index
        return following.index

    def _node_at(self, position: int | None) -> CommandNode | None:
        return self._nodes[position] if position is not None else None
