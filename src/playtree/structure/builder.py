"""
Playback tree construction.

This module contains `PlaybackTree`, which coordinates the validation and
linking passes over a recorded command sequence, and `PlaybackGraph`, the
immutable result handed to playback engines.
"""

import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from pydantic import ValidationError

from playtree.config import DEFAULT_CONFIG, PlaybackConfig
from playtree.core.command_node import CommandNode
from playtree.core.types import CommandLike
from playtree.exceptions import InvalidCommandError
from playtree.models import Command
from playtree.structure.linking import LinkingPass
from playtree.structure.validation import ValidationPass

logger = logging.getLogger(__name__)


class PlaybackGraph:
    """Linked command nodes of one build, in input order.

    The graph is not modified after the build returns, so any number of
    playback engines may walk it at the same time.
    """

    def __init__(self, nodes: Iterable[CommandNode]):
        self._nodes = tuple(nodes)

    @property
    def entry(self) -> CommandNode | None:
        """First node of the sequence; None for an empty recording."""
        return self._nodes[0] if self._nodes else None

    @property
    def nodes(self) -> tuple[CommandNode, ...]:
        return self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[CommandNode]:
        return iter(self._nodes)

    def __getitem__(self, index: int) -> CommandNode:
        return self._nodes[index]

    def describe(self) -> list[dict[str, Any]]:
        """
        Tabulate the graph with pointers rendered as node positions.

        Returns:
            One row per node with `index`, `name`, `level`, `next`, `left`, `right`
        """

        def _index(node: CommandNode | None) -> int | None:
            return node.index if node is not None else None

        return [
            {
                "index": node.index,
                "name": node.name,
                "level": node.level,
                "next": _index(node.next),
                "left": _index(node.left),
                "right": _index(node.right),
            }
            for node in self._nodes
        ]


class PlaybackTree:
    """Coordinator turning a flat recorded command sequence into a playback graph.

    Responsibilities:
    - Snapshot and normalize the input commands (mappings become `Command` models)
    - Run the validation pass, assigning nesting levels and rejecting malformed blocks
    - Run the linking pass, wiring branch targets, loop back-edges and loop exits

    Each build works on its own pass objects and creates fresh nodes, so one
    instance can be built repeatedly. A failed build raises and returns nothing.
    """

    def __init__(
        self,
        commands: Iterable[CommandLike | Mapping[str, Any]],
        config: PlaybackConfig | None = None,
    ):
        self._commands = tuple(commands)
        self._config = config or DEFAULT_CONFIG

    @property
    def commands(self) -> tuple[CommandLike | Mapping[str, Any], ...]:
        return self._commands

    @property
    def config(self) -> PlaybackConfig:
        return self._config

    def validate(self) -> list[CommandNode]:
        """
        Run only the validation pass.

        Returns:
            Leveled, unlinked nodes in input order

        Raises:
            InvalidCommandError: If an input item has no usable name
            MalformedBlockError: If a block is never closed
            MisplacedKeywordError: If a keyword appears outside its block
            InvalidElseOrderError: If an if block's else arms are out of order
        """
        commands = self._normalized_commands()
        return ValidationPass(commands, self._config).run()

    def build_graph(self) -> PlaybackGraph:
        """
        Validate and link the whole sequence.

        Returns:
            The linked graph

        Raises:
            PlaybackTreeError: Any structural error, see `validate`
        """
        nodes = self.validate()
        linked = LinkingPass(nodes).run()
        logger.debug("Built playback graph with %d nodes", len(linked))
        return PlaybackGraph(linked)

    def build(self) -> CommandNode | None:
        """
        Validate and link the whole sequence and return its entry node.

        Returns:
            The first node of the graph, or None for an empty recording

        Raises:
            PlaybackTreeError: Any structural error, see `validate`
        """
        return self.build_graph().entry

    def _normalized_commands(self) -> list[CommandLike]:
        commands = []
        for index, item in enumerate(self._commands):
            if isinstance(item, Mapping):
                try:
                    item = Command.model_validate(item)
                except ValidationError as e:
                    raise InvalidCommandError(index, str(e)) from e
            name = getattr(item, "name", None)
            if not isinstance(name, str) or not name:
                raise InvalidCommandError(index, "command has no name")
            commands.append(item)
        return commands


def build_playback_tree(
    commands: Iterable[CommandLike | Mapping[str, Any]],
    config: PlaybackConfig | None = None,
) -> PlaybackGraph:
    """Build the playback graph of a recorded command sequence in one call."""
    return PlaybackTree(commands, config).build_graph()
