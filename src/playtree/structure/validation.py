"""
Validation pass: structural checks and nesting levels.

A single left-to-right scan that creates one `CommandNode` per recorded
command, assigns each node its nesting level and enforces the block-matching
rules. The first violation aborts the scan.
"""

import logging
from collections.abc import Sequence

from playtree.config import DEFAULT_CONFIG, PlaybackConfig
from playtree.core.command_node import CommandNode
from playtree.core.types import CommandKind, CommandLike, Keyword, is_loop, kind_of
from playtree.exceptions import (
    ErrorContext,
    InvalidElseOrderError,
    MalformedBlockError,
    MisplacedKeywordError,
    PlaybackTreeError,
)
from playtree.structure.frames import BlockFrame, describe_frames, top_keyword

logger = logging.getLogger(__name__)


class ValidationPass:
    """Validate block structure and produce leveled, unlinked command nodes.

    Rules enforced:
    - `if`, `do`, `times` and standalone `while` open a block closed by `end`
    - `while` directly inside a `do` block is the loop's post-condition test
    - `repeatIf` is only legal directly inside a `do` block
    - `elseIf` / `else` are only legal directly inside an `if` block
    - an `if` block has at most one `else`, and it must be its last arm
    - every block is closed before the sequence ends

    Block bodies sit one level deeper than their opener; branch arms and the
    closing `end` sit at the opener's level.
    """

    def __init__(
        self, commands: Sequence[CommandLike], config: PlaybackConfig = DEFAULT_CONFIG
    ):
        self._commands = commands
        self._config = config
        self._level = 0
        self._frames: list[BlockFrame] = []
        self._nodes: list[CommandNode] = []

    def run(self) -> list[CommandNode]:
        """
        Scan the whole sequence.

        Returns:
            One node per command, in input order, with levels assigned

        Raises:
            MalformedBlockError: If a block is still open at the end of the sequence
            MisplacedKeywordError: If a keyword appears outside its block
            InvalidElseOrderError: If an if block's else arms are out of order
        """
        self._level = 0
        self._frames = []
        self._nodes = []
        logger.debug("Validating %d commands", len(self._commands))

        for index, command in enumerate(self._commands):
            self._process_command(index, command)

        if self._frames:
            frame = self._frames[-1]
            raise self._error(
                MalformedBlockError,
                f"Incomplete block at {frame.keyword.value}",
                frame.keyword,
                frame.index,
            )

        logger.debug("Validated %d nodes", len(self._nodes))
        return self._nodes

    def _process_command(self, index: int, command: CommandLike) -> None:
        keyword = self._config.keywords.classify(command.name)
        kind = kind_of(keyword)
        innermost = top_keyword(self._frames)

        if kind is CommandKind.OPENING:
            self._open_block(index, command, keyword)
        elif kind is CommandKind.LOOP_TEST:
            if keyword is Keyword.WHILE:
                if innermost is Keyword.DO:
                    self._track_command(index, command, keyword)
                else:
                    self._open_block(index, command, keyword)
            else:
                if innermost is not Keyword.DO:
                    raise self._error(
                        MisplacedKeywordError,
                        "A repeatIf used without a do block",
                        keyword,
                        index,
                    )
                self._track_command(index, command, keyword)
        elif kind is CommandKind.BRANCH_ARM:
            if innermost is not Keyword.IF:
                raise self._error(
                    MisplacedKeywordError,
                    "An else / elseIf used outside of an if block",
                    keyword,
                    index,
                )
            self._track_branch_arm(index, command, keyword)
        elif kind is CommandKind.BLOCK_END:
            if is_loop(innermost):
                self._close_block(index, command, keyword)
            elif innermost is Keyword.IF:
                self._check_branch_arms(index)
                self._close_block(index, command, keyword)
            else:
                raise self._error(
                    MisplacedKeywordError,
                    "Use of end without an opening keyword",
                    keyword,
                    index,
                )
        else:
            self._track_command(index, command, keyword)

    def _check_branch_arms(self, end_index: int) -> None:
        """Check the arms of the innermost if block before it is closed.

        Only arms at the if's own level belong to it; arms of nested if
        blocks sit deeper.
        """
        frame = self._frames[-1]
        arms = [
            node.keyword
            for node in self._nodes[frame.index + 1 :]
            if node.level == frame.level
            and node.keyword in (Keyword.ELSE, Keyword.ELSE_IF)
        ]
        else_count = arms.count(Keyword.ELSE)
        if else_count > 1:
            raise self._error(
                InvalidElseOrderError, "Too many else commands used", Keyword.IF, end_index
            )
        if else_count == 1 and arms[-1] is not Keyword.ELSE:
            raise self._error(
                InvalidElseOrderError,
                "Incorrect command order of elseIf / else",
                Keyword.IF,
                end_index,
            )

    def _open_block(self, index: int, command: CommandLike, keyword: Keyword) -> None:
        self._frames.append(BlockFrame(keyword=keyword, index=index, level=self._level))
        self._create_node(index, command, keyword)
        self._level += 1

    def _track_branch_arm(
        self, index: int, command: CommandLike, keyword: Keyword
    ) -> None:
        self._level -= 1
        self._create_node(index, command, keyword)
        self._level += 1

    def _track_command(
        self, index: int, command: CommandLike, keyword: Keyword | None
    ) -> None:
        self._create_node(index, command, keyword)

    def _close_block(self, index: int, command: CommandLike, keyword: Keyword) -> None:
        self._level -= 1
        self._create_node(index, command, keyword)
        self._frames.pop()

    def _create_node(
        self, index: int, command: CommandLike, keyword: Keyword | None
    ) -> None:
        self._nodes.append(
            CommandNode(command=command, level=self._level, index=index, keyword=keyword)
        )

    def _error(
        self,
        error_cls: type[PlaybackTreeError],
        message: str,
        keyword: Keyword,
        index: int,
    ) -> PlaybackTreeError:
        context = ErrorContext(
            index=index,
            command_name=self._commands[index].name,
            open_blocks=describe_frames(self._frames),
        )
        return error_cls(
            message,
            keyword=keyword.value,
            index=index,
            context=context,
            error_level=self._config.error_level,
        )
