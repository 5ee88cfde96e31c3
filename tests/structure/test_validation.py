"""
Tests for the validation pass.

Focus Areas:
1. Nesting level assignment for every block shape
2. Misplaced keyword detection
3. else / elseIf ordering inside if blocks
4. Unterminated block detection
"""

import pytest

from playtree import Command, ErrorLevel, PlaybackConfig
from playtree.exceptions import (
    InvalidElseOrderError,
    MalformedBlockError,
    MisplacedKeywordError,
)
from playtree.structure.validation import ValidationPass


def levels(commands):
    return [node.level for node in ValidationPass(commands).run()]


class TestLevelAssignment:
    """Test nesting levels of validated nodes."""

    def test_straight_line_stays_at_top_level(self, make_commands):
        assert levels(make_commands("open", "click", "type")) == [0, 0, 0]

    def test_if_chain(self, make_commands):
        """Branch arms and end sit at the if's level, bodies one deeper."""
        commands = make_commands("if", "a", "elseIf", "b", "else", "c", "end")
        assert levels(commands) == [0, 1, 0, 1, 0, 1, 0]

    def test_do_while(self, make_commands):
        """The post-condition while is part of the do body."""
        assert levels(make_commands("do", "click", "while", "end")) == [0, 1, 1, 0]

    def test_do_repeat_if(self, make_commands):
        assert levels(make_commands("do", "click", "repeatIf", "end")) == [0, 1, 1, 0]

    def test_times(self, make_commands):
        assert levels(make_commands("times", "click", "end")) == [0, 1, 0]

    def test_nested_if_in_while(self, make_commands):
        commands = make_commands("while", "if", "a", "end", "end")
        assert levels(commands) == [0, 1, 2, 1, 0]

    def test_standalone_while_inside_if_inside_do(self, make_commands):
        """A while whose innermost block is not a do opens its own loop."""
        commands = make_commands(
            "do", "if", "while", "a", "end", "end", "while", "end"
        )
        assert levels(commands) == [0, 1, 2, 3, 2, 1, 1, 0]

    def test_one_node_per_command_in_order(self, make_commands):
        commands = make_commands("if", "a", "else", "b", "end", "c")
        nodes = ValidationPass(commands).run()

        assert len(nodes) == len(commands)
        assert [node.command for node in nodes] == commands
        assert [node.index for node in nodes] == list(range(len(commands)))

    def test_nodes_are_not_linked(self, make_commands):
        nodes = ValidationPass(make_commands("while", "a", "end")).run()
        assert all(node.is_terminal for node in nodes)

    def test_pass_can_run_twice(self, make_commands):
        validation = ValidationPass(make_commands("if", "a", "end"))
        first = validation.run()
        second = validation.run()
        assert [n.level for n in first] == [n.level for n in second]
        assert first[0] is not second[0]


class TestMisplacedKeywords:
    """Test keywords used outside the block they belong to."""

    def test_else_outside_if(self, make_commands):
        with pytest.raises(MisplacedKeywordError) as exc_info:
            ValidationPass(make_commands("click", "else", "end")).run()
        assert "else / elseIf used outside of an if block" in str(exc_info.value)
        assert exc_info.value.index == 1

    def test_else_if_inside_loop(self, make_commands):
        """An if must be the innermost block, not just an enclosing one."""
        with pytest.raises(MisplacedKeywordError):
            ValidationPass(make_commands("if", "while", "elseIf", "end", "end")).run()

    def test_repeat_if_outside_do(self, make_commands):
        with pytest.raises(MisplacedKeywordError) as exc_info:
            ValidationPass(make_commands("click", "repeatIf")).run()
        assert "repeatIf used without a do block" in str(exc_info.value)
        assert exc_info.value.keyword == "repeatIf"

    def test_repeat_if_inside_if_inside_do(self, make_commands):
        with pytest.raises(MisplacedKeywordError):
            ValidationPass(make_commands("do", "if", "repeatIf", "end", "end")).run()

    def test_end_without_opening(self, make_commands):
        with pytest.raises(MisplacedKeywordError) as exc_info:
            ValidationPass(make_commands("if", "a", "end", "end")).run()
        assert "end without an opening keyword" in str(exc_info.value)
        assert exc_info.value.index == 3


class TestElseOrdering:
    """Test else / elseIf ordering inside if blocks."""

    def test_else_if_chain_with_final_else_is_valid(self, make_commands):
        commands = make_commands(
            "if", "a", "elseIf", "b", "elseIf", "c", "else", "d", "end"
        )
        assert len(ValidationPass(commands).run()) == 9

    def test_else_if_after_else(self, make_commands):
        with pytest.raises(InvalidElseOrderError) as exc_info:
            ValidationPass(
                make_commands("if", "a", "else", "b", "elseIf", "c", "end")
            ).run()
        assert "Incorrect command order of elseIf / else" in str(exc_info.value)
        assert exc_info.value.index == 6

    def test_two_else_arms(self, make_commands):
        with pytest.raises(InvalidElseOrderError) as exc_info:
            ValidationPass(
                make_commands("if", "a", "else", "b", "else", "c", "end")
            ).run()
        assert "Too many else commands used" in str(exc_info.value)

    def test_nested_if_arms_are_counted_separately(self, make_commands):
        """Each if block owns one else, even when nested inside another arm."""
        commands = make_commands(
            "if", "if", "a", "else", "b", "end", "else", "c", "end"
        )
        assert levels(commands) == [0, 1, 2, 1, 2, 1, 0, 1, 0]

    def test_nested_order_error_reported_at_inner_end(self, make_commands):
        with pytest.raises(InvalidElseOrderError) as exc_info:
            ValidationPass(
                make_commands("if", "if", "else", "elseIf", "end", "end")
            ).run()
        assert exc_info.value.index == 4


class TestUnterminatedBlocks:
    """Test blocks left open at the end of the sequence."""

    @pytest.mark.parametrize("keyword", ["if", "while", "times", "do"])
    def test_unmatched_opener_is_named(self, make_commands, keyword):
        with pytest.raises(MalformedBlockError) as exc_info:
            ValidationPass(make_commands(keyword, "click")).run()
        assert f"Incomplete block at {keyword}" in str(exc_info.value)
        assert exc_info.value.keyword == keyword
        assert exc_info.value.index == 0

    def test_innermost_unmatched_block_is_reported(self, make_commands):
        with pytest.raises(MalformedBlockError) as exc_info:
            ValidationPass(make_commands("while", "click", "if", "type")).run()
        assert exc_info.value.keyword == "if"
        assert exc_info.value.index == 2

    def test_do_closed_by_its_test_only(self, make_commands):
        """A do's while test does not close the block."""
        with pytest.raises(MalformedBlockError) as exc_info:
            ValidationPass(make_commands("do", "click", "while")).run()
        assert exc_info.value.keyword == "do"


class TestErrorDetail:
    """Test error context at both detail levels."""

    def test_user_level_context(self, make_commands):
        with pytest.raises(MisplacedKeywordError) as exc_info:
            ValidationPass(make_commands("while", "a", "else", "end")).run()
        message = str(exc_info.value)
        assert "at command 2" in message
        assert "command: else" in message
        assert "open blocks" not in message

    def test_developer_level_context(self):
        config = PlaybackConfig(error_level=ErrorLevel.DEVELOPER)
        commands = [Command(name=n) for n in ["do", "if", "repeatIf"]]
        with pytest.raises(MisplacedKeywordError) as exc_info:
            ValidationPass(commands, config).run()
        assert "open blocks: do@0 > if@1" in str(exc_info.value)
