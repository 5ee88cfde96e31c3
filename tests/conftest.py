"""
Shared test fixtures and utilities for the playtree test suite.
"""

import pytest

from playtree import Command, PlaybackTree


@pytest.fixture
def make_commands():
    """Factory turning a list of names into recorded commands.

    Usage:
        def test_something(make_commands):
            commands = make_commands("if", "click", "end")
    """

    def _make(*names: str) -> list[Command]:
        return [Command(name=name, target=f"target-{i}") for i, name in enumerate(names)]

    return _make


@pytest.fixture
def build_graph(make_commands):
    """Build the playback graph of a sequence given by command names."""

    def _build(*names: str):
        return PlaybackTree(make_commands(*names)).build_graph()

    return _build


@pytest.fixture
def pointers():
    """Render a graph as (next, left, right) position triples, one per node."""

    def _pointers(graph) -> list[tuple[int | None, int | None, int | None]]:
        return [(row["next"], row["left"], row["right"]) for row in graph.describe()]

    return _pointers
