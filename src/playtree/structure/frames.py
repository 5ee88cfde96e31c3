"""
Block frames tracked by both passes while scanning a command sequence.
"""

from attrs import frozen

from playtree.core.types import Keyword


@frozen
class BlockFrame:
    """An open block: its keyword, where it opened and the level of its opener."""

    keyword: Keyword
    index: int
    level: int


def top_of(frames: list[BlockFrame]) -> BlockFrame | None:
    """Innermost open frame, or None when no block is open."""
    return frames[-1] if frames else None


def top_keyword(frames: list[BlockFrame]) -> Keyword | None:
    frame = top_of(frames)
    return frame.keyword if frame is not None else None


def describe_frames(frames: list[BlockFrame]) -> list[str]:
    """Render open frames outermost first, e.g. ``["while@0", "if@2"]``."""
    return [f"{frame.keyword.value}@{frame.index}" for frame in frames]
