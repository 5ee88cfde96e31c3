"""
Build configuration for playback trees.

`KeywordTable` decides which recorded command names are control-flow keywords,
`PlaybackConfig` bundles it with the error detail level. Both are immutable and
can be shared between builds.
"""

from collections.abc import Mapping

from attrs import field, frozen

from playtree.core.types import Keyword
from playtree.exceptions import ErrorLevel


def _canonical_names() -> dict[str, Keyword]:
    return {keyword.value: keyword for keyword in Keyword}


@frozen
class KeywordTable:
    """Mapping of recorded command names to control-flow keywords.

    The default table holds the canonical names (`if`, `elseIf`, `else`, `end`,
    `while`, `times`, `do`, `repeatIf`). Names missing from the table are
    ordinary steps.
    """

    names: Mapping[str, Keyword] = field(factory=_canonical_names, converter=dict)

    def classify(self, name: str) -> Keyword | None:
        return self.names.get(name)

    def with_aliases(self, aliases: Mapping[str, Keyword]) -> "KeywordTable":
        """
        Return a new table that also maps the given alternative names.

        Params:
            aliases: Extra recorded names and the keyword each one stands for

        Returns:
            New KeywordTable; this table is left unchanged

        Raises:
            ValueError: If an alias is already mapped to a different keyword
        """
        merged = dict(self.names)
        for name, keyword in aliases.items():
            existing = merged.get(name)
            if existing is not None and existing != keyword:
                raise ValueError(
                    f"Name '{name}' already stands for '{existing.value}', cannot alias it to '{keyword.value}'"
                )
            merged[name] = keyword
        return KeywordTable(names=merged)


@frozen
class PlaybackConfig:
    """Settings for one or more playback tree builds.

    Params:
        keywords: Table deciding which recorded names are control-flow keywords
        error_level: Detail level of structural error messages
    """

    keywords: KeywordTable = field(factory=KeywordTable)
    error_level: ErrorLevel = ErrorLevel.USER


DEFAULT_CONFIG = PlaybackConfig()
