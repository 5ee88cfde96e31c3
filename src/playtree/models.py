"""
Recorded command model.

`Command` is the input record the playback tree is built from. Only `name`
is interpreted here; the remaining fields are execution parameters carried
through untouched for the playback engine.
"""

from pydantic import BaseModel, ConfigDict, Field


class Command(BaseModel):
    """A single recorded test step.

    Unknown keys are preserved so recordings from other tools keep their
    extra execution parameters.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    name: str = Field(min_length=1)
    target: str = ""
    value: str = ""
    id: str | None = None
    comment: str = ""

    def __str__(self) -> str:
        parts = [self.name]
        if self.target:
            parts.append(self.target)
        if self.value:
            parts.append(self.value)
        return " | ".join(parts)
