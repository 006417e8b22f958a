"""
Challenge schemas. Every field optional; unknown fields ignored.
"""
import uuid
from datetime import datetime

from pydantic import ConfigDict

from voidslab.schemas.base import CamelModel


class ChallengeOption(CamelModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    text: str | None = None
    is_correct: bool | None = None


class ChallengeCreate(CamelModel):
    # correctAnswer: 42 is stored as "42"
    model_config = ConfigDict(coerce_numbers_to_str=True)

    title: str | None = None
    description: str | None = None
    category: str | None = None
    type: str | None = None
    points: int | None = None
    correct_answer: str | None = None
    options: list[ChallengeOption] | None = None

    def to_fields(self) -> dict:
        """Column values for Challenge(**fields); options stored in wire shape."""
        fields = self.model_dump(exclude_unset=True, exclude={"options"})
        if "options" in self.model_fields_set:
            fields["options"] = (
                [o.model_dump(by_alias=True) for o in self.options] if self.options is not None else None
            )
        return fields


class ChallengeResponse(ChallengeCreate):
    id: uuid.UUID
    created_at: datetime | None = None
