"""Question/answer pairs produced by a completion choice."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class CardPair(BaseModel):
    """A single flashcard.

    Accepts the compact ``q``/``a`` keys the model is asked to emit as
    well as ``question``/``answer``. Missing fields become empty strings.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    question: str = Field(default="", validation_alias=AliasChoices("q", "question"))
    answer: str = Field(default="", validation_alias=AliasChoices("a", "answer"))

    @field_validator("question", "answer", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        if v is None:
            return ""
        if isinstance(v, (dict, list)):
            msg = "question/answer must be text"
            raise ValueError(msg)
        return str(v)

    @property
    def is_blank(self) -> bool:
        """Empty question or answer signals a low-quality generation."""
        return not self.question.strip() or not self.answer.strip()


class QuestionsAnswersPayload(BaseModel):
    """The JSON object the model is instructed to return."""

    model_config = ConfigDict(extra="ignore")

    questions_answers: list[CardPair]


# One list of cards per successfully parsed completion choice
ChoiceResult = list[CardPair]
