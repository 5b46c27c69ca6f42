from pathlib import Path
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from practice_cards.constants import CARD_ID_PREFIX


class _Block(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class TextBlock(_Block):
    type: Literal["text"] = "text"
    content: str


class CodeBlock(_Block):
    type: Literal["code"] = "code"
    language: str
    code: str
    code_type: Literal["good", "bad", "neutral"] = Field("neutral", alias="codeType")


class ListBlock(_Block):
    type: Literal["list"] = "list"
    items: tuple[str, ...]


class TableBlock(_Block):
    type: Literal["table"] = "table"
    headers: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...]


AnswerBlock = Annotated[
    Union[TextBlock, CodeBlock, ListBlock, TableBlock], Field(discriminator="type")
]


class ExtractedCard(BaseModel):
    """A question/answer pair as it comes out of a Markdown file, before it gets an id."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    question: str
    answer: tuple[AnswerBlock, ...] = Field(min_length=1)
    category: str
    topic: Optional[str] = None
    topic_id: Optional[str] = Field(None, alias="topicId")
    source: str
    is_index: Optional[bool] = Field(None, alias="isIndex")

    @model_validator(mode="after")
    def _check_topic_pair(self) -> "ExtractedCard":
        if (self.topic is None) != (self.topic_id is None):
            raise ValueError("topic and topicId must be provided together")
        return self

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Card(ExtractedCard):
    id: str = Field(pattern=rf"^{CARD_ID_PREFIX}[1-9][0-9]*$")

    @property
    def number(self) -> int:
        return int(self.id[len(CARD_ID_PREFIX) :])

    @classmethod
    def from_extracted(cls, extracted: ExtractedCard, number: int) -> "Card":
        return cls(
            **extracted.model_dump(by_alias=True, exclude_none=True),
            id=f"{CARD_ID_PREFIX}{number}",
        )


class TopicSummary(BaseModel):
    topic_id: str
    label: str
    count: int


class BuildSummary(BaseModel):
    output_file: Path
    files: int
    total_cards: int
    qa_cards: int
    index_cards: int
    cards_by_category: dict[str, int]
