from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class AbbreviationClass(str, Enum):
    """How an abbreviation behaves at a potential sentence boundary."""

    STRICT = "strict"  # never ends a sentence
    FLEXIBLE = "flexible"  # ends a sentence only before a capitalized word


class ThreadingOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    # Clamped to >= 1 by the engine, never rejected
    maximum_length: int = 280
    break_on_sentences: bool = True
    break_on_paragraphs: bool = True
    enumerate: bool = False

    @property
    def available_length(self) -> int:
        return max(1, self.maximum_length)


class ChunkStatistics(BaseModel):
    model_config = ConfigDict(frozen=True)

    characters: int = Field(default=0, ge=0)
    words: int = Field(default=0, ge=0)
    sentences: int = Field(default=0, ge=0)
    paragraphs: int = Field(default=0, ge=0)

    def to_dict(self) -> dict[str, int]:
        return self.model_dump()


class Preset(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    length: int
    label: str


class ImageRecord(BaseModel):
    """An inline image referenced from text by its placeholder token."""

    model_config = ConfigDict(frozen=True)

    placeholder_token: str
    data_url: str
    alt_text: str | None = None


class ContentSegment(BaseModel):
    model_config = ConfigDict(frozen=True)

    variant: Literal["text", "image"]
    plain_text: str = ""
    html_content: str = ""
    image: ImageRecord | None = None
