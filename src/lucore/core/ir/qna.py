"""
Knowledge-base types for the LU IR.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

QNA_SOURCE = "custom editorial"


class QnaMetadata(BaseModel):
    """Filter key/value attached to a QnA pair."""

    name: str
    value: str


class QnaPair(BaseModel):
    """
    One question/answer pair.

    Attributes:
        id: Assigned later by the consumer; always 0 here
        answer: Trimmed answer text
        source: Origin tag of the pair
        questions: Question and its alternates, in source order
        metadata: Filter pairs, in source order
    """

    id: int = 0
    answer: str
    source: str = QNA_SOURCE
    questions: list[str] = Field(default_factory=list)
    metadata: list[QnaMetadata] = Field(default_factory=list)


class QnaFile(BaseModel):
    """A linked non-HTML document to import into the knowledge base."""

    file_uri: str = Field(alias="fileUri")
    file_name: str = Field(alias="fileName")

    model_config = ConfigDict(populate_by_name=True)


class Alterations(BaseModel):
    """A group of words the knowledge base treats as equivalent."""

    alterations: list[str] = Field(default_factory=list)


class WordAlterations(BaseModel):
    word_alterations: list[Alterations] = Field(default_factory=list, alias="wordAlterations")

    model_config = ConfigDict(populate_by_name=True)


class FileToParse(BaseModel):
    """A local file referenced from the current document."""

    file_path: str = Field(alias="filePath")
    include_in_collate: bool = Field(default=True, alias="includeInCollate")

    model_config = ConfigDict(populate_by_name=True)


class KnowledgeBase(BaseModel):
    """
    Consolidated knowledge-base model.

    ``settings`` holds ``@kb.<key>`` directive values.
    """

    qna_list: list[QnaPair] = Field(default_factory=list, alias="qnaList")
    files: list[QnaFile] = Field(default_factory=list)
    urls: list[str] = Field(default_factory=list)
    settings: dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(populate_by_name=True)

    def to_dict(self) -> dict[str, Any]:
        data = self.model_dump(by_alias=True, exclude={"settings"})
        data.update(self.settings)
        return data
