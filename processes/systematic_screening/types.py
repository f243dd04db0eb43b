"""Result records produced by systematic screening."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class RQAssessment(BaseModel):
    """Relevance and contribution of one document to one research question."""

    model_config = ConfigDict(frozen=True)

    question_index: int
    relevance_score: float
    contribution_score: float
    relevance_indicator: bool
    contribution_indicator: bool
    relevance_reasoning: str = ""
    contribution_reasoning: str = ""

    def meets(self, relevance_threshold: float, contribution_threshold: float) -> bool:
        return (
            self.relevance_score >= relevance_threshold
            and self.contribution_score >= contribution_threshold
        )


class ScreeningResult(BaseModel):
    """Complete screening outcome for one document, built once and not mutated."""

    model_config = ConfigDict(frozen=True)

    document_id: str
    title: str
    abstract: str
    authors: str = ""
    year: Optional[int] = None
    venue: str = ""
    doi: str = ""
    link: str = ""
    topics: list[str] = Field(default_factory=list)
    entities: list[str] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list)
    assessments: list[RQAssessment] = Field(default_factory=list)
    must_read: bool = False

    def assessment_for(self, question_index: int) -> Optional[RQAssessment]:
        return next((a for a in self.assessments if a.question_index == question_index), None)

    def to_summary(self) -> dict[str, Any]:
        """Compact projection included in the batch summary."""
        return {
            "document_id": self.document_id,
            "title": self.title,
            "authors": self.authors,
            "year": self.year,
            "must_read": self.must_read,
            "topics": list(self.topics),
            "entities": list(self.entities),
            "keywords": list(self.keywords),
            "assessments": [a.model_dump() for a in self.assessments],
        }
