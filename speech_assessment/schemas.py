"""Pydantic schemas for assessment results."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from speech_assessment.models.word_token import MatchKind


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class WordComparison(_CamelModel):
    word: str
    is_correct: bool
    match_kind: MatchKind
    spoken_word: Optional[str] = Field(
        None, description="Transcript token consumed by the match (None when missing)"
    )


class Assessment(_CamelModel):
    overall_score: int = Field(..., ge=0, le=100)
    accuracy_score: int = Field(..., ge=0, le=100)
    completeness_score: int = Field(..., ge=0, le=100)
    reference_words: List[str] = Field(default_factory=list)
    transcribed_words: List[str] = Field(default_factory=list)
    word_comparisons: List[WordComparison] = Field(default_factory=list)
    correct_count: int = Field(0, ge=0)
    incorrect_count: int = Field(0, ge=0)
    missing_count: int = Field(0, ge=0)
    extra_count: int = Field(0, ge=0)
    extra_words: List[str] = Field(default_factory=list)
    word_error_rate: float = Field(0.0, ge=0.0, le=1.0)
    suggestions: List[str] = Field(default_factory=list)
    feedback: str = ""
    strategy: Literal["greedy", "global"] = "greedy"

    @model_validator(mode="after")
    def _check_counts(self) -> "Assessment":
        total = len(self.reference_words)
        if len(self.word_comparisons) != total:
            raise ValueError("word_comparisons must have one entry per reference word")
        if self.correct_count + self.incorrect_count + self.missing_count != total:
            raise ValueError("correct + incorrect + missing must equal the reference length")
        if len(self.extra_words) != self.extra_count:
            raise ValueError("extra_words must list exactly extra_count tokens")
        return self

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready dict with camelCase keys."""
        return self.model_dump(by_alias=True, mode="json")


class SubmissionPayload(BaseModel):
    """What the homework-submission handler persists for a graded speaking answer."""

    assessment: Dict[str, Any]
    score: float = Field(..., ge=0.0, le=1.0)
    status: Literal["graded"] = "graded"


def submission_payload(assessment: Assessment) -> SubmissionPayload:
    return SubmissionPayload(
        assessment=assessment.to_dict(),
        score=assessment.overall_score / 100,
    )
