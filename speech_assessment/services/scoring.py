"""Score aggregation for word comparisons."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

import jiwer

from speech_assessment import config
from speech_assessment.models.word_token import MatchKind
from speech_assessment.schemas import WordComparison


@dataclass(frozen=True)
class ScoreCard:
    accuracy: int
    completeness: int
    overall: int
    correct: int
    incorrect: int
    missing: int
    total: int


def round_half_up(x: float) -> int:
    """Round to the nearest integer with .5 going up (Python's round() is banker's)."""
    return int(math.floor(x + 0.5))


def aggregate_scores(
    comparisons: Sequence[WordComparison],
    *,
    accuracy_weight: float = config.ACCURACY_WEIGHT,
    completeness_weight: float = config.COMPLETENESS_WEIGHT,
) -> ScoreCard:
    """Fold per-word comparisons into accuracy, completeness and overall scores (0-100)."""
    total = len(comparisons)
    correct = sum(1 for c in comparisons if c.is_correct)
    missing = sum(1 for c in comparisons if c.match_kind == MatchKind.MISSING)
    incorrect = total - correct - missing

    if total == 0:
        return ScoreCard(0, 0, 0, 0, 0, 0, 0)

    accuracy = round_half_up(100 * correct / total)
    completeness = round_half_up(100 * (correct + incorrect) / total)
    overall = round_half_up(accuracy_weight * accuracy + completeness_weight * completeness)
    return ScoreCard(
        accuracy=accuracy,
        completeness=completeness,
        overall=max(0, min(100, overall)),
        correct=correct,
        incorrect=incorrect,
        missing=missing,
        total=total,
    )


def word_error_rate(reference_words: Sequence[str], transcribed_words: Sequence[str]) -> float:
    """WER over normalized token sequences, clamped to [0, 1]."""
    if not reference_words:
        return 0.0
    if not transcribed_words:
        return 1.0
    wer = jiwer.wer(" ".join(reference_words), " ".join(transcribed_words))
    wer = min(1.0, max(0.0, float(wer)))
    return round(wer, 4)
