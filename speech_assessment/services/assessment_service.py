"""Reference-vs-transcript assessment service."""

from __future__ import annotations

import logging
from typing import Any, Optional

from speech_assessment.config import AssessmentSettings
from speech_assessment.schemas import Assessment
from speech_assessment.services.alignment_service import WordAligner
from speech_assessment.services.feedback import generate_feedback, near_miss_suggestions
from speech_assessment.services.normalizer import strip_fillers, tokenize
from speech_assessment.services.scoring import aggregate_scores, word_error_rate

logger = logging.getLogger(__name__)


class AssessmentService:
    """Scores a learner's transcript against the sentence they were asked to read.

    The service keeps only its immutable settings, so a single instance can be
    shared between request handlers.
    """

    def __init__(self, settings: Optional[AssessmentSettings] = None):
        """Store the settings and build the word aligner that uses them."""
        self.settings = settings or AssessmentSettings.from_config()
        self._aligner = WordAligner(self.settings)

    def assess(self, reference_text: Any, transcribed_text: Any, locale: Optional[str] = None) -> Assessment:
        """Compare ``transcribed_text`` with ``reference_text`` word by word.

        Never raises for odd input: ``None`` or non-text values count as an
        empty string, and an empty transcript yields an all-missing result.
        """
        s = self.settings
        locale = locale or s.locale

        reference = tokenize(reference_text, expand_contractions=s.expand_contractions)
        transcript = tokenize(transcribed_text, expand_contractions=s.expand_contractions)
        transcript = strip_fillers(transcript, protected={t.text for t in reference})

        reference_words = [t.text for t in reference]
        transcribed_words = [t.text for t in transcript]

        if not reference:
            return Assessment(
                overall_score=0,
                accuracy_score=0,
                completeness_score=0,
                reference_words=[],
                transcribed_words=transcribed_words,
                feedback=generate_feedback(0, 0, 0, 0, 0, locale=locale, extra_word_ratio=s.extra_word_ratio),
                strategy=s.strategy,
            )

        alignment = self._aligner.align(reference, transcript)
        extra_words = [transcribed_words[j] for j in alignment.extra_indices(len(transcript))]
        card = aggregate_scores(
            alignment.comparisons,
            accuracy_weight=s.accuracy_weight,
            completeness_weight=s.completeness_weight,
        )

        result = Assessment(
            overall_score=card.overall,
            accuracy_score=card.accuracy,
            completeness_score=card.completeness,
            reference_words=reference_words,
            transcribed_words=transcribed_words,
            word_comparisons=alignment.comparisons,
            correct_count=card.correct,
            incorrect_count=card.incorrect,
            missing_count=card.missing,
            extra_count=len(extra_words),
            extra_words=extra_words,
            word_error_rate=word_error_rate(reference_words, transcribed_words),
            suggestions=near_miss_suggestions(alignment.comparisons, locale=locale),
            feedback=generate_feedback(
                card.overall,
                card.missing,
                len(extra_words),
                card.incorrect,
                card.total,
                locale=locale,
                extra_word_ratio=s.extra_word_ratio,
            ),
            strategy=s.strategy,
        )
        logger.info(
            "Avaliação concluída: %d palavras, %d corretas, %d incorretas, %d ausentes, %d extras, nota %d.",
            card.total, card.correct, card.incorrect, card.missing, len(extra_words), card.overall,
        )
        return result


def assess(
    reference_text: Any,
    transcribed_text: Any,
    *,
    settings: Optional[AssessmentSettings] = None,
    locale: Optional[str] = None,
) -> Assessment:
    """Convenience wrapper building a fresh ``AssessmentService`` per call."""
    return AssessmentService(settings).assess(reference_text, transcribed_text, locale=locale)
