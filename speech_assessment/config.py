"""Assessment configuration constants."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields

from dotenv import load_dotenv

load_dotenv()

# Word classification: correct/partial use the bonus-adjusted score, exact the raw similarity
CORRECT_THRESHOLD: float = float(os.getenv("ASSESS_CORRECT_THRESHOLD", "0.7"))
PARTIAL_THRESHOLD: float = float(os.getenv("ASSESS_PARTIAL_THRESHOLD", "0.5"))
EXACT_THRESHOLD: float = float(os.getenv("ASSESS_EXACT_THRESHOLD", "0.95"))

# Aligner window: transcript indices [i - radius, i + radius] are candidates
WINDOW_RADIUS: int = int(os.getenv("ASSESS_WINDOW_RADIUS", "3"))
POSITION_BONUS: float = float(os.getenv("ASSESS_POSITION_BONUS", "0.05"))

# Similarity scorer
LENGTH_BONUS: float = float(os.getenv("ASSESS_LENGTH_BONUS", "0.1"))
LENGTH_BONUS_MIN_LEN: int = int(os.getenv("ASSESS_LENGTH_BONUS_MIN_LEN", "5"))
PHONETIC_SIMILARITY: float = float(os.getenv("ASSESS_PHONETIC_SIMILARITY", "0.9"))

# Aggregation and feedback
ACCURACY_WEIGHT: float = float(os.getenv("ASSESS_ACCURACY_WEIGHT", "0.6"))
COMPLETENESS_WEIGHT: float = float(os.getenv("ASSESS_COMPLETENESS_WEIGHT", "0.4"))
EXTRA_WORD_RATIO: float = float(os.getenv("ASSESS_EXTRA_WORD_RATIO", "0.2"))

ALIGNMENT_STRATEGY: str = os.getenv("ASSESS_ALIGNMENT_STRATEGY", "greedy").strip().lower()
FEEDBACK_LOCALE: str = os.getenv("ASSESS_FEEDBACK_LOCALE", "en").strip().lower()
EXPAND_CONTRACTIONS: bool = os.getenv("ASSESS_EXPAND_CONTRACTIONS", "False").lower() in ("true", "1", "yes")

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

ALIGNMENT_STRATEGIES = ("greedy", "global")
SUPPORTED_LOCALES = ("en", "vi")


class InvalidSettingsError(ValueError):
    """Raised when assessment settings are inconsistent or out of range."""


@dataclass(frozen=True)
class AssessmentSettings:
    """Immutable bundle of the tunables used by a single assessment service."""

    correct_threshold: float = CORRECT_THRESHOLD
    partial_threshold: float = PARTIAL_THRESHOLD
    exact_threshold: float = EXACT_THRESHOLD
    window_radius: int = WINDOW_RADIUS
    position_bonus: float = POSITION_BONUS
    length_bonus: float = LENGTH_BONUS
    length_bonus_min_len: int = LENGTH_BONUS_MIN_LEN
    phonetic_similarity: float = PHONETIC_SIMILARITY
    accuracy_weight: float = ACCURACY_WEIGHT
    completeness_weight: float = COMPLETENESS_WEIGHT
    extra_word_ratio: float = EXTRA_WORD_RATIO
    strategy: str = ALIGNMENT_STRATEGY
    locale: str = FEEDBACK_LOCALE
    expand_contractions: bool = EXPAND_CONTRACTIONS

    def __post_init__(self) -> None:
        for name in (
            "correct_threshold",
            "partial_threshold",
            "exact_threshold",
            "position_bonus",
            "length_bonus",
            "phonetic_similarity",
            "accuracy_weight",
            "completeness_weight",
        ):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise InvalidSettingsError(f"{name} must be between 0 and 1, got {value!r}")
        if self.partial_threshold > self.correct_threshold:
            raise InvalidSettingsError("partial_threshold cannot exceed correct_threshold")
        if self.window_radius < 0:
            raise InvalidSettingsError("window_radius must be non-negative")
        if self.length_bonus_min_len < 0:
            raise InvalidSettingsError("length_bonus_min_len must be non-negative")
        if self.extra_word_ratio < 0:
            raise InvalidSettingsError("extra_word_ratio must be non-negative")
        if self.strategy not in ALIGNMENT_STRATEGIES:
            raise InvalidSettingsError(
                f"strategy must be one of {', '.join(ALIGNMENT_STRATEGIES)}, got {self.strategy!r}"
            )
        if self.locale not in SUPPORTED_LOCALES:
            raise InvalidSettingsError(
                f"locale must be one of {', '.join(SUPPORTED_LOCALES)}, got {self.locale!r}"
            )

    @classmethod
    def from_config(cls, **overrides) -> "AssessmentSettings":
        """Build settings from the current module constants, applying keyword overrides."""
        values = {
            "correct_threshold": CORRECT_THRESHOLD,
            "partial_threshold": PARTIAL_THRESHOLD,
            "exact_threshold": EXACT_THRESHOLD,
            "window_radius": WINDOW_RADIUS,
            "position_bonus": POSITION_BONUS,
            "length_bonus": LENGTH_BONUS,
            "length_bonus_min_len": LENGTH_BONUS_MIN_LEN,
            "phonetic_similarity": PHONETIC_SIMILARITY,
            "accuracy_weight": ACCURACY_WEIGHT,
            "completeness_weight": COMPLETENESS_WEIGHT,
            "extra_word_ratio": EXTRA_WORD_RATIO,
            "strategy": ALIGNMENT_STRATEGY,
            "locale": FEEDBACK_LOCALE,
            "expand_contractions": EXPAND_CONTRACTIONS,
        }
        known = {f.name for f in fields(cls)}
        unknown = set(overrides) - known
        if unknown:
            raise InvalidSettingsError(f"Unknown settings: {', '.join(sorted(unknown))}")
        values.update(overrides)
        return cls(**values)
