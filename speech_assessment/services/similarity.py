"""Token-pair similarity based on Levenshtein distance and phonetic equivalence."""

from __future__ import annotations

from typing import Union

from rapidfuzz.distance import Levenshtein

from speech_assessment import config
from speech_assessment.models.word_token import Token
from speech_assessment.services.phonetics import are_equivalent

TokenLike = Union[Token, str]


def _clamp01(x: float) -> float:
    return max(0.0, min(1.0, x))


def _text(token: TokenLike) -> str:
    return token.text if isinstance(token, Token) else (token or "")


def levenshtein(a: str, b: str) -> int:
    """Classic edit distance; insertion, deletion and substitution all cost 1."""
    return Levenshtein.distance(a, b)


def similarity(
    a: TokenLike,
    b: TokenLike,
    *,
    phonetic_similarity: float = config.PHONETIC_SIMILARITY,
    length_bonus: float = config.LENGTH_BONUS,
    length_bonus_min_len: int = config.LENGTH_BONUS_MIN_LEN,
) -> float:
    """Similarity of two normalized tokens in [0, 1].

    Identical tokens score 1.0 and an empty side scores 0.0. Tokens from the
    same phonetic equivalence group score ``phonetic_similarity``. Everything
    else scores ``1 - distance / longest`` with a small bonus for long words,
    where one slip weighs less.
    """
    s1, s2 = _text(a), _text(b)
    if s1 == s2:
        return 1.0
    if not s1 or not s2:
        return 0.0
    if are_equivalent(s1, s2):
        return phonetic_similarity

    longest = max(len(s1), len(s2))
    bonus = length_bonus if longest > length_bonus_min_len else 0.0
    return _clamp01(1.0 - levenshtein(s1, s2) / longest + bonus)
