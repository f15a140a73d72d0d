"""Learner-facing feedback messages."""

from __future__ import annotations

from types import MappingProxyType
from typing import List, Optional, Sequence

from speech_assessment import config
from speech_assessment.schemas import WordComparison

# (minimum overall score, message), highest tier first
_TIERS = MappingProxyType({
    "en": (
        (90, "Excellent pronunciation! Almost every word was clear."),
        (75, "Good job! Most words were pronounced correctly."),
        (60, "Fair attempt. Some words need more practice."),
        (40, "Needs practice. Try speaking more slowly and clearly."),
        (0, "Keep going! Listen to the sentence again and try once more."),
    ),
    "vi": (
        (90, "Phát âm xuất sắc! Hầu hết các từ đều rõ ràng."),
        (75, "Làm tốt lắm! Phần lớn các từ được phát âm đúng."),
        (60, "Khá ổn. Một số từ cần luyện tập thêm."),
        (40, "Cần luyện tập thêm. Hãy nói chậm và rõ ràng hơn."),
        (0, "Cố lên! Hãy nghe lại câu mẫu và thử lại."),
    ),
})

_CLAUSES = MappingProxyType({
    "en": {
        "missing": " {n} word(s) were not detected.",
        "extra": " {n} extra word(s) were added.",
        "incorrect": " {n} word(s) were close but not quite right.",
        "suggestion": '"{spoken}" might be "{expected}"',
    },
    "vi": {
        "missing": " Có {n} từ không được nhận diện.",
        "extra": " Có {n} từ thừa được thêm vào.",
        "incorrect": " Có {n} từ gần đúng nhưng chưa chính xác.",
        "suggestion": '"{spoken}" có thể là "{expected}"',
    },
})


def _locale(locale: Optional[str]) -> str:
    locale = (locale or "").strip().lower()
    return locale if locale in _TIERS else "en"


def generate_feedback(
    overall_score: int,
    missing_count: int,
    extra_count: int,
    incorrect_count: int,
    total: int,
    *,
    locale: Optional[str] = "en",
    extra_word_ratio: float = config.EXTRA_WORD_RATIO,
) -> str:
    """Pick the tier message for ``overall_score`` and append clauses for the error counts."""
    loc = _locale(locale)
    message = next(text for floor, text in _TIERS[loc] if overall_score >= floor)

    clauses = _CLAUSES[loc]
    if missing_count > 0:
        message += clauses["missing"].format(n=missing_count)
    if extra_count > extra_word_ratio * total:
        message += clauses["extra"].format(n=extra_count)
    if incorrect_count > 0:
        message += clauses["incorrect"].format(n=incorrect_count)
    return message


def near_miss_suggestions(comparisons: Sequence[WordComparison], *, locale: Optional[str] = "en") -> List[str]:
    template = _CLAUSES[_locale(locale)]["suggestion"]
    return [
        template.format(spoken=c.spoken_word, expected=c.word)
        for c in comparisons
        if not c.is_correct and c.spoken_word is not None
    ]
