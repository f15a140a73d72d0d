import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Set, Tuple

from speech_assessment.config import AssessmentSettings
from speech_assessment.models.word_token import MatchKind, Token
from speech_assessment.schemas import WordComparison
from speech_assessment.services.similarity import similarity

logger = logging.getLogger(__name__)


@dataclass
class _Candidate:
    index: int
    score: float  # with position bonus
    raw: float    # plain similarity


@dataclass
class AlignmentResult:
    comparisons: List[WordComparison]
    consumed: Set[int] = field(default_factory=set)

    def extra_indices(self, transcript_len: int) -> List[int]:
        return [j for j in range(transcript_len) if j not in self.consumed]


class WordAligner:
    """
    Matches reference tokens against transcript tokens, one comparison per reference token.

    "greedy" walks the reference left to right and takes the best unconsumed
    transcript token inside a small window around the same position; a consumed
    token is never handed back. "global" runs a dynamic program over the whole
    token matrix maximizing total similarity, for comparison against greedy.
    """

    def __init__(self, settings: Optional[AssessmentSettings] = None):
        self.settings = settings or AssessmentSettings.from_config()

    def _similarity(self, a: Token, b: Token) -> float:
        s = self.settings
        return similarity(
            a,
            b,
            phonetic_similarity=s.phonetic_similarity,
            length_bonus=s.length_bonus,
            length_bonus_min_len=s.length_bonus_min_len,
        )

    def _classify(self, ref: Token, spoken: Optional[Token], score: float, raw: float) -> WordComparison:
        s = self.settings
        if spoken is not None and score >= s.correct_threshold:
            kind = MatchKind.EXACT if raw >= s.exact_threshold else MatchKind.SIMILAR
            return WordComparison(word=ref.text, is_correct=True, match_kind=kind, spoken_word=spoken.text)
        if spoken is not None and score >= s.partial_threshold:
            return WordComparison(
                word=ref.text, is_correct=False, match_kind=MatchKind.SIMILAR, spoken_word=spoken.text
            )
        return WordComparison(word=ref.text, is_correct=False, match_kind=MatchKind.MISSING)

    def align(self, reference: Sequence[Token], transcript: Sequence[Token]) -> AlignmentResult:
        if self.settings.strategy == "global":
            return self.align_global(reference, transcript)
        return self.align_greedy(reference, transcript)

    def align_greedy(self, reference: Sequence[Token], transcript: Sequence[Token]) -> AlignmentResult:
        s = self.settings
        total = len(transcript)
        consumed: Set[int] = set()
        comparisons: List[WordComparison] = []

        for i, ref in enumerate(reference):
            lo = max(0, i - s.window_radius)
            hi = min(total, i + s.window_radius + 1)

            best: Optional[_Candidate] = None
            for j in range(lo, hi):
                if j in consumed:
                    continue
                raw = self._similarity(ref, transcript[j])
                score = raw + s.position_bonus if abs(i - j) <= 1 else raw
                score = min(1.0, score)
                # strict ">" keeps the lowest j on ties
                if best is None or score > best.score:
                    best = _Candidate(index=j, score=score, raw=raw)

            if best is None or best.score < s.partial_threshold:
                logger.debug("'%s' (pos %d): sem candidato aceitável na janela [%d, %d).", ref.text, i, lo, hi)
                comparisons.append(self._classify(ref, None, 0.0, 0.0))
                continue

            consumed.add(best.index)
            comparison = self._classify(ref, transcript[best.index], best.score, best.raw)
            logger.debug(
                "'%s' (pos %d) -> '%s' (pos %d): score=%.3f %s",
                ref.text, i, transcript[best.index].text, best.index, best.score, comparison.match_kind.value,
            )
            comparisons.append(comparison)

        return AlignmentResult(comparisons=comparisons, consumed=consumed)

    def align_global(self, reference: Sequence[Token], transcript: Sequence[Token]) -> AlignmentResult:
        s = self.settings
        n, m = len(reference), len(transcript)
        sim = [[self._similarity(reference[i], transcript[j]) for j in range(m)] for i in range(n)]

        # dp[i][j]: best total similarity aligning reference[:i] with transcript[:j];
        # only pairs at or above the partial threshold may be matched
        dp = [[0.0] * (m + 1) for _ in range(n + 1)]
        for i in range(1, n + 1):
            for j in range(1, m + 1):
                best = max(dp[i - 1][j], dp[i][j - 1])
                pair = sim[i - 1][j - 1]
                if pair >= s.partial_threshold:
                    best = max(best, dp[i - 1][j - 1] + pair)
                dp[i][j] = best

        pairs: List[Tuple[int, int]] = []
        i, j = n, m
        while i > 0 and j > 0:
            pair = sim[i - 1][j - 1]
            if pair >= s.partial_threshold and dp[i][j] == dp[i - 1][j - 1] + pair:
                pairs.append((i - 1, j - 1))
                i -= 1
                j -= 1
            elif dp[i][j] == dp[i - 1][j]:
                i -= 1
            else:
                j -= 1

        matched = dict(pairs)
        comparisons: List[WordComparison] = []
        consumed: Set[int] = set()
        for i, ref in enumerate(reference):
            j = matched.get(i)
            if j is None:
                comparisons.append(self._classify(ref, None, 0.0, 0.0))
                continue
            consumed.add(j)
            comparisons.append(self._classify(ref, transcript[j], sim[i][j], sim[i][j]))

        logger.debug("Alinhamento global: %d pares em matriz %dx%d.", len(pairs), n, m)
        return AlignmentResult(comparisons=comparisons, consumed=consumed)
