# tests/test_alignment_service.py
import pytest

from speech_assessment.models.word_token import MatchKind
from speech_assessment.services.alignment_service import WordAligner
from speech_assessment.services.normalizer import tokenize


def _align(aligner, reference, transcript):
    ref, hyp = tokenize(reference), tokenize(transcript)
    return aligner.align(ref, hyp), len(hyp)


def _kinds(result):
    return [c.match_kind for c in result.comparisons]


def test_identical_sentences_are_exact(aligner):
    result, n = _align(aligner, "hello world", "hello world")
    assert _kinds(result) == [MatchKind.EXACT, MatchKind.EXACT]
    assert all(c.is_correct for c in result.comparisons)
    assert result.consumed == {0, 1}
    assert result.extra_indices(n) == []


def test_local_reordering_is_tolerated(aligner):
    result, _ = _align(aligner, "hello world", "world hello")
    assert _kinds(result) == [MatchKind.EXACT, MatchKind.EXACT]
    assert [c.spoken_word for c in result.comparisons] == ["hello", "world"]


def test_homophones_are_correct_but_similar(aligner):
    result, _ = _align(aligner, "there are two cats", "their are to cats")
    assert [c.is_correct for c in result.comparisons] == [True, True, True, True]
    assert _kinds(result) == [MatchKind.SIMILAR, MatchKind.EXACT, MatchKind.SIMILAR, MatchKind.EXACT]


def test_skipped_word_is_missing(aligner):
    result, n = _align(aligner, "the quick brown fox", "the brown fox")
    assert _kinds(result) == [MatchKind.EXACT, MatchKind.MISSING, MatchKind.EXACT, MatchKind.EXACT]
    missing = result.comparisons[1]
    assert missing.word == "quick"
    assert missing.is_correct is False
    assert missing.spoken_word is None
    assert result.extra_indices(n) == []


def test_near_miss_is_matched_but_incorrect(aligner):
    # fish/fast: 1 - 2/4 = 0.5, plus position bonus 0.55
    result, _ = _align(aligner, "fish", "fast")
    [comparison] = result.comparisons
    assert comparison.is_correct is False
    assert comparison.match_kind == MatchKind.SIMILAR
    assert comparison.spoken_word == "fast"
    assert result.consumed == {0}


def test_one_typo_passes_as_similar(aligner):
    result, _ = _align(aligner, "cat", "cut")
    [comparison] = result.comparisons
    assert comparison.is_correct is True
    assert comparison.match_kind == MatchKind.SIMILAR


def test_match_outside_window_is_missing(aligner):
    result, n = _align(aligner, "apple", "one two three four apple")
    assert _kinds(result) == [MatchKind.MISSING]
    assert result.consumed == set()
    assert result.extra_indices(n) == [0, 1, 2, 3, 4]


def test_wider_window_reaches_the_match(make_settings):
    aligner = WordAligner(make_settings(window_radius=4))
    result, n = _align(aligner, "apple", "one two three four apple")
    assert _kinds(result) == [MatchKind.EXACT]
    assert result.extra_indices(n) == [0, 1, 2, 3]


def test_greedy_never_gives_back_a_consumed_token(aligner):
    result, _ = _align(aligner, "bat cat", "cat")
    assert result.comparisons[0].spoken_word == "cat"
    assert result.comparisons[0].is_correct is True
    assert result.comparisons[1].match_kind == MatchKind.MISSING


def test_ties_keep_the_lowest_index(aligner):
    # go/no and go/so both score 0.5 + 0.05
    result, n = _align(aligner, "go", "no so")
    assert result.comparisons[0].spoken_word == "no"
    assert result.extra_indices(n) == [1]


def test_empty_inputs(aligner):
    result, n = _align(aligner, "", "some words here")
    assert result.comparisons == []
    assert result.extra_indices(n) == [0, 1, 2]

    result, n = _align(aligner, "three little words", "")
    assert _kinds(result) == [MatchKind.MISSING] * 3
    assert result.consumed == set()
    assert n == 0


def test_each_transcript_token_is_consumed_once(aligner):
    result, _ = _align(aligner, "the the the the", "the the")
    spoken = [c.spoken_word for c in result.comparisons]
    assert spoken.count("the") == 2
    assert len(result.consumed) == 2


def test_global_alignment_reassigns_to_the_better_word(global_aligner):
    result, _ = _align(global_aligner, "bat cat", "cat")
    assert result.comparisons[0].match_kind == MatchKind.MISSING
    assert result.comparisons[1].match_kind == MatchKind.EXACT


def test_global_alignment_has_no_window(global_aligner):
    result, n = _align(global_aligner, "apple", "one two three four apple")
    assert _kinds(result) == [MatchKind.EXACT]
    assert result.extra_indices(n) == [0, 1, 2, 3]


def test_global_alignment_preserves_order(global_aligner):
    result, n = _align(global_aligner, "hello world", "world hello")
    assert _kinds(result) == [MatchKind.EXACT, MatchKind.MISSING]
    assert result.extra_indices(n) == [0]


def test_global_alignment_classifies_with_same_thresholds(global_aligner):
    result, _ = _align(global_aligner, "there are two fish", "their are to fast")
    assert [c.is_correct for c in result.comparisons] == [True, True, True, False]
    assert result.comparisons[3].match_kind == MatchKind.SIMILAR


@pytest.mark.parametrize("strategy", ["greedy", "global"])
def test_one_comparison_per_reference_token(strategy, make_settings):
    aligner = WordAligner(make_settings(strategy=strategy))
    result, n = _align(aligner, "a quick test of the aligner here", "quick test uh of aligner there extra")
    assert len(result.comparisons) == 7
    assert len(result.consumed) + len(result.extra_indices(n)) == n


def test_window_lower_bound_excludes_far_earlier_tokens(aligner):
    # "apple" at i=4 searches [1, 8); the transcript's "apple" sits at j=0
    result, n = _align(aligner, "a b c d apple", "apple x y z w")
    assert _kinds(result)[-1] == MatchKind.MISSING
    assert 0 in result.extra_indices(n)


def test_window_lower_bound_is_inclusive(aligner):
    # i=3 searches [0, 7), so j=0 is still a candidate
    result, n = _align(aligner, "a b c apple", "apple x y z")
    assert _kinds(result)[-1] == MatchKind.EXACT
    assert result.comparisons[-1].spoken_word == "apple"
    assert 0 not in result.extra_indices(n)


def test_position_bonus_applies_one_step_away(aligner):
    # cat/cut 0.667 + 0.05 reaches the correct threshold
    result, _ = _align(aligner, "cat", "x cut")
    [comparison] = result.comparisons
    assert comparison.spoken_word == "cut"
    assert comparison.is_correct is True


def test_position_bonus_stops_two_steps_away(aligner):
    # |i - j| == 2: plain 0.667, matched but not correct
    result, _ = _align(aligner, "cat", "x y cut")
    [comparison] = result.comparisons
    assert comparison.spoken_word == "cut"
    assert comparison.is_correct is False
    assert comparison.match_kind == MatchKind.SIMILAR
