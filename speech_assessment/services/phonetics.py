"""Static table of words that speech recognizers commonly confuse."""

from __future__ import annotations

from types import MappingProxyType
from typing import FrozenSet, Mapping, Tuple

# Entries are stored in normalized form (no apostrophes).
EQUIVALENCE_GROUPS: Tuple[FrozenSet[str], ...] = tuple(
    frozenset(group)
    for group in (
        ("there", "their", "theyre"),
        ("to", "too", "two"),
        ("write", "right", "rite"),
        ("see", "sea"),
        ("for", "four", "fore"),
        ("ate", "eight"),
        ("no", "know", "now"),
        ("hear", "here"),
        ("your", "youre"),
        ("buy", "by", "bye"),
        ("hour", "our"),
        ("one", "won"),
        ("week", "weak"),
        ("wood", "would"),
        ("where", "wear", "were"),
        ("brake", "break"),
        ("than", "then"),
        ("accept", "except"),
        ("affect", "effect"),
        ("new", "knew"),
        ("whole", "hole"),
        ("meet", "meat"),
        ("son", "sun"),
        ("be", "bee"),
        ("blue", "blew"),
        ("i", "eye"),
        ("which", "witch"),
        ("weather", "whether"),
        ("wait", "weight"),
        ("piece", "peace"),
        ("pair", "pear"),
        ("flower", "flour"),
        ("road", "rode"),
        ("male", "mail"),
        ("tail", "tale"),
        # frequent recognizer substitutions for non-native speech
        ("think", "fink", "sink"),
        ("the", "de"),
        ("with", "wif"),
        ("very", "wery"),
        ("what", "wat"),
    )
)


def _build_index(groups: Tuple[FrozenSet[str], ...]) -> Mapping[str, FrozenSet[int]]:
    index = {}
    for gid, group in enumerate(groups):
        for word in group:
            index.setdefault(word, set()).add(gid)
    return MappingProxyType({word: frozenset(ids) for word, ids in index.items()})


_GROUPS_BY_WORD = _build_index(EQUIVALENCE_GROUPS)


def are_equivalent(a: str, b: str) -> bool:
    """True when ``a`` and ``b`` are the same word or share an equivalence group."""
    if a == b:
        return True
    return bool(_GROUPS_BY_WORD.get(a, frozenset()) & _GROUPS_BY_WORD.get(b, frozenset()))
