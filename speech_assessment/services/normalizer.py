"""Text normalization and tokenization for transcript assessment."""

from __future__ import annotations

import logging
import re
from types import MappingProxyType
from typing import Any, Iterable, List, Sequence

from speech_assessment.models.word_token import Token

logger = logging.getLogger(__name__)

# Punctuation and dashes removed before splitting; apostrophes go too ("they're" -> "theyre")
_STRIP_RE = re.compile(
    r"[.,;:!?'\"(){}\[\]\-_+=*&^%$#@~`|\\/<>‐-―‘’“”…«»¿¡]"
)
_SPACES_RE = re.compile(r"\s+")

# Scripts written without spaces between words (Han, kana, hangul)
_UNSEGMENTED_RE = re.compile(r"[぀-ヿ㐀-䶿一-鿿가-힯]")

FILLER_WORDS = frozenset({"um", "uh", "umm", "uhh", "er", "erm", "ah", "hmm", "mm", "like"})
FILLER_PHRASES = frozenset({
    ("you", "know"),
    ("sort", "of"),
    ("kind", "of"),
    ("i", "mean"),
})

# Keys are post-normalization forms, so "don't" arrives here as "dont".
# Forms that collide with ordinary words ("were", "its", "ill", "well", "shell", "hell") are left out.
CONTRACTIONS = MappingProxyType({
    "wont": ("will", "not"),
    "cant": ("cannot",),
    "dont": ("do", "not"),
    "doesnt": ("does", "not"),
    "didnt": ("did", "not"),
    "youre": ("you", "are"),
    "theyre": ("they", "are"),
    "im": ("i", "am"),
    "ive": ("i", "have"),
    "shes": ("she", "is"),
    "thats": ("that", "is"),
    "isnt": ("is", "not"),
    "arent": ("are", "not"),
    "wasnt": ("was", "not"),
    "werent": ("were", "not"),
    "havent": ("have", "not"),
    "hasnt": ("has", "not"),
    "hadnt": ("had", "not"),
    "wouldnt": ("would", "not"),
    "couldnt": ("could", "not"),
    "shouldnt": ("should", "not"),
})


def coerce_text(value: Any) -> str:
    """Turn whatever the caller passed into a string without raising."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    logger.warning("Entrada não textual ignorada (%s); usando string vazia.", type(value).__name__)
    return ""


def normalize_text(text: str) -> str:
    text = (text or "").lower()
    text = _STRIP_RE.sub("", text)
    text = _SPACES_RE.sub(" ", text)
    return text.strip()


def looks_unsegmented(text: str) -> bool:
    """True when the text contains a script that is not space-delimited."""
    return bool(_UNSEGMENTED_RE.search(text or ""))


def tokenize(text: Any, *, expand_contractions: bool = False) -> List[Token]:
    """Normalize ``text`` and split it into positioned tokens.

    Tokenization is whitespace based; scripts such as Chinese or Japanese must
    be segmented by the caller beforehand.
    """
    raw = coerce_text(text)
    if looks_unsegmented(raw):
        logger.warning("Texto com escrita sem espaços; tokenização por espaço pode agrupar várias palavras.")
    words = [w for w in normalize_text(raw).split(" ") if w]
    if expand_contractions:
        words = [part for w in words for part in CONTRACTIONS.get(w, (w,))]
    return [Token(text=w, position=i) for i, w in enumerate(words)]


def strip_fillers(tokens: Sequence[Token], protected: Iterable[str] = ()) -> List[Token]:
    """Drop filler words and phrases from transcript tokens.

    Fillers that also occur in ``protected`` (the reference vocabulary) are kept,
    so a sentence that really contains "like" or "you know" is not penalized.
    """
    keep_words = set(protected)
    kept: List[Token] = []
    i = 0
    while i < len(tokens):
        if i + 1 < len(tokens):
            pair = (tokens[i].text, tokens[i + 1].text)
            if pair in FILLER_PHRASES and not (pair[0] in keep_words and pair[1] in keep_words):
                i += 2
                continue
        word = tokens[i].text
        if word in FILLER_WORDS and word not in keep_words:
            i += 1
            continue
        kept.append(tokens[i])
        i += 1
    if len(kept) != len(tokens):
        logger.debug("Removidos %d tokens de hesitação da transcrição.", len(tokens) - len(kept))
    return kept
