from dataclasses import dataclass
from enum import Enum


class MatchKind(str, Enum):
    EXACT = "exact"
    SIMILAR = "similar"
    MISSING = "missing"
    EXTRA = "extra"


@dataclass(frozen=True)
class Token:
    text: str
    position: int

    def __str__(self) -> str:
        return self.text
