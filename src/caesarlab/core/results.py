from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True, order=True)
class SolveResult:
    # sort_index comes first so dataclass ordering uses it automatically
    sort_index: tuple[float, float, int] = field(init=False, repr=False)

    cipher_name: str
    plaintext: str
    key: Optional[str] = None

    # Higher is better
    score: float = 0.0
    confidence: float = 0.0

    notes: str = ""

    meta: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # dataclass(order=True) sorts ascending; we want score/conf descending,
        # so we negate them. Add plaintext length as a stable, weak tie-break.
        object.__setattr__(self, "sort_index", (-self.score, -self.confidence, -len(self.plaintext)))


@dataclass(frozen=True)
class FrequencyEntry:
    letter: str
    count: int
    percent: float  # share of all letters in the text, 0..100
    english: float  # reference English percentage
    difference: float  # percent - english

    def to_dict(self) -> dict[str, Any]:
        return {
            "letter": self.letter,
            "count": self.count,
            "percent": self.percent,
            "english": self.english,
            "difference": self.difference,
        }


@dataclass(frozen=True)
class PatternEntry:
    pattern: str
    count: int

    def to_dict(self) -> dict[str, Any]:
        return {"pattern": self.pattern, "count": self.count}


@dataclass(frozen=True)
class FrequencyReport:
    total_letters: int
    letters: list[FrequencyEntry]
    digraphs: list[PatternEntry]
    trigraphs: list[PatternEntry]
    doubles: dict[str, int]
    ioc: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_letters": self.total_letters,
            "letters": [e.to_dict() for e in self.letters],
            "digraphs": [e.to_dict() for e in self.digraphs],
            "trigraphs": [e.to_dict() for e in self.trigraphs],
            "doubles": dict(self.doubles),
            "ioc": self.ioc,
        }
