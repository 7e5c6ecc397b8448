from __future__ import annotations

import logging
from collections import Counter

from .results import FrequencyEntry, FrequencyReport, PatternEntry
from .scoring import ENGLISH_FREQ
from .utils import index_of_coincidence_az, normalize_az, sliding_windows

logger = logging.getLogger(__name__)

DEFAULT_TOP_N = 10


def letter_frequencies(text: str) -> list[FrequencyEntry]:
    """
    Count each letter present in `text` and compare it to English.

    Sorted by count descending; equal counts are ordered alphabetically.
    Letters that never occur are left out.
    """
    s = normalize_az(text)
    total = len(s)
    if total == 0:
        return []

    counts = Counter(s)
    entries = []
    for ch, c in sorted(counts.items(), key=lambda kv: (-kv[1], kv[0])):
        pct = c / total * 100.0
        english = ENGLISH_FREQ[ch]
        entries.append(
            FrequencyEntry(letter=ch, count=c, percent=pct, english=english, difference=pct - english)
        )
    return entries


def pattern_frequencies(text: str, size: int, *, top_n: int = DEFAULT_TOP_N) -> list[PatternEntry]:
    """
    Patterns of `size` letters that occur more than once, most common first.
    Equal counts are ordered alphabetically; at most `top_n` are returned.
    """
    if size < 1:
        raise ValueError(f"Pattern size must be >= 1, got {size}.")
    if top_n < 1:
        raise ValueError(f"top_n must be >= 1, got {top_n}.")
    s = normalize_az(text)
    counts = Counter(sliding_windows(s, size))
    repeated = [(p, c) for p, c in counts.items() if c > 1]
    repeated.sort(key=lambda pc: (-pc[1], pc[0]))
    return [PatternEntry(pattern=p, count=c) for p, c in repeated[:top_n]]


def digraphs(text: str, *, top_n: int = DEFAULT_TOP_N) -> list[PatternEntry]:
    return pattern_frequencies(text, 2, top_n=top_n)


def trigraphs(text: str, *, top_n: int = DEFAULT_TOP_N) -> list[PatternEntry]:
    return pattern_frequencies(text, 3, top_n=top_n)


def doubled_letters(text: str) -> dict[str, int]:
    """Every doubled letter ("LL", "SS", ...) with its count. Overlapping windows count."""
    s = normalize_az(text)
    counts = Counter(w for w in sliding_windows(s, 2) if w[0] == w[1])
    return dict(sorted(counts.items()))


def analyze_frequencies(text: str, *, top_n: int = DEFAULT_TOP_N) -> FrequencyReport:
    """Run every frequency analysis over `text` and bundle the results."""
    s = normalize_az(text)
    logger.debug("Analyzing %d letters (top_n=%d)", len(s), top_n)
    return FrequencyReport(
        total_letters=len(s),
        letters=letter_frequencies(s),
        digraphs=digraphs(s, top_n=top_n),
        trigraphs=trigraphs(s, top_n=top_n),
        doubles=doubled_letters(s),
        ioc=index_of_coincidence_az(s),
    )
