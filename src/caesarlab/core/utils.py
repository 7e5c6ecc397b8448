from __future__ import annotations

import re
from collections import Counter
from typing import Iterable, Iterator


_AZ_ONLY_RE = re.compile(r"[^A-Z]+")


def normalize_az(s: str) -> str:
    """Keep only A-Z, uppercase. Order is preserved; never fails."""
    if s is None:
        return ""
    s = f"{s}".upper()
    return _AZ_ONLY_RE.sub("", s)


def sliding_windows(s: str, size: int) -> Iterator[str]:
    """Yield every substring of length `size` with stride 1."""
    for i in range(len(s) - size + 1):
        yield s[i:i + size]


def index_of_coincidence_az(s: str) -> float:
    """IoC for A-Z only; returns 0.0 if too short."""
    s = normalize_az(s)
    n = len(s)
    if n < 2:
        return 0.0
    counts = Counter(s)
    num = sum(c * (c - 1) for c in counts.values())
    den = n * (n - 1)
    return num / den if den else 0.0


def chunked(seq: Iterable, size: int):
    buf = []
    for x in seq:
        buf.append(x)
        if len(buf) == size:
            yield buf
            buf = []
    if buf:
        yield buf
