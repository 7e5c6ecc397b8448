from __future__ import annotations

from collections import Counter

from .utils import normalize_az

# ----------------------------
# English reference table
# ----------------------------

# Published English letter frequencies, in percent.
ENGLISH_FREQ = {
    "A": 8.17, "B": 1.49, "C": 2.78, "D": 4.25, "E": 12.70, "F": 2.23,
    "G": 2.01, "H": 6.09, "I": 6.97, "J": 0.15, "K": 0.77, "L": 4.03,
    "M": 2.41, "N": 6.75, "O": 7.51, "P": 1.93, "Q": 0.09, "R": 5.99,
    "S": 6.33, "T": 9.06, "U": 2.76, "V": 0.98, "W": 2.36, "X": 0.15,
    "Y": 1.97, "Z": 0.07,
}


def chi_squared_english(az_text: str) -> float:
    """Lower is better."""
    s = normalize_az(az_text)
    n = len(s)
    if n == 0:
        return float("inf")

    counts = Counter(s)
    chi2 = 0.0
    for ch, expected_pct in ENGLISH_FREQ.items():
        observed = counts.get(ch, 0)
        expected = expected_pct / 100.0 * n
        if expected > 0:
            chi2 += (observed - expected) ** 2 / expected
    return chi2


def english_likeness_score(text: str) -> float:
    """
    Returns 0..100, higher is more English-like.
    Only uses letter statistics, so it is meaningful for ranking Caesar shifts
    but not for telling English apart from a transposition.
    """
    chi2 = chi_squared_english(text)
    if chi2 == float("inf"):
        return 0.0
    return 100.0 / (1.0 + (chi2 / 150.0))


def _length_confidence_scale(n_letters: int) -> float:
    """Downscale confidence for short texts; reaches 1.0 around 100 letters."""
    if n_letters <= 0:
        return 0.25
    return max(0.25, min(1.0, n_letters / 100.0))


def confidence_from_score(text: str, score: float) -> float:
    conf = min(1.0, max(0.0, score / 100.0))
    conf *= _length_confidence_scale(len(normalize_az(text)))
    return max(0.0, min(1.0, conf))
