from __future__ import annotations

import enum
import logging
import re
from typing import Dict, Tuple

from caesarlab.core.utils import normalize_az

logger = logging.getLogger(__name__)

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

_KEY_SEP_RE = re.compile(r"[:,\s]+")


class Operation(str, enum.Enum):
    ENCRYPT = "encrypt"
    DECRYPT = "decrypt"


def validate_alphabet(alphabet: str) -> str:
    """Return the uppercased alphabet; raise ValueError unless it is a permutation of A-Z."""
    a = f"{alphabet}".upper()
    if len(a) != 26 or set(a) != set(ALPHABET):
        raise ValueError(f"Alphabet must contain each letter A-Z exactly once, got {alphabet!r}.")
    return a


def build_permuted_alphabet(keyword: str) -> str:
    """
    Keyword letters in first-occurrence order, then the rest of A-Z in natural order.
    Any keyword (empty, one letter, all 26 letters) gives a 26-letter permutation.
    """
    seen: set[str] = set()
    out = []
    for ch in normalize_az(keyword) + ALPHABET:
        if ch not in seen:
            seen.add(ch)
            out.append(ch)
    permuted = "".join(out)
    logger.debug("Permuted alphabet for keyword %r: %s", keyword, permuted)
    return permuted


def index_map(alphabet: str) -> Dict[str, int]:
    return {ch: i for i, ch in enumerate(alphabet)}


def substitute(
    text: str,
    shift: int,
    alphabet: str = ALPHABET,
    operation: Operation = Operation.ENCRYPT,
) -> str:
    """
    Shift every letter of `text` by `shift` positions within `alphabet`.

    `text` is expected to be normalized already. Characters missing from the
    alphabet are dropped from the output, so this never fails.
    """
    positions = index_map(alphabet)
    size = len(alphabet)
    step = shift if Operation(operation) is Operation.ENCRYPT else -shift

    out = []
    for ch in text:
        p = positions.get(ch)
        if p is None:
            continue
        out.append(alphabet[(p + step) % size])
    return "".join(out)


def encrypt(text: str, shift: int, alphabet: str = ALPHABET) -> str:
    """Normalize, then shift forwards. Raises ValueError for a malformed alphabet."""
    return substitute(normalize_az(text), shift, validate_alphabet(alphabet), Operation.ENCRYPT)


def decrypt(text: str, shift: int, alphabet: str = ALPHABET) -> str:
    """Normalize, then shift backwards. Raises ValueError for a malformed alphabet."""
    return substitute(normalize_az(text), shift, validate_alphabet(alphabet), Operation.DECRYPT)


def parse_shift(key: str) -> int:
    try:
        return int(f"{key}".strip())
    except ValueError as e:
        raise ValueError(f"Shift key must be an integer, got {key!r}.") from e


def parse_keyed_key(key: str) -> Tuple[int, str]:
    """
    Parse keys like: "3:cryptography" or "3,cryptography" or "3 cryptography"
    Returns (shift, keyword).
    """
    parts = [p for p in _KEY_SEP_RE.split(f"{key}".strip()) if p]
    if len(parts) != 2:
        raise ValueError("Expected key format like 'shift:keyword' (e.g., '3:cryptography').")
    shift = parse_shift(parts[0])
    keyword = normalize_az(parts[1])
    if not keyword:
        raise ValueError("Keyword must contain at least one A-Z letter.")
    return shift, keyword
