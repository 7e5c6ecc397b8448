from __future__ import annotations

from typing import Optional

from caesarlab.core.registry import register_plugin
from caesarlab.core.results import SolveResult
from caesarlab.core.utils import normalize_az
from caesarlab.classical.common import build_permuted_alphabet, decrypt, encrypt, parse_keyed_key


class KeyedCaesarCipher:
    """
    Caesar shift over a keyword-permuted alphabet.

    Key format is "shift:keyword", e.g. "3:cryptography".
    """

    name = "keyed_caesar"

    def encrypt(self, plaintext: str, key: str) -> str:
        shift, keyword = parse_keyed_key(key)
        return encrypt(plaintext, shift, build_permuted_alphabet(keyword))

    def decrypt(self, ciphertext: str, key: str) -> str:
        shift, keyword = parse_keyed_key(key)
        return decrypt(ciphertext, shift, build_permuted_alphabet(keyword))

    def crack(self, ciphertext: str, hint: Optional[str] = None) -> list[SolveResult]:
        # The keyword is not recoverable by brute force; only the shift is.
        keyword = normalize_az(hint or "")
        if not keyword:
            return []
        alphabet = build_permuted_alphabet(keyword)
        out: list[SolveResult] = []
        for k in range(26):
            out.append(
                SolveResult(
                    cipher_name=self.name,
                    plaintext=decrypt(ciphertext, k, alphabet),
                    key=f"{k}:{keyword}",
                    notes=f"Shift {k} over {alphabet}",
                    meta={"alphabet": alphabet},
                )
            )
        return out


register_plugin(KeyedCaesarCipher())
