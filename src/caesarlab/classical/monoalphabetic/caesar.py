from __future__ import annotations

from typing import Optional

from caesarlab.core.registry import register_plugin
from caesarlab.core.results import SolveResult
from caesarlab.classical.common import ALPHABET, decrypt, encrypt, parse_shift


class CaesarCipher:
    name = "caesar"

    def encrypt(self, plaintext: str, key: str) -> str:
        return encrypt(plaintext, parse_shift(key), ALPHABET)

    def decrypt(self, ciphertext: str, key: str) -> str:
        return decrypt(ciphertext, parse_shift(key), ALPHABET)

    def crack(self, ciphertext: str, hint: Optional[str] = None) -> list[SolveResult]:
        out: list[SolveResult] = []
        for k in range(26):
            out.append(
                SolveResult(
                    cipher_name=self.name,
                    plaintext=decrypt(ciphertext, k, ALPHABET),
                    key=str(k),
                    notes=f"Caesar shift {k}",
                )
            )
        return out


register_plugin(CaesarCipher())
