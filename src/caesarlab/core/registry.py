from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from .results import SolveResult
from .scoring import confidence_from_score, english_likeness_score

logger = logging.getLogger(__name__)


class CipherPlugin(Protocol):
    name: str

    def encrypt(self, plaintext: str, key: str) -> str:
        ...

    def decrypt(self, ciphertext: str, key: str) -> str:
        ...

    def crack(self, ciphertext: str, hint: Optional[str] = None) -> list[SolveResult]:
        ...


@dataclass
class _PluginEntry:
    plugin: CipherPlugin


_PLUGINS: dict[str, _PluginEntry] = {}


def register_plugin(plugin: CipherPlugin) -> None:
    key = plugin.name.lower().strip()
    if not key:
        raise ValueError("Plugin must have a non-empty name.")
    _PLUGINS[key] = _PluginEntry(plugin=plugin)
    logger.debug("Registered cipher plugin %r", key)


def list_plugins() -> list[str]:
    return sorted(_PLUGINS.keys())


def get_plugin(cipher_name: str) -> CipherPlugin:
    name = cipher_name.lower().strip()
    if name not in _PLUGINS:
        raise ValueError(f"Unknown cipher '{cipher_name}'. Available: {', '.join(list_plugins())}")
    return _PLUGINS[name].plugin


def encrypt_known(cipher_name: str, plaintext: str, key: Optional[str]) -> str:
    if key is None:
        raise ValueError("This encrypt operation requires --key.")
    return get_plugin(cipher_name).encrypt(plaintext, key)


def decrypt_known(cipher_name: str, ciphertext: str, key: Optional[str]) -> str:
    if key is None:
        raise ValueError("This decrypt operation requires --key.")
    return get_plugin(cipher_name).decrypt(ciphertext, key)


def crack_unknown(
    ciphertext: str,
    *,
    top_n: int = 10,
    include: set[str] | None = None,
    hint: Optional[str] = None,
) -> list[SolveResult]:
    """
    Ask registered plugins to attempt cracking and rank the candidates by how
    English-like their letter frequencies are.

    Plugins that need a hint (keyed_caesar needs its keyword) return nothing
    without one.
    """
    if top_n < 1:
        raise ValueError(f"top_n must be >= 1, got {top_n}.")

    results: list[SolveResult] = []

    for name, entry in _PLUGINS.items():
        if include is not None and name not in include:
            continue
        candidates = entry.plugin.crack(ciphertext, hint)
        logger.debug("Plugin %r produced %d candidates", name, len(candidates))
        results.extend(candidates)

    scored: list[SolveResult] = []
    for r in results:
        s = english_likeness_score(r.plaintext)
        scored.append(
            SolveResult(
                cipher_name=r.cipher_name,
                plaintext=r.plaintext,
                key=r.key,
                score=s,
                confidence=confidence_from_score(r.plaintext, s),
                notes=r.notes,
                meta=r.meta,
            )
        )

    scored.sort(key=lambda r: (r.sort_index, r.cipher_name, r.key or ""))
    return scored[:top_n]
