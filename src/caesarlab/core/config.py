"""
Runtime settings for the caesarlab CLI.

Defaults match the original lab rules (shift in 1..25, keyword of at least
seven letters, top ten patterns). Each value can be overridden with a
``CAESARLAB_*`` environment variable.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

ENV_PREFIX = "CAESARLAB_"


def _env_int(env: Mapping[str, str], name: str, default: int, minimum: int = 1) -> int:
    raw = env.get(ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}.") from e
    if value < minimum:
        raise ValueError(f"{ENV_PREFIX}{name} must be >= {minimum}, got {value}.")
    return value


@dataclass(frozen=True)
class Settings:
    min_shift: int = 1
    max_shift: int = 25
    min_keyword_length: int = 7
    top_n: int = 10
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if env is None else env
        base = cls()
        return replace(
            base,
            min_keyword_length=_env_int(env, "MIN_KEYWORD_LENGTH", base.min_keyword_length),
            top_n=_env_int(env, "TOP_N", base.top_n),
            log_level=(env.get(ENV_PREFIX + "LOG_LEVEL") or base.log_level).upper(),
        )
