from __future__ import annotations

def register_all() -> None:
    from .monoalphabetic import caesar, keyed_caesar  # noqa: F401
