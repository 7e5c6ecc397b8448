from .results import FrequencyEntry, FrequencyReport, PatternEntry, SolveResult
from .features import analyze_frequencies, letter_frequencies, pattern_frequencies, doubled_letters
from .registry import register_plugin, encrypt_known, decrypt_known, crack_unknown

__all__ = [
    "FrequencyEntry",
    "FrequencyReport",
    "PatternEntry",
    "SolveResult",
    "analyze_frequencies",
    "letter_frequencies",
    "pattern_frequencies",
    "doubled_letters",
    "register_plugin",
    "encrypt_known",
    "decrypt_known",
    "crack_unknown",
]
