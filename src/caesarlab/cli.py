from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Callable, List, Optional, TypeVar

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from caesarlab.classical import register_all
from caesarlab.classical.common import ALPHABET, Operation, build_permuted_alphabet, substitute
from caesarlab.core.config import Settings
from caesarlab.core.features import analyze_frequencies
from caesarlab.core.registry import crack_unknown, decrypt_known, encrypt_known, list_plugins
from caesarlab.core.results import FrequencyReport
from caesarlab.core.utils import chunked, normalize_az

app = typer.Typer(help="caesarlab: Caesar / keyed Caesar ciphers + frequency analysis.")

logger = logging.getLogger("caesarlab")

T = TypeVar("T")


def _configure_logging(level: str) -> None:
    # Prevent duplicate handlers when the app is invoked more than once per process
    logger.handlers.clear()
    logger.addHandler(RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=True))
    logger.setLevel(level)
    logger.propagate = False


def _settings(ctx: typer.Context) -> Settings:
    if isinstance(ctx.obj, Settings):
        return ctx.obj
    return Settings.from_env()


@app.callback()
def _init(
    ctx: typer.Context,
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Logging level (DEBUG, INFO, WARNING, ...). Env: CAESARLAB_LOG_LEVEL."
    ),
):
    try:
        settings = Settings.from_env()
    except ValueError as e:
        raise typer.BadParameter(str(e))
    ctx.obj = settings
    level = (log_level or settings.log_level).upper()
    if not isinstance(logging.getLevelName(level), int):
        raise typer.BadParameter(f"Unknown log level '{level}'. Use DEBUG, INFO, WARNING, ERROR or CRITICAL.")
    _configure_logging(level)
    # Register plugins exactly once per CLI run
    register_all()


# ----------------------------
# Input validation
# ----------------------------

def validate_shift(raw: str, settings: Settings) -> int:
    try:
        key = int(f"{raw}".strip())
    except ValueError:
        key = None
    if key is None or not settings.min_shift <= key <= settings.max_shift:
        raise ValueError(
            f"Invalid key. It must be an integer between {settings.min_shift} and {settings.max_shift}."
        )
    return key


def validate_keyword(raw: str, settings: Settings) -> str:
    key = f"{raw}".strip()
    clean = normalize_az(key)
    if len(clean) < settings.min_keyword_length:
        raise ValueError(f"Invalid keyword. It must contain at least {settings.min_keyword_length} letters.")
    if len(clean) != len(key):
        raise ValueError("Invalid keyword. It must contain only letters ('A'-'Z', 'a'-'z').")
    return key


def validate_text(raw: str) -> str:
    text = f"{raw}".strip()
    if not text:
        raise ValueError("Input cannot be empty.")
    return text


def _format_output(text: str, group: int) -> str:
    if group <= 0:
        return text
    return " ".join("".join(c) for c in chunked(text, group))


# ----------------------------
# One-shot commands
# ----------------------------

@app.command()
def plugins():
    """List all registered cipher plugins."""
    for name in list_plugins():
        typer.echo(name)


@app.command()
def alphabet(keyword: str = typer.Argument(..., help="Permutation keyword.")):
    """Show the permuted alphabet built from KEYWORD."""
    typer.echo(build_permuted_alphabet(keyword))


def _run_known(op: Operation, cipher: str, key: Optional[str], text: str, group: int) -> None:
    try:
        text = validate_text(text)
        if op is Operation.ENCRYPT:
            out = encrypt_known(cipher, text, key)
        else:
            out = decrypt_known(cipher, text, key)
    except ValueError as e:
        raise typer.BadParameter(str(e))
    typer.echo(_format_output(out, group))


@app.command()
def encrypt(
    cipher: str = typer.Option("caesar", "--cipher", "-c", help="Cipher plugin name (caesar, keyed_caesar)."),
    key: Optional[str] = typer.Option(None, "--key", "-k", help="Shift, or 'shift:keyword' for keyed_caesar."),
    group: int = typer.Option(0, "--group", "-g", help="If >0, print output in blocks of this size."),
    text: str = typer.Argument(..., help="Plaintext to encrypt."),
):
    """Encrypt TEXT with a known cipher and key."""
    _run_known(Operation.ENCRYPT, cipher, key, text, group)


@app.command()
def decrypt(
    cipher: str = typer.Option("caesar", "--cipher", "-c", help="Cipher plugin name (caesar, keyed_caesar)."),
    key: Optional[str] = typer.Option(None, "--key", "-k", help="Shift, or 'shift:keyword' for keyed_caesar."),
    group: int = typer.Option(0, "--group", "-g", help="If >0, print output in blocks of this size."),
    text: str = typer.Argument(..., help="Ciphertext to decrypt."),
):
    """Decrypt TEXT when you already know the cipher type and have the key."""
    _run_known(Operation.DECRYPT, cipher, key, text, group)


@app.command()
def crack(
    text: str = typer.Argument(...),
    top: int = typer.Option(5, "--top", "-t", min=1),
    cipher: Optional[List[str]] = typer.Option(
        None,
        "--cipher",
        "-c",
        help="Limit to specific plugin(s). Can repeat: -c caesar -c keyed_caesar",
    ),
    keyword: Optional[str] = typer.Option(
        None, "--keyword", help="Permutation keyword; lets keyed_caesar brute-force the shift."
    ),
):
    """Brute-force the shift and rank candidates by English letter frequencies."""
    include = None if not cipher else {c.lower().strip() for c in cipher}

    # Validate filter names so it can't silently run the wrong thing
    if include is not None:
        available = set(list_plugins())
        unknown = sorted(include - available)
        if unknown:
            raise typer.BadParameter(
                f"Unknown cipher(s): {', '.join(unknown)}. Available: {', '.join(sorted(available))}"
            )

    results = crack_unknown(text, top_n=top, include=include, hint=keyword)
    if not results:
        typer.echo("No candidates produced. keyed_caesar needs --keyword.")
        raise typer.Exit(code=0)

    for i, r in enumerate(results, start=1):
        typer.echo(
            f"#{i}  cipher={r.cipher_name}  score={r.score:.2f}  conf={r.confidence:.2f}  key={r.key}"
        )
        if r.notes:
            typer.echo(f"    notes: {r.notes}")
        if r.plaintext:
            typer.echo(r.plaintext)
        typer.echo("-" * 60)


def _report_tables(report: FrequencyReport) -> list[Table]:
    letters = Table(title="Letter Frequency Analysis")
    letters.add_column("Letter")
    letters.add_column("Count", justify="right")
    letters.add_column("Message%", justify="right")
    letters.add_column("English%", justify="right")
    letters.add_column("Difference", justify="right")
    for e in report.letters:
        letters.add_row(e.letter, str(e.count), f"{e.percent:.2f}", f"{e.english:.2f}", f"{e.difference:+.2f}")

    tables = [letters]
    for title, entries in (("Most common digraphs", report.digraphs), ("Most common trigraphs", report.trigraphs)):
        t = Table(title=title)
        t.add_column("Pattern")
        t.add_column("Count", justify="right")
        for p in entries:
            t.add_row(p.pattern, str(p.count))
        tables.append(t)

    doubles = Table(title="Double letters")
    doubles.add_column("Pattern")
    doubles.add_column("Count", justify="right")
    for pattern, count in report.doubles.items():
        doubles.add_row(pattern, str(count))
    tables.append(doubles)
    return tables


def _print_report(report: FrequencyReport, console: Console) -> None:
    console.print(f"Total letters: {report.total_letters}")
    console.print(f"Index of coincidence: {report.ioc:.5f}")
    for table in _report_tables(report):
        console.print(table)


@app.command()
def analyze(
    ctx: typer.Context,
    text: Optional[str] = typer.Argument(None, help="Ciphertext to analyze."),
    file: Optional[Path] = typer.Option(
        None, "--file", "-f", exists=True, dir_okay=False, readable=True, help="Read ciphertext from a file."
    ),
    top: Optional[int] = typer.Option(None, "--top", "-t", min=1, help="How many digraphs/trigraphs to keep."),
    as_json: bool = typer.Option(False, "--json", help="Print the report as JSON."),
):
    """Frequency analysis: letters vs English, digraphs, trigraphs, doubled letters."""
    if (text is None) == (file is None):
        raise typer.BadParameter("Give exactly one of TEXT or --file.")
    if file is not None:
        try:
            text = file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise typer.BadParameter(f"Could not read {file}: {e}")

    settings = _settings(ctx)
    report = analyze_frequencies(text, top_n=top if top is not None else settings.top_n)

    if as_json:
        typer.echo(json.dumps(report.to_dict(), indent=2))
        return
    _print_report(report, Console())


# ----------------------------
# Interactive menu
# ----------------------------

def _ask(prompt: str, check: Callable[[str], T]) -> T:
    """Prompt until `check` accepts the answer."""
    while True:
        raw = typer.prompt(prompt, default="", show_default=False)
        try:
            return check(raw)
        except ValueError as e:
            typer.echo(str(e))


def _ask_operation(raw: str) -> Operation:
    try:
        return Operation(raw.strip().lower())
    except ValueError:
        raise ValueError("Invalid operation. Please enter 'encrypt' or 'decrypt'.") from None


def _menu_cipher(settings: Settings, *, keyed: bool) -> None:
    op = _ask("Enter operation (encrypt/decrypt)", _ask_operation)
    shift = _ask(
        f"Enter the shift key (an integer between {settings.min_shift} and {settings.max_shift})",
        lambda raw: validate_shift(raw, settings),
    )
    alpha = ALPHABET
    if keyed:
        keyword = _ask(
            f"Enter the permutation keyword (at least {settings.min_keyword_length} letters long, no numbers/symbols)",
            lambda raw: validate_keyword(raw, settings),
        )
        alpha = build_permuted_alphabet(keyword)
        typer.echo(f"Generated Permuted Alphabet: {alpha}")
    text = _ask("Enter the text to process", validate_text)

    logger.info("Menu %s: shift=%d alphabet=%s", op.value, shift, alpha)
    typer.echo(f"\nResult: {substitute(normalize_az(text), shift, alpha, op)}")


@app.command()
def menu(ctx: typer.Context):
    """Interactive menu, one task at a time."""
    settings = _settings(ctx)
    console = Console()
    while True:
        typer.echo("\n--- Caesar Cipher Menu ---")
        typer.echo("1. Standard Caesar Cipher")
        typer.echo("2. Caesar Cipher with Permutation Key")
        typer.echo("3. Frequency Analysis")
        typer.echo("4. Exit")
        raw = typer.prompt("Select an option", default="", show_default=False).strip()

        if raw == "1":
            typer.echo("\n--- Standard Caesar Cipher ---")
            _menu_cipher(settings, keyed=False)
        elif raw == "2":
            typer.echo("\n--- Caesar Cipher with Permutation Key ---")
            _menu_cipher(settings, keyed=True)
        elif raw == "3":
            typer.echo("\n--- Frequency Analysis ---")
            text = _ask("Enter the text to analyze", validate_text)
            _print_report(analyze_frequencies(text, top_n=settings.top_n), console)
        elif raw == "4":
            typer.echo("Exiting program.")
            return
        elif raw.isdigit():
            typer.echo("Invalid option. Please choose 1, 2, 3, or 4.")
        else:
            typer.echo("Invalid input. Please enter a number (1-4).")


def main():
    app()


if __name__ == "__main__":
    main()
