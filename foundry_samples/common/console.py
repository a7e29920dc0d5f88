"""Terminal output for the sample CLIs: status lines, conversation turns, banners."""

from __future__ import annotations

import sys
from typing import Iterable

_TTY = sys.stdout.isatty()

_CODES = {
    "red": "0;31",
    "green": "0;32",
    "cyan": "0;36",
    "yellow": "1;33",
    "magenta": "0;35",
    "bold": "1",
}

WIDTH = 76
DIV = "─" * WIDTH
SEC = "═" * WIDTH


def paint(text: str, colour: str) -> str:
    """Wrap *text* in an ANSI colour (plain text when stdout is not a tty)."""
    if not _TTY:
        return text
    return f"\033[{_CODES[colour]}m{text}\033[0m"


def info(msg: str) -> None:
    print(f"{paint('[INFO]', 'cyan')}  {msg}")


def ok(msg: str) -> None:
    print(f"{paint('[ OK ]', 'green')} {msg}")


def warn(msg: str) -> None:
    print(f"{paint('[WARN]', 'yellow')} {msg}")


def fail(msg: str) -> None:
    """Print *msg* to stderr and exit 1."""
    print(f"{paint('[FAIL]', 'red')} {msg}", file=sys.stderr)
    sys.exit(1)


# ── Conversations ────────────────────────────────────────────────────────────

def banner(title: str) -> None:
    rule = paint("=" * 62, "bold")
    print(f"\n{rule}\n{paint('  ' + title, 'bold')}\n{rule}\n")


def turn_break() -> None:
    print("\n" + paint("─" * 62, "bold"))


def speaker(role: str, text: str) -> None:
    """Print one conversation turn, colour-coded by role."""
    colour = "magenta" if role == "user" else "cyan"
    print(f"  {paint(f'{role.capitalize():>9}', colour)}: {text}")


def teardown_summary(failures: Iterable[tuple[str, str]]) -> None:
    """Report what a session's teardown could not delete."""
    failures = list(failures)
    if not failures:
        ok("All agent resources deleted.")
        return
    warn(f"Teardown left {len(failures)} resource(s) behind:")
    for kind, resource_id in failures:
        print(f"         {kind:<13} {resource_id}")
    info("Sessions started with --track can be retried with `python3 run_sample.py sweep`.")


# ── Report formatting ────────────────────────────────────────────────────────

def header(title: str) -> str:
    return f"\n{SEC}\n  {title}\n{SEC}"


def section(title: str) -> str:
    return f"\n{DIV}\n  {title}\n{DIV}"
