"""Line-oriented prompts on the shared console."""

from __future__ import annotations

import re
from typing import Callable

from rich.console import Console

from .models import UserAbort

console = Console(highlight=False)

Ask = Callable[[str], str]

_YES = re.compile(r"[Yy]")


def ask_line(prompt: str) -> str:
    """Read one line of input; end of input aborts the run."""

    try:
        return console.input(prompt)
    except EOFError as exc:
        console.print()
        raise UserAbort("No input received") from exc


def is_yes(answer: str) -> bool:
    """Only a single ``y`` or ``Y`` counts as confirmation."""

    return bool(_YES.fullmatch(answer.strip()))


def confirm(prompt: str, ask: Ask = ask_line) -> bool:
    return is_yes(ask(f"{prompt} (y/n): "))


__all__ = ["Ask", "ask_line", "confirm", "console", "is_yes"]
