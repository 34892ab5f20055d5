"""Colorful CLI output helpers."""

import sys
from typing import TextIO

# ANSI color codes
YELLOW = "\033[33m"
RED = "\033[31m"
RESET = "\033[0m"
BULLET = "\u2022"  # •
CROSS = "\u2717"  # ✗


def _supports_color(stream: TextIO) -> bool:
    """Check if the stream is a terminal that supports color output."""
    if not hasattr(stream, "isatty") or not stream.isatty():
        return False
    return True


def _colorize(text: str, color: str, stream: TextIO | None = None) -> str:
    """Apply color to text if the stream (stdout by default) supports it."""
    if _supports_color(stream or sys.stdout):
        return f"{color}{text}{RESET}"
    return text


def info(message: str) -> None:
    """Print info message with yellow bullet."""
    bullet = _colorize(BULLET, YELLOW)
    print(f"{bullet} {message}")


def error(message: str) -> None:
    """Print error message with red cross to stderr."""
    cross = _colorize(CROSS, RED, sys.stderr)
    print(f"{cross} {message}", file=sys.stderr)
