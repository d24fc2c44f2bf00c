"""Colorful CLI output helpers."""

import sys

# ANSI escape codes
GREEN = "\033[32m"
YELLOW = "\033[33m"
BLUE = "\033[34m"
RED = "\033[31m"
RESET = "\033[0m"
CHECK = "✓"
BULLET = "•"
CROSS = "✗"

# Advisory severity label colors
SEVERITY_COLORS = {
    "high": RED,
    "medium": YELLOW,
    "low": BLUE,
}


def _supports_color() -> bool:
    """Check if stdout is a color-capable TTY."""
    # Piped or redirected output stays plain
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def colorize(text: str, color: str) -> str:
    """Apply color to text if terminal supports it."""
    if _supports_color():
        return f"{color}{text}{RESET}"
    return text


def success(message: str) -> None:
    """Print success message with green checkmark."""
    print(f"{colorize(CHECK, GREEN)} {message}")


def info(message: str) -> None:
    """Print info message with yellow bullet."""
    print(f"{colorize(BULLET, YELLOW)} {message}")


def header(message: str) -> None:
    """Print header message in blue."""
    print(colorize(message, BLUE))


def error(message: str) -> None:
    """Print error message with red cross to stderr."""
    print(f"{colorize(CROSS, RED)} {message}", file=sys.stderr)


def severity(label: str) -> str:
    """Color a severity label."""
    return colorize(f"[{label}]", SEVERITY_COLORS.get(label, RESET))
