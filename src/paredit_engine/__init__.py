"""Structural (paredit-style) editing engine for s-expression source text."""

__all__ = [
    "buffer",
    "commands",
    "paredit",
    "runtime",
    "syntax",
]

__version__ = "0.1.0"
