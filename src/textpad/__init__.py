"""Minimal terminal text editor."""

__all__ = [
    "actions",
    "adapters",
    "buffer",
    "config",
    "dispatch",
    "errors",
    "keymaps",
    "runtime",
    "session",
]

__version__ = "0.1.0"
