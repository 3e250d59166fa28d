"""Debug output for rangetree, written to stderr when enabled."""

import sys


_debug_enabled: bool = False


def set_debug(enabled: bool):
    """Turn debug output on or off for the whole package."""
    global _debug_enabled
    _debug_enabled = bool(enabled)


def is_debug() -> bool:
    return _debug_enabled


def debug(message: str):
    if _debug_enabled:
        print(f"DEBUG: {message}", file=sys.stderr)
