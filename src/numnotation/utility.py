# -----------------------------------------------------------------------------
#  Utility functions
# -----------------------------------------------------------------------------

from __future__ import annotations

import re


class UserInputError(Exception):
    pass


def _token(name: str) -> str:
    """Normalize a notation key: 'Greek Letters' / 'greek-letters' -> 'greek_letters'."""
    return re.sub(r"[^A-Za-z0-9]+", "_", name).lower().strip("_")


def typename(v: object) -> str:
    return type(v).__name__


def flatten_dotted(d: dict, prefix: str = "") -> dict[str, object]:
    """Flatten nested dicts into {'A.B': value}; used by the debug settings dump."""
    out: dict[str, object] = {}
    for k, v in d.items():
        key = f"{prefix}.{k}" if prefix else str(k)
        if isinstance(v, dict):
            out.update(flatten_dotted(v, key))
        else:
            out[key] = v
    return out
