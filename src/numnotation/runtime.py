# runtime.py
from __future__ import annotations

from contextvars import ContextVar
from dataclasses import dataclass, field
from importlib.util import find_spec
from pathlib import Path
from typing import Any

from colorama import Fore, Style


@dataclass
class Runtime:
    """
    The active profile. Library code reads it only through CFG(key, default),
    so every notation falls back to its built-in defaults when nothing has
    been applied.
    """
    profile_name: str = "default"
    source: Path | None = None
    settings: dict[str, Any] = field(default_factory=dict)
    debug: bool = False  # regime/tower/timing diagnostics on stderr

    def apply(self, settings: Any) -> None:
        """Install a config.Settings or a plain nested dict of sections."""
        if isinstance(settings, dict):
            self.profile_name = "default"
            self.source = None
            self.settings = {k: v for k, v in settings.items() if isinstance(v, dict)}
        else:
            self.profile_name = settings.name
            self.source = getattr(settings, "_source", None)
            self.settings = dict(settings.as_dict())

        dbg = self.get("BEHAVIOUR.DEBUG", None)
        if isinstance(dbg, bool):
            self.debug = dbg

    def get(self, key: str, default: Any = None) -> Any:
        """Dotted lookup 'SECTION.KEY', e.g. 'PRIME.FACTOR_BOUND'."""
        cur: Any = self.settings
        for part in key.split("."):
            if not isinstance(cur, dict) or part not in cur:
                return default
            cur = cur[part]
        return cur


# --- Context management ---

_current_runtime: ContextVar[Runtime | None] = ContextVar("numnotation_runtime", default=None)


def current() -> Runtime:
    rt = _current_runtime.get()
    if rt is None:
        rt = Runtime()
        _current_runtime.set(rt)
    return rt


def reset() -> None:
    """Drop the active runtime; the next current() starts from defaults."""
    _current_runtime.set(None)


def APPLY(settings: Any) -> None:
    current().apply(settings)


def CFG(key: str, default: Any = None) -> Any:
    return current().get(key, default)


# ---- Dependency check --------------------------------------------------------

def ensure_runtime_deps(strict: bool = True) -> bool:
    """
    gmpy2 checks unfactored residuals for primality. Look it up without
    importing; when missing, print install instructions and return not strict.
    """
    missing = [name for name in ("gmpy2",) if find_spec(name) is None]
    if not missing:
        return True

    print(
        f"{Fore.RED}{Style.BRIGHT}\nMissing dependencies:{Style.RESET_ALL} {', '.join(missing)}\n"
        f"Install with: {Fore.YELLOW}pip install {' '.join(missing)}{Style.RESET_ALL}"
    )
    return not strict
