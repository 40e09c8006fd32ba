# src/numnotation/registry.py
from __future__ import annotations

import inspect
import sys
from collections import OrderedDict
from dataclasses import dataclass, field
from functools import cache
from importlib import import_module
from importlib.resources import as_file
from importlib.resources import files as pkg_files
from importlib.util import module_from_spec, spec_from_file_location
from pathlib import Path
from typing import TYPE_CHECKING

from numnotation.utility import UserInputError, _token

if TYPE_CHECKING:
    from numnotation.notations.base import Notation


# --------------------- Discovery → Index ----------------------------------


@dataclass
class Index:
    notations: dict[str, Notation]               # key -> instance
    descriptions: dict[str, str]                 # key -> short description
    sources: dict[str, str] = field(default_factory=dict)   # key -> "ws:file.py" | "pkg:module"
    failed: list[tuple[str, str]] = field(default_factory=list)  # (source, error)

    def get(self, key: str) -> Notation | None:
        return self.notations.get(_token(key))


def _is_notation(obj) -> bool:
    # Only the class carrying the decorator; subclasses must be tagged themselves
    return inspect.isclass(obj) and "__is_notation__" in vars(obj)


def _import_module_from_file(path: Path, name_hint: str):
    spec = spec_from_file_location(name_hint, path)
    if not spec or not spec.loader:
        raise ImportError(f"Cannot import {path}")
    mod = module_from_spec(spec)
    sys.modules[name_hint] = mod
    spec.loader.exec_module(mod)  # type: ignore[attr-defined]
    return mod


def _collect_from_module(mod) -> list[type]:
    return [o for _, o in inspect.getmembers(mod) if _is_notation(o)]


# ---------- Decorator (only tags the class; no side effects) ----------


def notation(*, key: str, description: str = ""):
    def deco(cls: type) -> type:
        cls.__is_notation__ = True
        cls.key = _token(key)
        cls.description = description
        return cls
    return deco


def discover(workspace: Path | None = None) -> Index:
    """Discover notations from workspace and package; workspace overrides package by key."""
    found: OrderedDict[str, Notation] = OrderedDict()
    desc: dict[str, str] = {}
    sources: dict[str, str] = {}
    failed: list[tuple[str, str]] = []

    def _add_from_module(mod, source: str) -> None:
        for cls in _collect_from_module(mod):
            key = cls.key
            if key in found:              # keep first (workspace before package)
                continue
            found[key] = cls()
            desc[key] = cls.description
            sources[key] = source

    # 1) Workspace (*.py)
    if workspace:
        ws_dir = workspace / "notations"
        if ws_dir.is_dir():
            for file in sorted(ws_dir.glob("*.py")):
                if file.name == "__init__.py":
                    continue
                try:
                    mod = _import_module_from_file(file, f"_nn_user_notation_{file.stem}")
                    _add_from_module(mod, f"ws:{file.name}")
                except Exception as e:
                    # Skip broken module; don't crash the app
                    failed.append((f"ws:{file.name}", f"{type(e).__name__}: {e}"))

    # 2) Packaged (numnotation.notations.*)
    pkg_dir = pkg_files("numnotation") / "notations"
    with as_file(pkg_dir) as real:
        for file in sorted(Path(real).glob("*.py")):
            if file.name == "__init__.py":
                continue
            modname = f"numnotation.notations.{file.stem}"
            _add_from_module(import_module(modname), f"pkg:{modname}")

    return Index(notations=found, descriptions=desc, sources=sources, failed=failed)


@cache
def _packaged_index() -> Index:
    return discover(None)


def get_notation(key: str, index: Index | None = None) -> Notation:
    """Resolve a notation key ('prime', 'Greek Letters', 'greek-letters', ...)."""
    idx = index or _packaged_index()
    found = idx.get(key)
    if found is None:
        known = ", ".join(sorted(idx.notations))
        raise UserInputError(f"unknown notation '{key}'. Available: {known}.")
    return found
