from __future__ import annotations

from dataclasses import dataclass
from importlib.resources import as_file
from importlib.resources import files as pkg_files
from pathlib import Path
from typing import Any

try:
    import tomllib as toml
except ImportError:
    import tomli as toml  # type: ignore

from numnotation.utility import UserInputError
from numnotation.workspace import workspace_dir


@dataclass
class Settings:
    """
    One display profile: the TOML sections minus [_PROFILE_].

      - name:        [_PROFILE_].name, else the file stem
      - description: [_PROFILE_].description, else "(no description)"
    """
    data: dict[str, Any]
    name: str
    description: str
    _source: Path | None = None

    def as_dict(self) -> dict[str, Any]:
        return self.data


# Keys the notations read, with the check a profile value has to pass.
# Unknown sections and keys are kept untouched.
_KNOWN_KEYS: dict[str, tuple[type, int | None]] = {
    "FORMATTING.PLACES": (int, 0),
    "FORMATTING.PLACES_UNDER_1000": (int, 0),
    "FORMATTING.EXPONENT_COMMAS": (bool, None),
    "FORMATTING.EXPONENT_COMMAS_MIN": (int, 0),
    "PRIME.FACTOR_BOUND": (int, 2),
    "DISPLAY.DEFAULT_NOTATION": (str, None),
    "DISPLAY.COLOR": (bool, None),
    "BEHAVIOUR.DEBUG": (bool, None),
}


# --- Paths -----------------------------------------------------------------

def _profiles_dir() -> Path:
    return workspace_dir() / "profiles"


def _packaged_profiles():
    return pkg_files("numnotation") / "profiles"


def _profile_path(name: str) -> Path | None:
    """<workspace>/profiles/<name>.toml, else the packaged copy, else None."""
    ws = _profiles_dir() / f"{name}.toml"
    if ws.is_file():
        return ws
    with as_file(_packaged_profiles() / f"{name}.toml") as real:
        packaged = Path(real)
        return packaged if packaged.is_file() else None


# --- I/O -------------------------------------------------------------------


def _load_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            return toml.load(f)
    except toml.TOMLDecodeError as e:
        where = [f"{label} {val}" for label, val in (("line", getattr(e, "lineno", None)),
                                                     ("column", getattr(e, "colno", None))) if val is not None]
        loc = f" (at {', '.join(where)})" if where else ""
        raise UserInputError(f"reading {path.name}: {getattr(e, 'msg', e)}{loc}.") from None


def _check_values(data: dict[str, Any], profile: str) -> None:
    """Reject known keys with the wrong type or below their minimum."""
    for dotted, (kind, minimum) in _KNOWN_KEYS.items():
        section, key = dotted.split(".")
        sec = data.get(section)
        if not isinstance(sec, dict) or key not in sec:
            continue
        val = sec[key]
        # bool is an int subclass; TOML true must not pass as a number
        ok = isinstance(val, kind) and not (kind is int and isinstance(val, bool))
        if ok and minimum is not None and val < minimum:
            ok = False
        if not ok:
            need = f"{kind.__name__} >= {minimum}" if minimum is not None else kind.__name__
            raise UserInputError(f"profile '{profile}': {dotted} must be {need}, got {val!r}.")


# --- Metadata handling -----------------------------------------------------


def _one_line(s: str) -> str:
    return " ".join(str(s).split()) or "(no description)"


def _split_profile_data(raw: dict[str, Any], fallback_name: str) -> tuple[dict[str, Any], str, str]:
    """(sections without [_PROFILE_], name, description)"""
    meta = raw.get("_PROFILE_") or {}
    data = {k: v for k, v in raw.items() if k != "_PROFILE_"}
    return data, str(meta.get("name") or fallback_name), _one_line(meta.get("description") or "")


# --- Public API ------------------------------------------------------------


def list_all_profiles() -> list[str]:
    """Profile names (file stems) found in the workspace or the package."""
    names: set[str] = set()
    if _profiles_dir().is_dir():
        names.update(p.stem for p in _profiles_dir().glob("*.toml"))
    with as_file(_packaged_profiles()) as real:
        names.update(p.stem for p in Path(real).glob("*.toml"))
    return sorted(names)


def list_profiles_with_descriptions() -> list[tuple[str, str]]:
    items: list[tuple[str, str]] = []
    for stem in list_all_profiles():
        try:
            _, nm, desc = _split_profile_data(_load_toml(_profile_path(stem)), stem)
        except UserInputError:
            nm, desc = stem, "(unreadable)"
        items.append((nm, desc))
    return sorted(items, key=lambda t: t[0].lower())


def has_profile(name: str) -> bool:
    return _profile_path(name) is not None


def load_settings(name: str | None) -> Settings:
    """
    Load profile `name` ('default' when empty). Raises FileNotFoundError when
    neither the workspace nor the package has it, UserInputError when the
    file is malformed or a known key has a bad value.
    """
    name = name or "default"
    path = _profile_path(name)
    if path is None:
        raise FileNotFoundError(f"Profile '{name}' not found in {_profiles_dir()} or the package")

    data, resolved, description = _split_profile_data(_load_toml(path), path.stem)
    _check_values(data, resolved)
    return Settings(data=data, name=resolved, description=description, _source=path)
