from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version

# Version
try:
    __version__ = _pkg_version("numnotation")
except PackageNotFoundError:
    __version__ = "0+unknown"

# Public API re-exports
from .config import has_profile, load_settings
from .expreval import parse_magnitude
from .factor import FACTOR_BOUND, factorize
from .fmt import format_factors, superscript
from .registry import discover, get_notation
from .runtime import APPLY, CFG
from .tower import MAX_INT, build_tower, classify
from .workspace import workspace_dir

__all__ = [
    "APPLY",
    "CFG",
    "FACTOR_BOUND",
    "MAX_INT",
    "__version__",
    "build_tower",
    "classify",
    "discover",
    "factorize",
    "format_factors",
    "get_notation",
    "has_profile",
    "load_settings",
    "parse_magnitude",
    "superscript",
    "workspace_dir",
]
