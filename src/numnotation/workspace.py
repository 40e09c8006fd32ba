from __future__ import annotations

import os
import shutil
from importlib.resources import as_file
from importlib.resources import files as pkg_files
from pathlib import Path

SUBDIRS = ("profiles", "notations")


def workspace_dir() -> Path:
    env = os.environ.get("NUMNOTATION_HOME")
    if env:
        return Path(env).expanduser().resolve()
    return (Path.home() / "Documents" / "Numnotation").resolve()


def _is_profile_file(p: Path) -> bool:
    # hidden and editor backup files stay behind
    return p.is_file() and p.suffix.lower() == ".toml" and not p.name.startswith(".")


def _copy_profiles(src: Path, dst: Path, *, overwrite: bool) -> int:
    count = 0
    if not src.is_dir():
        return 0
    dst.mkdir(parents=True, exist_ok=True)
    for p in sorted(filter(_is_profile_file, src.iterdir())):
        target = dst / p.name
        if overwrite or not target.exists():
            shutil.copy2(p, target)
            count += 1
    return count


def seed_workspace(*, overwrite: bool = False) -> tuple[Path, dict[str, int]]:
    """
    Create the workspace folders and copy the packaged profiles into it.

    overwrite=False → copy-if-missing (normal users)
    overwrite=True  → force replace (dev use, guarded in CLI)

    The notations/ folder is created empty; it is where user notation
    modules go. Packaged notations are never copied.

    Returns: (workspace_path, {section: files_copied})
    """
    root = workspace_dir()
    for sub in SUBDIRS:
        (root / sub).mkdir(parents=True, exist_ok=True)

    copied = {k: 0 for k in SUBDIRS}
    ref = pkg_files("numnotation") / "profiles"
    with as_file(ref) as real:
        copied["profiles"] = _copy_profiles(Path(real), root / "profiles", overwrite=overwrite)
    return root, copied
