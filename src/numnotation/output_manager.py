# output_manager.py

import os

from numnotation.fmt import strip_ansi
from numnotation.workspace import workspace_dir


def resolve_output_path(path: str, workspace_root: str) -> str:
    """
    Resolve user-provided output path.

    Rules:
    - '~' expanded to user home
    - Absolute paths unchanged
    - Relative paths are relative to workspace_root
    """
    if not path:
        raise ValueError("Output path is empty")

    path = os.path.expanduser(path)
    if os.path.isabs(path):
        return os.path.normpath(path)
    return os.path.normpath(os.path.join(workspace_root, path))


class OutputManager:
    """
    Handles all printing/output, to screen and/or file.

    Usage:
        om = OutputManager(output_file="results.txt")
        om.write("Hello")   # prints and buffers; appended (ANSI-free) on close()
        om.close()

    Also usable as a context manager.
    """

    def __init__(self, output_file: str | None = None, quiet: bool = False):
        self.quiet = quiet
        self.path = resolve_output_path(output_file, str(workspace_dir())) if output_file else None
        self._buffer: list[str] = []

    def write(self, line: str = "") -> None:
        if not self.quiet:
            print(line)
        if self.path:
            self._buffer.append(strip_ansi(line))

    def close(self) -> None:
        if not self.path or not self._buffer:
            return
        os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
        with open(self.path, "a", encoding="utf-8") as f:
            f.write("\n".join(self._buffer) + "\n")
        self._buffer.clear()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
