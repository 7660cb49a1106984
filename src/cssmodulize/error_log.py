from __future__ import annotations

from pathlib import Path


class ErrorLog:
    """Append-only log of per-file failures, one ``<message> <path>`` line each.

    Every line is written with a single append so several processes can
    share the same log file.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def append(self, message: str, file_path: str | Path) -> None:
        with self.path.open("a", encoding="utf-8") as fh:
            fh.write(f"{message} {file_path}\n")
