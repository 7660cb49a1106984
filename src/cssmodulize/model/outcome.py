"""Outcome model: what happened to each file of a migration run."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class Status(Enum):
    """Possible outcomes of migrating a single file."""

    MIGRATED = "migrated"
    UNCHANGED = "unchanged"
    FAILED = "failed"


@dataclass(frozen=True)
class TransformResult:
    """Rewritten source text plus the stylesheet generated alongside it."""

    source: str
    stylesheet: str | None = None
    stylesheet_path: Path | None = None


@dataclass
class FileOutcome:
    """Result of migrating one file from disk."""

    path: Path
    status: Status
    stylesheet_path: Path | None = None
    failure_reason: str = ""

    @property
    def failed(self) -> bool:
        return self.status is Status.FAILED
