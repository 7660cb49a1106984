"""Orchestrator: run both passes over a file and fix up its imports."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable

from cssmodulize.config import MigrationConfig
from cssmodulize.context import ContextEvaluator
from cssmodulize.error_log import ErrorLog
from cssmodulize.errors import MigrationError
from cssmodulize.imports import (
    add_default_import,
    add_named_exports,
    has_named_imports,
    remove_named_imports,
)
from cssmodulize.model.outcome import FileOutcome, Status, TransformResult
from cssmodulize.transforms import CallSiteMigration, StyleTableExtraction

__all__ = ["Migrator", "stylesheet_paths"]

logger = logging.getLogger(__name__)


def stylesheet_paths(source_path: str | Path, suffix: str = ".module.css") -> tuple[Path, str]:
    """Return the sibling stylesheet path and the relative specifier importing it."""
    full_path = Path(source_path).with_suffix(suffix)
    return full_path, f"./{full_path.name}"


class Migrator:
    """Migrate component files off the styling helper and style tables.

    ``transform`` is a pure text-to-text step; ``migrate_file`` adds the
    file system side effects. Failures are appended to the error log with
    the path of the file being migrated.
    """

    def __init__(
        self,
        config: MigrationConfig | None = None,
        *,
        evaluator: ContextEvaluator | None = None,
        error_log: ErrorLog | None = None,
    ) -> None:
        self.config = config or MigrationConfig()
        self.evaluator = evaluator or ContextEvaluator(self.config.context_path)
        self.error_log = error_log or ErrorLog(self.config.error_log_path)
        self.call_sites = CallSiteMigration(self.config)
        self.style_table = StyleTableExtraction(self.config, self.evaluator)

    def transform(self, source: str, path: str | Path) -> TransformResult:
        """Rewrite *source*, the contents of *path*.

        Raises MigrationError (after logging it) if the file cannot be
        migrated.
        """
        try:
            return self._transform(source, Path(path))
        except MigrationError as e:
            self.error_log.append(e.message, path)
            logger.error("%s %s", e.message, path)
            raise

    def _transform(self, source: str, path: Path) -> TransformResult:
        cfg = self.config
        uses_helper = has_named_imports(source, cfg.styles_module, [cfg.helper_name], path)
        uses_factory = has_named_imports(source, cfg.styles_module, [cfg.factory_name], path)

        if uses_helper:
            calls = self.call_sites.apply(source, path)
            source = calls.source
            # A new import copies the quote style of the first existing import.
            if calls.used_composer:
                source = add_default_import(source, cfg.composer_module, cfg.composer_name, path)
            if calls.fully_migrated:
                source = remove_named_imports(source, cfg.styles_module, [cfg.helper_name], path)
            logger.debug("Rewrote %d %s() call(s) in %s", calls.rewritten, cfg.helper_name, path)

        if not uses_factory:
            return TransformResult(source=source)

        extraction = self.style_table.apply(source, path)
        if extraction.stylesheet is None or extraction.table is None:
            return TransformResult(source=source)

        table = extraction.table
        stylesheet_path, specifier = stylesheet_paths(path, cfg.stylesheet_suffix)
        source = add_default_import(extraction.source, specifier, table.name, path)
        source = remove_named_imports(source, cfg.styles_module, [cfg.factory_name], path)
        if table.exported:
            source = add_named_exports(source, [table.name], path)
        return TransformResult(
            source=source,
            stylesheet=extraction.stylesheet,
            stylesheet_path=stylesheet_path,
        )

    def migrate_file(self, path: str | Path, *, dry_run: bool = False) -> FileOutcome:
        """Migrate one file in place, writing its stylesheet next to it."""
        path = Path(path)
        try:
            original = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            message = f"could not read file: {e}"
            self.error_log.append(message, path)
            logger.error("%s %s", message, path)
            return FileOutcome(path=path, status=Status.FAILED, failure_reason=message)

        try:
            result = self.transform(original, path)
        except MigrationError as e:
            return FileOutcome(path=path, status=Status.FAILED, failure_reason=e.message)

        if result.source == original and result.stylesheet is None:
            return FileOutcome(path=path, status=Status.UNCHANGED)

        if not dry_run:
            try:
                self._write(path, result)
            except (OSError, UnicodeError) as e:
                message = f"could not write file: {e}"
                self.error_log.append(message, path)
                logger.error("%s %s", message, path)
                return FileOutcome(path=path, status=Status.FAILED, failure_reason=message)
        logger.info("Migrated %s", path)
        return FileOutcome(
            path=path,
            status=Status.MIGRATED,
            stylesheet_path=result.stylesheet_path,
        )

    @staticmethod
    def _write(path: Path, result: TransformResult) -> None:
        """Write the stylesheet, then the source; neither is left half-written."""
        source = result.source.encode("utf-8")
        stylesheet_path = result.stylesheet_path
        if result.stylesheet is None or stylesheet_path is None:
            _replace_file(path, source)
            return

        stylesheet = (result.stylesheet + "\n").encode("utf-8")
        existed = stylesheet_path.exists()
        _replace_file(stylesheet_path, stylesheet)
        try:
            _replace_file(path, source)
        except OSError:
            if not existed:
                stylesheet_path.unlink(missing_ok=True)
            raise

    def migrate_files(self, paths: Iterable[str | Path], *, dry_run: bool = False) -> list[FileOutcome]:
        """Migrate each file; a failing file never stops the batch."""
        return [self.migrate_file(p, dry_run=dry_run) for p in paths]


def _replace_file(path: Path, data: bytes) -> None:
    """Atomically replace *path* with *data* through a sibling temp file."""
    temp = path.with_name(f".{path.name}.tmp")
    try:
        temp.write_bytes(data)
        os.replace(temp, path)
    except OSError:
        temp.unlink(missing_ok=True)
        raise
