"""End-to-end tests for migrating component files."""

import shutil
from pathlib import Path

import pytest

from cssmodulize import MigrationConfig, Migrator, stylesheet_paths
from cssmodulize.errors import AmbiguousStructure, UnhandledShape
from cssmodulize.model import Status

FIXTURES = Path(__file__).parent.parent / "fixtures"


@pytest.fixture()
def error_log(tmp_path):
    return tmp_path / "errors.txt"


@pytest.fixture()
def migrator(error_log):
    config = MigrationConfig(
        context_path=str(FIXTURES / "context.js"),
        error_log_path=str(error_log),
    )
    return Migrator(config)


@pytest.fixture()
def card(tmp_path):
    path = tmp_path / "Card.tsx"
    shutil.copy(FIXTURES / "Card.tsx", path)
    return path


class TestStylesheetPaths:
    def test_sibling_module(self):
        full, specifier = stylesheet_paths(Path("src/components/Card.tsx"))
        assert full == Path("src/components/Card.module.css")
        assert specifier == "./Card.module.css"


class TestTransform:
    def test_component(self, migrator):
        result = migrator.transform((FIXTURES / "Card.tsx").read_text(), "Card.tsx")
        assert result.source == (FIXTURES / "Card.expected.tsx").read_text()
        assert result.stylesheet + "\n" == (FIXTURES / "Card.expected.module.css").read_text()
        assert result.stylesheet_path == Path("Card.module.css")

    def test_helper_only(self, migrator):
        text = (
            'import { css } from "aphrodite";\n'
            'import styles from "./Other.module.css";\n'
            "\n"
            "const c = css(on && styles.a);\n"
        )
        result = migrator.transform(text, "Other.tsx")
        assert result.stylesheet is None
        assert result.source == (
            'import classNames from "classnames";\n'
            'import styles from "./Other.module.css";\n'
            "\n"
            "const c = classNames(on && styles.a);\n"
        )

    def test_unexported_table(self, migrator):
        text = (
            "import { StyleSheet } from 'aphrodite';\n"
            "\n"
            "const styles = StyleSheet.create({ a: { color: 'red' } });\n"
            "\n"
            "export const A = () => <div className={styles.a} />;\n"
        )
        result = migrator.transform(text, "A.jsx")
        assert result.source == (
            "import styles from './A.module.css';\n"
            "\n"
            "export const A = () => <div className={styles.a} />;\n"
        )
        assert result.stylesheet == ".a {\n  color: red;\n}"

    def test_file_without_helper_imports_untouched(self, migrator):
        text = "const css = (x) => x;\nconst c = css(1);\n"
        result = migrator.transform(text, "plain.js")
        assert result.source == text
        assert result.stylesheet is None

    def test_failure_is_logged(self, migrator, error_log):
        text = 'import { css } from "aphrodite";\nconst c = css("a");\n'
        with pytest.raises(UnhandledShape):
            migrator.transform(text, "Bad.tsx")
        assert error_log.read_text() == 'arg.type of "string" is not handled Bad.tsx\n'

    def test_existing_composer_binding_conflicts(self, migrator):
        text = (
            'import { css } from "aphrodite";\n'
            'import cx from "classnames";\n'
            "const c = css(a && b);\n"
        )
        with pytest.raises(AmbiguousStructure):
            migrator.transform(text, "Cx.tsx")


class TestMigrateFile:
    def test_writes_source_and_stylesheet(self, migrator, card):
        outcome = migrator.migrate_file(card)
        assert outcome.status is Status.MIGRATED
        assert outcome.stylesheet_path == card.with_name("Card.module.css")
        assert card.read_text() == (FIXTURES / "Card.expected.tsx").read_text()
        assert outcome.stylesheet_path.read_text() == (
            FIXTURES / "Card.expected.module.css"
        ).read_text()

    def test_second_run_is_unchanged(self, migrator, card):
        migrator.migrate_file(card)
        migrated = card.read_text()
        outcome = migrator.migrate_file(card)
        assert outcome.status is Status.UNCHANGED
        assert card.read_text() == migrated

    def test_dry_run_writes_nothing(self, migrator, card):
        original = card.read_text()
        outcome = migrator.migrate_file(card, dry_run=True)
        assert outcome.status is Status.MIGRATED
        assert card.read_text() == original
        assert not card.with_name("Card.module.css").exists()

    def test_failure_writes_nothing(self, migrator, tmp_path, error_log):
        path = tmp_path / "Broken.tsx"
        text = (
            'import { css, StyleSheet } from "aphrodite";\n'
            "const c = css(styles.a);\n"
            "const styles = StyleSheet.create({ a: { margin: gutter } });\n"
        )
        path.write_text(text)
        outcome = migrator.migrate_file(path)
        assert outcome.failed
        assert outcome.failure_reason.startswith("gutter is not defined")
        assert path.read_text() == text
        assert not path.with_name("Broken.module.css").exists()
        assert error_log.read_text().endswith(f" {path}\n")

    def test_missing_file(self, migrator, tmp_path, error_log):
        outcome = migrator.migrate_file(tmp_path / "Missing.tsx")
        assert outcome.status is Status.FAILED
        assert outcome.failure_reason.startswith("could not read file")
        assert len(error_log.read_text().splitlines()) == 1


class TestMigrateFiles:
    def test_batch_continues_after_failure(self, migrator, card, tmp_path, error_log):
        bad = tmp_path / "Bad.tsx"
        bad.write_text('import { css } from "aphrodite";\nconst c = css("a");\n')
        plain = tmp_path / "plain.ts"
        plain.write_text("export const n = 1;\n")

        outcomes = migrator.migrate_files([bad, card, plain])

        assert [o.status for o in outcomes] == [Status.FAILED, Status.MIGRATED, Status.UNCHANGED]
        assert error_log.read_text() == f'arg.type of "string" is not handled {bad}\n'


class TestWrites:
    def test_surrogate_pair_escape_migrates(self, migrator, tmp_path, error_log):
        icon = tmp_path / "Icon.tsx"
        icon.write_text(
            'import { StyleSheet } from "aphrodite";\n'
            "\n"
            "const styles = StyleSheet.create({\n"
            r"""  icon: { content: "'\uD83D\uDE00'" },"""
            "\n"
            "});\n",
            encoding="utf-8",
        )
        other = tmp_path / "Other.tsx"
        other.write_text("export const n = 1;\n")

        outcomes = migrator.migrate_files([icon, other])

        assert [o.status for o in outcomes] == [Status.MIGRATED, Status.UNCHANGED]
        assert icon.with_name("Icon.module.css").read_text(encoding="utf-8") == (
            ".icon {\n  content: '\U0001F600';\n}\n"
        )
        assert icon.read_text() == 'import styles from "./Icon.module.css";\n'
        assert not error_log.exists()

    def test_write_failure_is_logged_and_leaves_no_files(self, migrator, card, error_log, monkeypatch):
        original = card.read_text()

        def fail(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr("cssmodulize.migrator.os.replace", fail)
        outcome = migrator.migrate_file(card)

        assert outcome.failed
        assert outcome.failure_reason == "could not write file: disk full"
        assert card.read_text() == original
        assert sorted(p.name for p in card.parent.iterdir()) == ["Card.tsx", "errors.txt"]
        assert error_log.read_text() == f"could not write file: disk full {card}\n"
