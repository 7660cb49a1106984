"""Tests for rewriting styling-helper call sites."""

import pytest

from cssmodulize.config import MigrationConfig
from cssmodulize.errors import UnhandledShape
from cssmodulize.transforms import CallSiteMigration

IMPORT = 'import { css } from "aphrodite";\n'


@pytest.fixture()
def migration():
    return CallSiteMigration(MigrationConfig())


class TestUnwrap:
    @pytest.mark.parametrize(
        "call, expected",
        [
            ("css(styles.a)", "styles.a"),
            ("css(styles['a-b'])", "styles['a-b']"),
            ("css(on ? styles.a : styles.b)", "on ? styles.a : styles.b"),
        ],
    )
    def test_argument_replaces_call(self, migration, call, expected):
        result = migration.apply(f"{IMPORT}const c = {call};\n")
        assert result.source == f"{IMPORT}const c = {expected};\n"
        assert result.fully_migrated
        assert not result.used_composer
        assert result.rewritten == 1

    @pytest.mark.parametrize(
        "call, expected",
        [
            ("css((on ? a.x : a.y))", "(on ? a.x : a.y)"),
            ("css((styles.a))", "(styles.a)"),
        ],
    )
    def test_parenthesised_argument(self, migration, call, expected):
        result = migration.apply(f"{IMPORT}const c = {call};\n")
        assert result.source == f"{IMPORT}const c = {expected};\n"

    def test_ternary_parenthesised_inside_larger_expression(self, migration):
        result = migration.apply(f"{IMPORT}const c = 'x ' + css(on ? styles.a : styles.b);\n")
        assert result.source == f"{IMPORT}const c = 'x ' + (on ? styles.a : styles.b);\n"

    def test_jsx_attribute(self, migration):
        text = f"{IMPORT}const el = <div className={{css(styles.box)}} />;\n"
        result = migration.apply(text, "Box.tsx")
        assert result.source == f"{IMPORT}const el = <div className={{styles.box}} />;\n"


class TestCompose:
    @pytest.mark.parametrize("operator", ["&&", "||", "??"])
    def test_logical_argument(self, migration, operator):
        result = migration.apply(f"{IMPORT}const c = css(on {operator} styles.a);\n")
        assert result.source == f"{IMPORT}const c = classNames(on {operator} styles.a);\n"
        assert result.used_composer

    @pytest.mark.parametrize("args", ["styles.a, styles.b", "[styles.a, styles.b]", ""])
    def test_needs_precedence_review(self, migration, args):
        result = migration.apply(f"{IMPORT}const c = css({args});\n")
        assert result.source == (
            f"{IMPORT}const c = /* TODO: check CSS precedence */ classNames({args});\n"
        )
        assert result.used_composer

    def test_configured_names(self):
        config = MigrationConfig(composer_name="cx", precedence_comment=" REVIEW")
        result = CallSiteMigration(config).apply(f"{IMPORT}const c = css(a, b);\n")
        assert result.source == f"{IMPORT}const c = /* REVIEW */ cx(a, b);\n"


    def test_parenthesised_logical_argument(self, migration):
        result = migration.apply(f"{IMPORT}const c = css((on && styles.a));\n")
        assert result.source == f"{IMPORT}const c = classNames((on && styles.a));\n"


class TestReferences:
    def test_other_reference_keeps_helper(self, migration):
        text = f"{IMPORT}const c = css(styles.a);\nexport {{ css }};\n"
        result = migration.apply(text)
        assert not result.fully_migrated
        assert result.source == f"{IMPORT}const c = styles.a;\nexport {{ css }};\n"

    def test_shorthand_property_counts_as_reference(self, migration):
        result = migration.apply(f"{IMPORT}const helpers = {{ css }};\n")
        assert not result.fully_migrated
        assert result.rewritten == 0

    def test_member_call_is_not_a_helper_call(self, migration):
        text = f"{IMPORT}const c = lib.css(a);\n"
        result = migration.apply(text)
        assert result.source == text
        assert result.fully_migrated

    def test_nested_calls_rewritten(self, migration):
        result = migration.apply(f"{IMPORT}const c = fn(css(styles.a), css(x && styles.b));\n")
        assert result.source == f"{IMPORT}const c = fn(styles.a, classNames(x && styles.b));\n"
        assert result.rewritten == 2


class TestUnhandled:
    @pytest.mark.parametrize(
        "arg, kind",
        [("'plain'", "string"), ("styles", "identifier"), ("a + b", "binary_expression")],
    )
    def test_unhandled_argument(self, migration, arg, kind):
        with pytest.raises(UnhandledShape) as exc_info:
            migration.apply(f"{IMPORT}const c = css({arg});\n")
        assert exc_info.value.message == f'arg.type of "{kind}" is not handled'
        assert exc_info.value.snippet == arg
