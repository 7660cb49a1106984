"""Tests for import and export declaration edits."""

import pytest

from cssmodulize.errors import AmbiguousStructure, UnsupportedFeature
from cssmodulize.imports import (
    add_default_import,
    add_named_exports,
    find_imports,
    has_named_imports,
    remove_named_imports,
)
from cssmodulize.source import parse_source


class TestFindImports:
    def test_reads_clauses(self):
        source = parse_source(
            "import React, { useState as useS, useEffect } from 'react';\n"
            "import * as lib from \"lib\";\n"
        )
        react, lib = find_imports(source)
        assert react.module == "react"
        assert react.default == "React"
        assert [(s.name, s.alias) for s in react.named] == [("useState", "useS"), ("useEffect", None)]
        assert react.quote == "'"
        assert lib.namespace == "lib"

    def test_filters_by_module(self):
        source = parse_source("import a from 'a';\nimport b from 'b';\n")
        assert [d.default for d in find_imports(source, "b")] == ["b"]


class TestHasNamedImports:
    def test_present(self):
        text = 'import { css, StyleSheet } from "aphrodite";\n'
        assert has_named_imports(text, "aphrodite", ["css"])
        assert has_named_imports(text, "aphrodite", ["StyleSheet"])

    def test_absent(self):
        assert not has_named_imports('import { StyleSheet } from "aphrodite";\n', "aphrodite", ["css"])
        assert not has_named_imports("const a = 1;\n", "aphrodite", ["css"])

    def test_aliased_import_rejected(self):
        with pytest.raises(UnsupportedFeature, match=r"Import aliases are not supported \(css -> style\)"):
            has_named_imports('import { css as style } from "aphrodite";\n', "aphrodite", ["css"])

    def test_other_aliases_ignored(self):
        text = 'import { css, StyleSheet as SS } from "aphrodite";\n'
        assert has_named_imports(text, "aphrodite", ["css"])

    def test_duplicate_imports_rejected(self):
        text = 'import { css } from "aphrodite";\nimport { StyleSheet } from "aphrodite";\n'
        with pytest.raises(AmbiguousStructure, match="multiple imports of 1 module not supported"):
            has_named_imports(text, "aphrodite", ["css"])


class TestRemoveNamedImports:
    def test_keeps_remaining_names(self):
        text = 'import { css, StyleSheet } from "aphrodite";\nconst a = 1;\n'
        assert remove_named_imports(text, "aphrodite", ["css"]) == (
            'import { StyleSheet } from "aphrodite";\nconst a = 1;\n'
        )

    def test_keeps_default(self):
        text = "import aphrodite, { css } from 'aphrodite'\n"
        assert remove_named_imports(text, "aphrodite", ["css"]) == "import aphrodite from 'aphrodite'\n"

    def test_removes_empty_declaration(self):
        text = 'import React from "react";\nimport { css } from "aphrodite";\n\nconst a = 1;\n'
        assert remove_named_imports(text, "aphrodite", ["css"]) == (
            'import React from "react";\n\nconst a = 1;\n'
        )

    def test_multiline_import_keeps_layout_and_comments(self):
        text = 'import {\n  css,\n  StyleSheet, // keep\n} from "aphrodite";\n'
        assert remove_named_imports(text, "aphrodite", ["css"]) == (
            'import {\n  StyleSheet, // keep\n} from "aphrodite";\n'
        )

    def test_trailing_specifiers(self):
        text = 'import { StyleSheet, css, other } from "aphrodite";\n'
        assert remove_named_imports(text, "aphrodite", ["css", "other"]) == (
            'import { StyleSheet } from "aphrodite";\n'
        )

    def test_nothing_to_remove(self):
        text = 'import { StyleSheet } from "aphrodite";\n'
        assert remove_named_imports(text, "aphrodite", ["css"]) is text


class TestAddDefaultImport:
    def test_new_import_goes_first(self):
        text = "import React from 'react';\n\nconst a = 1;\n"
        assert add_default_import(text, "classnames", "classNames") == (
            "import classNames from 'classnames';\nimport React from 'react';\n\nconst a = 1;\n"
        )

    def test_after_directive_and_above_header_comment(self):
        text = '"use client";\n// React\nimport React from "react";\n'
        assert add_default_import(text, "classnames", "classNames") == (
            '"use client";\nimport classNames from "classnames";\n// React\nimport React from "react";\n'
        )

    def test_file_without_statements(self):
        assert add_default_import("", "classnames", "classNames") == (
            'import classNames from "classnames";\n'
        )

    def test_merges_into_existing_declaration(self):
        text = 'import { helper } from "classnames";\n'
        assert add_default_import(text, "classnames", "classNames") == (
            'import classNames, { helper } from "classnames";\n'
        )

    def test_same_default_is_a_no_op(self):
        text = 'import classNames from "classnames";\n'
        assert add_default_import(text, "classnames", "classNames") == text

    def test_conflicting_default(self):
        text = 'import cx from "classnames";\n'
        with pytest.raises(AmbiguousStructure) as exc_info:
            add_default_import(text, "classnames", "classNames")
        assert exc_info.value.message == (
            "Default import to add (`classNames`) does not match existing default import:"
        )
        assert exc_info.value.snippet == 'import cx from "classnames";'


class TestAddNamedExports:
    def test_appends_export(self):
        assert add_named_exports("const a = 1;\n", ["styles"]) == (
            "const a = 1;\n\nexport { styles };\n"
        )

    def test_trailing_blank_lines_collapsed(self):
        assert add_named_exports("const a = 1;\n\n\n\n", ["a", "b"]) == (
            "const a = 1;\n\nexport { a, b };\n"
        )

    def test_blank_runs_between_statements_collapsed(self):
        text = "const a = 1;\n\n\n\n\nconst b = 2;\n"
        assert add_named_exports(text, ["b"]) == (
            "const a = 1;\n\nconst b = 2;\n\nexport { b };\n"
        )

    def test_template_literal_blank_lines_kept(self):
        text = "const t = `a\n\n\n\n\nb`;\n"
        assert add_named_exports(text, ["t"]) == f"{text}\nexport {{ t }};\n"
