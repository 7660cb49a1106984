"""Tests for rendering style table models as CSS."""

import pytest

from cssmodulize.css import render_declaration, render_rule_sets, render_stylesheet
from cssmodulize.model import (
    Comment,
    Comments,
    Declaration,
    NestedGroup,
    StyleGroup,
    StyleTable,
)


class TestComment:
    def test_line_comment_becomes_block(self):
        assert Comment("// note").render() == "/* note */"

    def test_block_comment_verbatim(self):
        assert Comment("/* note */").render() == "/* note */"


class TestRenderDeclaration:
    def test_plain(self):
        assert render_declaration(Declaration("color", "red")) == "  color: red;"

    def test_with_comments(self):
        declaration = Declaration(
            "z-index",
            "2",
            Comments(leading=(Comment("// above"),), trailing=(Comment("/* top */"),)),
        )
        assert render_declaration(declaration) == "  /* above */\n  z-index: 2; /* top */"


class TestRenderRuleSets:
    def test_nested_groups_follow_their_parent(self):
        group = StyleGroup(
            "link",
            members=(
                Declaration("color", "blue"),
                NestedGroup(
                    ":hover",
                    members=(
                        Declaration("color", "red"),
                        NestedGroup(":focus", members=(Declaration("outline", "none"),)),
                    ),
                ),
                Declaration("cursor", "pointer"),
            ),
        )
        assert render_rule_sets(group) == [
            ".link {\n  color: blue;\n  cursor: pointer;\n}",
            ".link:hover {\n  color: red;\n}",
            ".link:hover:focus {\n  outline: none;\n}",
        ]

    def test_nested_group_needs_selector(self):
        with pytest.raises(ValueError):
            render_rule_sets(NestedGroup(":hover"))

    def test_group_comments(self):
        group = StyleGroup(
            "box",
            members=(Declaration("display", "block"),),
            comments=Comments(leading=(Comment("// box"),), trailing=(Comment("// end"),)),
        )
        assert render_rule_sets(group) == ["/* box */\n.box {\n  display: block;\n} /* end */"]


class TestRenderStylesheet:
    def test_rule_sets_separated_by_blank_line(self):
        table = StyleTable(
            name="styles",
            exported=False,
            groups=(
                StyleGroup("a", members=(Declaration("color", "red"),)),
                StyleGroup("b", members=(Declaration("color", "blue"),)),
            ),
            comments=Comments(leading=(Comment("/* header */"),)),
        )
        assert render_stylesheet(table) == (
            "/* header */\n.a {\n  color: red;\n}\n\n.b {\n  color: blue;\n}"
        )
