"""Render style table models as CSS rule sets."""

from __future__ import annotations

from cssmodulize.model.style_table import (
    Declaration,
    NestedGroup,
    StyleGroup,
    StyleTable,
)

__all__ = ["render_declaration", "render_rule_sets", "render_stylesheet"]

INDENT = "  "


def render_declaration(declaration: Declaration) -> str:
    """Render one declaration line, with its comments."""
    return "".join(
        [
            declaration.comments.render_leading(INDENT),
            f"{INDENT}{declaration.property}: {declaration.value};",
            declaration.comments.render_trailing(),
        ]
    )


def render_rule_sets(
    group: StyleGroup | NestedGroup, selector: str | None = None
) -> list[str]:
    """Render *group* as its own rule set followed by one per nested group.

    Nested groups are expanded recursively; each nested selector is the
    enclosing selector with the nested key appended.
    """
    if selector is None:
        if not isinstance(group, StyleGroup):
            raise ValueError("A nested group needs an explicit selector")
        selector = group.selector

    declarations = [m for m in group.members if isinstance(m, Declaration)]
    nested = [m for m in group.members if isinstance(m, NestedGroup)]

    rule_set = "".join(
        [
            group.comments.render_leading(),
            f"{selector} {{\n",
            "\n".join(render_declaration(d) for d in declarations) + "\n",
            "}",
            group.comments.render_trailing(),
        ]
    )

    rule_sets = [rule_set]
    for child in nested:
        rule_sets.extend(render_rule_sets(child, selector + child.key))
    return rule_sets


def render_stylesheet(table: StyleTable) -> str:
    """Render the whole table; rule sets are separated by a blank line."""
    body = "\n\n".join(
        rule_set for group in table.groups for rule_set in render_rule_sets(group)
    )
    return "".join(
        [
            table.comments.render_leading(),
            body,
            table.comments.render_trailing(),
        ]
    )
