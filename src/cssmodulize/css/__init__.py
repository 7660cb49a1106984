from cssmodulize.css.properties import UNITLESS_PROPERTIES, add_unit, hyphenate_style_name
from cssmodulize.css.render import render_declaration, render_rule_sets, render_stylesheet

__all__ = [
    "UNITLESS_PROPERTIES",
    "add_unit",
    "hyphenate_style_name",
    "render_declaration",
    "render_rule_sets",
    "render_stylesheet",
]
