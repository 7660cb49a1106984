"""Property-name and numeric-value normalisation for CSS declarations."""

from __future__ import annotations

import re

from cssmodulize.source.literals import format_number

__all__ = ["UNITLESS_PROPERTIES", "add_unit", "hyphenate_style_name"]

_UPPERCASE_RE = re.compile(r"[A-Z]")
_MS_RE = re.compile(r"^ms-")

# Properties whose numeric values carry no implicit length unit.
UNITLESS_PROPERTIES = frozenset(
    {
        "animationIterationCount",
        "aspectRatio",
        "borderImageOutset",
        "borderImageSlice",
        "borderImageWidth",
        "boxFlex",
        "boxFlexGroup",
        "boxOrdinalGroup",
        "columnCount",
        "columns",
        "flex",
        "flexGrow",
        "flexPositive",
        "flexShrink",
        "flexNegative",
        "flexOrder",
        "gridArea",
        "gridRow",
        "gridRowEnd",
        "gridRowSpan",
        "gridRowStart",
        "gridColumn",
        "gridColumnEnd",
        "gridColumnSpan",
        "gridColumnStart",
        "fontWeight",
        "lineClamp",
        "lineHeight",
        "opacity",
        "order",
        "orphans",
        "scale",
        "tabSize",
        "widows",
        "zIndex",
        "zoom",
        # SVG
        "fillOpacity",
        "floodOpacity",
        "stopOpacity",
        "strokeDasharray",
        "strokeDashoffset",
        "strokeMiterlimit",
        "strokeOpacity",
        "strokeWidth",
    }
)

_VENDOR_PREFIXES = ("Webkit", "ms", "Moz", "O")


def hyphenate_style_name(name: str) -> str:
    """Hyphenate a camel-cased CSS property name.

    >>> hyphenate_style_name("backgroundColor")
    'background-color'
    >>> hyphenate_style_name("MozTransition")
    '-moz-transition'
    >>> hyphenate_style_name("msTransition")
    '-ms-transition'
    """
    if not _UPPERCASE_RE.search(name) or name.startswith("--"):
        return name
    hyphenated = _UPPERCASE_RE.sub(lambda m: f"-{m.group(0).lower()}", name)
    return _MS_RE.sub("-ms-", hyphenated)


def _is_unitless(name: str) -> bool:
    if name in UNITLESS_PROPERTIES:
        return True
    for prefix in _VENDOR_PREFIXES:
        if name.startswith(prefix) and len(name) > len(prefix):
            rest = name[len(prefix) :]
            if rest[0].isupper() and rest[0].lower() + rest[1:] in UNITLESS_PROPERTIES:
                return True
    return False


def add_unit(name: str, value: int | float) -> str:
    """Render a numeric value for the camel-cased property *name*.

    Unitless properties get the bare number, everything else gets ``px``.
    """
    rendered = format_number(value)
    if _is_unitless(name):
        return rendered
    return f"{rendered}px"
