"""Style table model: the object-literal style declaration read from a source file."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True)
class Comment:
    """A comment kept verbatim from the source (``// x`` or ``/* x */``)."""

    text: str

    @property
    def is_line(self) -> bool:
        return self.text.startswith("//")

    def render(self) -> str:
        """Render as stylesheet text; line comments become block comments."""
        if self.is_line:
            return f"/*{self.text[2:]} */"
        return self.text


@dataclass(frozen=True)
class Comments:
    """Comments attached before (leading) and after (trailing) a node."""

    leading: tuple[Comment, ...] = ()
    trailing: tuple[Comment, ...] = ()

    def render_leading(self, indent: str = "") -> str:
        return "".join(f"{indent}{c.render()}\n" for c in self.leading)

    def render_trailing(self) -> str:
        return "".join(f" {c.render()}" for c in self.trailing)


@dataclass(frozen=True)
class Declaration:
    """A single ``property: value`` pair with its value already resolved.

    ``property`` is the kebab-case CSS name and ``value`` the final text.
    """

    property: str
    value: str
    comments: Comments = field(default_factory=Comments)


@dataclass(frozen=True)
class NestedGroup:
    """A pseudo-selector or combinator block nested inside a group.

    ``key`` is appended verbatim to the enclosing selector.
    """

    key: str
    members: tuple[Member, ...] = ()
    comments: Comments = field(default_factory=Comments)


@dataclass(frozen=True)
class StyleGroup:
    """One named entry of the style table; ``name`` is used as the class name."""

    name: str
    members: tuple[Member, ...] = ()
    comments: Comments = field(default_factory=Comments)

    @property
    def selector(self) -> str:
        return f".{self.name}"


Member = Union[Declaration, NestedGroup]


@dataclass(frozen=True)
class StyleTable:
    """The file's style declaration, e.g. ``const styles = StyleSheet.create({...})``."""

    name: str
    exported: bool
    groups: tuple[StyleGroup, ...] = ()
    comments: Comments = field(default_factory=Comments)
