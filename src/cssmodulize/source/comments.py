"""Attach comment nodes to the members of a container node.

Tree-sitter reports comments as ordinary siblings. The attachment rules
follow what Babel does for the common cases:

- a comment starting on the line where the previous member ends trails it;
- any other comment leads the next member;
- comments after the last member trail it (when ``tail_to_last`` is set).
"""

from __future__ import annotations

from dataclasses import dataclass, field

from cssmodulize.source.tree import Node, members

__all__ = ["Attached", "attach_comments"]


@dataclass
class Attached:
    """A member node with the comments bound to it."""

    node: Node
    leading: list[Node] = field(default_factory=list)
    trailing: list[Node] = field(default_factory=list)

    @property
    def start_byte(self) -> int:
        return self.leading[0].start_byte if self.leading else self.node.start_byte

    @property
    def end_byte(self) -> int:
        return self.trailing[-1].end_byte if self.trailing else self.node.end_byte


def attach_comments(container: Node, *, tail_to_last: bool = True) -> list[Attached]:
    """Return the container's members, in order, with their comments."""
    member_spans = {(m.start_byte, m.end_byte) for m in members(container)}
    attached: list[Attached] = []
    pending: list[Node] = []

    for child in container.children:
        if child.type == "comment":
            last = attached[-1] if attached else None
            if last is not None and not pending and child.start_point[0] == last.node.end_point[0]:
                last.trailing.append(child)
            else:
                pending.append(child)
        elif (child.start_byte, child.end_byte) in member_spans:
            attached.append(Attached(child, leading=pending))
            pending = []

    if pending and attached and tail_to_last:
        attached[-1].trailing.extend(pending)
    return attached
