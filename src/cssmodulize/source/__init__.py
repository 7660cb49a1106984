from cssmodulize.source.comments import Attached, attach_comments
from cssmodulize.source.edits import Edit, apply_edits, collapse_blank_lines, removal
from cssmodulize.source.tree import Node, SourceFile, iter_nodes, members, parse_source

__all__ = [
    "Attached",
    "Edit",
    "Node",
    "SourceFile",
    "apply_edits",
    "attach_comments",
    "collapse_blank_lines",
    "iter_nodes",
    "members",
    "parse_source",
    "removal",
]
