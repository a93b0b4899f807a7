# src/tracy/core/export.py
"""JSON rendering for case files.

json.dumps recurses once per nesting level, and case trees for long
dependency chains are thousands of levels deep. This renderer walks the
tree with an explicit frame stack, like CaseBuilder, and produces the same
text as json.dumps(case_file, indent=indent).
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from dataclasses import dataclass

from tracy.contracts.types import CaseTree, NodeID


@dataclass(slots=True)
class _Frame:
    """One open object: its remaining entries, nesting depth, and whether a member was written."""

    entries: Iterator[tuple[NodeID, CaseTree]]
    depth: int
    first: bool = True


def iter_case_json(tree: CaseTree, indent: int = 2) -> Iterator[str]:
    """Yield JSON text chunks for a case file or subtree.

    Args:
        tree: Case file or nested subtree.
        indent: Spaces per nesting level.

    Yields:
        Chunks whose concatenation equals json.dumps(tree, indent=indent).
    """
    if not tree:
        yield "{}"
        return

    yield "{"
    stack = [_Frame(iter(tree.items()), depth=1)]
    while stack:
        frame = stack[-1]
        entry = next(frame.entries, None)
        if entry is None:
            stack.pop()
            yield "\n" + " " * (indent * (frame.depth - 1)) + "}"
            continue

        key, subtree = entry
        separator = "\n" if frame.first else ",\n"
        frame.first = False
        yield separator + " " * (indent * frame.depth) + json.dumps(key) + ": "

        if subtree:
            yield "{"
            stack.append(_Frame(iter(subtree.items()), depth=frame.depth + 1))
        else:
            yield "{}"


def render_case_json(tree: CaseTree, indent: int = 2) -> str:
    """Render a case file as indented JSON text."""
    return "".join(iter_case_json(tree, indent))
