# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Extract Go comment groups from Tree-sitter syntax trees.

Grouping and text rendering follow the Go toolchain so that positions and
texts match what ``go/ast`` reports for the same file:

* comments separated only by whitespace and at most one line break belong to
  the same group;
* a comment trailing code on the same line opens a *line comment* group that
  only continues on that line;
* :meth:`CommentGroup.text` strips comment markers, drops directives such as
  ``//go:generate`` and normalises blank lines.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import Final

from tree_sitter import Node as TSNode

COMMENT_NODE_TYPE: Final[str] = "comment"
_LINE_MARKER: Final[str] = "//"
_BLOCK_OPEN: Final[str] = "/*"
_BLOCK_CLOSE: Final[str] = "*/"
_DIRECTIVE_PREFIXES: Final[tuple[str, ...]] = ("line ", "extern ", "export ")
_DIRECTIVE_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[a-z0-9]+:[a-z0-9]")
_TRAILING_WHITESPACE: Final[str] = " \t\n\r"


@dataclass(frozen=True, slots=True)
class Comment:
    """Single ``//`` or ``/* */`` comment token.

    Attributes:
        raw: Comment source including its markers.
        start: Byte offset of the first marker character.
        end: Byte offset just past the comment.
        line: 1-based line of ``start``.
        column: 1-based byte column of ``start``.
        end_line: 1-based line holding the last comment character.
    """

    raw: str
    start: int
    end: int
    line: int
    column: int
    end_line: int


@dataclass(frozen=True, slots=True)
class CommentGroup:
    """Contiguous run of comments with no blank line between them."""

    comments: tuple[Comment, ...]

    @property
    def start(self) -> int:
        """Return the byte offset where the group begins."""
        return self.comments[0].start

    @property
    def line(self) -> int:
        """Return the 1-based line where the group begins."""
        return self.comments[0].line

    @property
    def column(self) -> int:
        """Return the 1-based byte column where the group begins."""
        return self.comments[0].column

    def text(self) -> str:
        """Return the comment text without markers, as ``go/ast`` renders it."""
        return render_comment_text(comment.raw for comment in self.comments)


def _is_directive(body: str) -> bool:
    """Return ``True`` when ``body`` (text after ``//``) is a tool directive."""

    if body.startswith(_DIRECTIVE_PREFIXES):
        return True
    return _DIRECTIVE_PATTERN.match(body) is not None


def render_comment_text(raw_comments: Iterable[str]) -> str:
    """Render ``raw_comments`` into plain text.

    Args:
        raw_comments: Comment sources, markers included, in source order.

    Returns:
        str: Text with markers removed, leading blank lines dropped, blank
        runs collapsed and a single trailing newline; empty when nothing
        remains.
    """

    lines: list[str] = []
    for raw in raw_comments:
        body = raw.replace("\r", "")
        if body.startswith(_LINE_MARKER):
            body = body[len(_LINE_MARKER) :]
            if body:
                if body[0] == " ":
                    body = body[1:]
                elif _is_directive(body):
                    continue
        elif body.startswith(_BLOCK_OPEN):
            body = body[len(_BLOCK_OPEN) : -len(_BLOCK_CLOSE)]
        lines.extend(line.rstrip(_TRAILING_WHITESPACE) for line in body.split("\n"))

    compact: list[str] = []
    for line in lines:
        if line or (compact and compact[-1]):
            compact.append(line)
    if compact and compact[-1]:
        compact.append("")
    return "\n".join(compact)


def iter_comment_nodes(root: TSNode) -> Iterator[TSNode]:
    """Yield every comment node below ``root`` in source order."""

    stack: list[TSNode] = [root]
    while stack:
        node = stack.pop()
        if node.type == COMMENT_NODE_TYPE:
            yield node
            continue
        stack.extend(reversed(node.children))


def _comment_from_node(node: TSNode, source: bytes) -> Comment:
    start_row, start_col = node.start_point[0], node.start_point[1]
    end_row = node.end_point[0]
    raw = source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")
    return Comment(
        raw=raw,
        start=node.start_byte,
        end=node.end_byte,
        line=start_row + 1,
        column=start_col + 1,
        end_line=end_row + 1,
    )


def _trails_code(source: bytes, offset: int) -> bool:
    """Return ``True`` when non-blank source precedes ``offset`` on its line."""

    line_start = source.rfind(b"\n", 0, offset) + 1
    return bool(source[line_start:offset].strip())


def group_comments(comments: Sequence[Comment], source: bytes) -> list[CommentGroup]:
    """Group ``comments`` the way the Go parser does.

    Args:
        comments: Comments in source order.
        source: Raw file contents the comments were taken from.

    Returns:
        list[CommentGroup]: Groups in source order.
    """

    groups: list[CommentGroup] = []
    current: list[Comment] = []
    line_group = False
    for comment in comments:
        if current:
            previous = current[-1]
            max_line = previous.end_line + (0 if line_group else 1)
            adjacent = not source[previous.end : comment.start].strip()
            if adjacent and comment.line <= max_line:
                current.append(comment)
                continue
            groups.append(CommentGroup(tuple(current)))
        current = [comment]
        line_group = _trails_code(source, comment.start)
    if current:
        groups.append(CommentGroup(tuple(current)))
    return groups


def extract_comment_groups(root: TSNode, source: bytes) -> list[CommentGroup]:
    """Return the comment groups of the tree rooted at ``root``."""

    comments = [_comment_from_node(node, source) for node in iter_comment_nodes(root)]
    return group_comments(comments, source)


__all__ = [
    "Comment",
    "CommentGroup",
    "extract_comment_groups",
    "group_comments",
    "iter_comment_nodes",
    "render_comment_text",
]
