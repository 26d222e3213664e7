# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared cache of parsed Go source files.

Every consumer that needs syntax-level facts about a file goes through one
:class:`SourceCache` per run. Each normalised path is parsed at most once:
concurrent callers asking for the same path wait for the caller that won the
race and then observe the same :class:`ParsedFile`, error included. Callers
for different paths never wait on each other.
"""

from __future__ import annotations

import logging
import os
from bisect import bisect_right
from collections.abc import Callable, Iterable, Iterator
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from functools import cached_property
from pathlib import Path
from threading import Event, Lock
from typing import Final

from tree_sitter import Node as TSNode
from tree_sitter import Tree as TSTree

from ..analysis.comments import CommentGroup, extract_comment_groups
from ..analysis.treesitter import build_parser
from ..logging import debug_logger

SourceReader = Callable[[Path], bytes]

PACKAGE_CLAUSE_NODE: Final[str] = "package_clause"
IMPORT_DECLARATION_NODE: Final[str] = "import_declaration"
IMPORT_SPEC_NODE: Final[str] = "import_spec"
ERROR_NODE: Final[str] = "ERROR"
TOP_LEVEL_DECLARATIONS: Final[frozenset[str]] = frozenset(
    {
        "function_declaration",
        "method_declaration",
        "type_declaration",
        "const_declaration",
        "var_declaration",
    },
)
_COMMENT_NODE: Final[str] = "comment"


def read_source(path: Path) -> bytes:
    """Return the raw bytes stored at ``path``."""
    return path.read_bytes()


@dataclass(frozen=True)
class ParsedFile:
    """Result of parsing one file.

    Attributes:
        name: Normalised cache key of the file.
        path: Location the source was read from.
        source: Raw file contents; empty when the file could not be read.
        tree: Tree-sitter syntax tree, ``None`` when the file could not be read.
        error: Read or syntax error description, ``None`` for valid files.
    """

    name: str
    path: Path
    source: bytes = b""
    tree: TSTree | None = field(default=None, compare=False, repr=False)
    error: str | None = None

    @property
    def ok(self) -> bool:
        """Return ``True`` when the file was read and parsed without errors."""
        return self.error is None and self.tree is not None

    @cached_property
    def _line_starts(self) -> list[int]:
        starts = [0]
        index = self.source.find(b"\n")
        while index != -1:
            starts.append(index + 1)
            index = self.source.find(b"\n", index + 1)
        return starts

    def position(self, offset: int) -> tuple[int, int]:
        """Resolve a byte ``offset`` into a 1-based ``(line, column)`` pair."""
        line_index = bisect_right(self._line_starts, offset) - 1
        return line_index + 1, offset - self._line_starts[line_index] + 1

    @cached_property
    def _comment_groups(self) -> tuple[CommentGroup, ...]:
        if self.tree is None:
            return ()
        return tuple(extract_comment_groups(self.tree.root_node, self.source))

    def comment_groups(self) -> tuple[CommentGroup, ...]:
        """Return every comment group of the file in source order."""
        return self._comment_groups

    def import_cutoff(self) -> int:
        """Return the offset bounding header comments.

        This is the start of the first import spec, or the end of the last
        top-level declaration (the package clause included) when the file
        imports nothing.
        """
        if self.tree is None:
            return len(self.source)
        declarations = _top_level_nodes(self.tree.root_node)
        for child in declarations:
            if child.type == PACKAGE_CLAUSE_NODE:
                continue
            if child.type != IMPORT_DECLARATION_NODE:
                break
            spec = _first_descendant(child, IMPORT_SPEC_NODE)
            if spec is not None:
                return spec.start_byte
        if declarations:
            return declarations[-1].end_byte
        return len(self.source)


def _top_level_nodes(root: TSNode) -> list[TSNode]:
    return [child for child in root.named_children if child.type != _COMMENT_NODE]


def _node_position(node: TSNode) -> str:
    return f"{node.start_point[0] + 1}:{node.start_point[1] + 1}"


def _layout_error(root: TSNode) -> str | None:
    """Check the top-level layout ``go/parser`` enforces.

    The package clause comes first and only once, imports precede every other
    declaration and nothing but declarations appears at file scope.
    """

    nodes = _top_level_nodes(root)
    if not nodes or nodes[0].type != PACKAGE_CLAUSE_NODE:
        position = _node_position(nodes[0]) if nodes else "1:1"
        return f"{position}: expected 'package'"

    seen_declaration = False
    for node in nodes[1:]:
        if node.type == IMPORT_DECLARATION_NODE:
            if seen_declaration:
                return f"{_node_position(node)}: imports must appear before other declarations"
            continue
        if node.type not in TOP_LEVEL_DECLARATIONS:
            return f"{_node_position(node)}: expected declaration, found {node.type}"
        seen_declaration = True
    return None


def _first_descendant(node: TSNode, node_type: str) -> TSNode | None:
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type == node_type:
            return current
        stack.extend(reversed(current.children))
    return None


def find_syntax_error(tree: TSTree) -> str | None:
    """Describe the first syntax error in ``tree``, or return ``None``.

    Go source is invalid when Tree-sitter had to recover (``ERROR`` or
    missing nodes) or when the top-level layout breaks Go's rules, which
    Tree-sitter accepts more loosely than ``go/parser``.
    """

    root = tree.root_node
    if root.has_error:
        stack = [root]
        while stack:
            node = stack.pop()
            row, column = node.start_point[0] + 1, node.start_point[1] + 1
            if node.type == ERROR_NODE:
                return f"{row}:{column}: syntax error"
            if node.is_missing:
                return f"{row}:{column}: expected {node.type!r}"
            stack.extend(reversed([child for child in node.children if child.has_error or child.is_missing]))
        return "1:1: syntax error"
    return _layout_error(root)


class _Slot:
    """Single-flight cell for one cache key."""

    __slots__ = ("done", "failure", "result")

    def __init__(self) -> None:
        self.done = Event()
        self.result: ParsedFile | None = None
        self.failure: BaseException | None = None


class SourceCache:
    """Lazily parse files and share the results across consumers.

    Args:
        root: Directory used to resolve relative paths and shorten keys.
            Defaults to the current working directory.
        reader: Callable returning the raw bytes of a path.
        logger: Debug logger; defaults to the ``astcache`` tagged logger.
    """

    def __init__(
        self,
        root: Path | None = None,
        *,
        reader: SourceReader = read_source,
        logger: logging.Logger | None = None,
    ) -> None:
        self._root = Path(os.path.abspath(root if root is not None else Path.cwd()))
        self._reader = reader
        self._logger = logger or debug_logger("astcache")
        self._lock = Lock()
        self._slots: dict[str, _Slot] = {}
        self._parse_count = 0

    @property
    def root(self) -> Path:
        """Return the directory relative keys are resolved against."""
        return self._root

    @property
    def parse_count(self) -> int:
        """Return how many files were read and parsed so far."""
        with self._lock:
            return self._parse_count

    def normalize(self, path: str | Path) -> str:
        """Return the cache key for ``path``.

        Relative paths resolve against :attr:`root`; the key is the shorter of
        the absolute path and its root-relative spelling.
        """

        candidate = Path(path)
        if not candidate.is_absolute():
            candidate = self._root / candidate
        absolute = os.path.normpath(candidate)
        try:
            relative = os.path.relpath(absolute, self._root)
        except ValueError:
            return Path(absolute).as_posix()
        if len(relative) < len(absolute):
            return Path(relative).as_posix()
        return Path(absolute).as_posix()

    def _location(self, key: str) -> Path:
        candidate = Path(key)
        return candidate if candidate.is_absolute() else self._root / candidate

    def get_or_parse(self, path: str | Path) -> ParsedFile:
        """Return the parsed form of ``path``, parsing it on first request.

        Read and syntax failures are reported through :attr:`ParsedFile.error`
        rather than raised.

        Args:
            path: File path, absolute or relative to :attr:`root`.

        Returns:
            ParsedFile: Shared parse result for the normalised path.
        """

        key = self.normalize(path)
        with self._lock:
            slot = self._slots.get(key)
            owner = slot is None
            if slot is None:
                slot = _Slot()
                self._slots[key] = slot

        if not owner:
            slot.done.wait()
            if slot.failure is not None:
                raise slot.failure
            assert slot.result is not None
            return slot.result

        try:
            slot.result = self._parse(key)
        except BaseException as exc:
            slot.failure = exc
            with self._lock:
                self._slots.pop(key, None)
            raise
        finally:
            slot.done.set()
        return slot.result

    def _parse(self, key: str) -> ParsedFile:
        location = self._location(key)
        with self._lock:
            self._parse_count += 1
        try:
            source = self._reader(location)
        except OSError as exc:
            self._logger.debug("file %r: can't read: %s", key, exc)
            return ParsedFile(name=key, path=location, error=str(exc))

        tree = build_parser().parse(source)
        error = find_syntax_error(tree)
        if error is not None:
            self._logger.debug("file %r: parse failed: %s", key, error)
        else:
            self._logger.debug("file %r: parsed %d bytes", key, len(source))
        return ParsedFile(name=key, path=location, source=source, tree=tree, error=error)

    def get(self, path: str | Path) -> ParsedFile | None:
        """Return the cached result for ``path`` without triggering a parse."""

        key = self.normalize(path)
        with self._lock:
            slot = self._slots.get(key)
        if slot is None or not slot.done.is_set():
            return None
        return slot.result

    def load_files(self, paths: Iterable[str | Path], *, jobs: int = 1) -> SourceCache:
        """Parse ``paths`` eagerly, using ``jobs`` worker threads.

        Returns:
            SourceCache: ``self`` to allow chaining.
        """

        candidates = list(paths)
        if jobs <= 1 or len(candidates) <= 1:
            for candidate in candidates:
                self.get_or_parse(candidate)
            return self
        with ThreadPoolExecutor(max_workers=jobs) as executor:
            list(executor.map(self.get_or_parse, candidates))
        return self

    def keys(self) -> list[str]:
        """Return cached keys in first-request order."""
        with self._lock:
            return list(self._slots)

    def valid_files(self) -> list[ParsedFile]:
        """Return every cached file that parsed without errors."""
        with self._lock:
            slots = list(self._slots.values())
        return [slot.result for slot in slots if slot.done.is_set() and slot.result is not None and slot.result.ok]

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, Path)):
            return False
        with self._lock:
            return self.normalize(path) in self._slots

    def __len__(self) -> int:
        with self._lock:
            return len(self._slots)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())


__all__ = ["ParsedFile", "SourceCache", "SourceReader", "find_syntax_error", "read_source"]
