#!/usr/bin/env python3
"""
PODVALID LOADER - The Reader
----------------------------
Turns raw manifest text into the generic Node tree consumed by the
validator. ruamel.yaml composes the representation graph (no Python
objects are constructed), which keeps source marks and resolved scalar
tags intact; the graph is then copied into immutable Nodes.

Only the first document of a multi-document stream is returned.

Author: PodValid Team
Date: 2026-10-16
"""

import logging
from pathlib import Path
from typing import Dict, Optional, Set, Union

from ruamel.yaml import YAML, YAMLError
from ruamel.yaml.nodes import MappingNode, ScalarNode, SequenceNode

from podvalid.core.models import Node
from podvalid.exceptions import ManifestParseError, ManifestReadError

logger = logging.getLogger("podvalid.loader")


def _short_tag(raw_tag) -> str:
    """'tag:yaml.org,2002:int' -> 'int'. Handles both str and Tag objects."""
    if raw_tag is None:
        return ""
    text = raw_tag if isinstance(raw_tag, str) else str(getattr(raw_tag, "value", raw_tag))
    return text.rsplit(":", 1)[-1].lstrip("!")


def _line_of(raw_node) -> int:
    mark = getattr(raw_node, "start_mark", None)
    return mark.line + 1 if mark is not None else 0


def _is_empty_plain(raw_node) -> bool:
    """A value left out entirely ('image:' or a bare '-'), not a quoted ''."""
    return (isinstance(raw_node, ScalarNode) and raw_node.value == ""
            and raw_node.style is None and _short_tag(raw_node.tag) == "null")


def _entry_line(text: str, raw_node) -> int:
    """Line of the '-' indicator in front of an empty sequence entry."""
    mark = getattr(raw_node, "start_mark", None)
    if mark is None or not text:
        return _line_of(raw_node)
    index = min(mark.index, len(text))
    while index > 0 and text[index - 1] in " \t\r\n":
        index -= 1
    if index > 0 and text[index - 1] == "-":
        return text.count("\n", 0, index - 1) + 1
    return _line_of(raw_node)


def _describe(exc: YAMLError) -> str:
    """Single-line rendering of a ruamel error (its str() spans several lines)."""
    problem = getattr(exc, "problem", None)
    mark = getattr(exc, "problem_mark", None)
    if problem and mark is not None:
        return f"{problem} (line {mark.line + 1}, column {mark.column + 1})"
    return " ".join(str(exc).split())


class ManifestLoader:
    """
    Parser adapter between ruamel.yaml and the PodValid node model.
    """

    def __init__(self):
        # Round-trip mode keeps the pure-Python composer, whose nodes carry marks
        self.yaml = YAML(typ="rt")

    def load_text(self, text: str, source: Optional[str] = None) -> Optional[Node]:
        """
        Parses the first document of ``text``.

        Returns None when the stream holds no document at all (empty text or
        comments only). Raises ManifestParseError on malformed YAML.
        """
        documents = self.yaml.compose_all(text)
        try:
            raw_root = next(documents, None)
        except YAMLError as e:
            raise ManifestParseError(source, _describe(e)) from e
        finally:
            # Releases the parser so the YAML instance can be reused
            documents.close()

        if raw_root is None:
            logger.debug("No YAML document found in %s", source or "<text>")
            return None

        return self._convert(raw_root, {}, set(), source, text)

    def load_file(self, path: Union[str, Path]) -> Optional[Node]:
        """Reads a manifest from disk (BOM-aware) and parses it."""
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8-sig")
        except UnicodeDecodeError as e:
            raise ManifestParseError(str(path), f"invalid UTF-8 input: {e.reason}") from e
        except OSError as e:
            raise ManifestReadError(str(path), e.strerror or str(e)) from e

        return self.load_text(text, source=str(path))

    def _convert(self, raw, done: Dict[int, Node], active: Set[int], source: Optional[str],
                 text: str = "", line: Optional[int] = None) -> Node:
        """
        Copies a ruamel node graph into Nodes. Aliases share the converted
        anchor node; an alias pointing into its own ancestor is rejected.

        ``line`` overrides the node's own mark. ruamel places an empty plain
        value on the next token's line, so the caller passes the line of the
        key or '-' indicator that owns it.
        """
        key = id(raw)
        if key in done:
            return done[key]
        if key in active:
            raise ManifestParseError(source, "recursive alias is not supported")

        if line is None:
            line = _line_of(raw)
        if isinstance(raw, ScalarNode):
            node = Node.scalar(raw.value, line=line, tag=_short_tag(raw.tag))
        elif isinstance(raw, SequenceNode):
            active.add(key)
            node = Node.sequence(
                [self._convert(item, done, active, source, text,
                               _entry_line(text, item) if _is_empty_plain(item) else None)
                 for item in raw.value],
                line=line,
            )
            active.discard(key)
        elif isinstance(raw, MappingNode):
            active.add(key)
            pairs = []
            for k, v in raw.value:
                key_node = self._convert(k, done, active, source, text)
                value_line = key_node.line if _is_empty_plain(v) else None
                pairs.append((key_node, self._convert(v, done, active, source, text, value_line)))
            node = Node.mapping(pairs, line=line)
            active.discard(key)
        else:
            raise ManifestParseError(source, f"unexpected YAML node type {type(raw).__name__}")

        done[key] = node
        return node
