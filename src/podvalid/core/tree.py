"""Key lookup over the generic node tree."""

from typing import Iterator, Optional, Tuple

from podvalid.core.models import Node


def lookup(node: Optional[Node], key: str) -> Tuple[Optional[Node], bool]:
    """
    Returns the value stored under ``key`` in a mapping node.

    Keys are compared as exact strings against scalar key nodes; on
    duplicate keys the first entry wins. Anything that is not a mapping
    (including None) simply reports not-found.
    """
    if node is None or not node.is_mapping:
        return None, False

    for key_node, value_node in node.pairs:
        if key_node.is_scalar and key_node.value == key:
            return value_node, True
    return None, False


def iter_entries(node: Node) -> Iterator[Tuple[str, Node]]:
    """Yields (key text, value node) for every mapping entry, in document order."""
    for key_node, value_node in node.pairs:
        # Complex (non-scalar) keys never match a schema field name
        yield (key_node.value if key_node.is_scalar else ""), value_node
