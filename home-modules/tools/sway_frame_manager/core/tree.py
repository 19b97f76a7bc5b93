"""Fetching and walking the sway container tree.

Walks use an explicit stack instead of recursion, so very deep trees do
not hit the interpreter's recursion limit. Children are pushed in reverse
so nodes come out in left-to-right document order.
"""

import logging
from typing import Iterator, List, Optional

from pydantic import ValidationError

from ..errors import ParseError
from ..models.tree import TreeNode
from .ipc_client import IPCClient


logger = logging.getLogger('swayframe.tree')

GET_TREE = "get_tree"


def parse_tree(data: object) -> TreeNode:
    """Validate a decoded get_tree payload into a TreeNode.

    Raises:
        ParseError: If data is not a tree object
    """
    if not isinstance(data, dict):
        raise ParseError(
            f"Expected a JSON object for the tree, got {type(data).__name__}",
            command=f"-t {GET_TREE}",
            shape_mismatch=True
        )
    try:
        return TreeNode.model_validate(data)
    except ValidationError as e:
        raise ParseError(f"Unexpected tree shape: {e}", command=f"-t {GET_TREE}", shape_mismatch=True)


class TreeFetcher:
    """Fetch a fresh tree snapshot through an IPCClient."""

    def __init__(self, client: Optional[IPCClient] = None):
        self.client = client or IPCClient()

    def fetch_tree(self) -> TreeNode:
        """Get the full sway tree (GET_TREE).

        Raises:
            TransportError: If swaymsg cannot be run
            ParseError: If the payload is not a tree object
        """
        logger.debug("IPC query: GET_TREE")
        tree = parse_tree(self.client.get_json(GET_TREE))
        logger.debug(f"GET_TREE returned tree rooted at #{tree.id}")
        return tree


def iter_nodes(tree: TreeNode) -> Iterator[TreeNode]:
    """Yield every node of tree in pre-order, left to right."""
    stack = [tree]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.nodes))


def list_windows(
    tree: TreeNode,
    visible_only: bool = False,
    focused_only: bool = False
) -> List[TreeNode]:
    """List the content containers of tree.

    A content container is a childless node that is not a workspace. The
    walk does not descend into collected nodes, and a non-matching leaf is
    simply skipped.

    Args:
        tree: Root of the subtree to walk
        visible_only: Only keep containers with visible=True
        focused_only: Only keep containers with focused=True

    Returns:
        Matching containers in left-to-right document order

    Examples:
        >>> tree = TreeNode.model_validate({"id": 1, "type": "root", "nodes": [
        ...     {"id": 2, "type": "workspace", "nodes": []},
        ...     {"id": 3, "type": "workspace", "nodes": [
        ...         {"id": 4, "type": "con", "window": 42, "visible": True},
        ...     ]},
        ... ]})
        >>> [n.window for n in list_windows(tree)]
        [42]
    """
    windows = []
    for node in iter_nodes(tree):
        if not node.is_content:
            continue
        if visible_only and not node.visible:
            continue
        if focused_only and not node.focused:
            continue
        windows.append(node)
    return windows


def find_focused(tree: TreeNode) -> Optional[TreeNode]:
    """Return the focused content container, if any."""
    focused = list_windows(tree, focused_only=True)
    return focused[0] if focused else None


def find_node(tree: TreeNode, container_id: int) -> Optional[TreeNode]:
    """Return the node with the given container id, if present."""
    for node in iter_nodes(tree):
        if node.id == container_id:
            return node
    return None
