"""Correlation between sway containers and client window handles.

sway reports the X11 window id of each XWayland view in the `window` field.
Client windows expose the same id (often as a decimal string); matching the
two is the only correlation key.

Known limitation: X11 ids can be reused after a window is destroyed, so a
stale handle may match a new container. Nothing here tries to detect that.
"""

import logging
from dataclasses import dataclass
from operator import attrgetter
from typing import Any, Callable, List, Optional, Sequence

from ..models.tree import TreeNode
from .tree import list_windows


logger = logging.getLogger('swayframe.correlator')

default_native_id = attrgetter("native_id")


def to_native_int(value: Any) -> Optional[int]:
    """Convert a native window id to int, or None if it isn't one.

    Examples:
        >>> to_native_int("4194311")
        4194311
        >>> to_native_int(None) is None
        True
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip(), 0)
    except ValueError:
        return None


@dataclass(frozen=True)
class CorrelationPair:
    """A client window handle and the sway container showing it."""
    handle: Any
    container_id: int


class Correlator:
    """Map sway containers to client window handles.

    Args:
        native_id: Function reading the native window id from a handle
            (default: the handle's `native_id` attribute)
    """

    def __init__(self, native_id: Callable[[Any], Any] = default_native_id):
        self._native_id = native_id

    def handle_id(self, handle: Any) -> Optional[int]:
        """Native id of handle as an int (None if missing or malformed)."""
        try:
            return to_native_int(self._native_id(handle))
        except AttributeError:
            return None

    def find_handle_for_container(
        self,
        container: TreeNode,
        all_handles: Sequence[Any]
    ) -> Optional[Any]:
        """Return the first handle whose native id equals container.window."""
        if container.window is None:
            return None
        for handle in all_handles:
            if self.handle_id(handle) == container.window:
                return handle
        return None

    def list_pairs(
        self,
        tree: TreeNode,
        all_handles: Sequence[Any],
        visible_only: bool = False,
        focused_only: bool = False
    ) -> List[CorrelationPair]:
        """Pair each content container with its client handle.

        Containers without a matching handle are dropped; they are windows of
        other clients (or not yet known locally), not errors.
        """
        handles = list(all_handles)
        pairs = []
        for container in list_windows(tree, visible_only, focused_only):
            handle = self.find_handle_for_container(container, handles)
            if handle is not None:
                pairs.append(CorrelationPair(handle, container.id))
        logger.debug(f"Correlated {len(pairs)} container(s) with {len(handles)} handle(s)")
        return pairs

    def find_container_for_handle(
        self,
        handle: Any,
        tree: TreeNode,
        all_handles: Optional[Sequence[Any]] = None
    ) -> Optional[int]:
        """Return the container id showing handle, if any.

        Args:
            handle: Client window handle to look up
            tree: Tree snapshot to search
            all_handles: Handles to correlate against (default: just handle)
        """
        if all_handles is None:
            all_handles = [handle]
        for pair in self.list_pairs(tree, all_handles):
            if pair.handle == handle:
                return pair.container_id
        return None
