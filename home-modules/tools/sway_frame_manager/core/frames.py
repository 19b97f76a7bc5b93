"""High-level entry point tying the IPC pieces together.

Client code usually only needs SwayFrames: it fetches a fresh tree per call
(unless one is passed in), correlates containers with the client's window
handles, and focuses or destroys windows through sway.
"""

import logging
from typing import Any, Callable, List, Optional, Sequence

from ..models.tree import TreeNode
from .config import SwayFrameConfig, load_config
from .containers import ContainerController
from .correlator import CorrelationPair, Correlator, default_native_id
from .ipc_client import ErrorHandler, IPCClient
from .lifecycle import DedicatedWindowLifecycle
from .metadata import WindowMetadataStore, get_store
from .socket_locator import SocketLocator
from .tree import TreeFetcher, list_windows


logger = logging.getLogger('swayframe.frames')


class SwayFrames:
    """Query and control sway on behalf of a client application.

    Args:
        all_handles: Returns the client's current window handles
        config: Configuration (default: load_config())
        native_id: Reads the native window id from a handle
        store: Metadata store (default: process-wide store)

    Examples:
        >>> frames = SwayFrames(lambda: editor.frames())
        >>> for pair in frames.list_pairs(visible_only=True):
        ...     print(pair.handle, pair.container_id)
        >>> frames.focus_handle(some_frame)
    """

    def __init__(
        self,
        all_handles: Callable[[], Sequence[Any]],
        config: Optional[SwayFrameConfig] = None,
        native_id: Callable[[Any], Any] = default_native_id,
        store: Optional[WindowMetadataStore] = None
    ):
        self.all_handles = all_handles
        self.config = config or load_config()
        self.store = store if store is not None else get_store()
        self.client = IPCClient(
            config=self.config,
            locator=SocketLocator.default(self.config.socket_path, self.store),
        )
        self.fetcher = TreeFetcher(self.client)
        self.correlator = Correlator(native_id)
        self.containers = ContainerController(self.client)
        self.lifecycle = DedicatedWindowLifecycle(
            destroyer=self.destroy_handle,
            store=self.store,
            closing_actions=self.config.closing_actions,
        )

    def tree(self) -> TreeNode:
        """Fetch a fresh tree snapshot."""
        return self.fetcher.fetch_tree()

    def list_windows(
        self,
        tree: Optional[TreeNode] = None,
        visible_only: bool = False,
        focused_only: bool = False
    ) -> List[TreeNode]:
        return list_windows(tree if tree is not None else self.tree(), visible_only, focused_only)

    def list_pairs(
        self,
        tree: Optional[TreeNode] = None,
        visible_only: bool = False,
        focused_only: bool = False
    ) -> List[CorrelationPair]:
        """Correlate content containers with the client's handles."""
        return self.correlator.list_pairs(
            tree if tree is not None else self.tree(), self.all_handles(), visible_only, focused_only
        )

    def window_client(self, handle: Any) -> IPCClient:
        """Client that honours the socket override stored for handle."""
        return self.client.for_window(handle)

    def find_container_for_handle(self, handle: Any, tree: Optional[TreeNode] = None) -> Optional[int]:
        if tree is None:
            tree = TreeFetcher(self.window_client(handle)).fetch_tree()
        return self.correlator.find_container_for_handle(handle, tree, self.all_handles())

    def find_handle_for_container(self, container: TreeNode) -> Optional[Any]:
        return self.correlator.find_handle_for_container(container, self.all_handles())

    def focused_handle(self, tree: Optional[TreeNode] = None) -> Optional[Any]:
        """Return the client handle sway considers focused, if it is ours."""
        pairs = self.list_pairs(tree, focused_only=True)
        return pairs[0].handle if pairs else None

    def focus(self, container_id: int, noerror: ErrorHandler = None) -> None:
        self.containers.focus(container_id, noerror=noerror)

    def focus_handle(self, handle: Any, tree: Optional[TreeNode] = None, noerror: ErrorHandler = None) -> bool:
        """Focus the container showing handle; False if it isn't in the tree."""
        container_id = self.find_container_for_handle(handle, tree)
        if container_id is None:
            logger.debug(f"No container found for {handle!r}")
            return False
        ContainerController(self.window_client(handle)).focus(container_id, noerror=noerror)
        return True

    def destroy_handle(self, handle: Any) -> None:
        """Kill the sway container showing handle.

        Raises:
            LookupError: If handle is not shown in any container
        """
        container_id = self.find_container_for_handle(handle)
        if container_id is None:
            raise LookupError(f"No sway container shows {handle!r}")
        ContainerController(self.window_client(handle)).kill(container_id)
