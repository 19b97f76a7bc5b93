"""Per-window metadata kept on behalf of the client application.

The store replaces ad-hoc attributes hung off client windows. Entries are
created when a window is dedicated or given a socket override, and removed
with forget() when the window is destroyed.

Handles are used as dictionary keys and must be hashable.
"""

from dataclasses import dataclass
from typing import Any, Dict, Hashable, Optional


@dataclass
class WindowMetadata:
    """Metadata for one client window.

    Attributes:
        dedicated_to: Content id the window exclusively hosts, if any
        socket_path: Sway socket to use for this window, overriding the default
        destroying: Set while the window is being destroyed
    """
    dedicated_to: Optional[Any] = None
    socket_path: Optional[str] = None
    destroying: bool = False

    def is_empty(self) -> bool:
        return self.dedicated_to is None and self.socket_path is None and not self.destroying


class WindowMetadataStore:
    """Mapping from window handle to WindowMetadata.

    Not thread-safe; all access is expected from the client's main thread.
    """

    def __init__(self):
        self._entries: Dict[Hashable, WindowMetadata] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, handle: Hashable) -> bool:
        return handle in self._entries

    def get(self, handle: Hashable) -> Optional[WindowMetadata]:
        """Return the metadata for handle without creating it."""
        return self._entries.get(handle)

    def ensure(self, handle: Hashable) -> WindowMetadata:
        """Return the metadata for handle, creating an empty entry if needed."""
        entry = self._entries.get(handle)
        if entry is None:
            entry = WindowMetadata()
            self._entries[handle] = entry
        return entry

    def dedicated_to(self, handle: Hashable) -> Optional[Any]:
        entry = self._entries.get(handle)
        return entry.dedicated_to if entry else None

    def set_dedication(self, handle: Hashable, content_id: Any) -> None:
        self.ensure(handle).dedicated_to = content_id

    def clear_dedication(self, handle: Hashable) -> None:
        entry = self._entries.get(handle)
        if entry is None:
            return
        entry.dedicated_to = None
        if entry.is_empty():
            del self._entries[handle]

    def socket_path(self, handle: Hashable) -> Optional[str]:
        entry = self._entries.get(handle)
        return entry.socket_path if entry else None

    def set_socket_path(self, handle: Hashable, socket_path: Optional[str]) -> None:
        if socket_path is None:
            entry = self._entries.get(handle)
            if entry is not None:
                entry.socket_path = None
                if entry.is_empty():
                    del self._entries[handle]
            return
        self.ensure(handle).socket_path = socket_path

    def forget(self, handle: Hashable) -> None:
        """Drop everything known about handle (window destroyed)."""
        self._entries.pop(handle, None)

    def clear(self) -> None:
        self._entries.clear()


# Process-wide store
_store: Optional[WindowMetadataStore] = None


def get_store() -> WindowMetadataStore:
    """Get the process-wide metadata store, creating it on first use."""
    global _store
    if _store is None:
        _store = WindowMetadataStore()
    return _store
