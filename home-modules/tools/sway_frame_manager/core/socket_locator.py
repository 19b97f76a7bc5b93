"""Sway IPC socket discovery.

The socket path is resolved by trying a list of sources in order; the first
one that returns a path wins. Default order:

1. Per-window override recorded in the WindowMetadataStore
2. socket_path from the configuration file
3. $SWAYSOCK
4. `sway --get-socketpath`
5. $XDG_RUNTIME_DIR/sway-ipc.*.sock (typically /run/user/<uid>)

The socket is at /run/user/<uid>/sway-ipc.<uid>.<pid>.sock; the pid suffix
changes every session, which is why the last source globs for it.
"""

import logging
import os
import shutil
import subprocess
from pathlib import Path
from typing import Any, Callable, List, Optional

from .metadata import WindowMetadataStore, get_store


logger = logging.getLogger('swayframe.socket')

# A source takes the (optional) window handle and returns a path or None
SocketSource = Callable[[Optional[Any]], Optional[str]]


def window_override_source(store: Optional[WindowMetadataStore] = None) -> SocketSource:
    """Source reading the per-window socket override."""
    def source(handle: Optional[Any]) -> Optional[str]:
        if handle is None:
            return None
        return (store if store is not None else get_store()).socket_path(handle)
    return source


def fixed_source(socket_path: Optional[str]) -> SocketSource:
    """Source returning a fixed path (e.g. from configuration)."""
    def source(handle: Optional[Any]) -> Optional[str]:
        return socket_path or None
    return source


def environment_source(var: str = "SWAYSOCK") -> SocketSource:
    """Source reading an environment variable."""
    def source(handle: Optional[Any]) -> Optional[str]:
        return os.environ.get(var) or None
    return source


def sway_binary_source(timeout: float = 2.0) -> SocketSource:
    """Source asking `sway --get-socketpath`."""
    def source(handle: Optional[Any]) -> Optional[str]:
        sway = shutil.which("sway")
        if not sway:
            return None
        try:
            result = subprocess.run(
                [sway, "--get-socketpath"],
                capture_output=True,
                encoding="utf-8",
                timeout=timeout,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.debug(f"sway --get-socketpath failed: {e}")
            return None
        if result.returncode != 0:
            return None
        return result.stdout.strip() or None
    return source


def runtime_dir_source(run_dir: Optional[Path] = None) -> SocketSource:
    """Source globbing the user's runtime directory for a sway socket."""
    def source(handle: Optional[Any]) -> Optional[str]:
        directory = run_dir
        if directory is None:
            xdg = os.environ.get("XDG_RUNTIME_DIR")
            directory = Path(xdg) if xdg else Path(f"/run/user/{os.getuid()}")
        if not directory.exists():
            logger.debug(f"Run directory not found: {directory}")
            return None
        for sock in sorted(directory.glob("sway-ipc.*.sock")):
            logger.debug(f"Found Sway socket: {sock}")
            return str(sock)
        return None
    return source


class SocketLocator:
    """Resolve the sway socket from an ordered list of sources.

    Examples:
        >>> locator = SocketLocator([fixed_source(None), fixed_source("/tmp/s.sock")])
        >>> locator.resolve()
        '/tmp/s.sock'
    """

    def __init__(self, sources: List[SocketSource]):
        self.sources = list(sources)

    @classmethod
    def default(
        cls,
        socket_path: Optional[str] = None,
        store: Optional[WindowMetadataStore] = None
    ) -> "SocketLocator":
        """Build the default source chain.

        Args:
            socket_path: Configured socket path (tried after the per-window override)
            store: Metadata store for per-window overrides (default: process-wide store)
        """
        return cls([
            window_override_source(store),
            fixed_source(socket_path),
            environment_source("SWAYSOCK"),
            sway_binary_source(),
            runtime_dir_source(),
        ])

    def resolve(self, handle: Optional[Any] = None) -> Optional[str]:
        """Return the first socket path any source yields, or None."""
        for source in self.sources:
            path = source(handle)
            if path:
                logger.debug(f"Resolved sway socket: {path}")
                return path
        logger.warning("No sway socket found")
        return None
