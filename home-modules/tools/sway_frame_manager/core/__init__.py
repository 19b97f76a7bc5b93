"""Core sway IPC, tree, correlation and lifecycle logic."""

from .config import SwayFrameConfig, load_config
from .containers import ContainerController
from .correlator import CorrelationPair, Correlator
from .frames import SwayFrames
from .ipc_client import IPCClient, NoErrorMode
from .lifecycle import DedicatedWindowLifecycle, NotificationHub
from .metadata import WindowMetadataStore, get_store
from .socket_locator import SocketLocator
from .tree import TreeFetcher, list_windows

__all__ = [
    "SwayFrameConfig",
    "load_config",
    "ContainerController",
    "CorrelationPair",
    "Correlator",
    "SwayFrames",
    "IPCClient",
    "NoErrorMode",
    "DedicatedWindowLifecycle",
    "NotificationHub",
    "WindowMetadataStore",
    "get_store",
    "SocketLocator",
    "TreeFetcher",
    "list_windows",
]
