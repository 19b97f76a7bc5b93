# Data models for sway IPC responses

from .ipc import Collector, Discard, IPCResult, ResultSink, SendOutcome, Transform
from .tree import NodeType, TreeNode

__all__ = [
    "Collector",
    "Discard",
    "IPCResult",
    "ResultSink",
    "SendOutcome",
    "Transform",
    "NodeType",
    "TreeNode",
]
