"""Pytest configuration and shared fixtures for sway_frame_manager tests."""

import json
import logging
import subprocess
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional
from unittest.mock import patch

import pytest

from sway_frame_manager.core.config import SwayFrameConfig
from sway_frame_manager.core.ipc_client import IPCClient
from sway_frame_manager.core.metadata import WindowMetadataStore
from sway_frame_manager.core.socket_locator import SocketLocator, fixed_source
from sway_frame_manager.models.tree import TreeNode


SWAYMSG = "/usr/bin/swaymsg"
SOCKET = "/run/user/1000/sway-ipc.1000.1234.sock"


@dataclass(frozen=True)
class FakeFrame:
    """Stand-in for a client window handle."""
    name: str
    native_id: Optional[Any] = None


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers the CLI installs so they don't outlive CliRunner streams."""
    yield
    logger = logging.getLogger("swayframe")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def frame_factory() -> Callable[..., FakeFrame]:
    """Factory for fake client window handles."""
    return FakeFrame


@pytest.fixture
def sample_tree_data() -> Dict[str, Any]:
    """A realistic get_tree payload.

    Layout:
        root
          output eDP-1
            workspace 1: con 10 (window 4194311, focused) | con 11 (window 4194400)
            workspace 2: split con 20 -> con 21 (window 6291462, hidden) + con 22 (wayland)
          __i3 output
            __i3_scratch (empty workspace)
    """
    return {
        "id": 1,
        "type": "root",
        "name": "root",
        "nodes": [
            {
                "id": 2,
                "type": "output",
                "name": "eDP-1",
                "nodes": [
                    {
                        "id": 3,
                        "type": "workspace",
                        "name": "1",
                        "nodes": [
                            {"id": 10, "type": "con", "name": "emacs@host", "window": 4194311,
                             "visible": True, "focused": True, "pid": 100, "nodes": []},
                            {"id": 11, "type": "con", "name": "*Help*", "window": 4194400,
                             "visible": True, "focused": False, "pid": 100, "nodes": []},
                        ],
                    },
                    {
                        "id": 4,
                        "type": "workspace",
                        "name": "2",
                        "nodes": [
                            {
                                "id": 20,
                                "type": "con",
                                "name": None,
                                "nodes": [
                                    {"id": 21, "type": "con", "name": "*scratch*", "window": 6291462,
                                     "visible": False, "focused": False, "nodes": []},
                                    {"id": 22, "type": "con", "name": "foot", "app_id": "foot",
                                     "window": None, "visible": False, "focused": False, "nodes": []},
                                ],
                            },
                        ],
                    },
                ],
            },
            {
                "id": 5,
                "type": "output",
                "name": "__i3",
                "nodes": [
                    {"id": 6, "type": "workspace", "name": "__i3_scratch", "nodes": []},
                ],
            },
        ],
    }


@pytest.fixture
def sample_tree(sample_tree_data) -> TreeNode:
    return TreeNode.model_validate(sample_tree_data)


@pytest.fixture
def store() -> WindowMetadataStore:
    """Fresh metadata store (not the process-wide one)."""
    return WindowMetadataStore()


@pytest.fixture
def config() -> SwayFrameConfig:
    return SwayFrameConfig(swaymsg_path=SWAYMSG, command_timeout=5.0)


@pytest.fixture
def client(config) -> IPCClient:
    """IPCClient with a fixed socket and binary."""
    return IPCClient(config=config, locator=SocketLocator([fixed_source(SOCKET)]))


class FakeSwaymsg:
    """Records swaymsg invocations and replays canned responses.

    Responses are keyed by the last argv element (the command, or the -t
    message type for single-shot requests).
    """

    def __init__(self):
        self.calls: List[Dict[str, Any]] = []
        self.responses: Dict[str, subprocess.CompletedProcess] = {}

    def respond(self, key: str, payload: Any, returncode: int = 0, stderr: str = "") -> None:
        stdout = payload if isinstance(payload, str) else json.dumps(payload)
        self.responses[key] = subprocess.CompletedProcess([SWAYMSG, key], returncode, stdout, stderr)

    def __call__(self, args, capture_output=True, encoding=None, timeout=None, env=None):
        self.calls.append({"args": list(args), "env": env, "timeout": timeout, "encoding": encoding})
        key = args[-1]
        if key not in self.responses:
            raise AssertionError(f"Unexpected swaymsg call: {args}")
        return self.responses[key]


@pytest.fixture
def swaymsg():
    """Patch subprocess.run in the IPC client with a FakeSwaymsg."""
    fake = FakeSwaymsg()
    with patch("sway_frame_manager.core.ipc_client.subprocess.run", side_effect=fake):
        yield fake
