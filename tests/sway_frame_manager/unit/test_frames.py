"""Unit tests for the SwayFrames facade and the container controller."""

from unittest.mock import MagicMock

import pytest

from sway_frame_manager.core.config import SwayFrameConfig
from sway_frame_manager.core.containers import ContainerController, con_id_command
from sway_frame_manager.core.frames import SwayFrames
from sway_frame_manager.core.ipc_client import NoErrorMode
from sway_frame_manager.core.lifecycle import Destroyed
from sway_frame_manager.errors import CommandError


SOCKET = "/run/user/1000/sway-ipc.1000.1234.sock"


@pytest.fixture
def handles(frame_factory):
    return [frame_factory("main", "4194311"), frame_factory("help", "4194400")]


@pytest.fixture
def frames(handles, store):
    config = SwayFrameConfig(swaymsg_path="/usr/bin/swaymsg", socket_path=SOCKET)
    return SwayFrames(lambda: handles, config=config, store=store)


class TestContainerController:
    """Test container commands."""

    def test_con_id_command(self):
        assert con_id_command(42, "focus") == "[con_id=42] focus"

    def test_focus(self, client, swaymsg):
        swaymsg.respond("[con_id=10] focus", [{"success": True}])

        ContainerController(client).focus(10)

        assert swaymsg.calls[0]["args"][-1] == "[con_id=10] focus"

    def test_focus_error_propagates(self, client, swaymsg):
        swaymsg.respond("[con_id=999] focus", [{"success": False, "error": "No matching node."}],
                        returncode=2)

        with pytest.raises(CommandError) as exc_info:
            ContainerController(client).focus(999)

        assert "No matching node." in exc_info.value.message

    def test_focus_noerror(self, client, swaymsg):
        swaymsg.respond("[con_id=999] focus", [{"success": False, "error": "No matching node."}],
                        returncode=2)

        ContainerController(client).focus(999, noerror=NoErrorMode.IGNORE)

    def test_kill(self, client, swaymsg):
        swaymsg.respond("[con_id=11] kill", [{"success": True}])

        ContainerController(client).kill(11)

        assert swaymsg.calls[0]["args"][-1] == "[con_id=11] kill"


class TestSwayFrames:
    """Test the facade end to end against a fake swaymsg."""

    def test_list_pairs_fetches_fresh_tree(self, frames, swaymsg, sample_tree_data):
        swaymsg.respond("get_tree", sample_tree_data)

        pairs = frames.list_pairs()
        frames.list_pairs()

        assert [(p.handle.name, p.container_id) for p in pairs] == [("main", 10), ("help", 11)]
        assert len(swaymsg.calls) == 2

    def test_uses_configured_socket(self, frames, swaymsg, sample_tree_data):
        swaymsg.respond("get_tree", sample_tree_data)

        frames.tree()

        assert swaymsg.calls[0]["env"]["SWAYSOCK"] == SOCKET

    def test_explicit_tree_skips_fetch(self, frames, swaymsg, sample_tree):
        assert [n.id for n in frames.list_windows(sample_tree)] == [10, 11, 21, 22]
        assert frames.find_container_for_handle(frames.all_handles()[1], sample_tree) == 11
        assert swaymsg.calls == []

    def test_focused_handle(self, frames, sample_tree, handles):
        assert frames.focused_handle(sample_tree) is handles[0]

    def test_find_handle_for_container(self, frames, sample_tree, handles):
        assert frames.find_handle_for_container(sample_tree.nodes[0].nodes[0].nodes[1]) is handles[1]

    def test_focus_handle(self, frames, swaymsg, sample_tree, handles):
        swaymsg.respond("[con_id=11] focus", [{"success": True}])

        assert frames.focus_handle(handles[1], sample_tree) is True
        assert swaymsg.calls[0]["args"][-1] == "[con_id=11] focus"

    def test_focus_unknown_handle(self, frames, swaymsg, sample_tree, frame_factory):
        assert frames.focus_handle(frame_factory("gone", "1"), sample_tree) is False
        assert swaymsg.calls == []

    def test_destroy_unknown_handle(self, frames, swaymsg, sample_tree_data, frame_factory):
        swaymsg.respond("get_tree", sample_tree_data)

        with pytest.raises(LookupError):
            frames.destroy_handle(frame_factory("gone", "1"))

    def test_closing_action_kills_dedicated_container(self, frames, swaymsg, sample_tree_data, handles):
        swaymsg.respond("get_tree", sample_tree_data)
        swaymsg.respond("[con_id=11] kill", [{"success": True}])
        popup = handles[1]

        frames.lifecycle.dedicate(popup, "*Help*")
        state = frames.lifecycle.notify(popup, ["*Messages*"], action="quit-window")

        assert state == Destroyed()
        assert [c["args"][-1] for c in swaymsg.calls] == ["get_tree", "[con_id=11] kill"]
        assert popup not in frames.store

    def test_repurposed_window_is_not_killed(self, frames, swaymsg, handles):
        popup = handles[1]
        frames.lifecycle.dedicate(popup, "*Help*")

        frames.lifecycle.notify(popup, ["*Help*", "*scratch*"])
        frames.lifecycle.notify(popup, ["*Help*"], action="quit-window")

        assert swaymsg.calls == []

    def test_custom_native_id(self, store, sample_tree):
        handles = [{"outer-window-id": "4194311"}]
        frames = SwayFrames(
            lambda: handles,
            config=SwayFrameConfig(socket_path=SOCKET),
            native_id=lambda h: h["outer-window-id"],
            store=store,
        )

        assert frames.find_container_for_handle(handles[0], sample_tree) == 10

    def test_lifecycle_uses_configured_closing_actions(self, store, handles):
        frames = SwayFrames(
            lambda: handles,
            config=SwayFrameConfig(socket_path=SOCKET, closing_actions=["delete-frame"]),
            store=store,
        )
        frames.destroy_handle = MagicMock()
        frames.lifecycle.destroyer = frames.destroy_handle
        frames.lifecycle.dedicate(handles[0], "*Help*")

        frames.lifecycle.notify(handles[0], ["*Help*"], action="delete-frame")

        frames.destroy_handle.assert_called_once_with(handles[0])

    def test_focus_handle_uses_window_socket(self, frames, store, swaymsg, sample_tree_data, handles):
        override = "/run/user/1000/other.sock"
        store.set_socket_path(handles[1], override)
        swaymsg.respond("get_tree", sample_tree_data)
        swaymsg.respond("[con_id=11] focus", [{"success": True}])

        assert frames.focus_handle(handles[1]) is True
        assert [c["env"]["SWAYSOCK"] for c in swaymsg.calls] == [override, override]

    def test_destroy_handle_uses_window_socket(self, frames, store, swaymsg, sample_tree_data, handles):
        override = "/run/user/1000/other.sock"
        store.set_socket_path(handles[1], override)
        swaymsg.respond("get_tree", sample_tree_data)
        swaymsg.respond("[con_id=11] kill", [{"success": True}])

        frames.destroy_handle(handles[1])

        assert [c["args"][-1] for c in swaymsg.calls] == ["get_tree", "[con_id=11] kill"]
        assert all(c["env"]["SWAYSOCK"] == override for c in swaymsg.calls)

    def test_handles_without_override_use_configured_socket(self, frames, store, swaymsg, sample_tree_data, handles):
        store.set_socket_path(handles[1], "/run/user/1000/other.sock")
        swaymsg.respond("get_tree", sample_tree_data)
        swaymsg.respond("[con_id=10] focus", [{"success": True}])

        frames.focus_handle(handles[0])

        assert all(c["env"]["SWAYSOCK"] == SOCKET for c in swaymsg.calls)
