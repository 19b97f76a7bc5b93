"""sway frame manager - correlate sway containers with client windows.

This package provides:
- A swaymsg-based IPC client with per-sub-command error reporting
- Content-container extraction from the sway tree
- Correlation of sway containers with client window handles
- A lifecycle for windows dedicated to a single piece of content
- The `swayframe` CLI for inspecting the tree
"""

__version__ = "0.1.0"
__author__ = "sway-frame-manager contributors"
__license__ = "MIT"

__all__ = ["__version__", "__author__", "__license__"]
