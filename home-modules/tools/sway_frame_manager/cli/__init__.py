"""Command-line interface for sway_frame_manager."""
