"""Entry point for the swayframe CLI."""

import sys

from sway_frame_manager.cli.commands import main


if __name__ == "__main__":
    sys.exit(main())
