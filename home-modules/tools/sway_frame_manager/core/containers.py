"""Container commands addressed by sway container id."""

import logging
from typing import Optional

from .ipc_client import ErrorHandler, IPCClient


logger = logging.getLogger('swayframe.containers')


def con_id_command(container_id: int, action: str) -> str:
    """Build a command scoped to one container.

    Examples:
        >>> con_id_command(12, "focus")
        '[con_id=12] focus'
    """
    return f"[con_id={int(container_id)}] {action}"


class ContainerController:
    """Focus or kill sway containers by id."""

    def __init__(self, client: Optional[IPCClient] = None):
        self.client = client or IPCClient()

    def focus(self, container_id: int, noerror: ErrorHandler = None) -> None:
        """Focus container. Errors from the client propagate unchanged."""
        logger.debug(f"Focusing container {container_id}")
        self.client.query(con_id_command(container_id, "focus"), noerror=noerror)

    def kill(self, container_id: int, noerror: ErrorHandler = None) -> None:
        """Close container (sway asks the client to close the window)."""
        logger.debug(f"Killing container {container_id}")
        self.client.query(con_id_command(container_id, "kill"), noerror=noerror)
