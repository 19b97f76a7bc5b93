"""
Error types for the sway frame manager.

Three families of failure are kept apart so callers can react to each:
- TransportError: swaymsg could not be reached or run at all
- ParseError: swaymsg answered, but not with the JSON we expected
- CommandError: sway ran the request and one or more sub-commands failed
"""

from enum import Enum
from typing import Any, Dict, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .models.ipc import IPCResult


class ErrorCode(Enum):
    """
    Error codes for sway frame manager failures.

    Ranges:
    - 1400-1499: Transport errors (socket, binary, process)
    - 1500-1599: Protocol errors (payload shape)
    - 1600-1699: Command errors
    - 1700-1799: Configuration errors
    """

    # Transport errors (1400-1499)
    SOCKET_UNRESOLVED = 1400
    EXECUTABLE_NOT_FOUND = 1401
    SPAWN_FAILED = 1402
    PROCESS_FAILED = 1403
    TIMEOUT = 1404

    # Protocol errors (1500-1599)
    PARSE_ERROR = 1500
    SHAPE_MISMATCH = 1501

    # Command errors (1600-1699)
    COMMAND_FAILED = 1600

    # Configuration errors (1700-1799)
    CONFIG_LOAD_FAILED = 1700
    CONFIG_INVALID = 1701


class SwayFrameError(Exception):
    """Base exception for sway frame manager errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        suggestion: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize error.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            suggestion: Suggested recovery action
            context: Additional context for debugging
        """
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.context = context or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert error to dictionary for JSON output.

        Returns:
            Error dictionary with code, message, suggestion, and context
        """
        result = {
            "code": self.code.value,
            "message": self.message
        }

        if self.suggestion:
            result["suggestion"] = self.suggestion

        if self.context:
            result["context"] = self.context

        return result


class TransportError(SwayFrameError):
    """swaymsg could not be located, spawned, or did not answer."""

    pass


class ErrorReport(SwayFrameError):
    """Application-level report about a request that swaymsg did answer."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        command: Optional[str] = None,
        results: Optional[List["IPCResult"]] = None,
        suggestion: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize error report.

        Args:
            code: Error code from ErrorCode enum
            message: Formatted report text
            command: The command string that produced the report
            results: Raw per-sub-command results, when they could be parsed
            suggestion: Suggested recovery action
            context: Additional context for debugging
        """
        self.command = command
        self.results = list(results or [])
        super().__init__(code, message, suggestion, context)

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        if self.command is not None:
            result["command"] = self.command
        if self.results:
            result["results"] = [r.model_dump() for r in self.results]
        return result


class ParseError(ErrorReport):
    """swaymsg output was not well-formed JSON of the expected shape."""

    def __init__(
        self,
        message: str,
        command: Optional[str] = None,
        payload: Optional[str] = None,
        shape_mismatch: bool = False
    ):
        """
        Initialize parse error.

        Args:
            message: Description of what failed to parse
            command: The command or request that produced the payload
            payload: Raw payload (truncated in context)
            shape_mismatch: True when the JSON was valid but had the wrong shape
        """
        context = {}
        if payload is not None:
            context["payload"] = payload[:200]

        super().__init__(
            ErrorCode.SHAPE_MISMATCH if shape_mismatch else ErrorCode.PARSE_ERROR,
            message,
            command=command,
            context=context
        )
        self.payload = payload


class CommandError(ErrorReport):
    """One or more sub-commands of a request returned success=false."""

    def __init__(self, message: str, command: str, results: List["IPCResult"]):
        super().__init__(
            ErrorCode.COMMAND_FAILED,
            message,
            command=command,
            results=results
        )

    @property
    def failures(self) -> List["IPCResult"]:
        """Results of the sub-commands that failed."""
        return [r for r in self.results if not r.success]


class ConfigurationError(SwayFrameError):
    """Configuration file could not be loaded or failed validation."""

    def __init__(self, message: str, file_path: Optional[str] = None, invalid: bool = False):
        context = {}
        if file_path:
            context["file_path"] = file_path

        super().__init__(
            ErrorCode.CONFIG_INVALID if invalid else ErrorCode.CONFIG_LOAD_FAILED,
            message,
            suggestion="Check the configuration file syntax and field values",
            context=context
        )
