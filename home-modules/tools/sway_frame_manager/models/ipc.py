"""IPC wire models: per-sub-command results and result sinks."""

from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class IPCResult(BaseModel):
    """Result of one sub-command in a RUN_COMMAND response.

    Examples:
        >>> IPCResult.model_validate({"success": False, "error": "No matching node"})
        IPCResult(success=False, error='No matching node', parse_error=False)
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    success: bool = Field(..., description="Whether sway executed the sub-command")
    error: Optional[str] = Field(None, description="Error text reported by sway")
    parse_error: bool = Field(False, description="True when sway could not parse the sub-command")


# Result sinks
#
# The caller decides up front what happens with swaymsg's stdout.


@dataclass
class Collector:
    """Append raw output to an accumulating buffer.

    A single Collector can be passed to several send() calls; each call
    appends its output.
    """

    chunks: List[str] = field(default_factory=list)

    def append(self, output: str) -> None:
        self.chunks.append(output)

    def getvalue(self) -> str:
        return "".join(self.chunks)

    def clear(self) -> None:
        self.chunks.clear()


@dataclass
class Transform:
    """Parse output into a typed result; nothing is kept after the call."""

    fn: Callable[[str], Any]

    def apply(self, output: str) -> Any:
        return self.fn(output)


@dataclass
class Discard:
    """Drop output."""

    pass


ResultSink = Union[Collector, Transform, Discard]


@dataclass
class SendOutcome:
    """Outcome of a single swaymsg invocation.

    Attributes:
        returncode: swaymsg exit status (0 = success, 2 = a sub-command failed)
        value: The Collector for Collector sinks, the transform result for
            Transform sinks, None for Discard
        stderr: Anything swaymsg wrote to stderr
    """

    returncode: int
    value: Any = None
    stderr: str = ""
