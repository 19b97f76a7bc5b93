"""Sway IPC client built on the swaymsg binary.

Every call spawns one swaymsg process with SWAYSOCK injected into its
environment, waits for it to exit, and parses what it printed. Requests are
strictly sequential; there is no connection to keep open and nothing is
retried.

Command requests may batch several sub-commands separated by ';'. sway
answers with a JSON array holding one {success, error?, parse_error?} object
per sub-command, in request order.
"""

import json
import logging
import os
import shutil
import subprocess
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union

from pydantic import ValidationError

from ..errors import CommandError, ErrorCode, ParseError, TransportError
from ..models.ipc import Collector, Discard, IPCResult, ResultSink, SendOutcome, Transform
from .config import SwayFrameConfig
from .socket_locator import SocketLocator


logger = logging.getLogger('swayframe.ipc')

SWAYMSG = "swaymsg"

# swaymsg exits with 2 when sway reported a failed sub-command; the JSON
# response is still printed in that case
EXIT_OK = 0
EXIT_COMMAND_FAILED = 2


class NoErrorMode(str, Enum):
    """Built-in handlers for failed commands."""
    IGNORE = "ignore"
    LOG = "log"


# None raises, a NoErrorMode applies the built-in behavior, a callable
# receives the CommandError
ErrorHandler = Optional[Union[NoErrorMode, Callable[[CommandError], Any]]]


def parse_json(output: str, command: Optional[str] = None) -> Any:
    """Parse swaymsg output as JSON.

    Raises:
        ParseError: If output is not well-formed JSON
    """
    try:
        return json.loads(output)
    except (json.JSONDecodeError, TypeError) as e:
        raise ParseError(f"Malformed JSON from swaymsg: {e}", command=command, payload=output)


def parse_results(output: str, command: Optional[str] = None) -> List[IPCResult]:
    """Parse a command response into one IPCResult per sub-command.

    Raises:
        ParseError: If output is not JSON or not an array of result objects
    """
    data = parse_json(output, command)
    if not isinstance(data, list):
        raise ParseError(
            f"Expected a JSON array of results, got {type(data).__name__}",
            command=command,
            payload=output,
            shape_mismatch=True
        )

    try:
        return [IPCResult.model_validate(item) for item in data]
    except ValidationError as e:
        raise ParseError(
            f"Unexpected result shape: {e}",
            command=command,
            payload=output,
            shape_mismatch=True
        )


def format_error_report(command: str, results: List[IPCResult]) -> str:
    """Build the report text for the failed sub-commands of a request.

    Examples:
        >>> results = [IPCResult(success=True), IPCResult(success=False, error="boom")]
        >>> print(format_error_report("nop; bad", results))
        Sway error on `nop; bad`:
        boom
    """
    lines = [f"Sway error on `{command}`:"]
    for result in results:
        if result.success:
            continue
        marker = "[Parse error] " if result.parse_error else ""
        lines.append(f"{marker}{result.error or '(no error message)'}")
    return "\n".join(lines)


class IPCClient:
    """Synchronous sway IPC client.

    Examples:
        >>> client = IPCClient()
        >>> client.query("workspace 2")   # raises CommandError on failure
        >>> client.query("[con_id=1] focus", noerror=NoErrorMode.IGNORE)
    """

    def __init__(
        self,
        config: Optional[SwayFrameConfig] = None,
        locator: Optional[SocketLocator] = None,
        handle: Optional[Any] = None
    ):
        """Initialize client.

        Args:
            config: Configuration (default: built-in defaults)
            locator: Socket locator (default: SocketLocator.default())
            handle: Client window whose socket override applies to this client
        """
        self.config = config or SwayFrameConfig()
        self.locator = locator or SocketLocator.default(self.config.socket_path)
        self.handle = handle

    def for_window(self, handle: Any) -> "IPCClient":
        """Return a client that resolves the socket for a specific window."""
        return IPCClient(config=self.config, locator=self.locator, handle=handle)

    def _binary(self) -> str:
        if self.config.swaymsg_path:
            return self.config.swaymsg_path
        binary = shutil.which(SWAYMSG)
        if not binary:
            raise TransportError(
                ErrorCode.EXECUTABLE_NOT_FOUND,
                f"{SWAYMSG} not found in PATH",
                suggestion="Install sway or set swaymsg_path in the config file"
            )
        return binary

    def _environment(self) -> Dict[str, str]:
        socket_path = self.locator.resolve(self.handle)
        if not socket_path:
            raise TransportError(
                ErrorCode.SOCKET_UNRESOLVED,
                "Cannot find the sway IPC socket",
                suggestion="Run inside a sway session or set SWAYSOCK"
            )
        env = os.environ.copy()
        env["SWAYSOCK"] = socket_path
        return env

    def send(
        self,
        command: str,
        sink: Optional[ResultSink] = None,
        *,
        message_type: Optional[str] = None
    ) -> SendOutcome:
        """Run swaymsg once and hand its output to sink.

        Args:
            command: Command string (may be empty for message types like get_tree)
            sink: Collector, Transform or Discard (default: a fresh Collector)
            message_type: swaymsg -t message type; None sends a command

        Returns:
            SendOutcome with the exit status and the sink's value

        Raises:
            TransportError: If swaymsg cannot be found, spawned, or fails to answer
        """
        if sink is None:
            sink = Collector()

        args = [self._binary()]
        if message_type:
            args += ["-t", message_type]
        if command:
            args.append(command)

        env = self._environment()
        logger.debug(f"Subprocess call: {' '.join(args)}")

        try:
            result = subprocess.run(
                args,
                capture_output=True,
                encoding="utf-8",
                timeout=self.config.command_timeout,
                env=env,
            )
        except subprocess.TimeoutExpired:
            raise TransportError(
                ErrorCode.TIMEOUT,
                f"{SWAYMSG} did not answer within {self.config.command_timeout}s",
                context={"command": command}
            )
        except OSError as e:
            raise TransportError(
                ErrorCode.SPAWN_FAILED,
                f"Failed to run {args[0]}: {e}",
                context={"command": command}
            )

        logger.debug(f"  Return code: {result.returncode}")
        if result.stderr:
            logger.debug(f"  stderr: {result.stderr[:200]}")

        answered = result.returncode == EXIT_OK or (
            result.returncode == EXIT_COMMAND_FAILED and result.stdout.strip()
        )
        if not answered:
            raise TransportError(
                ErrorCode.PROCESS_FAILED,
                f"{SWAYMSG} exited with status {result.returncode}: "
                f"{result.stderr.strip() or 'no output'}",
                suggestion="Check that sway is running and the socket is reachable",
                context={"command": command, "returncode": result.returncode}
            )

        if isinstance(sink, Collector):
            sink.append(result.stdout)
            value = sink
        elif isinstance(sink, Transform):
            value = sink.apply(result.stdout)
        elif isinstance(sink, Discard):
            value = None
        else:
            raise TypeError(f"Unsupported result sink: {sink!r}")

        return SendOutcome(returncode=result.returncode, value=value, stderr=result.stderr)

    def execute(self, command: str) -> List[IPCResult]:
        """Run a command and return the parsed per-sub-command results."""
        outcome = self.send(command, Transform(lambda out: parse_results(out, command)))
        results = outcome.value
        succeeded = sum(1 for r in results if r.success)
        logger.debug(f"RUN_COMMAND completed: {succeeded}/{len(results)} succeeded")
        return results

    def query(self, command: str, noerror: ErrorHandler = None) -> None:
        """Run a command and fail if any sub-command failed.

        Args:
            command: One or more ';'-separated sway commands
            noerror: None to raise, NoErrorMode.IGNORE / NoErrorMode.LOG, or a
                callable receiving the CommandError

        Raises:
            CommandError: If a sub-command failed and noerror is None
            ParseError: If the response is not a JSON array of results
            TransportError: If swaymsg could not be run
        """
        results = self.execute(command)
        if all(r.success for r in results):
            return None

        error = CommandError(format_error_report(command, results), command, results)

        if noerror is None:
            raise error
        if noerror == NoErrorMode.IGNORE:
            logger.debug(f"Ignoring failed command: {command}")
        elif noerror == NoErrorMode.LOG:
            logger.warning(error.message)
        elif callable(noerror):
            noerror(error)
        else:
            raise TypeError(f"Unsupported noerror handler: {noerror!r}")
        return None

    def get_json(self, message_type: str) -> Any:
        """Send a single-shot request (e.g. get_tree) and return parsed JSON."""
        request = f"-t {message_type}"
        outcome = self.send("", Transform(lambda out: parse_json(out, request)), message_type=message_type)
        return outcome.value
