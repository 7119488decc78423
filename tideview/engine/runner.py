"""
Tide engine runner.

Runs the external ``tide`` program and classifies its output. A run is
successful only when the engine exits with status 0 *and* writes at
least one byte to standard output; a clean exit with no output is how
the engine reports a station name it does not know.
"""

from __future__ import annotations

import subprocess
import tempfile
from dataclasses import dataclass, field
from enum import Enum
from typing import IO

from tideview.core.config import EngineConfig
from tideview.core.exceptions import ProcessFailure, StationNotFound
from tideview.engine.environment import EngineEnvironment
from tideview.engine.modes import DisplayMode, OutputKind
from tideview.utils.logging import get_logger


logger = get_logger(__name__)


class FailureKind(str, Enum):
    """Why an engine run did not produce content."""

    STATION_NOT_FOUND = "station_not_found"
    PROCESS_FAILURE = "process_failure"


@dataclass
class RenderRequest:
    """One render of a station in a display mode.

    ``begin`` is the start time already expressed in the station's local
    civil time, in ``YYYY-MM-DD HH:MM`` form.
    """

    mode: DisplayMode
    begin: str
    output_kind: OutputKind = OutputKind.TEXT
    text_width: int = 79
    graph_width: int = 960
    station: str | None = None

    def to_args(self) -> list[str]:
        """Engine arguments for this request."""
        args = [
            self.output_kind.flag,
            "-m", self.mode.code,
            "-tw", str(self.text_width),
            "-gw", str(self.graph_width),
            "-b", self.begin,
        ]
        if self.station:
            args.extend(["-l", self.station])
        return args


@dataclass
class RenderResult:
    """Result from one engine run.

    On failure ``content`` holds the human-readable failure description
    (the same text as ``error_message``) so it can be shown in place of
    the expected output.
    """

    success: bool
    output_kind: OutputKind
    content: str | bytes
    command: list[str] = field(default_factory=list)
    return_code: int | None = None
    error_kind: FailureKind | None = None
    error_message: str | None = None
    station: str | None = None

    @property
    def text(self) -> str:
        """Content as text; image bytes are not decoded."""
        if isinstance(self.content, bytes):
            raise TypeError("Image output has no text form")
        return self.content

    def raise_for_status(self) -> RenderResult:
        """Raise the matching exception if the run failed.

        Returns:
            self, for chaining

        Raises:
            StationNotFound: Clean exit with empty output
            ProcessFailure: Non-zero exit, timeout or start failure
        """
        if self.success:
            return self
        if self.error_kind is FailureKind.STATION_NOT_FOUND:
            raise StationNotFound(self.station, self.error_message)
        raise ProcessFailure(
            " ".join(self.command[:1]) or "tide",
            self.error_message or "unknown error",
            self.return_code,
        )


def describe_exit(program: str, return_code: int) -> str:
    """Readable description of a process exit status."""
    if return_code < 0:
        return f"{program} killed by signal {-return_code}"
    if return_code == 0:
        return f"{program} finished with no output"
    return f"{program} exited with status {return_code}"


class EngineRunner:
    """Runs the tide engine and classifies its output.

    Usage:
        runner = EngineRunner(EngineEnvironment())

        result = runner.invoke(RenderRequest(
            mode=DisplayMode.PLAIN_TIMES,
            begin="2024-06-01 00:00",
            station="Botany Bay, Australia",
        ))
        if result.success:
            print(result.text)
    """

    def __init__(
        self,
        environment: EngineEnvironment | None = None,
        timeout: float | None = None,
    ):
        """Initialize engine runner.

        Args:
            environment: Engine environment (default: ``tide`` with C locale)
            timeout: Seconds to wait for the engine; None waits indefinitely
        """
        self.env = environment or EngineEnvironment()
        self.timeout = timeout
        self._env_vars: dict[str, str] | None = None

    @classmethod
    def from_config(cls, config: EngineConfig) -> EngineRunner:
        """Create runner from engine configuration."""
        return cls(EngineEnvironment.from_config(config), timeout=config.timeout)

    def _get_env(self) -> dict[str, str]:
        """Get environment variables for engine execution."""
        if self._env_vars is None:
            self._env_vars = self.env.setup()
        return self._env_vars

    def invoke(self, request: RenderRequest) -> RenderResult:
        """Render a station.

        Args:
            request: What to render

        Returns:
            RenderResult; failures are returned, not raised
        """
        return self.run(
            request.to_args(),
            output_kind=request.output_kind,
            station=request.station,
        )

    def list_locations(self, width: int = 110) -> RenderResult:
        """Fetch the station directory listing.

        Args:
            width: Text width hint, wide enough that no name wraps
        """
        return self.run(["-tw", str(width), "-ml"])

    def about(self, station: str) -> RenderResult:
        """Fetch the "about station" text, stderr merged into stdout."""
        return self.run(["-ma", "-l", station], station=station, merge_stderr=True)

    def run(
        self,
        args: list[str],
        output_kind: OutputKind = OutputKind.TEXT,
        station: str | None = None,
        merge_stderr: bool = False,
    ) -> RenderResult:
        """Run the engine with the given arguments.

        Standard error goes to a temporary file which is closed (and so
        removed) however this method exits.

        Args:
            args: Engine arguments (binary excluded)
            output_kind: TEXT output is decoded, IMAGE output is kept as bytes
            station: Station the run is for, carried into the result
            merge_stderr: Send stderr into stdout instead of capturing it

        Returns:
            RenderResult
        """
        cmd = self.env.command(args)

        logger.debug("Running tide engine", command=cmd)

        with tempfile.TemporaryFile(prefix="tideview-stderr-") as err_file:
            try:
                proc = subprocess.run(
                    self.env.argv(args),
                    env=self._get_env(),
                    stdin=subprocess.DEVNULL,
                    stdout=subprocess.PIPE,
                    stderr=subprocess.STDOUT if merge_stderr else err_file,
                    timeout=self.timeout,
                    check=False,
                )
            except subprocess.TimeoutExpired:
                return self._failure(
                    cmd, output_kind, station, err_file,
                    detail=f"{self.env.binary} timed out after {self.timeout} seconds",
                )
            except OSError as e:
                return self._failure(
                    cmd, output_kind, station, err_file,
                    detail=f"{self.env.binary} could not be started: {e}",
                )

            stdout = proc.stdout or b""

            if proc.returncode == 0 and stdout:
                content: str | bytes = (
                    stdout if output_kind is OutputKind.IMAGE else self.env.decode(stdout)
                )
                return RenderResult(
                    success=True,
                    output_kind=output_kind,
                    content=content,
                    command=cmd,
                    return_code=0,
                    station=station,
                )

            if proc.returncode != 0:
                logger.warning(
                    "Tide engine returned non-zero",
                    return_code=proc.returncode,
                    station=station,
                )
            else:
                logger.info("Tide engine produced no output", station=station)

            return self._failure(
                cmd, output_kind, station, err_file,
                detail=describe_exit(self.env.binary, proc.returncode),
                return_code=proc.returncode,
                merged_output=stdout if merge_stderr else None,
            )

    def _failure(
        self,
        cmd: list[str],
        output_kind: OutputKind,
        station: str | None,
        err_file: IO[bytes],
        detail: str,
        return_code: int | None = None,
        merged_output: bytes | None = None,
    ) -> RenderResult:
        """Build a failed result from captured stderr and an exit/start description."""
        err_file.seek(0)
        stderr_text = self.env.decode(merged_output if merged_output else err_file.read())

        parts = [stderr_text.rstrip()] if stderr_text.strip() else []
        parts.append(detail)
        message = "\n".join(parts)

        kind = (
            FailureKind.STATION_NOT_FOUND
            if return_code == 0
            else FailureKind.PROCESS_FAILURE
        )

        return RenderResult(
            success=False,
            output_kind=output_kind,
            content=message,
            command=cmd,
            return_code=return_code,
            error_kind=kind,
            error_message=message,
            station=station,
        )
