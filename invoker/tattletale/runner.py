"""invoker/tattletale/runner.py

Tool-specific execution plumbing for Tattletale.

Tattletale is a standalone jar taking two positional arguments, the directory
to analyze and the directory to write its report into::

  java -jar tattletale.jar <workspace>/<input> <workspace>/<output>

The command is always built as an argument vector, so workspace or directory
names containing spaces or shell metacharacters reach the tool verbatim.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, List, Mapping, Optional, Sequence, Tuple

from invoker.core_cmd import (
    CommandInterrupted,
    LaunchError,
    StreamReadError,
    stream_cmd,
)
from tattletale_report.domain import ErrorKind, InvocationRequest, InvocationResult, RunState

logger = logging.getLogger(__name__)

Sink = Callable[[str], None]

DEFAULT_RUNTIME: Tuple[str, ...] = ("java", "-jar")
JAVA_FALLBACKS = ["/usr/bin/java", "/usr/local/bin/java", "/opt/homebrew/opt/openjdk/bin/java"]

LOG_PREFIX = "[Tattletale]"


def join_workspace_path(working_directory: str, subdir: str) -> str:
    """``working_directory + os.sep + subdir``, with no normalization."""
    return f"{working_directory}{os.sep}{subdir}"


def build_command(request: InvocationRequest, runtime: Sequence[str] = DEFAULT_RUNTIME) -> List[str]:
    return [
        *runtime,
        request.tool_path,
        join_workspace_path(request.working_directory, request.input_subdir),
        join_workspace_path(request.working_directory, request.output_subdir),
    ]


def resolve_tool_path(request: InvocationRequest) -> Path:
    """Where the child will look for the tool: relative paths are taken from
    the working directory it is started in, not from our own cwd."""
    p = Path(request.tool_path)
    return p if p.is_absolute() else Path(request.working_directory) / p


class Invoker:
    """Run Tattletale once per :meth:`run` call.

    Holds only configuration (runtime prefix, extra environment, timeout); no
    state is shared between calls, so one instance can be reused freely.
    """

    def __init__(
        self,
        *,
        runtime: Sequence[str] = DEFAULT_RUNTIME,
        env: Optional[Mapping[str, str]] = None,
        timeout_seconds: int = 0,
    ) -> None:
        self.runtime = tuple(runtime)
        self.env = dict(env) if env is not None else None
        self.timeout_seconds = int(timeout_seconds or 0)

    def command_for(self, request: InvocationRequest) -> List[str]:
        return build_command(request, self.runtime)

    def run(self, request: InvocationRequest, sink: Sink) -> InvocationResult:
        cmd = tuple(self.command_for(request))
        logger.debug("%s: %s", RunState.NOT_STARTED.value, " ".join(cmd))

        # With a runtime prefix the tool is just an argument, so the OS would
        # happily start java on a missing jar. Treat that as a launch failure.
        if self.runtime and not resolve_tool_path(request).is_file():
            return self._fail(
                sink,
                ErrorKind.LAUNCH_FAILURE,
                f"Unable to access jarfile {request.tool_path}",
                command=cmd,
            )

        logger.debug("%s: cwd=%s", RunState.RUNNING.value, request.working_directory)
        try:
            res = stream_cmd(
                cmd,
                on_line=sink,
                cwd=Path(request.working_directory),
                env=self.env,
                timeout_seconds=self.timeout_seconds,
            )
        except LaunchError as e:
            return self._fail(sink, ErrorKind.LAUNCH_FAILURE, str(e), command=cmd, elapsed=e.elapsed_seconds)
        except StreamReadError as e:
            return self._fail(sink, ErrorKind.IO_FAILURE, str(e), command=cmd, elapsed=e.elapsed_seconds)
        except CommandInterrupted as e:
            return self._fail(sink, ErrorKind.INTERRUPTED, str(e), command=cmd, elapsed=e.elapsed_seconds)

        result = InvocationResult.completed(res.exit_code, command=cmd, elapsed_seconds=res.elapsed_seconds)
        logger.debug("%s: exit_code=%s", result.state.value, res.exit_code)
        return result

    @staticmethod
    def _fail(
        sink: Sink,
        kind: ErrorKind,
        message: str,
        *,
        command: Tuple[str, ...],
        elapsed: float = 0.0,
    ) -> InvocationResult:
        if kind is ErrorKind.INTERRUPTED:
            header = f"{LOG_PREFIX} Error running tattletale - interrupted."
        else:
            header = f"{LOG_PREFIX} Error running tattletale."
        try:
            sink(header)
            sink(message)
        except (OSError, ValueError) as e:
            # A broken sink is the failure being reported; the result keeps the message.
            logger.warning("Could not write failure to build log: %s", e)
        logger.debug("%s: %s: %s", RunState.FAILED.value, kind.value, message)
        return InvocationResult.failed(kind, message, command=command, elapsed_seconds=elapsed)


def run_tattletale(
    *,
    tool_path: str,
    working_directory: str,
    input_subdir: str,
    output_subdir: str,
    sink: Sink,
    runtime: Sequence[str] = DEFAULT_RUNTIME,
    env: Optional[Mapping[str, str]] = None,
    timeout_seconds: int = 0,
) -> InvocationResult:
    """One-shot convenience wrapper around :class:`Invoker`."""
    request = InvocationRequest(
        tool_path=tool_path,
        working_directory=working_directory,
        input_subdir=input_subdir,
        output_subdir=output_subdir,
    )
    return Invoker(runtime=runtime, env=env, timeout_seconds=timeout_seconds).run(request, sink)
