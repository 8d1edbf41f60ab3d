"""invoker/core_cmd.py

Command-execution helpers shared by tool invokers.

This module deliberately avoids tool-specific knowledge. It provides:

* :func:`which_or_raise` - resolve executables reliably across environments.
* :func:`stream_cmd` - run a subprocess (no shell=True) and hand every output
  line to a callback as it arrives.

Failures that prevent an exit code from existing are raised as
:class:`CommandError` subclasses so callers can classify them. Non-zero exit
codes are never raised; they are returned.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Mapping, Optional, Sequence

logger = logging.getLogger(__name__)


class CommandError(Exception):
    """Base class for failures that prevent a command from finishing normally."""

    def __init__(self, message: str, *, command_str: str = "", elapsed_seconds: float = 0.0) -> None:
        super().__init__(message)
        self.command_str = command_str
        self.elapsed_seconds = elapsed_seconds


class LaunchError(CommandError):
    """The process could not be started (missing binary/cwd, permissions)."""


class StreamReadError(CommandError):
    """Reading the process output failed mid-stream."""


class CommandInterrupted(CommandError):
    """The wait was interrupted (KeyboardInterrupt or timeout); the child was killed."""


@dataclass(frozen=True)
class StreamedCmd:
    exit_code: int
    elapsed_seconds: float
    command_str: str


def which_or_raise(bin_name: str, fallbacks: Optional[List[str]] = None) -> str:
    """Locate an executable and return its absolute path.

    Why this exists:
    - prevents a confusing launch failure deep inside a build when java is missing
    - avoids PATH surprises across CI agents / containers / sdkman installs
    """
    found = shutil.which(bin_name)
    if found:
        return found

    for candidate in fallbacks or []:
        p = Path(candidate)
        if p.exists() and os.access(str(p), os.X_OK):
            return str(p)

    raise FileNotFoundError(
        f"Executable '{bin_name}' not found on PATH.\n"
        f"Install it and ensure it's available to this Python process.\n"
        f"Tried fallbacks: {fallbacks or []}"
    )


def merged_env(env: Optional[Mapping[str, str]]) -> Optional[Dict[str, str]]:
    """Merge *env* onto the current process environment (None = inherit as-is)."""
    if env is None:
        return None
    env2 = os.environ.copy()
    env2.update({str(k): str(v) for k, v in env.items()})
    return env2


def _kill_and_reap(proc: subprocess.Popen) -> None:
    if proc.poll() is None:
        logger.debug("killing pid %s", proc.pid)
        proc.kill()
    proc.wait()


def stream_cmd(
    cmd: Sequence[str],
    *,
    on_line: Callable[[str], None],
    cwd: Optional[Path] = None,
    env: Optional[Mapping[str, str]] = None,
    timeout_seconds: int = 0,
) -> StreamedCmd:
    """Run a subprocess and stream its combined stdout/stderr (no ``shell=True``).

    Each output line is passed to *on_line* without its line terminator, in
    order, as soon as it is read. The call blocks until the process exits and
    its output is drained.

    Raises:
      LaunchError         the process could not be started
      StreamReadError     reading its output or forwarding a line failed
                          (OSError, or ValueError such as an encoding error)
      CommandInterrupted  KeyboardInterrupt or *timeout_seconds* elapsed

    The child is killed and reaped, and the output pipe closed, on every
    exit path.
    """
    argv = [str(c) for c in cmd]
    command_str = " ".join(argv)
    t0 = time.time()

    try:
        proc = subprocess.Popen(
            argv,
            cwd=str(cwd) if cwd else None,
            env=merged_env(env),
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            encoding="utf-8",
            errors="replace",
            bufsize=1,
        )
    except OSError as e:
        raise LaunchError(
            f"Cannot run program {argv[0]!r}: {e}",
            command_str=command_str,
            elapsed_seconds=time.time() - t0,
        ) from e

    logger.debug("started pid %s: %s", proc.pid, command_str)

    timed_out = threading.Event()
    timer: Optional[threading.Timer] = None
    if timeout_seconds and timeout_seconds > 0:

        def _expire() -> None:
            if proc.poll() is None:
                timed_out.set()
                proc.kill()

        timer = threading.Timer(timeout_seconds, _expire)
        timer.daemon = True
        timer.start()

    try:
        try:
            assert proc.stdout is not None
            for raw in proc.stdout:
                on_line(raw.rstrip("\r\n"))
            exit_code = proc.wait()
        except (OSError, ValueError) as e:
            raise StreamReadError(
                f"Error forwarding output of {argv[0]!r}: {e}",
                command_str=command_str,
                elapsed_seconds=time.time() - t0,
            ) from e
        except KeyboardInterrupt as e:
            raise CommandInterrupted(
                f"Interrupted while waiting for {argv[0]!r}",
                command_str=command_str,
                elapsed_seconds=time.time() - t0,
            ) from e
    finally:
        if timer is not None:
            timer.cancel()
        _kill_and_reap(proc)
        if proc.stdout is not None:
            proc.stdout.close()

    elapsed = time.time() - t0
    if timed_out.is_set():
        raise CommandInterrupted(
            f"Timed out after {timeout_seconds}s: {argv[0]!r} was killed",
            command_str=command_str,
            elapsed_seconds=elapsed,
        )

    logger.debug("pid %s exited with %s after %.2fs", proc.pid, exit_code, elapsed)
    return StreamedCmd(exit_code=exit_code, elapsed_seconds=elapsed, command_str=command_str)
