"""tattletale_report.domain.invocation

Request/result types for one Tattletale invocation.

A request is four strings: the tool location, the workspace to run in, and
the workspace-relative input and output directories. A result records how the
run ended. There are two disjoint shapes:

* the process ran to completion -> ``exit_code`` is set, ``error_kind`` is None
* the process could not be run or finished abnormally (launch failure, broken
  output stream, interruption) -> ``error_kind`` is set, ``exit_code`` is None

``NonZeroExit`` is not an :class:`ErrorKind`: the tool ran and reported its
own failure through its exit status, so the exit code carries that
information.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class ErrorKind(str, Enum):
    LAUNCH_FAILURE = "launch_failure"
    IO_FAILURE = "io_failure"
    INTERRUPTED = "interrupted"


class RunState(str, Enum):
    """Lifecycle of one invocation: NOT_STARTED -> RUNNING -> SUCCEEDED | FAILED."""

    NOT_STARTED = "not_started"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class InvocationRequest:
    tool_path: str
    working_directory: str
    input_subdir: str
    output_subdir: str

    def __post_init__(self) -> None:
        for name in ("tool_path", "working_directory", "input_subdir", "output_subdir"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value:
                raise ValueError(f"InvocationRequest.{name} must be a non-empty string (got {value!r})")

    def to_dict(self) -> Dict[str, str]:
        return {
            "tool_path": self.tool_path,
            "working_directory": self.working_directory,
            "input_subdir": self.input_subdir,
            "output_subdir": self.output_subdir,
        }


@dataclass(frozen=True)
class InvocationResult:
    succeeded: bool
    exit_code: Optional[int] = None
    error_kind: Optional[ErrorKind] = None
    message: Optional[str] = None
    command: Tuple[str, ...] = field(default_factory=tuple)
    elapsed_seconds: float = 0.0

    def __post_init__(self) -> None:
        if (self.exit_code is None) == (self.error_kind is None):
            raise ValueError("InvocationResult needs exactly one of exit_code / error_kind")
        if self.succeeded and self.exit_code != 0:
            raise ValueError("A succeeded InvocationResult must carry exit_code=0")

    # -------------------------
    # Constructors
    # -------------------------

    @classmethod
    def completed(
        cls,
        exit_code: int,
        *,
        command: Tuple[str, ...] = (),
        elapsed_seconds: float = 0.0,
    ) -> "InvocationResult":
        """Result of a process that ran to completion."""
        return cls(
            succeeded=(exit_code == 0),
            exit_code=int(exit_code),
            command=tuple(command),
            elapsed_seconds=elapsed_seconds,
        )

    @classmethod
    def failed(
        cls,
        error_kind: ErrorKind,
        message: str,
        *,
        command: Tuple[str, ...] = (),
        elapsed_seconds: float = 0.0,
    ) -> "InvocationResult":
        """Result of a run that never produced an exit code."""
        return cls(
            succeeded=False,
            error_kind=error_kind,
            message=message,
            command=tuple(command),
            elapsed_seconds=elapsed_seconds,
        )

    # -------------------------
    # Views
    # -------------------------

    @property
    def state(self) -> RunState:
        return RunState.SUCCEEDED if self.succeeded else RunState.FAILED

    @property
    def outcome(self) -> str:
        """One of: succeeded, non_zero_exit, launch_failure, io_failure, interrupted."""
        if self.error_kind is not None:
            return self.error_kind.value
        return "succeeded" if self.succeeded else "non_zero_exit"

    @property
    def command_str(self) -> str:
        return " ".join(self.command)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "succeeded": self.succeeded,
            "outcome": self.outcome,
            "exit_code": self.exit_code,
            "error_kind": self.error_kind.value if self.error_kind else None,
            "message": self.message,
            "command": list(self.command),
            "elapsed_seconds": self.elapsed_seconds,
        }
