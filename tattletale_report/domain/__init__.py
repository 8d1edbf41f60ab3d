"""tattletale_report.domain

Domain objects that form the *contract* between the invoker and its callers.

Key idea
--------
The build step never inspects what Tattletale does. It only needs to know
which command was run and how that run ended (exit code or the kind of
failure that prevented an exit code from existing).
"""

from __future__ import annotations

from .invocation import (
    ErrorKind,
    InvocationRequest,
    InvocationResult,
    RunState,
)

__all__ = [
    "ErrorKind",
    "InvocationRequest",
    "InvocationResult",
    "RunState",
]
