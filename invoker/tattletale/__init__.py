"""invoker/tattletale

Tattletale invocation: command construction + streaming execution.
"""

from __future__ import annotations

from .runner import (
    DEFAULT_RUNTIME,
    JAVA_FALLBACKS,
    Invoker,
    Sink,
    build_command,
    join_workspace_path,
    resolve_tool_path,
    run_tattletale,
)

__all__ = [
    "DEFAULT_RUNTIME",
    "JAVA_FALLBACKS",
    "Invoker",
    "Sink",
    "build_command",
    "join_workspace_path",
    "resolve_tool_path",
    "run_tattletale",
]
