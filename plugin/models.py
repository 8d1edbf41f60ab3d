"""plugin.models

What a build step gets from its host.

Why this exists
---------------
A CI server hands every build step a build object (workspace, environment,
where the build's state lives) and a listener to write the console log to.
These two types are the explicit stand-ins for that contract:

- :class:`BuildContext` describes the running build
- :class:`BuildLog` is the console log and doubles as the invoker's line sink
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, TextIO

from tattletale_report.io import layout


@dataclass(frozen=True)
class BuildContext:
    """One build of one job.

    ``workspace`` is optional: a build can be scheduled on an agent whose
    workspace is gone, and steps must handle that explicitly.
    """

    job_dir: Path
    build_number: int
    workspace: Optional[Path] = None
    env: Dict[str, str] = field(default_factory=dict)
    job_name: Optional[str] = None

    @property
    def build_dir(self) -> Path:
        return layout.build_dir(self.job_dir, self.build_number)

    @property
    def display_name(self) -> str:
        return f"#{self.build_number}"


class BuildLog:
    """Console log for a build.

    Writes to *stream* (stdout by default) and, when *log_path* is given, tees
    every line into that file as well. Instances are callable so they can be
    passed directly as a line sink.
    """

    def __init__(self, stream: Optional[TextIO] = None, *, log_path: Optional[Path] = None) -> None:
        self.stream = stream if stream is not None else sys.stdout
        self.log_path = Path(log_path) if log_path else None
        self._file: Optional[TextIO] = None
        if self.log_path is not None:
            self.log_path.parent.mkdir(parents=True, exist_ok=True)
            self._file = self.log_path.open("a", encoding="utf-8")

    def println(self, line: str = "") -> None:
        self.stream.write(f"{line}\n")
        self.stream.flush()
        if self._file is not None:
            self._file.write(f"{line}\n")
            self._file.flush()

    def error(self, message: str) -> None:
        self.println(f"ERROR: {message}")

    __call__ = println

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> "BuildLog":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
