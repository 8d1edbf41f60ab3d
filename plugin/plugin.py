"""plugin.plugin

A single, high-level object for this repo's capabilities.

Why this exists
---------------
The build step, the archiver and the report actions live in separate modules.
That separation is good internally, but callers (CLI, scripts, CI glue)
should not have to wire a build number, a build log, two steps and a build
record together themselves. :class:`TattletalePlugin` is that front door:

- ``run_step(...)``: run the Tattletale builder step for a build
- ``publish(...)``: archive the report of a build
- ``build(...)``:   allocate a build, run + publish, persist log and record
- ``project_action(...)`` / ``build_action(...)``: resolve report links
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Mapping, Optional, TextIO

from invoker.tattletale import Invoker
from tattletale_report.domain import InvocationResult
from tattletale_report.io import layout

from plugin.actions import BuildReportAction, ProjectReportAction, has_build_action
from plugin.archiver import ArchiveResult, ReportArchiver
from plugin.builder import TattletaleBuilder
from plugin.config import TattletaleConfig
from plugin.models import BuildContext, BuildLog

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BuildOutcome:
    build: BuildContext
    result: str
    invocation: InvocationResult
    archive: Optional[ArchiveResult] = None

    @property
    def succeeded(self) -> bool:
        return self.result == layout.RESULT_SUCCESS


class TattletalePlugin:
    """High-level facade over the build steps.

    Prefer building this via :func:`plugin.wiring.build_plugin` rather than
    importing the step modules directly.
    """

    def __init__(
        self,
        config: TattletaleConfig,
        *,
        invoker_factory: Optional[Callable[[TattletaleConfig, Mapping[str, str]], Invoker]] = None,
    ) -> None:
        self.config = config
        self._invoker_factory = invoker_factory or _default_invoker

    def run_step(self, builder: TattletaleBuilder, build: BuildContext, log: BuildLog) -> InvocationResult:
        invoker = self._invoker_factory(self.config, build.env)
        return builder.perform(build, self.config, log, invoker=invoker)

    def publish(self, archiver: ReportArchiver, build: BuildContext, log: BuildLog) -> ArchiveResult:
        return archiver.perform(build, log)

    def build(
        self,
        builder: TattletaleBuilder,
        *,
        job_dir: Path,
        workspace: Optional[Path],
        archiver: Optional[ReportArchiver] = None,
        env: Optional[Mapping[str, str]] = None,
        job_name: Optional[str] = None,
        stream: Optional[TextIO] = None,
    ) -> BuildOutcome:
        """Run one full build: builder step, then (on success) the archiver.

        The build log is tee'd into ``builds/<n>/log`` and the final result is
        written to ``builds/<n>/build.json``.
        """
        job_dir = Path(job_dir).resolve()
        number = layout.next_build_number(job_dir)
        build_env: Dict[str, str] = dict(os.environ if env is None else env)
        build_env.setdefault("BUILD_NUMBER", str(number))
        if workspace is not None:
            build_env.setdefault("WORKSPACE", str(Path(workspace).resolve()))

        build = BuildContext(
            job_dir=job_dir,
            build_number=number,
            workspace=Path(workspace) if workspace is not None else None,
            env=build_env,
            job_name=job_name,
        )
        build.build_dir.mkdir(parents=True, exist_ok=True)

        archive: Optional[ArchiveResult] = None
        with BuildLog(stream, log_path=layout.build_log_path(build.build_dir)) as log:
            invocation = self.run_step(builder, build, log)
            if invocation.succeeded and archiver is not None:
                archive = self.publish(archiver, build, log)

            ok = invocation.succeeded and (archive is None or archive.succeeded)
            result = layout.RESULT_SUCCESS if ok else layout.RESULT_FAILURE
            log.println(f"Finished: {result}")

        layout.write_build_record(build.build_dir, number=number, result=result)
        logger.info("build %s of %s: %s", build.display_name, job_dir, result)
        return BuildOutcome(build=build, result=result, invocation=invocation, archive=archive)

    def project_action(self, job_dir: Path, *, job_name: Optional[str] = None) -> ProjectReportAction:
        return ProjectReportAction(job_dir, project_display_name=job_name)

    def build_action(self, job_dir: Path, number: int) -> Optional[BuildReportAction]:
        """The build page link, or None when that build did not archive its own report."""
        build_dir = layout.build_dir(job_dir, number)
        if not has_build_action(build_dir):
            return None
        return BuildReportAction(build_dir, build_display_name=f"#{number}")


def _default_invoker(config: TattletaleConfig, env: Mapping[str, str]) -> Invoker:
    return Invoker(runtime=config.runtime, env=env, timeout_seconds=config.timeout_seconds)
