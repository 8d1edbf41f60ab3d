"""plugin.builder

The "Invoke Tattletale" build step.

  log configuration -> resolve workspace -> run the jar -> report the outcome

The step itself is thin: everything about launching and streaming lives in
:mod:`invoker.tattletale`. This module owns the build-log narrative and the
mapping from build state (workspace, environment, global config) to an
:class:`~tattletale_report.domain.InvocationRequest`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from invoker.tattletale import Invoker
from invoker.tattletale.runner import LOG_PREFIX
from tattletale_report.domain import ErrorKind, InvocationRequest, InvocationResult

from plugin.config import TattletaleConfig
from plugin.models import BuildContext, BuildLog
from plugin.validation import check_input_directory, check_output_directory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TattletaleBuilder:
    """Per-job settings: directories relative to the workspace."""

    input_directory: str
    output_directory: str

    def validate(self) -> None:
        for res in (check_input_directory(self.input_directory), check_output_directory(self.output_directory)):
            if not res.ok:
                raise ValueError(res.message)

    def log_configuration(self, config: TattletaleConfig, log: BuildLog) -> None:
        log.println(f"Input directory: {self.input_directory}")
        log.println(f"Output directory: {self.output_directory}")
        if config.override_config:
            log.println("Default global config overriden.")
        log.println(f"Tattletale jar location: \n{config.jar_location}")
        log.println(f"Javassist jar location: \n{config.javassist_jar_location}")
        log.println(f"Tattletale properties location: \n{config.properties_location}")
        log.println()

    def perform(
        self,
        build: BuildContext,
        config: TattletaleConfig,
        log: BuildLog,
        *,
        invoker: Optional[Invoker] = None,
    ) -> InvocationResult:
        self.log_configuration(config, log)
        log.println(f"{LOG_PREFIX} Starting analysis.")

        if build.workspace is None:
            message = "Workspace missing."
            log.error(f"{LOG_PREFIX} {message}")
            return InvocationResult.failed(ErrorKind.LAUNCH_FAILURE, message)

        workspace_path = str(build.workspace.resolve())
        log.println(f"{LOG_PREFIX} Workspace path: {workspace_path}")

        if not config.jar_location:
            message = "Tattletale jar location is not configured."
            log.error(f"{LOG_PREFIX} {message}")
            return InvocationResult.failed(ErrorKind.LAUNCH_FAILURE, message)

        request = InvocationRequest(
            tool_path=config.jar_location,
            working_directory=workspace_path,
            input_subdir=self.input_directory,
            output_subdir=self.output_directory,
        )
        if invoker is None:
            invoker = Invoker(runtime=config.runtime, env=build.env, timeout_seconds=config.timeout_seconds)

        log.println(f"{LOG_PREFIX} Running $ {' '.join(invoker.command_for(request))}")
        result = invoker.run(request, log)

        if result.succeeded:
            log.println(f"{LOG_PREFIX} Finished analysis.")
        elif result.exit_code is not None:
            log.error(f"{LOG_PREFIX} Tattletale exited with code {result.exit_code}.")

        logger.info("build %s: tattletale %s", build.display_name, result.outcome)
        return result
