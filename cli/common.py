from __future__ import annotations

import argparse
import os
from pathlib import Path
from typing import Optional

from invoker.core_cmd import which_or_raise
from invoker.tattletale import JAVA_FALLBACKS
from tattletale_report.domain import ErrorKind, InvocationResult
from tattletale_report.io import layout

from plugin.builder import TattletaleBuilder
from plugin.models import BuildContext
from plugin.plugin import TattletalePlugin

JOBS_DIRNAME = "jobs"


def resolve_workspace(args: argparse.Namespace) -> Path:
    ws = getattr(args, "workspace", None)
    return Path(ws).expanduser().resolve() if ws else Path.cwd().resolve()


def resolve_job_dir(args: argparse.Namespace, workspace: Path) -> Path:
    """--job-dir, else jobs/<workspace name> under the current directory."""
    if getattr(args, "job_dir", None):
        return Path(args.job_dir).expanduser().resolve()
    return (Path.cwd() / JOBS_DIRNAME / workspace.name).resolve()


def make_build_context(args: argparse.Namespace, *, number: Optional[int] = None) -> BuildContext:
    workspace = resolve_workspace(args)
    job_dir = resolve_job_dir(args, workspace)
    if number is None:
        number = args.build_number if args.build_number is not None else layout.next_build_number(job_dir)

    env = dict(os.environ)
    env.setdefault("WORKSPACE", str(workspace))
    env.setdefault("BUILD_NUMBER", str(number))
    return BuildContext(
        job_dir=job_dir,
        build_number=int(number),
        workspace=workspace if workspace.is_dir() else None,
        env=env,
        job_name=getattr(args, "job_name", None),
    )


def builder_from_args(args: argparse.Namespace) -> TattletaleBuilder:
    builder = TattletaleBuilder(
        input_directory=str(args.input_directory or ""),
        output_directory=str(args.output_directory or ""),
    )
    try:
        builder.validate()
    except ValueError as e:
        raise SystemExit(f"❌ {e}")
    return builder


def preflight(plugin: TattletalePlugin) -> None:
    """Fail fast (exit 127) when the jar is not configured or java cannot be found."""
    try:
        plugin.config.require_jar()
    except ValueError as e:
        raise SystemExit(f"❌ {e}")
    try:
        which_or_raise(plugin.config.java_bin, fallbacks=JAVA_FALLBACKS)
    except FileNotFoundError as e:
        print(f"❌ {e}")
        raise SystemExit(127)


def exit_code_for(result: InvocationResult) -> int:
    """Map an invocation result to a process exit code for the host."""
    if result.succeeded:
        return 0
    if result.error_kind is ErrorKind.LAUNCH_FAILURE:
        return 127
    if result.error_kind is ErrorKind.INTERRUPTED:
        return 130
    return 1
