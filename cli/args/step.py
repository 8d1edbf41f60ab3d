from __future__ import annotations

import argparse


def add_step_args(parser: argparse.ArgumentParser) -> None:
    """Register flags describing the build (workspace, job, build number) and the builder step."""

    parser.add_argument("--workspace", help="Workspace directory of the build (default: current directory).")
    parser.add_argument(
        "--job-dir",
        help="Job storage directory holding builds/ and the job-level report (default: jobs/<workspace name>).",
    )
    parser.add_argument("--job-name", help="Display name of the job (default: job directory name).")
    parser.add_argument(
        "--build-number",
        type=int,
        default=None,
        help="(run|publish|show) Build number. run/publish default to the next free number.",
    )
    parser.add_argument(
        "--input-dir",
        dest="input_directory",
        help="(run|build) Workspace-relative directory to analyze.",
    )
    parser.add_argument(
        "--output-dir",
        dest="output_directory",
        help="(run|build) Workspace-relative directory Tattletale writes its report into.",
    )
