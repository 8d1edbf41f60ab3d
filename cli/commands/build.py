from __future__ import annotations

import argparse

from plugin.plugin import TattletalePlugin

from cli.commands.publish import archiver_from_args
from cli.common import builder_from_args, preflight, resolve_job_dir, resolve_workspace


def run_build(args: argparse.Namespace, plugin: TattletalePlugin) -> int:
    """Run the builder step and the archiver as one recorded build."""
    builder = builder_from_args(args)
    preflight(plugin)

    workspace = resolve_workspace(args)
    job_dir = resolve_job_dir(args, workspace)
    archiver = None if args.skip_publish else archiver_from_args(args, plugin)

    print("\n🚀 Running Tattletale build")
    print(f"  Workspace : {workspace}")
    print(f"  Job dir   : {job_dir}")

    outcome = plugin.build(
        builder,
        job_dir=job_dir,
        workspace=workspace if workspace.is_dir() else None,
        archiver=archiver,
        job_name=args.job_name,
    )

    print(f"📂 Build directory: {outcome.build.build_dir}")
    if outcome.succeeded:
        print(f"\n✅ Build {outcome.build.display_name} succeeded.")
        return 0
    print(f"\n⚠️ Build {outcome.build.display_name} failed.")
    return 1
