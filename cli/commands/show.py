from __future__ import annotations

import argparse
import json

from plugin.plugin import TattletalePlugin

from cli.common import resolve_job_dir, resolve_workspace


def run_show(args: argparse.Namespace, plugin: TattletalePlugin) -> int:
    """Print where the project (or --build-number) report link points."""
    job_dir = resolve_job_dir(args, resolve_workspace(args))
    if args.build_number is not None:
        action = plugin.build_action(job_dir, args.build_number)
        if action is None:
            print(f"⚠️  Build #{args.build_number} has no archived Tattletale report (published without --keep-all?)")
            return 1
    else:
        action = plugin.project_action(job_dir, job_name=args.job_name)

    info = action.to_dict()
    info["available"] = action.icon_file_name is not None
    print(json.dumps(info, indent=2))
    return 0 if info["available"] else 1
