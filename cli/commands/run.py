from __future__ import annotations

import argparse

from plugin.models import BuildLog
from plugin.plugin import TattletalePlugin

from cli.common import builder_from_args, exit_code_for, make_build_context, preflight


def run_step(args: argparse.Namespace, plugin: TattletalePlugin) -> int:
    """Run only the Tattletale builder step (no archiving, no build record)."""
    builder = builder_from_args(args)
    preflight(plugin)

    build = make_build_context(args)
    print(f"\n🔍 Running Tattletale on {build.workspace or 'a missing workspace'} ...")

    result = plugin.run_step(builder, build, BuildLog())
    if result.succeeded:
        print("✅ Tattletale finished.")
    else:
        print(f"⚠️ Tattletale failed ({result.outcome}).")
    return exit_code_for(result)
