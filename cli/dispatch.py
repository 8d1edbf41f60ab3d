from __future__ import annotations

import argparse

from plugin.plugin import TattletalePlugin

from cli.commands.build import run_build
from cli.commands.config import run_config
from cli.commands.publish import run_publish
from cli.commands.run import run_step
from cli.commands.show import run_show
from cli.ui import choose_from_menu

HANDLERS = {
    "run": run_step,
    "publish": run_publish,
    "build": run_build,
    "show": run_show,
    "config": run_config,
}


def dispatch(args: argparse.Namespace, plugin: TattletalePlugin) -> int:
    mode = args.mode
    if mode is None:
        if args.input_directory or args.output_directory:
            mode = "build"
        else:
            mode = choose_from_menu(
                "Choose an action:",
                {
                    "build": "Run Tattletale and archive its report (recorded build)",
                    "run": "Run Tattletale only",
                    "publish": "Archive an existing report",
                    "show": "Show where the report link points",
                    "config": "Print the effective configuration",
                },
            )
    return int(HANDLERS[mode](args, plugin))
