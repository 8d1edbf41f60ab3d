from __future__ import annotations

import argparse

from plugin.plugin import TattletalePlugin


def run_config(args: argparse.Namespace, plugin: TattletalePlugin) -> int:
    print(plugin.config.dump_yaml(), end="")
    return 0
