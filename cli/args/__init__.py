"""CLI argument builder modules.

Each module exposes a single public function:

- :func:`cli.args.base.add_base_args`
- :func:`cli.args.step.add_step_args`
- :func:`cli.args.publish.add_publish_args`
"""

from __future__ import annotations

__all__ = [
    "base",
    "step",
    "publish",
]
