"""cli

Command-line host for the Tattletale build steps.

:mod:`tattletale_cli` stays thin: flags are registered by :mod:`cli.args`,
each mode is implemented in :mod:`cli.commands`, and :mod:`cli.dispatch`
picks the mode.
"""

from __future__ import annotations
