"""plugin

Build-step host glue: configuration, the builder and archiver steps, report
actions, field validation and the composition root.

Callers should start from :func:`plugin.wiring.build_plugin`.
"""

from __future__ import annotations
