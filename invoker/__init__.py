"""invoker

Tool execution layer.

``invoker.core_cmd`` knows how to run and stream *any* command;
``invoker.tattletale`` knows how Tattletale wants to be called. Neither
knows about builds, jobs or report archiving (that is ``plugin``).
"""

from __future__ import annotations
