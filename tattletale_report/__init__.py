"""tattletale_report

Core package namespace for the Tattletale build step.

Why this exists
---------------
The build step has three moving parts: launching the external Tattletale jar,
streaming its output into the build log, and copying the produced report into
persisted job/build storage. The *contracts* shared by those parts live here:

* domain types (the invocation request/result handed between layers)
* IO/layout rules (where reports and build records live on disk)

The ``invoker`` and ``plugin`` packages depend on this one; this package
depends on neither.
"""

from __future__ import annotations
