"""crashctx: crash-context snapshots for telemetry SDKs.

The package captures the telemetry-relevant state of a running application
(tracking consent, last view event, user info, network reachability) into a
compact JSON snapshot, and restores it after an abrupt termination so the
crash report can carry "what the app looked like" when it failed.
"""

from __future__ import annotations

__all__ = ["__version__"]
__version__ = "0.1.0"
