"""Core package initializer for crashctx.

Holds the value codec, the domain contracts, the wire bridges and the
context aggregate. Settings and logging live in `crashctx.core.settings`.
"""

from __future__ import annotations

__all__ = ["__doc__"]
