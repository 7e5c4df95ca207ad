"""Domain <-> wire bridges, one per tracked slot.

Each bridge module exposes a pure ``to_wire(domain)`` / ``to_domain(wire)``
pair. Wire records own deep copies of everything they hold, so a snapshot can
be serialized without synchronizing with further mutation of live objects.
The short keys written by these bridges are permanent: a key is never reused
for a different meaning, new data always gets a fresh key.
"""

from __future__ import annotations

from . import consent, network, user_info, view_event
from .fields import ABSENT

__all__ = ["ABSENT", "consent", "network", "user_info", "view_event"]
