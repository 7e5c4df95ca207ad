"""Consent bridge: `TrackingConsent` <-> compact integer.

Wire values: ``0 = granted``, ``1 = notGranted``, ``2 = pending``.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from ..contracts.consent import TrackingConsent
from ..errors import UnknownEnumValue

_TO_WIRE: dict[TrackingConsent, int] = {
    TrackingConsent.GRANTED: 0,
    TrackingConsent.NOT_GRANTED: 1,
    TrackingConsent.PENDING: 2,
}
_TO_DOMAIN: dict[int, TrackingConsent] = {code: consent for consent, code in _TO_WIRE.items()}


def to_wire(consent: TrackingConsent) -> int:
    return _TO_WIRE[TrackingConsent(consent)]


def to_domain(raw: Any, path: Sequence[str | int] = ("ctc",)) -> TrackingConsent:
    """Map a wire integer back to its consent; unknown values never default."""
    if isinstance(raw, bool) or not isinstance(raw, int) or raw not in _TO_DOMAIN:
        raise UnknownEnumValue("TrackingConsent", raw, path)
    return _TO_DOMAIN[raw]


__all__ = ["to_domain", "to_wire"]
