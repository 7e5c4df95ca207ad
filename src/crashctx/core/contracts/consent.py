"""TrackingConsent — whether the user allowed data collection."""

from __future__ import annotations

from enum import StrEnum


class TrackingConsent(StrEnum):
    """Consent state at the time of the snapshot."""

    GRANTED = "granted"
    NOT_GRANTED = "notGranted"
    PENDING = "pending"


__all__ = ["TrackingConsent"]
