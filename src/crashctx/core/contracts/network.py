"""NetworkConnectionInfo — reachability and capabilities of the current network.

Capability flags are optional because the underlying platform signal is not
available everywhere. ``None`` means "unknown", which is different from an
explicit ``False``.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field


class Reachability(StrEnum):
    YES = "yes"
    MAYBE = "maybe"
    NO = "no"


class Interface(StrEnum):
    WIFI = "wifi"
    WIRED_ETHERNET = "wiredEthernet"
    CELLULAR = "cellular"
    LOOPBACK = "loopback"
    OTHER = "other"


class NetworkConnectionInfo(BaseModel):
    """Last known network state."""

    reachability: Reachability
    available_interfaces: list[Interface] | None = Field(default=None)
    supports_ipv4: bool | None = None
    supports_ipv6: bool | None = None
    is_expensive: bool | None = None
    is_constrained: bool | None = None


__all__ = ["Interface", "NetworkConnectionInfo", "Reachability"]
