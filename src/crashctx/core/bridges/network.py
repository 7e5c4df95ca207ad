"""Network-info bridge.

Wire shape (``lni``)::

    {"rcb": "yes", "abi": ["wifi"], "si4": true, "si6": false, "ise": false, "isc": false}

Only ``rcb`` is required. Unknown capability flags are omitted rather than
written as ``false``, so "unknown" survives the round trip.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from ..contracts.network import Interface, NetworkConnectionInfo, Reachability
from ..errors import UnknownEnumValue, UnrecognizedValueShape
from .fields import ABSENT, Tristate, domain_optional, read_optional, require_object, write_optional

KEY_REACHABILITY = "rcb"
KEY_INTERFACES = "abi"
KEY_SUPPORTS_IPV4 = "si4"
KEY_SUPPORTS_IPV6 = "si6"
KEY_IS_EXPENSIVE = "ise"
KEY_IS_CONSTRAINED = "isc"


def _reachability(raw: Any, path: tuple[str | int, ...]) -> Reachability:
    try:
        return Reachability(raw)
    except ValueError:
        raise UnknownEnumValue("Reachability", raw, path) from None


def _interfaces(raw: Any, path: tuple[str | int, ...]) -> Tristate[tuple[Interface, ...]]:
    if raw is ABSENT or raw is None:
        return raw
    if not isinstance(raw, list):
        raise UnrecognizedValueShape("expected a list of interfaces", path)
    out: list[Interface] = []
    for i, item in enumerate(raw):
        try:
            out.append(Interface(item))
        except ValueError:
            raise UnknownEnumValue("Interface", item, (*path, i)) from None
    return tuple(out)


@dataclass(frozen=True, slots=True)
class WireNetworkInfo:
    reachability: Reachability
    available_interfaces: Tristate[tuple[Interface, ...]] = ABSENT
    supports_ipv4: Tristate[bool] = ABSENT
    supports_ipv6: Tristate[bool] = ABSENT
    is_expensive: Tristate[bool] = ABSENT
    is_constrained: Tristate[bool] = ABSENT

    def to_json(self) -> dict[str, Any]:
        out: dict[str, Any] = {KEY_REACHABILITY: self.reachability.value}
        interfaces = self.available_interfaces
        if isinstance(interfaces, tuple):
            out[KEY_INTERFACES] = [interface.value for interface in interfaces]
        else:
            write_optional(out, KEY_INTERFACES, interfaces)
        write_optional(out, KEY_SUPPORTS_IPV4, self.supports_ipv4)
        write_optional(out, KEY_SUPPORTS_IPV6, self.supports_ipv6)
        write_optional(out, KEY_IS_EXPENSIVE, self.is_expensive)
        write_optional(out, KEY_IS_CONSTRAINED, self.is_constrained)
        return out

    @classmethod
    def from_json(cls, raw: Any, path: Sequence[str | int] = ("lni",)) -> WireNetworkInfo:
        where = tuple(path)
        obj = require_object(raw, where)
        if KEY_REACHABILITY not in obj:
            raise UnrecognizedValueShape("reachability is missing", (*where, KEY_REACHABILITY))
        return cls(
            reachability=_reachability(obj[KEY_REACHABILITY], (*where, KEY_REACHABILITY)),
            available_interfaces=_interfaces(
                obj.get(KEY_INTERFACES, ABSENT), (*where, KEY_INTERFACES)
            ),
            supports_ipv4=read_optional(obj, KEY_SUPPORTS_IPV4, bool, where),
            supports_ipv6=read_optional(obj, KEY_SUPPORTS_IPV6, bool, where),
            is_expensive=read_optional(obj, KEY_IS_EXPENSIVE, bool, where),
            is_constrained=read_optional(obj, KEY_IS_CONSTRAINED, bool, where),
        )


def _absent_if_none(value: Any) -> Any:
    return ABSENT if value is None else value


def to_wire(info: NetworkConnectionInfo) -> WireNetworkInfo:
    interfaces = info.available_interfaces
    return WireNetworkInfo(
        reachability=Reachability(info.reachability),
        available_interfaces=ABSENT if interfaces is None else tuple(interfaces),
        supports_ipv4=_absent_if_none(info.supports_ipv4),
        supports_ipv6=_absent_if_none(info.supports_ipv6),
        is_expensive=_absent_if_none(info.is_expensive),
        is_constrained=_absent_if_none(info.is_constrained),
    )


def to_domain(wire: WireNetworkInfo) -> NetworkConnectionInfo:
    interfaces = domain_optional(wire.available_interfaces)
    return NetworkConnectionInfo(
        reachability=wire.reachability,
        available_interfaces=None if interfaces is None else list(interfaces),
        supports_ipv4=domain_optional(wire.supports_ipv4),
        supports_ipv6=domain_optional(wire.supports_ipv6),
        is_expensive=domain_optional(wire.is_expensive),
        is_constrained=domain_optional(wire.is_constrained),
    )


__all__ = ["WireNetworkInfo", "to_domain", "to_wire"]
