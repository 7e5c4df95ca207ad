"""Tests for the per-slot domain <-> wire bridges."""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest
from pydantic import BaseModel, ConfigDict

from crashctx.core.bridges import ABSENT, fields
from crashctx.core.bridges import consent as consent_bridge
from crashctx.core.bridges import network as network_bridge
from crashctx.core.bridges import user_info as user_info_bridge
from crashctx.core.bridges import view_event as view_event_bridge
from crashctx.core.bridges.network import WireNetworkInfo
from crashctx.core.bridges.user_info import WireUserInfo
from crashctx.core.bridges.view_event import WireViewEvent
from crashctx.core.contracts import (
    Interface,
    NetworkConnectionInfo,
    Reachability,
    TrackingConsent,
    UserInfo,
    ViewEvent,
)
from crashctx.core.errors import UnknownEnumValue, UnrecognizedValueShape
from crashctx.core.values import TextValue, UnsignedIntegerValue

# ---- consent ------------------------------------------------------------------


def test_consent_codes_are_fixed() -> None:
    assert consent_bridge.to_wire(TrackingConsent.GRANTED) == 0
    assert consent_bridge.to_wire(TrackingConsent.NOT_GRANTED) == 1
    assert consent_bridge.to_wire(TrackingConsent.PENDING) == 2


def test_consent_is_bijective() -> None:
    for member in TrackingConsent:
        assert consent_bridge.to_domain(consent_bridge.to_wire(member)) is member


@pytest.mark.parametrize("raw", [99, -1, True, "0", None, 1.0])  # type: ignore[misc]
def test_unknown_consent_never_defaults(raw: Any) -> None:
    with pytest.raises(UnknownEnumValue) as info:
        consent_bridge.to_domain(raw)
    assert info.value.path == ("ctc",)
    assert info.value.enum_name == "TrackingConsent"


# ---- view event ---------------------------------------------------------------


def test_view_event_wire_shape(view_event: ViewEvent) -> None:
    wire = view_event_bridge.to_wire(view_event).to_json()
    assert set(wire) == {"mdl", "att", "uia"}
    assert wire["mdl"]["_dd"] == {"document_version": 1}
    assert "referrer" not in wire["mdl"]["view"]
    assert wire["att"] == {"build": 42, "flags": {"beta": True}}
    assert wire["uia"] == {"usr.plan": "pro"}


def test_view_event_round_trip(view_event: ViewEvent) -> None:
    raw = view_event_bridge.to_wire(view_event).to_json()
    restored = view_event_bridge.to_domain(WireViewEvent.from_json(raw))
    assert restored.model == view_event.model
    assert restored.attributes["build"] == UnsignedIntegerValue(42)
    assert restored.user_info_attributes["usr.plan"] == TextValue("pro")


def test_view_event_holds_a_copy(view_event: ViewEvent) -> None:
    wire = view_event_bridge.to_wire(view_event)
    view_event.model.view.name = "Settings"
    view_event.attributes["build"] = 43
    assert wire.model.view.name == "Home"
    assert wire.attributes["build"] == UnsignedIntegerValue(42)


def test_view_event_invalid_model_reports_path() -> None:
    with pytest.raises(UnrecognizedValueShape) as info:
        WireViewEvent.from_json({"mdl": {"date": "yesterday"}, "att": {}, "uia": {}})
    assert info.value.path[:2] == ("lre", "mdl")


@pytest.mark.parametrize("date", ["123", 1.0, True])  # type: ignore[misc]
def test_view_event_model_is_read_strictly(view_event: ViewEvent, date: Any) -> None:
    """Numbers must come back as they were written; no coercion from text or floats."""
    raw = view_event_bridge.to_wire(view_event).to_json()
    raw["mdl"]["date"] = date
    with pytest.raises(UnrecognizedValueShape) as info:
        WireViewEvent.from_json(raw)
    assert info.value.path == ("lre", "mdl", "date")


def test_view_event_missing_model() -> None:
    with pytest.raises(UnrecognizedValueShape) as info:
        WireViewEvent.from_json({"att": {}})
    assert info.value.path == ("lre", "mdl")


def test_view_event_attributes_must_be_objects(view_event: ViewEvent) -> None:
    raw = view_event_bridge.to_wire(view_event).to_json()
    raw["att"] = ["not", "a", "map"]
    with pytest.raises(UnrecognizedValueShape) as info:
        WireViewEvent.from_json(raw)
    assert info.value.path == ("lre", "att")


# ---- user info ----------------------------------------------------------------


def test_user_info_writes_missing_identity_as_null(user_info: UserInfo) -> None:
    raw = user_info_bridge.to_wire(user_info).to_json()
    assert raw == {"id": "u1", "nm": None, "em": None, "ei": {"plan": "pro"}}


def test_user_info_absent_and_null_are_both_unset_but_distinct() -> None:
    absent = WireUserInfo.from_json({"ei": {}})
    null = WireUserInfo.from_json({"nm": None, "ei": {}})
    assert absent.name is ABSENT
    assert null.name is None
    assert user_info_bridge.to_domain(absent).name is None
    assert user_info_bridge.to_domain(null).name is None
    assert absent.to_json() == {"ei": {}}
    assert null.to_json() == {"nm": None, "ei": {}}


def test_user_info_missing_extra_info_reads_as_empty() -> None:
    assert WireUserInfo.from_json({"id": "u2"}).extra_info == {}


def test_user_info_rejects_non_string_identity() -> None:
    with pytest.raises(UnrecognizedValueShape) as info:
        WireUserInfo.from_json({"id": 5, "ei": {}})
    assert info.value.path == ("lui", "id")


def test_unserializable_attribute_is_dropped_and_logged(monkeypatch: Any) -> None:
    """Policy: one bad attribute costs that attribute only."""
    fake_logger = MagicMock()
    monkeypatch.setattr(fields, "logger", fake_logger)

    info = UserInfo(id="u1", extra_info={"plan": "pro", "callback": print, "nan": float("nan")})
    wire = user_info_bridge.to_wire(info)

    assert wire.extra_info == {"plan": TextValue("pro")}
    assert fake_logger.warning.call_count == 2
    dropped = {call.args[1] for call in fake_logger.warning.call_args_list}
    assert dropped == {"callback", "nan"}


class Opaque:
    """Has no JSON form; pydantic refuses to dump it."""


class Holder(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    thing: Opaque


def test_attribute_whose_model_cannot_dump_is_dropped(monkeypatch: Any) -> None:
    fake_logger = MagicMock()
    monkeypatch.setattr(fields, "logger", fake_logger)

    info = UserInfo(id="u1", extra_info={"plan": "pro", "holder": Holder(thing=Opaque())})
    wire = user_info_bridge.to_wire(info)

    assert wire.extra_info == {"plan": TextValue("pro")}
    fake_logger.warning.assert_called_once()
    assert fake_logger.warning.call_args.args[1] == "holder"


# ---- network info -------------------------------------------------------------


def test_network_unknown_flags_are_omitted_not_false() -> None:
    info = NetworkConnectionInfo(reachability=Reachability.MAYBE, supports_ipv4=False)
    raw = network_bridge.to_wire(info).to_json()
    assert raw == {"rcb": "maybe", "si4": False}

    restored = network_bridge.to_domain(WireNetworkInfo.from_json(raw))
    assert restored.supports_ipv4 is False
    assert restored.supports_ipv6 is None
    assert restored.available_interfaces is None


def test_network_round_trip(network_info: NetworkConnectionInfo) -> None:
    raw = network_bridge.to_wire(network_info).to_json()
    assert raw["abi"] == ["wifi", "cellular"]
    assert network_bridge.to_domain(WireNetworkInfo.from_json(raw)) == network_info


def test_network_present_null_survives_re_encoding() -> None:
    wire = WireNetworkInfo.from_json({"rcb": "no", "si6": None, "abi": None})
    assert wire.supports_ipv6 is None
    assert wire.is_expensive is ABSENT
    assert wire.to_json() == {"rcb": "no", "si6": None, "abi": None}


def test_network_unknown_reachability() -> None:
    with pytest.raises(UnknownEnumValue) as info:
        WireNetworkInfo.from_json({"rcb": "sometimes"})
    assert info.value.path == ("lni", "rcb")


def test_network_unknown_interface_reports_index() -> None:
    with pytest.raises(UnknownEnumValue) as info:
        WireNetworkInfo.from_json({"rcb": "yes", "abi": ["wifi", "carrier-pigeon"]})
    assert info.value.path == ("lni", "abi", 1)


def test_network_flags_must_be_booleans() -> None:
    with pytest.raises(UnrecognizedValueShape) as info:
        WireNetworkInfo.from_json({"rcb": "yes", "ise": 1})
    assert info.value.path == ("lni", "ise")


def test_network_requires_reachability() -> None:
    with pytest.raises(UnrecognizedValueShape):
        WireNetworkInfo.from_json({"abi": [Interface.WIFI.value]})
