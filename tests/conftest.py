"""Shared fixtures: representative domain values for snapshot tests."""

from __future__ import annotations

import pytest

from crashctx.core.contracts import (
    Interface,
    NetworkConnectionInfo,
    Reachability,
    UserInfo,
    ViewEvent,
    ViewEventModel,
)
from crashctx.core.contracts.view_event import Application, Session, View


@pytest.fixture  # type: ignore[misc]
def view_event() -> ViewEvent:
    """A view event with both attribute maps populated."""
    model = ViewEventModel(
        date=1_600_000_000_000,
        application=Application(id="app-1"),
        session=Session(id="session-1"),
        view=View(id="view-1", url="com.example.HomeViewController", name="Home"),
    )
    return ViewEvent(
        model=model,
        attributes={"build": 42, "flags": {"beta": True}},
        user_info_attributes={"usr.plan": "pro"},
    )


@pytest.fixture  # type: ignore[misc]
def user_info() -> UserInfo:
    return UserInfo(id="u1", extra_info={"plan": "pro"})


@pytest.fixture  # type: ignore[misc]
def network_info() -> NetworkConnectionInfo:
    return NetworkConnectionInfo(
        reachability=Reachability.YES,
        available_interfaces=[Interface.WIFI, Interface.CELLULAR],
        supports_ipv4=True,
        supports_ipv6=False,
    )
