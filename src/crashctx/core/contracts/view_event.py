"""View event contracts: the last screen/view the application displayed.

`ViewEventModel` is the structural part of the event (what a RUM backend
expects); `ViewEvent` pairs it with two free-form attribute maps:

- ``attributes``: attributes attached by the SDK itself,
- ``user_info_attributes``: user attributes copied onto the event.

The model is validated with Pydantic on the way in *and* on the way back out
of a snapshot, so a decoded view event has the same guarantees as a live one.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class Application(BaseModel):
    id: str = Field(description="Application identifier")


class Session(BaseModel):
    id: str = Field(description="Session identifier")
    type: Literal["user", "synthetics"] = "user"


class Count(BaseModel):
    count: int = Field(default=0, ge=0)


class View(BaseModel):
    """Properties of the view itself."""

    id: str
    url: str
    name: str | None = None
    referrer: str | None = None
    time_spent: int = Field(default=0, ge=0, description="Time spent on the view, in ns")
    is_active: bool | None = None
    action: Count = Field(default_factory=Count)
    error: Count = Field(default_factory=Count)
    resource: Count = Field(default_factory=Count)


class DDInfo(BaseModel):
    document_version: int = Field(default=1, ge=0)


class ViewEventModel(BaseModel):
    """Structural view event model."""

    model_config = ConfigDict(populate_by_name=True)

    date: int = Field(description="Start of the view, ms since the Unix epoch")
    type: Literal["view"] = "view"
    service: str | None = None
    application: Application
    session: Session
    view: View
    dd: DDInfo = Field(default_factory=DDInfo, alias="_dd")


class ViewEvent(BaseModel):
    """A view event together with its SDK and user attributes."""

    model: ViewEventModel
    attributes: dict[str, Any] = Field(default_factory=dict)
    user_info_attributes: dict[str, Any] = Field(default_factory=dict)


__all__ = ["Application", "Count", "DDInfo", "Session", "View", "ViewEvent", "ViewEventModel"]
