"""UserInfo — identity of the current user plus free-form extra attributes."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class UserInfo(BaseModel):
    """User identity as set by the host application.

    Every identity field is optional and independent of the others.
    ``extra_info`` accepts any JSON-compatible value; values that cannot be
    represented are dropped when the snapshot is built.
    """

    id: str | None = Field(default=None, description="Stable user identifier")
    name: str | None = Field(default=None, description="Display name")
    email: str | None = Field(default=None, description="Contact email")
    extra_info: dict[str, Any] = Field(default_factory=dict, description="Custom attributes")


__all__ = ["UserInfo"]
