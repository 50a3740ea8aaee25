"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ParseRequest(BaseModel):
    message: str = Field(..., description="Raw chat message text")


class ViewRequest(BaseModel):
    message: str = Field(..., description="Raw chat message text")
    roles: list[str] = Field(
        default_factory=list,
        description="Role IDs of the message author (checked against viewer_access_roles)",
    )
