"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelRequest(BaseModel):
    """Request body accepting camelCase keys as well as snake_case."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GlobalStateResponse(BaseModel):
    """Public view of the journey clock."""

    current_day: int = Field(..., description="Number of albums revealed so far")
    is_paused: bool
    journey_start_date: datetime

    model_config = ConfigDict(from_attributes=True)
