"""
Inspector task model.

A simple to-do item on an inspector's dashboard. Task lists are stored per
inspector in the local key/value cache (see services.task_service).
"""

from pydantic import BaseModel, Field, ConfigDict


class InspectorTask(BaseModel):
    """One entry in an inspector's personal task list."""

    id: int = Field(ge=1)

    text: str = Field(min_length=1)

    completed: bool = False

    model_config = ConfigDict(frozen=True)
