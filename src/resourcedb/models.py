"""Base pydantic models for hydrated resources."""

from datetime import datetime

from pydantic import BaseModel, Field


class Activity(BaseModel):
    """Activity timestamps of a resource. `last` drives listing order."""
    last: datetime


class ResourceModel(BaseModel):
    """Common shape of every resource.

    Concrete resource types subclass this and add their own fields.
    """
    id: str
    version: int = Field(..., ge=1)
    activity: Activity
