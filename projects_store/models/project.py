from datetime import datetime
from typing import NewType, Optional

from pydantic import BaseModel, ConfigDict, Field

from .identifiers import ObjectIdStr

ProjectId = NewType("ProjectId", str)
UserId = NewType("UserId", str)


class ProjectCreate(BaseModel):
    """Fields a caller supplies when creating a project."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    description: str
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")


class Project(ProjectCreate):
    """Canonical project as returned by the repository, with its store-assigned id."""

    id: ObjectIdStr
    owner_id: Optional[ObjectIdStr] = Field(default=None, alias="userId")


# Fields replaced by an update; identity and ownership never change
PROJECT_MUTABLE_FIELDS = {"name", "description", "created_at", "updated_at"}

__all__ = ["PROJECT_MUTABLE_FIELDS", "Project", "ProjectCreate", "ProjectId", "UserId"]
