"""Interfaces the application depends on; repositories implement them."""

from __future__ import annotations

from typing import List, Optional, Protocol, runtime_checkable

from ..exceptions import RepositoryError
from ..models.project import Project, ProjectCreate, ProjectId, UserId
from ..result import Result


@runtime_checkable
class ProjectConnector(Protocol):
    """Persistence operations for projects, scoped by their owning user."""

    async def get_all(self, owner_id: UserId) -> Result[List[Project], RepositoryError]: ...

    async def get_by_id(
        self, project_id: ProjectId, owner_id: UserId
    ) -> Result[Project, RepositoryError]: ...

    async def create(
        self, project: ProjectCreate, owner_id: UserId
    ) -> Result[ProjectId, RepositoryError]: ...

    async def update(
        self, project: Project, *, owner_id: Optional[UserId] = None
    ) -> Result[None, RepositoryError]: ...

    async def delete(
        self, project_id: ProjectId, *, owner_id: Optional[UserId] = None
    ) -> Result[None, RepositoryError]: ...


__all__ = ["ProjectConnector"]
