"""Repository for project documents, scoped by their owning user."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from ..db.collections import PROJECTS_COLLECTION
from ..exceptions import RepositoryError
from ..models.identifiers import decode_id
from ..models.project import PROJECT_MUTABLE_FIELDS, Project, ProjectCreate, ProjectId, UserId
from ..result import Err, Result, ok

if TYPE_CHECKING:
    from ..db.store import DocumentStore

LOGGER = logging.getLogger(__name__)


class ProjectRepository:
    """MongoDB access layer for project documents.

    Implements :class:`~projects_store.repositories.connectors.ProjectConnector`.
    The owner is stored under ``userId`` as an ObjectId. Reads always filter
    on it; a project owned by someone else is reported as ``NotFoundError``,
    exactly like a missing one.
    """

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    @property
    def collection(self) -> str:
        return PROJECTS_COLLECTION

    async def get_all(self, owner_id: UserId) -> Result[List[Project], RepositoryError]:
        owner = decode_id(owner_id)
        if isinstance(owner, Err):
            return owner
        return await self._store.get_many(PROJECTS_COLLECTION, Project, {"userId": owner.value})

    async def get_by_id(
        self, project_id: ProjectId, owner_id: UserId
    ) -> Result[Project, RepositoryError]:
        native_id = decode_id(project_id)
        if isinstance(native_id, Err):
            return native_id
        owner = decode_id(owner_id)
        if isinstance(owner, Err):
            return owner

        return await self._store.get_one(
            PROJECTS_COLLECTION,
            {"_id": native_id.value, "userId": owner.value},
            Project,
        )

    async def create(
        self, project: ProjectCreate, owner_id: UserId
    ) -> Result[ProjectId, RepositoryError]:
        """Insert a new project for ``owner_id`` and return its generated id."""

        owner = decode_id(owner_id)
        if isinstance(owner, Err):
            return owner

        document = {
            **project.model_dump(by_alias=True, include=PROJECT_MUTABLE_FIELDS),
            "userId": owner.value,
        }
        result = await self._store.insert_one(PROJECTS_COLLECTION, document)
        if isinstance(result, Err):
            return result
        LOGGER.debug("Created project %s for owner %s", result.value, owner_id)
        return ok(ProjectId(result.value))

    async def update(
        self, project: Project, *, owner_id: Optional[UserId] = None
    ) -> Result[None, RepositoryError]:
        """Replace the mutable fields of ``project``; its id and owner are kept.

        Without ``owner_id`` the project is matched by id alone. With it, a
        project owned by someone else reports ``NotFoundError``.
        """

        query = self._mutation_query(project.id, owner_id)
        if isinstance(query, Err):
            return query

        fields = project.model_dump(by_alias=True, include=PROJECT_MUTABLE_FIELDS)
        return await self._store.update(PROJECTS_COLLECTION, fields, query.value)

    async def delete(
        self, project_id: ProjectId, *, owner_id: Optional[UserId] = None
    ) -> Result[None, RepositoryError]:
        query = self._mutation_query(project_id, owner_id)
        if isinstance(query, Err):
            return query
        return await self._store.delete(PROJECTS_COLLECTION, query.value)

    @staticmethod
    def _mutation_query(
        project_id: str, owner_id: Optional[str]
    ) -> Result[Dict[str, Any], RepositoryError]:
        native_id = decode_id(project_id)
        if isinstance(native_id, Err):
            return native_id

        query: Dict[str, Any] = {"_id": native_id.value}
        if owner_id is not None:
            owner = decode_id(owner_id)
            if isinstance(owner, Err):
                return owner
            query["userId"] = owner.value
        return ok(query)


__all__ = ["ProjectRepository"]
