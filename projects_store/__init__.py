"""Document-store access layer and entity repositories for projects-manager."""

from .db import DocumentStore
from .exceptions import (
    DuplicateKeyRepositoryError,
    NotFoundError,
    ParseError,
    RepositoryError,
    StoreError,
    WrongIdError,
)
from .repositories import ProjectConnector, ProjectRepository
from .result import Err, Ok, Result

__all__ = [
    "DocumentStore",
    "DuplicateKeyRepositoryError",
    "Err",
    "NotFoundError",
    "Ok",
    "ParseError",
    "ProjectConnector",
    "ProjectRepository",
    "RepositoryError",
    "Result",
    "StoreError",
    "WrongIdError",
]
