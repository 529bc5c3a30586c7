"""Repository layer to abstract MongoDB access patterns."""

from .connectors import ProjectConnector
from .project import ProjectRepository

__all__ = ["ProjectConnector", "ProjectRepository"]
