"""MongoDB access layer and collection names."""

from .collections import PROJECTS_COLLECTION
from .store import DocumentStore, Query

__all__ = ["DocumentStore", "PROJECTS_COLLECTION", "Query"]
