"""MongoDB collection names used by the repositories."""

from __future__ import annotations

PROJECTS_COLLECTION = "projects"

__all__ = ["PROJECTS_COLLECTION"]
