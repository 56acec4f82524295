"""Store abstract base class."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .models import FlagVariation, Override, Overrides, Project


class Store(ABC):
    """Persistent store for projects and overrides."""

    @abstractmethod
    async def insert_project(self, project: Project) -> None:
        """Insert a new project. Raises AlreadyExistsError if the key is taken."""
        ...

    @abstractmethod
    async def get_dev_project(self, key: str) -> Project:
        """Return a project. Raises NotFoundError if it does not exist."""
        ...

    @abstractmethod
    async def update_project(self, project: Project) -> bool:
        """Replace a stored project. Returns whether a row was changed."""
        ...

    @abstractmethod
    async def delete_project(self, key: str) -> bool:
        """Delete a project and its overrides. Returns whether it existed."""
        ...

    @abstractmethod
    async def get_overrides_for_project(self, key: str) -> Overrides:
        ...

    @abstractmethod
    async def upsert_override(self, override: Override) -> Override:
        """Insert or replace an override. The store assigns the version."""
        ...

    @abstractmethod
    async def get_available_variations_for_project(self, key: str) -> list[FlagVariation]:
        ...
