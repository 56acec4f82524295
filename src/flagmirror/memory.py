"""InMemoryStore implementation."""

from __future__ import annotations

import copy
from dataclasses import replace

from .exceptions import AlreadyExistsError, NotFoundError
from .models import FlagVariation, Override, Overrides, Project
from .store import Store


class InMemoryStore(Store):
    """In-memory store for tests and embedding.

    Projects and overrides are copied on the way in and out, so callers never
    share state with the store.
    """

    def __init__(self) -> None:
        self._projects: dict[str, Project] = {}
        self._overrides: dict[str, dict[str, Override]] = {}

    async def insert_project(self, project: Project) -> None:
        if project.key in self._projects:
            raise AlreadyExistsError("project", project.key)
        self._projects[project.key] = copy.deepcopy(project)

    async def get_dev_project(self, key: str) -> Project:
        project = self._projects.get(key)
        if project is None:
            raise NotFoundError("project", key)
        return copy.deepcopy(project)

    async def update_project(self, project: Project) -> bool:
        if project.key not in self._projects:
            return False
        self._projects[project.key] = copy.deepcopy(project)
        return True

    async def delete_project(self, key: str) -> bool:
        self._overrides.pop(key, None)
        return self._projects.pop(key, None) is not None

    async def get_overrides_for_project(self, key: str) -> Overrides:
        overrides = self._overrides.get(key, {})
        return Overrides(copy.deepcopy(o) for o in overrides.values())

    async def upsert_override(self, override: Override) -> Override:
        if override.project_key not in self._projects:
            raise NotFoundError("project", override.project_key)
        overrides = self._overrides.setdefault(override.project_key, {})
        current = overrides.get(override.flag_key)
        version = current.version + 1 if current is not None else 1
        stored = replace(copy.deepcopy(override), version=version)
        overrides[override.flag_key] = stored
        return copy.deepcopy(stored)

    async def get_available_variations_for_project(self, key: str) -> list[FlagVariation]:
        project = await self.get_dev_project(key)
        return project.available_variations
