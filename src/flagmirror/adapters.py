"""Remote adapter interfaces and in-memory implementations."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Awaitable
from typing import TypeVar

from .exceptions import FlagMirrorError, RemoteFetchError
from .models import EvaluatedFlag, EvaluationContext, RemoteEnvironment, RemoteFlag

T = TypeVar("T")


async def call_remote(call: Awaitable[T], context: str) -> T:
    """Await an adapter call, turning foreign failures into RemoteFetchError.

    flagmirror errors raised by the adapter pass through unchanged.
    """
    try:
        return await call
    except FlagMirrorError:
        raise
    except Exception as e:
        raise RemoteFetchError(f"{context}: {e}", cause=e) from e


class ApiAdapter(ABC):
    """Management API calls needed by the sync engine."""

    @abstractmethod
    async def get_sdk_key(self, cloud_project_key: str, environment_key: str) -> str:
        """Return the SDK key of a remote project environment."""
        ...

    @abstractmethod
    async def get_all_flags(self, cloud_project_key: str) -> list[RemoteFlag]:
        """Return every flag of a remote project with its variations."""
        ...

    @abstractmethod
    async def get_project_environments(
        self, cloud_project_key: str, query: str, limit: int | None
    ) -> list[RemoteEnvironment]:
        """Return environments of a remote project matching ``query``."""
        ...


class SdkAdapter(ABC):
    """Flag evaluation through the remote SDK."""

    @abstractmethod
    async def get_all_flags_state(
        self, context: EvaluationContext, sdk_key: str
    ) -> dict[str, EvaluatedFlag]:
        """Evaluate all flags for ``context``."""
        ...


class InMemoryApiAdapter(ApiAdapter):
    """In-memory management API for tests."""

    def __init__(self) -> None:
        self._sdk_keys: dict[tuple[str, str], str] = {}
        self._flags: dict[str, list[RemoteFlag]] = {}
        self._environments: dict[str, list[RemoteEnvironment]] = {}
        self.calls: list[tuple[str, tuple[object, ...]]] = []

    def set_sdk_key(self, cloud_project_key: str, environment_key: str, sdk_key: str) -> None:
        self._sdk_keys[(cloud_project_key, environment_key)] = sdk_key

    def set_flags(self, cloud_project_key: str, flags: list[RemoteFlag]) -> None:
        self._flags[cloud_project_key] = list(flags)

    def set_environments(
        self, cloud_project_key: str, environments: list[RemoteEnvironment]
    ) -> None:
        self._environments[cloud_project_key] = list(environments)

    async def get_sdk_key(self, cloud_project_key: str, environment_key: str) -> str:
        self.calls.append(("get_sdk_key", (cloud_project_key, environment_key)))
        sdk_key = self._sdk_keys.get((cloud_project_key, environment_key))
        if sdk_key is None:
            raise RemoteFetchError(
                f"environment not found: {cloud_project_key}/{environment_key}",
                status_code=404,
            )
        return sdk_key

    async def get_all_flags(self, cloud_project_key: str) -> list[RemoteFlag]:
        self.calls.append(("get_all_flags", (cloud_project_key,)))
        flags = self._flags.get(cloud_project_key)
        if flags is None:
            raise RemoteFetchError(f"project not found: {cloud_project_key}", status_code=404)
        return list(flags)

    async def get_project_environments(
        self, cloud_project_key: str, query: str, limit: int | None
    ) -> list[RemoteEnvironment]:
        self.calls.append(("get_project_environments", (cloud_project_key, query, limit)))
        environments = self._environments.get(cloud_project_key)
        if environments is None:
            raise RemoteFetchError(f"project not found: {cloud_project_key}", status_code=404)
        matched = [
            e for e in environments if query.lower() in e.key.lower() or query.lower() in e.name.lower()
        ]
        return matched if limit is None else matched[:limit]


class InMemorySdkAdapter(SdkAdapter):
    """In-memory SDK that returns preset flag state per SDK key."""

    def __init__(self) -> None:
        self._states: dict[str, dict[str, EvaluatedFlag]] = {}
        self.contexts: list[EvaluationContext] = []

    def set_flags_state(self, sdk_key: str, flags: dict[str, EvaluatedFlag]) -> None:
        self._states[sdk_key] = dict(flags)

    async def get_all_flags_state(
        self, context: EvaluationContext, sdk_key: str
    ) -> dict[str, EvaluatedFlag]:
        self.contexts.append(context)
        state = self._states.get(sdk_key)
        if state is None:
            raise RemoteFetchError("invalid sdk key", status_code=401)
        return dict(state)
