"""flagmirror data models."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

DEFAULT_CONTEXT_KIND = "user"
DEFAULT_CONTEXT_KEY = "dev-environment"


@dataclass
class EvaluationContext:
    """Identity used when asking the SDK adapter for flag state."""

    kind: str = DEFAULT_CONTEXT_KIND
    key: str = DEFAULT_CONTEXT_KEY
    name: str | None = None
    attributes: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.kind:
            raise ValueError("context kind cannot be empty")
        if not self.key:
            raise ValueError("context key cannot be empty")


def default_context() -> EvaluationContext:
    """Return the canonical single-user context used for new projects."""
    return EvaluationContext(kind=DEFAULT_CONTEXT_KIND, key=DEFAULT_CONTEXT_KEY)


@dataclass(frozen=True)
class FlagState:
    """Synced value and version of one flag."""

    value: Any
    version: int = 0


FlagsState = dict[str, FlagState]


@dataclass
class EvaluatedFlag:
    """One entry of the SDK adapter's all-flags state."""

    value: Any
    version: int = 0
    variation: int | None = None


def from_all_flags(flags: Mapping[str, EvaluatedFlag]) -> FlagsState:
    """Convert an SDK all-flags state into a FlagsState."""
    return {
        flag_key: FlagState(value=flag.value, version=flag.version)
        for flag_key, flag in flags.items()
    }


@dataclass
class Variation:
    """One possible value of a flag."""

    id: str
    value: Any
    name: str | None = None
    description: str | None = None


@dataclass
class FlagVariation:
    """A variation together with the key of the flag it belongs to."""

    flag_key: str
    variation: Variation


@dataclass
class RemoteVariation:
    """Variation as returned by the management API."""

    id: str
    value: Any
    name: str | None = None
    description: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RemoteVariation:
        return cls(
            id=data["_id"],
            value=data.get("value"),
            name=data.get("name"),
            description=data.get("description"),
        )


@dataclass
class RemoteFlag:
    """Flag definition as returned by the management API."""

    key: str
    name: str = ""
    kind: str = ""
    variations: list[RemoteVariation] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RemoteFlag:
        return cls(
            key=data["key"],
            name=data.get("name", ""),
            kind=data.get("kind", ""),
            variations=[RemoteVariation.from_dict(v) for v in data.get("variations", [])],
        )


@dataclass
class RemoteEnvironment:
    """Environment as returned by the management API."""

    key: str
    name: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RemoteEnvironment:
        return cls(key=data["key"], name=data.get("name", ""))


def flatten_variations(flags: Iterable[RemoteFlag]) -> list[FlagVariation]:
    """Merge the variation lists of all flags, keeping flag then variation order."""
    return [
        FlagVariation(
            flag_key=flag.key,
            variation=Variation(
                id=variation.id,
                value=variation.value,
                name=variation.name,
                description=variation.description,
            ),
        )
        for flag in flags
        for variation in flag.variations
    ]


@dataclass
class Override:
    """Manual local value for one flag in one project.

    An inactive override stays stored but is ignored when layering.
    """

    project_key: str
    flag_key: str
    value: Any
    active: bool = True
    version: int = 0

    def apply(self, state: FlagState) -> FlagState:
        """Layer this override onto a synced flag state.

        The version is bumped by one so consumers can tell the value differs
        from the remote one.
        """
        if not self.active:
            return state
        return FlagState(value=self.value, version=state.version + 1)


class Overrides(list[Override]):
    """All overrides of one project."""

    def get_flag(self, flag_key: str) -> Override | None:
        for override in self:
            if override.flag_key == flag_key:
                return override
        return None


@dataclass
class Project:
    """Local mirror of a remote project environment."""

    key: str
    source_environment_key: str
    # Remote project to sync from. Empty means ``key`` is the remote project.
    source_project_key: str = ""
    context: EvaluationContext = field(default_factory=default_context)
    last_sync_time: datetime | None = None
    all_flags_state: FlagsState = field(default_factory=dict)
    available_variations: list[FlagVariation] = field(default_factory=list)

    def get_cloud_project_key(self) -> str:
        """Return the remote project key used for API calls."""
        if self.source_project_key:
            return self.source_project_key
        return self.key


@dataclass
class Environment:
    """Environment of a remote project."""

    key: str
    name: str


@dataclass
class SyncEvent:
    """Published when a project's overridden flag state changes."""

    project_key: str
    all_flags_state: FlagsState
