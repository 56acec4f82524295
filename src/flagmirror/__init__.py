"""flagmirror library."""

from .adapters import (
    ApiAdapter,
    InMemoryApiAdapter,
    InMemorySdkAdapter,
    SdkAdapter,
    call_remote,
)
from .bootstrap import bootstrap, build_context
from .config import ApiSection, FlagMirrorConfig, LogSection, SyncSection
from .context import DevContext
from .environments import get_environments_for_project
from .exceptions import (
    AlreadyExistsError,
    ConfigError,
    FlagMirrorError,
    FlagMirrorErrorCodes,
    NotFoundError,
    RemoteFetchError,
    StoreError,
    UpdateConflictError,
)
from .http_client import ApiAdapterConfig, HttpApiAdapter
from .loader import deep_merge, env_overrides, load
from .log import configure_logging, redact_secrets
from .memory import InMemoryStore
from .models import (
    Environment,
    EvaluatedFlag,
    EvaluationContext,
    FlagState,
    FlagsState,
    FlagVariation,
    Override,
    Overrides,
    Project,
    RemoteEnvironment,
    RemoteFlag,
    RemoteVariation,
    SyncEvent,
    Variation,
    default_context,
    flatten_variations,
    from_all_flags,
)
from .observers import Observer, Observers
from .project import (
    clone_project,
    create_project,
    get_flag_state_with_overrides_for_project,
    update_project,
)
from .store import Store

__all__ = [
    "AlreadyExistsError",
    "ApiAdapter",
    "ApiAdapterConfig",
    "ApiSection",
    "ConfigError",
    "DevContext",
    "Environment",
    "EvaluatedFlag",
    "EvaluationContext",
    "FlagMirrorConfig",
    "FlagMirrorError",
    "FlagMirrorErrorCodes",
    "FlagState",
    "FlagsState",
    "FlagVariation",
    "HttpApiAdapter",
    "InMemoryApiAdapter",
    "InMemorySdkAdapter",
    "InMemoryStore",
    "LogSection",
    "NotFoundError",
    "Observer",
    "Observers",
    "Override",
    "Overrides",
    "Project",
    "RemoteEnvironment",
    "RemoteFetchError",
    "RemoteFlag",
    "RemoteVariation",
    "SdkAdapter",
    "Store",
    "StoreError",
    "SyncEvent",
    "SyncSection",
    "UpdateConflictError",
    "Variation",
    "bootstrap",
    "build_context",
    "call_remote",
    "clone_project",
    "configure_logging",
    "create_project",
    "deep_merge",
    "default_context",
    "env_overrides",
    "flatten_variations",
    "from_all_flags",
    "get_environments_for_project",
    "get_flag_state_with_overrides_for_project",
    "load",
    "redact_secrets",
    "update_project",
]
