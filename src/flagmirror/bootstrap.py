"""Build a DevContext from configuration."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

from .adapters import SdkAdapter
from .config import FlagMirrorConfig
from .context import DevContext
from .http_client import ApiAdapterConfig, HttpApiAdapter
from .loader import load
from .log import configure_logging
from .observers import Observers
from .store import Store


def build_context(
    config: FlagMirrorConfig,
    *,
    store: Store,
    sdk: SdkAdapter,
    observers: Observers | None = None,
) -> DevContext:
    """Wire the management API client and sync defaults from ``config``.

    The store and SDK adapter belong to the host process and are passed in.
    """
    return DevContext(
        store=store,
        api=HttpApiAdapter(ApiAdapterConfig.from_section(config.api)),
        sdk=sdk,
        observers=observers if observers is not None else Observers(),
        default_context=config.sync.default_context(),
    )


def bootstrap(
    base_path: Path,
    env_path: Path | None = None,
    *,
    store: Store,
    sdk: SdkAdapter,
    observers: Observers | None = None,
    environ: Mapping[str, str] | None = None,
) -> DevContext:
    """Load configuration, set up logging and return a ready DevContext.

    Raises:
        ConfigError: a config file could not be read, parsed or validated.
    """
    config = load(base_path, env_path, environ)
    logger = configure_logging(config.log)
    logger.info(
        "flagmirror configured",
        api_base_url=config.api.base_url,
        access_token=config.api.access_token,
        default_context_key=config.sync.default_context_key,
    )
    return build_context(config, store=store, sdk=sdk, observers=observers)
