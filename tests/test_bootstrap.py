"""Configuration driven DevContext tests."""

import logging
from collections.abc import Iterator
from pathlib import Path

import httpx
import pytest
import respx
import structlog
from conftest import SDK_KEY, RecordingObserver
from flagmirror import (
    ConfigError,
    EvaluatedFlag,
    EvaluationContext,
    FlagMirrorConfig,
    FlagState,
    HttpApiAdapter,
    InMemorySdkAdapter,
    InMemoryStore,
    Observers,
    SyncSection,
    bootstrap,
    build_context,
    create_project,
    update_project,
)

BASE_URL = "http://ld.example.com"


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    yield
    structlog.reset_defaults()
    logging.getLogger("flagmirror").setLevel(logging.NOTSET)


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(
        f"api:\n  base_url: {BASE_URL}\n  access_token: api-token\n"
        "sync:\n  default_context_kind: service\n  default_context_key: ci-bot\n"
    )
    return path


def mock_remote() -> respx.Route:
    respx.get(f"{BASE_URL}/api/v2/projects/proj/environments/env").mock(
        return_value=httpx.Response(200, json={"key": "env", "apiKey": SDK_KEY})
    )
    return respx.get(f"{BASE_URL}/api/v2/flags/proj").mock(
        return_value=httpx.Response(
            200,
            json={
                "items": [{"key": "boolFlag", "variations": [{"_id": "t", "value": True}]}],
                "_links": {},
            },
        )
    )


def test_build_context_wires_config() -> None:
    config = FlagMirrorConfig(sync=SyncSection(default_context_key="ci-bot"))
    ctx = build_context(config, store=InMemoryStore(), sdk=InMemorySdkAdapter())
    assert isinstance(ctx.api, HttpApiAdapter)
    assert ctx.default_context == EvaluationContext(kind="user", key="ci-bot")
    assert len(ctx.observers) == 0


@respx.mock
async def test_bootstrapped_context_syncs_with_configured_defaults(config_file: Path) -> None:
    flags_route = mock_remote()
    sdk = InMemorySdkAdapter()
    sdk.set_flags_state(SDK_KEY, {"boolFlag": EvaluatedFlag(value=True, version=3)})
    observer = RecordingObserver()
    observers = Observers()
    observers.register_observer(observer)

    ctx = bootstrap(config_file, store=InMemoryStore(), sdk=sdk, observers=observers, environ={})
    project = await create_project(ctx, "proj", "env")

    assert project.context == EvaluationContext(kind="service", key="ci-bot")
    assert sdk.contexts == [EvaluationContext(kind="service", key="ci-bot")]
    assert project.all_flags_state == {"boolFlag": FlagState(value=True, version=3)}
    assert flags_route.calls.last.request.headers["Authorization"] == "api-token"

    await update_project(ctx, "proj")
    assert observer.events[0].all_flags_state == {"boolFlag": FlagState(value=True, version=3)}


@respx.mock
async def test_environment_overrides_config_file(config_file: Path) -> None:
    mock_remote()
    sdk = InMemorySdkAdapter()
    sdk.set_flags_state(SDK_KEY, {})
    ctx = bootstrap(
        config_file,
        store=InMemoryStore(),
        sdk=sdk,
        environ={"FLAGMIRROR_SYNC__DEFAULT_CONTEXT_KEY": "nightly"},
    )
    project = await create_project(ctx, "proj", "env")
    assert project.context.key == "nightly"
    assert project.context.kind == "service"


def test_bootstrap_does_not_log_access_token(
    config_file: Path, caplog: pytest.LogCaptureFixture
) -> None:
    bootstrap(config_file, store=InMemoryStore(), sdk=InMemorySdkAdapter(), environ={})
    assert "flagmirror configured" in caplog.text
    assert "api-token" not in caplog.text


def test_bootstrap_missing_config(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        bootstrap(
            tmp_path / "missing.yaml", store=InMemoryStore(), sdk=InMemorySdkAdapter(), environ={}
        )
