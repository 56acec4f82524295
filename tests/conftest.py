"""Shared fixtures."""

import pytest
from flagmirror import (
    DevContext,
    EvaluatedFlag,
    InMemoryApiAdapter,
    InMemorySdkAdapter,
    InMemoryStore,
    Observers,
    RemoteFlag,
    RemoteVariation,
    SyncEvent,
)

SDK_KEY = "thing"


class RecordingObserver:
    def __init__(self) -> None:
        self.events: list[SyncEvent] = []

    def handle(self, event: SyncEvent) -> None:
        self.events.append(event)


@pytest.fixture
def api() -> InMemoryApiAdapter:
    adapter = InMemoryApiAdapter()
    adapter.set_sdk_key("proj", "env", SDK_KEY)
    adapter.set_flags(
        "proj",
        [
            RemoteFlag(
                key="boolFlag",
                name="bool flag",
                kind="boolean",
                variations=[
                    RemoteVariation(id="true-id", value=True),
                    RemoteVariation(id="false-id", value=False),
                ],
            )
        ],
    )
    return adapter


@pytest.fixture
def sdk() -> InMemorySdkAdapter:
    adapter = InMemorySdkAdapter()
    adapter.set_flags_state(SDK_KEY, {"boolFlag": EvaluatedFlag(value=True, version=1)})
    return adapter


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def observer() -> RecordingObserver:
    return RecordingObserver()


@pytest.fixture
def ctx(
    store: InMemoryStore,
    api: InMemoryApiAdapter,
    sdk: InMemorySdkAdapter,
    observer: RecordingObserver,
) -> DevContext:
    observers = Observers()
    observers.register_observer(observer)
    return DevContext(store=store, api=api, sdk=sdk, observers=observers)
