"""Environment listing tests."""

from unittest.mock import AsyncMock

import pytest
from flagmirror import (
    DevContext,
    Environment,
    InMemoryApiAdapter,
    InMemoryStore,
    NotFoundError,
    Project,
    RemoteEnvironment,
    RemoteFetchError,
    get_environments_for_project,
)


@pytest.fixture(autouse=True)
def environments(api: InMemoryApiAdapter) -> None:
    api.set_environments(
        "cloud-proj",
        [
            RemoteEnvironment(key="production", name="Production"),
            RemoteEnvironment(key="staging", name="Staging"),
            RemoteEnvironment(key="prod-eu", name="Production EU"),
        ],
    )


async def test_lists_environments_of_cloud_project(
    ctx: DevContext, store: InMemoryStore, api: InMemoryApiAdapter
) -> None:
    await store.insert_project(
        Project(key="local", source_environment_key="production", source_project_key="cloud-proj")
    )
    environments = await get_environments_for_project(ctx, "local", "prod", 1)
    assert environments == [Environment(key="production", name="Production")]
    assert api.calls == [("get_project_environments", ("cloud-proj", "prod", 1))]


async def test_unknown_project(ctx: DevContext) -> None:
    with pytest.raises(NotFoundError):
        await get_environments_for_project(ctx, "missing")


async def test_wraps_foreign_adapter_error(
    ctx: DevContext, store: InMemoryStore, api: InMemoryApiAdapter
) -> None:
    await store.insert_project(Project(key="cloud-proj", source_environment_key="production"))
    api.get_project_environments = AsyncMock(side_effect=TimeoutError("slow"))  # type: ignore[method-assign]
    with pytest.raises(RemoteFetchError) as exc_info:
        await get_environments_for_project(ctx, "cloud-proj")
    assert str(exc_info.value) == (
        "REMOTE_FETCH_ERROR: unable to list environments for project cloud-proj"
        " from cloud-proj: slow"
    )
    assert isinstance(exc_info.value.__cause__, TimeoutError)
