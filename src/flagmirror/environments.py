"""Environment listing for stored projects."""

from __future__ import annotations

from .adapters import call_remote
from .context import DevContext
from .exceptions import FlagMirrorError, StoreError
from .models import Environment


async def get_environments_for_project(
    ctx: DevContext,
    project_key: str,
    query: str = "",
    limit: int | None = None,
) -> list[Environment]:
    """List environments of the remote project a stored project syncs from."""
    try:
        project = await ctx.store.get_dev_project(project_key)
    except FlagMirrorError:
        raise
    except Exception as e:
        raise StoreError(f"unable to get project {project_key}: {e}", cause=e) from e

    cloud_project_key = project.get_cloud_project_key()
    environments = await call_remote(
        ctx.api.get_project_environments(cloud_project_key, query, limit),
        f"unable to list environments for project {project_key} from {cloud_project_key}",
    )

    return [Environment(key=e.key, name=e.name) for e in environments]
