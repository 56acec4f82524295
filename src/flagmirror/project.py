"""Project synchronization and override layering."""

from __future__ import annotations

import copy
import time
from dataclasses import replace
from datetime import datetime, timezone

import structlog

from .adapters import call_remote
from .context import DevContext
from .exceptions import (
    FlagMirrorError,
    StoreError,
    UpdateConflictError,
    as_store_error,
)
from .metrics import sync_duration_seconds, sync_errors_total, sync_total
from .models import (
    EvaluationContext,
    FlagsState,
    Override,
    Project,
    SyncEvent,
    flatten_variations,
    from_all_flags,
)

logger = structlog.get_logger(__name__)


async def create_project(
    ctx: DevContext,
    project_key: str,
    source_environment_key: str,
    context: EvaluationContext | None = None,
) -> Project:
    """Sync a new project from the remote source and store it.

    Remote and store errors are raised as they come, and nothing is stored when
    the refresh fails.
    """
    project = Project(
        key=project_key,
        source_environment_key=source_environment_key,
        context=context if context is not None else copy.deepcopy(ctx.default_context),
    )
    await _refresh_external_state(ctx, project)
    try:
        await ctx.store.insert_project(project)
    except FlagMirrorError:
        raise
    except Exception as e:
        raise StoreError(f"unable to insert project {project_key}: {e}", cause=e) from e
    logger.info(
        "project created",
        project_key=project_key,
        source_environment_key=source_environment_key,
        flag_count=len(project.all_flags_state),
    )
    return project


async def update_project(
    ctx: DevContext,
    project_key: str,
    context: EvaluationContext | None = None,
    source_environment_key: str | None = None,
) -> Project:
    """Re-sync a stored project, optionally changing its context or environment.

    Observers receive the overridden flag state. The returned project carries
    the synced state without overrides.

    Raises:
        UpdateConflictError: the store changed no rows, e.g. because the
            project was deleted concurrently. Safe to retry.
    """
    try:
        stored = await ctx.store.get_dev_project(project_key)
    except FlagMirrorError:
        raise
    except Exception as e:
        raise StoreError(f"unable to get project {project_key}: {e}", cause=e) from e

    project = replace(
        stored,
        context=context if context is not None else stored.context,
        source_environment_key=(
            source_environment_key
            if source_environment_key is not None
            else stored.source_environment_key
        ),
    )
    await _refresh_external_state(ctx, project)

    try:
        updated = await ctx.store.update_project(project)
    except FlagMirrorError:
        raise
    except Exception as e:
        raise StoreError(f"unable to update project {project_key}: {e}", cause=e) from e
    if not updated:
        raise UpdateConflictError(project_key)

    try:
        with_overrides = await get_flag_state_with_overrides_for_project(ctx, project)
    except FlagMirrorError as e:
        raise e.wrap(f"unable to get overrides for project, {project_key}") from e

    ctx.observers.notify(SyncEvent(project_key=project.key, all_flags_state=with_overrides))
    logger.info(
        "project updated",
        project_key=project_key,
        source_environment_key=project.source_environment_key,
        flag_count=len(project.all_flags_state),
    )
    return project


async def clone_project(
    ctx: DevContext,
    source_key: str,
    target_key: str,
    include_overrides: bool = False,
) -> Project:
    """Copy a stored project under a new key without contacting the remote source.

    The clone syncs from the source's cloud project, so cloning a clone still
    points at the original remote project. Overrides copied before a failing
    one stay stored.
    """
    try:
        source = await ctx.store.get_dev_project(source_key)
    except Exception as e:
        raise as_store_error(e, f"unable to get source project {source_key}") from e

    cloned = Project(
        key=target_key,
        source_environment_key=source.source_environment_key,
        source_project_key=source.get_cloud_project_key(),
        context=copy.deepcopy(source.context),
        last_sync_time=datetime.now(timezone.utc),
        all_flags_state=dict(source.all_flags_state),
        available_variations=copy.deepcopy(source.available_variations),
    )

    try:
        await ctx.store.insert_project(cloned)
    except Exception as e:
        raise as_store_error(e, f"unable to insert cloned project {target_key}") from e

    copied = 0
    if include_overrides:
        try:
            source_overrides = await ctx.store.get_overrides_for_project(source_key)
        except Exception as e:
            raise as_store_error(
                e, f"unable to get overrides for source project {source_key}"
            ) from e

        for override in source_overrides:
            try:
                await ctx.store.upsert_override(
                    Override(
                        project_key=target_key,
                        flag_key=override.flag_key,
                        value=copy.deepcopy(override.value),
                        active=override.active,
                    )
                )
            except Exception as e:
                raise as_store_error(
                    e, f"unable to clone override for flag {override.flag_key}"
                ) from e
            copied += 1

    logger.info(
        "project cloned",
        source_key=source_key,
        target_key=target_key,
        cloud_project_key=cloned.source_project_key,
        overrides_copied=copied,
    )
    return cloned


async def get_flag_state_with_overrides_for_project(
    ctx: DevContext, project: Project
) -> FlagsState:
    """Return the project's synced flag state with active overrides applied.

    The project is left untouched.
    """
    try:
        overrides = await ctx.store.get_overrides_for_project(project.key)
    except Exception as e:
        raise as_store_error(e, f"unable to fetch overrides for project {project.key}") from e

    with_overrides: FlagsState = {}
    for flag_key, flag_state in project.all_flags_state.items():
        override = overrides.get_flag(flag_key)
        if override is not None:
            flag_state = override.apply(flag_state)
        with_overrides[flag_key] = flag_state
    return with_overrides


async def _refresh_external_state(ctx: DevContext, project: Project) -> None:
    """Fetch flag state and variations from the remote source into ``project``.

    Flag state and sync time are set before variations are fetched, so a
    failure in the second fetch leaves ``project`` partly refreshed. Callers
    only persist after this returns.
    """
    cloud_project_key = project.get_cloud_project_key()
    attributes = {"cloud_project_key": cloud_project_key}
    context = f"unable to refresh project {project.key} from {cloud_project_key}"
    started = time.monotonic()
    try:
        sdk_key = await call_remote(
            ctx.api.get_sdk_key(cloud_project_key, project.source_environment_key), context
        )
        sdk_flags = await call_remote(
            ctx.sdk.get_all_flags_state(project.context, sdk_key), context
        )
        project.all_flags_state = from_all_flags(sdk_flags)
        project.last_sync_time = datetime.now(timezone.utc)
        flags = await call_remote(ctx.api.get_all_flags(cloud_project_key), context)
        project.available_variations = flatten_variations(flags)
    except FlagMirrorError:
        sync_errors_total.add(1, attributes)
        raise
    finally:
        sync_duration_seconds.record(time.monotonic() - started, attributes)
    sync_total.add(1, attributes)
    logger.debug(
        "project refreshed",
        project_key=project.key,
        cloud_project_key=cloud_project_key,
        flag_count=len(project.all_flags_state),
        variation_count=len(project.available_variations),
    )
