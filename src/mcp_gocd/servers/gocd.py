"""GoCD MCP server: pipeline tool registrations."""

from __future__ import annotations

import json
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Annotated, Any

from fastmcp import Context, FastMCP
from pydantic import Field

from ..client import APIResponse, GoCDClient
from ..config import GoCDConfig
from ..exceptions import (
    GoCDApiError,
    GoCDAuthError,
    GoCDNotFoundError,
    GoCDWriteDisabledError,
)
from ..models.pipelines import Pipeline
from ..services.pipelines import PipelinesService


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncIterator[dict[str, Any]]:
    config = GoCDConfig.from_env()
    config.validate()
    client = GoCDClient(config)
    try:
        yield {"client": client, "pipelines": PipelinesService(client), "config": config}
    finally:
        await client.close()


mcp = FastMCP(
    name="GoCD MCP Server",
    instructions=(
        "Provides tools for GoCD pipelines: status, pause/unpause, lock release,"
        " creation, and run history."
    ),
    lifespan=lifespan,
)


def _get_pipelines(ctx: Context) -> PipelinesService:
    return ctx.request_context.lifespan_context["pipelines"]


def _get_config(ctx: Context) -> GoCDConfig:
    return ctx.request_context.lifespan_context["config"]


def _check_write(ctx: Context) -> None:
    if _get_config(ctx).read_only:
        raise GoCDWriteDisabledError


def _ok(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


def _action_result(success: bool, resp: APIResponse) -> str:
    result: dict[str, Any] = {"success": success, "status_code": resp.status_code}
    if not success and resp.body:
        result["body"] = resp.body[:500]
    return _ok(result)


def _err(error: Exception) -> str:
    detail: dict[str, Any] = {"error": str(error)}
    if isinstance(error, GoCDNotFoundError):
        detail["status_code"] = error.status_code
        detail["body"] = error.body
        detail["hint"] = "Verify the pipeline name. Names are case-sensitive."
    elif isinstance(error, GoCDAuthError):
        detail["status_code"] = error.status_code
        detail["body"] = error.body
        detail["hint"] = "Check GOCD_USERNAME/GOCD_PASSWORD or GOCD_TOKEN permissions."
    elif isinstance(error, GoCDWriteDisabledError):
        detail["hint"] = "Server is in read-only mode. Set GOCD_READ_ONLY=false to enable writes."
    elif isinstance(error, GoCDApiError):
        detail["status_code"] = error.status_code
        detail["body"] = error.body
        if error.status_code == 409:
            detail["hint"] = "Conflict: the pipeline may already be paused, locked or exist."
        elif error.status_code == 422:
            detail["hint"] = "Validation failed: check the pipeline definition."
    return json.dumps(detail, indent=2, ensure_ascii=False)


PipelineName = Annotated[str, Field(description="Pipeline name", min_length=1)]
Offset = Annotated[
    int, Field(description="Pagination offset; 0 for the most recent page", ge=0)
]


# ════════════════════════════════════════════════════════════════════
# Status
# ════════════════════════════════════════════════════════════════════


@mcp.tool(
    tags={"gocd", "pipelines", "read"},
    annotations={"readOnlyHint": True, "idempotentHint": True, "openWorldHint": True},
)
async def gocd_get_pipeline_status(ctx: Context, name: PipelineName) -> str:
    """Get whether a pipeline is locked, paused and schedulable."""
    try:
        status, _ = await _get_pipelines(ctx).get_status(name)
        return _ok(status.to_dict())
    except Exception as e:
        return _err(e)


# ════════════════════════════════════════════════════════════════════
# Lifecycle
# ════════════════════════════════════════════════════════════════════


@mcp.tool(
    tags={"gocd", "pipelines", "write"},
    annotations={"readOnlyHint": False, "idempotentHint": True, "openWorldHint": True},
)
async def gocd_pause_pipeline(ctx: Context, name: PipelineName) -> str:
    """Pause a pipeline so it stops scheduling new runs."""
    try:
        _check_write(ctx)
        return _action_result(*await _get_pipelines(ctx).pause(name))
    except Exception as e:
        return _err(e)


@mcp.tool(
    tags={"gocd", "pipelines", "write"},
    annotations={"readOnlyHint": False, "idempotentHint": True, "openWorldHint": True},
)
async def gocd_unpause_pipeline(ctx: Context, name: PipelineName) -> str:
    """Unpause a pipeline so it handles new build events again."""
    try:
        _check_write(ctx)
        return _action_result(*await _get_pipelines(ctx).unpause(name))
    except Exception as e:
        return _err(e)


@mcp.tool(
    tags={"gocd", "pipelines", "write"},
    annotations={"destructiveHint": True, "readOnlyHint": False, "openWorldHint": True},
)
async def gocd_release_pipeline_lock(ctx: Context, name: PipelineName) -> str:
    """Release the lock held on a locked pipeline."""
    try:
        _check_write(ctx)
        return _action_result(*await _get_pipelines(ctx).release_lock(name))
    except Exception as e:
        return _err(e)


# ════════════════════════════════════════════════════════════════════
# Config
# ════════════════════════════════════════════════════════════════════


@mcp.tool(
    tags={"gocd", "pipelines", "write"},
    annotations={"readOnlyHint": False, "openWorldHint": True},
)
async def gocd_create_pipeline(
    ctx: Context,
    group: Annotated[str, Field(description="Pipeline group to add the pipeline to", min_length=1)],
    pipeline: Annotated[
        dict[str, Any],
        Field(
            description=(
                "Pipeline definition: {name, label_template?, enable_pipeline_locking?,"
                " template?, materials?: [{type, attributes: {url, branch?, ...}}],"
                " stages?: [{name, jobs?: [...]}]}"
            )
        ),
    ],
) -> str:
    """Create a pipeline. Returns the pipeline as stored by the server."""
    try:
        _check_write(ctx)
        created, _ = await _get_pipelines(ctx).create(Pipeline.model_validate(pipeline), group)
        return _ok(created.to_dict())
    except Exception as e:
        return _err(e)


# ════════════════════════════════════════════════════════════════════
# Runs
# ════════════════════════════════════════════════════════════════════


@mcp.tool(
    tags={"gocd", "pipelines", "read"},
    annotations={"readOnlyHint": True, "idempotentHint": True, "openWorldHint": True},
)
async def gocd_get_pipeline_instance(ctx: Context, name: PipelineName, offset: Offset = 0) -> str:
    """Get one pipeline run with its build cause and stage results."""
    try:
        instance, _ = await _get_pipelines(ctx).get_instance(name, offset)
        return _ok(instance.to_dict())
    except Exception as e:
        return _err(e)


@mcp.tool(
    tags={"gocd", "pipelines", "read"},
    annotations={"readOnlyHint": True, "idempotentHint": True, "openWorldHint": True},
)
async def gocd_get_pipeline_history(ctx: Context, name: PipelineName, offset: Offset = 0) -> str:
    """Get a page of pipeline runs, most recent first. Returns name, natural_order, stages."""
    try:
        history, _ = await _get_pipelines(ctx).get_history(name, offset)
        runs = [run.to_dict() for run in history.pipelines]
        return _ok({"items": runs, "count": len(runs), "offset": offset})
    except Exception as e:
        return _err(e)
