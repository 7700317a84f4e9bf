"""Pipeline status, lifecycle, creation and history calls."""

from __future__ import annotations

from loguru import logger

from ..client import API_V4, APIRequest, APIResponse, GoCDClient
from ..models.pipelines import (
    Pipeline,
    PipelineHistory,
    PipelineInstance,
    PipelineRequest,
    PipelineStatus,
)

INSTANCE_PATH = "admin/pipelines/%s/instance"
HISTORY_PATH = "pipelines/%s/history"


def build_paginated_stub(template: str, name: str, offset: int) -> str:
    """Format *template* with *name*, adding ``/<offset>`` for offsets above zero."""
    stub = template % name
    if offset > 0:
        stub = f"{stub}/{offset}"
    return stub


class PipelinesService:
    """Calls against the pipeline endpoints of a GoCD server.

    Every method returns ``(result, response)``. Any non-2xx status raises
    :class:`~mcp_gocd.exceptions.GoCDApiError` with ``.response`` set. A
    lifecycle action answered with a 2xx other than 200 reports ``False``
    without raising. Transport errors from httpx, including cancellation,
    propagate unchanged.
    """

    def __init__(self, client: GoCDClient) -> None:
        self._client = client

    @property
    def client(self) -> GoCDClient:
        return self._client

    async def get_status(self, name: str) -> tuple[PipelineStatus, APIResponse]:
        return await self._client.do(
            APIRequest(
                method="GET",
                path=f"pipelines/{name}/status",
                response_model=PipelineStatus,
            )
        )

    async def pause(self, name: str) -> tuple[bool, APIResponse]:
        return await self._pipeline_action(name, "pause")

    async def unpause(self, name: str) -> tuple[bool, APIResponse]:
        return await self._pipeline_action(name, "unpause")

    async def release_lock(self, name: str) -> tuple[bool, APIResponse]:
        return await self._pipeline_action(name, "releaseLock")

    async def create(self, pipeline: Pipeline, group: str) -> tuple[Pipeline, APIResponse]:
        """Create *pipeline* in *group*; returns the pipeline as the server stored it."""
        return await self._client.do(
            APIRequest(
                method="POST",
                path="admin/pipelines",
                api_version=API_V4,
                body=PipelineRequest(group=group, pipeline=pipeline),
                response_model=Pipeline,
            )
        )

    async def get_instance(
        self, name: str, offset: int = 0
    ) -> tuple[PipelineInstance, APIResponse]:
        return await self._client.do(
            APIRequest(
                method="GET",
                path=build_paginated_stub(INSTANCE_PATH, name, offset),
                response_model=PipelineInstance,
            )
        )

    async def get_history(
        self, name: str, offset: int = 0
    ) -> tuple[PipelineHistory, APIResponse]:
        return await self._client.do(
            APIRequest(
                method="GET",
                path=build_paginated_stub(HISTORY_PATH, name, offset),
                response_model=PipelineHistory,
            )
        )

    async def _pipeline_action(self, name: str, action: str) -> tuple[bool, APIResponse]:
        _, resp = await self._client.do(
            APIRequest(
                method="POST",
                path=f"pipelines/{name}/{action}",
                headers={"Confirm": "true"},
            ),
            decode=False,
        )
        # Non-2xx raised above. Only an exact 200 counts; 201, 202 and 204 report False.
        ok = resp.status_code == 200
        logger.info("Pipeline {} {}: status {} (success={})", name, action, resp.status_code, ok)
        return ok, resp
