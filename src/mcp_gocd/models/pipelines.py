"""Pipeline config, run instance and status models."""

from __future__ import annotations

from typing import ClassVar

from pydantic import Field

from .base import GoCDModel
from .materials import Material, MaterialRevision
from .stages import Stage, StageListMixin


class Pipeline(StageListMixin, GoCDModel):
    name: str = Field(min_length=1)
    label_template: str = ""
    enable_pipeline_locking: bool = False
    template: str = ""
    materials: list[Material] = []
    label: str = ""
    stages: list[Stage] = []
    version: str = ""

    omit_empty: ClassVar[frozenset[str]] = frozenset(
        {
            "label_template",
            "enable_pipeline_locking",
            "template",
            "materials",
            "label",
            "version",
        }
    )


class PipelineRequest(GoCDModel):
    group: str = ""
    pipeline: Pipeline


class BuildCause(GoCDModel):
    approver: str = ""
    material_revisions: list[MaterialRevision] = []
    trigger_forced: bool = False
    trigger_message: str = ""

    omit_empty: ClassVar[frozenset[str]] = frozenset({"approver"})


class PipelineInstance(GoCDModel):
    build_cause: BuildCause = Field(default_factory=BuildCause)
    can_run: bool = False
    name: str = ""
    natural_order: int = 0
    comment: str = ""
    stages: list[Stage] = []


class PipelineHistory(GoCDModel):
    pipelines: list[PipelineInstance] = []


class PipelineStatus(GoCDModel):
    locked: bool = False
    paused: bool = False
    schedulable: bool = False
