"""Stage, job and template models, plus the StageContainer protocol."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, ClassVar, Protocol, runtime_checkable

from .base import GoCDModel


class Authorization(GoCDModel):
    users: list[str] = []
    roles: list[str] = []

    omit_empty: ClassVar[frozenset[str]] = frozenset({"users", "roles"})


class Approval(GoCDModel):
    type: str = ""
    authorization: Authorization | None = None

    omit_empty: ClassVar[frozenset[str]] = frozenset({"authorization"})


class EnvironmentVariable(GoCDModel):
    name: str
    value: str = ""
    encrypted_value: str = ""
    secure: bool = False

    omit_empty: ClassVar[frozenset[str]] = frozenset({"value", "encrypted_value"})


class Job(GoCDModel):
    name: str = ""
    timeout: int = 0
    resources: list[str] = []
    environment_variables: list[EnvironmentVariable] = []
    tasks: list[dict[str, Any]] = []
    # populated on run instances only
    state: str = ""
    result: str = ""
    scheduled_date: int = 0

    omit_empty: ClassVar[frozenset[str]] = frozenset(
        {
            "timeout",
            "resources",
            "environment_variables",
            "tasks",
            "state",
            "result",
            "scheduled_date",
        }
    )


class Stage(GoCDModel):
    name: str = ""
    fetch_materials: bool = False
    clean_working_directory: bool = False
    never_cleanup_artifacts: bool = False
    approval: Approval | None = None
    environment_variables: list[EnvironmentVariable] = []
    resources: list[str] = []
    jobs: list[Job] = []
    # populated on run instances only
    counter: str = ""
    result: str = ""
    status: str = ""
    approved_by: str = ""

    omit_empty: ClassVar[frozenset[str]] = frozenset(
        {
            "approval",
            "environment_variables",
            "resources",
            "jobs",
            "counter",
            "result",
            "status",
            "approved_by",
        }
    )


@runtime_checkable
class StageContainer(Protocol):
    """Anything that owns an ordered list of stages."""

    def get_stages(self) -> list[Stage]: ...

    def get_name(self) -> str: ...

    def set_stages(self, stages: Iterable[Stage]) -> None: ...

    def add_stage(self, stage: Stage) -> None: ...


class StageListMixin:
    """Stage accessors shared by pipelines and templates.

    Only append and overwrite are offered. To reorder or drop a stage, build
    the new list and pass it to ``set_stages``.
    """

    def get_stages(self) -> list[Stage]:
        return self.stages

    def get_name(self) -> str:
        return self.name

    def set_stages(self, stages: Iterable[Stage]) -> None:
        self.stages = list(stages)

    def add_stage(self, stage: Stage) -> None:
        self.stages = [*self.stages, stage]


class PipelineTemplate(StageListMixin, GoCDModel):
    name: str
    stages: list[Stage] = []


def stage_names(container: StageContainer) -> list[str]:
    return [stage.name for stage in container.get_stages()]


def find_stage(container: StageContainer, name: str) -> Stage | None:
    """Return the first stage called *name*, or None."""
    for stage in container.get_stages():
        if stage.name == name:
            return stage
    return None
