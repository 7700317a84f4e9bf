"""Material models: pipeline dependencies and the revisions pulled for a run."""

from __future__ import annotations

from typing import ClassVar

from pydantic import Field

from .base import GoCDModel


class MaterialFilter(GoCDModel):
    ignore: list[str] = []


class MaterialAttributes(GoCDModel):
    url: str = ""
    destination: str = ""
    filter: MaterialFilter | None = None
    invert_filter: bool = False
    name: str = ""
    auto_update: bool = False
    branch: str = ""
    submodule_folder: str = ""
    shallow_clone: bool = False

    omit_empty: ClassVar[frozenset[str]] = frozenset(
        {
            "destination",
            "filter",
            "name",
            "auto_update",
            "branch",
            "submodule_folder",
            "shallow_clone",
        }
    )


class Material(GoCDModel):
    type: str = ""
    fingerprint: str = ""
    description: str = ""
    attributes: MaterialAttributes = Field(default_factory=MaterialAttributes)

    omit_empty: ClassVar[frozenset[str]] = frozenset({"fingerprint", "description"})


class MaterialDescriptor(GoCDModel):
    description: str = ""
    fingerprint: str = ""
    type: str = ""
    id: int = 0


class Modification(GoCDModel):
    email_address: str = ""
    id: int = 0
    modified_time: int = 0
    user_name: str = ""
    comment: str = ""
    revision: str = ""


class MaterialRevision(GoCDModel):
    modifications: list[Modification] = []
    material: MaterialDescriptor = Field(default_factory=MaterialDescriptor)
    changed: bool = False
