"""Tests for pipeline models: wire encoding, decoding and stage containers."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from mcp_gocd.models.materials import Material, MaterialAttributes, MaterialFilter
from mcp_gocd.models.pipelines import (
    Pipeline,
    PipelineInstance,
    PipelineRequest,
    PipelineStatus,
)
from mcp_gocd.models.stages import (
    PipelineTemplate,
    Stage,
    StageContainer,
    find_stage,
    stage_names,
)


class TestPipelineEncoding:
    def test_zero_fields_omitted(self):
        assert Pipeline(name="build").to_dict() == {"name": "build", "stages": []}

    def test_round_trip(self):
        p = Pipeline(name="build")
        assert Pipeline.model_validate(json.loads(p.to_json())) == p

    def test_round_trip_populated(self):
        p = Pipeline(
            name="build",
            label_template="${COUNT}",
            enable_pipeline_locking=True,
            materials=[
                Material(
                    type="git",
                    attributes=MaterialAttributes(
                        url="https://example.com/repo.git",
                        branch="main",
                        filter=MaterialFilter(ignore=["docs/**"]),
                    ),
                )
            ],
            stages=[Stage(name="compile")],
            version="3",
        )
        data = p.to_dict()
        assert data["label_template"] == "${COUNT}"
        assert data["enable_pipeline_locking"] is True
        assert "template" not in data
        assert "label" not in data
        assert Pipeline.model_validate(data) == p

    def test_material_always_keeps_url_and_invert_filter(self):
        data = Material(type="git").to_dict()
        assert data == {"type": "git", "attributes": {"url": "", "invert_filter": False}}

    def test_request_envelope(self):
        req = PipelineRequest(group="first", pipeline=Pipeline(name="build"))
        assert req.to_dict() == {
            "group": "first",
            "pipeline": {"name": "build", "stages": []},
        }

    def test_name_required(self):
        with pytest.raises(ValidationError):
            Pipeline(name="")


class TestDecoding:
    def test_absent_and_null_fields_decode_to_zero(self):
        p = Pipeline.model_validate({"name": "build", "stages": None, "materials": None})
        assert p.stages == []
        assert p.materials == []
        assert p.label_template == ""

    def test_unknown_fields_ignored(self):
        status = PipelineStatus.model_validate(
            {"locked": False, "paused": True, "schedulable": False, "paused_by": "admin"}
        )
        assert status.paused is True

    def test_instance_with_build_cause(self):
        instance = PipelineInstance.model_validate(
            {
                "name": "build",
                "natural_order": 12,
                "can_run": True,
                "comment": None,
                "build_cause": {
                    "approver": "",
                    "trigger_forced": False,
                    "trigger_message": "modified by dev",
                    "material_revisions": [
                        {
                            "changed": True,
                            "material": {"type": "Git", "fingerprint": "abc", "id": 4},
                            "modifications": [
                                {"revision": "deadbeef", "user_name": "dev", "id": 7}
                            ],
                        }
                    ],
                },
                "stages": [{"name": "compile", "result": "Passed", "counter": "1"}],
            }
        )
        revision = instance.build_cause.material_revisions[0]
        assert instance.comment == ""
        assert revision.material.id == 4
        assert revision.modifications[0].revision == "deadbeef"
        assert instance.stages[0].result == "Passed"

    def test_instance_always_emits_all_fields(self):
        data = PipelineInstance().to_dict()
        assert set(data) == {"build_cause", "can_run", "name", "natural_order", "comment", "stages"}
        assert "approver" not in data["build_cause"]


class TestStageContainer:
    def test_add_stage_appends(self):
        p = Pipeline(name="build", stages=[Stage(name="a"), Stage(name="b")])
        p.add_stage(Stage(name="c"))
        assert stage_names(p) == ["a", "b", "c"]

    def test_set_stages_replaces(self):
        p = Pipeline(name="build", stages=[Stage(name="a"), Stage(name="b")])
        p.set_stages([Stage(name="z")])
        assert stage_names(p) == ["z"]

    def test_set_stages_takes_a_copy(self):
        stages = [Stage(name="a")]
        p = Pipeline(name="build")
        p.set_stages(stages)
        stages.append(Stage(name="b"))
        assert stage_names(p) == ["a"]

    def test_get_name(self):
        assert Pipeline(name="build").get_name() == "build"

    @pytest.mark.parametrize(
        "container",
        [Pipeline(name="build"), PipelineTemplate(name="tmpl")],
    )
    def test_containers_satisfy_protocol(self, container):
        assert isinstance(container, StageContainer)
        container.add_stage(Stage(name="deploy"))
        assert find_stage(container, "deploy") is container.get_stages()[-1]
        assert find_stage(container, "missing") is None
