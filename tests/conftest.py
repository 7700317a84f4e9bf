"""Shared test fixtures for mcp-gocd."""

from __future__ import annotations

import pytest
import respx

from mcp_gocd.client import GoCDClient
from mcp_gocd.config import GoCDConfig
from mcp_gocd.services.pipelines import PipelinesService

TEST_URL = "https://gocd.example.com"
TEST_API = "https://gocd.example.com/go/api"


@pytest.fixture
def config() -> GoCDConfig:
    return GoCDConfig(url=TEST_URL, username="admin", password="secret")


@pytest.fixture
def client(config: GoCDConfig) -> GoCDClient:
    return GoCDClient(config)


@pytest.fixture
def pipelines(client: GoCDClient) -> PipelinesService:
    return PipelinesService(client)


@pytest.fixture
def mock_api() -> respx.MockRouter:
    with respx.mock(base_url=TEST_API) as router:
        yield router
