"""GoCD MCP server configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass
class GoCDConfig:
    """Configuration for the GoCD MCP server, loaded from environment variables."""

    url: str = ""
    username: str = ""
    password: str = ""
    token: str = ""
    read_only: bool = False
    timeout: int = 30
    ssl_verify: bool = True

    @classmethod
    def from_env(cls) -> GoCDConfig:
        url = os.getenv("GOCD_URL", "").rstrip("/")
        token = os.getenv("GOCD_TOKEN") or os.getenv("GOCD_ACCESS_TOKEN", "")
        read_only = os.getenv("GOCD_READ_ONLY", "false").lower() in (
            "true",
            "1",
            "yes",
        )
        timeout = int(os.getenv("GOCD_TIMEOUT", "30"))
        ssl_verify = os.getenv("GOCD_SSL_VERIFY", "true").lower() not in (
            "false",
            "0",
            "no",
        )

        return cls(
            url=url,
            username=os.getenv("GOCD_USERNAME", ""),
            password=os.getenv("GOCD_PASSWORD", ""),
            token=token,
            read_only=read_only,
            timeout=timeout,
            ssl_verify=ssl_verify,
        )

    @property
    def api_url(self) -> str:
        # Servers are usually addressed either as https://host:8154 or https://host:8154/go
        url = self.url.rstrip("/")
        if url.endswith("/go"):
            return f"{url}/api"
        return f"{url}/go/api"

    def validate(self) -> None:
        if not self.url:
            msg = "GOCD_URL environment variable is required"
            raise ValueError(msg)
        if self.username and not self.password:
            msg = "GOCD_PASSWORD is required when GOCD_USERNAME is set"
            raise ValueError(msg)
