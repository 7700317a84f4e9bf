"""GoCD API client using httpx."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

import httpx
from loguru import logger
from pydantic import BaseModel

from .config import GoCDConfig
from .exceptions import GoCDApiError, GoCDAuthError, GoCDNotFoundError

API_V4 = 4


@dataclass(frozen=True)
class APIRequest:
    """Everything needed to issue one call against the GoCD API."""

    method: str
    path: str
    api_version: int | None = None
    headers: dict[str, str] = field(default_factory=dict)
    body: BaseModel | dict[str, Any] | None = None
    response_model: type[BaseModel] | None = None

    @property
    def accept(self) -> str:
        if self.api_version is None:
            return "application/json"
        return f"application/vnd.go.cd.v{self.api_version}+json"


@dataclass(frozen=True)
class APIResponse:
    """Response metadata handed back alongside every result."""

    http: httpx.Response
    request: APIRequest

    @property
    def status_code(self) -> int:
        return self.http.status_code

    @property
    def headers(self) -> httpx.Headers:
        return self.http.headers

    @property
    def body(self) -> str:
        return self.http.text


class GoCDClient:
    """Async HTTP client for the GoCD REST API."""

    def __init__(self, config: GoCDConfig | None = None) -> None:
        self.config = config or GoCDConfig.from_env()
        self.config.validate()

        headers: dict[str, str] = {}
        auth: httpx.Auth | None = None
        if self.config.username:
            auth = httpx.BasicAuth(self.config.username, self.config.password)
        elif self.config.token:
            headers["Authorization"] = f"Bearer {self.config.token}"

        self._client = httpx.AsyncClient(
            base_url=self.config.api_url,
            headers=headers,
            auth=auth,
            timeout=self.config.timeout,
            verify=self.config.ssl_verify,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> GoCDClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    # ── HTTP helpers ──────────────────────────────────────────────

    @staticmethod
    def _encode_body(body: BaseModel | dict[str, Any] | None) -> Any:
        if isinstance(body, BaseModel):
            return body.model_dump(mode="json")
        return body

    async def do(
        self, request: APIRequest, *, decode: bool = True
    ) -> tuple[Any, APIResponse]:
        """Send *request* and return ``(decoded_body, response)``.

        The body is validated into ``request.response_model`` when one is set.
        Any non-2xx status raises. With ``decode=False`` the body of a 2xx
        response is left undecoded and ``None`` is returned in its place.
        An empty body decodes to an empty ``response_model``.
        """
        headers = {"Accept": request.accept, **request.headers}
        kwargs: dict[str, Any] = {"headers": headers}
        if request.body is not None:
            kwargs["json"] = self._encode_body(request.body)

        resp = await self._client.request(request.method, request.path, **kwargs)
        api_resp = APIResponse(http=resp, request=request)
        logger.debug("GoCD {} {} -> {}", request.method, request.path, resp.status_code)

        if resp.status_code in (401, 403):
            raise GoCDAuthError(resp.status_code, resp.text, api_resp)
        if resp.status_code == 404:
            raise GoCDNotFoundError(resp.text, api_resp)
        if not resp.is_success:
            raise GoCDApiError(resp.status_code, resp.reason_phrase or "", resp.text, api_resp)

        if not decode:
            return None, api_resp

        if resp.status_code == 204 or not resp.content:
            if request.response_model is not None:
                return request.response_model.model_validate({}), api_resp
            return None, api_resp

        content_type = resp.headers.get("content-type", "")
        if "text/html" in content_type:
            msg = "Unexpected HTML response, check URL and authentication"
            raise GoCDApiError(resp.status_code, msg, resp.text[:500], api_resp)

        try:
            data = resp.json()
        except json.JSONDecodeError as e:
            raise GoCDApiError(
                resp.status_code,
                f"JSON parse error: {e}",
                resp.text[:500],
                api_resp,
            ) from e

        if request.response_model is not None:
            return request.response_model.model_validate(data), api_resp
        return data, api_resp
