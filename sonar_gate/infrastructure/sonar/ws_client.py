"""SonarQube web service client - one shared httpx connection pool.

Every call checks for HTTP 200 and decodes the body into a response schema.
Anything else is fatal: HttpError carries the full request URL so the call
can be replayed by hand.
"""

import logging
from collections.abc import Mapping
from typing import TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from sonar_gate.domain.ports.config import SonarConfig
from sonar_gate.infrastructure.sonar.errors import DecodeError, HttpError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

ParamValue = str | int | bool | None


def _param_value(value: str | int | bool) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def format_request(path: str, params: Mapping[str, str]) -> str:
    """Render path and params as ``path?a=1&b=2`` with params sorted by name."""
    query = "&".join(f"{k}={params[k]}" for k in sorted(params))
    return f"{path}?{query}"


class SonarWsClient:
    """Thin async wrapper over the SonarQube web API."""

    def __init__(
        self,
        config: SonarConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = config.url.rstrip("/") + "/"
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            auth=config.credentials,
            timeout=httpx.Timeout(float(config.timeout), connect=10.0),
            headers={"Accept": "application/json"},
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    def request_url(self, path: str, params: Mapping[str, str]) -> str:
        return self._base_url + format_request(path, params)

    async def call(
        self,
        path: str,
        params: Mapping[str, ParamValue],
        schema: type[ModelT],
    ) -> ModelT:
        """GET ``path`` and decode the body as ``schema``.

        Raises:
            HttpError: status code other than 200
            DecodeError: body is not a valid ``schema`` document

        """
        query = {k: _param_value(v) for k, v in params.items() if v is not None}
        url = self.request_url(path, query)
        logger.debug("GET %s", url)

        try:
            response = await self._client.get(path, params=query)
        except httpx.TransportError as e:
            logger.warning("SonarQube request %s failed: %s", url, e)
            raise

        if response.status_code != 200:
            logger.error("SonarQube error %s for %s: %s", response.status_code, url, response.text[:200])
            raise HttpError(url, response.status_code)

        try:
            return schema.model_validate_json(response.content)
        except ValidationError as e:
            raise DecodeError(url, str(e)) from e

    async def aclose(self) -> None:
        """Close the HTTP client."""
        if not self._client.is_closed:
            await self._client.aclose()

    async def __aenter__(self) -> "SonarWsClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
