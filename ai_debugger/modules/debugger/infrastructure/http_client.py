from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from ..domain.errors import FixServiceError
from ..domain.interfaces import FixClient
from ..domain.models import FixRequest, FixResponse

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "http://localhost:8000/debug/"


class HttpFixClient(FixClient):
    def __init__(self, client: httpx.AsyncClient, endpoint: str = DEFAULT_ENDPOINT) -> None:
        self._client = client
        self._endpoint = endpoint

    @property
    def endpoint(self) -> str:
        return self._endpoint

    async def request_fix(self, request: FixRequest) -> FixResponse:
        logger.debug("POST %s (%d chars, prompt=%s)", self._endpoint, len(request.code), request.prompt is not None)
        try:
            response = await self._client.post(self._endpoint, json=request.to_payload())
            response.raise_for_status()
            return FixResponse.model_validate(response.json())
        except httpx.HTTPError as exc:
            raise FixServiceError(f"Request to {self._endpoint} failed: {exc}") from exc
        except (ValueError, ValidationError) as exc:
            # json.JSONDecodeError is a ValueError
            raise FixServiceError(f"Malformed response from {self._endpoint}: {exc}") from exc

    async def aclose(self) -> None:
        await self._client.aclose()
