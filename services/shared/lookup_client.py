"""Blocking-style GET-and-decode helper used for every external lookup."""

from typing import Mapping, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from shared.errors import InternalError, UpstreamError

ModelT = TypeVar("ModelT", bound=BaseModel)


class LookupClient:
    """Fetch a URL and decode its JSON body into a caller-chosen model.

    Non-2xx answers raise ``UpstreamError`` carrying the upstream status
    verbatim. Transport failures and undecodable bodies raise
    ``InternalError`` (500). Nothing is retried.
    """

    def __init__(self, http_client: httpx.AsyncClient):
        self._http = http_client

    async def fetch(
        self,
        url: str,
        shape: Type[ModelT],
        method: str = "GET",
        params: Optional[Mapping[str, str]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> ModelT:
        try:
            response = await self._http.request(method, url, params=params, headers=headers)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise InternalError(f"error sending request: {e}") from e

        if not response.is_success:
            raise UpstreamError(response.status_code)

        try:
            return shape.model_validate_json(response.content)
        except ValidationError as e:
            raise InternalError(f"error parsing response: {e.error_count()} validation error(s)") from e
