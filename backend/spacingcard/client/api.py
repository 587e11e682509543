"""
SpacingCard Client — HTTP API Client
======================================

What:  Async wrapper around the spacing REST API.
How:   httpx.AsyncClient; every call returns parsed schema objects or raises
       ApiRequestError / UnexpectedEmptyResponseError.
Who:   Used by SpacingForm; injectable so tests can pass a MockTransport.

Calls are fire-and-forget from the form's point of view: no retries and
no cancellation beyond the configured httpx timeout.
"""

import logging
from typing import Any, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from spacingcard.exceptions import ApiRequestError, UnexpectedEmptyResponseError
from spacingcard.schemas.spacing import CreateResponse, PatchResponse, SpacingPatch, SpacingResponse

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class SpacingApiClient:
    """
    Client for GET/PATCH /spacing/{component_id} and POST /spacing.

    Usage:
        async with SpacingApiClient("http://localhost:12348") as api:
            component_id = await api.post_spacing()
            record = await api.get_spacing(component_id)
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "SpacingApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # ── Operations ────────────────────────────────────────────────────────

    async def get_spacing(self, component_id: str) -> SpacingResponse:
        data = await self._request("GET", f"/spacing/{component_id}", operation="get_spacing")
        return self._parse(SpacingResponse, data, operation="get_spacing")

    async def patch_spacing(self, component_id: str, patch: SpacingPatch) -> str:
        """PATCH the supplied fields; returns the server's message."""
        data = await self._request(
            "PATCH",
            f"/spacing/{component_id}",
            operation="patch_spacing",
            json=patch.model_dump(mode="json", exclude_none=True),
        )
        return self._parse(PatchResponse, data, operation="patch_spacing").message

    async def post_spacing(self) -> str:
        """Create a default record; returns its component_id."""
        data = await self._request("POST", "/spacing", operation="post_spacing")
        component_id = self._parse(CreateResponse, data, operation="post_spacing").component_id
        if not component_id:
            raise UnexpectedEmptyResponseError(operation="post_spacing")
        return component_id

    # ── Transport ─────────────────────────────────────────────────────────

    async def _request(self, method: str, path: str, operation: str, **kwargs: Any) -> Any:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.error("%s %s failed: %s", method, path, str(e))
            raise ApiRequestError(
                message=f"{operation} request failed: {e}",
                context={"operation": operation, "error_type": type(e).__name__},
            ) from e

        if response.is_error:
            raise ApiRequestError(
                message=self._error_message(response, operation),
                status_code=response.status_code,
                context={"operation": operation},
            )

        if not response.content:
            raise UnexpectedEmptyResponseError(operation=operation)
        try:
            data = response.json()
        except ValueError as e:
            raise UnexpectedEmptyResponseError(
                operation=operation,
                context={"body": response.text[:200]},
            ) from e
        if not data:
            raise UnexpectedEmptyResponseError(operation=operation)
        return data

    @staticmethod
    def _parse(model: Type[ModelT], data: Any, operation: str) -> ModelT:
        """Validate a 2xx body; a body of the wrong shape counts as no usable body."""
        try:
            return model.model_validate(data)
        except ValidationError as e:
            logger.error("%s returned an unexpected body: %s", operation, str(e))
            raise UnexpectedEmptyResponseError(
                operation=operation,
                context={"body": repr(data)[:200], "errors": e.error_count()},
            ) from e

    @staticmethod
    def _error_message(response: httpx.Response, operation: str) -> str:
        """The API's `error` field when present, else a status line."""
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("error"):
            return str(body["error"])
        return f"{operation} failed with HTTP {response.status_code}"
