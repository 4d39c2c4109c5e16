"""HTTP client for the community discussion API.

The caller supplies the bearer credential explicitly, either when the client
is constructed or per call; nothing is read from ambient storage. Every
response is validated against the shared schemas before it is returned.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

import httpx
from pydantic import ValidationError

from safepath_community.core.settings import settings
from safepath_community.schemas.discussion import (
    DiscussionCreate,
    DiscussionEnvelope,
    DiscussionListEnvelope,
    DiscussionResponse,
)
from safepath_community.schemas.vote import VoteIntent, VoteResult

# Configure logger for this module
logger = logging.getLogger(__name__)

HTTP_UNAUTHORIZED = 401


class CommunityApiError(RuntimeError):
    """Base exception raised for failed community API calls."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class CommunityAuthError(CommunityApiError):
    """Raised when the server rejects the request at the authorization gate."""


@dataclass(frozen=True)
class CommunityClientConfig:
    """Immutable configuration for the community API client."""

    base_url: str
    timeout_seconds: float


def load_client_config() -> CommunityClientConfig:
    """Build configuration object from global settings."""
    return CommunityClientConfig(
        base_url=settings.community_api_base_url,
        timeout_seconds=float(settings.community_api_timeout_seconds),
    )


class CommunityApiClient:
    """Async wrapper around the ``/community`` endpoints."""

    def __init__(
        self,
        token: str | None = None,
        *,
        config: CommunityClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.token = token
        self.config = config or load_client_config()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._client_lock = asyncio.Lock()

    async def __aenter__(self) -> CommunityApiClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def _ensure_client(self) -> httpx.AsyncClient:
        async with self._client_lock:
            if self._client is None:
                self._client = httpx.AsyncClient(
                    base_url=self.config.base_url,
                    timeout=httpx.Timeout(self.config.timeout_seconds),
                    transport=self._transport,
                )
        return self._client

    def _build_headers(self, token: str | None) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        credential = token if token is not None else self.token
        if credential:
            headers["Authorization"] = f"Bearer {credential}"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json_data: Any | None = None,
        token: str | None = None,
    ) -> Any:
        client = await self._ensure_client()
        endpoint = f"{method} {path}"

        try:
            response = await client.request(
                method,
                path,
                json=json_data,
                headers=self._build_headers(token),
            )
        except httpx.HTTPError as exc:
            logger.warning("Community API request %s failed: %s", endpoint, exc)
            raise CommunityApiError(f"Request failed: {exc}") from exc

        if response.is_error:
            message = _error_message(response)
            error_cls = (
                CommunityAuthError
                if response.status_code == HTTP_UNAUTHORIZED
                else CommunityApiError
            )
            raise error_cls(message, status_code=response.status_code)

        try:
            return response.json()
        except ValueError as exc:
            raise CommunityApiError(
                f"Malformed response body from {endpoint}",
                status_code=response.status_code,
            ) from exc

    async def list_discussions(self, *, token: str | None = None) -> list[DiscussionResponse]:
        """Fetch the full discussion collection."""
        body = await self._request("GET", "/community/discussions", token=token)
        try:
            envelope = DiscussionListEnvelope.model_validate(body)
        except ValidationError as exc:
            raise CommunityApiError("Unexpected discussion list response") from exc
        return envelope.data.discussions

    async def create_discussion(
        self,
        data: DiscussionCreate,
        *,
        token: str | None = None,
    ) -> DiscussionResponse:
        """Submit a new discussion and return the stored record."""
        body = await self._request(
            "POST",
            "/community/discussions",
            json_data=data.model_dump(by_alias=True, mode="json"),
            token=token,
        )
        try:
            envelope = DiscussionEnvelope.model_validate(body)
        except ValidationError as exc:
            raise CommunityApiError("Unexpected create discussion response") from exc
        return envelope.data.discussion

    async def cast_vote(self, intent: VoteIntent, *, token: str | None = None) -> VoteResult:
        """Send a vote intent; the returned tallies are informational only."""
        body = await self._request(
            "POST",
            "/community/vote",
            json_data=intent.model_dump(by_alias=True, mode="json"),
            token=token,
        )
        try:
            return VoteResult.model_validate(body)
        except ValidationError as exc:
            raise CommunityApiError("Unexpected vote response") from exc

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None


def _error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return f"Community API responded with {response.status_code}"
    if isinstance(payload, dict):
        detail = payload.get("detail") or payload.get("message")
        if isinstance(detail, str):
            return detail
    return f"Community API responded with {response.status_code}"
