"""HTTP backend for the news assistant JSON API.

Usage:
    async with HttpBackendClient() as backend:
        created = await backend.create_session()
        reply = await backend.send_message(created.session_id, "What happened today?")
"""

from typing import Any, Optional
from urllib.parse import quote

import httpx
from pydantic import ValidationError as SchemaError

from newsassist.backends.base import BaseBackend
from newsassist.core.errors import BackendError
from newsassist.core.schemas import ChatRequest, ChatResponse, CreateSessionResponse, HistoryResponse
from newsassist.utils.config import get_config
from newsassist.utils.logger import get_logger

logger = get_logger(__name__)


class HttpBackendClient(BaseBackend):
    """Async client for the session/chat API.

    Attributes:
        base_url: API base path, e.g. http://localhost:3000/api
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the client.

        Args:
            base_url: API base path. Defaults to config.API_BASE_URL
            timeout: Per-request timeout in seconds. Defaults to config.REQUEST_TIMEOUT
            transport: Optional httpx transport (tests pass httpx.MockTransport)
        """
        config = get_config()
        self.base_url = (base_url or config.API_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else config.REQUEST_TIMEOUT
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=transport,
        )
        logger.info(f"HTTP backend initialized: {self.base_url} (timeout={self.timeout}s)")

    async def __aenter__(self) -> "HttpBackendClient":
        return self

    async def __aexit__(self, *args) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP connection pool."""
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Optional[dict] = None,
        allow_not_found: bool = False,
    ) -> Any:
        """Make an API request and return the decoded JSON body (or None for empty bodies)."""
        logger.debug(f"{method} {self.base_url}{path}")

        try:
            response = await self._client.request(
                method=method,
                url=path,
                headers={"Content-Type": "application/json"},
                json=json,
            )
        except httpx.TimeoutException as e:
            raise BackendError(f"{method} {path} timed out after {self.timeout}s") from e
        except httpx.HTTPError as e:
            raise BackendError(f"{method} {path} failed: {e}") from e

        if allow_not_found and response.status_code == 404:
            logger.debug(f"{method} {path}: 404, treating as already gone")
            return None

        if response.status_code >= 400:
            message = response.text or response.reason_phrase
            try:
                error_data = response.json()
                if isinstance(error_data, dict):
                    message = error_data.get("error") or error_data.get("message") or message
            except ValueError:
                pass

            raise BackendError(
                f"{method} {path} returned {response.status_code}: {message}",
                status_code=response.status_code,
            )

        if response.status_code == 204 or not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise BackendError(f"{method} {path} returned invalid JSON") from e

    async def create_session(self) -> CreateSessionResponse:
        data = await self._request("POST", "/session")
        return self._parse(CreateSessionResponse, data, "POST /session")

    async def fetch_history(self, session_id: str) -> HistoryResponse:
        data = await self._request("GET", f"/history/{quote(session_id, safe='')}")
        return self._parse(HistoryResponse, data or {}, "GET /history")

    async def send_message(self, session_id: str, text: str) -> ChatResponse:
        body = ChatRequest(session_id=session_id, message=text).model_dump(by_alias=True)
        data = await self._request("POST", "/chat", json=body)
        return self._parse(ChatResponse, data, "POST /chat")

    async def delete_session(self, session_id: str) -> None:
        await self._request(
            "DELETE",
            f"/session/{quote(session_id, safe='')}",
            allow_not_found=True,
        )

    @staticmethod
    def _parse(model, data: Any, what: str):
        try:
            return model.model_validate(data)
        except SchemaError as e:
            raise BackendError(f"Malformed response from {what}: {e.error_count()} error(s)") from e
