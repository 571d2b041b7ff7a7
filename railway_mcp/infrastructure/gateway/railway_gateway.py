"""
Railway GraphQL Gateway

Architectural Intent:
- Implements ResourceGatewayPort over the platform's public GraphQL API
- One instance per tool invocation, bound to that invocation's credential
- Normalizes HTTP, transport and GraphQL errors into the domain error kinds

Design Decisions:
- httpx.AsyncClient with a fixed timeout; no retries (callers own retry policy)
- The client is created lazily so a gateway without a credential never opens
  a connection
- The credential is never logged; DEBUG logs carry the operation name only

Error Mapping:
- no credential, HTTP 401/403, "Not Authorized" GraphQL errors -> UnauthenticatedError
- HTTP 404, "not found" GraphQL errors                         -> NotFoundError
- HTTP 400/422                                                 -> InvalidRequestError
- anything else (timeouts, 5xx, other GraphQL errors)          -> RemoteFailureError
"""

import logging
from typing import Any, Optional

import httpx

from railway_mcp.domain.errors import (
    InvalidRequestError,
    NotFoundError,
    RailwayError,
    RemoteFailureError,
    UnauthenticatedError,
)
from railway_mcp.domain.ports.gateway_port import Operation
from railway_mcp.infrastructure.gateway.operations import DOCUMENTS

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "https://backboard.railway.app/graphql/v2"

_UNAUTHENTICATED_MARKERS = ("not authorized", "unauthorized", "unauthenticated")
_NOT_FOUND_MARKERS = ("not found", "does not exist")


def _classify_graphql_errors(errors: list[dict[str, Any]]) -> RailwayError:
    messages = [str(e.get("message", "")) for e in errors if isinstance(e, dict)]
    message = "; ".join(m for m in messages if m) or "Unknown GraphQL error"
    lowered = message.lower()
    details = {"errors": errors}
    if any(marker in lowered for marker in _UNAUTHENTICATED_MARKERS):
        return UnauthenticatedError(message, details)
    if any(marker in lowered for marker in _NOT_FOUND_MARKERS):
        return NotFoundError(message, details)
    return RemoteFailureError(message, details)


def _classify_status(response: httpx.Response) -> RailwayError:
    status = response.status_code
    body = response.text[:500]
    message = f"Railway API returned HTTP {status}: {body}"
    details = {"status_code": status}
    if status in (401, 403):
        return UnauthenticatedError(message, details)
    if status == 404:
        return NotFoundError(message, details)
    if status in (400, 422):
        return InvalidRequestError(message, details)
    return RemoteFailureError(message, details)


class RailwayGateway:
    """GraphQL gateway bound to a single access token."""

    def __init__(
        self,
        token: Optional[str],
        endpoint: str = DEFAULT_ENDPOINT,
        timeout_seconds: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._token = token or None
        self.endpoint = endpoint
        self.timeout_seconds = timeout_seconds
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def is_authenticated(self) -> bool:
        return self._token is not None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout_seconds),
                transport=self._transport,
                headers={
                    "Authorization": f"Bearer {self._token}",
                    "Content-Type": "application/json",
                },
            )
        return self._client

    async def execute(
        self, operation: Operation, parameters: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        if self._token is None:
            raise UnauthenticatedError(
                "Access token required. Provide a Railway API token for this call."
            )

        document = DOCUMENTS.get(operation)
        if document is None:
            raise InvalidRequestError(f"Unsupported operation: {operation}")

        logger.debug(
            "Railway API call: %s", operation.value, extra={"operation": operation.value}
        )
        try:
            response = await self._get_client().post(
                self.endpoint,
                json={"query": document, "variables": parameters or {}},
            )
        except httpx.TimeoutException as e:
            raise RemoteFailureError(
                f"Railway API timed out during {operation.value}: {e}"
            ) from e
        except httpx.HTTPError as e:
            raise RemoteFailureError(
                f"Railway API request failed during {operation.value}: {e}"
            ) from e

        if response.status_code >= 400:
            raise _classify_status(response)

        try:
            payload = response.json()
        except ValueError as e:
            raise RemoteFailureError(
                f"Railway API returned invalid JSON for {operation.value}"
            ) from e
        if not isinstance(payload, dict):
            raise RemoteFailureError(
                f"Railway API returned an unexpected payload for {operation.value}"
            )

        if payload.get("errors"):
            raise _classify_graphql_errors(payload["errors"])

        return payload.get("data") or {}

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "RailwayGateway":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
