"""API client for the Hive heating cloud service.

This module provides the session handling and authenticated transport used
to talk to the Hive API: logging in, reading the node list and sending
partial node updates.
"""

from __future__ import annotations

import asyncio
import json
import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

import httpx
from homeassistant.helpers.httpx_client import create_async_httpx_client

from .const import (
    ACCEPT_MEDIA_TYPE,
    ACCESS_TOKEN_HEADER,
    API_BOOST,
    API_HEAT,
    CLIENT_HEADER,
    CLIENT_ID,
    CONTENT_TYPE_JSON,
    ENDPOINT_HEADER,
    LOGIN_URL,
    NODES_PATH,
    REQUEST_TIMEOUT,
)
from .models import HiveConfig, Node, Session

if TYPE_CHECKING:
    from datetime import timedelta

    from homeassistant.core import HomeAssistant

_LOGGER = logging.getLogger(__name__)

# HTTP status codes
HTTP_OK = 200
HTTP_UNAUTHORIZED = 401


class HiveApiClientError(Exception):
    """Base exception for Hive API client errors."""


class HiveApiAuthError(HiveApiClientError):
    """Exception raised when logging in fails."""


class HiveApiTransportError(HiveApiClientError):
    """Exception raised when a request cannot reach the API."""


class HiveApiUpstreamError(HiveApiClientError):
    """Exception raised when the API answers with an error status."""


class HiveApiDecodeError(HiveApiClientError):
    """Exception raised when the API returns a body we cannot decode."""


def create_headers(token: str, *, json_body: bool = False) -> dict[str, str]:
    """Create HTTP headers for authenticated Hive API requests.

    Args:
        token: Current session token.
        json_body: Whether the request carries a JSON body.

    Returns:
        Dictionary containing HTTP headers for API requests.

    """
    headers = {
        ACCESS_TOKEN_HEADER: token,
        CLIENT_HEADER: CLIENT_ID,
        "Accept": ACCEPT_MEDIA_TYPE,
    }
    if json_body:
        headers["Content-Type"] = CONTENT_TYPE_JSON
    return headers


def is_success(status: int) -> bool:
    """Check if HTTP status code is a 2xx success."""
    return 200 <= status < 300


def is_auth_error(status: int) -> bool:
    """Check if HTTP status code indicates an expired session."""
    return status == HTTP_UNAUTHORIZED


def base_endpoint_from_header(value: str | None) -> str | None:
    """Build the API base URL from the endpoint discovery header.

    The header carries ``host:port``; the port is dropped and https is
    always used.

    """
    if not value:
        return None
    host = value.split(":")[0].strip()
    if not host:
        return None
    return f"https://{host}"


def extract_error_reason(data: Any) -> str | None:
    """Extract the server supplied reason from a login error body."""
    reason = _get_ignore_case(_get_ignore_case(data, "error"), "reason")
    return reason if isinstance(reason, str) else None


def _get_ignore_case(data: Any, key: str) -> Any:
    if not isinstance(data, dict):
        return None
    for name, value in data.items():
        if isinstance(name, str) and name.lower() == key:
            return value
    return None


def parse_nodes(data: Any) -> list[Node]:
    """Parse the nodes endpoint body into Node objects.

    Raises:
        HiveApiDecodeError: If the body is not an object with a nodes list.

    """
    if not isinstance(data, dict) or not isinstance(data.get("nodes"), list):
        error_msg = "Unexpected nodes payload"
        raise HiveApiDecodeError(error_msg)
    return [Node.from_dict(node) for node in data["nodes"] if isinstance(node, dict)]


def build_node_update(attributes: dict[str, Any]) -> bytes:
    """Encode a partial attribute update for a single node."""
    return json.dumps({"nodes": [{"attributes": attributes}]}).encode()


def target_temperature_attributes(celsius: float) -> dict[str, Any]:
    """Attributes that set a new target temperature."""
    return {"targetHeatTemperature": {"targetValue": celsius}}


def boost_attributes(on: bool, duration: timedelta) -> dict[str, Any]:
    """Attributes that start a boost for a duration, or return to schedule."""
    if on:
        return {
            "activeHeatCoolMode": {"targetValue": API_BOOST},
            "scheduleLockDuration": {
                "targetValue": int(duration.total_seconds() // 60)
            },
        }
    return {
        "activeHeatCoolMode": {"targetValue": API_HEAT},
        "activeScheduleLock": {"targetValue": False},
    }


def create_session_client(
    hass: HomeAssistant, *, verify_ssl: bool = True
) -> httpx.AsyncClient:
    """Create HTTP client for the Hive API.

    Args:
        hass: Home Assistant instance.
        verify_ssl: Whether to verify the upstream certificate. Node updates
            are sent to a host whose certificate does not validate.

    Returns:
        Configured httpx AsyncClient.

    """
    return create_async_httpx_client(
        hass, verify_ssl=verify_ssl, timeout=REQUEST_TIMEOUT
    )


class HiveApiClient:
    """Session manager and authenticated transport for the Hive API."""

    def __init__(
        self,
        session: httpx.AsyncClient,
        insecure_session: httpx.AsyncClient,
        config: HiveConfig,
    ) -> None:
        """Initialize the client.

        Args:
            session: HTTP client used for login and reads.
            insecure_session: HTTP client without certificate checks, used
                for writes.
            config: Account credentials.

        """
        self._session = session
        self._insecure_session = insecure_session
        self._config = config
        self._login_lock = asyncio.Lock()
        self.auth: Session | None = None

    async def async_login(self) -> Session:
        """Log in and replace the current session.

        Raises:
            HiveApiAuthError: If the login fails for any reason.

        """
        async with self._login_lock:
            _LOGGER.debug("Logging in to Hive API as %s", self._config.username)
            try:
                response = await self._session.post(
                    LOGIN_URL,
                    data={
                        "username": self._config.username,
                        "password": self._config.password,
                    },
                )
            except httpx.RequestError as err:
                error_msg = f"Unable to login: {err}"
                raise HiveApiAuthError(error_msg) from err

            try:
                data = response.json()
            except ValueError as err:
                if response.status_code == HTTP_OK:
                    error_msg = f"Unable to login: {err}"
                    raise HiveApiAuthError(error_msg) from err
                data = None

            if response.status_code != HTTP_OK:
                error_msg = (
                    "Unable to login: incorrect status code "
                    f"{response.status_code} {response.reason_phrase}: "
                    f"{extract_error_reason(data) or 'no reason given'}"
                )
                raise HiveApiAuthError(error_msg)

            token = data.get("ApiSession") if isinstance(data, dict) else None
            if not token:
                error_msg = "Unable to login: invalid session token returned"
                raise HiveApiAuthError(error_msg)

            base_endpoint = base_endpoint_from_header(
                response.headers.get(ENDPOINT_HEADER)
            )
            if base_endpoint is None:
                error_msg = "Unable to login: no API endpoint returned"
                raise HiveApiAuthError(error_msg)

            self.auth = Session(
                token=token,
                base_endpoint=base_endpoint,
                authenticated_at=datetime.now(UTC),
            )
            _LOGGER.info("Logged in to Hive API at %s", base_endpoint)
            return self.auth

    async def async_get(self, path: str) -> httpx.Response:
        """Send an authenticated GET request."""
        return await self._async_request(self._session, "GET", path)

    async def async_put(self, path: str, body: bytes) -> httpx.Response:
        """Send an authenticated PUT request with a raw JSON body."""
        return await self._async_request(
            self._insecure_session, "PUT", path, content=body
        )

    async def _async_request(
        self,
        client: httpx.AsyncClient,
        method: str,
        path: str,
        content: bytes | None = None,
    ) -> httpx.Response:
        response = await self._async_send(client, method, path, content)
        if not is_auth_error(response.status_code):
            return response

        _LOGGER.info("Hive session expired, logging in again")
        await self.async_login()
        return await self._async_send(client, method, path, content)

    async def _async_send(
        self,
        client: httpx.AsyncClient,
        method: str,
        path: str,
        content: bytes | None,
    ) -> httpx.Response:
        auth = self.auth
        token = auth.token if auth else ""
        base_endpoint = auth.base_endpoint if auth else ""
        headers = create_headers(token, json_body=content is not None)

        _LOGGER.debug("%s %s", method, path)
        try:
            response = await client.request(
                method,
                f"{base_endpoint}{path}",
                headers=headers,
                content=content,
            )
        except httpx.RequestError as err:
            error_msg = f"{method} {path} failed: {err}"
            raise HiveApiTransportError(error_msg) from err
        _LOGGER.debug("%s %s returned %d", method, path, response.status_code)
        return response

    async def async_get_nodes(self) -> list[Node]:
        """Fetch and parse every node on the account.

        Raises:
            HiveApiAuthError: If re-authentication fails.
            HiveApiTransportError: If the API cannot be reached.
            HiveApiUpstreamError: If the API answers with an error status.
            HiveApiDecodeError: If the body is not valid nodes JSON.

        """
        response = await self.async_get(NODES_PATH)
        if not is_success(response.status_code):
            error_msg = f"Unable to get nodes: {response.status_code}"
            raise HiveApiUpstreamError(error_msg)

        try:
            data = response.json()
        except ValueError as err:
            error_msg = f"Unable to decode nodes: {err}"
            raise HiveApiDecodeError(error_msg) from err

        nodes = parse_nodes(data)
        _LOGGER.debug("Retrieved %d nodes from Hive API", len(nodes))
        return nodes

    async def async_update_node(
        self, node_id: str, attributes: dict[str, Any]
    ) -> httpx.Response:
        """Send a partial attribute update to a node.

        Raises:
            HiveApiAuthError: If re-authentication fails.
            HiveApiTransportError: If the API cannot be reached.
            HiveApiUpstreamError: If the API answers with an error status.

        """
        body = build_node_update(attributes)
        _LOGGER.debug("Updating node %s: %s", node_id, attributes)
        response = await self.async_put(f"{NODES_PATH}/{node_id}", body)
        if not is_success(response.status_code):
            error_msg = f"Unable to update node {node_id}: {response.status_code}"
            raise HiveApiUpstreamError(error_msg)
        return response
