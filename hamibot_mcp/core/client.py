# =============================================================================
# core/client.py  —  Hamibot API Gateway Client
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Performs authenticated HTTP calls against the Hamibot API and makes every
#   outcome look the same to the caller:
#     - success  → the decoded JSON body, passed through untouched
#     - failure  → a GatewayError with a readable message
#
#   There is no third outcome.  A failed call never comes back as
#   {"data": null}; it always raises.
#
# ERROR MESSAGES:
#   Non-2xx:          "Request failed: API Error (503): overloaded"
#   Transport error:  "Request failed: <what httpx said>"
#   Bad JSON:         "Request failed: Invalid JSON response: <parser message>"
#   No message:       "Request failed: ReadTimeout" (the exception class)
#   NaN / Infinity:   rejected as invalid JSON
#
# NO RETRIES:
#   Every upstream failure is reported once, immediately.  The MCP caller
#   (usually an agent) sees the error text and decides what to do next.
# =============================================================================

import json
import logging
from typing import Any, Optional, Sequence

import httpx

from hamibot_mcp.core.config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT
from hamibot_mcp.core.errors import GatewayError, describe_error
from hamibot_mcp.core.models import ApiResponse, Device, RunResult, Script
from hamibot_mcp.core.schemas import DeviceRef, VarMap

logger = logging.getLogger(__name__)


def _reject_constant(name: str) -> Any:
    # NaN and Infinity are not JSON; the reply must stay strict JSON.
    raise ValueError(f"non-finite number {name} is not valid JSON")


class HamibotClient:
    """Async client for the Hamibot v2 REST API.

    Configuration is fixed at construction; one instance is shared by every
    tool call for the life of the process.

    Example:
        >>> client = HamibotClient("hmp_xxx")
        >>> await client.list_devices()
        {'data': [{'id': '...', 'name': 'Pixel 7', 'online': True, ...}]}
    """

    API_KEY_HEADER = "X-API-Key"

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            token: Personal access token, sent as the X-API-Key header.
            base_url: API root, without a trailing slash.
            timeout: Seconds allowed per request; None disables the timeout.
            transport: Custom httpx transport (tests pass a MockTransport).
        """
        self._token = token
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def timeout(self) -> Optional[float]:
        return self._timeout

    def _headers(self) -> dict[str, str]:
        return {
            self.API_KEY_HEADER: self._token,
            "Content-Type": "application/json",
        }

    async def _request(self, method: str, endpoint: str, payload: Optional[dict[str, Any]] = None) -> Any:
        """Send one request and return the decoded JSON body.

        Raises:
            GatewayError: On transport failure, non-2xx status, or a body
                that is not JSON.
        """
        url = f"{self._base_url}{endpoint}"
        logger.debug("%s %s", method, endpoint)

        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as http:
                response = await http.request(method, url, headers=self._headers(), json=payload)
        except httpx.HTTPError as e:
            message = f"Request failed: {describe_error(e)}"
            logger.warning("%s %s: %s", method, endpoint, message)
            raise GatewayError(message) from e

        if not response.is_success:
            body = response.text
            message = f"Request failed: API Error ({response.status_code}): {body}"
            logger.warning("%s %s: %s", method, endpoint, message)
            raise GatewayError(message, status_code=response.status_code, body=body)

        try:
            return json.loads(response.content, parse_constant=_reject_constant)
        except ValueError as e:
            message = f"Request failed: Invalid JSON response: {describe_error(e)}"
            logger.warning("%s %s: %s", method, endpoint, message)
            raise GatewayError(message, status_code=response.status_code, body=response.text) from e

    @staticmethod
    def _run_body(devices: Sequence[DeviceRef], vars: Optional[VarMap], **fields: Any) -> dict[str, Any]:
        # vars is left out entirely when not given, never sent as null.
        body = dict(fields)
        body["devices"] = [device.to_payload() for device in devices]
        if vars is not None:
            body["vars"] = vars
        return body

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------
    async def list_devices(self) -> ApiResponse[list[Device]]:
        """GET /devices"""
        return await self._request("GET", "/devices")

    async def list_scripts(self) -> ApiResponse[list[Script]]:
        """GET /scripts"""
        return await self._request("GET", "/scripts")

    async def run_script(
        self,
        script_id: str,
        devices: Sequence[DeviceRef],
        vars: Optional[VarMap] = None,
    ) -> ApiResponse[RunResult]:
        """POST /scripts/{script_id}/run with body {devices, vars}.

        script_id is assumed valid; the tool schema checks it before we get here.
        """
        return await self._request(
            "POST",
            f"/scripts/{script_id}/run",
            self._run_body(devices, vars),
        )

    async def execute(
        self,
        code: str,
        devices: Sequence[DeviceRef],
        vars: Optional[VarMap] = None,
    ) -> ApiResponse[RunResult]:
        """POST /scripts/execute with body {code, devices, vars}."""
        return await self._request(
            "POST",
            "/scripts/execute",
            self._run_body(devices, vars, code=code),
        )
