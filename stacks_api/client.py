"""
Stacks API Client - aiohttp client for the Hiro Stacks API.

Endpoints used:
- POST /v2/contracts/call-read/{principal}/{contract}/{function}
- GET  /extended/v1/address/{principal}/balances
- GET  /v2/info
"""

import asyncio
import logging
import time
from typing import Any, Optional, Sequence

import aiohttp

from stacks_api.base import BaseStacksApi
from stacks_api.clarity import ClarityValue, decode_hex
from stacks_api.exceptions import (
    ClarityDecodeError,
    ContractNotFoundError,
    FunctionNotAvailableError,
    NetworkUnreachableError,
    RateLimitError,
    StacksApiError,
)
from stacks_api.models import AccountBalance, Network, get_network_config


logger = logging.getLogger(__name__)


# call-read causes that mean the contract itself is missing
_MISSING_CONTRACT_MARKERS = ("NoSuchContract", "no such contract")


class StacksApiClient(BaseStacksApi):
    """
    Read-only Stacks API client.

    One HTTP session is shared by all networks; the base URL is picked per
    call from ``base_urls`` (defaults to the public Hiro endpoints).
    """

    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        base_urls: Optional[dict[Network, str]] = None,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> None:
        self._base_urls = {
            network: get_network_config(network).url for network in Network
        }
        if base_urls:
            self._base_urls.update(base_urls)
        self._timeout = timeout
        self._session = session
        self._owns_session = session is None
        self._last_latency_ms: Optional[float] = None

    def base_url(self, network: Network) -> str:
        return self._base_urls[network].rstrip("/")

    @property
    def last_latency_ms(self) -> Optional[float]:
        return self._last_latency_ms

    # ─────────────────────────────────────────────────────────────
    # Read interface
    # ─────────────────────────────────────────────────────────────

    async def call_read_only(
        self,
        principal: str,
        contract_name: str,
        function_name: str,
        args: Sequence[str],
        sender: str,
        network: Network,
    ) -> ClarityValue:
        """Call a read-only function and decode its result."""
        contract_id = f"{principal}.{contract_name}"
        url = (
            f"{self.base_url(network)}/v2/contracts/call-read/"
            f"{principal}/{contract_name}/{function_name}"
        )
        payload = await self._make_request(
            "POST",
            url,
            network,
            json_body={"sender": sender, "arguments": list(args)},
        )

        if not payload.get("okay"):
            cause = str(payload.get("cause") or "unknown")
            if any(marker in cause for marker in _MISSING_CONTRACT_MARKERS):
                raise ContractNotFoundError(
                    message=f"Contract {contract_id} not found",
                    network=network.value,
                    request_url=url,
                    context={"cause": cause},
                )
            raise FunctionNotAvailableError(
                message=f"Read-only call {function_name} rejected",
                function_name=function_name,
                contract_id=contract_id,
                cause=cause,
                network=network.value,
            )

        result = payload.get("result")
        if not isinstance(result, str):
            raise ClarityDecodeError(f"Missing result for {function_name}")
        return decode_hex(result)

    async def fetch_account_balance(
        self,
        address: str,
        network: Network,
    ) -> AccountBalance:
        """Fetch balances for a principal or contract identifier."""
        url = f"{self.base_url(network)}/extended/v1/address/{address}/balances"
        payload = await self._make_request("GET", url, network)
        return AccountBalance.from_api(payload)

    async def get_latest_block_height(self, network: Network) -> int:
        """Fetch the chain tip height from the node info endpoint."""
        url = f"{self.base_url(network)}/v2/info"
        payload = await self._make_request("GET", url, network)
        try:
            return int(payload["stacks_tip_height"])
        except (KeyError, TypeError, ValueError) as e:
            raise StacksApiError(
                message="Node info response has no stacks_tip_height",
                network=network.value,
                request_url=url,
                original_error=e,
            )

    # ─────────────────────────────────────────────────────────────
    # HTTP Helpers
    # ─────────────────────────────────────────────────────────────

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self._timeout),
                headers=self._get_default_headers(),
            )
            self._owns_session = True
        return self._session

    def _get_default_headers(self) -> dict[str, str]:
        """Get default HTTP headers."""
        return {
            "Accept": "application/json",
            "User-Agent": "StacksDaoViewer/1.0",
        }

    async def _make_request(
        self,
        method: str,
        url: str,
        network: Network,
        json_body: Optional[dict[str, Any]] = None,
    ) -> dict[str, Any]:
        """Make HTTP request with error mapping."""
        session = await self._get_session()

        start_time = time.time()
        try:
            async with session.request(method, url, json=json_body) as response:
                self._last_latency_ms = (time.time() - start_time) * 1000

                if response.status == 429:
                    retry_after = response.headers.get("Retry-After")
                    raise RateLimitError(
                        message="Rate limit exceeded",
                        network=network.value,
                        retry_after_seconds=int(retry_after) if retry_after and retry_after.isdigit() else None,
                        request_url=url,
                    )

                if response.status == 404:
                    raise ContractNotFoundError(
                        message="Resource not found",
                        network=network.value,
                        status_code=404,
                        request_url=url,
                    )

                if response.status >= 400:
                    body = await response.text()
                    raise StacksApiError(
                        message=f"HTTP {response.status}",
                        network=network.value,
                        status_code=response.status,
                        request_url=url,
                        context={"response_body": body[:500]},
                    )

                try:
                    return await response.json(content_type=None)
                except ValueError as e:
                    raise StacksApiError(
                        message="Invalid JSON response",
                        network=network.value,
                        status_code=response.status,
                        request_url=url,
                        original_error=e,
                    )

        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning(f"Stacks API unreachable ({network.value}): {e}")
            raise NetworkUnreachableError(
                message=f"Connection error: {e}",
                network=network.value,
                request_url=url,
                original_error=e,
            )

    # ─────────────────────────────────────────────────────────────
    # Lifecycle
    # ─────────────────────────────────────────────────────────────

    async def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(networks={[n.value for n in self._base_urls]})>"
