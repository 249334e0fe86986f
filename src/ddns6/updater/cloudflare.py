"""
Cloudflare DNS Updater

Publishes AAAA records through the Cloudflare v4 REST API using aiohttp.
"""

import asyncio
import ipaddress
import json
from typing import Any, Dict, Optional

import aiohttp

from ..config.schema import DEFAULT_API_BASE_URL
from ..core.exceptions import DnsError
from ..dns_logging import get_logger


class _RetryableError(DnsError):
    """Transport failure or 5xx response worth another attempt"""


class CloudflareUpdater:
    """DnsUpdater backed by a single Cloudflare zone"""

    def __init__(
        self,
        api_token: str,
        zone_id: str,
        api_base_url: str = DEFAULT_API_BASE_URL,
        request_timeout: float = 10.0,
        max_retries: int = 2,
        retry_delay: float = 0.5,
    ):
        """
        Initialize the Cloudflare client

        Args:
            api_token: API token with DNS edit permission for the zone
            zone_id: Cloudflare zone identifier
            api_base_url: Base URL of the v4 API
            request_timeout: Timeout for a single HTTP request in seconds
            max_retries: Extra attempts after a transient failure
            retry_delay: Initial backoff delay, doubled on each retry
        """
        self.api_token = api_token
        self.zone_id = zone_id
        self.api_base_url = api_base_url.rstrip("/")
        self.request_timeout = request_timeout
        self.max_retries = max_retries
        self.retry_delay = retry_delay

        self._session: Optional[aiohttp.ClientSession] = None
        self.logger = get_logger("cloudflare")

    @property
    def records_url(self) -> str:
        return f"{self.api_base_url}/zones/{self.zone_id}/dns_records"

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers={"Authorization": f"Bearer {self.api_token}"},
                timeout=aiohttp.ClientTimeout(total=self.request_timeout),
            )
        return self._session

    async def close(self) -> None:
        """Close the underlying HTTP session"""
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def publish(
        self, hostname: str, address: ipaddress.IPv6Address, ttl: int
    ) -> None:
        """Create or update the AAAA record for a hostname"""
        self.logger.info("Updating AAAA record", hostname=hostname, address=str(address))

        record = await self._find_aaaa_record(hostname)
        payload = {
            "type": "AAAA",
            "name": hostname,
            "content": str(address),
            "ttl": ttl,
            "proxied": False,
        }

        if record:
            self.logger.debug(
                "Found existing record", hostname=hostname, record_id=record["id"]
            )
            await self._request(
                "PUT", f"{self.records_url}/{record['id']}", "update record", payload
            )
        else:
            self.logger.debug("No existing record found, creating", hostname=hostname)
            await self._request("POST", self.records_url, "create record", payload)

        self.logger.info(
            "Successfully updated AAAA record", hostname=hostname, address=str(address)
        )

    async def _find_aaaa_record(self, hostname: str) -> Optional[Dict[str, Any]]:
        """Look up the first AAAA record with this name, if any"""
        result = await self._request(
            "GET",
            self.records_url,
            "list records",
            params={"type": "AAAA", "name": hostname},
        )
        if isinstance(result, list) and result:
            return result[0]
        return None

    async def _request(
        self,
        method: str,
        url: str,
        action: str,
        payload: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, str]] = None,
    ) -> Any:
        """Perform an API call with retries and return its ``result`` field"""
        delay = self.retry_delay
        attempt = 0

        while True:
            try:
                return await self._request_once(method, url, action, payload, params)
            except _RetryableError as e:
                if attempt >= self.max_retries:
                    raise DnsError(
                        f"Failed to {action} after {attempt + 1} attempts: {e}"
                    ) from e

                attempt += 1
                self.logger.warning(
                    "Cloudflare request failed, retrying",
                    action=action,
                    attempt=attempt,
                    delay=delay,
                    error=str(e),
                )
                await asyncio.sleep(delay)
                delay *= 2

    async def _request_once(
        self,
        method: str,
        url: str,
        action: str,
        payload: Optional[Dict[str, Any]],
        params: Optional[Dict[str, str]],
    ) -> Any:
        session = self._get_session()

        try:
            async with session.request(
                method, url, json=payload, params=params
            ) as response:
                status = response.status
                body = await response.text()
        except asyncio.TimeoutError as e:
            raise _RetryableError(f"request timed out: {method} {url}") from e
        except aiohttp.ClientError as e:
            raise _RetryableError(f"HTTP request error: {e}") from e

        if status >= 500:
            self.logger.error("Cloudflare API error", status=status, body=body)
            raise _RetryableError(f"Failed to {action}: {status} - {body}")

        if not 200 <= status < 300:
            self.logger.error("Cloudflare API error", status=status, body=body)
            raise DnsError(f"Failed to {action}: {status} - {body}")

        try:
            data = json.loads(body)
        except json.JSONDecodeError as e:
            self.logger.error(
                "Failed to parse Cloudflare response", error=str(e), body=body
            )
            raise DnsError(f"Failed to parse response: {e}") from e

        if not isinstance(data, dict) or not data.get("success"):
            errors = (data.get("errors") or []) if isinstance(data, dict) else []
            error_msg = ", ".join(
                f"{err.get('code')}: {err.get('message')}" for err in errors
            )
            raise DnsError(f"Cloudflare API returned errors: {error_msg}")

        return data.get("result")
