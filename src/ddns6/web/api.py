"""
ddns6 HTTP API

Provides the endpoints:
- DynDNS2 update (``/update?prefix=<ipv6>``)
- Liveness check (``/``)
- Cache and host status (``/api/status``)
"""

from datetime import datetime, timezone
from typing import Sequence

from aiohttp import web
from aiohttp.web import Request, Response

from ..cache import StateCache
from ..config.schema import HostConfig
from ..core.exceptions import InvalidAddress
from ..core.orchestrator import Orchestrator
from ..core.response import render_error, render_response
from ..dns_logging import get_logger


def setup_api_routes(
    app: web.Application,
    orchestrator: Orchestrator,
    cache: StateCache,
    hosts: Sequence[HostConfig],
) -> None:
    """Setup API routes."""
    api = APIHandler(orchestrator, cache, hosts)

    app.router.add_get("/update", api.update)
    app.router.add_get("/", api.health_check)
    app.router.add_get("/api/status", api.get_status)


class APIHandler:
    """Handles all HTTP endpoints."""

    def __init__(
        self,
        orchestrator: Orchestrator,
        cache: StateCache,
        hosts: Sequence[HostConfig],
    ):
        """Initialize API handler."""
        self.orchestrator = orchestrator
        self.cache = cache
        self.hosts = list(hosts)
        self.logger = get_logger("api")

    async def update(self, request: Request) -> Response:
        """Handle a DynDNS2 update request.

        Outcomes are always reported with status 200 and a plain-text body;
        only a structurally malformed query gets a 4xx.
        """
        prefixes = request.query.getall("prefix", [])

        if len(prefixes) > 1:
            raise web.HTTPBadRequest(text="Multiple prefix parameters\n")

        if not prefixes or not prefixes[0].strip():
            self.logger.warning("Update request without prefix", remote=request.remote)
            return web.Response(text=render_error("Missing prefix parameter"))

        self.logger.info(
            "Received update request", remote=request.remote, prefix=prefixes[0]
        )

        try:
            result = await self.orchestrator.handle_update(prefixes[0])
        except InvalidAddress as e:
            self.logger.error(
                "Failed to extract IPv6 address", prefix=prefixes[0], error=str(e)
            )
            return web.Response(text=render_error("Invalid IPv6 address"))

        body = render_response(result)
        self.logger.info(
            "Update request completed",
            updated=len(result.updated),
            failed=len(result.failed),
            response=body,
        )
        return web.Response(text=body)

    async def health_check(self, request: Request) -> Response:
        """Liveness check."""
        return web.Response(text="OK")

    async def get_status(self, request: Request) -> Response:
        """Get configured hosts and the published-address cache."""
        snapshot = await self.cache.snapshot()

        return web.json_response(
            {
                "hosts": [
                    {
                        "hostname": host.hostname,
                        "interface_id": host.interface_id,
                        "published": snapshot[host.hostname].to_dict()
                        if host.hostname in snapshot
                        else None,
                    }
                    for host in self.hosts
                ],
                "cache": await self.cache.get_stats(),
                "timestamp": datetime.now(timezone.utc).isoformat(),
            }
        )
