"""
ddns6 Web Server

This module provides the HTTP server using aiohttp, with request logging and
error handling middleware around the API routes.
"""

import asyncio
from typing import Optional, Sequence

from aiohttp import web
from aiohttp.web import Application

from ..cache import StateCache
from ..config.schema import HostConfig, ServerConfig
from ..core.orchestrator import Orchestrator
from ..dns_logging import get_logger, log_exception
from .api import setup_api_routes


class WebServer:
    """ddns6 HTTP server"""

    def __init__(
        self,
        config: ServerConfig,
        orchestrator: Orchestrator,
        cache: StateCache,
        hosts: Sequence[HostConfig],
        debug: bool = False,
    ):
        """Initialize web server.

        Args:
            config: Server configuration
            orchestrator: Update pipeline invoked by ``/update``
            cache: Published-address cache exposed by ``/api/status``
            hosts: Configured host mappings
            debug: Include exception messages in 500 responses
        """
        self.config = config
        self.orchestrator = orchestrator
        self.cache = cache
        self.hosts = list(hosts)
        self.debug = debug
        self.logger = get_logger("web_server")

        self.app: Optional[Application] = None
        self.runner: Optional[web.AppRunner] = None
        self.site: Optional[web.TCPSite] = None

    def setup_application(self) -> Application:
        """Setup aiohttp application with routes and middleware."""
        app = web.Application(
            middlewares=[
                self._create_logging_middleware(),
                self._create_error_middleware(),
            ]
        )

        setup_api_routes(app, self.orchestrator, self.cache, self.hosts)

        return app

    def _create_logging_middleware(self):
        """Create logging middleware."""
        logger = self.logger

        @web.middleware
        async def logging_middleware(request, handler):
            """Log HTTP requests."""
            start_time = asyncio.get_running_loop().time()

            try:
                response = await handler(request)
            except web.HTTPException as ex:
                process_time = asyncio.get_running_loop().time() - start_time
                logger.info(
                    "HTTP request",
                    method=request.method,
                    path=request.path,
                    remote=request.remote,
                    status=ex.status,
                    response_time_ms=round(process_time * 1000, 2),
                )
                raise

            process_time = asyncio.get_running_loop().time() - start_time
            logger.info(
                "HTTP request",
                method=request.method,
                path=request.path,
                remote=request.remote,
                status=response.status,
                response_time_ms=round(process_time * 1000, 2),
            )
            return response

        return logging_middleware

    def _create_error_middleware(self):
        """Create error handling middleware."""
        logger = self.logger
        debug = self.debug

        @web.middleware
        async def error_middleware(request, handler):
            """Handle unexpected errors gracefully."""
            try:
                return await handler(request)
            except web.HTTPException:
                # aiohttp renders these itself
                raise
            except Exception as ex:
                log_exception(
                    logger,
                    "Unhandled error in web server",
                    ex,
                    method=request.method,
                    path=request.path,
                )

                return web.json_response(
                    {
                        "error": "Internal server error",
                        "message": str(ex)
                        if debug
                        else "An unexpected error occurred",
                    },
                    status=500,
                )

        return error_middleware

    async def start(self) -> None:
        """Start the web server."""
        if self.runner:
            self.logger.warning("Web server is already running")
            return

        try:
            self.app = self.setup_application()

            self.runner = web.AppRunner(self.app)
            await self.runner.setup()

            self.site = web.TCPSite(
                self.runner,
                host=self.config.bind_address,
                port=self.config.port,
            )
            await self.site.start()

            self.logger.info(
                "Web server started",
                host=self.config.bind_address,
                port=self.config.port,
                update_endpoint=f"http://{self.config.bind_address}:{self.config.port}/update",
            )

        except Exception as ex:
            self.logger.error("Failed to start web server", error=str(ex))
            await self.stop()
            raise

    async def stop(self) -> None:
        """Stop the web server."""
        self.logger.info("Stopping web server")

        if self.site:
            await self.site.stop()
            self.site = None

        if self.runner:
            await self.runner.cleanup()
            self.runner = None

        self.app = None

        self.logger.info("Web server stopped")

    def health_check(self) -> dict:
        """Get web server health status."""
        return {"status": "healthy" if self.runner else "stopped"}
