"""
ddns6 Main Entry Point

This script provides the main entry point for running the update service.
"""

import argparse
import asyncio
import signal
import sys
from typing import Optional

from ddns6.cache import StateCache
from ddns6.config.loader import ConfigLoader
from ddns6.config.schema import DDNS6Config
from ddns6.core.orchestrator import Orchestrator
from ddns6.dns_logging import get_logger, log_exception, setup_logging
from ddns6.updater import CloudflareUpdater
from ddns6.web import WebServer


class DDNS6App:
    """ddns6 Application"""

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path or "config.yaml"
        self.config: Optional[DDNS6Config] = None
        self.cache: Optional[StateCache] = None
        self.updater: Optional[CloudflareUpdater] = None
        self.orchestrator: Optional[Orchestrator] = None
        self.web_server: Optional[WebServer] = None
        self._shutdown_event = asyncio.Event()
        self.logger = None

    def initialize(self) -> None:
        """Initialize the application.

        Invalid configuration, including unparsable interface IDs, raises here
        so the service never starts with a broken host table.
        """
        self.config = ConfigLoader(self.config_path).load_config()

        setup_logging(self.config.logging)
        self.logger = get_logger("ddns6_app")

        self.logger.info(
            "Configuration loaded",
            config=self.config_path,
            hosts=len(self.config.hosts),
            bind_address=self.config.server.bind_address,
            port=self.config.server.port,
            zone_id=self.config.cloudflare.zone_id,
        )

        cloudflare = self.config.cloudflare
        self.cache = StateCache()
        self.updater = CloudflareUpdater(
            api_token=cloudflare.api_token,
            zone_id=cloudflare.zone_id,
            api_base_url=cloudflare.api_base_url,
            request_timeout=cloudflare.request_timeout,
            max_retries=cloudflare.max_retries,
            retry_delay=cloudflare.retry_delay,
        )
        self.orchestrator = Orchestrator(
            hosts=self.config.hosts,
            cache=self.cache,
            updater=self.updater,
            ttl=cloudflare.ttl,
            publish_timeout=self.config.server.publish_timeout,
        )
        self.web_server = WebServer(
            self.config.server, self.orchestrator, self.cache, self.config.hosts
        )

    async def start(self) -> None:
        """Start the service and run until a shutdown signal arrives"""
        if not self.web_server:
            self.initialize()

        try:
            await self.web_server.start()

            loop = asyncio.get_running_loop()
            for sig in [signal.SIGTERM, signal.SIGINT]:
                loop.add_signal_handler(sig, self._signal_handler, sig)

            await self._shutdown_event.wait()

        except Exception as e:
            log_exception(self.logger, "Error running ddns6", e)
            raise
        finally:
            await self.stop()

    async def stop(self) -> None:
        """Stop the service"""
        self.logger.info("Shutting down ddns6")

        if self.web_server:
            await self.web_server.stop()

        if self.updater:
            await self.updater.close()

        self.logger.info("ddns6 shut down gracefully")

    def _signal_handler(self, sig: signal.Signals) -> None:
        """Handle shutdown signals"""
        self.logger.info("Received shutdown signal", signal=sig.name)
        self._shutdown_event.set()


def check_config(config_path: str) -> int:
    """Validate a configuration file and print the host table"""
    try:
        config = ConfigLoader(config_path).load_config()
    except Exception as e:
        print(f"Invalid configuration: {e}")
        return 1

    print(f"Configuration OK: {len(config.hosts)} host(s)")
    for host in config.hosts:
        print(f"  {host.hostname}  interface_id={host.interface_id}")
    return 0


async def main(argv=None) -> int:
    """Main function"""
    parser = argparse.ArgumentParser(
        description="IPv6 DynDNS daemon that combines dynamic prefixes with "
        "static interface IDs"
    )
    parser.add_argument(
        "--config", "-c", default="config.yaml", help="Configuration file path"
    )
    parser.add_argument(
        "--check-config",
        action="store_true",
        help="Validate the configuration and exit",
    )

    args = parser.parse_args(argv)

    if args.check_config:
        return check_config(args.config)

    app = DDNS6App(args.config)
    try:
        app.initialize()
    except Exception as e:
        print(f"Failed to initialize ddns6: {e}")
        return 1

    await app.start()
    return 0


def run() -> None:
    """Console script entry point"""
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        print("\nddns6 interrupted")


if __name__ == "__main__":
    run()
