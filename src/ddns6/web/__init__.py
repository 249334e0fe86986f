"""
ddns6 Web Module

This module provides the HTTP interface of the service:
- DynDNS2 update endpoint
- Liveness and status endpoints
"""

from .server import WebServer

__all__ = ["WebServer"]
