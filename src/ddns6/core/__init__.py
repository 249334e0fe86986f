"""
ddns6 Core Module

Address combination, per-host outcomes and DynDNS2 response formatting. The
orchestrator lives in ``ddns6.core.orchestrator``.
"""

from .address import HOST_MASK, PREFIX_LENGTH, combine, parse_prefix, parse_suffix
from .exceptions import DDNS6Error, DnsError, InvalidAddress, InvalidInterfaceId
from .outcome import AggregateResult, HostOutcome, HostResult, OutcomeKind
from .response import ResponseClass, classify, render_error, render_response

__all__ = [
    # Address combination
    "parse_prefix",
    "parse_suffix",
    "combine",
    "PREFIX_LENGTH",
    "HOST_MASK",
    # Errors
    "DDNS6Error",
    "InvalidAddress",
    "InvalidInterfaceId",
    "DnsError",
    # Outcomes
    "OutcomeKind",
    "HostOutcome",
    "HostResult",
    "AggregateResult",
    # Responses
    "ResponseClass",
    "classify",
    "render_response",
    "render_error",
]
