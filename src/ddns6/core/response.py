"""
DynDNS2 Response Formatting

Reduces the per-host outcomes of one request to a single protocol response
line. Everything here is pure.
"""

from enum import Enum
from typing import Iterable

from .outcome import AggregateResult, HostResult


class ResponseClass(Enum):
    """DynDNS2 response classes"""

    GOOD = "good"
    NOCHG = "nochg"
    PARTIAL = "partial"
    ERROR = "911"


def classify(result: AggregateResult) -> ResponseClass:
    """Classify the outcomes of one request.

    A single updated host makes the whole request ``good``; ``nochg`` is only
    reported when every host was unchanged.
    """
    failed = result.failed
    succeeded = result.succeeded

    if failed and succeeded:
        return ResponseClass.PARTIAL
    if failed:
        return ResponseClass.ERROR
    if result.updated:
        return ResponseClass.GOOD
    return ResponseClass.NOCHG


def _join_addresses(results: Iterable[HostResult]) -> str:
    return ", ".join(f"{r.hostname}={r.address}" for r in results)


def render_error(message: str) -> str:
    """Render a request-level error line"""
    return f"{ResponseClass.ERROR.value} {message}"


def render_response(result: AggregateResult) -> str:
    """Render the protocol response line in configuration order"""
    response_class = classify(result)

    if response_class is ResponseClass.PARTIAL:
        failed = ", ".join(r.hostname for r in result.failed)
        return (
            f"partial success: {_join_addresses(result.succeeded)} "
            f"| failed: {failed}"
        )

    if response_class is ResponseClass.ERROR:
        return render_error(
            f"Failed to update: {', '.join(r.hostname for r in result.failed)}"
        )

    return f"{response_class.value} {_join_addresses(result.results)}"
