"""
IPv6 Address Combination

Builds full IPv6 addresses from a delegated /64 prefix and a static interface
ID. All functions here are pure.
"""

import ipaddress

from .exceptions import InvalidAddress, InvalidInterfaceId

PREFIX_LENGTH = 64
HOST_MASK = (1 << (128 - PREFIX_LENGTH)) - 1


def parse_prefix(text: str) -> ipaddress.IPv6Network:
    """Parse an IPv6 literal and keep only its upper 64 bits.

    The client's own interface ID is discarded, so any two literals that agree
    on the upper half yield the same prefix.

    Args:
        text: IPv6 address literal, e.g. ``2001:db8:1234:5678::ffff``

    Returns:
        The /64 network containing the address

    Raises:
        InvalidAddress: If the text is not a plain IPv6 address literal
    """
    if not isinstance(text, str) or not text.strip():
        raise InvalidAddress("Empty IPv6 address")

    try:
        address = ipaddress.IPv6Address(text.strip())
    except ValueError as e:
        raise InvalidAddress(f"Failed to parse IPv6 address {text!r}: {e}") from e

    if address.scope_id is not None:
        raise InvalidAddress(f"Scoped IPv6 addresses are not accepted: {text!r}")

    return ipaddress.IPv6Network((address, PREFIX_LENGTH), strict=False)


def parse_suffix(text: str) -> int:
    """Parse an interface ID into its 64-bit integer value.

    A complete IPv6 literal such as ``fe80::1`` contributes its low 64 bits.
    Otherwise the text is read as the lower hextets, so ``1``, ``::1``,
    ``::a1b2:c3d4:e5f6:7890`` and ``a1b2:c3d4:e5f6:7890`` are all accepted.
    Bare values are hextets, not decimal.

    Raises:
        InvalidInterfaceId: If the text does not describe a 64-bit interface ID
    """
    if not isinstance(text, str) or not text.strip():
        raise InvalidInterfaceId("Empty interface ID")

    text = text.strip()

    try:
        address = ipaddress.IPv6Address(text)
    except ValueError:
        address = None

    if address is not None:
        if address.scope_id:
            raise InvalidInterfaceId(f"Scoped interface IDs are not accepted: {text!r}")
        return int(address) & HOST_MASK

    try:
        value = int(ipaddress.IPv6Address(f"::{text}"))
    except ValueError as e:
        raise InvalidInterfaceId(f"Could not parse interface ID {text!r}: {e}") from e

    # more than four hextets without '::'
    if value > HOST_MASK:
        raise InvalidInterfaceId(f"Interface ID {text!r} exceeds 64 bits")

    return value


def combine(prefix: ipaddress.IPv6Network, suffix: int) -> ipaddress.IPv6Address:
    """Place the interface ID in the lower half of the prefix."""
    return ipaddress.IPv6Address(int(prefix.network_address) | (suffix & HOST_MASK))
