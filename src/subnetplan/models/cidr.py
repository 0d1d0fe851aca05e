"""
CIDR blocks and deterministic subnet allocation.

A parent block is carved into equally sized children by adding extension
bits to its prefix length. The allocation index selects which child, so the
same (parent, extra_bits, index) always yields the same range and two
different indices never overlap.

Layout: PARENT_PREFIX | EXTRA_BITS (index) | HOST_BITS

Examples:
- 172.16.0.0/16 with 4 extra bits (16 children of /20):
  - Index 0: 172.16.0.0/20
  - Index 1: 172.16.16.0/20
  - Index 15: 172.16.240.0/20

- 10.0.0.0/8 with 8 extra bits (256 children of /16):
  - Index 1: 10.1.0.0/16
  - Index 255: 10.255.0.0/16
"""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass

from subnetplan.exceptions import AllocationOverflow

IPNetwork = ipaddress.IPv4Network | ipaddress.IPv6Network


@dataclass(frozen=True)
class CIDRBlock:
    """
    An address prefix plus mask length.

    Attributes:
        network: Normalized network (host bits cleared)
    """

    network: IPNetwork

    @classmethod
    def parse(cls, text: str) -> CIDRBlock:
        """
        Parse a block in ``address/prefix`` notation.

        Host bits are cleared, so ``10.1.2.3/16`` parses as ``10.1.0.0/16``.

        Raises:
            ValueError: If the text is not a valid IPv4/IPv6 CIDR
        """
        text = text.strip()
        if "/" not in text:
            raise ValueError(f"Missing prefix length in '{text}'")

        try:
            network = ipaddress.ip_network(text, strict=False)
        except ValueError as e:
            raise ValueError(f"Invalid CIDR block '{text}': {e}")

        return cls(network=network)

    @property
    def address(self) -> int:
        """Network address as an unsigned integer."""
        return int(self.network.network_address)

    @property
    def prefix_length(self) -> int:
        return self.network.prefixlen

    @property
    def address_width(self) -> int:
        """Total address bits (32 for IPv4, 128 for IPv6)."""
        return self.network.max_prefixlen

    @property
    def num_addresses(self) -> int:
        return self.network.num_addresses

    def contains(self, other: CIDRBlock) -> bool:
        """Whether ``other`` lies entirely inside this block."""
        return (
            self.network.version == other.network.version
            and other.network.subnet_of(self.network)
        )

    def overlaps(self, other: CIDRBlock) -> bool:
        return self.network.overlaps(other.network)

    def __str__(self) -> str:
        return str(self.network)

    def __repr__(self) -> str:
        return f"CIDRBlock({self})"


def max_children(parent: CIDRBlock, extra_bits: int) -> int:
    """
    Number of children ``extra_bits`` can address inside ``parent``.

    Returns 0 when the resulting prefix would exceed the address width.
    """
    if extra_bits < 0 or parent.prefix_length + extra_bits > parent.address_width:
        return 0
    return 2**extra_bits


def allocate(parent: CIDRBlock, extra_bits: int, index: int) -> CIDRBlock:
    """
    Compute the ``index``-th child of ``parent`` with ``extra_bits`` more
    prefix bits.

    Args:
        parent: Block to subdivide
        extra_bits: Bits added to the parent prefix length
        index: Zero-based child selector, must fit in ``extra_bits`` bits

    Returns:
        Child block fully contained in ``parent``

    Raises:
        AllocationOverflow: If the child prefix exceeds the address width or
            the index cannot be represented in ``extra_bits`` bits
    """
    width = parent.address_width

    if extra_bits < 0:
        raise AllocationOverflow(
            index, 0, f"Extension bits must be non-negative, got {extra_bits}"
        )

    child_prefix = parent.prefix_length + extra_bits
    if child_prefix > width:
        raise AllocationOverflow(
            index,
            width,
            f"Cannot extend {parent} by {extra_bits} bit(s): "
            f"prefix /{child_prefix} exceeds the {width}-bit address width",
        )

    bound = 1 << extra_bits
    if index < 0 or index >= bound:
        raise AllocationOverflow(
            index,
            bound,
            f"Subnet index {index} does not fit in {extra_bits} extension "
            f"bit(s) of {parent} (index must be < {bound})",
        )

    # Index sits between the parent prefix and the child's host bits
    offset = index << (width - child_prefix)
    child = type(parent.network)((parent.address + offset, child_prefix))

    return CIDRBlock(network=child)
