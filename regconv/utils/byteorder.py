"""Word and byte reordering for multi-register values.

Every layout is described by one triple instead of per-pattern code:

    word_order  which source register fills each destination word slot
    swap        swap the two bytes inside each selected word
    reverse     reverse the whole serialized byte sequence

Applying a layout to the registers as received yields the value's bytes in
canonical big-endian order, ready for ``int.from_bytes(..., "big")`` or
``struct.unpack(">f")``.
"""

from dataclasses import dataclass
from typing import Dict, Sequence, Tuple


@dataclass(frozen=True)
class ByteLayout:
    word_order: Tuple[int, ...]
    swap: bool = False
    reverse: bool = False

    @property
    def word_count(self) -> int:
        return len(self.word_order)

    @property
    def permutation(self) -> Tuple[int, ...]:
        """Source byte index for each output byte position."""
        order = []
        for w in self.word_order:
            hi, lo = 2 * w, 2 * w + 1
            order.extend((lo, hi) if self.swap else (hi, lo))
        if self.reverse:
            order.reverse()
        return tuple(order)


# Byte labels: A is the high byte of the first register received.
LAYOUTS_16: Dict[str, ByteLayout] = {
    "AB": ByteLayout((0,)),
    "BA": ByteLayout((0,), swap=True),
}

LAYOUTS_32: Dict[str, ByteLayout] = {
    "ABCD": ByteLayout((0, 1)),
    "DCBA": ByteLayout((0, 1), reverse=True),
    "BADC": ByteLayout((0, 1), swap=True),
    "CDAB": ByteLayout((1, 0)),
}

# These triples reproduce the reference device library bit for bit. Some
# labels do not spell the resulting byte sequence (HGFEDCBA and GHEFCDAB
# are the same layout).
LAYOUTS_64: Dict[str, ByteLayout] = {
    "ABCDEFGH": ByteLayout((0, 1, 2, 3)),
    "HGFEDCBA": ByteLayout((3, 2, 1, 0), reverse=True),
    "BADCFEHG": ByteLayout((0, 1, 2, 3), swap=True),
    "CDABGHEF": ByteLayout((1, 0, 3, 2)),
    "DCBAHGFE": ByteLayout((3, 2, 1, 0), swap=True, reverse=True),
    "GHEFCDAB": ByteLayout((3, 2, 1, 0), reverse=True),
    "FEHGBADC": ByteLayout((2, 3, 0, 1), reverse=True),
    "EFGHABCD": ByteLayout((2, 3, 0, 1), swap=True, reverse=True),
}


def layout_for(label: str) -> ByteLayout:
    """Look up a layout by its label ("AB", "CDAB", "FEHGBADC", ...)."""
    key = label.upper()
    for table in (LAYOUTS_16, LAYOUTS_32, LAYOUTS_64):
        if key in table:
            return table[key]
    raise KeyError(f"Unknown byte layout: {label}")


def registers_to_bytes_be(registers: Sequence[int], start: int = 0, count: int = 1) -> bytes:
    """Convert `count` 16-bit registers starting at `start` into big-endian bytes.

    Register values are masked to 16 bits.
    """
    end = start + count
    if end > len(registers):
        raise IndexError("Not enough registers")
    out = bytearray()
    for r in registers[start:end]:
        r = int(r) & 0xFFFF
        out.append((r >> 8) & 0xFF)
        out.append(r & 0xFF)
    return bytes(out)


def bytes_to_registers_be(data: bytes) -> list:
    if len(data) % 2:
        raise ValueError("byte sequence must have an even length")
    return [int.from_bytes(data[i:i + 2], byteorder="big") for i in range(0, len(data), 2)]


def reorder(registers: Sequence[int], layout: ByteLayout) -> bytes:
    """Apply `layout` to the leading registers, returning big-endian value bytes."""
    raw = registers_to_bytes_be(registers, 0, layout.word_count)
    return bytes(raw[i] for i in layout.permutation)


def unorder(value_bytes: bytes, layout: ByteLayout) -> list:
    """Inverse of :func:`reorder`: the registers a device sends for `value_bytes`."""
    perm = layout.permutation
    if len(value_bytes) != len(perm):
        raise ValueError(f"layout needs {len(perm)} bytes, got {len(value_bytes)}")
    wire = bytearray(len(perm))
    for out_pos, src in enumerate(perm):
        wire[src] = value_bytes[out_pos]
    return bytes_to_registers_be(bytes(wire))
