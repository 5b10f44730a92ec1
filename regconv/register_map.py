"""Register maps: named points decoded from an already-read register block.

A map file (YAML or JSON) lists the points of a device:

    name: inverter
    base_address: 40001
    overflow: wrap
    points:
      - name: grid_voltage
        address: 40001
        type: uint16_ab
        scale: 0.1
        unit: V

`decode_block` applies a map to the registers a poller read starting at
`base_address`. A point that cannot be decoded carries its error instead of
a value; the rest of the block is still decoded.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

import yaml

from regconv.core.converter import Value, convert
from regconv.core.data_types import DATA_TYPE_PROPERTIES, DataType, TypeCategory, parse_data_type
from regconv.errors import ConversionError, InsufficientRegistersError, InvalidTypeError
from regconv.utils.narrowing import OVERFLOW_WRAP, check_overflow_policy

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PointDefinition:
    """One named value inside a register block."""

    name: str
    address: int
    data_type: DataType
    scale: float = 1.0
    bit: int = 0
    unit: str = ""
    description: str = ""

    @property
    def register_count(self) -> int:
        return DATA_TYPE_PROPERTIES[self.data_type].register_count

    def validate(self) -> None:
        if not self.name:
            raise ValueError("Point name must not be empty")
        if DATA_TYPE_PROPERTIES[self.data_type].category is TypeCategory.BIT:
            if not 0 <= self.bit <= 15:
                raise ValueError(f"Point '{self.name}': bit must be 0-15")


@dataclass(slots=True)
class RegisterMap:
    """Top-level register map configuration."""

    name: str = ""
    base_address: int = 0
    overflow: str = OVERFLOW_WRAP
    points: List[PointDefinition] = field(default_factory=list)

    def validate(self) -> None:
        check_overflow_policy(self.overflow)
        seen = set()
        for point in self.points:
            point.validate()
            if point.name in seen:
                raise ValueError(f"Duplicate point name '{point.name}'")
            seen.add(point.name)
            if point.address < self.base_address:
                raise ValueError(
                    f"Point '{point.name}' address {point.address} is below base address {self.base_address}"
                )

    def offset(self, point: PointDefinition) -> int:
        return point.address - self.base_address

    @property
    def span(self) -> int:
        """Number of registers needed to cover every point."""
        if not self.points:
            return 0
        return max(self.offset(p) + p.register_count for p in self.points)


@dataclass(slots=True)
class DecodedPoint:
    point: PointDefinition
    value: Optional[Value] = None
    error: Optional[ConversionError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _to_point(data: Dict[str, Any]) -> PointDefinition:
    if not isinstance(data, dict):
        raise ValueError("Each point must be an object/dict")
    try:
        dtype = parse_data_type(data.get("type"))
    except ValueError as exc:
        raise InvalidTypeError(f"Point '{data.get('name', '?')}': {exc}") from None
    try:
        return PointDefinition(
            name=str(data["name"]),
            address=int(data["address"]),
            data_type=dtype,
            scale=float(data.get("scale", 1.0)),
            bit=int(data.get("bit", 0)),
            unit=str(data.get("unit") or ""),
            description=str(data.get("description") or ""),
        )
    except (KeyError, TypeError, ValueError) as exc:
        name = data.get("name", "?")
        if isinstance(exc, KeyError):
            raise ValueError(f"Point '{name}' is missing required key {exc}") from None
        raise ValueError(f"Point '{name}': {exc}") from None


def parse_register_map(raw: Dict[str, Any]) -> RegisterMap:
    """Build a RegisterMap from an already-parsed mapping."""
    if not isinstance(raw, dict):
        raise ValueError("Register map must be an object/dict")

    try:
        base_address = int(raw.get("base_address", 0))
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid base_address: {exc}") from None
    points = raw.get("points", []) or []
    if not isinstance(points, list):
        raise ValueError("Register map 'points' must be a list")

    register_map = RegisterMap(
        name=str(raw.get("name", "") or ""),
        base_address=base_address,
        overflow=str(raw.get("overflow") or OVERFLOW_WRAP).lower(),
        points=[_to_point(item) for item in points],
    )
    register_map.validate()
    return register_map


def load_register_map(path: Union[str, Path]) -> RegisterMap:
    """Parse a YAML/JSON register map file into a RegisterMap."""

    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(file_path)

    text = file_path.read_text(encoding="utf-8")
    if file_path.suffix.lower() in {".yaml", ".yml"}:
        raw = yaml.safe_load(text)
    else:
        raw = json.loads(text)

    register_map = parse_register_map(raw)
    logger.debug("Loaded register map '%s' with %d point(s) from %s",
                 register_map.name, len(register_map.points), file_path)
    return register_map


def decode_block(register_map: RegisterMap, registers: Sequence[int]) -> List[DecodedPoint]:
    """Decode every point of `register_map` from `registers`.

    `registers[0]` holds the word at `register_map.base_address`.
    """
    results: List[DecodedPoint] = []
    for point in register_map.points:
        start = register_map.offset(point)
        words = list(registers[start:start + point.register_count])
        try:
            if len(words) < point.register_count:
                raise InsufficientRegistersError(
                    f"Point '{point.name}' needs registers {point.address}.."
                    f"{point.address + point.register_count - 1}, block has {len(registers)} word(s)"
                )
            value = convert(words, point.data_type, point.bit, point.scale,
                            overflow=register_map.overflow)
        except ConversionError as exc:
            logger.warning("Failed to decode point '%s': %s", point.name, exc)
            results.append(DecodedPoint(point=point, error=exc))
            continue
        results.append(DecodedPoint(point=point, value=value))
    return results


def decode_block_dict(register_map: RegisterMap, registers: Sequence[int]) -> Dict[str, Optional[Value]]:
    """Like decode_block, returning ``{name: value}`` with None for failures."""
    return {d.point.name: d.value for d in decode_block(register_map, registers)}
