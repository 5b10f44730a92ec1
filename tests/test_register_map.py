from __future__ import annotations

import json
from pathlib import Path

import pytest

from regconv.core.data_types import DataType
from regconv.errors import ConversionOverflowError, InsufficientRegistersError, InvalidTypeError
from regconv.register_map import (
    PointDefinition,
    RegisterMap,
    decode_block,
    decode_block_dict,
    load_register_map,
    parse_register_map,
)

MAP_YAML = """\
name: inverter
base_address: 40001
points:
  - name: grid_voltage
    address: 40001
    type: uint16
    scale: 0.1
    unit: V
  - name: alarm
    address: 40002
    type: bool
    bit: 3
  - name: energy
    address: 40003
    type: uint32_cdab
    unit: Wh
  - name: temperature
    address: 40005
    type: float32
    unit: C
"""

BLOCK = [2301, 0x0008, 0x0001, 0x0002, 0x4120, 0x0000]


@pytest.fixture
def map_path(tmp_path: Path) -> Path:
    path = tmp_path / "inverter.yaml"
    path.write_text(MAP_YAML, encoding="utf-8")
    return path


def test_load_yaml(map_path: Path) -> None:
    register_map = load_register_map(map_path)

    assert register_map.name == "inverter"
    assert register_map.base_address == 40001
    assert register_map.overflow == "wrap"
    assert [p.name for p in register_map.points] == ["grid_voltage", "alarm", "energy", "temperature"]
    energy = register_map.points[2]
    assert energy.data_type is DataType.INT32_UNSIGNED_CDAB
    assert energy.register_count == 2
    assert register_map.span == 6


def test_load_json(tmp_path: Path) -> None:
    path = tmp_path / "meter.json"
    payload = {
        "name": "meter",
        "overflow": "error",
        "points": [{"name": "power", "address": 0, "type": "int32", "scale": 0.5}],
    }
    path.write_text(json.dumps(payload), encoding="utf-8")

    register_map = load_register_map(path)

    assert register_map.overflow == "error"
    assert register_map.points[0].scale == 0.5
    assert decode_block_dict(register_map, [0x0000, 0x0064]) == {"power": 50}


def test_decode_block(map_path: Path) -> None:
    results = decode_block(load_register_map(map_path), BLOCK)

    values = {r.point.name: r.value for r in results}
    assert all(r.ok for r in results)
    assert values["grid_voltage"] == 230
    assert values["alarm"] is True
    assert values["energy"] == 0x00020001
    assert values["temperature"] == 10.0


def test_short_block_marks_point_failed(map_path: Path) -> None:
    results = decode_block(load_register_map(map_path), BLOCK[:5])

    by_name = {r.point.name: r for r in results}
    assert by_name["energy"].value == 0x00020001
    temperature = by_name["temperature"]
    assert not temperature.ok
    assert temperature.value is None
    assert isinstance(temperature.error, InsufficientRegistersError)


def test_overflow_policy_applies_to_points() -> None:
    register_map = RegisterMap(
        overflow="error",
        points=[PointDefinition(name="small", address=0, data_type=DataType.INT8_SIGNED, scale=2.0)],
    )
    [result] = decode_block(register_map, [0x0064])
    assert isinstance(result.error, ConversionOverflowError)


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_register_map(tmp_path / "nope.yaml")


def test_unknown_type() -> None:
    with pytest.raises(InvalidTypeError, match="Point 'x'"):
        parse_register_map({"points": [{"name": "x", "address": 0, "type": "int128"}]})


def test_missing_address() -> None:
    with pytest.raises(ValueError, match="address"):
        parse_register_map({"points": [{"name": "x", "type": "uint16"}]})


@pytest.mark.parametrize("field", ["address", "bit", "scale"])
def test_null_point_field(tmp_path: Path, field: str) -> None:
    point = {"name": "alarm", "address": 1, "type": "bool", "bit": 2, "scale": 1.0}
    point[field] = None
    path = tmp_path / "nulls.yaml"
    path.write_text(
        "points:\n  - " + "\n    ".join(
            f"{key}: {'' if value is None else value}" for key, value in point.items()
        ) + "\n",
        encoding="utf-8",
    )
    with pytest.raises(ValueError, match="Point 'alarm'"):
        load_register_map(path)


def test_null_base_address(tmp_path: Path) -> None:
    path = tmp_path / "nulls.yaml"
    path.write_text("base_address:\npoints: []\n", encoding="utf-8")
    with pytest.raises(ValueError, match="base_address"):
        load_register_map(path)


def test_null_optional_text_fields() -> None:
    register_map = parse_register_map(
        {"name": None, "overflow": None,
         "points": [{"name": "v", "address": 0, "type": "uint16", "unit": None}]}
    )
    assert register_map.name == ""
    assert register_map.overflow == "wrap"
    assert register_map.points[0].unit == ""


def test_duplicate_names() -> None:
    point = {"name": "x", "address": 0, "type": "uint16"}
    with pytest.raises(ValueError, match="Duplicate"):
        parse_register_map({"points": [point, dict(point, address=1)]})


def test_address_below_base() -> None:
    with pytest.raises(ValueError, match="below base address"):
        parse_register_map({"base_address": 10, "points": [{"name": "x", "address": 5, "type": "uint16"}]})


def test_bad_bit() -> None:
    with pytest.raises(ValueError, match="bit must be 0-15"):
        parse_register_map({"points": [{"name": "x", "address": 0, "type": "bool", "bit": 16}]})


def test_bad_overflow_policy() -> None:
    with pytest.raises(ValueError, match="overflow policy"):
        parse_register_map({"overflow": "clamp", "points": []})


def test_not_a_mapping(tmp_path: Path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    with pytest.raises(ValueError, match="object/dict"):
        load_register_map(path)


def test_empty_map_span() -> None:
    assert RegisterMap().span == 0


def test_example_map_decodes() -> None:
    path = Path(__file__).resolve().parent.parent / "examples" / "inverter.yaml"
    values = decode_block_dict(load_register_map(path), BLOCK)
    assert values == {
        "grid_voltage": 230,
        "fan_fault": True,
        "total_energy": 0x00020001,
        "heatsink_temperature": 10.0,
    }
