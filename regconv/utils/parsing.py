"""CSV and register value parsing helpers.

Centralizes parsing logic for CLI input handling of:
- CSV or whitespace separated lists (e.g., "0x3F80,0x0000", "1 2 3")
- Register words in decimal, 0xHEX, 0b binary or negative int16 form
"""

from typing import Iterable, List, Optional, Union


def split_values(s: Optional[Union[str, Iterable[str]]]) -> List[str]:
    """Split CSV and/or whitespace separated text into value tokens.

    Accepts a single string or an iterable of strings (as Typer hands over
    repeated arguments):
    - "1,2,3" -> ["1", "2", "3"]
    - "0x3F80 0x0000" -> ["0x3F80", "0x0000"]
    - ["0x3F80,", "0"] -> ["0x3F80", "0"]

    Returns an empty list for None/empty input.
    """
    if not s:
        return []
    parts = [s] if isinstance(s, str) else list(s)
    out: List[str] = []
    for part in parts:
        for token in str(part).replace(",", " ").split():
            out.append(token)
    return out


def parse_register_value(text: str) -> int:
    """Parse one register word.

    Accepts 0..65535 in any base understood by ``int(text, 0)``, plus
    negative values down to -32768 which are stored as two's complement.

    Raises:
        ValueError: If the text is not an integer or out of range
    """
    t = text.strip()
    try:
        value = int(t, 0)
    except ValueError:
        raise ValueError(f"Invalid register value '{text}'; use decimal or 0xHEX format")
    if not -0x8000 <= value <= 0xFFFF:
        raise ValueError(f"Register value {text} out of 16-bit range")
    return value & 0xFFFF


def parse_register_values(s: Optional[Union[str, Iterable[str]]]) -> List[int]:
    """Parse a list of register words from CLI text.

    Examples:
        "0x3F80,0x0000" -> [16256, 0]
        ["1", "2"] -> [1, 2]
    """
    return [parse_register_value(token) for token in split_values(s)]


def format_registers(registers: Iterable[int]) -> str:
    """Render register words as "0x3F80 0x0000"."""
    return " ".join(f"0x{r & 0xFFFF:04X}" for r in registers)
