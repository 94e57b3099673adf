"""
ESC/POS protocol constants and enumerated parameter tables.

Based on the Epson ESC/POS command reference (TM-T88 class printers,
512 dots per line, Font A 12x24, Font B 9x17).

Every enumerated parameter is a closed Enum paired with an exhaustive
mapping table to its wire value. Adding a protocol value means extending
both the Enum and its table.
"""

from enum import Enum
from typing import Dict, Type

from .validation import resolve_enum

# Control bytes
HT = 0x09
LF = 0x0A
FF = 0x0C
CAN = 0x18
ESC = 0x1B
FS = 0x1C
GS = 0x1D
NUL = 0x00

DOTS_PER_LINE = 512
MAX_TAB_STOPS = 32
DEFAULT_TAB_STOPS = tuple(range(8, 256, 8))


class Font(Enum):
    """Character font."""

    A = "A"  # 12x24
    B = "B"  # 9x17

    def __str__(self) -> str:
        return self.value


class Justification(Enum):
    LEFT = "left"
    CENTERED = "centered"
    RIGHT = "right"

    def __str__(self) -> str:
        return self.value


class InternationalCharacterSet(Enum):
    USA = "usa"
    FRANCE = "france"
    GERMANY = "germany"
    UK = "uk"
    DENMARK_1 = "denmark-1"
    SWEDEN = "sweden"
    ITALY = "italy"
    SPAIN_1 = "spain-1"
    JAPAN = "japan"
    NORWAY = "norway"
    DENMARK_2 = "denmark-2"
    SPAIN_2 = "spain-2"
    LATIN_AMERICA = "latin-america"
    KOREA = "korea"
    SLOVENIA_CROATIA = "slovenia-croatia"
    CHINA = "china"

    def __str__(self) -> str:
        return self.value


class CharacterCodeTable(Enum):
    PC437_USA_STANDARD_EUROPE = "pc437-usa-standard-europe"
    KATAKANA = "katakana"
    PC850_MULTILINGUAL = "pc850-multilingual"
    PC860_PORTUGUESE = "pc860-portuguese"
    PC863_CANADIAN_FRENCH = "pc863-canadian-french"
    PC865_NORDIC = "pc865-nordic"
    WPC1252 = "wpc1252"
    PC866_CYRILLIC_2 = "pc866-cyrillic-2"
    PC852_LATIN_2 = "pc852-latin-2"
    PC858_EURO = "pc858-euro"
    PAGE_255 = "page-255"

    def __str__(self) -> str:
        return self.value


class HriPosition(Enum):
    """Print position of barcode human-readable interpretation characters."""

    NONE = "none"
    ABOVE = "above"
    BELOW = "below"
    BOTH = "both"

    def __str__(self) -> str:
        return self.value


class PrintDirection(Enum):
    """Page-mode print direction and starting corner (ESC T)."""

    LEFT_TO_RIGHT = "left-to-right"  # starts upper left
    BOTTOM_TO_TOP = "bottom-to-top"  # starts lower left
    RIGHT_TO_LEFT = "right-to-left"  # starts lower right
    TOP_TO_BOTTOM = "top-to-bottom"  # starts upper right

    def __str__(self) -> str:
        return self.value


class HorizontalDensity(Enum):
    SINGLE = "single"
    DOUBLE = "double"

    def __str__(self) -> str:
        return self.value


class Symbology(Enum):
    """Barcode systems supported by the barcode encoder (GS k, function B)."""

    UPC_A = "upc-a"

    def __str__(self) -> str:
        return self.value


FONT_MAP: Dict[Font, int] = {
    Font.A: 0,
    Font.B: 1,
}

JUSTIFICATION_MAP: Dict[Justification, int] = {
    Justification.LEFT: 0,
    Justification.CENTERED: 1,
    Justification.RIGHT: 2,
}

INTERNATIONAL_CHARACTER_SET_MAP: Dict[InternationalCharacterSet, int] = {
    InternationalCharacterSet.USA: 0,
    InternationalCharacterSet.FRANCE: 1,
    InternationalCharacterSet.GERMANY: 2,
    InternationalCharacterSet.UK: 3,
    InternationalCharacterSet.DENMARK_1: 4,
    InternationalCharacterSet.SWEDEN: 5,
    InternationalCharacterSet.ITALY: 6,
    InternationalCharacterSet.SPAIN_1: 7,
    InternationalCharacterSet.JAPAN: 8,
    InternationalCharacterSet.NORWAY: 9,
    InternationalCharacterSet.DENMARK_2: 10,
    InternationalCharacterSet.SPAIN_2: 11,
    InternationalCharacterSet.LATIN_AMERICA: 12,
    InternationalCharacterSet.KOREA: 13,
    InternationalCharacterSet.SLOVENIA_CROATIA: 14,
    InternationalCharacterSet.CHINA: 15,
}

CHARACTER_CODE_TABLE_MAP: Dict[CharacterCodeTable, int] = {
    CharacterCodeTable.PC437_USA_STANDARD_EUROPE: 0,
    CharacterCodeTable.KATAKANA: 1,
    CharacterCodeTable.PC850_MULTILINGUAL: 2,
    CharacterCodeTable.PC860_PORTUGUESE: 3,
    CharacterCodeTable.PC863_CANADIAN_FRENCH: 4,
    CharacterCodeTable.PC865_NORDIC: 5,
    CharacterCodeTable.WPC1252: 16,
    CharacterCodeTable.PC866_CYRILLIC_2: 17,
    CharacterCodeTable.PC852_LATIN_2: 18,
    CharacterCodeTable.PC858_EURO: 19,
    CharacterCodeTable.PAGE_255: 255,
}

HRI_POSITION_MAP: Dict[HriPosition, int] = {
    HriPosition.NONE: 0,
    HriPosition.ABOVE: 1,
    HriPosition.BELOW: 2,
    HriPosition.BOTH: 3,
}

PRINT_DIRECTION_MAP: Dict[PrintDirection, int] = {
    PrintDirection.LEFT_TO_RIGHT: 0,
    PrintDirection.BOTTOM_TO_TOP: 1,
    PrintDirection.RIGHT_TO_LEFT: 2,
    PrintDirection.TOP_TO_BOTTOM: 3,
}

HORIZONTAL_DENSITY_MAP: Dict[HorizontalDensity, int] = {
    HorizontalDensity.SINGLE: 0,
    HorizontalDensity.DOUBLE: 1,
}

# GS k function B selectors (m = 65..)
SYMBOLOGY_MAP: Dict[Symbology, int] = {
    Symbology.UPC_A: 65,
}

# All tables, keyed by the enum they translate
WIRE_TABLES: Dict[Type[Enum], Dict] = {
    Font: FONT_MAP,
    Justification: JUSTIFICATION_MAP,
    InternationalCharacterSet: INTERNATIONAL_CHARACTER_SET_MAP,
    CharacterCodeTable: CHARACTER_CODE_TABLE_MAP,
    HriPosition: HRI_POSITION_MAP,
    PrintDirection: PRINT_DIRECTION_MAP,
    HorizontalDensity: HORIZONTAL_DENSITY_MAP,
    Symbology: SYMBOLOGY_MAP,
}


def wire_value(name: str, value, enum_cls: Type[Enum]) -> int:
    """Get the wire byte for an enumerated parameter.

    Args:
        name: Parameter name for error messages
        value: Enum member or its symbolic string value
        enum_cls: The closed enumeration the value belongs to

    Returns:
        The protocol byte value

    Raises:
        ValidationError: If the value does not name a member of enum_cls
    """
    member = resolve_enum(name, value, enum_cls)
    return WIRE_TABLES[enum_cls][member]
