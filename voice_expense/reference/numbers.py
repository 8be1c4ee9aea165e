"""
Number Word Reference Tables

English number words and the scale units that multiply them, covering
both the Western (million/billion/trillion) and Indian (lakh/crore)
numbering systems.
"""

from decimal import Decimal
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict


class NumberScaleUnit(BaseModel):
    """
    A scale word and its multiplier.

    closes_group is False only for "hundred", which scales the group being
    built; every other scale closes the group and adds it to the total.
    """
    model_config = ConfigDict(frozen=True)

    tokens: tuple[str, ...]
    multiplier: Decimal
    closes_group: bool = True


ONES = MappingProxyType({
    "zero": 0, "one": 1, "two": 2, "three": 3, "four": 4,
    "five": 5, "six": 6, "seven": 7, "eight": 8, "nine": 9,
    "ten": 10, "eleven": 11, "twelve": 12, "thirteen": 13, "fourteen": 14,
    "fifteen": 15, "sixteen": 16, "seventeen": 17, "eighteen": 18, "nineteen": 19,
})

TENS = MappingProxyType({
    "twenty": 20, "thirty": 30, "forty": 40, "fifty": 50,
    "sixty": 60, "seventy": 70, "eighty": 80, "ninety": 90,
})

SCALE_UNITS: tuple[NumberScaleUnit, ...] = (
    NumberScaleUnit(tokens=("hundred", "hundreds"), multiplier=Decimal(100), closes_group=False),
    NumberScaleUnit(tokens=("thousand", "thousands"), multiplier=Decimal(10) ** 3),
    NumberScaleUnit(tokens=("lakh", "lac", "lakhs", "lacs"), multiplier=Decimal(10) ** 5),
    NumberScaleUnit(tokens=("million", "millions"), multiplier=Decimal(10) ** 6),
    NumberScaleUnit(tokens=("crore", "crores"), multiplier=Decimal(10) ** 7),
    NumberScaleUnit(tokens=("billion", "billions"), multiplier=Decimal(10) ** 9),
    NumberScaleUnit(tokens=("trillion", "trillions"), multiplier=Decimal(10) ** 12),
)

SCALE_BY_TOKEN = MappingProxyType({
    token: unit for unit in SCALE_UNITS for token in unit.tokens
})

# "a hundred", "an eighth" - only meaningful right before a scale word
ARTICLE_WORDS = frozenset({"a", "an"})

CONNECTOR_WORDS = frozenset({"and"})

DECIMAL_POINT_WORDS = frozenset({"point"})

# Minor-unit words: "fifty cents" is 0.50
MINOR_UNIT_WORDS = frozenset({"cent", "cents", "paisa", "paise"})

NUMBER_WORDS = frozenset(ONES) | frozenset(TENS) | frozenset(SCALE_BY_TOKEN)
