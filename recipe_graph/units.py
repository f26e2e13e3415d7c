"""
Unit registry, scaling and rendering for recipe amounts.

Units are grouped by measurement system ("US" rather than "imperial" because
the liquid measures differ, see
https://en.wikipedia.org/wiki/Cooking_weights_and_measures) and dimension.
The table is built once at import time and never mutated, so it can be read
from any number of threads without locking.
"""
from __future__ import annotations

import logging
import math
from types import MappingProxyType
from typing import Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from .const import LENGTH_ABBREV, LENGTH_LONG
from .exceptions import UnitRenderError

_LOGGER = logging.getLogger(__name__)

Dimension = Literal["mass", "volume"]
MeasurementSystem = Literal["US", "metric"]
RenderLength = Literal["long", "abbrev"]


def format_number(num: float, significant_digits: int | None = None) -> str:
    """Format a number for display in an en-US style.

    Args:
        num: The number to format
        significant_digits: Maximum significant digits to keep; when None,
            at most three fraction digits are kept

    Returns:
        The number with grouping separators and without trailing zeros

    Raises:
        ValueError: If num is infinite or NaN

    Examples:
        >>> format_number(0.3125)
        '0.312'
        >>> format_number(1234, 2)
        '1,200'
        >>> format_number(2.0)
        '2'
    """
    if not math.isfinite(num):
        raise ValueError(f"Cannot format non-finite number {num!r}")
    decimals = 3
    if significant_digits is not None:
        if num == 0:
            decimals = 0
        else:
            exponent = math.floor(math.log10(abs(num)))
            decimals = significant_digits - 1 - exponent
            num = round(num, decimals)
            decimals = max(decimals, 0)
    text = f"{num:,.{decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        text = "0"
    return text


class UnitFormat(BaseModel):
    """A plural-aware message template. Templates take ``{num}`` as the placeholder."""

    model_config = ConfigDict(frozen=True)

    one: str
    other: str
    significant_digits: Optional[int] = None

    def format(self, num: float) -> str:
        text = format_number(num, self.significant_digits)
        template = self.one if text == "1" else self.other
        return template.format(num=text)


class Unit(BaseModel):
    """A unit of measure.

    Attributes:
        system: Measurement system the unit belongs to
        dimension: Physical dimension it measures
        long_format: Template for the spelled-out form, e.g. "2 cups"
        abbrev_format: Template for the abbreviated form, e.g. "2 C"
        synonyms: Names that resolve to this unit in :func:`get_unit`
        amount_for_one: For non-base units, the amount of the base unit of
            the same system and dimension in one of this unit
        min: Smallest amount that should be written in this unit
        max: Largest amount that should be written in this unit
    """

    model_config = ConfigDict(frozen=True)

    system: MeasurementSystem
    dimension: Dimension
    long_format: UnitFormat
    abbrev_format: UnitFormat
    synonyms: tuple[str, ...] = Field(min_length=1)
    amount_for_one: Optional[Amount] = None
    min: Optional[float] = None
    max: Optional[float] = None

    @property
    def name(self) -> str:
        return self.synonyms[0]

    @property
    def is_base(self) -> bool:
        return self.amount_for_one is None

    def __repr__(self) -> str:
        return f"Unit({self.name!r})"


class Amount(BaseModel):
    """A number of some unit."""

    model_config = ConfigDict(frozen=True)

    num: float = Field(allow_inf_nan=False)
    unit: Unit


Unit.model_rebuild()
Amount.model_rebuild()


def _sig2(one: str, other: str) -> UnitFormat:
    return UnitFormat(one=one, other=other, significant_digits=2)


def _plural(singular: str, plural: str) -> UnitFormat:
    return UnitFormat(one=f"1 {singular}", other=f"{{num}} {plural}")


def _abbrev(suffix: str) -> UnitFormat:
    text = f"{{num}} {suffix}"
    return UnitFormat(one=text, other=text)


# pinch: about 1/16 - 1/8 tsp (https://learn.surlatable.com/how-much-is-a-pinch/)
# dash: just under 1/8 tsp (https://learn.surlatable.com/how-much-is-a-dash/)

GRAM = Unit(
    system="metric",
    dimension="mass",
    long_format=_sig2("{num} gram", "{num} grams"),
    abbrev_format=_sig2("{num}g", "{num}g"),
    synonyms=("g", "gram", "grams"),
    min=1,
    max=1000,
)
LITER = Unit(
    system="metric",
    dimension="volume",
    long_format=_sig2("{num} liter", "{num} liters"),
    abbrev_format=_sig2("{num}L", "{num}L"),
    synonyms=("L", "liter", "litre", "liters", "litres"),
    min=1,
)
OUNCE = Unit(
    system="US",
    dimension="mass",
    long_format=_sig2("{num} ounce", "{num} ounces"),
    abbrev_format=_sig2("{num}oz", "{num}oz"),
    synonyms=("oz", "ounce", "ounces"),
    max=16,
)
TEASPOON = Unit(
    system="US",
    dimension="volume",
    long_format=_plural("teaspoon", "teaspoons"),
    abbrev_format=_abbrev("tsp"),
    synonyms=("tsp", "teaspoon", "teaspoons"),
    max=5,
)

MILLIGRAM = Unit(
    system="metric",
    dimension="mass",
    long_format=_plural("milligram", "milligrams"),
    abbrev_format=_abbrev("mg"),
    synonyms=("mg", "milligram", "milligrams"),
    amount_for_one=Amount(num=0.001, unit=GRAM),
    max=1000,
)
KILOGRAM = Unit(
    system="metric",
    dimension="mass",
    long_format=_sig2("{num} kilogram", "{num} kilograms"),
    abbrev_format=_sig2("{num}kg", "{num}kg"),
    synonyms=("kg", "kilogram", "kilograms"),
    amount_for_one=Amount(num=1000, unit=GRAM),
    min=1,
)
MILLILITER = Unit(
    system="metric",
    dimension="volume",
    long_format=_sig2("{num} milliliter", "{num} milliliters"),
    abbrev_format=_sig2("{num}mL", "{num}mL"),
    synonyms=("mL", "ml", "milliliter", "milliliters"),
    amount_for_one=Amount(num=0.001, unit=LITER),
    max=1000,
)
POUND = Unit(
    system="US",
    dimension="mass",
    long_format=_sig2("{num} pound", "{num} pounds"),
    abbrev_format=_sig2("{num} lb", "{num} lb"),
    synonyms=("lb", "pound", "pounds"),
    amount_for_one=Amount(num=16, unit=OUNCE),
    min=1,
)
TABLESPOON = Unit(
    system="US",
    dimension="volume",
    long_format=_plural("tablespoon", "tablespoons"),
    abbrev_format=_abbrev("Tbsp"),
    synonyms=("tbsp", "tablespoon", "tablespoons"),
    amount_for_one=Amount(num=3, unit=TEASPOON),
    min=1,
)
CUP = Unit(
    system="US",
    dimension="volume",
    long_format=_plural("cup", "cups"),
    abbrev_format=_abbrev("C"),
    synonyms=("C", "cup", "cups"),
    amount_for_one=Amount(num=16 * 3, unit=TEASPOON),
    min=1 / 8,
)
PINT = Unit(
    system="US",
    dimension="volume",
    long_format=_plural("pint", "pints"),
    abbrev_format=_abbrev("pt"),
    synonyms=("pt", "pint", "pints"),
    amount_for_one=Amount(num=2 * 16 * 3, unit=TEASPOON),
    min=1,
)
QUART = Unit(
    system="US",
    dimension="volume",
    long_format=_plural("quart", "quarts"),
    abbrev_format=_abbrev("qt"),
    synonyms=("qt", "quart", "quarts"),
    amount_for_one=Amount(num=4 * 16 * 3, unit=TEASPOON),
    min=1,
)
GALLON = Unit(
    system="US",
    dimension="volume",
    long_format=_plural("gallon", "gallons"),
    abbrev_format=_abbrev("gal"),
    synonyms=("gal", "gallon", "gallons"),
    amount_for_one=Amount(num=4 * 4 * 16 * 3, unit=TEASPOON),
    min=1,
)

UNITS: Mapping[str, Unit] = MappingProxyType({
    "g": GRAM,
    "L": LITER,
    "oz": OUNCE,
    "tsp": TEASPOON,
    "mg": MILLIGRAM,
    "kg": KILOGRAM,
    "mL": MILLILITER,
    "lb": POUND,
    "Tbsp": TABLESPOON,
    "C": CUP,
    "pt": PINT,
    "qt": QUART,
    "gal": GALLON,
})

# Inspired by CLDR unit preferences:
# https://www.unicode.org/cldr/charts/45/supplemental/unit_preferences.html
# A candidate is accepted once the amount reaches its ``min``.
UNIT_PREFERENCE: Mapping[tuple[str, str], tuple[Unit, ...]] = MappingProxyType({
    ("US", "mass"): (POUND, OUNCE),
    # No pints or bigger because all our measuring devices are in cups.
    ("US", "volume"): (CUP, TABLESPOON, TEASPOON),
    ("metric", "mass"): (KILOGRAM, GRAM, MILLIGRAM),
    ("metric", "volume"): (LITER, MILLILITER),
})

UNIT_SYNONYMS: Mapping[str, Unit] = MappingProxyType({
    synonym: unit for unit in UNITS.values() for synonym in unit.synonyms
})


def base_unit(unit: Unit) -> Unit:
    """Follow ``amount_for_one`` to the base unit of ``unit``'s system and dimension."""
    while unit.amount_for_one is not None:
        unit = unit.amount_for_one.unit
    return unit


def base_factor(unit: Unit) -> float:
    """Return how many base units one ``unit`` holds."""
    factor = 1.0
    while unit.amount_for_one is not None:
        factor *= unit.amount_for_one.num
        unit = unit.amount_for_one.unit
    return factor


def _check_registry() -> None:
    bases: dict[tuple[str, str], Unit] = {}
    for unit in UNITS.values():
        if unit.is_base:
            key = (unit.system, unit.dimension)
            if key in bases:
                raise ValueError(f"Two base units for {key}: {bases[key]!r} and {unit!r}")
            bases[key] = unit
    for unit in UNITS.values():
        base = base_unit(unit)
        if bases.get((unit.system, unit.dimension)) is not base:
            raise ValueError(f"{unit!r} does not resolve to the base unit of its system")
    for key, preference in UNIT_PREFERENCE.items():
        if not preference or any((u.system, u.dimension) != key for u in preference):
            raise ValueError(f"Bad unit preference list for {key}")


_check_registry()


def get_unit(name: str) -> Unit | None:
    """Look up a unit by one of its synonyms.

    Tries the exact spelling first, then the lower-cased spelling.

    Args:
        name: Unit text as written in a recipe, e.g. 'cups', 'TSP', 'C'

    Returns:
        The matching Unit, or None if the text is not a known unit
    """
    exact = UNIT_SYNONYMS.get(name)
    if exact is not None:
        return exact
    return UNIT_SYNONYMS.get(name.lower())


def scale(amount: Amount, multiple: float) -> Amount:
    """Multiply an amount, switching units if the result leaves the unit's range.

    Units are sticky: as long as the scaled number stays within the unit's
    ``min``/``max`` the original unit is kept. Otherwise the preference list
    for the unit's system and dimension is walked from largest to smallest,
    and the first unit whose ``min`` the amount reaches is chosen. If none
    qualifies the last (smallest) one is used.

    Args:
        amount: The amount to scale
        multiple: Factor to multiply by

    Returns:
        The scaled amount, always in the same system and dimension

    Examples:
        >>> scale(Amount(num=3, unit=TEASPOON), 5)
        Amount(num=0.3125, unit=Unit('C'))
    """
    unit = amount.unit
    result = amount.num * multiple
    if (unit.min and result < unit.min) or (unit.max and result > unit.max):
        amount_of_base = result * base_factor(unit)
        trial_unit = unit
        amount_of_trial_unit = amount.num
        for trial_unit in UNIT_PREFERENCE[(unit.system, unit.dimension)]:
            amount_of_trial_unit = amount_of_base / base_factor(trial_unit)
            if not trial_unit.min or amount_of_trial_unit >= trial_unit.min:
                break
        _LOGGER.debug("Rescaled %s %s x %s to %s %s", amount.num, unit.name,
                      multiple, amount_of_trial_unit, trial_unit.name)
        return Amount(num=amount_of_trial_unit, unit=trial_unit)
    return Amount(num=result, unit=unit)


def render(amount: Amount, length: RenderLength = LENGTH_ABBREV) -> str:
    """Format an amount with its unit.

    Args:
        amount: The amount to format
        length: 'long' for spelled-out unit names, 'abbrev' for abbreviations

    Returns:
        The formatted amount, e.g. '2 cups' or '2 C'

    Raises:
        ValueError: If length is not 'long' or 'abbrev'
        UnitRenderError: If the unit's template is malformed
    """
    if length == LENGTH_LONG:
        unit_format = amount.unit.long_format
    elif length == LENGTH_ABBREV:
        unit_format = amount.unit.abbrev_format
    else:
        raise ValueError(f"Unknown render length: {length!r}")

    try:
        result = unit_format.format(amount.num)
    except (KeyError, IndexError, ValueError) as e:
        raise UnitRenderError(
            f"Failed to format {amount.num} with {unit_format!r}: {e}",
            num=amount.num, unit=amount.unit, length=length,
        ) from e
    if not isinstance(result, str):
        raise UnitRenderError(
            f"Got a non-string when formatting {unit_format!r}: {result!r}",
            num=amount.num, unit=amount.unit, length=length,
        )
    return result
