"""
Formula evaluation service.

Implements the four health formulas served by the API together with the
permissive number handling they rely on:

- Query values are parsed by taking the longest numeric prefix; anything
  unparseable becomes NaN instead of failing the request.
- Arithmetic follows IEEE-754 (division by zero gives Infinity, log10 of a
  non-positive number gives -Infinity or NaN) so invalid input flows
  through to a non-numeric result.
- Results are rendered as fixed two-decimal text ("22.86", "NaN",
  "Infinity").
"""

import math
import re
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Callable, Dict, Mapping, Optional, Sequence, Tuple, Union

import structlog

from shared.metrics import FormulaMetrics

logger = structlog.get_logger(__name__)

RawValue = Union[None, str, Sequence[str]]

_NUMBER_PREFIX = re.compile(
    r"[+-]?(?:Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)"
)
# Whitespace and line terminators skipped before a number; narrower than
# str.isspace (no \x1c-\x1f or \x85) and including the byte order mark.
_LEADING_WHITESPACE = (
    "\t\n\v\f\r \u00a0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000\ufeff"
)
_TWO_PLACES = Decimal("0.01")
_EXPONENT_THRESHOLD = 1e21


# ============================================================================
# NUMBER HANDLING
# ============================================================================


def parse_decimal(value: RawValue) -> float:
    """
    Parse a query value into a float.

    Leading whitespace (including a byte order mark) is skipped and the
    longest prefix of ASCII digits, point and exponent is used, so
    ``"70kg"`` parses as 70.0. A repeated query parameter arrives as a
    list and is joined with commas, which makes the first occurrence win.

    Args:
        value: Raw query value, list of values, or None when absent

    Returns:
        Parsed number, or NaN when no numeric prefix exists
    """
    if value is None:
        return math.nan
    if not isinstance(value, str):
        value = ",".join(value)

    match = _NUMBER_PREFIX.match(value.lstrip(_LEADING_WHITESPACE))
    if match is None:
        return math.nan
    return float(match.group(0))


def to_fixed(value: float) -> str:
    """
    Render a number with exactly two decimal places.

    Rounds half away from zero on the exact binary value. Non-finite
    values render as ``NaN``, ``Infinity`` or ``-Infinity``; magnitudes of
    1e21 and above keep their exponent form.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if abs(value) >= _EXPONENT_THRESHOLD:
        return repr(value)
    if value == 0:
        value = 0.0  # drop the sign of -0.0
    return str(Decimal(value).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP))


def divide(numerator: float, denominator: float) -> float:
    """Divide with IEEE-754 semantics instead of raising ZeroDivisionError."""
    if denominator != 0:
        return numerator / denominator
    if numerator == 0 or math.isnan(numerator) or math.isnan(denominator):
        return math.nan
    return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)


def log10(value: float) -> float:
    """Base-10 logarithm returning -Infinity for 0 and NaN below 0."""
    if math.isnan(value) or value < 0:
        return math.nan
    if value == 0:
        return -math.inf
    return math.log10(value)


# ============================================================================
# FORMULAS
# ============================================================================


def bmi(weight: float, height: float) -> float:
    """Body Mass Index from weight in kg and height in cm."""
    return divide(weight, height * height / 10000)


def body_fat(height: float, neck: float, waist: float, hips: float) -> float:
    """Body-fat percentage using the U.S. Navy circumference method (cm)."""
    denominator = 1.29579 - 0.35004 * log10(waist + hips - neck) + 0.22100 * log10(height)
    return divide(495, denominator) - 450


def ideal_weight(height: float) -> float:
    """Devine ideal body weight in kg for an adult man of ``height`` cm."""
    return 50 + 0.9 * (height - 152.4)


def calories_burned(weight: float, duration: float, met: float) -> float:
    """Calories burned for ``duration`` minutes of an activity rated ``met``."""
    return weight * met * (duration / 60)


@dataclass(frozen=True)
class Formula:
    """A formula exposed by the API."""

    name: str
    output_key: str
    parameters: Tuple[str, ...]
    compute: Callable[..., float]


FORMULAS: Dict[str, Formula] = {
    formula.name: formula
    for formula in (
        Formula("bmi", "bmi", ("weight", "height"), bmi),
        Formula("bodyfat", "bodyFat", ("height", "neck", "waist", "hips"), body_fat),
        Formula("idealweight", "idealWeight", ("height",), ideal_weight),
        Formula("caloriesburned", "caloriesBurned", ("weight", "duration", "met"), calories_burned),
    )
}


# ============================================================================
# SERVICE
# ============================================================================


class FormulaService:
    """Evaluates formulas from raw query values and formats the result."""

    def __init__(self, metrics: Optional[FormulaMetrics] = None):
        self.metrics = metrics

    def evaluate(self, name: str, raw_values: Mapping[str, RawValue]) -> str:
        """
        Evaluate a formula from raw query values.

        Every parameter of the formula is parsed with ``parse_decimal``;
        missing or malformed ones become NaN and the formula still runs.

        Args:
            name: Formula name (route name, e.g. "bodyfat")
            raw_values: Query values keyed by parameter name

        Returns:
            Result rendered with ``to_fixed``

        Raises:
            KeyError: If ``name`` is not a known formula
        """
        formula = FORMULAS[name]
        arguments = [parse_decimal(raw_values.get(param)) for param in formula.parameters]
        result = formula.compute(*arguments)

        outcome = "finite" if math.isfinite(result) else "non_finite"
        if self.metrics is not None:
            self.metrics.formula_evaluations.labels(formula=name, outcome=outcome).inc()
        if outcome == "non_finite":
            logger.debug("formula_result_not_finite", formula=name, result=repr(result))

        return to_fixed(result)
