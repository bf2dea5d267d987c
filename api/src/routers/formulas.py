"""
Formula router.

Provides one GET endpoint per health formula:
- /bmi: Body Mass Index
- /bodyfat: body-fat percentage (U.S. Navy method)
- /idealweight: ideal weight (Devine formula, adult men)
- /caloriesburned: calories burned (MET formula)

Parameters are read from the query string and are all required, but a
missing or malformed value is not rejected: it is evaluated as NaN and
the response carries "NaN" (or "Infinity") with status 200.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from api.src.dependencies import get_formula_service
from api.src.models.formulas import (
    BmiResponse,
    BodyFatResponse,
    IdealWeightResponse,
    CaloriesBurnedResponse,
)
from api.src.services.formula_service import FormulaService

router = APIRouter(tags=["Formulas"])


def _number(description: str):
    # Parameters are typed List[str] so every occurrence of a repeated
    # parameter reaches parse_decimal.
    return Query(None, description=f"{description} (required)")


@router.get(
    "/bmi",
    response_model=BmiResponse,
    status_code=status.HTTP_200_OK,
    summary="Calculate Body Mass Index (BMI)",
)
def calculate_bmi(
    weight: Optional[List[str]] = _number("Weight in kilograms"),
    height: Optional[List[str]] = _number("Height in centimeters"),
    service: FormulaService = Depends(get_formula_service),
) -> BmiResponse:
    """Calculate BMI as weight / (height * height / 10000)."""
    result = service.evaluate("bmi", {"weight": weight, "height": height})
    return BmiResponse(bmi=result)


@router.get(
    "/bodyfat",
    response_model=BodyFatResponse,
    status_code=status.HTTP_200_OK,
    summary="Calculate body fat percentage",
)
def calculate_body_fat(
    height: Optional[List[str]] = _number("Height in centimeters"),
    neck: Optional[List[str]] = _number("Neck circumference in centimeters"),
    waist: Optional[List[str]] = _number("Waist circumference in centimeters"),
    hips: Optional[List[str]] = _number("Hip circumference in centimeters"),
    service: FormulaService = Depends(get_formula_service),
) -> BodyFatResponse:
    """
    Calculate body fat percentage with the U.S. Navy formula.

    A non-positive ``waist + hips - neck`` or ``height`` yields "NaN" or
    "Infinity" rather than an error.
    """
    result = service.evaluate(
        "bodyfat",
        {"height": height, "neck": neck, "waist": waist, "hips": hips},
    )
    return BodyFatResponse(body_fat=result)


@router.get(
    "/idealweight",
    response_model=IdealWeightResponse,
    status_code=status.HTTP_200_OK,
    summary="Calculate ideal weight",
)
def calculate_ideal_weight(
    height: Optional[List[str]] = _number("Height in centimeters"),
    service: FormulaService = Depends(get_formula_service),
) -> IdealWeightResponse:
    """Calculate ideal weight with the Devine formula for men."""
    result = service.evaluate("idealweight", {"height": height})
    return IdealWeightResponse(ideal_weight=result)


@router.get(
    "/caloriesburned",
    response_model=CaloriesBurnedResponse,
    status_code=status.HTTP_200_OK,
    summary="Calculate calories burned",
)
def calculate_calories_burned(
    weight: Optional[List[str]] = _number("Weight in kilograms"),
    duration: Optional[List[str]] = _number("Duration of activity in minutes"),
    met: Optional[List[str]] = _number("Metabolic Equivalent of Task (MET) value"),
    service: FormulaService = Depends(get_formula_service),
) -> CaloriesBurnedResponse:
    """Calculate calories burned as weight * MET * hours."""
    result = service.evaluate(
        "caloriesburned",
        {"weight": weight, "duration": duration, "met": met},
    )
    return CaloriesBurnedResponse(calories_burned=result)
