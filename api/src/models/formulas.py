"""
Response models for the formula endpoints.

Each endpoint returns a single key holding the result as two-decimal
text. The keys are camelCase on the wire ("bodyFat"), so the models use
aliases and FastAPI serializes them by alias.
"""

from pydantic import BaseModel, ConfigDict, Field


class FormulaResponse(BaseModel):
    """Base class for formula results."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class BmiResponse(FormulaResponse):
    """Body Mass Index result."""

    bmi: str = Field(..., description="BMI rounded to two decimals", examples=["22.86"])


class BodyFatResponse(FormulaResponse):
    """Body-fat percentage result."""

    body_fat: str = Field(
        ...,
        alias="bodyFat",
        description="Body-fat percentage rounded to two decimals",
        examples=["25.59"],
    )


class IdealWeightResponse(FormulaResponse):
    """Ideal weight result."""

    ideal_weight: str = Field(
        ...,
        alias="idealWeight",
        description="Ideal weight in kilograms rounded to two decimals",
        examples=["74.84"],
    )


class CaloriesBurnedResponse(FormulaResponse):
    """Calories burned result."""

    calories_burned: str = Field(
        ...,
        alias="caloriesBurned",
        description="Calories burned rounded to two decimals",
        examples=["200.00"],
    )
