"""Parsing helpers for rows returned by Supabase.

Stored values may come back as strings (numeric columns, JSON text) or
nulls; they are coerced here so services only see typed values.
"""

import json
from datetime import date, datetime

from ecobite.domain.ingredients import Ingredient, NutritionalValue


def to_float(value: object) -> float:
    """Coerce a numeric column, treating null or junk as zero."""
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return 0.0
    return 0.0


def to_int(value: object) -> int:
    """Coerce an integer column, treating null or junk as zero."""
    if isinstance(value, int):
        return value
    return int(to_float(value))


def parse_date(value: object) -> date:
    """Parse a YYYY-MM-DD column (timestamps are truncated to their date)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def parse_datetime(value: object) -> datetime | None:
    """Parse an ISO timestamp column, if present."""
    if isinstance(value, str) and value:
        return datetime.fromisoformat(value)
    return None


def parse_nutrition(value: object) -> NutritionalValue:
    """Parse the nutritional_value column, stored as JSON text or an object."""
    if isinstance(value, str):
        value = json.loads(value) if value else {}
    payload = value if isinstance(value, dict) else {}
    return NutritionalValue(
        protein=to_float(payload.get("protein")),
        carbs=to_float(payload.get("carbs")),
        fats=to_float(payload.get("fats")),
        calories=to_float(payload.get("calories")),
    )


def parse_ingredient(row: dict[str, object]) -> Ingredient:
    """Parse an ingredients row into a domain model."""
    return Ingredient(
        id=to_int(row["id"]),
        name=str(row.get("name", "")),
        category=str(row.get("category", "")),
        carbon_footprint_per_kg=to_float(row.get("carbon_footprint_per_kg")),
        nutritional_value=parse_nutrition(row.get("nutritional_value")),
    )
