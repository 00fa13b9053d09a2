"""
Serving-size scaling for ingredient quantities.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional

from ..models.recipe import Ingredient
from .errors import InvalidServings

CENTS = Decimal("0.01")


def _check_servings(value, label: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InvalidServings(f"{label} servings must be a whole number of at least 1, got {value!r}")
    return value


def scaling_ratio(base: int, target: int) -> float:
    base = _check_servings(base, "Base")
    target = _check_servings(target, "Target")
    return target / base


def scale_quantity(quantity: float, ratio: float) -> float:
    # ties round up, e.g. half of 0.25 cup shows as 0.13
    scaled = Decimal(quantity * ratio).quantize(CENTS, rounding=ROUND_HALF_UP)
    return float(scaled)


def scale_ingredients(ingredients: List[Ingredient], base: int, target: int) -> List[Ingredient]:
    ratio = scaling_ratio(base, target)
    return [
        ing.model_copy(update={"quantity": scale_quantity(ing.quantity, ratio)})
        for ing in ingredients
    ]


def describe_scaling(ratio: float) -> Optional[str]:
    if ratio == 1:
        return None
    direction = "up" if ratio > 1 else "down"
    return f"Quantities scaled {direction} by {abs(ratio - 1):.1f}x"
