"""
In-memory recipe collection. Lives as long as the process does.
"""

import logging
from functools import lru_cache
from typing import Dict, List, Optional

from ..core.config import get_settings
from ..core.errors import RecipeNotFound
from ..models.recipe import Ingredient, Recipe, Step

log = logging.getLogger(__name__)


SAMPLE_RECIPES = [
    Recipe(
        id="1",
        title="Classic Chocolate Chip Cookies",
        description="Perfectly chewy cookies with gooey chocolate chips",
        servings=24,
        tags=["Dessert", "Quick"],
        ingredients=[
            Ingredient(name="All-purpose flour", quantity=2.25, unit="cups"),
            Ingredient(name="Butter", quantity=1, unit="cup"),
            Ingredient(name="Brown sugar", quantity=0.75, unit="cup"),
            Ingredient(name="Chocolate chips", quantity=2, unit="cups"),
        ],
        steps=[
            Step(instruction="Preheat oven to 375°F", timer_minutes=10),
            Step(instruction="Mix dry ingredients in a bowl"),
            Step(instruction="Cream butter and sugars", timer_minutes=3),
            Step(instruction="Bake for 9-11 minutes", timer_minutes=10),
        ],
        author="Chef Sarah",
        collaborators=["baker123"],
        is_public=True,
    ),
]


class RecipeStore:
    def __init__(self, recipes: Optional[List[Recipe]] = None):
        # dicts keep insertion order, so listing follows creation order
        self._recipes: Dict[str, Recipe] = {}
        for recipe in recipes or []:
            self._recipes[recipe.id] = recipe

    def list(self) -> List[Recipe]:
        return list(self._recipes.values())

    def get(self, recipe_id: str) -> Recipe:
        try:
            return self._recipes[recipe_id]
        except KeyError:
            raise RecipeNotFound(recipe_id) from None

    def add(self, recipe: Recipe) -> Recipe:
        self._recipes[recipe.id] = recipe
        log.info(f"Stored recipe {recipe.id} ({len(self._recipes)} total)")
        return recipe

    def update(self, recipe: Recipe) -> Recipe:
        if recipe.id not in self._recipes:
            raise RecipeNotFound(recipe.id)
        self._recipes[recipe.id] = recipe
        return recipe


@lru_cache()
def get_recipe_store() -> RecipeStore:
    """Return the process-wide store."""
    settings = get_settings()
    if settings.seed_sample_recipes:
        return RecipeStore([r.model_copy(deep=True) for r in SAMPLE_RECIPES])
    return RecipeStore()
