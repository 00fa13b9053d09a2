from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, confloat, conint, field_validator


class Ingredient(BaseModel):
    name: str = ""
    quantity: confloat(ge=0) = 0
    unit: str = ""


class Step(BaseModel):
    instruction: str = ""
    timer_minutes: Optional[conint(gt=0)] = None

    @field_validator("timer_minutes", mode="before")
    @classmethod
    def blank_timer_is_none(cls, value):
        # an empty or zero timer field means the step has no timer
        if value is None or value == "" or value == 0 or value == "0":
            return None
        return value


class RecipeDraft(BaseModel):
    """Form state of the recipe editor: a recipe without identity or ownership."""

    title: str = ""
    description: str = ""
    servings: int = 4
    tags: List[str] = Field(default_factory=list)
    ingredients: List[Ingredient] = Field(default_factory=lambda: [Ingredient()])
    steps: List[Step] = Field(default_factory=lambda: [Step()])
    is_public: bool = False


class Recipe(BaseModel):
    id: str
    title: str = Field(min_length=1)
    description: str = ""
    servings: conint(ge=1)
    tags: List[str] = []
    ingredients: List[Ingredient] = []
    steps: List[Step] = []
    author: str
    collaborators: List[str] = []
    is_public: bool = False

    @property
    def timer_count(self) -> int:
        return sum(1 for step in self.steps if step.timer_minutes)


class RecipeCard(BaseModel):
    id: str
    title: str
    description: str
    servings: int
    tags: List[str]
    author: str
    collaborator_count: int
    timer_count: int
    is_public: bool

    @classmethod
    def from_recipe(cls, recipe: Recipe) -> "RecipeCard":
        return cls(
            id=recipe.id,
            title=recipe.title,
            description=recipe.description,
            servings=recipe.servings,
            tags=recipe.tags,
            author=recipe.author,
            collaborator_count=len(recipe.collaborators),
            timer_count=recipe.timer_count,
            is_public=recipe.is_public,
        )


class TimerSnapshot(BaseModel):
    step_index: int
    duration_minutes: int
    remaining_sec: conint(ge=0)
    display: str
    progress: confloat(ge=0, le=1)
    state: str
    warning: bool


class ViewSnapshot(BaseModel):
    recipe_id: str
    base_servings: int
    servings: int
    ratio: float
    note: Optional[str] = None
    ingredients: List[Ingredient]
    active_timer: Optional[TimerSnapshot] = None
