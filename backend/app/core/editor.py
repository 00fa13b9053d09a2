import logging
import uuid
from typing import Any, Optional

from pydantic import ValidationError

from ..models.recipe import Ingredient, Recipe, RecipeDraft, Step
from .config import get_settings
from .errors import InvalidDuration, InvalidServings, RecipeValidationError

log = logging.getLogger(__name__)


class RecipeEditor:
    """
    Draft form state for creating a recipe or editing an existing one.

    Nothing is saved until ``submit``; dropping the editor drops the draft.
    """

    def __init__(self, recipe: Optional[Recipe] = None):
        self.recipe = recipe
        if recipe is None:
            self.draft = RecipeDraft()
        else:
            self.draft = RecipeDraft(
                title=recipe.title,
                description=recipe.description,
                servings=recipe.servings,
                tags=list(recipe.tags),
                ingredients=[ing.model_copy() for ing in recipe.ingredients],
                steps=[step.model_copy() for step in recipe.steps],
                is_public=recipe.is_public,
            )

    @property
    def is_new(self) -> bool:
        return self.recipe is None

    def load(self, draft: RecipeDraft) -> None:
        """Replace the draft with submitted form data."""
        tags = draft.tags
        self.draft = draft.model_copy(update={"tags": []}, deep=True)
        for tag in tags:
            self.add_tag(tag)

    # Ingredients

    def add_ingredient(self) -> None:
        self.draft.ingredients.append(Ingredient())

    def remove_ingredient(self, index: int) -> None:
        if len(self.draft.ingredients) == 1:
            return
        del self.draft.ingredients[index]

    def update_ingredient(self, index: int, field: str, value: Any) -> None:
        if field not in Ingredient.model_fields:
            raise RecipeValidationError(f"Unknown ingredient field '{field}'")
        row = self.draft.ingredients[index]
        self.draft.ingredients[index] = _revalidate(Ingredient, row, field, value)

    # Steps

    def add_step(self) -> None:
        self.draft.steps.append(Step())

    def remove_step(self, index: int) -> None:
        if len(self.draft.steps) == 1:
            return
        del self.draft.steps[index]

    def update_step(self, index: int, field: str, value: Any) -> None:
        if field not in Step.model_fields:
            raise RecipeValidationError(f"Unknown step field '{field}'")
        if field == "timer_minutes":
            if isinstance(value, (int, float)) and not isinstance(value, bool) and value < 0:
                raise InvalidDuration(f"Timer duration must be positive, got {value!r}")
        row = self.draft.steps[index]
        self.draft.steps[index] = _revalidate(Step, row, field, value)

    # Tags

    def add_tag(self, text: str) -> bool:
        tag = text.strip()
        if not tag or tag in self.draft.tags:
            return False
        self.draft.tags.append(tag)
        return True

    def remove_tag(self, tag: str) -> None:
        self.draft.tags = [t for t in self.draft.tags if t != tag]

    def submit(self, author: Optional[str] = None) -> Recipe:
        """Merge the draft into a new recipe or over the one being edited."""
        if author is None:
            author = get_settings().default_author
        draft = self.draft
        if not draft.title.strip():
            raise RecipeValidationError("Recipe title is required")
        if draft.servings < 1:
            raise InvalidServings(f"Servings must be at least 1, got {draft.servings}")

        fields = draft.model_dump()
        if self.recipe is None:
            recipe = Recipe(id=uuid.uuid4().hex, author=author, collaborators=[], **fields)
            log.info(f"📝 Created recipe '{recipe.title}' ({recipe.id})")
        else:
            recipe = Recipe(**{**self.recipe.model_dump(), **fields})
            log.info(f"📝 Updated recipe '{recipe.title}' ({recipe.id})")
        return recipe


def _revalidate(model, row, field: str, value: Any):
    try:
        return model.model_validate({**row.model_dump(), field: value})
    except ValidationError as e:
        raise RecipeValidationError(f"Invalid value for {field}: {value!r}") from e
