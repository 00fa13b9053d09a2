class RecipeError(ValueError):
    """Base class for rejected recipe input."""


class InvalidServings(RecipeError):
    pass


class InvalidDuration(RecipeError):
    pass


class RecipeValidationError(RecipeError):
    pass


class RecipeNotFound(RecipeError, LookupError):
    def __init__(self, recipe_id: str):
        super().__init__(f"Recipe '{recipe_id}' not found")
        self.recipe_id = recipe_id
