from typing import List

from fastapi import APIRouter, Depends, Query
import logging

from ..core.config import Settings, get_settings
from ..core.editor import RecipeEditor
from ..core.recipe_view import RecipeView
from ..core.ticker import Ticker
from ..models.recipe import Recipe, RecipeCard, RecipeDraft, ViewSnapshot
from ..services.recipe_store import RecipeStore, get_recipe_store

log = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1")


@router.get("/recipes", response_model=List[RecipeCard])
async def list_recipes(store: RecipeStore = Depends(get_recipe_store)):
    return [RecipeCard.from_recipe(r) for r in store.list()]


@router.get("/recipes/{recipe_id}", response_model=Recipe)
async def get_recipe(recipe_id: str, store: RecipeStore = Depends(get_recipe_store)):
    return store.get(recipe_id)


@router.post("/recipes", response_model=Recipe, status_code=201)
async def create_recipe(
    draft: RecipeDraft,
    store: RecipeStore = Depends(get_recipe_store),
    settings: Settings = Depends(get_settings),
):
    editor = RecipeEditor()
    editor.load(draft)
    return store.add(editor.submit(author=settings.default_author))


@router.put("/recipes/{recipe_id}", response_model=Recipe)
async def update_recipe(
    recipe_id: str,
    draft: RecipeDraft,
    store: RecipeStore = Depends(get_recipe_store),
):
    editor = RecipeEditor(store.get(recipe_id))
    editor.load(draft)
    return store.update(editor.submit())


@router.get("/recipes/{recipe_id}/scaled", response_model=ViewSnapshot)
async def scaled_recipe(
    recipe_id: str,
    servings: int = Query(...),
    store: RecipeStore = Depends(get_recipe_store),
):
    # a throwaway view; nothing subscribes to this ticker
    view = RecipeView(store.get(recipe_id), Ticker())
    view.set_servings(servings)
    return view.snapshot()
