from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging

from .api.recipes import router as recipes_router
from .api.websocket import router as ws_router
from .core.config import get_settings
from .core.errors import RecipeError, RecipeNotFound

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

app = FastAPI(title="recipecollab", version="0.1.0", description="Recipes with scaling and step timers")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RecipeNotFound)
async def recipe_not_found(request: Request, exc: RecipeNotFound):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(RecipeError)
async def recipe_rejected(request: Request, exc: RecipeError):
    return JSONResponse(status_code=422, content={"detail": str(exc)})


app.include_router(recipes_router)
app.include_router(ws_router)


@app.get("/api/health")
async def health_check():
    return {"status": "ok", "message": "recipecollab API is running"}
