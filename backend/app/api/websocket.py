from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect
from starlette.websockets import WebSocketState
import logging
import asyncio
import json

from ..core.chime import ChimeGenerator
from ..core.config import Settings, get_settings
from ..core.errors import RecipeError, RecipeNotFound
from ..core.notifications import TimerNotifier
from ..core.recipe_view import RecipeView
from ..core.ticker import Ticker
from ..services.recipe_store import RecipeStore, get_recipe_store

log = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1")

CLOSE_NOT_FOUND = 4404


def handle_command(view: RecipeView, message: dict) -> None:
    """Apply one client command to the view."""
    action = message.get("action")

    if action == "servings":
        view.set_servings(message.get("servings"))
    elif action == "start_timer":
        step = message.get("step")
        if isinstance(step, bool) or not isinstance(step, int):
            raise RecipeError(f"start_timer needs an integer 'step', got {step!r}")
        view.start_timer(step)
    elif action == "toggle_timer":
        view.toggle_timer()
    elif action == "reset_timer":
        view.reset_timer()
    elif action == "stop_timer":
        view.stop_timer()
    else:
        raise RecipeError(f"Unknown action: {action!r}")


async def _drain(ws: WebSocket, outbox: asyncio.Queue):
    while True:
        message = await outbox.get()
        if ws.application_state != WebSocketState.CONNECTED:
            log.warning(f"❌ WebSocket not connected, {message.get('type')} message dropped")
            continue
        await ws.send_json(message)


@router.websocket("/ws/recipes/{recipe_id}")
async def recipe_session(
    ws: WebSocket,
    recipe_id: str,
    store: RecipeStore = Depends(get_recipe_store),
    settings: Settings = Depends(get_settings),
):
    log.info(f"🔗 New recipe session for {recipe_id}")
    await ws.accept()

    try:
        recipe = store.get(recipe_id)
    except RecipeNotFound as e:
        log.warning(f"❌ {e}")
        await ws.send_json({"type": "error", "message": str(e)})
        await ws.close(code=CLOSE_NOT_FOUND)
        return

    outbox: asyncio.Queue = asyncio.Queue()

    def push_view():
        outbox.put_nowait({"type": "view", "view": view.snapshot().model_dump()})

    ticker = Ticker(interval=settings.tick_interval_sec)
    notifier = TimerNotifier(outbox.put_nowait, ChimeGenerator(settings))
    view = RecipeView(recipe, ticker, notifier=notifier, on_change=push_view)

    ticker.start()
    sender = asyncio.create_task(_drain(ws, outbox))
    push_view()

    try:
        while True:
            raw = await ws.receive_text()
            try:
                message = json.loads(raw)
                if not isinstance(message, dict):
                    raise RecipeError("Commands must be JSON objects")
                handle_command(view, message)
            except (RecipeError, json.JSONDecodeError) as e:
                log.info(f"Rejected command {raw[:100]!r}: {e}")
                outbox.put_nowait({"type": "error", "message": str(e)})
                continue
            push_view()
    except WebSocketDisconnect:
        log.info(f"👋 Recipe session for {recipe_id} closed")
    finally:
        # nobody is listening any more
        view.on_change = None
        view.close()
        await ticker.cancel()
        sender.cancel()
        await asyncio.gather(sender, return_exceptions=True)
        log.info("🛑 Timers cancelled")
