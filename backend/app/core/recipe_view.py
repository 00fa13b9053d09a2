import logging
from typing import Callable, List, Optional

from ..models.recipe import Ingredient, Recipe, TimerSnapshot, ViewSnapshot
from .errors import InvalidServings, RecipeValidationError
from .scaler import describe_scaling, scale_ingredients, scaling_ratio
from .state_machine import CountdownTimer
from .ticker import Ticker

log = logging.getLogger(__name__)


class RecipeView:
    """
    Display state for one recipe: the chosen serving count and at most
    one running step timer.
    """

    def __init__(
        self,
        recipe: Recipe,
        ticker: Ticker,
        notifier: Optional[Callable[[CountdownTimer], None]] = None,
        on_change: Optional[Callable[[], None]] = None,
    ):
        self.recipe = recipe
        self.ticker = ticker
        self.notifier = notifier
        self.on_change = on_change
        self.servings = recipe.servings
        self.active_step: Optional[int] = None
        self.timer: Optional[CountdownTimer] = None

    # Scaling

    def set_servings(self, servings: int) -> None:
        if isinstance(servings, bool) or not isinstance(servings, int) or servings < 1:
            raise InvalidServings(f"Servings must be a whole number of at least 1, got {servings!r}")
        self.servings = servings

    @property
    def scaling_ratio(self) -> float:
        return scaling_ratio(self.recipe.servings, self.servings)

    @property
    def scaled_ingredients(self) -> List[Ingredient]:
        return scale_ingredients(self.recipe.ingredients, self.recipe.servings, self.servings)

    @property
    def scaling_note(self) -> Optional[str]:
        return describe_scaling(self.scaling_ratio)

    # Timers

    def start_timer(self, step_index: int) -> CountdownTimer:
        steps = self.recipe.steps
        if not 0 <= step_index < len(steps):
            raise RecipeValidationError(f"No step {step_index + 1} in '{self.recipe.title}'")
        minutes = steps[step_index].timer_minutes
        if not minutes:
            raise RecipeValidationError(f"Step {step_index + 1} has no timer")

        self.stop_timer()

        timer = None

        def _clear():
            # a replaced timer must not clear its successor
            if self.timer is timer:
                self.timer = None
                self.active_step = None
            self._changed()

        timer = CountdownTimer(
            minutes,
            self.ticker,
            on_complete=_clear,
            on_dismiss=_clear,
            notifier=self.notifier,
            on_tick=lambda _timer: self._changed(),
        )
        self.timer = timer
        self.active_step = step_index
        log.info(f"⏱️ Started {minutes}-minute timer for step {step_index + 1}")
        return timer

    def stop_timer(self) -> None:
        if self.timer is not None:
            self.timer.dismiss()

    def toggle_timer(self) -> None:
        if self.timer is not None:
            self.timer.toggle()

    def reset_timer(self) -> None:
        if self.timer is not None:
            self.timer.reset()

    def close(self) -> None:
        self.stop_timer()

    def timer_snapshot(self) -> Optional[TimerSnapshot]:
        timer = self.timer
        if timer is None:
            return None
        return TimerSnapshot(
            step_index=self.active_step,
            duration_minutes=timer.minutes,
            remaining_sec=timer.remaining,
            display=timer.display,
            progress=timer.progress,
            state=timer.state.value,
            warning=not timer.completed and timer.remaining < 60,
        )

    def snapshot(self) -> ViewSnapshot:
        return ViewSnapshot(
            recipe_id=self.recipe.id,
            base_servings=self.recipe.servings,
            servings=self.servings,
            ratio=self.scaling_ratio,
            note=self.scaling_note,
            ingredients=self.scaled_ingredients,
            active_timer=self.timer_snapshot(),
        )

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change()
