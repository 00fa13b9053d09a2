import pytest

from backend.app.core.errors import InvalidServings, RecipeValidationError
from backend.app.core.recipe_view import RecipeView
from backend.app.core.state_machine import TimerState
from backend.app.core.ticker import Ticker
from backend.app.services.recipe_store import SAMPLE_RECIPES


def make_view(**kwargs):
    ticker = Ticker()
    return RecipeView(SAMPLE_RECIPES[0], ticker, **kwargs), ticker


def test_scaling_follows_servings():
    view, _ = make_view()
    assert view.scaling_ratio == 1
    assert view.scaling_note is None

    view.set_servings(12)
    assert view.scaling_ratio == 0.5
    assert view.scaled_ingredients[0].quantity == 1.13
    assert view.scaling_note == "Quantities scaled down by 0.5x"

    view.set_servings(48)
    assert [i.quantity for i in view.scaled_ingredients] == [4.5, 2, 1.5, 4]


@pytest.mark.parametrize("servings", [0, -1, None, 2.5])
def test_rejects_bad_servings(servings):
    view, _ = make_view()
    with pytest.raises(InvalidServings):
        view.set_servings(servings)
    assert view.servings == 24


def test_start_timer_requires_timed_step():
    view, _ = make_view()
    with pytest.raises(RecipeValidationError):
        view.start_timer(1)
    with pytest.raises(RecipeValidationError):
        view.start_timer(9)
    assert view.timer is None


def test_starting_another_timer_replaces_the_first():
    view, ticker = make_view()
    first = view.start_timer(0)
    second = view.start_timer(2)

    assert first.dismissed
    assert view.timer is second
    assert view.active_step == 2
    assert ticker.subscriber_count == 1

    ticker.tick()
    assert first.remaining == 600
    assert second.remaining == 179


def test_completion_clears_active_timer():
    notified = []
    view, ticker = make_view(notifier=lambda t: notified.append(t.minutes))
    view.start_timer(2)
    for _ in range(180):
        ticker.tick()

    assert view.timer is None
    assert view.active_step is None
    assert notified == [3]


def test_stop_toggle_reset():
    view, ticker = make_view()
    view.toggle_timer()
    view.reset_timer()
    view.stop_timer()

    timer = view.start_timer(0)
    ticker.tick()
    view.toggle_timer()
    assert timer.state == TimerState.PAUSED
    view.reset_timer()
    assert timer.remaining == 600

    view.stop_timer()
    assert view.timer is None
    assert ticker.subscriber_count == 0


def test_close_dismisses_timer():
    view, ticker = make_view()
    timer = view.start_timer(3)
    view.close()
    assert timer.dismissed
    assert ticker.subscriber_count == 0


def test_snapshot():
    changes = []
    view, ticker = make_view(on_change=lambda: changes.append(1))
    view.set_servings(48)
    view.start_timer(2)
    for _ in range(150):
        ticker.tick()

    snap = view.snapshot()
    assert snap.recipe_id == "1"
    assert snap.base_servings == 24
    assert snap.servings == 48
    assert snap.ratio == 2
    assert snap.note == "Quantities scaled up by 1.0x"
    assert snap.active_timer.step_index == 2
    assert snap.active_timer.display == "00:30"
    assert snap.active_timer.state == "running"
    assert snap.active_timer.warning is True
    assert len(changes) == 150
