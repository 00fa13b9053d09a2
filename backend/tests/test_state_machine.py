import pytest

from backend.app.core.errors import InvalidDuration
from backend.app.core.state_machine import CountdownTimer, TimerEvent, TimerState, format_time
from backend.app.core.ticker import Ticker


def make_timer(minutes=2, **kwargs):
    events = []
    ticker = Ticker()
    timer = CountdownTimer(
        minutes,
        ticker,
        on_complete=lambda: events.append("complete"),
        on_dismiss=lambda: events.append("dismiss"),
        **kwargs,
    )
    return timer, ticker, events


def run_ticks(ticker, n):
    for _ in range(n):
        ticker.tick()


def test_two_minute_countdown():
    timer, ticker, events = make_timer(2)
    assert timer.state == TimerState.RUNNING
    assert timer.display == "02:00"

    run_ticks(ticker, 90)
    assert timer.display == "00:30"
    assert timer.state == TimerState.RUNNING

    run_ticks(ticker, 30)
    assert timer.state == TimerState.COMPLETED
    assert timer.display == "00:00"
    assert events == ["complete"]


@pytest.mark.parametrize("minutes", [1, 3, 7])
def test_completes_after_exactly_duration_ticks(minutes):
    timer, ticker, events = make_timer(minutes)

    run_ticks(ticker, minutes * 60 - 1)
    assert timer.remaining == 1
    assert events == []

    ticker.tick()
    assert timer.completed
    assert events == ["complete"]

    # further ticks change nothing and never fire completion again
    run_ticks(ticker, 10)
    assert timer.remaining == 0
    assert events == ["complete"]
    assert ticker.subscriber_count == 0


def test_pause_stops_time():
    timer, ticker, _ = make_timer(1)
    run_ticks(ticker, 10)

    timer.toggle()
    assert timer.state == TimerState.PAUSED
    run_ticks(ticker, 25)
    assert timer.remaining == 50

    timer.toggle()
    run_ticks(ticker, 5)
    assert timer.remaining == 45


def test_repeated_toggles_keep_a_single_pending_tick():
    timer, ticker, _ = make_timer(1)
    for _ in range(5):
        timer.toggle()
    # odd number of toggles leaves it paused
    assert ticker.subscriber_count == 0
    timer.toggle()
    assert ticker.subscriber_count == 1

    ticker.tick()
    assert timer.remaining == 59


def test_reset_restores_duration_and_pauses():
    timer, ticker, _ = make_timer(2)
    run_ticks(ticker, 45)

    timer.reset()
    assert timer.remaining == 120
    assert timer.state == TimerState.PAUSED
    run_ticks(ticker, 5)
    assert timer.remaining == 120


def test_reset_from_paused():
    timer, ticker, _ = make_timer(2)
    run_ticks(ticker, 3)
    timer.toggle()
    timer.handle(TimerEvent.RESET)
    assert timer.remaining == 120
    assert timer.state == TimerState.PAUSED


def test_reset_ignored_once_completed():
    timer, ticker, _ = make_timer(1)
    run_ticks(ticker, 60)
    timer.reset()
    timer.toggle()
    assert timer.state == TimerState.COMPLETED
    assert timer.remaining == 0


def test_dismiss_stops_everything():
    timer, ticker, events = make_timer(1)
    run_ticks(ticker, 5)

    timer.handle(TimerEvent.DISMISS)
    assert events == ["dismiss"]
    assert ticker.subscriber_count == 0

    timer.toggle()
    timer.reset()
    timer.dismiss()
    run_ticks(ticker, 100)
    assert timer.remaining == 55
    assert events == ["dismiss"]


def test_progress():
    timer, ticker, _ = make_timer(1)
    assert timer.progress == 0
    run_ticks(ticker, 15)
    assert timer.progress == pytest.approx(0.25)
    run_ticks(ticker, 45)
    assert timer.progress == 1


def test_notifier_failure_is_swallowed():
    def broken(_timer):
        raise OSError("no audio device")

    timer, ticker, events = make_timer(1, notifier=broken)
    run_ticks(ticker, 60)
    assert timer.completed
    assert events == ["complete"]


def test_notifier_called_before_completion_callback():
    order = []
    ticker = Ticker()
    CountdownTimer(
        1,
        ticker,
        on_complete=lambda: order.append("complete"),
        on_dismiss=lambda: None,
        notifier=lambda t: order.append(f"notify {t.minutes}"),
    )
    run_ticks(ticker, 60)
    assert order == ["notify 1", "complete"]


def test_on_tick_reports_each_decrement():
    seen = []
    timer, ticker, _ = make_timer(1, on_tick=lambda t: seen.append(t.remaining))
    run_ticks(ticker, 3)
    assert seen == [59, 58, 57]


@pytest.mark.parametrize("minutes", [0, -5, 1.5, True, "3"])
def test_rejects_invalid_duration(minutes):
    with pytest.raises(InvalidDuration):
        CountdownTimer(minutes, Ticker(), on_complete=lambda: None, on_dismiss=lambda: None)


def test_format_time():
    assert format_time(0) == "00:00"
    assert format_time(65) == "01:05"
    assert format_time(600) == "10:00"
