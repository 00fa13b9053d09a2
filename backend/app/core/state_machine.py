import logging
from enum import Enum
from typing import Callable, Optional

from .errors import InvalidDuration
from .ticker import Subscription, Ticker

log = logging.getLogger(__name__)


class TimerState(str, Enum):
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETED = "completed"


class TimerEvent(str, Enum):
    TICK = "tick"
    TOGGLE = "toggle"
    RESET = "reset"
    DISMISS = "dismiss"


def format_time(seconds: int) -> str:
    mins, secs = divmod(seconds, 60)
    return f"{mins:02d}:{secs:02d}"


class CountdownTimer:
    """
    Countdown for a single recipe step, driven by a shared Ticker.

    Starts RUNNING. Reaching zero moves it to COMPLETED and fires
    ``on_complete`` once; ``dismiss`` ends it from any state and fires
    ``on_dismiss``. Reset never resumes the countdown.
    """

    def __init__(
        self,
        minutes: int,
        ticker: Ticker,
        on_complete: Callable[[], None],
        on_dismiss: Callable[[], None],
        notifier: Optional[Callable[["CountdownTimer"], None]] = None,
        on_tick: Optional[Callable[["CountdownTimer"], None]] = None,
    ):
        if isinstance(minutes, bool) or not isinstance(minutes, int) or minutes <= 0:
            raise InvalidDuration(f"Timer duration must be a positive number of minutes, got {minutes!r}")

        self.minutes = minutes
        self.total = minutes * 60
        self.remaining = self.total
        self.state = TimerState.RUNNING
        self.dismissed = False

        self.ticker = ticker
        self.on_complete = on_complete
        self.on_dismiss = on_dismiss
        self.notifier = notifier
        self.on_tick = on_tick
        self._subscription: Optional[Subscription] = None
        self._schedule()

    @property
    def running(self) -> bool:
        return self.state == TimerState.RUNNING and not self.dismissed

    @property
    def completed(self) -> bool:
        return self.state == TimerState.COMPLETED

    @property
    def display(self) -> str:
        return format_time(self.remaining)

    @property
    def progress(self) -> float:
        return (self.total - self.remaining) / self.total

    def handle(self, event: TimerEvent) -> None:
        if self.dismissed:
            log.debug(f"Ignoring {event} on dismissed timer")
            return

        if event == TimerEvent.TICK:
            self._tick()
        elif event == TimerEvent.TOGGLE:
            self.toggle()
        elif event == TimerEvent.RESET:
            self.reset()
        elif event == TimerEvent.DISMISS:
            self.dismiss()
        else:
            log.warning(f"Unknown timer event: {event}")

    def toggle(self) -> None:
        if self.dismissed or self.completed:
            return
        self.state = TimerState.PAUSED if self.state == TimerState.RUNNING else TimerState.RUNNING
        self._schedule()

    def reset(self) -> None:
        if self.dismissed or self.completed:
            return
        self.remaining = self.total
        self.state = TimerState.PAUSED
        self._schedule()

    def dismiss(self) -> None:
        if self.dismissed:
            return
        self._cancel()
        self.dismissed = True
        self.on_dismiss()

    def _tick(self) -> None:
        if not self.running:
            return
        self.remaining = max(self.remaining - 1, 0)
        if self.remaining == 0:
            self.state = TimerState.COMPLETED
            self._cancel()
            self._notify()
            self.on_complete()
        elif self.on_tick is not None:
            self.on_tick(self)

    def _notify(self) -> None:
        log.info(f"⏰ {self.minutes}-minute timer finished")
        if self.notifier is None:
            return
        try:
            self.notifier(self)
        except Exception as e:
            log.warning(f"Timer notification failed: {e}")

    def _schedule(self) -> None:
        # drop any pending tick before subscribing again
        self._cancel()
        if self.running:
            self._subscription = self.ticker.subscribe(lambda: self.handle(TimerEvent.TICK))

    def _cancel(self) -> None:
        if self._subscription is not None:
            self._subscription.cancel()
            self._subscription = None
