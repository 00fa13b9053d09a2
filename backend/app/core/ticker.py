import asyncio
import logging
from typing import Callable, List, Optional

log = logging.getLogger(__name__)


class Subscription:
    def __init__(self, ticker: "Ticker", callback: Callable[[], None]):
        self._ticker = ticker
        self.callback = callback
        self.active = True

    def cancel(self) -> None:
        """Detach from the ticker. Takes effect before this call returns."""
        if not self.active:
            return
        self.active = False
        self._ticker._subscriptions.remove(self)


class Ticker:
    """
    Recurring tick source shared by everything in one session.

    The host either calls ``tick()`` itself or runs ``start()`` to get one
    asyncio task that ticks every ``interval`` seconds.
    """

    def __init__(self, interval: float = 1.0):
        self.interval = interval
        self._subscriptions: List[Subscription] = []
        self._task: Optional[asyncio.Task] = None

    def subscribe(self, callback: Callable[[], None]) -> Subscription:
        sub = Subscription(self, callback)
        self._subscriptions.append(sub)
        return sub

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def tick(self) -> None:
        for sub in list(self._subscriptions):
            # an earlier callback may have cancelled this one
            if sub.active:
                sub.callback()

    def start(self):
        if self._task is None:
            self._task = asyncio.create_task(self._run())

    async def _run(self):
        while True:
            await asyncio.sleep(self.interval)
            log.debug(f"tick ({len(self._subscriptions)} subscribers)")
            self.tick()

    async def cancel(self):
        for sub in list(self._subscriptions):
            sub.cancel()
        if self._task is not None:
            self._task.cancel()
            # gather keeps a cancellation of the caller itself propagating
            await asyncio.gather(self._task, return_exceptions=True)
            self._task = None
