import logging
from typing import Callable, Optional

from .chime import ChimeGenerator
from .state_machine import CountdownTimer

log = logging.getLogger(__name__)

TOAST_DURATION_MS = 5000


class TimerNotifier:
    """
    Tells the client a timer has finished: a toast-style message, then
    the chime. A chime that cannot be rendered is skipped.
    """

    def __init__(self, send: Callable[[dict], None], chime: Optional[ChimeGenerator] = None):
        self.send = send
        self.chime = chime

    def __call__(self, timer: CountdownTimer) -> None:
        self.send({
            "type": "notification",
            "title": "Timer Complete! 🔔",
            "description": f"Your {timer.minutes}-minute timer has finished.",
            "duration_ms": TOAST_DURATION_MS,
        })

        if self.chime is None:
            return
        try:
            audio = self.chime.data_uri()
        except Exception as e:
            log.warning(f"🔇 Could not render completion chime: {e}")
            return
        self.send({"type": "chime", "audio": audio})
