from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from datetime import datetime

from app.core.clock import utc_now
from app.services.schedule_view import Countdown, time_until

logger = logging.getLogger(__name__)


class CountdownTicker:
    """Calls ``on_tick`` once per interval with the time left until ``target``.

    Stops by itself when the target is reached (after one final ``None``
    tick) or when ``stop()`` is called by the owner on teardown.
    """

    def __init__(
        self,
        target: datetime,
        on_tick: Callable[[Countdown | None], None],
        *,
        interval_seconds: float = 1.0,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._target = target
        self._on_tick = on_tick
        self._interval = interval_seconds
        self._clock = clock
        self._stopped = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def tick(self) -> bool:
        """Emit one update; returns False once the countdown has finished."""
        remaining = time_until(self._target, self._clock())
        self._on_tick(remaining)
        return remaining is not None

    def start(self) -> None:
        if self.running:
            return
        self._stopped.clear()
        self._thread = threading.Thread(target=self._run, name="countdown-ticker", daemon=True)
        self._thread.start()

    def stop(self, timeout: float | None = None) -> None:
        self._stopped.set()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout)
        self._thread = None

    def _run(self) -> None:
        while not self._stopped.wait(self._interval):
            try:
                if not self.tick():
                    break
            except Exception:
                logger.exception("Countdown tick callback failed")
                break
