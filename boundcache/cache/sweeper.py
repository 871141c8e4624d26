# boundcache/cache/sweeper.py

import threading
from typing import Optional

from ..utils.durations import Duration, to_seconds
from ..utils.logging import get_logger

log = get_logger(__name__)

# seconds between sweeps when the caller does not pick a period
DEFAULT_SWEEP_PERIOD = 2.0


class SweepHandle:
    """
    Caller-owned handle for one periodic sweep thread.

    The first tick fires immediately, then every `period` seconds.
    `ticks` counts sweeps that ran, `skipped` the ticks dropped because
    another sweep of the same cache was still in progress.
    stop() returns True once the thread has exited; after that no tick runs.
    Also usable as a context manager.
    """

    def __init__(self, cache, period: float):
        self.cache = cache
        self.period = period
        self.ticks = 0
        self.skipped = 0
        self._stopped_logged = False
        self._stop = threading.Event()
        self._thread = threading.Thread(
            target=self._run, name=f"cache-sweep-{id(cache):x}", daemon=True
        )

    def _run(self):
        while not self._stop.is_set():
            try:
                removed = self.cache.try_sweep()
                if removed is None:
                    self.skipped += 1
                else:
                    self.ticks += 1
                if removed:
                    log.debug(f"cache.sweep removed={removed}")
            except Exception:
                log.exception("cache.sweep tick failed")
            if self._stop.wait(self.period):
                break

    def start(self) -> "SweepHandle":
        self._thread.start()
        log.info(f"cache.sweep started period={self.period}s")
        return self

    @property
    def running(self) -> bool:
        return self._thread.is_alive()

    def stop(self, timeout: Optional[float] = None) -> bool:
        """
        Ask the thread to exit and wait for it. Every call waits, so a
        second caller does not return while the first is still joining.
        Returns False if `timeout` ran out with a sweep still in progress.
        """
        self._stop.set()
        if self._thread is threading.current_thread():
            return False
        if self._thread.is_alive():
            self._thread.join(timeout)
        if self._thread.is_alive():
            log.warning(f"cache.sweep still running after stop timeout={timeout}s")
            return False
        if not self._stopped_logged:
            self._stopped_logged = True
            log.info(f"cache.sweep stopped ticks={self.ticks} skipped={self.skipped}")
        return True

    def __enter__(self) -> "SweepHandle":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.stop()


def start_periodic_sweep(cache, period: Duration = DEFAULT_SWEEP_PERIOD) -> SweepHandle:
    """Run cache.try_sweep() on a background thread every `period` seconds."""
    return SweepHandle(cache, to_seconds(period, "period")).start()
