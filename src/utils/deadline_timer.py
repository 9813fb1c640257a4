"""
Single-shot cancelable deadline for input windows
"""

import threading
from typing import Callable, Optional


class DeadlineTimer:
    """
    Owned, replaceable single-shot timer.

    At most one underlying threading.Timer is alive per instance: arm()
    cancels the previous one before scheduling a new one. Every arm()
    hands out a fresh generation number which is passed to the expiry
    callback, so a firing that raced with cancel() or a re-arm can be
    recognised as stale with is_current().

    Example:
        def on_expired(generation):
            if deadline.is_current(generation):
                handle_timeout()

        deadline = DeadlineTimer(on_expired)
        generation = deadline.arm(30.0)   # 30 s from now
        deadline.arm(30.0)                # restarts, old generation is now stale
        deadline.cancel()
    """

    def __init__(self,
                 on_expired: Callable[[int], None],
                 timer_factory: Callable[..., threading.Timer] = threading.Timer):
        """
        Args:
            on_expired: Called on the timer thread with the generation that fired
            timer_factory: threading.Timer compatible constructor (tests swap in a fake)
        """
        self._on_expired = on_expired
        self._timer_factory = timer_factory
        self._timer: Optional[threading.Timer] = None
        self._generation = 0
        self._lock = threading.Lock()

    def arm(self, timeout_s: float) -> int:
        """
        Cancel any pending deadline and schedule a new one.

        Args:
            timeout_s: Seconds until expiry

        Returns:
            Generation number of the new deadline
        """
        with self._lock:
            self._cancel_locked()
            generation = self._generation
            timer = self._timer_factory(timeout_s, self._fire, args=(generation,))
            timer.daemon = True
            self._timer = timer
            timer.start()
        return generation

    def cancel(self) -> None:
        """Cancel the pending deadline (if any) and invalidate its generation"""
        with self._lock:
            self._cancel_locked()

    def is_current(self, generation: int) -> bool:
        """
        True if generation belongs to the armed deadline.

        Stays True while that deadline's own expiry callback runs, False
        once it has returned, been cancelled or been replaced.
        """
        with self._lock:
            return self._timer is not None and generation == self._generation

    @property
    def is_armed(self) -> bool:
        """True from arm() until the deadline fires or is cancelled"""
        with self._lock:
            return self._timer is not None

    def _fire(self, generation: int) -> None:
        """Timer thread entry: run the callback, then disarm if nothing re-armed meanwhile"""
        try:
            self._on_expired(generation)
        finally:
            with self._lock:
                if generation == self._generation:
                    self._timer = None

    def _cancel_locked(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        # Bump even without a live timer so late firings stay stale
        self._generation += 1
