"""Control coordination: port-control debounce and reload recovery.

Every port toggle makes the switch report half-applied state for a few seconds, and a
reload takes the whole stack away for minutes. The coordinator tracks both windows so
that statistics polls can serve the cached snapshot instead of re-reading the device.
"""

from __future__ import annotations

import threading
from enum import Enum
from typing import Callable

from loguru import logger

COOLDOWN_DELAY = 3.0
RECOVERY_DELAY = 180.0

TimerFactory = Callable[[float, Callable[[], None]], threading.Timer]


class ControlState(Enum):
    """Coordinator state as seen by callers."""

    IDLE = "idle"
    CONTROLLING = "controlling"
    REBOOTING = "rebooting"
    # Waiting out the reboot is the same state under another name
    RECOVERY_WAIT = "rebooting"


class DelayedAction:
    """A cancellable delayed callback; arming replaces any previously armed run.

    The callback runs on a timer thread while holding ``lock``. A run that fired but
    was superseded before it got the lock is discarded.
    """

    def __init__(
        self,
        name: str,
        delay: float,
        action: Callable[[], None],
        lock: threading.RLock,
        timer_factory: TimerFactory = threading.Timer,
    ):
        self.name = name
        self.delay = delay
        self._action = action
        self._lock = lock
        self._timer_factory = timer_factory
        self._timer: threading.Timer | None = None
        self._generation = 0

    @property
    def armed(self) -> bool:
        return self._timer is not None

    def arm(self) -> None:
        """(Re)start the countdown. Call with ``lock`` held."""
        self.cancel()
        generation = self._generation
        self._timer = self._timer_factory(self.delay, lambda: self._fire(generation))
        self._timer.daemon = True
        self._timer.start()

    def cancel(self) -> None:
        """Drop the pending run, if any. Call with ``lock`` held."""
        self._generation += 1
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _fire(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation:
                logger.debug(f"{self.name} timer superseded, skipping")
                return
            self._timer = None
            self._action()


class ControlCoordinator:
    """Owns ``occupied_by_control`` / ``in_reboot`` and their timers.

    All methods expect the caller to hold the shared session lock; the timers take the
    same lock before touching the flags.
    """

    def __init__(
        self,
        lock: threading.RLock,
        cooldown: float = COOLDOWN_DELAY,
        recovery: float = RECOVERY_DELAY,
        timer_factory: TimerFactory = threading.Timer,
    ):
        self._lock = lock
        self.occupied_by_control = False
        self.in_reboot = False
        self._cooldown = DelayedAction("cooldown", cooldown, self._cooldown_elapsed, lock, timer_factory)
        self._recovery = DelayedAction("recovery", recovery, self._recovery_elapsed, lock, timer_factory)

    @property
    def state(self) -> ControlState:
        if self.in_reboot:
            return ControlState.REBOOTING
        if self.occupied_by_control:
            return ControlState.CONTROLLING
        return ControlState.IDLE

    def suppresses_polling(self) -> bool:
        """True while a poll would read transient state (after a toggle, during a reboot)."""
        return self.occupied_by_control or self.in_reboot

    def accepts_control(self) -> bool:
        return not self.in_reboot

    def begin_port_control(self) -> None:
        """Enter (or stay in) the debounce window before a port command is sent.

        Rapid toggles keep pushing the cooldown out, so a burst ends in a single
        return to idle timed from the last toggle.
        """
        self.occupied_by_control = True
        self._cooldown.arm()

    def reload(self, send_reload: Callable[[], None]) -> bool:
        """Run ``send_reload`` and wait out the reboot.

        A failing send is logged and leaves the coordinator idle.

        Returns:
            True if the reload was sent and the recovery window started.
        """
        if self.in_reboot:
            logger.info("Stack reload already in progress, dropping reload request")
            return False

        self._cooldown.cancel()
        self.occupied_by_control = False
        self.in_reboot = True
        self._recovery.arm()
        try:
            send_reload()
        except Exception as e:
            logger.error(f"Error while reloading stack: {e}")
            self._recovery.cancel()
            self.in_reboot = False
            return False
        logger.info(f"Stack reload sent, suppressing device access for {self._recovery.delay}s")
        return True

    def shutdown(self) -> None:
        """Cancel both timers and return to idle."""
        self._cooldown.cancel()
        self._recovery.cancel()
        self.occupied_by_control = False
        self.in_reboot = False

    def _cooldown_elapsed(self) -> None:
        logger.debug("Port control cooldown elapsed")
        self.occupied_by_control = False

    def _recovery_elapsed(self) -> None:
        logger.info("Reload recovery window elapsed")
        self.in_reboot = False
