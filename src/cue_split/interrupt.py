"""Signal handling -- run a cleanup callback once when the user interrupts."""

from __future__ import annotations

import signal
from collections.abc import Callable

from loguru import logger

from .errors import RunInterrupted

log = logger.bind(stage="interrupt")

GUARDED_SIGNALS: tuple[signal.Signals, ...] = (signal.SIGINT, signal.SIGTERM)


class InterruptGuard:
    """Context manager that turns SIGINT/SIGTERM into a cleanup-then-exit.

    The first signal raises RunInterrupted in the main flow, which unwinds
    any blocking subprocess call (the child is killed and reaped) before
    ``on_interrupt`` runs. Further signals are ignored until the guard exits,
    so cleanup runs to completion exactly once.
    """

    def __init__(
        self,
        on_interrupt: Callable[[], None],
        signals: tuple[signal.Signals, ...] = GUARDED_SIGNALS,
    ) -> None:
        self.on_interrupt = on_interrupt
        self.signals = signals
        self.fired = False
        self._previous: dict[signal.Signals, object] = {}

    def _handle(self, signum, frame) -> None:
        if self.fired:
            return
        self.fired = True
        for sig in self.signals:
            signal.signal(sig, signal.SIG_IGN)
        raise RunInterrupted(signum)

    def __enter__(self) -> InterruptGuard:
        for sig in self.signals:
            self._previous[sig] = signal.getsignal(sig)
            signal.signal(sig, self._handle)
        log.debug("Interrupt handler armed")
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        try:
            if isinstance(exc, RunInterrupted):
                log.warning(f"{exc} -- cleaning up")
                self.on_interrupt()
        finally:
            for sig, handler in self._previous.items():
                # getsignal() returns None for handlers not set from Python
                signal.signal(sig, signal.SIG_DFL if handler is None else handler)
            self._previous.clear()
            log.debug("Interrupt handler disarmed")
        return False
