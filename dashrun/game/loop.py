# dashrun/game/loop.py
from __future__ import annotations
import logging
from collections.abc import Callable
from typing import Dict, Optional

import pygame

logger = logging.getLogger(__name__)


class FrameScheduler:
    """
    Queue of frame callbacks. `run_pending()` runs everything queued before
    the call; callbacks queued while it runs wait for the next frame.
    """

    def __init__(self) -> None:
        self._pending: Dict[int, Callable[[], None]] = {}
        self._next_token = 1

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def call_soon(self, callback: Callable[[], None]) -> int:
        token = self._next_token
        self._next_token += 1
        self._pending[token] = callback
        return token

    def cancel(self, token: int) -> bool:
        return self._pending.pop(token, None) is not None

    def run_pending(self) -> int:
        batch = list(self._pending.values())
        self._pending.clear()
        for cb in batch:
            cb()
        return len(batch)


class PygameScheduler(FrameScheduler):
    """Paces frames with pygame's clock; each run_pending() waits for the next frame slot."""

    def __init__(self, fps: int = 60) -> None:
        super().__init__()
        self.fps = max(1, int(fps))
        self.clock = pygame.time.Clock()

    def run_pending(self) -> int:
        self.clock.tick(self.fps)
        return super().run_pending()


class FrameLoop:
    """
    update + render once per frame, rescheduling itself while running.
    Holds at most one pending frame: start() while running and stop() while
    stopped are both no-ops.
    """

    def __init__(
        self,
        *,
        scheduler: FrameScheduler,
        update_fn: Callable[[], None],
        render_fn: Callable[[], None],
    ) -> None:
        self._scheduler = scheduler
        self._update_fn = update_fn
        self._render_fn = render_fn
        self._running = False
        self._token: Optional[int] = None

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        if self._running:
            return
        self._running = True
        self._schedule_next()

    def stop(self) -> None:
        self._running = False
        if self._token is not None:
            self._scheduler.cancel(self._token)
            self._token = None

    def _schedule_next(self) -> None:
        self._token = self._scheduler.call_soon(self._frame)

    def _frame(self) -> None:
        self._token = None
        if not self._running:
            return

        try:
            self._update_fn()
            self._render_fn()
        except Exception:
            # fail fast rather than keep ticking on a corrupt state
            logger.exception("frame callback failed, stopping loop")
            self.stop()
            raise

        # update_fn may have stopped (game over) or stopped and restarted us
        if self._running and self._token is None:
            self._schedule_next()
