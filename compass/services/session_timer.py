"""One-second countdown driver for timed sessions."""

import asyncio

from compass.core.logging import get_logger
from compass.schemas.session import SessionMode
from compass.services.session_engine import ExamSession

logger = get_logger(__name__)


class SessionTimer:
    """
    Calls ``session.tick()`` once per ``interval`` seconds on the event loop.

    Stops scheduling as soon as the session is no longer active, so it can
    never end a session twice.
    """

    def __init__(self, session: ExamSession, interval: float = 1.0):
        self.session = session
        self.interval = interval
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def _should_tick(self) -> bool:
        return (
            self.session.active
            and self.session.mode == SessionMode.MOCK
            and self.session.time_remaining_seconds > 0
        )

    def start(self) -> bool:
        """Start ticking if the session is timed. Must run inside the event loop."""
        if self.running or not self._should_tick():
            return False
        self._task = asyncio.get_running_loop().create_task(self._run())
        return True

    async def _run(self) -> None:
        while self._should_tick():
            await asyncio.sleep(self.interval)
            if not self.session.active:
                break
            self.session.tick()
        logger.debug(
            "Session timer stopped",
            extra={
                "user_id": self.session.user_id,
                "time_remaining_seconds": self.session.time_remaining_seconds,
            },
        )

    def cancel(self) -> None:
        task, self._task = self._task, None
        if task is None or task.done():
            return
        if task.get_loop().is_closed():
            return
        task.cancel()
