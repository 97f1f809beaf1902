"""Tests for the mock exam countdown driver."""

import asyncio
import random

from compass.schemas.session import SessionMode
from compass.services.session_engine import ExamSession
from compass.services.session_timer import SessionTimer
from tests.helpers.fakes import InMemorySource, RecordingSink, make_question

TICK = 0.01


def mock_session(sink: RecordingSink | None = None, seconds: int = 3) -> ExamSession:
    session = ExamSession(InMemorySource(), scores=sink, user_id="user-1", rng=random.Random(1))
    session.start_game(
        SessionMode.MOCK,
        custom_questions=[make_question(i) for i in range(4)],
        duration_seconds=seconds,
    )
    return session


async def wait_for_stop(timer: SessionTimer, timeout: float = 2.0) -> None:
    async def _poll():
        while timer.running:
            await asyncio.sleep(TICK)

    await asyncio.wait_for(_poll(), timeout)


async def test_timer_ends_session_on_expiry():
    sink = RecordingSink()
    session = mock_session(sink, seconds=3)
    timer = SessionTimer(session, interval=TICK)

    assert timer.start() is True
    await wait_for_stop(timer)

    assert not session.active
    assert session.time_remaining_seconds == 0
    assert session.mock_results.correct == 0
    assert len(sink.mock_scores) == 1


async def test_timer_does_not_start_for_standard():
    session = ExamSession(InMemorySource([make_question(1)]), rng=random.Random(1))
    session.start_game(SessionMode.STANDARD)
    timer = SessionTimer(session, interval=TICK)

    assert timer.start() is False
    assert not timer.running


async def test_timer_does_not_start_twice():
    timer = SessionTimer(mock_session(seconds=100), interval=TICK)

    assert timer.start() is True
    assert timer.start() is False
    timer.cancel()


async def test_cancel_stops_countdown():
    session = mock_session(seconds=1000)
    timer = SessionTimer(session, interval=TICK)
    timer.start()
    await asyncio.sleep(TICK * 5)

    timer.cancel()
    await asyncio.sleep(TICK * 2)
    remaining = session.time_remaining_seconds
    await asyncio.sleep(TICK * 5)

    assert not timer.running
    assert session.time_remaining_seconds == remaining
    assert session.active


async def test_timer_stops_when_session_ends_early():
    sink = RecordingSink()
    session = mock_session(sink, seconds=1000)
    timer = SessionTimer(session, interval=TICK)
    timer.start()

    session.submit_mock_exam({})
    await wait_for_stop(timer)

    assert len(sink.mock_scores) == 1
    assert session.time_remaining_seconds > 0


async def test_cancel_without_start_is_harmless():
    timer = SessionTimer(mock_session(), interval=TICK)
    timer.cancel()
    assert not timer.running
