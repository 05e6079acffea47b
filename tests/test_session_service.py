"""
Tests for the in-memory session service and paced reply delivery.
"""

import asyncio

import pytest

from receptionist.config import Settings
from receptionist.intake.agent import ReceptionistAgent
from receptionist.intake.stages import Stage
from receptionist.services import IntakeSessionService, SessionNotFoundError


@pytest.fixture
def service(settings):
    return IntakeSessionService(settings)


@pytest.fixture
def sleeps(monkeypatch):
    """Record asyncio.sleep calls made while delivering replies."""
    calls = []

    async def _fake_sleep(delay):
        calls.append(delay)

    monkeypatch.setattr("receptionist.intake.agent.asyncio.sleep", _fake_sleep)
    return calls


class TestSessions:
    def test_start_registers_session(self, service):
        state = service.start_session()
        assert service.get_session(state.id) is state
        assert len(state.log) == 1

    def test_unknown_session(self, service):
        with pytest.raises(SessionNotFoundError):
            service.get_session("missing")

    def test_end_session(self, service):
        state = service.start_session()
        service.end_session(state.id)
        with pytest.raises(SessionNotFoundError):
            service.get_session(state.id)
        with pytest.raises(SessionNotFoundError):
            service.end_session(state.id)


class TestHandleTurn:
    @pytest.mark.asyncio
    async def test_returns_all_turns_including_staggered(self, service):
        state = service.start_session()
        for text in ["theek hoon", "Rita Verma", "28", "baal girna"]:
            await service.handle_turn(state.id, text)

        turns = await service.handle_turn(state.id, "somwaar subah 10 baje")

        assert len(turns) == 4
        assert turns[-1].text == ReceptionistAgent.BOOKING_CLOSING
        assert state.stage == Stage.DONE
        assert not state.pending

    @pytest.mark.asyncio
    async def test_blank_message_ignored(self, service):
        state = service.start_session()
        assert await service.handle_turn(state.id, "   ") == []
        assert len(state.log) == 1

    @pytest.mark.asyncio
    async def test_unknown_session(self, service):
        with pytest.raises(SessionNotFoundError):
            await service.handle_turn("missing", "hello")


class TestPacing:
    @pytest.mark.asyncio
    async def test_delays_follow_settings(self, sleeps):
        settings = Settings(
            reply_pacing=1.0,
            reminder_delay=0.35,
            confirmation_delay=0.4,
            closing_delay=0.4,
        )
        agent = ReceptionistAgent(settings)
        state, _ = agent.start()

        agent.step(state, "theek hoon")
        agent.step(state, "fee kitni hai?")
        await agent.deliver(state)
        assert sleeps == [0.35]

        for text in ["Rita Verma", "28", "baal girna", "kal subah"]:
            agent.step(state, text)
        delivered = await agent.deliver(state)

        assert sleeps == [0.35, 0.4, 0.4]
        assert [t.text for t in delivered] == [
            ReceptionistAgent.BOOKING_CONFIRMATION,
            ReceptionistAgent.BOOKING_CLOSING,
        ]

    @pytest.mark.asyncio
    async def test_pacing_scales_delays(self, sleeps):
        agent = ReceptionistAgent(Settings(reply_pacing=0.5, reminder_delay=0.4))
        state, _ = agent.start()
        agent.step(state, "theek hoon")
        agent.step(state, "parking?")
        await agent.deliver(state)
        assert sleeps == [0.2]

    @pytest.mark.asyncio
    async def test_zero_pacing_never_sleeps(self, agent, sleeps):
        state, _ = agent.start()
        agent.step(state, "theek hoon")
        agent.step(state, "parking?")
        delivered = await agent.deliver(state)
        assert sleeps == []
        assert len(delivered) == 1


class TestOverlappingTurns:
    @pytest.mark.asyncio
    async def test_each_message_keeps_its_own_reminder(self):
        service = IntakeSessionService(Settings(reply_pacing=1.0, reminder_delay=0.2))
        state = service.start_session()
        for text in ["theek hoon", "Rita Verma"]:
            await service.handle_turn(state.id, text)
        assert state.stage == Stage.ASK_AGE
        reminder = "Rita Verma ji, aapki umar kya hai ji?"

        first = asyncio.create_task(service.handle_turn(state.id, "fee kitni hai"))
        await asyncio.sleep(0.05)
        second = asyncio.create_task(service.handle_turn(state.id, "parking hai?"))
        first_turns, second_turns = await asyncio.gather(first, second)

        # The second message flushes the first one's pending reminder
        assert [t.text for t in first_turns][:1] == ["fee kitni hai"]
        assert reminder not in [t.text for t in first_turns]
        second_texts = [t.text for t in second_turns]
        assert second_texts[0] == reminder
        assert second_texts[1] == "parking hai?"
        assert second_texts[-1] == reminder
        assert not state.pending

        # Each reply appears in the transcript exactly once
        log_texts = [t.text for t in state.log]
        assert log_texts.count(reminder) == 2
        ids = [t.id for t in state.log]
        assert len(ids) == len(set(ids))
