"""리액션 매칭 테스트"""

import pytest

from printbot.correlator import Outcome, ReactionCorrelator
from printbot.events import ReactionEvent
from printbot.registry import PendingPrint, PendingPrintRegistry

from conftest import BOT_USER_ID

PROMPT_TS = "1700000000.000001"


@pytest.fixture
def registry():
    registry = PendingPrintRegistry()
    registry.put("C1", PendingPrint(channel_id="C1", file_ref="https://files.slack.com/a.pdf", prompt_ts=PROMPT_TS))
    return registry


@pytest.fixture
def correlator(registry, config):
    return ReactionCorrelator(registry, config, BOT_USER_ID)


def _reaction(channel="C1", ts=PROMPT_TS, reaction="printer", user="U_USER"):
    return ReactionEvent(channel=channel, message_ts=ts, reaction=reaction, user=user)


class TestResolve:
    def test_matching_reaction_resolves_and_removes(self, correlator, registry):
        result = correlator.correlate(_reaction(reaction="rainbow"))

        assert result.resolved
        assert result.printer.queue == "canon-color"
        assert result.pending.file_ref == "https://files.slack.com/a.pdf"
        assert registry.get("C1") is None

    def test_duplicate_reaction_after_resolution_is_no_pending(self, correlator):
        assert correlator.correlate(_reaction()).resolved

        again = correlator.correlate(_reaction(reaction="rainbow"))
        assert again.outcome is Outcome.NO_PENDING


class TestIgnore:
    def test_no_pending_in_channel(self, correlator):
        assert correlator.correlate(_reaction(channel="C2")).outcome is Outcome.NO_PENDING

    def test_unrelated_message_keeps_entry(self, correlator, registry):
        result = correlator.correlate(_reaction(ts="1700000000.999999"))

        assert result.outcome is Outcome.UNRELATED_MESSAGE
        assert registry.get("C1") is not None

    def test_unknown_reaction_keeps_entry(self, correlator, registry):
        result = correlator.correlate(_reaction(reaction="thumbsup"))

        assert result.outcome is Outcome.UNKNOWN_REACTION
        assert registry.get("C1") is not None
        # 다시 누르면 선택 가능
        assert correlator.correlate(_reaction(reaction="printer")).resolved

    @pytest.mark.parametrize("reaction,ts,channel", [
        ("printer", PROMPT_TS, "C1"),
        ("thumbsup", PROMPT_TS, "C1"),
        ("printer", "other.ts", "C1"),
        ("printer", PROMPT_TS, "C2"),
    ])
    def test_bot_reaction_always_ignored(self, correlator, registry, reaction, ts, channel):
        """봇이 단 선택지 리액션은 대상/이모지와 무관하게 무시"""
        result = correlator.correlate(_reaction(channel=channel, ts=ts, reaction=reaction, user=BOT_USER_ID))

        assert result.outcome is Outcome.SELF_REACTION
        assert registry.get("C1") is not None

    def test_replaced_between_get_and_take(self, config):
        """조회 이후 새 프롬프트로 교체된 경우 이전 프롬프트 리액션은 매칭되지 않음"""
        registry = PendingPrintRegistry()
        old = PendingPrint(channel_id="C1", file_ref="old", prompt_ts="1.0001")
        new = PendingPrint(channel_id="C1", file_ref="new", prompt_ts="1.0002")
        registry.put("C1", old)

        original_get = registry.get

        def racing_get(channel_id):
            pending = original_get(channel_id)
            registry.put("C1", new)
            return pending

        registry.get = racing_get
        correlator = ReactionCorrelator(registry, config, BOT_USER_ID)

        result = correlator.correlate(_reaction(ts="1.0001"))

        assert result.outcome is Outcome.NO_PENDING
        assert original_get("C1") == new
