"""리액션 → 대기 인쇄 요청 매칭

채널별 상태: 대기 없음 → 프롬프트 발행 → {선택 완료 | 무시}*

리액션이 인쇄로 이어지려면 다음을 모두 만족해야 합니다.
1. 봇 자신이 단 리액션이 아닐 것 (프롬프트에 선택지를 다는 동작)
2. 채널에 대기 중인 요청이 있을 것
3. 리액션이 그 요청의 프롬프트 메시지에 달렸을 것
4. 리액션이 설정된 프린터 중 하나일 것

조건을 모두 만족하면 대기 요청은 인쇄를 시작하기 전에 레지스트리에서 제거됩니다.
"""

import enum
import logging
from dataclasses import dataclass
from typing import Optional

from printbot.config import Config, PrinterOption
from printbot.events import ReactionEvent
from printbot.registry import PendingPrint, PendingPrintRegistry

logger = logging.getLogger(__name__)


class Outcome(enum.Enum):
    RESOLVED = "resolved"
    SELF_REACTION = "self_reaction"
    NO_PENDING = "no_pending"
    UNRELATED_MESSAGE = "unrelated_message"
    UNKNOWN_REACTION = "unknown_reaction"


@dataclass(frozen=True)
class Correlation:
    """매칭 결과"""
    outcome: Outcome
    pending: Optional[PendingPrint] = None
    printer: Optional[PrinterOption] = None

    @property
    def resolved(self) -> bool:
        return self.outcome is Outcome.RESOLVED


class ReactionCorrelator:
    def __init__(self, registry: PendingPrintRegistry, config: Config, bot_user_id: str | None):
        self.registry = registry
        self.config = config
        self.bot_user_id = bot_user_id

    def correlate(self, event: ReactionEvent) -> Correlation:
        """리액션 이벤트를 대기 요청과 프린터로 해석"""
        if self.bot_user_id and event.user == self.bot_user_id:
            return Correlation(Outcome.SELF_REACTION)

        pending = self.registry.get(event.channel)
        if pending is None:
            return Correlation(Outcome.NO_PENDING)

        if event.message_ts != pending.prompt_ts:
            return Correlation(Outcome.UNRELATED_MESSAGE)

        printer = self.config.find_printer(event.reaction)
        if printer is None:
            logger.warning(f"알 수 없는 리액션: {event.reaction} (channel={event.channel})")
            return Correlation(Outcome.UNKNOWN_REACTION)

        # get 이후 다른 핸들러가 먼저 가져갔거나 새 프롬프트로 교체됐을 수 있음
        taken = self.registry.take(event.channel, event.message_ts)
        if taken is None:
            return Correlation(Outcome.NO_PENDING)

        logger.info(
            f"프린터 선택: user={event.user}, channel={event.channel}, printer={printer.queue}"
        )
        return Correlation(Outcome.RESOLVED, pending=taken, printer=printer)
