"""프린터 선택 리액션 핸들러"""

import logging

from printbot.correlator import Outcome
from printbot.events import ReactionEvent

logger = logging.getLogger(__name__)


def handle_printer_choice(event: ReactionEvent, dependencies: dict):
    """리액션을 대기 요청과 매칭하고, 선택이 확정되면 인쇄를 실행

    Returns:
        DispatchResult 또는 None (무시된 리액션)
    """
    correlator = dependencies["correlator"]
    dispatcher = dependencies["dispatcher"]

    correlation = correlator.correlate(event)
    if not correlation.resolved:
        if correlation.outcome is not Outcome.SELF_REACTION:
            logger.debug(
                f"리액션 무시: {correlation.outcome.value} "
                f"(channel={event.channel}, ts={event.message_ts}, reaction={event.reaction})"
            )
        return None

    # 대기 요청은 이미 제거되었으므로 어떤 오류든 사용자에게 실패를 알린다
    try:
        return dispatcher.dispatch(correlation.pending, correlation.printer, event.user)
    except Exception as e:
        logger.exception(f"인쇄 처리 중 예상치 못한 오류: {e}")
        chat = dependencies["chat"]
        chat.send_notice(event.channel, dependencies["config"].messages.failure)
        return None
