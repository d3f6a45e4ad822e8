"""슬랙 이벤트 라우팅

message / reaction_added 이벤트를 하나의 진입점에서 변환하고 종류별로 처리합니다.
"""

import logging

from printbot.errors import MalformedEventError
from printbot.events import MessageEvent, ReactionEvent, parse_event
from printbot.handlers.message import handle_file_share
from printbot.handlers.reaction import handle_printer_choice

logger = logging.getLogger(__name__)


def handle_event(payload: dict, dependencies: dict) -> None:
    """raw 이벤트를 변환하여 파일 공유 / 프린터 선택 처리로 넘김

    형식이 잘못된 이벤트와 처리 대상이 아닌 이벤트는 로그만 남기고 버립니다.
    """
    try:
        event = parse_event(payload)
    except MalformedEventError as e:
        logger.warning(f"잘못된 형식의 이벤트 무시: {e}")
        return

    if isinstance(event, MessageEvent):
        handle_file_share(event, dependencies)
    elif isinstance(event, ReactionEvent):
        handle_printer_choice(event, dependencies)
    else:
        logger.debug(f"처리하지 않는 이벤트: {event}")


def register_event_handlers(app, dependencies: dict):
    """이벤트 핸들러 등록

    Args:
        app: Slack Bolt App 인스턴스
        dependencies: 의존성 딕셔너리
    """

    @app.event("message")
    def handle_message(event):
        handle_event(event, dependencies)

    @app.event("reaction_added")
    def handle_reaction(event):
        handle_event(event, dependencies)
