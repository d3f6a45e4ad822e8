"""파일 공유 메시지 핸들러"""

import logging

from printbot.events import MessageEvent

logger = logging.getLogger(__name__)


def handle_file_share(event: MessageEvent, dependencies: dict) -> None:
    """파일 공유 메시지 처리

    파일이 정확히 하나면 프린터 선택 프롬프트를 보내고 대기 요청을 등록합니다.
    같은 채널에 이미 대기 요청이 있으면 새 요청으로 덮어씁니다.
    """
    config = dependencies["config"]
    chat = dependencies["chat"]
    registry = dependencies["registry"]
    prompter = dependencies["prompter"]

    if config.slack.bot_user_id and event.user == config.slack.bot_user_id:
        return

    if len(event.file_refs) != 1:
        chat.send_notice(event.channel, config.messages.send_one_file)
        return

    pending = prompter.ask(event.channel, event.file_refs[0])
    if pending is None:
        return

    previous = registry.put(event.channel, pending)
    if previous is not None:
        logger.info(
            f"대기 중인 인쇄 요청 교체: channel={event.channel}, "
            f"이전 프롬프트={previous.prompt_ts}"
        )
    logger.info(f"인쇄 요청 대기: user={event.user}, channel={event.channel}")
