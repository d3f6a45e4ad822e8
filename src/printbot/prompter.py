"""프린터 선택 프롬프트

파일이 공유되면 설정된 프린터 목록을 메시지로 보내고,
프린터마다 선택용 리액션을 달아둡니다.
"""

import logging
from typing import Optional

from printbot.config import PrinterOption
from printbot.errors import TransportError
from printbot.registry import PendingPrint

logger = logging.getLogger(__name__)


def build_prompt_text(heading: str, printers: list[PrinterOption]) -> str:
    """프린터 선택 메시지 본문 생성"""
    lines = [
        f"- :{p.reaction}: *{p.display_name}* _({p.note})_"
        for p in printers
    ]
    return heading + "\n\n" + "\n".join(lines)


class PrinterPrompter:
    """프린터 선택 메시지 전송기"""

    def __init__(self, chat, printers: list[PrinterOption], heading: str):
        self.chat = chat
        self.printers = printers
        self.heading = heading

    def ask(self, channel: str, file_ref: str) -> Optional[PendingPrint]:
        """선택 메시지를 보내고 대기 요청을 만들어 반환

        메시지 전송에 실패하면 None을 반환합니다.
        리액션 추가 실패는 프린터별로 로그만 남기고 계속 진행합니다.
        """
        text = build_prompt_text(self.heading, self.printers)
        try:
            prompt_ts = self.chat.post_message(channel, text)
        except TransportError as e:
            logger.error(f"프린터 선택 메시지 전송 실패: channel={channel}, {e}")
            return None

        for printer in self.printers:
            try:
                self.chat.add_reaction(channel, prompt_ts, printer.reaction)
            except TransportError as e:
                logger.error(f"리액션 추가 실패: printer={printer.queue}, {e}")

        return PendingPrint(channel_id=channel, file_ref=file_ref, prompt_ts=prompt_ts)
