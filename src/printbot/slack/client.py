"""슬랙 명령 인터페이스

slack_sdk WebClient 호출을 감싸서 실패 시 TransportError로 통일합니다.
코어 모듈(prompter, dispatcher)은 이 클래스만 사용합니다.
"""

import logging

from slack_sdk.errors import SlackClientError

from printbot.errors import TransportError
from printbot.slack.file_handler import download_file

logger = logging.getLogger(__name__)


class SlackChat:
    """채널 메시지 전송/삭제, 리액션 추가, 파일 다운로드"""

    def __init__(self, client, bot_token: str, download_timeout: float = 60.0):
        self.client = client
        self._bot_token = bot_token
        self._download_timeout = download_timeout

    def post_message(self, channel: str, text: str) -> str:
        """메시지 전송 후 ts 반환"""
        try:
            response = self.client.chat_postMessage(channel=channel, text=text)
        except (SlackClientError, OSError) as e:
            raise TransportError(f"메시지 전송 실패: {e}") from e
        ts = response.get("ts")
        if not ts:
            raise TransportError("메시지 전송 응답에 ts가 없습니다")
        return ts

    def add_reaction(self, channel: str, ts: str, name: str) -> None:
        try:
            self.client.reactions_add(channel=channel, timestamp=ts, name=name)
        except (SlackClientError, OSError) as e:
            raise TransportError(f"리액션 추가 실패 ({name}): {e}") from e

    def delete_message(self, channel: str, ts: str) -> None:
        try:
            self.client.chat_delete(channel=channel, ts=ts)
        except (SlackClientError, OSError) as e:
            raise TransportError(f"메시지 삭제 실패: {e}") from e

    def download_file(self, url: str) -> bytes:
        return download_file(url, self._bot_token, timeout=self._download_timeout)

    def send_notice(self, channel: str, text: str) -> None:
        """안내 메시지 전송 (실패 시 로그만 남김)"""
        try:
            self.post_message(channel, text)
        except TransportError as e:
            logger.error(f"안내 메시지 전송 실패: channel={channel}, {e}")
