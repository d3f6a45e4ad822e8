"""printbot 메인

슬랙 채널에 공유된 PDF를 리액션으로 고른 CUPS 프린터에서 인쇄합니다.
앱 초기화와 진입점만 담당합니다.
"""

import logging
import signal
import sys

from slack_bolt import App
from slack_bolt.adapter.socket_mode import SocketModeHandler
from slack_sdk import WebClient

from printbot.config import Config, ConfigurationError, load_config
from printbot.correlator import ReactionCorrelator
from printbot.cups import CupsClient
from printbot.dispatcher import PrintDispatcher
from printbot.handlers import register_all_handlers
from printbot.logging_config import setup_logging
from printbot.prompter import PrinterPrompter
from printbot.registry import PendingPrintRegistry
from printbot.slack import SlackChat

logger = logging.getLogger("printbot")


def build_dependencies(config: Config, client) -> dict:
    """핸들러 의존성 구성"""
    chat = SlackChat(
        client,
        bot_token=config.slack.bot_token,
        download_timeout=config.slack.download_timeout,
    )
    registry = PendingPrintRegistry()
    return {
        "config": config,
        "chat": chat,
        "registry": registry,
        "prompter": PrinterPrompter(chat, config.printers, config.messages.prompt),
        "correlator": ReactionCorrelator(registry, config, config.slack.bot_user_id),
        "dispatcher": PrintDispatcher(chat, CupsClient(config.cups), config.messages),
    }


def main():
    """printbot 진입점"""
    try:
        config = load_config()
        config.validate()
    except ConfigurationError as e:
        logging.basicConfig(level=logging.INFO)
        logger.error(f"설정 오류: {e}")
        sys.exit(1)

    setup_logging(config)
    logger.info(f"printbot을 시작합니다... (프린터 {len(config.printers)}개)")

    client = WebClient(token=config.slack.bot_token, timeout=config.slack.timeout)

    # 봇 사용자 ID 초기화 (자기 리액션 구분에 필요)
    # App 생성 시에도 토큰 검증을 위해 auth.test를 호출한다
    try:
        app = App(client=client, logger=logging.getLogger("printbot.slack"))
        auth_result = app.client.auth_test()
        config.slack.bot_user_id = auth_result["user_id"]
        logger.info(f"BOT_USER_ID: {config.slack.bot_user_id}")
    except Exception as e:
        logger.error(f"슬랙 인증 실패: {e}")
        sys.exit(1)

    register_all_handlers(app, build_dependencies(config, app.client))

    handler = SocketModeHandler(app, config.slack.app_token)

    def _signal_handler(signum, frame):
        sig_name = signal.Signals(signum).name
        logger.info(f"시그널 수신: {sig_name}")
        handler.close()
        sys.exit(0)

    signal.signal(signal.SIGINT, _signal_handler)
    if hasattr(signal, "SIGTERM"):
        signal.signal(signal.SIGTERM, _signal_handler)

    handler.start()


if __name__ == "__main__":
    main()
