"""Slack 이벤트 핸들러 패키지"""

from printbot.handlers.router import handle_event, register_event_handlers


def register_all_handlers(app, dependencies: dict):
    """모든 핸들러를 앱에 등록

    Args:
        app: Slack Bolt App 인스턴스
        dependencies: 핸들러에 필요한 의존성
            - config: Config
            - chat: SlackChat
            - registry: PendingPrintRegistry
            - prompter: PrinterPrompter
            - correlator: ReactionCorrelator
            - dispatcher: PrintDispatcher
    """
    register_event_handlers(app, dependencies)


__all__ = [
    "handle_event",
    "register_all_handlers",
    "register_event_handlers",
]
