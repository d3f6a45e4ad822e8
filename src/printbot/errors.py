"""printbot 런타임 예외

설정 오류(ConfigurationError)는 printbot.config에 있습니다.
"""


class PrintBotError(Exception):
    """printbot 예외 기본 클래스"""


class TransportError(PrintBotError):
    """Slack API 호출 실패"""


class DownloadError(PrintBotError):
    """슬랙 파일 다운로드 실패"""


class PrintServiceError(PrintBotError):
    """CUPS/IPP 인쇄 요청 실패"""


class MalformedEventError(PrintBotError):
    """예상한 형태가 아닌 이벤트 페이로드"""
