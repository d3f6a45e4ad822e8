"""인쇄 실행

선택된 프린터로 파일을 내려받아 인쇄 작업을 보내고 결과를 채널에 알립니다.
대기 요청은 이미 레지스트리에서 제거된 상태이므로, 실패해도 재시도하지 않습니다.
"""

import enum
import logging

from printbot.config import MessagesConfig, PrinterOption
from printbot.errors import DownloadError, PrintServiceError, TransportError
from printbot.registry import PendingPrint

logger = logging.getLogger(__name__)

DOCUMENT_NAME = "printbot.pdf"
DOCUMENT_MIME_TYPE = "application/pdf"


class DispatchResult(enum.Enum):
    PRINTED = "printed"
    DOWNLOAD_FAILED = "download_failed"
    PRINT_FAILED = "print_failed"


class PrintDispatcher:
    """다운로드 → 인쇄 → 결과 안내"""

    def __init__(self, chat, printer_client, messages: MessagesConfig):
        self.chat = chat
        self.printer_client = printer_client
        self.messages = messages

    def dispatch(self, pending: PendingPrint, printer: PrinterOption, user: str) -> DispatchResult:
        channel = pending.channel_id

        # 선택이 끝난 프롬프트는 지운다 (실패해도 인쇄는 계속)
        try:
            self.chat.delete_message(channel, pending.prompt_ts)
        except TransportError as e:
            logger.error(f"프린터 선택 메시지 삭제 실패: {e}")

        try:
            document = self.chat.download_file(pending.file_ref)
        except DownloadError as e:
            logger.error(f"파일 다운로드 실패: file={pending.file_ref}, {e}")
            self.chat.send_notice(channel, self.messages.failure)
            return DispatchResult.DOWNLOAD_FAILED

        try:
            job_id = self.printer_client.print_job(
                document,
                queue=printer.queue,
                name=DOCUMENT_NAME,
                mime_type=DOCUMENT_MIME_TYPE,
                options={},
            )
        except PrintServiceError as e:
            logger.error(f"인쇄 작업 전송 실패: printer={printer.queue}, {e}")
            self.chat.send_notice(channel, self.messages.failure)
            return DispatchResult.PRINT_FAILED

        logger.info(
            f"인쇄 작업 전송: user={user}, file={pending.file_ref}, "
            f"printer={printer.queue}, job={job_id}",
            extra={
                "user": user,
                "file": pending.file_ref,
                "printer": printer.queue,
                "job": job_id,
            },
        )
        self.chat.send_notice(channel, self.messages.printed)
        return DispatchResult.PRINTED
