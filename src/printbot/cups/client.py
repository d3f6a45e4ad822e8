"""CUPS 인쇄 클라이언트

IPP over HTTP(S)로 CUPS 서버의 프린터 큐에 Print-Job을 보냅니다.
"""

import itertools
import logging
import threading
from urllib.parse import quote

import httpx

from printbot.config import CupsConfig
from printbot.cups.ipp import TAG_JOB, TAG_OPERATION, IppDecodeError, decode_response, encode_print_job
from printbot.errors import PrintServiceError

logger = logging.getLogger(__name__)

IPP_CONTENT_TYPE = "application/ipp"


class CupsClient:
    """CUPS Print-Job 클라이언트"""

    def __init__(self, config: CupsConfig, transport: httpx.BaseTransport | None = None):
        self.config = config
        self._transport = transport
        self._request_ids = itertools.count(1)
        self._id_lock = threading.Lock()

    def _next_request_id(self) -> int:
        with self._id_lock:
            return next(self._request_ids)

    def printer_url(self, queue: str) -> str:
        """HTTP 요청을 보낼 URL"""
        scheme = "https" if self.config.tls else "http"
        return f"{scheme}://{self.config.host}:{self.config.port}/printers/{quote(queue)}"

    def printer_uri(self, queue: str) -> str:
        """IPP printer-uri 속성 값"""
        scheme = "ipps" if self.config.tls else "ipp"
        return f"{scheme}://{self.config.host}:{self.config.port}/printers/{quote(queue)}"

    def print_job(
        self,
        document: bytes,
        queue: str,
        name: str,
        mime_type: str,
        options: dict | None = None,
    ) -> int:
        """인쇄 작업 전송

        Returns:
            CUPS job-id

        Raises:
            PrintServiceError: 연결 실패, HTTP 오류, IPP 오류 상태
        """
        body = encode_print_job(
            request_id=self._next_request_id(),
            printer_uri=self.printer_uri(queue),
            user=self.config.username or "printbot",
            job_name=name,
            mime_type=mime_type,
            document=document,
            options=options,
        )

        auth = None
        if self.config.username:
            auth = httpx.BasicAuth(self.config.username, self.config.password)

        try:
            with httpx.Client(
                timeout=self.config.timeout,
                auth=auth,
                transport=self._transport,
            ) as client:
                response = client.post(
                    self.printer_url(queue),
                    content=body,
                    headers={"Content-Type": IPP_CONTENT_TYPE},
                )
                response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise PrintServiceError(f"CUPS 요청 실패 ({queue}): {e}") from e

        try:
            result = decode_response(response.content)
        except IppDecodeError as e:
            raise PrintServiceError(f"CUPS 응답을 해석할 수 없습니다 ({queue}): {e}") from e

        if not result.ok:
            message = result.find(TAG_OPERATION, "status-message") or ""
            raise PrintServiceError(
                f"CUPS 오류 상태 0x{result.status_code:04x} ({queue}) {message}".rstrip()
            )

        job_id = result.find(TAG_JOB, "job-id")
        if not isinstance(job_id, int):
            raise PrintServiceError(f"CUPS 응답에 job-id가 없습니다 ({queue})")

        logger.debug(f"CUPS 인쇄 작업 생성: queue={queue}, job={job_id}")
        return job_id
