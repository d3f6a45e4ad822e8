"""로깅 설정 모듈

로깅 레벨 가이드라인
==================

logger.exception()
    - 예외 처리 블록에서 스택 트레이스가 필요한 경우
    - 예: 핸들러 안의 예상치 못한 오류

logger.error()
    - 외부 서비스(Slack, CUPS) 호출 실패처럼 예상된 오류
    - 예: "파일 다운로드 실패", "리액션 추가 실패"

logger.warning()
    - 기능에 영향은 적지만 주의가 필요한 상황
    - 예: 잘못된 형식의 이벤트, 알 수 없는 리액션

logger.info()
    - 인쇄 요청 대기/교체, 프린터 선택, 인쇄 작업 전송

logger.debug()
    - 무시된 이벤트, HTTP 응답 크기 등
"""

import logging
from datetime import datetime
from pathlib import Path

from printbot.config import Config


def setup_logging(config: Config) -> logging.Logger:
    """로깅 설정 및 로거 반환"""
    log_dir = Path(Config.get_log_path())
    log_dir.mkdir(parents=True, exist_ok=True)

    log_file = log_dir / f"printbot_{datetime.now().strftime('%Y%m%d')}.log"

    logging.basicConfig(
        level=logging.DEBUG if config.debug else logging.INFO,
        format="%(asctime)s [%(name)s] %(levelname)s %(message)s",
        handlers=[
            logging.FileHandler(log_file, encoding="utf-8"),
            logging.StreamHandler()
        ]
    )

    # HTTP 요청 로그는 디버그 모드에서만
    if not config.debug:
        logging.getLogger("urllib3").setLevel(logging.WARNING)
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("httpcore").setLevel(logging.WARNING)

    return logging.getLogger("printbot")
