"""슬랙 파일 다운로드

공유된 파일을 Bot Token으로 인증하여 메모리로 내려받습니다.
인쇄할 문서는 디스크에 저장하지 않습니다.
"""

import logging

import httpx

from printbot.errors import DownloadError

logger = logging.getLogger(__name__)


def download_file(url: str, bot_token: str, timeout: float = 60.0) -> bytes:
    """슬랙 파일 다운로드

    Args:
        url: 파일의 url_private_download
        bot_token: 슬랙 Bot Token (files:read 권한 필요)
        timeout: 요청 타임아웃(초)

    Returns:
        파일 내용

    Raises:
        DownloadError: HTTP 오류, 타임아웃, 또는 로그인 페이지가 돌아온 경우
    """
    if not url:
        raise DownloadError("파일 URL이 비어 있습니다")

    headers = {"Authorization": f"Bearer {bot_token}"}
    try:
        with httpx.Client(timeout=timeout, follow_redirects=True) as client:
            response = client.get(url, headers=headers)
            response.raise_for_status()
    except httpx.HTTPError as e:
        raise DownloadError(f"파일 다운로드 HTTP 오류: {e}") from e
    except httpx.InvalidURL as e:
        raise DownloadError(f"파일 URL이 올바르지 않습니다: {e}") from e

    # 토큰 권한이 부족하면 슬랙은 200과 함께 로그인 HTML을 돌려준다
    content_type = response.headers.get("content-type", "")
    if content_type.startswith("text/html"):
        raise DownloadError(f"파일 대신 HTML 응답을 받았습니다: {url}")

    logger.debug(f"파일 다운로드 완료: {url} ({len(response.content):,} bytes)")
    return response.content
