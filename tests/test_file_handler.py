"""슬랙 파일 다운로드 테스트"""

import httpx
import pytest

from printbot.errors import DownloadError
from printbot.slack import file_handler

URL = "https://files.slack.com/files-pri/T1-F1/download/doc.pdf"


@pytest.fixture
def mock_http(monkeypatch):
    """file_handler가 만드는 httpx.Client에 MockTransport 주입"""
    real_client = httpx.Client
    state = {"handler": None, "requests": []}

    def factory(**kwargs):
        def handler(request):
            state["requests"].append(request)
            return state["handler"](request)
        return real_client(transport=httpx.MockTransport(handler), **kwargs)

    monkeypatch.setattr(file_handler.httpx, "Client", factory)
    return state


class TestDownloadFile:
    def test_returns_content_with_bearer_token(self, mock_http):
        mock_http["handler"] = lambda r: httpx.Response(
            200, content=b"%PDF-1.4", headers={"content-type": "application/pdf"}
        )

        data = file_handler.download_file(URL, "xoxb-token")

        assert data == b"%PDF-1.4"
        assert mock_http["requests"][0].headers["authorization"] == "Bearer xoxb-token"

    def test_http_error(self, mock_http):
        mock_http["handler"] = lambda r: httpx.Response(404)

        with pytest.raises(DownloadError):
            file_handler.download_file(URL, "xoxb-token")

    def test_html_login_page(self, mock_http):
        """권한이 없으면 슬랙은 200 + HTML을 돌려줌"""
        mock_http["handler"] = lambda r: httpx.Response(
            200, content=b"<html>login</html>", headers={"content-type": "text/html; charset=utf-8"}
        )

        with pytest.raises(DownloadError):
            file_handler.download_file(URL, "xoxb-token")

    def test_timeout(self, mock_http):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        mock_http["handler"] = handler

        with pytest.raises(DownloadError):
            file_handler.download_file(URL, "xoxb-token", timeout=0.1)

    def test_invalid_url(self, mock_http):
        """URL에 제어 문자가 있으면 요청 전에 실패"""
        mock_http["handler"] = lambda r: httpx.Response(200, content=b"%PDF")

        with pytest.raises(DownloadError):
            file_handler.download_file("https://files.slack.com/a\x7f.pdf", "xoxb-token")
        assert mock_http["requests"] == []

    def test_empty_url(self):
        with pytest.raises(DownloadError):
            file_handler.download_file("", "xoxb-token")
