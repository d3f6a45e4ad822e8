"""설정 관리

프린터 목록과 연결 정보는 JSON 설정 파일(PRINTBOT_CONFIG_FILE)에서 읽고,
토큰/접속 정보는 환경변수로 덮어쓸 수 있습니다.
- 경로 설정: get_*() 메서드 (cwd 기준 계산 필요)
- 그 외 설정: @dataclass 하위 그룹
"""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "config.json"


class ConfigurationError(Exception):
    """설정 오류 예외

    필수 설정 누락, 설정 파일 파싱 실패 등 시작 시점의 오류에 사용합니다.
    """

    def __init__(self, missing_vars: List[str], message: str | None = None):
        self.missing_vars = missing_vars
        if message is None:
            message = f"필수 설정이 누락되었습니다: {', '.join(missing_vars)}"
        super().__init__(message)


def _get_path(env_var: str, default_subdir: str) -> str:
    """환경변수가 없으면 현재 경로 하위 폴더 반환"""
    env_value = os.getenv(env_var)
    if env_value:
        return env_value
    return str(Path.cwd() / default_subdir)


def _parse_bool(value, default: bool = False) -> bool:
    """문자열(또는 JSON bool)을 bool로 변환"""
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).lower() == "true"


def _section(data: dict, key: str, path: Path) -> dict:
    """설정 파일의 하위 섹션 조회 (없으면 빈 dict)"""
    section = data.get(key) or {}
    if not isinstance(section, dict):
        raise ConfigurationError([key], f"설정 파일의 {key} 항목이 객체가 아닙니다: {path}")
    return section


def _parse_number(env_var: str, raw, default, cast=float):
    """환경변수 또는 설정 파일 값을 숫자로 변환"""
    value = os.getenv(env_var) or (default if raw is None else raw)
    try:
        number = cast(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError([env_var], f"{env_var} 값이 올바르지 않습니다: {value!r}") from e
    if number <= 0:
        raise ConfigurationError([env_var], f"{env_var} 값은 0보다 커야 합니다: {value!r}")
    return number


def _strip_colons(name: str) -> str:
    """슬랙 이모지 이름에서 앞뒤 콜론 제거 (":printer:" -> "printer")"""
    return name.strip().strip(":")


@dataclass(frozen=True)
class PrinterOption:
    """선택 가능한 프린터 (CUPS 큐)"""

    queue: str
    display_name: str
    note: str
    reaction: str  # 콜론 없는 이모지 이름


@dataclass
class SlackConfig:
    """Slack 연결 설정"""

    bot_token: str | None = None
    app_token: str | None = None
    bot_user_id: str | None = None  # 런타임에 auth.test()로 설정
    timeout: float = 30.0
    download_timeout: float = 60.0


@dataclass
class CupsConfig:
    """CUPS(IPP) 연결 설정"""

    host: str | None = None
    port: int = 631
    username: str = ""
    password: str = ""
    tls: bool = False
    timeout: float = 60.0


@dataclass
class MessagesConfig:
    """사용자에게 보여줄 안내 문구"""

    prompt: str = "어느 프린터로 인쇄할까요?"
    send_one_file: str = "인쇄할 PDF 파일을 하나만 보내주세요."
    failure: str = "인쇄 중에 문제가 생겼어요. :("
    printed: str = "파일을 인쇄 대기열로 보냈습니다."


@dataclass
class Config:
    """애플리케이션 설정

    load_config()로 생성하며, 프로세스 수명 동안 변경하지 않습니다.
    """

    printers: list[PrinterOption] = field(default_factory=list)
    slack: SlackConfig = field(default_factory=SlackConfig)
    cups: CupsConfig = field(default_factory=CupsConfig)
    messages: MessagesConfig = field(default_factory=MessagesConfig)
    debug: bool = False

    @staticmethod
    def get_log_path() -> str:
        """로그 경로"""
        return _get_path("LOG_PATH", "logs")

    def find_printer(self, reaction: str) -> PrinterOption | None:
        """리액션 이름으로 프린터 조회"""
        for printer in self.printers:
            if printer.reaction == reaction:
                return printer
        return None

    def validate(self) -> None:
        """필수 설정 검증"""
        missing = []
        if not self.slack.bot_token:
            missing.append("SLACK_BOT_TOKEN")
        if not self.slack.app_token:
            missing.append("SLACK_APP_TOKEN")
        if not self.cups.host:
            missing.append("CUPS_HOST")
        if not self.printers:
            missing.append("printers")
        if missing:
            raise ConfigurationError(missing)

        seen: set[str] = set()
        for printer in self.printers:
            if printer.reaction in seen:
                raise ConfigurationError(
                    [],
                    f"프린터 리액션이 중복되었습니다: {printer.reaction}",
                )
            seen.add(printer.reaction)


def _parse_printers(raw: list) -> list[PrinterOption]:
    printers = []
    for i, item in enumerate(raw):
        try:
            printers.append(PrinterOption(
                queue=item["queue"],
                display_name=item.get("display_name") or item["queue"],
                note=item.get("note", ""),
                reaction=_strip_colons(item["reaction"]),
            ))
        except (KeyError, TypeError, AttributeError) as e:
            raise ConfigurationError(
                [], f"printers[{i}] 항목이 올바르지 않습니다: {e}"
            ) from e
    return printers


def load_config(path: str | Path | None = None) -> Config:
    """설정 파일과 환경변수로부터 Config 생성

    Args:
        path: 설정 파일 경로. 생략 시 PRINTBOT_CONFIG_FILE, 그마저 없으면 config.json

    Raises:
        ConfigurationError: 파일을 읽거나 파싱할 수 없을 때
    """
    if path is None:
        path = os.getenv("PRINTBOT_CONFIG_FILE") or DEFAULT_CONFIG_FILE
    path = Path(path)

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigurationError([], f"설정 파일을 열 수 없습니다: {path} ({e})") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError([], f"설정 파일을 읽을 수 없습니다: {path} ({e})") from e

    if not isinstance(data, dict):
        raise ConfigurationError([], f"설정 파일 형식이 올바르지 않습니다: {path}")

    slack_raw = _section(data, "slack", path)
    cups_raw = _section(data, "cups", path)
    messages_raw = _section(data, "messages", path)

    slack = SlackConfig(
        bot_token=os.getenv("SLACK_BOT_TOKEN") or slack_raw.get("bot_token"),
        app_token=os.getenv("SLACK_APP_TOKEN") or slack_raw.get("app_token"),
        timeout=_parse_number("SLACK_TIMEOUT", slack_raw.get("timeout"), 30.0),
        download_timeout=_parse_number(
            "SLACK_DOWNLOAD_TIMEOUT", slack_raw.get("download_timeout"), 60.0
        ),
    )

    port = _parse_number("CUPS_PORT", cups_raw.get("port"), 631, cast=int)

    cups = CupsConfig(
        host=os.getenv("CUPS_HOST") or cups_raw.get("host"),
        port=port,
        username=os.getenv("CUPS_USERNAME") or cups_raw.get("username", ""),
        password=os.getenv("CUPS_PASSWORD") or cups_raw.get("password", ""),
        tls=_parse_bool(os.getenv("CUPS_TLS"), _parse_bool(cups_raw.get("tls"), False)),
        timeout=_parse_number("CUPS_TIMEOUT", cups_raw.get("timeout"), 60.0),
    )

    defaults = MessagesConfig()
    messages = MessagesConfig(
        prompt=messages_raw.get("prompt", defaults.prompt),
        send_one_file=messages_raw.get("send_one_file", defaults.send_one_file),
        failure=messages_raw.get("failure", defaults.failure),
        printed=messages_raw.get("printed", defaults.printed),
    )

    config = Config(
        printers=_parse_printers(data.get("printers") or []),
        slack=slack,
        cups=cups,
        messages=messages,
        debug=_parse_bool(os.getenv("DEBUG"), False),
    )
    logger.debug(f"설정 로드 완료: {path} (프린터 {len(config.printers)}개)")
    return config
