"""슬랙 이벤트 모델

slack_bolt가 넘겨주는 raw dict를 처리 가능한 이벤트 종류로 변환합니다.
- MessageEvent: 일반 메시지 / 파일 공유 메시지
- ReactionEvent: 메시지에 달린 리액션
- OtherEvent: 처리 대상이 아닌 이벤트 (봇 메시지, 수정/삭제 subtype 등)

형태가 맞지 않는 페이로드는 MalformedEventError를 발생시킵니다.
"""

from dataclasses import dataclass, field
from typing import Union

from printbot.errors import MalformedEventError

# 처리하는 message subtype (None = 일반 메시지)
_HANDLED_SUBTYPES = {None, "", "file_share"}


@dataclass(frozen=True)
class MessageEvent:
    """파일을 첨부했을 수 있는 사용자 메시지"""
    channel: str
    user: str
    ts: str
    file_refs: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ReactionEvent:
    """메시지에 추가된 리액션"""
    channel: str
    message_ts: str
    reaction: str
    user: str


@dataclass(frozen=True)
class OtherEvent:
    """무시할 이벤트"""
    reason: str


Event = Union[MessageEvent, ReactionEvent, OtherEvent]


def _require_str(payload: dict, key: str, kind: str) -> str:
    value = payload.get(key)
    if not isinstance(value, str) or not value:
        raise MalformedEventError(f"{kind} 이벤트에 '{key}' 필드가 없습니다")
    return value


def _file_ref(file_info) -> str:
    if not isinstance(file_info, dict):
        raise MalformedEventError("files 항목이 객체가 아닙니다")
    ref = file_info.get("url_private_download") or file_info.get("url_private")
    if not ref:
        raise MalformedEventError(
            f"파일에 다운로드 URL이 없습니다: {file_info.get('id', 'unknown')}"
        )
    return ref


def parse_message_event(payload: dict) -> Event:
    """message 이벤트 변환"""
    if not isinstance(payload, dict):
        raise MalformedEventError("message 이벤트가 객체가 아닙니다")

    if payload.get("bot_id"):
        return OtherEvent(reason="bot_message")

    subtype = payload.get("subtype")
    if subtype not in _HANDLED_SUBTYPES:
        return OtherEvent(reason=f"subtype:{subtype}")

    channel = _require_str(payload, "channel", "message")
    user = _require_str(payload, "user", "message")
    ts = payload.get("ts", "")

    files = payload.get("files") or []
    if not isinstance(files, list):
        raise MalformedEventError("message 이벤트의 files가 목록이 아닙니다")

    return MessageEvent(
        channel=channel,
        user=user,
        ts=ts,
        file_refs=tuple(_file_ref(f) for f in files),
    )


def parse_reaction_event(payload: dict) -> Event:
    """reaction_added 이벤트 변환"""
    if not isinstance(payload, dict):
        raise MalformedEventError("reaction 이벤트가 객체가 아닙니다")

    item = payload.get("item")
    if not isinstance(item, dict):
        raise MalformedEventError("reaction 이벤트에 item이 없습니다")

    # 파일/파일 코멘트에 달린 리액션은 대상이 아님
    if item.get("type") != "message":
        return OtherEvent(reason=f"item_type:{item.get('type')}")

    return ReactionEvent(
        channel=_require_str(item, "channel", "reaction item"),
        message_ts=_require_str(item, "ts", "reaction item"),
        reaction=_require_str(payload, "reaction", "reaction"),
        user=_require_str(payload, "user", "reaction"),
    )


def parse_event(payload: dict) -> Event:
    """이벤트 type 필드로 분기하여 변환"""
    if not isinstance(payload, dict):
        raise MalformedEventError("이벤트가 객체가 아닙니다")

    event_type = payload.get("type")
    if event_type == "message":
        return parse_message_event(payload)
    if event_type == "reaction_added":
        return parse_reaction_event(payload)
    return OtherEvent(reason=f"type:{event_type}")
