"""대기 중인 인쇄 요청 레지스트리 (in-memory)

채널 ID → PendingPrint를 채널당 하나씩만 보관합니다.
여러 Slack 핸들러 스레드가 동시에 접근하므로 모든 접근은 단일 락으로 보호합니다.
프로세스가 재시작되면 내용은 사라집니다.
"""

import threading
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class PendingPrint:
    """프린터 선택을 기다리는 인쇄 요청"""
    channel_id: str
    file_ref: str  # 슬랙 파일 다운로드 URL
    prompt_ts: str  # 프린터 선택 메시지 ts (상관 키)


class PendingPrintRegistry:
    """채널별 대기 인쇄 요청 저장소"""

    def __init__(self):
        self._pending: dict[str, PendingPrint] = {}
        self._lock = threading.Lock()

    def put(self, channel_id: str, pending: PendingPrint) -> Optional[PendingPrint]:
        """대기 요청 저장. 기존 요청이 있으면 덮어쓰고 이전 값을 반환"""
        with self._lock:
            previous = self._pending.get(channel_id)
            self._pending[channel_id] = pending
            return previous

    def get(self, channel_id: str) -> Optional[PendingPrint]:
        with self._lock:
            return self._pending.get(channel_id)

    def remove(self, channel_id: str) -> Optional[PendingPrint]:
        with self._lock:
            return self._pending.pop(channel_id, None)

    def take(self, channel_id: str, prompt_ts: str) -> Optional[PendingPrint]:
        """prompt_ts가 일치할 때만 대기 요청을 꺼내고 제거

        비교와 제거가 같은 락 안에서 일어나므로, 같은 프롬프트에 대한
        리액션이 동시에 들어와도 하나만 요청을 가져갑니다.
        """
        with self._lock:
            pending = self._pending.get(channel_id)
            if pending is None or pending.prompt_ts != prompt_ts:
                return None
            del self._pending[channel_id]
            return pending

    def __len__(self) -> int:
        with self._lock:
            return len(self._pending)
