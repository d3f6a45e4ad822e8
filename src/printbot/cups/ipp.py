"""IPP/1.1 메시지 인코딩/디코딩 (RFC 8010)

Print-Job 요청을 만들고 응답에서 상태 코드와 속성을 읽는 데 필요한 만큼만 구현합니다.
"""

import struct
from dataclasses import dataclass, field

IPP_VERSION = (1, 1)

# 연산 ID
OP_PRINT_JOB = 0x0002

# 구분 태그
TAG_OPERATION = 0x01
TAG_JOB = 0x02
TAG_END = 0x03
TAG_PRINTER = 0x04
TAG_UNSUPPORTED = 0x05

# 값 태그
TAG_INTEGER = 0x21
TAG_BOOLEAN = 0x22
TAG_ENUM = 0x23
TAG_TEXT = 0x41
TAG_NAME = 0x42
TAG_KEYWORD = 0x44
TAG_URI = 0x45
TAG_CHARSET = 0x47
TAG_LANGUAGE = 0x48
TAG_MIME_TYPE = 0x49

_INTEGER_TAGS = {TAG_INTEGER, TAG_ENUM}

# 0x0000 ~ 0x00FF: successful-ok 계열
STATUS_OK_MAX = 0x00FF


class IppDecodeError(ValueError):
    """IPP 응답 파싱 실패"""


@dataclass
class IppAttribute:
    tag: int
    name: str
    values: list = field(default_factory=list)


@dataclass
class IppResponse:
    status_code: int
    request_id: int
    groups: list[tuple[int, dict[str, IppAttribute]]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status_code <= STATUS_OK_MAX

    def find(self, group_tag: int, name: str):
        """그룹에서 속성의 첫 번째 값 조회"""
        for tag, attrs in self.groups:
            if tag == group_tag and name in attrs:
                values = attrs[name].values
                return values[0] if values else None
        return None


def _encode_value(tag: int, value) -> bytes:
    if tag in _INTEGER_TAGS:
        return struct.pack(">i", int(value))
    if tag == TAG_BOOLEAN:
        return b"\x01" if value else b"\x00"
    return str(value).encode("utf-8")


def encode_attribute(tag: int, name: str, value) -> bytes:
    """속성 하나 인코딩. value가 list면 추가 값(name-length 0)으로 이어 붙임"""
    values = value if isinstance(value, (list, tuple)) else [value]
    out = bytearray()
    for i, v in enumerate(values):
        name_bytes = name.encode("utf-8") if i == 0 else b""
        data = _encode_value(tag, v)
        out += struct.pack(">BH", tag, len(name_bytes)) + name_bytes
        out += struct.pack(">H", len(data)) + data
    return bytes(out)


def _option_tag(value) -> int:
    # bool은 int의 하위 타입이므로 먼저 검사
    if isinstance(value, bool):
        return TAG_BOOLEAN
    if isinstance(value, int):
        return TAG_INTEGER
    if isinstance(value, (list, tuple)) and value:
        return _option_tag(value[0])
    return TAG_KEYWORD


def encode_print_job(
    request_id: int,
    printer_uri: str,
    user: str,
    job_name: str,
    mime_type: str,
    document: bytes,
    options: dict | None = None,
) -> bytes:
    """Print-Job 요청 본문 생성"""
    out = bytearray(struct.pack(">BBHI", *IPP_VERSION, OP_PRINT_JOB, request_id))

    out.append(TAG_OPERATION)
    # charset, natural-language, printer-uri 순서는 RFC 8011에서 고정
    out += encode_attribute(TAG_CHARSET, "attributes-charset", "utf-8")
    out += encode_attribute(TAG_LANGUAGE, "attributes-natural-language", "en")
    out += encode_attribute(TAG_URI, "printer-uri", printer_uri)
    out += encode_attribute(TAG_NAME, "requesting-user-name", user)
    out += encode_attribute(TAG_NAME, "job-name", job_name)
    out += encode_attribute(TAG_MIME_TYPE, "document-format", mime_type)

    if options:
        out.append(TAG_JOB)
        for name, value in options.items():
            out += encode_attribute(_option_tag(value), name, value)

    out.append(TAG_END)
    out += document
    return bytes(out)


def _decode_value(tag: int, data: bytes):
    if tag in _INTEGER_TAGS and len(data) == 4:
        return struct.unpack(">i", data)[0]
    if tag == TAG_BOOLEAN and len(data) == 1:
        return data != b"\x00"
    if 0x40 <= tag <= 0x4F:
        return data.decode("utf-8", errors="replace")
    return data


def decode_response(payload: bytes) -> IppResponse:
    """IPP 응답 파싱

    Raises:
        IppDecodeError: 길이가 맞지 않거나 end-of-attributes 태그가 없을 때
    """
    if len(payload) < 8:
        raise IppDecodeError(f"IPP 응답이 너무 짧습니다: {len(payload)} bytes")

    _major, _minor, status_code, request_id = struct.unpack(">BBHI", payload[:8])
    response = IppResponse(status_code=status_code, request_id=request_id)

    pos = 8
    current: dict[str, IppAttribute] | None = None
    last: IppAttribute | None = None
    try:
        while True:
            tag = payload[pos]
            pos += 1
            if tag == TAG_END:
                break
            if tag < 0x10:
                current = {}
                response.groups.append((tag, current))
                last = None
                continue
            if current is None:
                raise IppDecodeError("속성 그룹 태그 없이 속성이 시작되었습니다")

            (name_len,) = struct.unpack(">H", payload[pos:pos + 2])
            pos += 2
            name = payload[pos:pos + name_len].decode("utf-8", errors="replace")
            pos += name_len
            (value_len,) = struct.unpack(">H", payload[pos:pos + 2])
            pos += 2
            data = payload[pos:pos + value_len]
            if len(data) != value_len:
                raise IppDecodeError("속성 값이 잘렸습니다")
            pos += value_len

            value = _decode_value(tag, data)
            if name_len == 0:
                if last is None:
                    raise IppDecodeError("이름 없는 첫 번째 속성")
                last.values.append(value)
            else:
                last = IppAttribute(tag=tag, name=name, values=[value])
                current[name] = last
    except (IndexError, struct.error) as e:
        raise IppDecodeError(f"IPP 응답이 잘렸습니다: {e}") from e

    return response
