"""Configuration models and JSON response helpers."""

from __future__ import annotations

import ipaddress
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any

STATUS_SUCC = "0"
STATUS_AUTH_ERR = "1000"
STATUS_DB_ERR = "1001"
STATUS_PARAMS_ERR = "1002"
STATUS_SYS_ERR = "1003"

STREAM_TYPE_PULL = "pull"
STREAM_TYPE_PUSH = "push"

DEVICE_STATUS_ON = "ON"
DEVICE_STATUS_OFF = "OFF"

DEFAULT_LIMIT = 20
DEFAULT_SORT = "-addtime"

DEFAULT_RECORD_EXPIRE = 7
DEFAULT_RECORD_MAX = 600

_STATUS_HTTP = {
    STATUS_SUCC: HTTPStatus.OK,
    STATUS_DB_ERR: HTTPStatus.SERVICE_UNAVAILABLE,
    STATUS_PARAMS_ERR: HTTPStatus.BAD_REQUEST,
    STATUS_AUTH_ERR: HTTPStatus.UNAUTHORIZED,
    STATUS_SYS_ERR: HTTPStatus.INTERNAL_SERVER_ERROR,
}

_INT_RE = re.compile(r"[+-]?[0-9]+")


def _parse_int(value: Any) -> int | None:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str) and _INT_RE.fullmatch(value):
        return int(value)
    return None


@dataclass
class RecordConfig:
    """Recording storage settings."""

    filepath: str = ""
    expire: int = 0
    recordmax: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RecordConfig:
        return cls(
            filepath=str(data.get("filepath", "")),
            expire=int(data.get("expire", 0)),
            recordmax=int(data.get("recordmax", 0)),
        )


@dataclass
class StreamConfig:
    """Which output protocols are enabled."""

    hls: bool = False
    rtmp: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> StreamConfig:
        return cls(hls=bool(data.get("hls", False)), rtmp=bool(data.get("rtmp", False)))


@dataclass
class MediaServerConfig:
    """Addresses of the media server."""

    restful: str = ""
    http: str = ""
    ws: str = ""
    rtmp: str = ""
    rtsp: str = ""
    rtp: str = ""
    secret: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> MediaServerConfig:
        return cls(
            **{name: str(data.get(name, "")) for name in
               ("restful", "http", "ws", "rtmp", "rtsp", "rtp", "secret")}
        )


@dataclass
class SysInfo:
    """Identity and counters of the signalling server."""

    cid: str = ""
    cnum: int = 0
    did: str = ""
    dnum: int = 0
    lid: str = ""
    media_server: bool = False
    media_server_rtp_ip: ipaddress.IPv4Address | ipaddress.IPv6Address | None = None
    media_server_rtp_port: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SysInfo:
        return cls(
            cid=str(data.get("cid", "")),
            cnum=int(data.get("cnum", data.get("unum", 0))),
            did=str(data.get("did", "")),
            dnum=int(data.get("dnum", 0)),
            lid=str(data.get("lid", "")),
            media_server=bool(data.get("MediaServer", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        """JSON form; the RTP address and port are not exported."""
        return {
            "cid": self.cid,
            "cnum": self.cnum,
            "did": self.did,
            "dnum": self.dnum,
            "lid": self.lid,
            "MediaServer": self.media_server,
        }


@dataclass
class Config:
    """Top level service configuration."""

    mod: str = ""
    log_level: str = ""
    udp: str = ""
    api: str = ""
    secret: str = ""
    media: MediaServerConfig = field(default_factory=MediaServerConfig)
    stream: StreamConfig = field(default_factory=StreamConfig)
    record: RecordConfig = field(default_factory=RecordConfig)
    gb28181: SysInfo | None = None
    notify: dict[str, str] = field(default_factory=dict)
    notify_map: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Config:
        """Build a configuration from decoded JSON/YAML and normalise it."""
        notify = {str(k): str(v) for k, v in (data.get("notify") or {}).items()}
        record = RecordConfig.from_dict(data.get("record") or {})
        if record.expire <= 0:
            record.expire = DEFAULT_RECORD_EXPIRE
        if record.recordmax <= 0:
            record.recordmax = DEFAULT_RECORD_MAX
        gb = data.get("gb28181")
        return cls(
            mod=str(data.get("mod", "")).upper(),
            log_level=str(data.get("logger", "")),
            udp=str(data.get("udp", "")),
            api=str(data.get("api", "")),
            secret=str(data.get("secret", "")),
            media=MediaServerConfig.from_dict(data.get("media") or {}),
            stream=StreamConfig.from_dict(data.get("stream") or {}),
            record=record,
            gb28181=SysInfo.from_dict(gb) if gb is not None else None,
            notify=notify,
            notify_map={k.replace("_", "."): v for k, v in notify.items() if v},
        )


@dataclass
class Response:
    """Envelope of a JSON API reply."""

    data: Any = None
    msg_id: str = ""
    code: str = STATUS_SUCC

    def to_dict(self) -> dict[str, Any]:
        return {"data": self.data, "msgid": self.msg_id, "code": self.code}


def status_http_code(code: str) -> int:
    """HTTP status for an application status code, 0 when the code is unknown."""
    status = _STATUS_HTTP.get(code)
    return int(status) if status is not None else 0


def json_response(code: str, data: Any, msg_id: str = "") -> tuple[int, Response]:
    """Return the HTTP status and the reply envelope for ``code``."""
    if isinstance(data, BaseException):
        data = str(data)
    return status_http_code(code), Response(data=data, msg_id=msg_id, code=code)


def _query_value(query: Mapping[str, Any], key: str) -> str:
    value = query.get(key, "")
    if isinstance(value, (list, tuple)):
        value = value[0] if value else ""
    return value if isinstance(value, str) else str(value)


def get_limit(query: Mapping[str, Any]) -> int:
    """Page size from the ``limit`` query parameter."""
    parsed = _parse_int(_query_value(query, "limit"))
    return DEFAULT_LIMIT if parsed is None else parsed


def get_sort(query: Mapping[str, Any]) -> str:
    """Sort order from the ``sort`` query parameter."""
    return _query_value(query, "sort") or DEFAULT_SORT


def get_skip(query: Mapping[str, Any]) -> int:
    """Offset from the ``skip`` query parameter."""
    parsed = _parse_int(_query_value(query, "skip"))
    return 0 if parsed is None else parsed