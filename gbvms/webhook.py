"""Event payloads and replies of the media server's web hooks."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

MAX_UINT32 = 0xFFFFFFFF

_HEX = "0123456789abcdefABCDEF"


def _lookup(data: Mapping[str, Any], key: str) -> Any:
    """Value for ``key``, matching the key exactly first and then ignoring case."""
    if key in data:
        return data[key]
    folded = key.casefold()
    for name, value in data.items():
        if isinstance(name, str) and name.casefold() == folded:
            return value
    return None


def _int(data: Mapping[str, Any], key: str, low: int | None = None, high: int | None = None) -> int:
    value = _lookup(data, key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"field {key!r}: expected an integer, got {value!r}")
    if (low is not None and value < low) or (high is not None and value > high):
        raise ValueError(f"field {key!r}: {value} out of range")
    return value


def _float(data: Mapping[str, Any], key: str) -> float:
    value = _lookup(data, key)
    if value is None:
        return 0.0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"field {key!r}: expected a number, got {value!r}")
    return float(value)


def _str(data: Mapping[str, Any], key: str) -> str:
    value = _lookup(data, key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"field {key!r}: expected a string, got {value!r}")
    return value


def _bool(data: Mapping[str, Any], key: str) -> bool:
    value = _lookup(data, key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ValueError(f"field {key!r}: expected a boolean, got {value!r}")
    return value


def _mapping(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = _lookup(data, key)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ValueError(f"field {key!r}: expected an object, got {value!r}")
    return value


@dataclass
class OriginSock:
    """Socket the stream originated from."""

    identifier: str = ""
    local_ip: str = ""
    local_port: int = 0
    peer_ip: str = ""
    peer_port: int = 0

    @classmethod
    def _from_dict(cls, data: Mapping[str, Any]) -> OriginSock:
        return cls(
            identifier=_str(data, "identifier"),
            local_ip=_str(data, "local_ip"),
            local_port=_int(data, "local_port"),
            peer_ip=_str(data, "peer_ip"),
            peer_port=_int(data, "peer_port"),
        )


@dataclass
class Track:
    """One audio or video track of a stream."""

    channels: int = 0
    codec_id: int = 0
    codec_id_name: str = ""
    codec_type: int = 0
    ready: bool = False
    sample_bit: int = 0
    sample_rate: int = 0
    fps: float = 0.0
    height: int = 0
    width: int = 0

    @classmethod
    def _from_dict(cls, data: Mapping[str, Any]) -> Track:
        return cls(
            channels=_int(data, "channels"),
            codec_id=_int(data, "codec_id"),
            codec_id_name=_str(data, "codec_id_name"),
            codec_type=_int(data, "codec_type"),
            ready=_bool(data, "ready"),
            sample_bit=_int(data, "sample_bit"),
            sample_rate=_int(data, "sample_rate"),
            fps=_float(data, "fps"),
            height=_int(data, "height"),
            width=_int(data, "width"),
        )


@dataclass
class OnStreamChangedInput:
    """A stream was registered or unregistered."""

    regist: bool = False
    alive_second: int = 0
    app: str = ""
    bytes_speed: int = 0
    create_stamp: int = 0
    media_server_id: str = ""
    origin_sock: OriginSock = field(default_factory=OriginSock)
    origin_type: int = 0
    origin_type_str: str = ""
    origin_url: str = ""
    reader_count: int = 0
    schema: str = ""
    stream: str = ""
    total_reader_count: int = 0
    tracks: list[Track] = field(default_factory=list)
    vhost: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> OnStreamChangedInput:
        tracks = _lookup(data, "tracks")
        if tracks is None:
            tracks = []
        if not isinstance(tracks, list):
            raise ValueError(f"field 'tracks': expected a list, got {tracks!r}")
        for track in tracks:
            if not isinstance(track, Mapping):
                raise ValueError(f"field 'tracks': expected objects, got {track!r}")
        return cls(
            regist=_bool(data, "regist"),
            alive_second=_int(data, "aliveSecond"),
            app=_str(data, "app"),
            bytes_speed=_int(data, "bytesSpeed"),
            create_stamp=_int(data, "createStamp"),
            media_server_id=_str(data, "mediaServerId"),
            origin_sock=OriginSock._from_dict(_mapping(data, "originSock")),
            origin_type=_int(data, "originType"),
            origin_type_str=_str(data, "originTypeStr"),
            origin_url=_str(data, "originUrl"),
            reader_count=_int(data, "readerCount"),
            schema=_str(data, "schema"),
            stream=_str(data, "stream"),
            total_reader_count=_int(data, "totalReaderCount"),
            tracks=[Track._from_dict(track) for track in tracks],
            vhost=_str(data, "vhost"),
        )


_KEEPALIVE_COUNTERS = {
    "buffer": "Buffer",
    "buffer_like_string": "BufferLikeString",
    "buffer_list": "BufferList",
    "buffer_raw": "BufferRaw",
    "frame": "Frame",
    "frame_imp": "FrameImp",
    "media_source": "MediaSource",
    "multi_media_source_muxer": "MultiMediaSourceMuxer",
    "rtmp_packet": "RtmpPacket",
    "rtp_packet": "RtpPacket",
    "socket": "Socket",
    "tcp_client": "TcpClient",
    "tcp_server": "TcpServer",
    "tcp_session": "TcpSession",
    "udp_server": "UdpServer",
    "udp_session": "UdpSession",
}


@dataclass
class ServerKeepaliveData:
    """Object counters reported with a server keepalive."""

    buffer: int = 0
    buffer_like_string: int = 0
    buffer_list: int = 0
    buffer_raw: int = 0
    frame: int = 0
    frame_imp: int = 0
    media_source: int = 0
    multi_media_source_muxer: int = 0
    rtmp_packet: int = 0
    rtp_packet: int = 0
    socket: int = 0
    tcp_client: int = 0
    tcp_server: int = 0
    tcp_session: int = 0
    udp_server: int = 0
    udp_session: int = 0

    @classmethod
    def _from_dict(cls, data: Mapping[str, Any]) -> ServerKeepaliveData:
        return cls(**{attr: _int(data, key) for attr, key in _KEEPALIVE_COUNTERS.items()})


@dataclass
class OnServerKeepaliveInput:
    """Periodic liveness report of a media server."""

    data: ServerKeepaliveData = field(default_factory=ServerKeepaliveData)
    hook_index: int = 0
    media_server_id: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> OnServerKeepaliveInput:
        return cls(
            data=ServerKeepaliveData._from_dict(_mapping(data, "data")),
            hook_index=_int(data, "hook_index"),
            media_server_id=_str(data, "mediaServerId"),
        )


@dataclass
class OnPublishInput:
    """Publish (and play) authentication request."""

    media_server_id: str = ""
    app: str = ""
    id: str = ""
    ip: str = ""
    params: str = ""
    port: int = 0
    schema: str = ""
    stream: str = ""
    vhost: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> OnPublishInput:
        return cls(
            media_server_id=_str(data, "mediaServerId"),
            app=_str(data, "app"),
            id=_str(data, "id"),
            ip=_str(data, "ip"),
            params=_str(data, "params"),
            port=_int(data, "port"),
            schema=_str(data, "schema"),
            stream=_str(data, "stream"),
            vhost=_str(data, "vhost"),
        )


@dataclass
class DefaultOutput:
    """Generic hook reply; code 0 allows the operation."""

    code: int = 0
    msg: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "msg": self.msg}


_PUBLISH_OPTIONS = (
    "add_mute_audio",
    "continue_push_ms",
    "enable_audio",
    "enable_fmp4",
    "enable_hls",
    "enable_hls_fmp4",
    "enable_mp4",
    "enable_rtmp",
    "enable_rtsp",
    "enable_ts",
    "hls_save_path",
    "modify_stamp",
    "mp4_as_player",
    "mp4_max_second",
    "mp4_save_path",
    "auto_close",
    "stream_replace",
)


@dataclass
class OnPublishOutput(DefaultOutput):
    """Publish reply; options left as None are not sent."""

    add_mute_audio: bool | None = None
    continue_push_ms: int | None = None
    enable_audio: bool | None = None
    enable_fmp4: bool | None = None
    enable_hls: bool | None = None
    enable_hls_fmp4: bool | None = None
    enable_mp4: bool | None = None
    enable_rtmp: bool | None = None
    enable_rtsp: bool | None = None
    enable_ts: bool | None = None
    hls_save_path: str | None = None
    modify_stamp: bool | None = None
    mp4_as_player: bool | None = None
    mp4_max_second: int | None = None
    mp4_save_path: str | None = None
    auto_close: bool | None = None
    stream_replace: str | None = None

    def to_dict(self) -> dict[str, Any]:
        out = super().to_dict()
        for name in _PUBLISH_OPTIONS:
            value = getattr(self, name)
            if value is not None:
                out[name] = value
        return out


@dataclass
class OnStreamNoneReaderInput:
    """A stream has no viewers."""

    app: str = ""
    schema: str = ""
    stream: str = ""
    vhost: str = ""
    media_server_id: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> OnStreamNoneReaderInput:
        return cls(
            app=_str(data, "app"),
            schema=_str(data, "schema"),
            stream=_str(data, "stream"),
            vhost=_str(data, "vhost"),
            media_server_id=_str(data, "mediaServerId"),
        )


@dataclass
class OnStreamNoneReaderOutput:
    """Reply telling the media server whether to close an unwatched stream."""

    code: int = 0
    close: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "close": self.close}


@dataclass
class OnRTPServerTimeoutInput:
    """An RTP server opened for a device received no data in time."""

    local_port: int = 0
    re_use_port: bool = False
    ssrc: int = 0
    stream_id: str = ""
    tcp_mode: int = 0
    media_server_id: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> OnRTPServerTimeoutInput:
        return cls(
            local_port=_int(data, "local_port"),
            re_use_port=_bool(data, "re_use_port"),
            ssrc=_int(data, "ssrc", 0, MAX_UINT32),
            stream_id=_str(data, "stream_id"),
            tcp_mode=_int(data, "tcp_mode"),
            media_server_id=_str(data, "mediaServerId"),
        )


def default_output_ok() -> DefaultOutput:
    """The reply that allows an operation."""
    return DefaultOutput(code=0, msg="success")


def _unescape(text: str) -> str:
    raw = bytearray()
    i = 0
    encoded = text.encode("utf-8")
    while i < len(encoded):
        ch = encoded[i]
        if ch == ord("%"):
            pair = encoded[i + 1:i + 3].decode("ascii", errors="replace")
            if len(pair) != 2 or any(c not in _HEX for c in pair):
                raise ValueError(f"invalid URL escape {encoded[i:i + 3].decode('utf-8', 'replace')!r}")
            raw.append(int(pair, 16))
            i += 3
            continue
        raw.append(ord(" ") if ch == ord("+") else ch)
        i += 1
    return raw.decode("utf-8", errors="replace")


def parse_publish_params(params: str) -> dict[str, list[str]]:
    """Decode the URL query of a publish request into lists of values per key.

    Raises ValueError on a semicolon separator or an invalid percent escape.
    """
    values: dict[str, list[str]] = {}
    for part in params.split("&"):
        if part == "":
            continue
        if ";" in part:
            raise ValueError("invalid semicolon separator in query")
        key, _, value = part.partition("=")
        values.setdefault(_unescape(key), []).append(_unescape(value))
    return values


def stream_none_reader_reply(event: OnStreamNoneReaderInput) -> OnStreamNoneReaderOutput:
    """Unwatched streams are always closed."""
    return OnStreamNoneReaderOutput(code=0, close=True)