"""Helpers behind the HTTP API: playback addresses, push addresses, covers and counters."""

from __future__ import annotations

import hashlib
import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

DB_VERSION = "0.0.10"
DB_REMARK = "add stream proxy"

DATA_DIR = "data"
COVER_DIR = "cover"

LABEL_DEFAULT = "默认线路"
LABEL_SSL = "SSL 线路"


@dataclass
class MediaPorts:
    """Ports a media server listens on."""

    http: int = 0
    https: int = 0
    rtmp: int = 0
    rtmps: int = 0
    rtsp: int = 0
    rtsps: int = 0


@dataclass
class StreamAddrItem:
    """Playback addresses of one stream over one line."""

    label: str = ""
    ws_flv: str = ""
    http_flv: str = ""
    rtmp: str = ""
    rtsp: str = ""
    webrtc: str = ""
    hls: str = ""

    def to_dict(self) -> dict[str, str]:
        return {
            "label": self.label,
            "ws_flv": self.ws_flv,
            "http_flv": self.http_flv,
            "rtmp": self.rtmp,
            "rtsp": self.rtsp,
            "webrtc": self.webrtc,
            "hls": self.hls,
        }


@dataclass
class PlayOutput:
    """Reply to a play request: the stream and its addresses."""

    app: str = ""
    stream: str = ""
    items: list[StreamAddrItem] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "app": self.app,
            "stream": self.stream,
            "items": [item.to_dict() for item in self.items],
        }


@dataclass
class KV:
    """A named counter."""

    key: str
    value: int

    def to_dict(self) -> dict[str, Any]:
        return {"Key": self.key, "Value": self.value}


def split_host(host: str) -> str:
    """Host part of a ``host:port`` value; anything else is returned unchanged."""
    parts = host.split(":")
    return parts[0] if len(parts) == 2 else host


def build_play_output(
    app: str, app_stream: str, host: str, ports: MediaPorts, session: str = ""
) -> PlayOutput:
    """Playback addresses of ``app/app_stream``; ``session`` is a query fragment such as ``session=x``."""
    stream = f"{app}/{app_stream}"
    webrtc_query = f"app={app}&stream={stream}&type=play&{session}"
    default = StreamAddrItem(
        label=LABEL_DEFAULT,
        ws_flv=f"ws://{host}:{ports.http}/{stream}.live.flv?{session}",
        http_flv=f"http://{host}:{ports.http}/{stream}.live.flv?{session}",
        rtmp=f"rtmp://{host}:{ports.rtmp}/{stream}?{session}",
        rtsp=f"rtsp://{host}:{ports.rtsp}/{stream}?{session}",
        webrtc=f"webrtc://{host}:{ports.http}/index/api/webrtc?{webrtc_query}",
        hls=f"http://{host}:{ports.http}/{stream}/hls.fmp4.m3u8?{session}",
    )
    ssl = StreamAddrItem(
        label=LABEL_SSL,
        ws_flv=f"wss://{host}:{ports.http}/{stream}.live.flv{session}",
        http_flv=f"https://{host}:{ports.http}/{stream}.live.flv{session}",
        rtmp=f"rtmps://{host}:{ports.rtmps}/{stream}{session}",
        rtsp=f"rtsps://{host}:{ports.rtsps}/{stream}{session}",
        webrtc=f"webrtc://{host}:{ports.https}/index/api/webrtc?{webrtc_query}",
        hls=f"https://{host}:{ports.https}/{stream}/hls.fmp4.m3u8?{session}",
    )
    return PlayOutput(app=app, stream=app_stream, items=[default, ssl])


def build_push_address(
    host: str, rtmp_port: int, app: str, stream: str, secret: str, auth_disabled: bool
) -> str:
    """RTMP push address, signed with the MD5 of ``secret`` unless auth is disabled."""
    addr = f"rtmp://{host}:{rtmp_port}/{app}/{stream}"
    if not auth_disabled:
        addr += "?sign=" + hashlib.md5(secret.encode("utf-8")).hexdigest()
    return addr


def top_counters(counters: Mapping[str, int], top: int) -> list[KV]:
    """The ``top`` largest counters, largest first."""
    ordered = sorted(
        (KV(key=key, value=int(value)) for key, value in counters.items()),
        key=lambda kv: kv.value,
        reverse=True,
    )
    return ordered[: max(top, 0)]


class CoverStore:
    """Channel cover snapshots kept as JPEG files under ``<base>/data/cover``."""

    def __init__(self, base_dir: str | Path | None = None) -> None:
        base = Path.cwd() if base_dir is None else Path(base_dir)
        self.root = base / DATA_DIR / COVER_DIR

    def path(self, channel_id: str) -> Path:
        return self.root / f"{channel_id}.jpg"

    def write(self, channel_id: str, body: bytes) -> Path:
        """Store (or overwrite) the cover of a channel."""
        self.root.mkdir(parents=True, exist_ok=True)
        target = self.path(channel_id)
        target.write_bytes(body)
        return target

    def read(self, channel_id: str) -> bytes:
        """The cover of a channel; raises FileNotFoundError when there is none."""
        return self.path(channel_id).read_bytes()

    def is_fresh(self, channel_id: str, within_seconds: int, now: float | None = None) -> bool:
        """Whether the cover exists and was written within the last ``within_seconds``."""
        try:
            mtime = int(self.path(channel_id).stat().st_mtime)
        except OSError:
            return False
        current = int(time.time() if now is None else now)
        return mtime > current - within_seconds


def snapshot_link(channel_id: str) -> str:
    """API path serving a channel's cover."""
    return f"/api/channels/{channel_id}/snapshot"


def version_info() -> dict[str, str]:
    """Database schema version and its remark."""
    return {"version": DB_VERSION, "remark": DB_REMARK}