import os
import re

import pytest

from gbvms.web import (
    KV,
    CoverStore,
    MediaPorts,
    PlayOutput,
    build_play_output,
    build_push_address,
    snapshot_link,
    split_host,
    top_counters,
    version_info,
)

PORTS = MediaPorts(http=8080, https=8443, rtmp=1935, rtmps=19350, rtsp=554, rtsps=322)


def test_version_info():
    assert version_info() == {"version": "0.0.10", "remark": "add stream proxy"}


def test_snapshot_link():
    assert snapshot_link("ch1") == "/api/channels/ch1/snapshot"


@pytest.mark.parametrize(
    "host,expected",
    [
        ("example.com:8080", "example.com"),
        ("example.com", "example.com"),
        ("[::1]:80", "[::1]:80"),
    ],
)
def test_split_host(host, expected):
    assert split_host(host) == expected


def test_play_output_default_line():
    out = build_play_output("rtp", "cam", "10.1.2.3", PORTS, "session=abc")
    assert out.app == "rtp"
    assert out.stream == "cam"
    assert len(out.items) == 2
    item = out.items[0]
    assert item.label == "默认线路"
    assert item.rtmp == "rtmp://10.1.2.3:1935/rtp/cam?session=abc"
    assert item.ws_flv.startswith("ws://10.1.2.3:8080/rtp/cam.live.flv?")
    assert item.http_flv.endswith("?session=abc")
    assert item.rtsp.startswith("rtsp://10.1.2.3:554/")
    assert "/index/api/webrtc?app=rtp&stream=rtp/cam&type=play&session=abc" in item.webrtc
    assert item.hls.startswith("http://10.1.2.3:8080/rtp/cam/hls.fmp4.m3u8?")


def test_play_output_ssl_line_uses_secure_ports():
    out = build_play_output("live", "s", "h", PORTS, "session=x")
    ssl = out.items[1]
    assert ssl.label == "SSL 线路"
    assert ssl.rtmp.startswith("rtmps://h:19350/")
    assert ssl.rtsp.startswith("rtsps://h:322/")
    assert ssl.hls.startswith("https://h:8443/")
    assert ssl.webrtc.startswith("webrtc://h:8443/")
    assert ssl.http_flv.endswith(".live.flvsession=x")


def test_play_output_to_dict():
    out = build_play_output("rtp", "cam", "h", PORTS)
    data = out.to_dict()
    assert data["app"] == "rtp"
    assert data["stream"] == "cam"
    assert set(data["items"][0]) == {"label", "ws_flv", "http_flv", "rtmp", "rtsp", "webrtc", "hls"}
    assert data["items"][0]["rtmp"] == out.items[0].rtmp
    assert PlayOutput().to_dict() == {"app": "", "stream": "", "items": []}


def test_push_address_without_auth():
    assert build_push_address("10.1.2.3", 1935, "live", "cam", "secret", True) == "rtmp://10.1.2.3:1935/live/cam"


def test_push_address_signed():
    addr = build_push_address("h", 1935, "live", "cam", "secret", False)
    base, _, sign = addr.partition("?sign=")
    assert base == "rtmp://h:1935/live/cam"
    assert re.fullmatch(r"[0-9a-f]{32}", sign)
    assert addr == build_push_address("h", 1935, "live", "cam", "secret", False)
    assert addr != build_push_address("h", 1935, "live", "cam", "token", False)


def test_top_counters_orders_and_limits():
    result = top_counters({"a": 3, "b": 10, "c": 1}, 2)
    assert result == [KV("b", 10), KV("a", 3)]


def test_top_counters_fewer_than_top():
    result = top_counters({"x": 1, "y": 5}, 10)
    assert [kv.key for kv in result] == ["y", "x"]
    assert top_counters({}, 10) == []


def test_kv_to_dict():
    assert KV("/health", 4).to_dict() == {"Key": "/health", "Value": 4}


def test_cover_round_trip(tmp_path):
    store = CoverStore(tmp_path)
    written = store.write("ch1", b"\xff\xd8jpeg")
    assert written == store.path("ch1")
    assert store.path("ch1").name == "ch1.jpg"
    assert store.path("ch1").parent == tmp_path / "data" / "cover"
    assert store.read("ch1") == b"\xff\xd8jpeg"
    store.write("ch1", b"new")
    assert store.read("ch1") == b"new"


def test_cover_missing(tmp_path):
    store = CoverStore(tmp_path)
    with pytest.raises(FileNotFoundError):
        store.read("none")
    assert store.is_fresh("none", 100, now=0) is False


def test_cover_freshness(tmp_path):
    store = CoverStore(tmp_path)
    path = store.write("ch2", b"img")
    os.utime(path, (1000, 1000))
    assert store.is_fresh("ch2", 10, now=1005) is True
    assert store.is_fresh("ch2", 5, now=1005) is False
    assert store.is_fresh("ch2", 1, now=1005) is False