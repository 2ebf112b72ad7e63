from http import HTTPStatus

from gbvms.m import (
    DEFAULT_LIMIT,
    DEFAULT_RECORD_EXPIRE,
    DEFAULT_RECORD_MAX,
    DEFAULT_SORT,
    STATUS_DB_ERR,
    STATUS_SUCC,
    STATUS_SYS_ERR,
    Config,
    Response,
    SysInfo,
    get_limit,
    get_skip,
    get_sort,
    json_response,
    status_http_code,
)


def test_config_from_dict_normalises():
    cfg = Config.from_dict(
        {
            "mod": "release",
            "logger": "debug",
            "udp": "0.0.0.0:5060",
            "media": {"http": "http://example.com:8080", "rtp": "udp://example.com:10000"},
            "stream": {"hls": True},
            "notify": {"devices_active": "http://example.com/hook", "records_stop": ""},
            "gb28181": {"lid": "server-1", "did": "dev-prefix", "MediaServer": True},
        }
    )
    assert cfg.mod == "RELEASE"
    assert cfg.log_level == "debug"
    assert cfg.media.http == "http://example.com:8080"
    assert cfg.stream.hls is True and cfg.stream.rtmp is False
    assert cfg.notify_map == {"devices.active": "http://example.com/hook"}
    assert cfg.record.expire == DEFAULT_RECORD_EXPIRE
    assert cfg.record.recordmax == DEFAULT_RECORD_MAX
    assert cfg.gb28181 == SysInfo(lid="server-1", did="dev-prefix", media_server=True)


def test_config_keeps_positive_record_values():
    cfg = Config.from_dict({"record": {"expire": 3, "recordmax": 30, "filepath": "/rec"}})
    assert (cfg.record.expire, cfg.record.recordmax, cfg.record.filepath) == (3, 30, "/rec")
    assert cfg.gb28181 is None


def test_sysinfo_to_dict_round_trip():
    info = SysInfo(cid="c", cnum=2, did="d", dnum=5, lid="l", media_server=True)
    assert SysInfo.from_dict(info.to_dict()) == info


def test_status_http_code():
    assert status_http_code(STATUS_SUCC) == HTTPStatus.OK
    assert status_http_code(STATUS_DB_ERR) == HTTPStatus.SERVICE_UNAVAILABLE
    assert status_http_code("9999") == 0


def test_json_response_converts_exception():
    status, resp = json_response(STATUS_SYS_ERR, ValueError("boom"), "m1")
    assert status == HTTPStatus.INTERNAL_SERVER_ERROR
    assert resp == Response(data="boom", msg_id="m1", code=STATUS_SYS_ERR)
    assert resp.to_dict() == {"data": "boom", "msgid": "m1", "code": STATUS_SYS_ERR}


def test_json_response_keeps_data():
    status, resp = json_response(STATUS_SUCC, {"a": 1})
    assert status == HTTPStatus.OK
    assert resp.data == {"a": 1}


def test_get_limit():
    assert get_limit({}) == DEFAULT_LIMIT
    assert get_limit({"limit": ""}) == DEFAULT_LIMIT
    assert get_limit({"limit": "abc"}) == DEFAULT_LIMIT
    assert get_limit({"limit": " 5"}) == DEFAULT_LIMIT
    assert get_limit({"limit": "35"}) == 35
    assert get_limit({"limit": ["40", "50"]}) == 40


def test_get_sort():
    assert get_sort({}) == DEFAULT_SORT
    assert get_sort({"sort": "name"}) == "name"


def test_get_skip():
    assert get_skip({}) == 0
    assert get_skip({"skip": "x1"}) == 0
    assert get_skip({"skip": "12"}) == 12
    assert get_skip({"skip": "-3"}) == -3