# gbvms

Helpers for a GB/T 28181 video management platform, in pure Python with no
runtime dependencies.

## Modules

- `gbvms.m`: platform configuration and API response helpers.
  - `Config.from_dict(data)` builds a `Config` (with `MediaServerConfig`,
    `StreamConfig`, `RecordConfig` and an optional `SysInfo`) from decoded
    JSON/YAML. It upper-cases `mod`, defaults `record.expire` to 7 and
    `record.recordmax` to 600 when they are not positive, and derives
    `notify_map` from `notify` by replacing `_` with `.` in keys and
    dropping empty values.
  - `status_http_code(code)` maps the status codes `STATUS_SUCC`,
    `STATUS_AUTH_ERR`, `STATUS_DB_ERR`, `STATUS_PARAMS_ERR` and
    `STATUS_SYS_ERR` to HTTP statuses (0 for an unknown code).
  - `json_response(code, data, msg_id)` returns the HTTP status and a
    `Response` envelope; an exception given as `data` becomes its message.
  - `get_limit(query)`, `get_sort(query)` and `get_skip(query)` read paging
    parameters from a query mapping, falling back to 20, `-addtime` and 0.
- `gbvms.devices`: device details and signalling helpers.
  - `DeviceInfo` with `to_dict()`.
  - `trans_device_status(status)` normalises `ON`/`OK`/`ONLINE` to `ON` and
    `OFF`/`OFFILE` to `OFF`, passing anything else through.
  - `channel_uri(channel_id, domain)`, `parse_expires(header)` and
    `ssrc_to_stream(ssrc)` (decimal SSRC to 8-digit upper-case hex stream id).
- `gbvms.webhook`: media-server webhook payloads and replies.
  - Inputs with `from_dict`: `OnStreamChangedInput` (with `OriginSock` and
    `Track`), `OnServerKeepaliveInput` (with `ServerKeepaliveData`),
    `OnPublishInput`, `OnStreamNoneReaderInput`, `OnRTPServerTimeoutInput`.
    Keys are matched exactly, then case-insensitively; a value of the wrong
    type raises `ValueError`.
  - Replies with `to_dict`: `DefaultOutput`, `OnPublishOutput` (options left
    as `None` are omitted), `OnStreamNoneReaderOutput`.
  - `default_output_ok()`, `parse_publish_params(params)` (URL query to lists
    of values; raises `ValueError` on `;` or a bad `%` escape) and
    `stream_none_reader_reply(event)` (always asks to close the stream).
- `gbvms.web`: helpers behind the HTTP API.
  - `build_play_output(app, app_stream, host, ports, session)` returns a
    `PlayOutput` with a default and an SSL `StreamAddrItem` (WS-FLV,
    HTTP-FLV, RTMP, RTSP, WebRTC, HLS) for the ports in `MediaPorts`.
  - `split_host(host)` strips the port from `host:port`.
  - `build_push_address(host, rtmp_port, app, stream, secret, auth_disabled)`
    returns an RTMP push address, signed with the MD5 of `secret` unless
    authentication is disabled.
  - `top_counters(counters, top)` returns the largest counters as `KV`.
  - `CoverStore` keeps channel cover JPEGs under `<base>/data/cover` with
    `path`, `write`, `read` and `is_fresh`.
  - `snapshot_link(channel_id)` and `version_info()`.

## Install

```
pip install .
```

With the test tools:

```
pip install ".[test]"
pytest
```

## Examples

Load a configuration:

```python
from gbvms.m import Config

cfg = Config.from_dict({"mod": "debug", "notify": {"devices_active": "http://localhost/hook"}})
print(cfg.mod, cfg.notify_map, cfg.record.recordmax)
```

Answer a publish request:

```python
from gbvms.webhook import OnPublishInput, default_output_ok, parse_publish_params

event = OnPublishInput.from_dict({"app": "live", "stream": "cam", "schema": "rtmp", "params": "sign=abc"})
params = parse_publish_params(event.params)
reply = default_output_ok().to_dict()
```

Playback and push addresses:

```python
from gbvms.web import MediaPorts, build_play_output, build_push_address

out = build_play_output("rtp", "ch1", "192.168.1.10", MediaPorts(http=80, rtmp=1935, rtsp=554))
print(out.to_dict())

secret = "secret"
print(build_push_address("192.168.1.10", 1935, "live", "cam", secret, False))
```

## What it does not do

The package contains no SIP server or transport, no device registration,
keepalive or catalog handling over the network, no MANSCDP XML message
bodies, no record-list queries, no outgoing notifications, no HTTP server or
routes, and no database storage. It provides the data models and pure helper
functions listed above for an application that supplies those parts.