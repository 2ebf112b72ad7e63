"""Device records and helpers for parsing device signalling data."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from gbvms.m import DEVICE_STATUS_OFF, DEVICE_STATUS_ON, SysInfo

_DEVICE_STATUS = {
    "ON": DEVICE_STATUS_ON,
    "OK": DEVICE_STATUS_ON,
    "ONLINE": DEVICE_STATUS_ON,
    "OFFILE": DEVICE_STATUS_OFF,
    "OFF": DEVICE_STATUS_OFF,
}

_INT_RE = re.compile(r"[+-]?[0-9]+")


@dataclass
class DeviceInfo:
    """A registered NVR/IPC as seen by the signalling server."""

    name: str = ""
    device_id: str = ""
    region: str = ""
    host: str = ""
    port: str = ""
    transport: str = ""
    proto: str = ""
    rport: str = ""
    raddr: str = ""
    manufacturer: str = ""
    device_type: str = ""
    firmware: str = ""
    model: str = ""
    uri: str = ""
    active_at: int = 0
    regist: bool = False
    pwd: str = ""
    source: str = ""
    sys: SysInfo = field(default_factory=SysInfo)
    expire: str = ""

    def to_dict(self) -> dict[str, Any]:
        """JSON form; the expiry is not exported."""
        return {
            "name": self.name,
            "deviceid": self.device_id,
            "region": self.region,
            "host": self.host,
            "port": self.port,
            "transport": self.transport,
            "proto": self.proto,
            "report": self.rport,
            "raddr": self.raddr,
            "manufacturer": self.manufacturer,
            "devicetype": self.device_type,
            "firmware": self.firmware,
            "model": self.model,
            "uri": self.uri,
            "active": self.active_at,
            "regist": self.regist,
            "pwd": self.pwd,
            "source": self.source,
            "sysinfo": self.sys.to_dict(),
        }


def trans_device_status(status: str) -> str:
    """Map a device-reported status to ON/OFF, passing unknown values through."""
    return _DEVICE_STATUS.get(status, status)


def channel_uri(channel_id: str, domain: str) -> str:
    """SIP URI addressing a channel within a device's domain."""
    return f"sip:{channel_id}@{domain}"


def parse_expires(header: str) -> str | None:
    """Value of a rendered ``Expires: N`` header, or None if it is not in that form."""
    parts = header.split(":")
    if len(parts) != 2:
        return None
    return parts[1][1:]


def ssrc_to_stream(ssrc: str) -> str:
    """Convert a decimal SSRC to the hexadecimal stream id used by the media server."""
    if ssrc.startswith("0"):
        ssrc = ssrc[1:]
    num = int(ssrc) if _INT_RE.fullmatch(ssrc) else 0
    return f"{num:08X}"