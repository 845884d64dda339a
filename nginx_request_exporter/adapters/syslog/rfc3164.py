"""Decodes RFC 3164 syslog datagrams into SyslogMessage models."""

import re

from nginx_request_exporter.core.models import SyslogMessage

_RFC3164_RE = re.compile(
    r'^<(?P<priority>\d{1,3})>'
    r'(?P<timestamp>[A-Z][a-z]{2}\s+\d{1,2}\s+\d{2}:\d{2}:\d{2})\s+'
    r'(?P<hostname>\S+)\s+'
    r'(?P<tag>[^\s:\[]+)'
    r'(?:\[(?P<pid>\d+)\])?:\s?'
    r'(?P<content>.*)'
    r'$',
    re.DOTALL,
)


def decode_datagram(data: bytes) -> str:
    return data.decode("utf-8", errors="replace").rstrip("\r\n\x00")


def parse_rfc3164(line: str) -> SyslogMessage:
    """
    RFC3164 한 줄을 파싱합니다.

    형식이 맞지 않으면 tag/hostname이 빈 메시지를 반환하여
    파이프라인에서 수신 및 실패로 집계되도록 합니다.
    """
    m = _RFC3164_RE.match(line)
    if not m:
        return SyslogMessage(content=line)

    return SyslogMessage(
        tag=m.group("tag"),
        hostname=m.group("hostname"),
        content=m.group("content"),
        priority=int(m.group("priority")),
        timestamp=m.group("timestamp"),
    )
