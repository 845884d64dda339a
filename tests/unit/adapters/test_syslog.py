"""
Syslog 어댑터 단위 테스트

이 모듈은 RFC3164 디코딩과 데이터그램 수신 어댑터를 테스트합니다.
"""

import asyncio
import socket

import pytest

from nginx_request_exporter.adapters.syslog.listener import SyslogIngestor
from nginx_request_exporter.adapters.syslog.rfc3164 import decode_datagram, parse_rfc3164


NGINX_LINE = "<190>Oct 18 12:00:00 web-1 nginx: time:0.123 status=200 hostname=srv1"


class TestRFC3164:
    """RFC3164 파싱 테스트"""

    def test_nginx_line(self):
        msg = parse_rfc3164(NGINX_LINE)

        assert msg.tag == "nginx"
        assert msg.hostname == "web-1"
        assert msg.content == "time:0.123 status=200 hostname=srv1"
        assert msg.priority == 190
        assert msg.timestamp == "Oct 18 12:00:00"

    def test_tag_with_pid(self):
        msg = parse_rfc3164("<13>Jan  5 01:02:03 host nginx[4242]: t:1 hostname=h")

        assert msg.tag == "nginx"
        assert msg.timestamp == "Jan  5 01:02:03"
        assert msg.content == "t:1 hostname=h"

    def test_content_keeps_colons(self):
        msg = parse_rfc3164("<13>Jan 15 01:02:03 host nginx: a:1 b:2")

        assert msg.content == "a:1 b:2"

    def test_empty_content(self):
        msg = parse_rfc3164("<13>Jan 15 01:02:03 host nginx:")

        assert msg.tag == "nginx"
        assert msg.content == ""

    @pytest.mark.parametrize("line", [
        "time:0.1 hostname=h",
        "<13>not a timestamp host nginx: x",
        "",
    ])
    def test_non_rfc3164_line_has_no_tag(self, line):
        msg = parse_rfc3164(line)

        assert msg.tag == ""
        assert msg.hostname == ""
        assert msg.content == line

    def test_decode_datagram_strips_trailer(self):
        assert decode_datagram(b"abc\n\x00") == "abc"
        assert decode_datagram(b"caf\xc3\xa9") == "café"
        assert decode_datagram(b"bad\xff") == "bad�"


async def _next_message(ingest: SyslogIngestor):
    return await asyncio.wait_for(ingest.recv().__anext__(), timeout=2.0)


class TestSyslogIngestor:
    """데이터그램 수신 어댑터 테스트"""

    @pytest.mark.asyncio
    async def test_udp_datagram_is_received(self):
        ingest = SyslogIngestor("127.0.0.1:0")
        await ingest.listen()
        try:
            host, port = ingest.bound_address[:2]
            with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
                sock.sendto(NGINX_LINE.encode(), (host, port))

            msg = await _next_message(ingest)
        finally:
            await ingest.stop()

        assert msg.tag == "nginx"
        assert msg.hostname == "web-1"
        assert msg.content.startswith("time:0.123")

    @pytest.mark.asyncio
    @pytest.mark.skipif(not hasattr(socket, "AF_UNIX"), reason="unix sockets unavailable")
    async def test_unix_datagram_is_received(self, tmp_path):
        path = str(tmp_path / "nginx.sock")
        ingest = SyslogIngestor(f"unix:{path}")
        await ingest.listen()
        try:
            with socket.socket(socket.AF_UNIX, socket.SOCK_DGRAM) as sock:
                sock.sendto(NGINX_LINE.encode(), path)

            msg = await _next_message(ingest)
        finally:
            await ingest.stop()

        assert msg.tag == "nginx"
        assert not (tmp_path / "nginx.sock").exists()

    @pytest.mark.asyncio
    @pytest.mark.skipif(not hasattr(socket, "AF_UNIX"), reason="unix sockets unavailable")
    async def test_stale_unix_socket_is_replaced(self, tmp_path):
        path = str(tmp_path / "stale.sock")
        stale = socket.socket(socket.AF_UNIX, socket.SOCK_DGRAM)
        stale.bind(path)
        stale.close()

        ingest = SyslogIngestor(f"unix:{path}")
        await ingest.listen()
        await ingest.stop()

    @pytest.mark.asyncio
    async def test_bind_failure_raises(self):
        first = SyslogIngestor("127.0.0.1:0")
        await first.listen()
        try:
            port = first.bound_address[1]
            second = SyslogIngestor(f"127.0.0.1:{port}")
            with pytest.raises(OSError):
                await second.listen()
        finally:
            await first.stop()

    def test_invalid_address(self):
        with pytest.raises(ValueError):
            SyslogIngestor("no-port")

    @pytest.mark.asyncio
    async def test_stop_ends_recv(self):
        ingest = SyslogIngestor("127.0.0.1:0")
        await ingest.listen()
        await ingest.stop()

        received = [msg async for msg in ingest.recv()]

        assert received == []

    @pytest.mark.asyncio
    async def test_full_queue_drops_message(self):
        ingest = SyslogIngestor("127.0.0.1:0", queue_maxsize=1)
        await ingest.listen()
        try:
            ingest._on_datagram(NGINX_LINE.encode())
            ingest._on_datagram(b"<13>Jan 15 01:02:03 host nginx: second")

            assert ingest.q.qsize() == 1
            msg = await _next_message(ingest)
            assert msg.content.startswith("time:")
        finally:
            await ingest.stop()
