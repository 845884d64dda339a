import asyncio
import os
import socket
import stat
from typing import AsyncIterator, Optional

from nginx_request_exporter.core.models import SyslogMessage
from nginx_request_exporter.observability.logging_setup import get_logger
from nginx_request_exporter.utils.address import parse_listen_address
from .rfc3164 import decode_datagram, parse_rfc3164

log = get_logger("nre.syslog")

DEFAULT_QUEUE_MAXSIZE = 20000

# recv() 종료 신호
_STOP = object()

class _SyslogDatagramProtocol(asyncio.DatagramProtocol):
    def __init__(self, ingestor: "SyslogIngestor"):
        self.ingestor = ingestor

    def datagram_received(self, data: bytes, addr) -> None:
        self.ingestor._on_datagram(data)

    def error_received(self, exc: Exception) -> None:
        log.warning(f"syslog 소켓 오류: {exc}")

class SyslogIngestor:
    """syslog(RFC3164) 데이터그램 수집 어댑터 (UDP 또는 유닉스 소켓)"""

    def __init__(self, address: str, *, queue_maxsize: int = DEFAULT_QUEUE_MAXSIZE):
        self.address = parse_listen_address(address)
        self.q: asyncio.Queue = asyncio.Queue(maxsize=queue_maxsize)
        self.transport: Optional[asyncio.DatagramTransport] = None
        self._running = False

    async def listen(self) -> None:
        """
        소켓을 바인딩하고 수신을 시작합니다.

        Raises:
            OSError: 바인딩 실패 (시작 시 치명적)
        """
        loop = asyncio.get_running_loop()
        if self.address.is_unix:
            sock = self._bind_unix(self.address.path)
            self.transport, _ = await loop.create_datagram_endpoint(
                lambda: _SyslogDatagramProtocol(self), sock=sock
            )
        else:
            self.transport, _ = await loop.create_datagram_endpoint(
                lambda: _SyslogDatagramProtocol(self),
                local_addr=(self.address.host, self.address.port),
            )
        self._running = True
        log.info(f"syslog 수신 시작: {self.bound_address}")

    @property
    def bound_address(self):
        """실제 바인딩된 주소 (포트 0으로 바인딩한 경우 확인용)"""
        if self.transport is None:
            return None
        return self.transport.get_extra_info("sockname")

    async def recv(self) -> AsyncIterator[SyslogMessage]:
        while True:
            item = await self.q.get()
            if item is _STOP:
                return
            yield item

    async def stop(self) -> None:
        if not self._running:
            return
        self._running = False
        if self.transport is not None:
            self.transport.close()
        if self.address.is_unix:
            try:
                os.unlink(self.address.path)
            except FileNotFoundError:
                pass

        # 남은 메시지는 처리하지 않음
        while True:
            try:
                self.q.put_nowait(_STOP)
                break
            except asyncio.QueueFull:
                self.q.get_nowait()
        log.info("syslog 수신 종료됨")

    def _on_datagram(self, data: bytes) -> None:
        if not self._running:
            return
        message = parse_rfc3164(decode_datagram(data))
        try:
            self.q.put_nowait(message)
        except asyncio.QueueFull:
            log.warning("수신 큐가 가득 찼습니다. 메시지를 드롭합니다.")

    @staticmethod
    def _bind_unix(path: str) -> socket.socket:
        # 이전 실행에서 남은 소켓 파일 제거
        try:
            if stat.S_ISSOCK(os.stat(path).st_mode):
                os.unlink(path)
        except FileNotFoundError:
            pass
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_DGRAM)
        try:
            sock.bind(path)
        except OSError:
            sock.close()
            raise
        sock.setblocking(False)
        return sock
