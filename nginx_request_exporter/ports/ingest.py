"""
Syslog ingestion port interface.

This module defines the protocol for syslog message ingestion.
"""

from typing import AsyncIterator, Protocol
from nginx_request_exporter.core.models import SyslogMessage

class SyslogIngestPort(Protocol):
    """syslog 수집 포트 인터페이스"""
    
    def recv(self) -> AsyncIterator[SyslogMessage]:
        """
        syslog 메시지를 도착 순서대로 비동기적으로 수신합니다.
        
        Yields:
            전송 계층 메시지 (tag, hostname, content)
        """
        ...
    
    async def stop(self) -> None:
        """수신을 중단하고 recv() 반복을 종료시킵니다."""
        ...
