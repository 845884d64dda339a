from typing import NamedTuple, Optional, Tuple

UNIX_PREFIX = "unix:"

class ListenAddress(NamedTuple):
    """바인딩 주소: UDP(host, port) 또는 유닉스 데이터그램 소켓 경로"""
    host: Optional[str] = None
    port: Optional[int] = None
    path: Optional[str] = None

    @property
    def is_unix(self) -> bool:
        return self.path is not None

    def __str__(self) -> str:
        if self.is_unix:
            return f"{UNIX_PREFIX}{self.path}"
        if self.host and ":" in self.host:
            return f"[{self.host}]:{self.port}"
        return f"{self.host}:{self.port}"

def split_host_port(address: str, default_host: str = "0.0.0.0") -> Tuple[str, int]:
    """
    "host:port", ":port", "[v6]:port" 형식을 분리합니다.

    Raises:
        ValueError: 포트가 없거나 범위를 벗어남
    """
    host, sep, port_str = address.rpartition(":")
    if not sep:
        raise ValueError(f"missing port in address {address!r}")
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    try:
        port = int(port_str)
    except ValueError:
        raise ValueError(f"invalid port in address {address!r}") from None
    if not 0 <= port <= 65535:
        raise ValueError(f"port out of range in address {address!r}")
    return host or default_host, port

def parse_listen_address(address: str) -> ListenAddress:
    """syslog 수신 주소를 파싱합니다 (unix: 접두사는 로컬 데이터그램 소켓)."""
    if address.startswith(UNIX_PREFIX):
        path = address[len(UNIX_PREFIX):]
        if not path:
            raise ValueError("empty unix socket path")
        return ListenAddress(path=path)
    host, port = split_host_port(address)
    return ListenAddress(host=host, port=port)
