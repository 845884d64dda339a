# nginx_request_exporter/main.py
import asyncio
import contextlib
import signal
import socket
import sys
from typing import Optional, Sequence

import uvicorn
from prometheus_client import CollectorRegistry, GCCollector, PlatformCollector, ProcessCollector
from pydantic import ValidationError

from nginx_request_exporter.adapters.syslog.listener import SyslogIngestor
from nginx_request_exporter.core.buckets import parse_buckets
from nginx_request_exporter.core.errors import BucketConfigError
from nginx_request_exporter.metrics.registry import HistogramRegistry
from nginx_request_exporter.observability.http_app import create_app
from nginx_request_exporter.observability.logging_setup import get_logger, setup_logging
from nginx_request_exporter.observability.metrics import ExporterMetrics
from nginx_request_exporter.orchestrators.orchestrator import Orchestrator
from nginx_request_exporter.settings import Settings, build_settings
from nginx_request_exporter.utils.address import split_host_port

log = get_logger("nre.main")

class _HttpServer(uvicorn.Server):
    # 시그널은 main()에서 직접 처리
    @contextlib.contextmanager
    def capture_signals(self):
        yield

def build_registry() -> CollectorRegistry:
    """프로세스 전용 prometheus 레지스트리 (기본 전역 REGISTRY 미사용)"""
    registry = CollectorRegistry()
    ProcessCollector(registry=registry)
    PlatformCollector(registry=registry)
    GCCollector(registry=registry)
    return registry

def bind_http_socket(address: str) -> socket.socket:
    host, port = split_host_port(address)
    family = socket.AF_INET6 if ":" in host else socket.AF_INET
    sock = socket.socket(family, socket.SOCK_STREAM)
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    try:
        sock.bind((host, port))
    except OSError:
        sock.close()
        raise
    return sock

def start_http(settings: Settings, app, sock: socket.socket):
    server = _HttpServer(uvicorn.Config(
        app,
        log_config=None,
        log_level=settings.observability.log_level.lower(),
        access_log=False,
    ))
    task = asyncio.create_task(server.serve(sockets=[sock]))
    return server, task

async def main(argv: Optional[Sequence[str]] = None) -> int:
    try:
        s = build_settings(argv)
        setup_logging(s.observability.log_level, s.observability.log_format)
    except (ValidationError, ValueError) as e:
        setup_logging()
        log.critical(f"설정 오류: {e}")
        return 1
    log.info("설정 로드 완료")

    try:
        buckets = parse_buckets(s.histogram.buckets)
    except BucketConfigError as e:
        log.critical(f"히스토그램 버킷 설정 오류: {e}")
        return 1

    registry = build_registry()
    exporter_metrics = ExporterMetrics(registry)
    histograms = HistogramRegistry(registry, buckets)

    try:
        ingest = SyslogIngestor(s.syslog.address, queue_maxsize=s.syslog.queue_maxsize)
        await ingest.listen()
    except (OSError, ValueError) as e:
        log.critical(f"syslog 수신 바인딩 실패 {s.syslog.address}: {e}")
        return 1

    try:
        http_sock = bind_http_socket(s.web.listen_address)
    except (OSError, ValueError) as e:
        log.critical(f"HTTP 바인딩 실패 {s.web.listen_address}: {e}")
        await ingest.stop()
        return 1

    orch = Orchestrator(ingest, histograms, exporter_metrics, expected_tag=s.syslog.tag)
    app = create_app(s, registry, histograms, buckets)

    server, http_task = start_http(s, app, http_sock)
    log.info(f"HTTP 서버 시작: {s.web.listen_address}{s.web.telemetry_path}")
    orch_task = asyncio.create_task(orch.start())

    loop = asyncio.get_running_loop()
    stop = loop.create_future()
    for sig in (signal.SIGTERM, signal.SIGINT):
        try:
            loop.add_signal_handler(sig, lambda sig=sig: (not stop.done()) and stop.set_result(sig))
        except NotImplementedError:
            pass

    await asyncio.wait({stop, http_task, orch_task}, return_when=asyncio.FIRST_COMPLETED)
    exit_code = 0
    if stop.done():
        log.info(f"{signal.Signals(stop.result()).name} 수신, 종료합니다")
    else:
        log.error("HTTP 서버 또는 오케스트레이터가 예기치 않게 종료됨")
        exit_code = 1
        stop.cancel()

    # 큐에 남은 메시지는 처리하지 않음
    await orch.stop()
    server.should_exit = True
    await asyncio.gather(orch_task, http_task, return_exceptions=True)
    return exit_code

def run(argv: Optional[Sequence[str]] = None) -> None:
    sys.exit(asyncio.run(main(argv)))

if __name__ == "__main__":
    run()
