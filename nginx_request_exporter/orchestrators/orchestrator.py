"""
Observation pipeline orchestrator for the Nginx request exporter.

This module implements the single worker that drains the syslog ingest
port, parses each payload and records one histogram observation per
metric token.
"""

from nginx_request_exporter.core.errors import ParseError, RegistryError
from nginx_request_exporter.core.models import MetricIdentity, SyslogMessage
from nginx_request_exporter.core.parser import parse_line
from nginx_request_exporter.observability.logging_setup import get_logger
from nginx_request_exporter.observability.metrics import ExporterMetrics
from nginx_request_exporter.ports.ingest import SyslogIngestPort
from nginx_request_exporter.ports.metrics import HistogramRegistryPort

log = get_logger("nre.orchestrator")

DEFAULT_SYSLOG_TAG = "nginx"

class Orchestrator:
    """syslog → 파싱 → 히스토그램 관측 오케스트레이터"""

    def __init__(self,
                 ingest: SyslogIngestPort,
                 registry: HistogramRegistryPort,
                 metrics: ExporterMetrics,
                 *,
                 expected_tag: str = DEFAULT_SYSLOG_TAG):
        """
        초기화합니다.

        Args:
            ingest: syslog 수집 포트
            registry: 히스토그램 레지스트리
            metrics: 수신/실패 카운터
            expected_tag: 허용할 syslog 태그
        """
        self.ingest = ingest
        self.registry = registry
        self.metrics = metrics
        self.expected_tag = expected_tag

        log.info("오케스트레이터 초기화됨")

    async def start(self) -> None:
        """
        오케스트레이터를 시작합니다.

        수집 포트가 종료될 때까지 메시지를 도착 순서대로 하나씩 처리합니다.
        """
        log.info("오케스트레이터 시작됨")
        async for message in self.ingest.recv():
            try:
                self.process(message)
            except Exception as e:
                # 한 메시지의 예외로 워커가 멈추지 않도록 함
                log.exception(f"메시지 처리 오류: {e}")
        log.info("오케스트레이터 종료됨")

    async def stop(self) -> None:
        """명시적 종료 신호: 수집 포트를 닫아 start() 루프를 끝냅니다."""
        await self.ingest.stop()

    def process(self, message: SyslogMessage) -> bool:
        """
        메시지 하나를 처리합니다.

        Args:
            message: 전송 계층 메시지

        Returns:
            파싱에 성공해 관측 단계까지 진행했으면 True
        """
        self.metrics.syslog_messages.inc()

        if message.tag != self.expected_tag:
            log.warning(f"잘못된 태그의 syslog 메시지 무시: tag={message.tag!r}")
            self.metrics.syslog_parse_failures.inc()
            return False

        if not message.hostname:
            log.warning("syslog 메시지에 hostname이 없습니다")
            self.metrics.syslog_parse_failures.inc()
            return False

        if not message.content.strip():
            log.warning("빈 syslog 메시지 무시")
            self.metrics.syslog_parse_failures.inc()
            return False

        try:
            result = parse_line(message.content)
        except ParseError as e:
            log.error(f"로그 라인 파싱 실패 host={message.hostname}: {e}")
            self.metrics.syslog_parse_failures.inc()
            return False

        labels = result.labels
        for metric in result.metrics:
            identity = MetricIdentity(name=metric.name, label_names=labels.names)
            try:
                self.registry.observe(identity, labels.values, metric.value)
            except RegistryError as e:
                # 해당 메트릭만 드롭, 같은 라인의 나머지는 계속 관측
                log.error(f"메트릭 관측 실패: {e}")

        return True
