"""
테스트 설정 및 픽스처

이 모듈은 pytest 설정과 공통 픽스처를 제공합니다.
"""

import pytest
import inspect
from unittest.mock import AsyncMock
from prometheus_client import CollectorRegistry

from nginx_request_exporter.core.models import SyslogMessage
from nginx_request_exporter.metrics.registry import HistogramRegistry
from nginx_request_exporter.observability.metrics import ExporterMetrics
from nginx_request_exporter.settings import Settings


TEST_BUCKETS = [0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0]


@pytest.fixture
def prom_registry():
    """테스트마다 새로 만드는 prometheus 레지스트리"""
    return CollectorRegistry()


@pytest.fixture
def exporter_metrics(prom_registry):
    """수신/실패 카운터"""
    return ExporterMetrics(prom_registry)


@pytest.fixture
def histograms(prom_registry):
    """테스트용 히스토그램 레지스트리"""
    return HistogramRegistry(prom_registry, TEST_BUCKETS)


@pytest.fixture
def sample_settings():
    """테스트용 설정"""
    settings = Settings()
    settings.observability.service_name = "test-service"
    settings.observability.build_version = "1.0.0"
    settings.web.telemetry_path = "/metrics"
    return settings


@pytest.fixture
def mock_ingest():
    """테스트용 수집 포트"""
    return AsyncMock()


@pytest.fixture
def nginx_message():
    """정상 nginx syslog 메시지 생성기"""
    def _make(content: str, *, tag: str = "nginx", hostname: str = "web-1") -> SyslogMessage:
        return SyslogMessage(tag=tag, hostname=hostname, content=content)
    return _make


@pytest.fixture
def sample_value(prom_registry):
    """샘플 값 조회 (없으면 0.0)"""
    def _get(name: str, labels: dict = None) -> float:
        value = prom_registry.get_sample_value(name, labels or {})
        return 0.0 if value is None else value
    return _get


# pytest 설정
def pytest_collection_modifyitems(config, items):
    """테스트 아이템 수정"""
    for item in items:
        # 비동기 테스트에 asyncio 마커 추가
        if inspect.iscoroutinefunction(getattr(item, "function", None)):
            item.add_marker(pytest.mark.asyncio)

        # 느린 테스트 마커 추가
        if "performance" in item.name or "stress" in item.name or "concurrent" in item.name:
            item.add_marker(pytest.mark.slow)

        # 통합 테스트 마커 추가
        if "integration" in item.name:
            item.add_marker(pytest.mark.integration)
