"""
Histogram registry for metrics discovered in log lines.

This module maps a MetricIdentity (metric name + label-name sequence) to
exactly one live prometheus_client Histogram. Collectors are created lazily
on first observation and never removed.
"""

import threading
from typing import Dict, List, Sequence, Tuple

from prometheus_client import CollectorRegistry, Histogram

from nginx_request_exporter.core.errors import CollectorRegistrationError, LabelSetConflict
from nginx_request_exporter.core.models import MetricIdentity
from nginx_request_exporter.observability.logging_setup import get_logger
from nginx_request_exporter.observability.metrics import NAMESPACE

log = get_logger("nre.registry")

class HistogramRegistry:
    """MetricIdentity → Histogram 테이블"""

    def __init__(self,
                 registry: CollectorRegistry,
                 buckets: Sequence[float],
                 *,
                 namespace: str = NAMESPACE):
        """
        초기화합니다.

        Args:
            registry: 노출(exposition)에 사용하는 prometheus 레지스트리
            buckets: 모든 히스토그램에 공통 적용할 버킷 경계
            namespace: 메트릭 이름 접두사
        """
        self.registry = registry
        self.buckets = tuple(buckets)
        self.namespace = namespace
        self._collectors: Dict[MetricIdentity, Histogram] = {}
        # 메트릭 이름별 최초 등록 라벨 순서
        self._label_names: Dict[str, Tuple[str, ...]] = {}
        # 게시(publish) 단계만 보호, 생성은 락 밖에서 수행
        self._publish_lock = threading.Lock()

    def resolve(self, identity: MetricIdentity) -> Histogram:
        """
        identity에 해당하는 히스토그램을 반환하고, 없으면 생성합니다.

        동시에 같은 identity를 생성하려는 경우 먼저 게시된 객체를
        채택하고 새로 만든 객체는 버립니다.

        Raises:
            LabelSetConflict: 같은 이름이 다른 라벨 순서로 이미 등록됨
            CollectorRegistrationError: prometheus_client가 등록을 거부함
        """
        existing = self._collectors.get(identity)
        if existing is not None:
            return existing

        self._check_labels(identity)
        candidate = self._build(identity)

        with self._publish_lock:
            existing = self._collectors.get(identity)
            if existing is not None:
                # 경쟁에서 졌으므로 승자의 컬렉터 채택
                return existing
            self._check_labels(identity)
            try:
                self.registry.register(candidate)
            except ValueError as e:
                raise CollectorRegistrationError(identity.name, str(e)) from e
            self._label_names[identity.name] = identity.label_names
            self._collectors[identity] = candidate

        log.info(f"히스토그램 등록됨: {identity.name} labels={list(identity.label_names)}")
        return candidate

    def observe(self, identity: MetricIdentity, label_values: Sequence[str], value: float) -> None:
        """identity의 히스토그램에 값 하나를 기록합니다."""
        self.resolve(identity).labels(*label_values).observe(value)

    def identities(self) -> List[MetricIdentity]:
        """게시된 identity 목록 (스냅샷)"""
        return list(self._collectors.keys())

    def __len__(self) -> int:
        return len(self._collectors)

    def _check_labels(self, identity: MetricIdentity) -> None:
        registered = self._label_names.get(identity.name)
        if registered is not None and registered != identity.label_names:
            raise LabelSetConflict(identity.name, registered, identity.label_names)

    def _build(self, identity: MetricIdentity) -> Histogram:
        # registry=None: 게시 전까지는 어디에도 등록하지 않음
        try:
            return Histogram(
                identity.name,
                f"Nginx request log value for {identity.name}",
                labelnames=identity.label_names,
                namespace=self.namespace,
                buckets=self.buckets,
                registry=None,
            )
        except ValueError as e:
            raise CollectorRegistrationError(identity.name, str(e)) from e
