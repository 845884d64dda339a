"""
Collector registry port interface.

This module defines the protocol the observation pipeline uses to
resolve histogram collectors.
"""

from typing import Protocol, Sequence
from nginx_request_exporter.core.models import MetricIdentity

class HistogramRegistryPort(Protocol):
    """히스토그램 레지스트리 포트 인터페이스"""
    
    def resolve(self, identity: MetricIdentity):
        """
        identity에 해당하는 컬렉터를 반환합니다 (없으면 생성).
        
        Args:
            identity: 메트릭 이름과 라벨 이름 순서
            
        Returns:
            labels(*values).observe(value)를 지원하는 컬렉터
        """
        ...
    
    def observe(self, identity: MetricIdentity, label_values: Sequence[str], value: float) -> None:
        """
        값 하나를 기록합니다.
        
        Args:
            identity: 메트릭 식별 키
            label_values: 라벨 값 (identity.label_names와 같은 순서)
            value: 관측값
        """
        ...
