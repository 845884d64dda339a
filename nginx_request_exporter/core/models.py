"""
Core domain models for the Nginx request exporter.

This module defines the domain models using Pydantic v2
for type safety and validation.
"""

from typing import List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field, model_validator

class SyslogMessage(BaseModel):
    """syslog 전송 계층 메시지 모델"""
    tag: str = ""
    hostname: str = ""
    content: str = ""
    priority: Optional[int] = None
    timestamp: Optional[str] = None

class ParsedMetric(BaseModel):
    """로그 라인에서 추출한 수치 메트릭"""
    model_config = ConfigDict(frozen=True)

    name: str
    value: float

class LabelSet(BaseModel):
    """라인 전체에 공통으로 붙는 라벨 집합 (이름/값 위치 정렬)"""
    model_config = ConfigDict(frozen=True)

    names: Tuple[str, ...] = ()
    values: Tuple[str, ...] = ()

    @model_validator(mode="after")
    def _check_alignment(self) -> "LabelSet":
        if len(self.names) != len(self.values):
            raise ValueError("label names and values must have the same length")
        if len(set(self.names)) != len(self.names):
            raise ValueError("label names must be unique")
        return self

    def get(self, name: str) -> Optional[str]:
        """라벨 이름으로 값을 조회합니다."""
        try:
            return self.values[self.names.index(name)]
        except ValueError:
            return None

class ParseResult(BaseModel):
    """Line Parser 결과"""
    metrics: List[ParsedMetric] = Field(default_factory=list)
    labels: LabelSet = Field(default_factory=LabelSet)

class MetricIdentity(BaseModel):
    """컬렉터 식별 키: (메트릭 이름, 라벨 이름 순서)"""
    model_config = ConfigDict(frozen=True)

    name: str
    label_names: Tuple[str, ...] = ()
