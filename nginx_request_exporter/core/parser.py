"""
Line parser for Nginx access-log payloads.

This module contains pure functions that turn one syslog payload
(``key:value`` metric tokens and ``key=value`` label tokens separated by
whitespace) into ordered metrics plus a shared label set.
"""

import math
import re
from typing import List, Tuple

from .errors import DuplicateLabel, InvalidMetricValue, MalformedToken, MissingHostname
from .models import LabelSet, ParsedMetric, ParseResult

HOSTNAME_LABEL = "hostname"

# 십진 실수만 허용 (nan/inf, 16진수, 밑줄 구분자 제외)
_FLOAT_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$")


def parse_metric_value(key: str, raw: str) -> float:
    """메트릭 값을 유한 실수로 변환합니다."""
    if not _FLOAT_RE.match(raw):
        raise InvalidMetricValue(key, raw)
    value = float(raw)
    if not math.isfinite(value):
        # 지수 오버플로 (예: 1e999)
        raise InvalidMetricValue(key, raw)
    return value


def unquote(value: str) -> str:
    """앞뒤 큰따옴표를 정확히 하나씩 제거합니다. 이스케이프는 해석하지 않습니다."""
    if len(value) >= 2 and value[0] == '"' and value[-1] == '"':
        return value[1:-1]
    return value


def parse_line(line: str) -> ParseResult:
    """
    로그 라인을 메트릭과 라벨로 파싱합니다.

    Args:
        line: syslog 메시지 본문

    Returns:
        입력 순서를 유지한 메트릭 목록과 라벨 집합

    Raises:
        MalformedToken: 구분자가 없거나 둘 다 있거나 키가 빈 토큰
        InvalidMetricValue: 메트릭 값이 유한 실수가 아님
        DuplicateLabel: 같은 라벨 이름이 두 번 등장
        MissingHostname: hostname 라벨이 없거나 비어 있음
    """
    tokens = line.split()
    if not tokens:
        return ParseResult()

    metrics: List[ParsedMetric] = []
    label_pairs: List[Tuple[str, str]] = []
    seen = set()

    for token in tokens:
        has_colon = ":" in token
        has_equals = "=" in token
        if has_colon == has_equals:
            raise MalformedToken(token)

        if has_colon:
            key, _, raw = token.partition(":")
            if not key:
                raise MalformedToken(token)
            metrics.append(ParsedMetric(name=key, value=parse_metric_value(key, raw)))
        else:
            key, _, raw = token.partition("=")
            if not key:
                raise MalformedToken(token)
            if key in seen:
                raise DuplicateLabel(key)
            seen.add(key)
            label_pairs.append((key, unquote(raw)))

    labels = LabelSet(
        names=tuple(name for name, _ in label_pairs),
        values=tuple(value for _, value in label_pairs),
    )
    if not labels.get(HOSTNAME_LABEL):
        raise MissingHostname()

    return ParseResult(metrics=metrics, labels=labels)
