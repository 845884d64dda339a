"""
Core domain models and pure functions for the Nginx request exporter.

This module contains the domain models and pure parsing logic
that are independent of external I/O and infrastructure concerns.
"""

from .models import SyslogMessage, ParsedMetric, LabelSet, ParseResult, MetricIdentity
from .parser import parse_line
from .buckets import parse_buckets, DEFAULT_BUCKETS

__all__ = [
    "SyslogMessage", "ParsedMetric", "LabelSet", "ParseResult", "MetricIdentity",
    "parse_line", "parse_buckets", "DEFAULT_BUCKETS",
]
