"""
Fixed exporter metrics.

This module defines the two Prometheus counters that describe the
syslog ingestion itself, as opposed to the histograms discovered from
log lines.
"""

from prometheus_client import CollectorRegistry, Counter

NAMESPACE = "nginx_request"

class ExporterMetrics:
    """수신/파싱 실패 카운터 묶음"""

    def __init__(self, registry: CollectorRegistry, namespace: str = NAMESPACE):
        # 노출 이름: nginx_request_exporter_syslog_messages_total
        self.syslog_messages = Counter(
            "exporter_syslog_messages",
            "Current total syslog messages received.",
            namespace=namespace,
            registry=registry,
        )

        # 노출 이름: nginx_request_exporter_syslog_parse_failure_total
        self.syslog_parse_failures = Counter(
            "exporter_syslog_parse_failure",
            "Number of errors while parsing syslog messages.",
            namespace=namespace,
            registry=registry,
        )
