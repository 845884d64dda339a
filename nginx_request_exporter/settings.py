# nginx_request_exporter/settings.py
from __future__ import annotations
import argparse
import os
from typing import Mapping, Sequence
from pydantic import BaseModel, Field

from nginx_request_exporter import __version__
from nginx_request_exporter.core.buckets import DEFAULT_BUCKETS
from nginx_request_exporter.adapters.syslog.listener import DEFAULT_QUEUE_MAXSIZE
from nginx_request_exporter.orchestrators.orchestrator import DEFAULT_SYSLOG_TAG

APPLICATION_NAME = "Nginx Request Exporter"

class Web(BaseModel):
    listen_address: str = ":9147"
    telemetry_path: str = "/metrics"

class Syslog(BaseModel):
    address: str = "0.0.0.0:9514"            # host:port 또는 unix:/path
    tag: str = DEFAULT_SYSLOG_TAG
    queue_maxsize: int = DEFAULT_QUEUE_MAXSIZE

class HistogramConfig(BaseModel):
    buckets: str = DEFAULT_BUCKETS            # 쉼표 구분, 시작 시 파싱

class Observability(BaseModel):
    service_name: str = APPLICATION_NAME
    build_version: str = __version__
    log_level: str = "INFO"
    log_format: str = "console"               # console | json

class Settings(BaseModel):
    web: Web = Field(default_factory=Web)
    syslog: Syslog = Field(default_factory=Syslog)
    histogram: HistogramConfig = Field(default_factory=HistogramConfig)
    observability: Observability = Field(default_factory=Observability)

# (플래그, 환경변수, 섹션, 필드, 도움말)
_PARAMETERS = (
    ("web.listen-address", "NRE_WEB_LISTEN_ADDRESS", "web", "listen_address",
     "Address to listen on for web interface and telemetry."),
    ("web.telemetry-path", "NRE_WEB_TELEMETRY_PATH", "web", "telemetry_path",
     "Path under which to expose metrics."),
    ("nginx.syslog-address", "NRE_NGINX_SYSLOG_LISTENER", "syslog", "address",
     "Syslog listen address/socket for Nginx."),
    ("nginx.syslog-tag", "NRE_NGINX_SYSLOG_TAG", "syslog", "tag",
     "Syslog tag expected on Nginx messages."),
    ("syslog.queue-size", "NRE_SYSLOG_QUEUE_SIZE", "syslog", "queue_maxsize",
     "Maximum number of syslog messages buffered before dropping."),
    ("histogram.buckets", "NRE_HISTOGRAM_BUCKETS", "histogram", "buckets",
     "Buckets for the Prometheus histogram."),
    ("log.level", "NRE_LOG_LEVEL", "observability", "log_level",
     "Log level (DEBUG, INFO, WARNING, ERROR)."),
    ("log.format", "NRE_LOG_FORMAT", "observability", "log_format",
     "Log output format (console or json)."),
)

def build_parser() -> argparse.ArgumentParser:
    defaults = Settings()
    parser = argparse.ArgumentParser(
        prog="nginx-request-exporter",
        description=f"{APPLICATION_NAME}: Prometheus histograms from Nginx syslog lines",
    )
    for flag, env, section, field, help_text in _PARAMETERS:
        default = getattr(getattr(defaults, section), field)
        parser.add_argument(
            f"--{flag}",
            dest=f"{section}__{field}",
            default=default,
            help=f"{help_text} (env {env}, default {default!r})",
        )
    return parser

def build_settings(argv: Sequence[str] | None = None,
                   environ: Mapping[str, str] | None = None) -> Settings:
    """
    기본값 → 명령행 플래그 → 환경변수 순으로 설정을 적용합니다.
    (빈 환경변수는 무시)
    """
    environ = os.environ if environ is None else environ
    args = vars(build_parser().parse_args(argv))

    data: dict = {}
    for _flag, env, section, field, _help in _PARAMETERS:
        value = environ.get(env) or args[f"{section}__{field}"]
        data.setdefault(section, {})[field] = value
    return Settings.model_validate(data)
