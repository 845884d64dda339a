"""
HTTP endpoints for the Nginx request exporter.

This module implements the landing page, the Prometheus telemetry
endpoint and small health/info endpoints.
"""

import html
import time
from typing import Optional, Sequence

from fastapi import FastAPI
from fastapi.responses import HTMLResponse, JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, generate_latest

from nginx_request_exporter.metrics.registry import HistogramRegistry
from nginx_request_exporter.observability.logging_setup import get_logger
from nginx_request_exporter.settings import Settings

log = get_logger("nre.http")

LANDING_PAGE = """<html><head>
<title>{title}</title>
</head><body>
<h1>{title}</h1>
<p><a href='{path}'>Metrics</a></p>
</body></html>"""

def create_app(settings: Settings,
               registry: CollectorRegistry,
               histograms: Optional[HistogramRegistry] = None,
               buckets: Sequence[float] = ()) -> FastAPI:
    """FastAPI 애플리케이션을 생성합니다."""
    app = FastAPI(
        title=settings.observability.service_name,
        version=settings.observability.build_version,
        description="Prometheus histograms from Nginx syslog access logs",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    start_time = time.time()
    telemetry_path = settings.web.telemetry_path
    landing = LANDING_PAGE.format(
        title=html.escape(settings.observability.service_name),
        path=html.escape(telemetry_path, quote=True),
    )

    def metrics():
        """Prometheus 메트릭 엔드포인트 (스레드풀에서 실행, 수신 루프 비차단)"""
        return Response(generate_latest(registry), media_type=CONTENT_TYPE_LATEST)

    app.add_api_route(telemetry_path, metrics, methods=["GET"], include_in_schema=False)

    @app.get("/health")
    async def health():
        """헬스 체크 엔드포인트"""
        return JSONResponse({
            "status": "ok",
            "service": settings.observability.service_name,
            "timestamp": time.time()
        })

    @app.get("/info")
    async def info():
        """서비스 정보 엔드포인트"""
        identities = histograms.identities() if histograms is not None else []
        return JSONResponse({
            "service": settings.observability.service_name,
            "version": settings.observability.build_version,
            "uptime_seconds": int(time.time() - start_time),
            "telemetry_path": telemetry_path,
            "syslog_address": settings.syslog.address,
            "buckets": list(buckets),
            "histograms": len(identities),
            "metric_names": sorted({i.name for i in identities}),
        })

    @app.get("/", response_class=HTMLResponse)
    async def root():
        """루트 엔드포인트"""
        return HTMLResponse(landing)

    log.debug(f"HTTP 라우트 구성 완료 telemetry_path={telemetry_path}")
    return app
