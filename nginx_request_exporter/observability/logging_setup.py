from __future__ import annotations
import logging
import sys
from loguru import logger

# ---- stdlib logging → loguru 인터셉트 ----
class InterceptHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        logger.opt(depth=6, exception=record.exc_info).log(level, record.getMessage())

def _hook_stdlib_logging() -> None:
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    # uvicorn은 자체 핸들러를 달기 때문에 직접 교체
    for noisy in ("uvicorn", "uvicorn.error", "uvicorn.access", "asyncio"):
        l = logging.getLogger(noisy)
        l.handlers = [InterceptHandler()]
        l.propagate = False

# ---- 콘솔 포맷(사람 친화, extra 미노출) ----
DEV_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level:<7}</level> | "
    "<cyan>{extra[name]}</cyan> | "
    "<cyan>{file}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

LOG_FORMATS = ("console", "json")

def setup_logging(level: str = "INFO", fmt: str = "console") -> None:
    """
    loguru 초기화.
    - console: 컬러 출력
    - json: 한 줄 JSON (수집기 연동용)
    - stdlib logging 흡수
    """
    if fmt not in LOG_FORMATS:
        raise ValueError(f"unknown log format {fmt!r}, expected one of {LOG_FORMATS}")
    logger.remove()  # 기본 sink 제거
    logger.configure(extra={"name": "nre"})
    if fmt == "json":
        logger.add(
            sink=sys.stderr,
            serialize=True,
            level=level.upper(),
            backtrace=False,
            diagnose=False,
        )
    else:
        logger.add(
            sink=sys.stderr,
            format=DEV_FORMAT,
            colorize=True,
            backtrace=True,
            diagnose=False,   # 과도한 진단은 끔
            level=level.upper(),
            enqueue=False,
        )
    _hook_stdlib_logging()

def get_logger(name: str = "nre", **ctx):
    """선택적으로 컨텍스트를 바인딩한 logger 반환."""
    return logger.bind(name=name, **ctx)
