"""FastAPI middleware."""

from fastapi import Request
import time
import logging

logger = logging.getLogger(__name__)


async def timing_middleware(request: Request, call_next):
    """リクエスト処理時間を計測し、閾値超過は警告"""
    start_time = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - start_time) * 1000

    line = f"{request.method} {request.url.path} - {response.status_code} - {elapsed_ms:.1f}ms"
    slow_ms = request.app.state.app_state.config.api.slow_request_ms
    if elapsed_ms > slow_ms:
        logger.warning(f"Slow request (>{slow_ms:.0f}ms): {line}")
    else:
        logger.info(line)

    response.headers["X-Process-Time"] = f"{elapsed_ms:.1f}ms"
    return response
