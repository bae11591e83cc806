"""Per-request plumbing: request id, per-client rate limit, timing and access log.

The limiter is a token bucket per client address. ``check_rate_limit`` is a
pure function over a plain dict so it can be driven with a fake clock.
"""

import logging
import re
import threading
import time
import uuid
from typing import Dict, NamedTuple, Optional, Tuple

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from ..core.config import settings
from ..core.logging_config import request_id_var
from ..exceptions import ErrorCode

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

# Probes and docs are never throttled.
UNTHROTTLED_PATHS = frozenset({"/", "/health", "/docs", "/redoc", "/openapi.json"})


class Bucket(NamedTuple):
    tokens: float
    updated_at: float


_rate_buckets: Dict[str, Bucket] = {}
_buckets_lock = threading.Lock()

# Buckets idle for this long are dropped during a sweep.
IDLE_BUCKET_SECONDS = 120.0
SWEEP_INTERVAL_SECONDS = 60.0
_last_sweep = [0.0]


def _sweep(buckets: Dict[str, Bucket], now: float) -> None:
    if now - _last_sweep[0] < SWEEP_INTERVAL_SECONDS:
        return
    _last_sweep[0] = now
    for key in [k for k, b in buckets.items() if now - b.updated_at > IDLE_BUCKET_SECONDS]:
        del buckets[key]


def check_rate_limit(
    buckets: Dict[str, Bucket],
    key: str,
    max_per_minute: int,
    now: Optional[float] = None,
) -> Tuple[bool, float]:
    """Spend one token from *key*'s bucket.

    A bucket holds at most *max_per_minute* tokens and refills continuously
    at ``max_per_minute / 60`` tokens per second. A non-positive limit turns
    limiting off.

    Returns:
        ``(allowed, retry_after_seconds)``; *retry_after_seconds* is 0.0
        when the request is allowed.
    """
    if max_per_minute <= 0:
        return True, 0.0
    now = time.monotonic() if now is None else now
    _sweep(buckets, now)

    per_second = max_per_minute / 60.0
    previous = buckets.get(key)
    if previous is None:
        available = float(max_per_minute)
    else:
        elapsed = max(0.0, now - previous.updated_at)
        available = min(float(max_per_minute), previous.tokens + elapsed * per_second)

    if available < 1.0:
        buckets[key] = Bucket(available, now)
        return False, (1.0 - available) / per_second

    buckets[key] = Bucket(available - 1.0, now)
    return True, 0.0


# Incoming ids are echoed into logs and headers, so only plain tokens are kept.
_REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9._-]{1,64}$")


def request_id_for(request: Request) -> str:
    """The caller's ``X-Request-ID`` when it is a plain token, else a fresh one."""
    supplied = request.headers.get(REQUEST_ID_HEADER, "")
    if _REQUEST_ID_PATTERN.match(supplied):
        return supplied
    return uuid.uuid4().hex[:16]


def throttle_key(request: Request) -> str:
    """Bucket key: the original client behind the proxy, else the socket peer."""
    hops = [h.strip() for h in request.headers.get("x-forwarded-for", "").split(",")]
    if hops and hops[0]:
        return hops[0]
    return request.client.host if request.client else "unknown"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Request id binding, throttling, timing and the access log line."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request_id_for(request)
        request_id_var.set(request_id)
        probe = request.url.path in UNTHROTTLED_PATHS

        if not probe:
            refused = self._throttle(request, request_id)
            if refused is not None:
                return refused

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = round((time.perf_counter() - started) * 1000, 1)
        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers["X-Response-Time"] = f"{elapsed_ms}ms"

        # Load balancer probes would drown the access log at INFO.
        logger.log(
            logging.DEBUG if probe else logging.INFO,
            "%s %s %s",
            request.method,
            request.url.path,
            response.status_code,
            extra={"status_code": response.status_code, "duration_ms": elapsed_ms},
        )
        return response

    @staticmethod
    def _throttle(request: Request, request_id: str) -> Optional[JSONResponse]:
        key = throttle_key(request)
        with _buckets_lock:
            allowed, retry_after = check_rate_limit(_rate_buckets, key, settings.rate_limit_per_minute)
        if allowed:
            return None

        wait = round(retry_after, 1)
        logger.warning(
            "Rate limit exceeded",
            extra={"client": key, "path": request.url.path, "retry_after": wait},
        )
        return JSONResponse(
            status_code=429,
            content={
                "error": "Too many requests",
                "code": ErrorCode.RATE_LIMITED.value,
                "details": {"retry_after": wait},
            },
            headers={"Retry-After": str(int(retry_after) + 1), REQUEST_ID_HEADER: request_id},
        )
