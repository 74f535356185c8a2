import logging
import re
import time
import uuid


logger = logging.getLogger(__name__)

SLOW_REQUEST_MS = 5000
REQUEST_ID_RE = re.compile(r"^[A-Za-z0-9._-]{1,64}$")


def _request_id(request) -> str:
    supplied = request.headers.get("X-Request-ID", "")
    if REQUEST_ID_RE.match(supplied):
        return supplied
    return uuid.uuid4().hex[:10]


class RequestLifecycleLoggingMiddleware:
    """
    Log request start/end with a short request id so slow or failing
    redemption calls can be traced without access logs.

    DRF writes the authenticated (JWT) user back onto the underlying
    request, so ``request.user`` at END is the API caller.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request_id = _request_id(request)
        started_at = time.perf_counter()
        request._request_id = request_id

        logger.info(
            "[req:%s] START %s %s",
            request_id,
            request.method,
            request.get_full_path(),
        )

        response = self.get_response(request)

        elapsed_ms = int((time.perf_counter() - started_at) * 1000)
        level = logging.WARNING if elapsed_ms >= SLOW_REQUEST_MS else logging.INFO
        user = getattr(request, "user", None)
        logger.log(
            level,
            "[req:%s] END %s %s status=%s user=%s elapsed_ms=%s",
            request_id,
            request.method,
            request.get_full_path(),
            getattr(response, "status_code", "unknown"),
            getattr(user, "pk", None),
            elapsed_ms,
        )
        response["X-Request-ID"] = request_id
        return response
