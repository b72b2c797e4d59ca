from __future__ import annotations

import logging
import time

from django.utils.deprecation import MiddlewareMixin

from checklist_core.common.api.exceptions import ensure_request_id

logger = logging.getLogger(__name__)


class RequestLogMiddleware(MiddlewareMixin):
    """
    Tags every request with a request_id (shared with the error envelope),
    echoes it as X-Request-Id and logs one line per API call.

    Docs/schema/admin requests are tagged but not logged.
    """

    LOGGED_PREFIXES = ("/api/",)
    QUIET_PREFIXES = ("/api/docs/", "/api/schema/")

    def _should_log(self, path: str) -> bool:
        if any(path.startswith(p) for p in self.QUIET_PREFIXES):
            return False
        return any(path.startswith(p) for p in self.LOGGED_PREFIXES)

    def process_request(self, request):
        ensure_request_id(request)
        request._started_at = time.monotonic()
        return None

    def process_response(self, request, response):
        rid = ensure_request_id(request)
        response["X-Request-Id"] = rid

        if self._should_log(request.path):
            started = getattr(request, "_started_at", None)
            duration_ms = int((time.monotonic() - started) * 1000) if started is not None else -1
            level = logging.WARNING if response.status_code >= 500 else logging.INFO
            logger.log(
                level,
                "%s %s %s %dms request_id=%s",
                request.method,
                request.path,
                response.status_code,
                duration_ms,
                rid,
            )
        return response
