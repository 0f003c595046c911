# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Exception handler rendering FlyCSRF errors as JSON responses."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from starlette.requests import Request
from starlette.responses import JSONResponse

from flycsrf.kernel.exceptions import (
    FlyCsrfException,
    ForbiddenException,
    InfrastructureException,
    SecurityException,
)

# Exception -> HTTP status code mapping (most specific first)
_STATUS_MAP: dict[type, int] = {
    ForbiddenException: 403,
    SecurityException: 401,
    InfrastructureException: 502,
}


def status_for(exc: Exception) -> int:
    """Map an exception to its HTTP status code (500 when unmapped)."""
    for exc_type, status in _STATUS_MAP.items():
        if isinstance(exc, exc_type):
            return status
    return 500


def error_response(request: Any, exc: FlyCsrfException, status: int | None = None) -> JSONResponse:
    status = status or status_for(exc)
    body: dict[str, Any] = {
        "error": {
            "message": str(exc),
            "code": exc.code or type(exc).__name__,
            "timestamp": datetime.now(UTC).isoformat(),
            "status": status,
            "path": request.url.path,
        }
    }
    if exc.context:
        body["error"]["context"] = exc.context
    return JSONResponse(body, status_code=status)


async def csrf_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Starlette exception handler for :class:`FlyCsrfException` and subclasses."""
    if not isinstance(exc, FlyCsrfException):
        raise exc
    return error_response(request, exc)
