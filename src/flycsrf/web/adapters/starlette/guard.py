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
"""Starlette access to the request's CsrfToken."""

from __future__ import annotations

import functools
import inspect
from collections.abc import Callable
from typing import Any

from starlette.concurrency import run_in_threadpool
from starlette.requests import Request
from starlette.responses import Response

from flycsrf.csrf.guard import GuardOutcome, TokenRequestExtractor
from flycsrf.csrf.token import CsrfToken
from flycsrf.kernel.exceptions import CsrfTokenMissingException, FlyCsrfException
from flycsrf.web.adapters.starlette.errors import error_response

_default_extractor = TokenRequestExtractor()


def csrf_token_outcome(request: Any, extractor: TokenRequestExtractor | None = None) -> GuardOutcome[CsrfToken]:
    """Evaluate the CSRF guard for *request* using the state set by :class:`CsrfFilter`."""
    state = request.state
    return (extractor or _default_extractor).extract(
        getattr(state, "csrf_cookies", None),
        getattr(state, "csrf_config", None),
    )


def csrf_token_required(
    endpoint: Callable[[Request, CsrfToken], Any] | None = None,
    *,
    extractor: TokenRequestExtractor | None = None,
) -> Any:
    """Endpoint decorator that injects the request's :class:`CsrfToken`.

    The endpoint is called as ``endpoint(request, csrf_token)``. When the
    guard fails the endpoint does not run and a 403 response is returned.
    A :class:`FlyCsrfException` raised by the endpoint, such as a failed
    ``csrf_token.verify(...)``, is turned into its JSON error response
    even when no app-level exception handler is registered.
    Sync endpoints run in the thread pool, since minting an authenticity
    token is CPU-bound.

    Usage::

        @csrf_token_required
        def new_comment(request, csrf_token):
            return HTMLResponse(render(csrf_token.authenticity_token()))
    """

    def decorator(func: Callable[[Request, CsrfToken], Any]) -> Callable[[Request], Any]:
        @functools.wraps(func)
        async def wrapper(request: Request) -> Response:
            outcome = csrf_token_outcome(request, extractor)
            if not outcome.is_success or outcome.value is None:
                error = outcome.error or CsrfTokenMissingException()
                return error_response(request, error, outcome.status or 403)
            try:
                if inspect.iscoroutinefunction(func):
                    return await func(request, outcome.value)
                return await run_in_threadpool(func, request, outcome.value)
            except FlyCsrfException as exc:
                return error_response(request, exc)

        return wrapper

    if endpoint is not None:
        return decorator(endpoint)
    return decorator
