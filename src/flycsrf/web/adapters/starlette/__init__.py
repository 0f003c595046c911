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
"""Starlette adapter — CSRF filters, private cookies and endpoint helpers."""

from flycsrf.web.adapters.starlette.cookies import CookieCipher, PrivateCookieJar
from flycsrf.web.adapters.starlette.errors import csrf_exception_handler, error_response
from flycsrf.web.adapters.starlette.filter_chain import WebFilterChainMiddleware
from flycsrf.web.adapters.starlette.filters import SAFE_METHODS, CsrfFilter, CsrfHeaderFilter
from flycsrf.web.adapters.starlette.guard import csrf_token_outcome, csrf_token_required
from flycsrf.web.adapters.starlette.protection import CsrfProtection

__all__ = [
    "SAFE_METHODS",
    "CookieCipher",
    "CsrfFilter",
    "CsrfHeaderFilter",
    "CsrfProtection",
    "PrivateCookieJar",
    "WebFilterChainMiddleware",
    "csrf_exception_handler",
    "csrf_token_outcome",
    "csrf_token_required",
    "error_response",
]
