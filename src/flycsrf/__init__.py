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
"""FlyCSRF — CSRF protection for Starlette with hashed authenticity tokens.

A random per-session secret lives in an encrypted private cookie. Pages
embed a bcrypt-hashed *authenticity token* derived from it, and submitted
tokens are verified against the current session's secret.

Quick start::

    from starlette.concurrency import run_in_threadpool

    from flycsrf import CsrfConfig, CsrfProtection, csrf_token_required

    @csrf_token_required
    async def create_comment(request, csrf_token):
        form = await request.form()
        await run_in_threadpool(csrf_token.verify, form["authenticity_token"])  # 403 on mismatch
        ...

    app = CsrfProtection(CsrfConfig().with_lifetime(None), cipher).install(app)
"""

from flycsrf.csrf import (
    HEADER_NAME,
    PARAM_NAME,
    AuthenticityTokenMinter,
    CsrfConfig,
    CsrfProperties,
    CsrfToken,
    GuardOutcome,
    RandomSecretGenerator,
    SecretCodec,
    SessionSecretStore,
    TokenRequestExtractor,
    csrf_meta_tags,
)
from flycsrf.kernel.exceptions import TokenHashError, VerificationFailure
from flycsrf.web.adapters.starlette import (
    CookieCipher,
    CsrfFilter,
    CsrfHeaderFilter,
    CsrfProtection,
    csrf_token_required,
)

__version__ = "0.3.2"

__all__ = [
    "HEADER_NAME",
    "PARAM_NAME",
    "AuthenticityTokenMinter",
    "CookieCipher",
    "CsrfConfig",
    "CsrfFilter",
    "CsrfHeaderFilter",
    "CsrfProperties",
    "CsrfProtection",
    "CsrfToken",
    "GuardOutcome",
    "RandomSecretGenerator",
    "SecretCodec",
    "SessionSecretStore",
    "TokenHashError",
    "TokenRequestExtractor",
    "VerificationFailure",
    "csrf_meta_tags",
    "csrf_token_required",
]
