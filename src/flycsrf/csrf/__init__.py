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
"""FlyCSRF core — session secrets, authenticity tokens and request guards.

Everything in this package is independent of the web framework; the
Starlette binding lives in :mod:`flycsrf.web.adapters.starlette`.
"""

from flycsrf.csrf.config import CsrfConfig, CsrfProperties
from flycsrf.csrf.guard import GuardOutcome, OutcomeKind, TokenRequestExtractor
from flycsrf.csrf.hashing import BcryptTokenEncoder, TokenEncoder
from flycsrf.csrf.meta import PARAM_META_NAME, TOKEN_META_NAME, csrf_meta_tags, csrf_meta_tags_for, hidden_field
from flycsrf.csrf.ports.cookies import Cookie, CookieJar
from flycsrf.csrf.secret import RandomSecretGenerator, SecretCodec
from flycsrf.csrf.store import SessionSecretStore
from flycsrf.csrf.token import HEADER_NAME, PARAM_NAME, AuthenticityTokenMinter, CsrfToken

__all__ = [
    "HEADER_NAME",
    "PARAM_META_NAME",
    "PARAM_NAME",
    "TOKEN_META_NAME",
    "AuthenticityTokenMinter",
    "BcryptTokenEncoder",
    "Cookie",
    "CookieJar",
    "CsrfConfig",
    "CsrfProperties",
    "CsrfToken",
    "GuardOutcome",
    "OutcomeKind",
    "RandomSecretGenerator",
    "SecretCodec",
    "SessionSecretStore",
    "TokenEncoder",
    "TokenRequestExtractor",
    "csrf_meta_tags",
    "csrf_meta_tags_for",
    "hidden_field",
]
