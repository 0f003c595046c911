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
"""HTML meta tags exposing the authenticity token to AJAX clients.

Scripts read ``csrf-token`` and send it back in the ``X-CSRF-Token``
header; ``csrf-param`` names the form field used for regular posts.
"""

from __future__ import annotations

from html import escape

from flycsrf.csrf.token import PARAM_NAME, CsrfToken

PARAM_META_NAME = "csrf-param"
TOKEN_META_NAME = "csrf-token"


def csrf_meta_tags(authenticity_token: str, param_name: str = PARAM_NAME) -> str:
    """Render the ``csrf-token`` and ``csrf-param`` meta tags."""
    return (
        f'<meta name="{TOKEN_META_NAME}" content="{escape(authenticity_token, quote=True)}">\n'
        f'<meta name="{PARAM_META_NAME}" content="{escape(param_name, quote=True)}">'
    )


def csrf_meta_tags_for(token: CsrfToken) -> str:
    """Mint a fresh authenticity token for *token* and render its meta tags."""
    return csrf_meta_tags(token.authenticity_token())


def hidden_field(authenticity_token: str, param_name: str = PARAM_NAME) -> str:
    """Render a hidden ``<input>`` carrying the authenticity token for a form."""
    return (
        f'<input type="hidden" name="{escape(param_name, quote=True)}" '
        f'value="{escape(authenticity_token, quote=True)}">'
    )
