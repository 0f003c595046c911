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
"""Exception hierarchy for FlyCSRF.

All library exceptions inherit from FlyCsrfException so callers can catch
one base type, or a specific subclass for targeted handling.

Categories:
- SecurityException: CSRF verification and guard failures (HTTP 4xx)
- InfrastructureException: failures of the hashing primitive
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class FlyCsrfException(Exception):
    """Base exception for all FlyCSRF errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "CSRF_VERIFICATION_FAILED").
        context: Arbitrary key-value pairs for error context. Never put
            secrets or submitted tokens in here.
    """

    default_code: str | None = None

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code or self.default_code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Security Exceptions
# =============================================================================


class SecurityException(FlyCsrfException):
    """Authentication and authorization errors."""


class ForbiddenException(SecurityException):
    """The request is not allowed to perform the operation."""


class VerificationFailure(ForbiddenException):
    """A submitted authenticity token does not match the session secret."""

    default_code = "CSRF_VERIFICATION_FAILED"

    def __init__(
        self,
        message: str = "CSRF token verification failed!",
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message, code, context)


class CsrfTokenMissingException(ForbiddenException):
    """The request carries no usable session secret."""

    default_code = "CSRF_TOKEN_MISSING"

    def __init__(
        self,
        message: str = "CSRF session secret is missing",
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message, code, context)


# =============================================================================
# Infrastructure Exceptions
# =============================================================================


class InfrastructureException(FlyCsrfException):
    """Failures of the primitives the library depends on."""


class TokenHashError(InfrastructureException):
    """The password-hashing primitive rejected its input or parameters."""

    default_code = "CSRF_HASH_FAILED"
