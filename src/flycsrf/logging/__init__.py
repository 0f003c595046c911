"""FlyCSRF Logging — logging port and structlog adapter."""

from flycsrf.logging.port import LoggingPort
from flycsrf.logging.structlog_adapter import REDACTED_KEYS, StructlogAdapter, redact_secrets

__all__ = ["REDACTED_KEYS", "LoggingPort", "StructlogAdapter", "redact_secrets"]
