"""Error hierarchy shared by every module of the Auditoria backend.

Every error carries a stable machine-readable ``code``, a human readable
message, an HTTP ``status_code`` hint and a severity used to pick the log
level. Errors log themselves on creation so that handlers never need to log
before re-raising.

Hierarchy:
- AuditoriaError: root of every error raised on purpose
- DomainError: business rule violations (400)
- ValidationError: malformed input (422)
- NotFoundError: missing aggregate (404)
- ConflictError: uniqueness violations (409)
- ForbiddenError: authorization failures (403)
- InfrastructureError: persistence/storage failures (500)
"""

import logging
import uuid
from enum import Enum
from typing import Any


class ErrorSeverity(Enum):
    """Error severity levels used to pick the log level."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class AuditoriaError(Exception):
    """
    Base exception for all Auditoria errors.

    Subclasses set ``default_code``, ``status_code`` and ``severity`` as class
    attributes; callers may override the code per instance with ``code=``.
    """

    default_code: str = "ERROR"
    status_code: int = 500
    severity: ErrorSeverity = ErrorSeverity.MEDIUM

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(message)
        self.message = message
        self.code = kwargs.get("code") or self.default_code
        self.details: dict[str, Any] = dict(kwargs.get("details") or {})
        self.error_id = str(uuid.uuid4())
        self.user_message = kwargs.get("user_message") or message
        if kwargs.get("cause") is not None:
            self.__cause__ = kwargs["cause"]

        self._log_error()

    def _log_error(self) -> None:
        """Log error with structured data."""
        logger = logging.getLogger(f"auditoria.errors.{self.__class__.__name__}")
        log_data = {
            "error_id": self.error_id,
            "code": self.code,
            "error_message": self.message,
            "severity": self.severity.value,
            "status_code": self.status_code,
            "details": self._sanitize_details(self.details),
            "error_class": self.__class__.__name__,
        }

        if self.severity == ErrorSeverity.CRITICAL:
            logger.critical("Critical error occurred", extra=log_data)
        elif self.severity == ErrorSeverity.HIGH:
            logger.error("High severity error", extra=log_data)
        elif self.severity == ErrorSeverity.MEDIUM:
            logger.warning("Medium severity error", extra=log_data)
        else:
            logger.info("Low severity error", extra=log_data)

    def _sanitize_details(self, details: dict) -> dict:
        """Remove sensitive values from error details."""
        sensitive_keys = {"password", "token", "secret", "credential"}
        sanitized = {}
        for key, value in details.items():
            if any(sensitive in key.lower() for sensitive in sensitive_keys):
                sanitized[key] = "***REDACTED***"
            elif isinstance(value, dict):
                sanitized[key] = self._sanitize_details(value)
            else:
                sanitized[key] = value
        return sanitized

    def to_dict(self, include_details: bool = True) -> dict[str, Any]:
        """Serialize error for API responses."""
        data: dict[str, Any] = {
            "error": self.code,
            "message": self.user_message,
        }
        if include_details and self.details:
            data["details"] = self._sanitize_details(self.details)
        return data

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


class DomainError(AuditoriaError):
    """Base class for domain errors."""

    default_code = "DOMAIN_ERROR"
    status_code = 400
    severity = ErrorSeverity.LOW


class ValidationError(DomainError):
    """Invalid input, optionally pointing at the offending field."""

    default_code = "VALIDATION_ERROR"
    status_code = 422

    def __init__(self, message: str, field: str | None = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        if field:
            self.details["field"] = field


class BusinessRuleError(DomainError):
    """Business rule violation."""

    default_code = "BUSINESS_RULE_VIOLATION"
    status_code = 400


class NotFoundError(DomainError):
    """Resource not found error."""

    default_code = "NOT_FOUND"
    status_code = 404

    def __init__(self, resource: str, identifier: Any, **kwargs: Any) -> None:
        kwargs.setdefault("user_message", f"{resource} no encontrado")
        super().__init__(f"{resource} not found: {identifier}", **kwargs)
        self.details.update({"resource": resource, "identifier": str(identifier)})


class ConflictError(DomainError):
    """Resource conflict error."""

    default_code = "CONFLICT"
    status_code = 409
    severity = ErrorSeverity.MEDIUM

    def __init__(self, message: str, field: str | None = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        if field:
            self.details["field"] = field


class ForbiddenError(DomainError):
    """Authorization failure."""

    default_code = "PERMISSION_DENIED"
    status_code = 403
    severity = ErrorSeverity.MEDIUM

    def __init__(self, message: str = "Access denied", **kwargs: Any) -> None:
        kwargs.setdefault("user_message", "No tiene permisos para realizar esta acción")
        super().__init__(message, **kwargs)


class UnauthorizedError(DomainError):
    """Missing or invalid principal."""

    default_code = "UNAUTHORIZED"
    status_code = 401
    severity = ErrorSeverity.MEDIUM


class InfrastructureError(AuditoriaError):
    """Base class for infrastructure errors."""

    default_code = "INFRASTRUCTURE_ERROR"
    status_code = 500
    severity = ErrorSeverity.HIGH


class ConfigurationError(InfrastructureError):
    """Configuration error."""

    default_code = "CONFIGURATION_ERROR"
    severity = ErrorSeverity.CRITICAL

    def __init__(self, message: str, config_key: str | None = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        if config_key:
            self.details["config_key"] = config_key


__all__ = [
    "AuditoriaError",
    "BusinessRuleError",
    "ConfigurationError",
    "ConflictError",
    "DomainError",
    "ErrorSeverity",
    "ForbiddenError",
    "InfrastructureError",
    "NotFoundError",
    "UnauthorizedError",
    "ValidationError",
]
