"""
Identity Domain Error Hierarchy

Every error keeps a stable ``code`` consumed by API clients. Messages are the
Spanish texts shown to end users.
"""

from datetime import datetime
from typing import Any

from auditoria.core.errors import (
    BusinessRuleError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)

# =====================================================================================
# VALUE OBJECT VALIDATION
# =====================================================================================


class EmptyFieldError(ValidationError):
    default_code = "EMPTY_FIELD"

    def __init__(self, field_name: str, **kwargs: Any) -> None:
        super().__init__(
            f"El campo {field_name} no puede estar vacío", field=field_name, **kwargs
        )


class InvalidEmailFormatError(ValidationError):
    default_code = "INVALID_EMAIL_FORMAT"

    def __init__(self, message: str = "Formato de email inválido", **kwargs: Any) -> None:
        super().__init__(message, field="email", **kwargs)


class InvalidCiFormatError(ValidationError):
    default_code = "INVALID_CI_FORMAT"

    def __init__(self, message: str = "Formato de CI inválido", **kwargs: Any) -> None:
        super().__init__(message, field="ci", **kwargs)


class InvalidPhoneFormatError(ValidationError):
    default_code = "INVALID_PHONE_FORMAT"

    def __init__(self, message: str = "Formato de teléfono inválido", **kwargs: Any) -> None:
        super().__init__(message, field="phone", **kwargs)


class InvalidPasswordError(ValidationError):
    default_code = "INVALID_PASSWORD"

    def __init__(self, message: str = "Contraseña inválida", **kwargs: Any) -> None:
        super().__init__(message, field="password", **kwargs)


class InvalidUsernameError(ValidationError):
    default_code = "INVALID_USERNAME"

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(message, field="username", **kwargs)


class InvalidPersonNameError(ValidationError):
    default_code = "INVALID_PERSON_NAME"


class InvalidAddressError(ValidationError):
    default_code = "INVALID_ADDRESS"

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(message, field="address", **kwargs)


class InvalidImageUrlError(ValidationError):
    default_code = "INVALID_IMAGE_URL"

    def __init__(self, message: str = "URL de imagen inválida", **kwargs: Any) -> None:
        super().__init__(message, field="image", **kwargs)


class InvalidPermissionError(ValidationError):
    default_code = "INVALID_PERMISSION"


# =====================================================================================
# USER STATE AND ROLES
# =====================================================================================


class InvalidUserDataError(BusinessRuleError):
    default_code = "INVALID_USER_DATA"


class InvalidUserStateError(BusinessRuleError):
    default_code = "INVALID_USER_STATE"


class MissingRolesError(BusinessRuleError):
    default_code = "MISSING_ROLES"

    def __init__(self, **kwargs: Any) -> None:
        super().__init__("El usuario debe tener al menos un rol", **kwargs)


class ExclusiveRoleViolationError(BusinessRuleError):
    default_code = "EXCLUSIVE_ROLE_VIOLATION"

    def __init__(self, role_name: str, **kwargs: Any) -> None:
        super().__init__(
            f"El rol de {role_name} es exclusivo y no puede combinarse con otros roles",
            **kwargs,
        )
        self.details["role"] = role_name


class RoleNotFoundError(NotFoundError):
    default_code = "ROLE_NOT_FOUND"

    def __init__(self, role: Any, **kwargs: Any) -> None:
        super().__init__("Rol", role, **kwargs)


class ImmutableUserTypeError(BusinessRuleError):
    default_code = "IMMUTABLE_USER_TYPE"

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(
            "El tipo de usuario es inmutable y no puede ser modificado", **kwargs
        )


class InvalidUserTypeError(BusinessRuleError):
    default_code = "INVALID_USER_TYPE"

    def __init__(
        self, message: str = "Tipo de usuario inválido para esta operación", **kwargs: Any
    ) -> None:
        super().__init__(message, **kwargs)


class UserInactiveError(ForbiddenError):
    default_code = "USER_INACTIVE"

    def __init__(self, **kwargs: Any) -> None:
        kwargs.setdefault("user_message", "El usuario está inactivo")
        super().__init__("El usuario está inactivo", **kwargs)


class UserLockedError(ForbiddenError):
    default_code = "USER_LOCKED"

    def __init__(self, lock_until: datetime, **kwargs: Any) -> None:
        message = f"Usuario bloqueado hasta {lock_until.isoformat()}"
        kwargs.setdefault("user_message", message)
        super().__init__(message, **kwargs)
        self.details["lock_until"] = lock_until.isoformat()


class UserNotFoundError(NotFoundError):
    default_code = "USER_NOT_FOUND"

    def __init__(self, identifier: Any, **kwargs: Any) -> None:
        super().__init__("Usuario", identifier, **kwargs)


# =====================================================================================
# UNIQUENESS
# =====================================================================================


class DuplicateEmailError(ConflictError):
    default_code = "DUPLICATE_EMAIL"

    def __init__(self, email: str | None = None, **kwargs: Any) -> None:
        subject = f"El email {email}" if email else "El email"
        super().__init__(f"{subject} ya está registrado", field="email", **kwargs)


class DuplicateUsernameError(ConflictError):
    default_code = "DUPLICATE_USERNAME"

    def __init__(self, username: str | None = None, **kwargs: Any) -> None:
        subject = f"El username {username}" if username else "El username"
        super().__init__(f"{subject} ya está registrado", field="username", **kwargs)


class DuplicateCiError(ConflictError):
    default_code = "DUPLICATE_CI"

    def __init__(self, ci: str | None = None, **kwargs: Any) -> None:
        subject = f"La cédula de identidad {ci}" if ci else "La cédula de identidad"
        super().__init__(f"{subject} ya está registrada", field="ci", **kwargs)


class DuplicateEmployeeCodeError(ConflictError):
    default_code = "DUPLICATE_EMPLOYEE_CODE"

    def __init__(self, employee_code: str, **kwargs: Any) -> None:
        super().__init__(
            f"El código de empleado {employee_code} ya está asignado",
            field="employee_code",
            **kwargs,
        )


# =====================================================================================
# SESSIONS, MENUS, PERMISSIONS
# =====================================================================================


class InvalidSessionDataError(ValidationError):
    default_code = "INVALID_SESSION_DATA"


class SessionNotFoundError(NotFoundError):
    default_code = "SESSION_NOT_FOUND"

    def __init__(self, identifier: Any, **kwargs: Any) -> None:
        super().__init__("Sesión", identifier, **kwargs)


class SessionOwnershipError(ForbiddenError):
    default_code = "SESSION_FORBIDDEN"

    def __init__(self, **kwargs: Any) -> None:
        kwargs.setdefault("user_message", "La sesión no pertenece al usuario")
        super().__init__("Session does not belong to user", **kwargs)


class RoleNotAssignedError(ForbiddenError):
    default_code = "ROLE_NOT_ASSIGNED"

    def __init__(self, role: str, **kwargs: Any) -> None:
        message = f"El rol {role} no está asignado al usuario"
        kwargs.setdefault("user_message", message)
        super().__init__(message, **kwargs)
        self.details["role"] = role


class MissingUserProfileError(NotFoundError):
    default_code = "MISSING_USER_PROFILE"

    def __init__(self, user_type: str, identifier: Any, **kwargs: Any) -> None:
        super().__init__(f"Perfil {user_type}", identifier, **kwargs)


# =====================================================================================
# AUTHENTICATION
# =====================================================================================


class InvalidCredentialsError(UnauthorizedError):
    default_code = "INVALID_CREDENTIALS"

    def __init__(self, remaining_attempts: int | None = None, **kwargs: Any) -> None:
        message = "Credenciales inválidas"
        if remaining_attempts is not None:
            message = f"{message}. Intentos restantes: {remaining_attempts}"
        kwargs.setdefault("user_message", message)
        super().__init__(message, **kwargs)
        if remaining_attempts is not None:
            self.details["remaining_attempts"] = remaining_attempts


class InvalidSessionError(UnauthorizedError):
    """The session behind a token is closed, expired or no longer usable."""

    default_code = "INVALID_SESSION"

    def __init__(self, message: str = "Sesión inválida o expirada", **kwargs: Any) -> None:
        kwargs.setdefault("user_message", message)
        super().__init__(message, **kwargs)


__all__ = [
    "DuplicateCiError",
    "DuplicateEmailError",
    "DuplicateEmployeeCodeError",
    "DuplicateUsernameError",
    "EmptyFieldError",
    "ExclusiveRoleViolationError",
    "ImmutableUserTypeError",
    "InvalidAddressError",
    "InvalidCredentialsError",
    "InvalidCiFormatError",
    "InvalidEmailFormatError",
    "InvalidImageUrlError",
    "InvalidPasswordError",
    "InvalidPermissionError",
    "InvalidPersonNameError",
    "InvalidPhoneFormatError",
    "InvalidSessionDataError",
    "InvalidSessionError",
    "InvalidUserDataError",
    "InvalidUserStateError",
    "InvalidUserTypeError",
    "InvalidUsernameError",
    "MissingRolesError",
    "MissingUserProfileError",
    "RoleNotAssignedError",
    "RoleNotFoundError",
    "SessionNotFoundError",
    "SessionOwnershipError",
    "UserInactiveError",
    "UserLockedError",
    "UserNotFoundError",
]
