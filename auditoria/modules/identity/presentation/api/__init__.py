"""Identity REST routers."""

from fastapi import APIRouter

from auditoria.modules.identity.presentation.api.auth import router as auth_router
from auditoria.modules.identity.presentation.api.authorization import (
    router as authorization_router,
)
from auditoria.modules.identity.presentation.api.profiles import (
    external_router as external_profiles_router,
)
from auditoria.modules.identity.presentation.api.profiles import (
    internal_router as internal_users_router,
)
from auditoria.modules.identity.presentation.api.sessions import router as sessions_router
from auditoria.modules.identity.presentation.api.users import router as users_router

router = APIRouter()
router.include_router(auth_router)
router.include_router(users_router)
router.include_router(internal_users_router)
router.include_router(external_profiles_router)
router.include_router(sessions_router)
router.include_router(authorization_router)

__all__ = ["router"]
