"""Admin router package -- aggregates all admin sub-routers."""

from fastapi import APIRouter

router = APIRouter(prefix="/api", tags=["admin"])

# Session and verification
from .session import router as session_router

router.include_router(session_router)

# Configuration entities
from .settings import router as settings_router
from .feature_flags import router as feature_flags_router
from .roles import router as roles_router
from .email_settings import router as email_settings_router
from .api_keys import router as api_keys_router

router.include_router(settings_router)
router.include_router(feature_flags_router)
router.include_router(roles_router)
router.include_router(email_settings_router)
router.include_router(api_keys_router)

# Content and audit
from .logs import router as logs_router
from .workspaces import router as workspaces_router
from .templates import router as templates_router
from .backups import router as backups_router

router.include_router(logs_router)
router.include_router(workspaces_router)
router.include_router(templates_router)
router.include_router(backups_router)

# Users
from .users import router as users_router

router.include_router(users_router)

# Public signup flow
from .signup import router as signup_router

router.include_router(signup_router)
