"""Unauthenticated signup endpoints: profile creation and the admin
notification email."""

import logging

from fastapi import APIRouter, Depends, Request

from forgenova_admin.deps import get_profiles, get_signup_notifier
from forgenova_admin.models.admin import ProfileCreate, SignupNotification
from forgenova_admin.profiles import ProfileStore
from forgenova_admin.routers.admin._helpers import ok
from forgenova_admin.security import rate_limit_notification
from forgenova_admin.services.notifications import SignupNotifier

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/create-profile")
@rate_limit_notification()
async def create_profile(
    request: Request,
    body: ProfileCreate,
    profiles: ProfileStore = Depends(get_profiles),
):
    """Idempotent: an existing profile is left untouched."""
    profile, created = await profiles.create_if_missing(
        body.user_id, body.model_dump(exclude={"user_id"})
    )
    if not created:
        return ok(message="Profile already exists", profile=profile)
    return ok(profile=profile)


@router.post("/admin-notification")
@rate_limit_notification()
async def admin_notification(
    request: Request,
    body: SignupNotification,
    notifier: SignupNotifier = Depends(get_signup_notifier),
):
    result = await notifier.notify(body.type, body.userData)
    return ok(**result)
