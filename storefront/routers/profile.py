# storefront/routers/profile.py
from fastapi import APIRouter, Depends
from sqlmodel import Session

from storefront.core.auth import require_user
from storefront.database import get_session
from storefront.repositories.profile_repo import ProfileRepository
from storefront.schemas.profile import ProfileRead, ProfileUpdate
from storefront.services.profile_service import ProfileService

router = APIRouter(prefix="/profile", tags=["Profile"])

repo = ProfileRepository()
service = ProfileService(repo)


@router.get("", response_model=ProfileRead)
def read_my_profile(
    session: Session = Depends(get_session),
    user_id: int = Depends(require_user),
):
    """
    Return the authenticated user's profile.

    - 404 if the user has not saved one yet.
    """
    return service.get_profile(session, user_id)


@router.put("", response_model=ProfileRead)
def update_my_profile(
    payload: ProfileUpdate,
    session: Session = Depends(get_session),
    user_id: int = Depends(require_user),
):
    """
    Create or replace the authenticated user's profile.

    Returns the stored profile.
    """
    return service.update_profile(session, user_id, payload)
