# storefront/repositories/profile_repo.py
from sqlmodel import Session

from storefront.models.profile import Profile
from storefront.repositories.ports import ProfileStore


class ProfileRepository(ProfileStore):
    """
    Data access layer for Profile.

    Responsibilities:
      - Pure DB operations, no commits
      - No FastAPI, no HTTP, no business logic
    """

    def get(self, session: Session, user_id: int) -> Profile | None:
        """Return the user's profile, or None if it was never saved."""
        return session.get(Profile, user_id)

    def save(self, session: Session, profile: Profile) -> Profile:
        """Insert or update the row; flushed, not committed."""
        session.add(profile)
        session.flush()
        return profile
