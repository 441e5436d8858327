# storefront/services/profile_service.py
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session

from storefront.core.errors import ConflictError, NotFoundError, PersistenceError
from storefront.models.profile import Profile
from storefront.repositories.ports import ProfileStore
from storefront.schemas.profile import ProfileUpdate

logger = logging.getLogger(__name__)


class ProfileService:
    """
    Business logic for the caller's own profile.

    Responsibilities:
      - scope every read and write to the authenticated user
      - first save creates the row, later saves replace it
      - map store failures to the error taxonomy
    """

    def __init__(self, repo: ProfileStore):
        self.repo = repo

    def get_profile(self, session: Session, user_id: int) -> Profile:
        """
        Raises:
            NotFoundError: if the user never saved a profile.
        """
        profile = self.repo.get(session, user_id)
        if profile is None:
            raise NotFoundError("Profile not found")
        return profile

    def update_profile(
        self,
        session: Session,
        user_id: int,
        payload: ProfileUpdate,
    ) -> Profile:
        profile = self.repo.get(session, user_id)
        if profile is None:
            profile = Profile(user_id=user_id)

        for field, value in payload.model_dump().items():
            setattr(profile, field, value)

        try:
            self.repo.save(session, profile)
            session.commit()
        except IntegrityError as exc:
            # Two first saves raced on the primary key.
            session.rollback()
            raise ConflictError("Profile was modified concurrently, please retry") from exc
        except SQLAlchemyError as exc:
            session.rollback()
            logger.exception("Profile save failed for user %s", user_id)
            raise PersistenceError() from exc

        session.refresh(profile)
        logger.info("Profile saved for user %s", user_id)
        return profile
