"""Registration service for handling form submissions"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlmodel import Session, select

from regdesk.models.registration import Registration

logger = logging.getLogger(__name__)


class RegistrationService:
    """Service for managing registrations"""

    def __init__(self, db_session: Session):
        self.db = db_session

    def create_registration(self, name: str, phone: str) -> Registration:
        """
        Create a new registration.

        Args:
            name: Submitter's name
            phone: Submitter's phone number

        Returns:
            Registration: The created registration

        Raises:
            SQLAlchemyError: If the insert fails
        """
        registration = Registration(
            id=str(uuid.uuid4()),
            name=name,
            phone=phone,
            created_on=int(datetime.now(timezone.utc).timestamp()),
        )

        self.db.add(registration)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(registration)

        logger.info(f"Created registration {registration.id}")
        return registration

    def get_registration_by_id(self, registration_id: str) -> Optional[Registration]:
        """Get a registration by ID"""
        stmt = select(Registration).where(Registration.id == registration_id)
        return self.db.exec(stmt).first()
