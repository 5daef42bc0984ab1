"""Mapping of database integrity violations to domain errors."""

from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.domain.exceptions import BusinessError, DuplicateEmailError, DuplicateVinError
from app.infrastructure.logging.logger import logger

# Constraint names (PostgreSQL messages) and column references (SQLite messages)
_UNIQUE_VIOLATIONS = (
    (("uq_garages_email", "garages.email"), DuplicateEmailError),
    (("uq_vehicles_vin", "vehicles.vin"), DuplicateVinError),
)


def translate_integrity_error(error: IntegrityError) -> Optional[BusinessError]:
    """
    Map a unique constraint violation to the matching domain error.

    Args:
        error: Error raised by flush or commit

    Returns:
        Domain error, or None when the violation is not a known unique constraint
    """
    message = str(error.orig)
    for markers, error_class in _UNIQUE_VIOLATIONS:
        if any(marker in message for marker in markers):
            return error_class()
    return None


def flush_or_raise(session: Session) -> None:
    """
    Flush pending changes, raising domain errors for known unique violations.

    Args:
        session: SQLAlchemy session

    Raises:
        DuplicateEmailError: On garages.email violation
        DuplicateVinError: On vehicles.vin violation
    """
    try:
        session.flush()
    except IntegrityError as e:
        translated = translate_integrity_error(e)
        if translated is not None:
            raise translated from e
        logger.error(f"Database integrity error during flush: {str(e)}")
        raise
