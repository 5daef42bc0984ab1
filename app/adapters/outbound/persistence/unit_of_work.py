"""SQLAlchemy unit of work adapter."""

from typing import Callable, Optional

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.adapters.outbound.persistence.accessory_repository import SqlAlchemyAccessoryRepository
from app.adapters.outbound.persistence.garage_repository import SqlAlchemyGarageRepository
from app.adapters.outbound.persistence.hooks import CLOCK_INFO_KEY
from app.adapters.outbound.persistence.integrity import translate_integrity_error
from app.adapters.outbound.persistence.outbox_repository import SqlAlchemyOutboxRepository
from app.adapters.outbound.persistence.vehicle_repository import SqlAlchemyVehicleRepository
from app.application.ports.clock import Clock, utc_now
from app.application.ports.unit_of_work import UnitOfWork
from app.infrastructure.db import get_db_session
from app.infrastructure.logging.logger import logger


class SqlAlchemyUnitOfWork(UnitOfWork):
    """One database transaction shared by all repositories."""

    def __init__(
        self,
        session_factory: Optional[Callable[[], Session]] = None,
        clock: Clock = utc_now,
        read_only: bool = False,
    ) -> None:
        """
        Initialize unit of work.

        Args:
            session_factory: Session factory, defaults to the application database
            clock: Clock used for timestamps and business rules
            read_only: Never commit, and mark the transaction read only on PostgreSQL
        """
        self._session_factory = session_factory
        self._clock = clock
        self._read_only = read_only
        self._session: Optional[Session] = None

    async def __aenter__(self) -> "SqlAlchemyUnitOfWork":
        factory = self._session_factory or get_db_session
        self._session = factory()
        self._session.info[CLOCK_INFO_KEY] = self._clock

        if self._read_only and self._session.get_bind().dialect.name == "postgresql":
            self._session.execute(text("SET TRANSACTION READ ONLY"))

        self.garages = SqlAlchemyGarageRepository(self._session)
        self.vehicles = SqlAlchemyVehicleRepository(self._session)
        self.accessories = SqlAlchemyAccessoryRepository(self._session)
        self.outbox = SqlAlchemyOutboxRepository(self._session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        try:
            # No-op after a successful commit
            self._session.rollback()
        finally:
            self._session.close()
            self._session = None

    async def commit(self) -> None:
        """
        Commit the transaction.

        Raises:
            RuntimeError: If the unit of work is read only
            DuplicateEmailError: On garages.email violation detected at commit
            DuplicateVinError: On vehicles.vin violation detected at commit
        """
        if self._read_only:
            raise RuntimeError("Cannot commit a read-only unit of work")
        try:
            self._session.commit()
        except IntegrityError as e:
            self._session.rollback()
            translated = translate_integrity_error(e)
            if translated is not None:
                raise translated from e
            logger.error(f"Database integrity error while committing: {str(e)}")
            raise
        except SQLAlchemyError as e:
            self._session.rollback()
            logger.error(f"Database error while committing: {str(e)}")
            raise

    async def rollback(self) -> None:
        self._session.rollback()
