"""Shared fixtures: in-memory SQLite database, fixed clock and request builders."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.adapters.outbound.persistence.models import Base
from app.adapters.outbound.persistence.unit_of_work import SqlAlchemyUnitOfWork
from app.application.dtos.accessory import AccessoryRequest
from app.application.dtos.garage import GarageRequest
from app.application.dtos.vehicle import VehicleRequest
from app.domain.value_objects.accessory_type import AccessoryType
from app.domain.value_objects.day_of_week import DayOfWeek
from app.domain.value_objects.fuel_type import FuelType
from app.infrastructure.db import create_db_engine

FIXED_NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixed_now():
    """Instant returned by the test clock."""
    return FIXED_NOW


@pytest.fixture
def clock():
    """Clock frozen at 2024-06-01 12:00 UTC."""
    return lambda: FIXED_NOW


@pytest.fixture
def sqlite_engine():
    """Create SQLite in-memory engine shared across threads for testing."""
    engine = create_db_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(sqlite_engine):
    """Session factory bound to the in-memory database."""
    return sessionmaker(autocommit=False, autoflush=False, bind=sqlite_engine)


@pytest.fixture
def uow_factory(session_factory, clock):
    """Unit of work factory over the in-memory database with the fixed clock."""

    def factory(read_only: bool = False):
        return SqlAlchemyUnitOfWork(session_factory, clock=clock, read_only=read_only)

    return factory


@pytest.fixture
def garage_request():
    """Build a valid GarageRequest, overriding any field."""

    def build(**overrides):
        data = {
            "name": "Garage Renault Paris",
            "address": "12 rue de Rivoli, 75001 Paris",
            "telephone": "0140000000",
            "email": "paris@garage.fr",
            "opening_hours": {DayOfWeek.MONDAY: "08:00-12:00,14:00-18:00"},
        }
        data.update(overrides)
        return GarageRequest(**data)

    return build


@pytest.fixture
def vehicle_request():
    """Build a valid VehicleRequest, overriding any field."""

    def build(**overrides):
        data = {
            "brand": "Renault",
            "model": "Clio",
            "year_of_manufacture": 2022,
            "fuel_type": FuelType.ESSENCE,
        }
        data.update(overrides)
        return VehicleRequest(**data)

    return build


@pytest.fixture
def accessory_request():
    """Build a valid AccessoryRequest, overriding any field."""

    def build(**overrides):
        data = {
            "name": "Alarme",
            "description": "Alarme antivol connectée",
            "price": Decimal("199.90"),
            "type": AccessoryType.SECURITE,
        }
        data.update(overrides)
        return AccessoryRequest(**data)

    return build
