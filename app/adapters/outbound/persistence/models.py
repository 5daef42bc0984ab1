"""SQLAlchemy ORM models for garages, vehicles, accessories and the outbox."""

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import declarative_base, relationship

from app.domain.value_objects.accessory_type import AccessoryType
from app.domain.value_objects.day_of_week import DayOfWeek
from app.domain.value_objects.fuel_type import FuelType

Base = declarative_base()


class TimestampMixin:
    """created_at and updated_at columns, filled by the flush hooks."""

    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)


class GarageModel(TimestampMixin, Base):
    """SQLAlchemy model for garages table."""

    __tablename__ = "garages"
    __table_args__ = (UniqueConstraint("email", name="uq_garages_email"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False, index=True)
    address = Column(String(255), nullable=False)
    telephone = Column(String(20), nullable=False)
    email = Column(String(100), nullable=False, index=True)

    opening_hours = relationship(
        "GarageOpeningHoursModel",
        back_populates="garage",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    vehicles = relationship(
        "VehicleModel",
        back_populates="garage",
        order_by="VehicleModel.id",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class GarageOpeningHoursModel(Base):
    """SQLAlchemy model for garage_opening_hours table (one row per day)."""

    __tablename__ = "garage_opening_hours"

    garage_id = Column(
        Integer, ForeignKey("garages.id", ondelete="CASCADE"), primary_key=True
    )
    day_of_week = Column(
        Enum(DayOfWeek, native_enum=False, length=20), primary_key=True
    )
    hours = Column(String(500), nullable=False)

    garage = relationship("GarageModel", back_populates="opening_hours")


class VehicleModel(TimestampMixin, Base):
    """SQLAlchemy model for vehicles table."""

    __tablename__ = "vehicles"
    __table_args__ = (UniqueConstraint("vin", name="uq_vehicles_vin"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    brand = Column(String(50), nullable=False, index=True)
    model = Column(String(50), nullable=False, index=True)
    year_of_manufacture = Column(Integer, nullable=False)
    fuel_type = Column(Enum(FuelType, native_enum=False, length=20), nullable=False, index=True)
    vin = Column(String(17), nullable=True)
    color = Column(String(30), nullable=True)
    mileage = Column(Integer, nullable=True)
    garage_id = Column(
        Integer, ForeignKey("garages.id", ondelete="CASCADE"), nullable=False, index=True
    )

    garage = relationship("GarageModel", back_populates="vehicles")
    accessories = relationship(
        "AccessoryModel",
        back_populates="vehicle",
        order_by="AccessoryModel.id",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class AccessoryModel(TimestampMixin, Base):
    """SQLAlchemy model for accessories table."""

    __tablename__ = "accessories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    description = Column(String(500), nullable=False)
    price = Column(Numeric(12, 2, asdecimal=True), nullable=False)
    type = Column(Enum(AccessoryType, native_enum=False, length=20), nullable=False, index=True)
    vehicle_id = Column(
        Integer, ForeignKey("vehicles.id", ondelete="CASCADE"), nullable=False, index=True
    )

    vehicle = relationship("VehicleModel", back_populates="accessories")


class OutboxEventModel(Base):
    """SQLAlchemy model for outbox_events table."""

    __tablename__ = "outbox_events"

    id = Column(Integer, primary_key=True, autoincrement=True)
    event_id = Column(String(36), nullable=False, unique=True)
    event_type = Column(String(100), nullable=False)
    aggregate_id = Column(String(64), nullable=False)
    payload = Column(JSON, nullable=False)
    status = Column(String(20), nullable=False, index=True)
    attempts = Column(Integer, nullable=False, default=0)
    last_error = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
    published_at = Column(DateTime(timezone=True), nullable=True)
